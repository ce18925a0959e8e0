"""Turn parsed address specs into concrete 0-based line ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ed_engine.buffer import Buffer
from ed_engine.errors import (
    InvalidAddress,
    InvalidMark,
    InvalidRegex,
    NoMatch,
    NoPreviousSearch,
)
from ed_engine.grammar.models import (
    Absolute,
    Address,
    AddressRange,
    AddressSpec,
    Mark,
    Relative,
    SearchBackward,
    SearchForward,
)
from ed_engine.runtime.telemetry import span

from .search import (
    SearchState,
    backward_order,
    compile_pattern,
    first_match,
    forward_order,
)


@dataclass(frozen=True, slots=True)
class ResolvedRange:
    """Inclusive ``start..end`` line indices.

    ``end`` may still lie past the buffer; commands that touch lines check it.
    """

    start: int
    end: int

    @property
    def is_single(self) -> bool:
        return self.start == self.end


def resolve_address(address: Address, buffer: Buffer) -> int:
    if isinstance(address, Absolute):
        index = address.index if address.index >= 0 else len(buffer) + address.index
    elif isinstance(address, Relative):
        index = buffer.current + address.delta
    elif isinstance(address, Mark):
        marked = buffer.marks.get(address.letter)
        if marked is None:
            raise InvalidMark()
        index = marked
    else:  # pragma: no cover - closed set of address types
        raise TypeError(f"Unknown address {address!r}")
    if index < 0:
        raise InvalidAddress()
    return index


def search(
    pattern: Optional[str], buffer: Buffer, state: SearchState, *, forward: bool
) -> int:
    """Scan circularly for ``pattern`` and return the matching line index.

    A new pattern restarts the scan from the current line; an omitted one
    continues from the previous match.
    """

    if pattern is not None:
        try:
            state.pattern = compile_pattern(pattern)
        except re.error as exc:
            raise InvalidRegex() from exc
        state.position = buffer.current
    if state.pattern is None or state.position is None:
        raise NoPreviousSearch()

    lines = buffer.snapshot()
    scan = forward_order if forward else backward_order
    found = first_match(state.pattern, lines, scan(state.position, len(lines)))
    if found is None:
        raise NoMatch()
    state.position = found
    return found


def resolve_range(
    spec: Optional[AddressSpec], buffer: Buffer, state: SearchState
) -> ResolvedRange:
    """Resolve ``spec`` against the buffer; ``None`` means the current line."""

    with span("address::resolve", metadata={"spec": spec}) as handle:
        if spec is None:
            resolved = ResolvedRange(buffer.current, buffer.current)
        elif isinstance(spec, AddressRange):
            start = resolve_address(spec.start, buffer)
            end = resolve_address(spec.end, buffer)
            if start > end:
                raise InvalidAddress()
            resolved = ResolvedRange(start, end)
        elif isinstance(spec, (SearchForward, SearchBackward)):
            index = search(
                spec.pattern,
                buffer,
                state,
                forward=isinstance(spec, SearchForward),
            )
            resolved = ResolvedRange(index, index)
        else:  # pragma: no cover - closed set of spec types
            raise TypeError(f"Unknown address spec {spec!r}")
        handle.add_metadata("resolved", (resolved.start, resolved.end))
        return resolved


__all__ = ["ResolvedRange", "resolve_address", "resolve_range", "search"]
