"""Telemetry services built directly on telelog.

The editor talks to telelog through four helpers only:

``configure(...)`` -- adopt an explicit ``tl.Config`` or rebuild one from the environment
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block, logging the failure when it raises

Console output is opt-in (``ED_ENGINE_LOG_CONSOLE=1``): the editor owns stdout
and log lines must never interleave with printed buffer lines.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "ED_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "ed_engine")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def build_config(*, level: Optional[str] = None) -> Any:
    """Build a ``tl.Config`` from ``ED_ENGINE_*`` environment variables."""

    config = tl.Config()
    config.with_min_level((level or _env("LOG_LEVEL") or "INFO").upper())

    console = _env_flag("LOG_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if _env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))

    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, level: Optional[str] = None) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt.
    level:
        Minimum level used when ``config`` is omitted and the configuration is
        rebuilt from the environment. ``config`` and ``level`` are mutually
        exclusive.
    """

    global _ACTIVE_CONFIG
    if config is not None and level is not None:
        raise ValueError("Provide either `config` or `level`, not both.")

    _ACTIVE_CONFIG = config if config is not None else build_config(level=level)
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for an editor component."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    name = level.lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Handle yielded by ``span``; lets the block attach metadata."""

    logger: Any
    span_name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        _emit(
            self.logger,
            "warning",
            "span::fail",
            {"span": self.span_name, "reason": reason, **self.metadata},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``metadata`` is attached as logger context for the duration of the block.
    When ``component`` is given the block is also tracked as that component.
    An exception escaping the block is logged through ``SpanHandle.fail`` and
    re-raised unchanged.
    """

    log = get_logger(logger_name)
    payload = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in payload.items():
        log.add_context(key, value)

    handle = SpanHandle(logger=log, span_name=name, metadata=dict(payload))
    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in payload:
                log.remove_context(key)


configure()

__all__ = [
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
