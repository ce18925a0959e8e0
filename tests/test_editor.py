from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from ed_engine import Editor
from ed_engine.buffer import Buffer


def make_editor(*lines: str, current: int = 0) -> Editor:
    editor = Editor()
    editor.state.buffer = Buffer.from_lines(lines)
    editor.buffer.current = current
    return editor


def feed_all(editor: Editor, *lines: str) -> List[str]:
    output: List[str] = []
    for line in lines:
        output.extend(editor.feed(f"{line}\n"))
    return output


def test_delete_middle_line() -> None:
    editor = make_editor("a", "b", "c")

    assert editor.feed("2d\n") == []

    assert editor.buffer.snapshot() == ("a", "c")
    assert editor.buffer.current == 1
    assert editor.buffer.changed is True


def test_append_after_first_line() -> None:
    editor = make_editor("x", "y")

    assert editor.feed("1a\n") == []
    assert editor.mode == "insert"
    editor.feed("z\n")
    editor.feed(".\n")

    assert editor.mode == "command"
    assert editor.buffer.snapshot() == ("x", "z", "y")
    assert editor.buffer.current == 1


def test_search_without_match_changes_nothing() -> None:
    editor = make_editor("a", "b", current=1)

    assert editor.feed("/foo/\n") == ["?"]

    assert editor.buffer.snapshot() == ("a", "b")
    assert editor.buffer.current == 1
    assert editor.buffer.changed is False


def test_bare_address_moves_and_prints() -> None:
    editor = make_editor("a", "b", "c")

    assert editor.feed("2\n") == ["b"]
    assert editor.buffer.current == 1
    assert editor.feed("\n") == ["b"]
    assert editor.feed("+\n") == ["c"]
    assert editor.feed("=\n") == ["3"]


def test_print_flags() -> None:
    editor = make_editor("a", "b", "c")

    assert editor.feed(",p\n") == ["a", "b", "c"]
    assert editor.feed("2,3n\n") == ["2\tb", "3\tc"]
    assert editor.feed("1pn\n") == ["1\ta"]
    assert editor.buffer.current == 0


def test_span_without_command_needs_flags() -> None:
    editor = make_editor("a", "b")
    editor.state.verbose = True

    assert editor.feed("1,2\n") == ["?", "expected single line"]


@pytest.mark.parametrize("line", ["4\n", "0\n", "-\n", "1,4p\n"])
def test_out_of_range_addresses(line: str) -> None:
    editor = make_editor("a", "b", "c")

    assert editor.feed(line) == ["?"]
    assert editor.buffer.current == 0


def test_append_on_last_line_goes_after_it() -> None:
    editor = make_editor("x", "y")

    feed_all(editor, "$a", "z", ".")

    assert editor.buffer.snapshot() == ("x", "y", "z")


def test_append_into_empty_buffer() -> None:
    editor = Editor()

    output = feed_all(editor, "a", "one", "two", ".", ",n")

    assert output == ["1\tone", "2\ttwo"]
    assert editor.buffer.current == 1
    assert editor.buffer.changed is True


def test_insert_before_line() -> None:
    editor = make_editor("x", "y")

    feed_all(editor, "1i", "w", ".")

    assert editor.buffer.snapshot() == ("w", "x", "y")
    assert editor.buffer.current == 0


def test_insert_mode_keeps_command_like_lines() -> None:
    editor = make_editor()

    feed_all(editor, "a", "1d", "q", " .", ".")

    assert editor.buffer.snapshot() == ("1d", "q", " .")
    assert editor.quit_requested is False


def test_change_replaces_range() -> None:
    editor = make_editor("a", "b", "c", "d")
    editor.buffer.marks.set("k", 1)
    editor.buffer.marks.set("z", 3)

    feed_all(editor, "2,3c", "X", ".")

    assert editor.buffer.snapshot() == ("a", "X", "d")
    assert editor.buffer.current == 1
    assert editor.buffer.marks.get("k") is None
    assert editor.buffer.marks.get("z") == 2


def test_change_prints_inserted_block() -> None:
    editor = make_editor("a", "b", "c")

    output = feed_all(editor, "2cn", "B1", "B2", ".")

    assert output == ["2\tB1", "3\tB2"]


def test_change_with_empty_block_deletes() -> None:
    editor = make_editor("a", "b", "c", current=2)

    feed_all(editor, "3c", ".")

    assert editor.buffer.snapshot() == ("a", "b")
    assert editor.buffer.current == 1


def test_invalid_change_never_deletes() -> None:
    editor = make_editor("a", "b")

    assert editor.feed("1,5c\n") == ["?"]

    assert editor.mode == "command"
    assert editor.buffer.snapshot() == ("a", "b")
    assert editor.buffer.changed is False


@pytest.mark.parametrize("command", ["1,2a\n", "1,2i\n", "1,2ka\n", "1,2r\n"])
def test_single_line_commands_reject_spans(command: str) -> None:
    editor = make_editor("a", "b", "c")
    editor.state.verbose = True

    assert editor.feed(command) == ["?", "expected single line"]

    assert editor.mode == "command"
    assert editor.buffer.snapshot() == ("a", "b", "c")
    assert editor.buffer.changed is False
    assert editor.buffer.marks.get("a") is None


def test_delete_last_line_moves_to_new_last() -> None:
    editor = make_editor("a", "b", "c")

    editor.feed("$d\n")

    assert editor.buffer.current == 1


def test_delete_block_moves_to_line_after_gap() -> None:
    editor = make_editor("a", "b", "c", "d")

    assert editor.feed("1,2dp\n") == ["c", "d"]

    assert editor.buffer.snapshot() == ("c", "d")
    assert editor.buffer.current == 0


def test_delete_flags_echo_addressed_range_after_delete() -> None:
    editor = make_editor("a", "b", "c", "d", "e")

    assert editor.feed("2,3dn\n") == ["2\td", "3\te"]

    assert editor.buffer.snapshot() == ("a", "d", "e")
    assert editor.buffer.current == 1


def test_delete_flags_skip_lines_past_the_end() -> None:
    editor = make_editor("a", "b", "c")

    assert editor.feed("2,$dp\n") == []
    assert editor.buffer.current == 0


def test_delete_everything() -> None:
    editor = make_editor("a", "b")

    assert editor.feed(",dp\n") == []

    assert len(editor.buffer) == 0
    assert editor.buffer.current == 0
    assert editor.feed("p\n") == ["?"]


def test_marks_follow_their_lines() -> None:
    editor = make_editor("a", "b", "c")

    feed_all(editor, "2ka")
    assert editor.feed("'a\n") == ["b"]
    feed_all(editor, "1d")
    assert editor.feed("'ap\n") == ["b"]
    feed_all(editor, "'ad")
    assert editor.feed("'a\n") == ["?"]


def test_mark_ranges() -> None:
    editor = make_editor("a", "b", "c", "d")

    output = feed_all(editor, "2kx", "3ky", "'x,'yp")

    assert output == ["b", "c"]


def test_search_addresses_move_current_line() -> None:
    editor = make_editor("foo", "bar", "foo")

    assert editor.feed("/foo/\n") == ["foo"]
    assert editor.buffer.current == 2
    assert editor.feed("//\n") == ["foo"]
    assert editor.buffer.current == 0
    assert editor.feed("?bar?\n") == ["bar"]
    assert editor.buffer.current == 1
    assert editor.feed("/ba/d\n") == []
    assert editor.buffer.snapshot() == ("foo", "foo")


def test_help_toggles_error_text() -> None:
    editor = make_editor("a")

    assert editor.feed("x\n") == ["?"]
    assert editor.feed("H\n") == []
    assert editor.feed("x\n") == ["?", "invalid command"]
    assert editor.feed("'b\n") == ["?", "invalid mark"]
    editor.feed("H\n")
    assert editor.feed("x\n") == ["?"]


def test_prompt_toggle_only_applies_in_command_mode() -> None:
    editor = make_editor("a")

    assert editor.prompt == ""
    editor.feed("P\n")
    assert editor.prompt == "* "
    editor.feed("a\n")
    assert editor.prompt == ""
    editor.feed(".\n")
    assert editor.prompt == "* "


def test_quit_refuses_once_when_modified() -> None:
    editor = make_editor("a", "b")
    editor.state.verbose = True
    editor.feed("1d\n")

    assert editor.feed("q\n") == ["?", "warning: file modified"]
    assert editor.quit_requested is False
    assert editor.feed("q\n") == []
    assert editor.quit_requested is True


def test_quit_event_reaches_bus_subscribers() -> None:
    editor = make_editor("a")
    events: List[object] = []
    editor.context.bus.subscribe("command.quit", events.append)

    editor.feed("q\n")

    assert events == [{"status": 0}]


def test_run_stops_after_quit() -> None:
    editor = make_editor("a", "b")

    output = editor.run(["1", "q", "2"])

    assert output == ["a"]
    assert editor.buffer.current == 0


def test_edit_loads_file(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("one\ntwo\n", encoding="utf-8")
    editor = make_editor("stale")
    editor.buffer.marks.set("a", 0)
    editor.feed("/stale/\n")

    assert editor.feed(f"e {path}\n") == ["8"]

    assert editor.buffer.snapshot() == ("one", "two")
    assert editor.buffer.changed is False
    assert editor.buffer.marks.get("a") is None
    assert editor.state.filename == str(path)
    assert editor.state.search.pattern is None


def test_edit_keeps_toggles(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("x\n", encoding="utf-8")
    editor = make_editor()
    feed_all(editor, "H", "P")

    editor.feed(f"e {path}\n")

    assert editor.state.verbose is True
    assert editor.state.prompt is True


def test_edit_uses_default_filename(tmp_path: Path) -> None:
    path = tmp_path / "default.txt"
    path.write_text("héllo\n", encoding="utf-8")
    editor = make_editor()

    assert editor.feed(f"f {path}\n") == []
    assert editor.feed("e\n") == ["7"]

    assert editor.buffer.snapshot() == ("héllo",)


def test_edit_refuses_once_when_modified(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("new\n", encoding="utf-8")
    editor = make_editor("old")
    editor.feed("1d\n")

    assert editor.feed(f"e {path}\n") == ["?"]
    assert editor.buffer.changed is False
    assert editor.feed(f"e {path}\n") == ["4"]
    assert editor.buffer.snapshot() == ("new",)


def test_edit_failures_leave_state(tmp_path: Path) -> None:
    editor = make_editor("keep")

    assert editor.feed("e\n") == ["?"]
    assert editor.feed(f"e {tmp_path / 'missing.txt'}\n") == ["?"]

    assert editor.buffer.snapshot() == ("keep",)


def test_read_inserts_after_line(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("one\ntwo\n", encoding="utf-8")
    editor = make_editor("a", "b")

    assert editor.feed(f"1r {path}\n") == ["8"]

    assert editor.buffer.snapshot() == ("a", "one", "two", "b")
    assert editor.buffer.current == 2
    assert editor.buffer.changed is True
    assert editor.state.filename == str(path)


def test_read_into_empty_buffer(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("one\n", encoding="utf-8")
    editor = make_editor()

    editor.feed(f"r {path}\n")

    assert editor.buffer.snapshot() == ("one",)


def test_write_clears_changed(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    editor = make_editor()
    events: List[object] = []
    editor.context.bus.subscribe("command.write", events.append)
    feed_all(editor, "a", "alpha", "beta", ".")

    assert editor.feed(f"w {path}\n") == []

    assert path.read_text(encoding="utf-8") == "alpha\nbeta\n"
    assert editor.buffer.changed is False
    assert editor.state.filename == str(path)
    assert events == [{"path": str(path), "bytes": 11}]
    assert editor.feed("q\n") == []
    assert editor.quit_requested is True


def test_write_to_bad_path(tmp_path: Path) -> None:
    editor = make_editor("a")
    editor.feed("1d\n")

    assert editor.feed(f"w {tmp_path / 'no' / 'such' / 'dir.txt'}\n") == ["?"]
    assert editor.feed("w\n") == ["?"]
    assert editor.buffer.changed is True


def test_write_then_edit_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "round.txt"
    lines = ("first", "", "  indented", "last")
    editor = make_editor(*lines)
    editor.feed("2ka\n")

    editor.feed(f"w {path}\n")
    editor.feed(f"e {path}\n")

    assert editor.buffer.snapshot() == lines
    assert editor.buffer.changed is False
    assert editor.buffer.marks.get("a") is None


def test_exec_reports_bang(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[str] = []

    def fake_run(command: str) -> int:
        calls.append(command)
        return 1

    monkeypatch.setattr("ed_engine.actions.commands.run_shell", fake_run)
    editor = make_editor("a")

    assert editor.feed("!make test\n") == ["!"]

    assert calls == ["make test"]
    assert editor.buffer.changed is False


def test_open_initial_file(tmp_path: Path) -> None:
    path = tmp_path / "start.txt"
    path.write_text("a\nbb\n", encoding="utf-8")
    editor = Editor()

    assert editor.open(str(path)) == ["5"]
    assert editor.buffer.snapshot() == ("a", "bb")
    assert editor.state.filename == str(path)
    assert editor.open(str(tmp_path / "missing")) == ["?"]
    assert editor.buffer.snapshot() == ("a", "bb")


def test_edit_print_flag_does_not_echo_new_buffer(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("new1\nnew2\n", encoding="utf-8")
    editor = make_editor("old1", "old2", current=1)
    editor.state.filename = str(path)

    assert editor.feed("ep\n") == ["10"]
    assert editor.buffer.snapshot() == ("new1", "new2")
    assert editor.buffer.current == 0
