# tests/test_sink.py
from __future__ import annotations

from retroterm.sink import BufferSink


def test_write_line_appends_newline_terminated_text() -> None:
    sink = BufferSink()
    sink.write_line("hello")
    sink.write_line("")
    sink.write_line("world")

    assert sink.text == "hello\n\nworld\n"
    assert sink.lines() == ["hello", "", "world"]
    assert sink.current_length() == len("hello\n\nworld\n")


def test_clear_empties_transcript() -> None:
    sink = BufferSink()
    sink.write_line("x")
    sink.clear()

    assert sink.text == ""
    assert sink.current_length() == 0


def test_truncate_to_recorded_anchor_redraws_region() -> None:
    """
    Record a length, write a region, truncate back, write again:
    only the second region remains after the anchor.
    """
    sink = BufferSink()
    sink.write_line("title")
    anchor = sink.current_length()

    sink.write_line("first draw")
    sink.truncate_to(anchor)
    sink.write_line("second draw")

    assert sink.lines() == ["title", "second draw"]


def test_truncate_to_clamps_out_of_range_lengths() -> None:
    sink = BufferSink()
    sink.write_line("abc")

    sink.truncate_to(1000)
    assert sink.text == "abc\n"

    sink.truncate_to(-5)
    assert sink.text == ""


def test_on_change_fires_after_every_mutation() -> None:
    calls = {"n": 0}

    def bump() -> None:
        calls["n"] += 1

    sink = BufferSink(on_change=bump)
    sink.write_line("a")
    sink.truncate_to(0)
    sink.clear()

    assert calls["n"] == 3
