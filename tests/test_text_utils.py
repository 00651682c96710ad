import pytest

from daily_report.utils.text_utils import reflow


@pytest.mark.parametrize("row_count", [1, 3, 10, 25])
def test_reflow_returns_exact_row_count(row_count):
    text = " ".join(["word"] * 200)
    assert len(reflow(text, row_count)) == row_count


def test_reflow_respects_line_length():
    text = "The quick brown fox jumps over the lazy dog " * 20
    for line in reflow(text, 10, max_line_length=30):
        assert len(line) <= 30


def test_long_word_kept_whole_on_its_own_line():
    long_word = "x" * 70
    lines = reflow(f"short {long_word} tail", 5, max_line_length=55)
    assert lines[:3] == ["short", long_word, "tail"]


def test_explicit_newlines_start_new_lines():
    lines = reflow("first\r\nsecond\nthird", 4)
    assert lines == ["first", "second", "third", ""]


def test_overflow_is_truncated():
    text = "\n".join(f"line {i}" for i in range(20))
    lines = reflow(text, 10)
    assert lines[-1] == "line 9"


def test_three_short_sentences_pad_to_ten_lines():
    lines = reflow("Site cleared. Rebar delivered. Crane inspected.", 10)
    assert len(lines) == 10
    assert lines[0] == "Site cleared. Rebar delivered. Crane inspected."
    assert lines[1:] == [""] * 9


def test_empty_input():
    assert reflow("", 3) == ["", "", ""]
    assert reflow(None, 2) == ["", ""]
    assert reflow("anything", 0) == []
