from tagedit.tags.formatter import Align, format_text

WORDS = "one two three four five six seven eight nine ten eleven twelve"


def test_empty_text_returns_padded_label():
    assert format_text("", "title", Align.RIGHT, 10, 80) == "    title"
    assert format_text("  \n ", "title", Align.LEFT, 10, 80) == "title    "


def test_wraps_within_width():
    out = format_text(WORDS, "comment", Align.RIGHT, 10, 40)
    lines = out.split("\n")

    assert len(lines) > 1
    assert all(len(line) <= 40 for line in lines)
    assert lines[0][:9] == "  comment"
    assert lines[0][9] == " "
    assert all(line.startswith(" " * 10) for line in lines[1:])
    assert " ".join(" ".join(l.split()) for l in lines).replace("comment ", "", 1) == WORDS


def test_greedy_packing():
    # room is 30 columns; a line must stay strictly shorter than that
    out = format_text(WORDS, "comment:", Align.RIGHT, 10, 40)
    assert out.split("\n") == [
        " comment: one two three four five six",
        "          seven eight nine ten eleven",
        "          twelve",
    ]


def test_left_aligned_label():
    out = format_text("short value", "genre:", Align.LEFT, 10, 80)
    assert out == "genre:    short value"


def test_internal_line_breaks_are_dropped():
    assert format_text("a\n\nb\tc", "x:", Align.RIGHT, 4, 60) == " x: a b c"


def test_no_trailing_newline():
    assert not format_text(WORDS, "comment", Align.RIGHT, 10, 40).endswith("\n")


def test_overlong_word_gets_its_own_line():
    out = format_text("tiny " + "x" * 50 + " end", "c:", Align.RIGHT, 4, 30)
    assert out.split("\n") == [
        " c: tiny",
        "    " + "x" * 50,
        "    end",
    ]
