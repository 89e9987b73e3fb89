import pytest
from cuesheet.errors import CueSyntaxError
from cuesheet.tokenizer import Line, split_arguments, tokenize


def test_keyword_and_arguments():
    lines = list(tokenize('  file "My Album.wav"   wave  \n'))
    assert lines == [
        Line(
            line_number=1,
            keyword="FILE",
            argument_text='"My Album.wav"   wave',
            arguments=("My Album.wav", "wave"),
        )
    ]


def test_blank_lines_skipped_line_numbers_kept():
    lines = list(tokenize('\n\nTITLE "x"\r\n   \r\nPERFORMER y\n'))
    assert [(x.line_number, x.keyword) for x in lines] == [
        (3, "TITLE"),
        (5, "PERFORMER"),
    ]


def test_byte_order_mark_ignored():
    lines = list(tokenize("\ufeffTITLE x"))
    assert lines[0].keyword == "TITLE"


def test_tabs_separate_keyword():
    lines = list(tokenize("INDEX\t01\t00:00:00"))
    assert lines[0].keyword == "INDEX"
    assert lines[0].arguments == ("01", "00:00:00")


def test_quoted_argument_keeps_whitespace():
    assert split_arguments('"xyz xyz 12 10:10:30" " abc "', 1) == (
        "xyz xyz 12 10:10:30",
        " abc ",
    )


def test_empty_quoted_argument():
    assert split_arguments('"" WAVE', 1) == ("", "WAVE")


def test_rem_is_free_text():
    lines = list(tokenize('REM COMMENT "it\'s "quoted" text'))
    assert lines[0].keyword == "REM"
    assert lines[0].arguments == ("COMMENT", '"it\'s "quoted" text')


def test_tokenize_is_lazy():
    lines = tokenize('TITLE "ok"\nTITLE "broken\n')
    assert next(lines).keyword == "TITLE"
    with pytest.raises(CueSyntaxError) as exc_info:
        next(lines)
    assert exc_info.value.line_number == 2


@pytest.mark.parametrize(
    "text",
    [
        'TITLE "unterminated',
        'TITLE "a"b"',
        'TITLE "a""b"',
        'TITLE bare"quote',
        '"FILE" a.wav WAVE',
    ],
)
def test_syntax_errors(text):
    with pytest.raises(CueSyntaxError) as exc_info:
        list(tokenize("\n" + text))
    assert exc_info.value.line_number == 2
    assert exc_info.value.kind == "SyntaxError"


@pytest.mark.parametrize("separator", ["\x85", "\u2028", "\x0b", "\x0c", "\x1c"])
def test_only_cr_and_lf_end_lines(separator):
    lines = list(tokenize(f'TITLE "Live{separator}Set"\r\nPERFORMER x\rTITLE y\n'))
    assert [(x.line_number, x.arguments) for x in lines] == [
        (1, (f"Live{separator}Set",)),
        (2, ("x",)),
        (3, ("y",)),
    ]
