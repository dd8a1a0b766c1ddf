from lintcheck.dialects import PYTHON, SWIFT
from lintcheck.utils.lexing import mask_literals


def test_mask_literals__swift_comments_and_strings__keep_offsets_and_line_breaks() -> None:
    source = 'a /* b\nc */ d // e\n"f\\"g" h'

    masked = mask_literals(source, SWIFT)

    assert len(masked) == len(source)
    assert masked == "a     \n     d     \n       h"


def test_mask_literals__comments_kept__only_strings_are_blanked() -> None:
    source = 'x = "# not a comment"  # real comment\n'

    masked = mask_literals(source, PYTHON, comments=False)

    assert masked == "x = " + " " * 17 + "  # real comment\n"


def test_mask_literals__python_triple_quoted_string__keeps_line_count() -> None:
    source = "s = '''one\ntwo'''\ny = 1\n"

    masked = mask_literals(source, PYTHON)

    assert masked == "s = " + " " * 6 + "\n" + " " * 6 + "\ny = 1\n"


def test_mask_literals__unterminated_string__stops_at_line_end() -> None:
    masked = mask_literals("a = 'oops\nb = 2\n", PYTHON)

    assert masked == "a = " + " " * 5 + "\nb = 2\n"
