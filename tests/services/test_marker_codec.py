from lintcheck.models.annotated_text import AnnotatedText
from lintcheck.services.marker_codec import VIOLATION_MARKER, strip_markers


def test_strip_markers__adjacent_markers__share_an_offset() -> None:
    annotated = strip_markers("a↓↓b")

    assert annotated == AnnotatedText(text="ab", marker_offsets=(1, 1))


def test_strip_markers__markers_everywhere__offsets_refer_to_clean_text() -> None:
    annotated = strip_markers("↓a↓b↓")

    assert annotated.text == "ab"
    assert annotated.marker_offsets == (0, 1, 2)


def test_strip_markers__without_markers__returns_text_unchanged() -> None:
    text = "class Foo {\n  weak var delegate: SomeProtocol?\n}\n"

    annotated = strip_markers(text)

    assert annotated.text == text
    assert annotated.marker_offsets == ()


def test_strip_markers__multiline_example__offsets_skip_removed_markers() -> None:
    annotated = strip_markers("ok = ↓a == None and ↓b != None\n")

    assert annotated.text == "ok = a == None and b != None\n"
    assert annotated.marker_offsets == (5, 19)
    assert VIOLATION_MARKER not in annotated.text


def test_strip_markers__custom_marker__is_honoured() -> None:
    assert strip_markers("a$b", marker="$") == AnnotatedText(text="ab", marker_offsets=(1,))
