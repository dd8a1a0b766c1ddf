from lintcheck.models.diagnostic import Diagnostic, Severity
from lintcheck.models.location import Location
from lintcheck.services.renderer import render_diagnostics, render_locations, render_source


def _diagnostic(location: Location, message: str = "Be careful.") -> Diagnostic:
    return Diagnostic(
        rule_identifier="sample_rule",
        rule_name="Sample Rule",
        severity=Severity.WARNING,
        message=message,
        location=location,
    )


def test_render_diagnostics__several_lines__annotates_below_each_line() -> None:
    diagnostics = [
        _diagnostic(Location(line=1, character=1)),
        _diagnostic(Location(line=2, character=3)),
    ]

    rendered = render_diagnostics(diagnostics, "a = 1\nb = 2\n")

    assert rendered == "\n".join(
        [
            "```",
            "a = 1",
            "^ warning: Sample Rule Violation: Be careful. (sample_rule)",
            "b = 2",
            "  ^ warning: Sample Rule Violation: Be careful. (sample_rule)",
            "```",
        ]
    )


def test_render_diagnostics__input_order__does_not_change_output() -> None:
    diagnostics = [
        _diagnostic(Location(line=1, character=2), "first"),
        _diagnostic(Location(line=3, character=1), "third"),
        _diagnostic(Location(line=2, character=1), "second"),
    ]
    text = "x\ny\nz\n"

    assert render_diagnostics(diagnostics, text) == render_diagnostics(
        list(reversed(diagnostics)), text
    )


def test_render_diagnostics__unresolved_location__listed_after_block() -> None:
    diagnostics = [_diagnostic(Location(file="a.py")), _diagnostic(Location(line=1, character=1))]

    rendered = render_diagnostics(diagnostics, "x = 1\n")

    block, _, trailer = rendered.partition("```\nDiagnostics without a position:\n")
    assert block.count("^ warning") == 1
    assert trailer == "  a.py: warning: Sample Rule Violation: Be careful. (sample_rule)"


def test_render_locations__multiple_locations__reinserts_markers() -> None:
    locations = [Location(line=1, character=2), Location(line=2, character=1)]

    assert render_locations(locations, "ab\ncd\n") == "```\na↓b\n↓cd\n```"


def test_render_locations__same_line__inserts_from_last_to_first() -> None:
    locations = [Location(line=1, character=1), Location(line=1, character=3)]

    assert render_locations(locations, "abcd") == "```\n↓ab↓cd\n```"


def test_render_locations__unresolved_location__is_skipped() -> None:
    assert render_locations([Location()], "x\n") == "```\nx\n```"


def test_render_source__fences_text() -> None:
    assert render_source("x\ny\n") == "```\nx\ny\n```"
