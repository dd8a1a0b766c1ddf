import pytest

from lintcheck.errors import RuleConfigurationError
from lintcheck.models.correction import TextEdit
from lintcheck.models.diagnostic import Severity
from lintcheck.models.location import Location
from lintcheck.models.parser.source_file import SourceFile
from lintcheck.rules.none_comparison import NoneComparisonRule
from lintcheck.settings import VerifierSettings
from lintcheck.verification.conformance_verifier import verify_rule


def test_none_comparison__declared_examples__conform(settings: VerifierSettings) -> None:
    verify_rule(NoneComparisonRule, settings=settings).raise_for_failures()


def test_none_comparison__validate_file__locates_comparison_start() -> None:
    file = SourceFile(contents="values = [v for v in items if v != None]\n")

    diagnostics = NoneComparisonRule().validate_file(file)

    assert [diagnostic.location for diagnostic in diagnostics] == [Location(line=1, character=31)]
    assert diagnostics[0].severity == Severity.WARNING
    assert diagnostics[0].message == NoneComparisonRule.description.description


def test_none_comparison__non_ascii_prefix__reports_character_column() -> None:
    file = SourceFile(contents="label = 'ünïcode'; flag = value == None\n")

    diagnostics = NoneComparisonRule().validate_file(file)

    assert [diagnostic.location for diagnostic in diagnostics] == [Location(line=1, character=27)]


def test_none_comparison__edits__rewrite_every_operator_of_a_chain() -> None:
    file = SourceFile(contents="ok = None == x != None\n")

    edits = NoneComparisonRule().edits(file)

    assert edits == [TextEdit(offset=5, length=17, replacement="None is x is not None")]


def test_none_comparison__severity_configuration__is_applied() -> None:
    rule = NoneComparisonRule.from_configuration({"severity": "error"})

    assert rule.severity == Severity.ERROR
    assert NoneComparisonRule.from_configuration("warning").severity == Severity.WARNING


@pytest.mark.parametrize("configuration", [{"severity": "fatal"}, {"unknown": 1}, [1, 2]])
def test_none_comparison__invalid_configuration__raises(configuration: object) -> None:
    with pytest.raises(RuleConfigurationError):
        NoneComparisonRule.from_configuration(configuration)
