from typing import ClassVar, Final

from tree_sitter import Node as TSNode

from lintcheck.dialects import PYTHON, Dialect
from lintcheck.models.correction import TextEdit
from lintcheck.models.diagnostic import Diagnostic
from lintcheck.models.location import Location
from lintcheck.models.parser.source_file import SourceFile
from lintcheck.models.rule_description import CorrectionExample, RuleDescription
from lintcheck.rules.base import CorrectableRule
from lintcheck.utils.treesitter_helpers import iter_nodes

IDENTITY_OPERATORS: Final[dict[str, bytes]] = {"==": b"is", "!=": b"is not"}


def _offending_operators(comparison: TSNode) -> list[TSNode]:
    """Return the equality operators of a comparison that have None as an operand."""
    children = comparison.children
    operators: list[TSNode] = []
    for index, child in enumerate(children):
        if child.type not in IDENTITY_OPERATORS:
            continue
        neighbours = children[max(index - 1, 0) : index + 2]
        if any(neighbour.type == "none" for neighbour in neighbours):
            operators.append(child)
    return operators


class NoneComparisonRule(CorrectableRule):
    description: ClassVar[RuleDescription] = RuleDescription(
        identifier="none_comparison",
        name="None Comparison",
        description="Compare against None with `is` / `is not` instead of `==` / `!=`.",
        non_triggering_examples=(
            "if x is None:\n    pass\n",
            "if x is not None:\n    pass\n",
            "y = x == 0\n",
            "z = 'None' == name\n",
            "result = [item for item in items if item is not None]\n",
            "# if x == None:\n",
        ),
        triggering_examples=(
            "if ↓x == None:\n    pass\n",
            "while ↓value != None:\n    value = next_value()\n",
            "result = [↓item == None for item in items]\n",
            "ok = ↓a == None and ↓b != None\n",
            "assert result == None\n",
        ),
        corrections=(
            CorrectionExample(before="if ↓x == None:\n    pass\n", after="if x is None:\n    pass\n"),
            CorrectionExample(
                before="while ↓value != None:\n    value = next_value()\n",
                after="while value is not None:\n    value = next_value()\n",
            ),
            CorrectionExample(
                before="ok = ↓a == None and ↓b != None\n",
                after="ok = a is None and b is not None\n",
            ),
            CorrectionExample(before="flag = None == x\n", after="flag = None is x\n"),
        ),
    )
    dialect: ClassVar[Dialect] = PYTHON

    def _violating_comparisons(self, file: SourceFile) -> list[tuple[TSNode, list[TSNode]]]:
        violations: list[tuple[TSNode, list[TSNode]]] = []
        for comparison in iter_nodes(file.tree.root_node, "comparison_operator"):
            operators = _offending_operators(comparison)
            if operators:
                violations.append((comparison, operators))
        return violations

    def validate_file(self, file: SourceFile) -> list[Diagnostic]:
        return [
            self.make_diagnostic(Location.from_byte_offset(file, comparison.start_byte))
            for comparison, _operators in self._violating_comparisons(file)
        ]

    def edits(self, file: SourceFile) -> list[TextEdit]:
        source = file.contents.encode("utf-8")
        index = file.line_index
        edits: list[TextEdit] = []
        for comparison, operators in self._violating_comparisons(file):
            start = index.character_offset(comparison.start_byte)
            end = index.character_offset(comparison.end_byte)
            if start is None or end is None:
                continue
            rewritten = source[comparison.start_byte : comparison.end_byte]
            for operator in reversed(operators):
                relative_start = operator.start_byte - comparison.start_byte
                relative_end = operator.end_byte - comparison.start_byte
                rewritten = (
                    rewritten[:relative_start]
                    + IDENTITY_OPERATORS[operator.type]
                    + rewritten[relative_end:]
                )
            edits.append(
                TextEdit(offset=start, length=end - start, replacement=rewritten.decode("utf-8"))
            )
        return edits
