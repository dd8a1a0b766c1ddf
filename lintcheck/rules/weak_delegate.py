import re
from typing import ClassVar, Final

from lintcheck.dialects import SWIFT, Dialect
from lintcheck.models.correction import TextEdit
from lintcheck.models.diagnostic import Diagnostic
from lintcheck.models.location import Location
from lintcheck.models.parser.source_file import SourceFile
from lintcheck.models.rule_description import CorrectionExample, RuleDescription
from lintcheck.rules.base import CorrectableRule
from lintcheck.utils.lexing import mask_literals

VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\bvar\s+(?P<name>\w+)")
WORD_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_]\w*")
TYPE_KEYWORDS: Final[frozenset[str]] = frozenset({"class", "struct", "extension", "enum", "actor"})
BODY_KEYWORDS: Final[frozenset[str]] = frozenset(
    {"func", "init", "deinit", "var", "let", "get", "set", "willSet", "didSet", "subscript", "protocol"}
)
OWNERSHIP_PATTERN: Final[re.Pattern[str]] = re.compile(r"\b(?:weak|unowned)\b")


def _instance_scope_offsets(code: str) -> list[tuple[int, int]]:
    """Return the (start, end) offsets of the bodies of type declarations."""
    scopes: list[tuple[int, int]] = []
    stack: list[tuple[int, bool]] = []
    statement_start = 0
    for index, char in enumerate(code):
        if char == "{":
            header_lines = [
                line for line in code[statement_start:index].splitlines() if line.strip()
            ]
            words = set(WORD_PATTERN.findall(header_lines[-1] if header_lines else ""))
            is_type_body = bool(words & TYPE_KEYWORDS) and not words & BODY_KEYWORDS
            stack.append((index + 1, is_type_body))
            statement_start = index + 1
        elif char == "}":
            if stack:
                start, is_type_body = stack.pop()
                if is_type_body:
                    scopes.append((start, index))
            statement_start = index + 1
        elif char == ";":
            statement_start = index + 1
    return scopes


class WeakDelegateRule(CorrectableRule):
    description: ClassVar[RuleDescription] = RuleDescription(
        identifier="weak_delegate",
        name="Weak Delegate",
        description="Delegates should be weak to avoid reference cycles.",
        non_triggering_examples=(
            "class Foo {\n  weak var delegate: SomeProtocol?\n}\n",
            "class Foo {\n  weak var someDelegate: SomeDelegateProtocol?\n}\n",
            "class Foo {\n  weak var delegateScroll: ScrollDelegate?\n}\n",
            # Only names ending in "delegate" are considered delegates
            "class Foo {\n  var scrollHandler: ScrollDelegate?\n}\n",
            # Local variables are not stored properties
            "func foo() {\n  var delegate: SomeDelegate\n}\n",
            "class Foo {\n  var delegateNotified: Bool?\n}\n",
        ),
        triggering_examples=(
            "class Foo {\n  ↓var delegate: SomeProtocol?\n}\n",
            "class Foo {\n  ↓var scrollDelegate: ScrollDelegate?\n}\n",
        ),
        corrections=(
            CorrectionExample(
                before="class Foo {\n  ↓var delegate: SomeProtocol?\n}\n",
                after="class Foo {\n  weak var delegate: SomeProtocol?\n}\n",
            ),
            CorrectionExample(
                before="struct Foo {\n  private ↓var scrollDelegate: ScrollDelegate?\n}\n",
                after="struct Foo {\n  private weak var scrollDelegate: ScrollDelegate?\n}\n",
            ),
        ),
    )
    dialect: ClassVar[Dialect] = SWIFT

    def _violating_offsets(self, file: SourceFile) -> list[int]:
        code = mask_literals(file.contents, self.dialect)
        scopes = _instance_scope_offsets(code)
        offsets: list[int] = []
        for match in VAR_PATTERN.finditer(code):
            if not match.group("name").lower().endswith("delegate"):
                continue
            offset = match.start()
            innermost = max(
                (scope for scope in scopes if scope[0] <= offset < scope[1]),
                key=lambda scope: scope[0],
                default=None,
            )
            if innermost is None or self._is_nested(offset, innermost, code):
                continue
            line_start = code.rfind("\n", 0, offset) + 1
            if OWNERSHIP_PATTERN.search(code, line_start, offset):
                continue
            offsets.append(offset)
        return offsets

    @staticmethod
    def _is_nested(offset: int, scope: tuple[int, int], code: str) -> bool:
        """Whether ``offset`` sits inside a non-type block within ``scope``."""
        depth = 0
        for char in code[scope[0] : offset]:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
        return depth > 0

    def validate_file(self, file: SourceFile) -> list[Diagnostic]:
        return [
            self.make_diagnostic(Location.from_character_offset(file, offset))
            for offset in self._violating_offsets(file)
        ]

    def edits(self, file: SourceFile) -> list[TextEdit]:
        return [
            TextEdit(offset=offset, length=0, replacement="weak ")
            for offset in self._violating_offsets(file)
        ]
