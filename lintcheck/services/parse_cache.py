import logging

from tree_sitter import Language, Parser, Tree

from lintcheck.dialects import Dialect
from lintcheck.errors import ParseError
from lintcheck.models.line_index import LineIndex

logger = logging.getLogger(__name__)


class ParseCache:
    """Parsed artifacts shared by every file that reads through this cache.

    Trees are keyed by dialect and contents, line indexes by contents. The
    owner clears the cache before each independent check so that artifacts
    from one example never leak into the next one.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}
        self._trees: dict[tuple[str, str], Tree] = {}
        self._line_indexes: dict[str, LineIndex] = {}
        self.hits: int = 0
        self.misses: int = 0

    def _parser_for(self, dialect: Dialect) -> Parser:
        parser = self._parsers.get(dialect.name)
        if parser is None:
            if not dialect.has_grammar:
                raise ParseError(f"Dialect '{dialect.name}' has no grammar to parse with")
            parser = Parser(Language(dialect.language_loader()))
            self._parsers[dialect.name] = parser
        return parser

    def tree(self, dialect: Dialect, contents: str) -> Tree:
        key = (dialect.name, contents)
        cached = self._trees.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        try:
            tree = self._parser_for(dialect).parse(contents.encode("utf-8"))
        except ValueError as e:
            raise ParseError(f"Failed to parse {dialect.name} source: {e}") from e
        self._trees[key] = tree
        return tree

    def line_index(self, contents: str) -> LineIndex:
        cached = self._line_indexes.get(contents)
        if cached is not None:
            return cached
        index = LineIndex(contents)
        self._line_indexes[contents] = index
        return index

    def clear(self) -> None:
        logger.debug(
            "Clearing parse cache (%d trees, %d line indexes)",
            len(self._trees),
            len(self._line_indexes),
        )
        self._trees.clear()
        self._line_indexes.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._trees)
