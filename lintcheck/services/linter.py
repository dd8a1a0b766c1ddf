import logging

from pydantic import BaseModel, ConfigDict

from lintcheck.configuration import Configuration
from lintcheck.models.correction import Correction
from lintcheck.models.diagnostic import Diagnostic
from lintcheck.models.parser.source_file import SourceFile
from lintcheck.rules.base import CorrectableRule

logger = logging.getLogger(__name__)


class Linter(BaseModel):
    """Run the rules of a configuration against a single file."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    file: SourceFile
    configuration: Configuration

    def diagnostics(self) -> list[Diagnostic]:
        """Diagnostics of every applicable rule, minus those disabled inline."""
        diagnostics: list[Diagnostic] = []
        for rule in self.configuration.rules_for(self.file.dialect):
            for diagnostic in rule.validate_file(self.file):
                if self.file.is_rule_enabled(rule.identifier(), diagnostic.location):
                    diagnostics.append(diagnostic)
        logger.debug("Found %d diagnostics in %s", len(diagnostics), self.file.identifier)
        return diagnostics

    def correct(self) -> list[Correction]:
        corrections: list[Correction] = []
        for rule in self.configuration.rules_for(self.file.dialect):
            if isinstance(rule, CorrectableRule):
                corrections.extend(rule.correct(self.file))
        logger.debug("Applied %d corrections to %s", len(corrections), self.file.identifier)
        return corrections
