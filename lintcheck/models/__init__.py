from .annotated_text import AnnotatedText
from .correction import Correction, TextEdit
from .diagnostic import Diagnostic, Severity
from .location import Location
from .rule_description import CorrectionExample, RuleDescription

__all__ = [
    "AnnotatedText",
    "Correction",
    "CorrectionExample",
    "Diagnostic",
    "Location",
    "RuleDescription",
    "Severity",
    "TextEdit",
]
