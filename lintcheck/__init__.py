"""Conformance verification for pluggable style-analysis rules."""

__version__ = "0.1.0"
