"""
linestyle - line-based style checking with located diagnostics and auto-fixes
"""

from .autofix import FixEngine
from .engine import LinterEngine, fix, lint
from .errors import (
    ConfigurationError,
    LinestyleError,
    LocationError,
    RuleDefinitionError,
    RuleExecutionError,
)
from .models import Diagnostic, Fix, FixReport, FixResult, Location, Severity, Span
from .registry import ConfiguredRule, RuleRegistry, registry
from .source import SourceModel

__version__ = "0.1.0"

__all__ = [
    "LinterEngine",
    "FixEngine",
    "SourceModel",
    "RuleRegistry",
    "ConfiguredRule",
    "registry",
    "lint",
    "fix",
    "Diagnostic",
    "Fix",
    "FixReport",
    "FixResult",
    "Location",
    "Severity",
    "Span",
    "LinestyleError",
    "ConfigurationError",
    "LocationError",
    "RuleDefinitionError",
    "RuleExecutionError",
]
