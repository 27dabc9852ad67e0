class LinestyleError(Exception):
    """Base class for all linestyle errors"""


class ConfigurationError(LinestyleError):
    """Rule options or configuration file could not be validated"""


class LocationError(LinestyleError, ValueError):
    """A line/column or offset does not exist in the source text"""


class RuleDefinitionError(LinestyleError):
    """A rule declares or uses its messages inconsistently"""


class RuleExecutionError(LinestyleError):
    """A rule failed while scanning a source text"""

    def __init__(self, rule_id: str, cause: Exception):
        self.rule_id = rule_id
        super().__init__(f"Rule '{rule_id}' failed: {cause}")
