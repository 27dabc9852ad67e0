from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from linestyle.models import Severity


class LintIssue(BaseModel):
    """External, serializable form of a diagnostic"""

    severity: Severity
    file_path: str
    line_number: int
    column: int
    end_line_number: int
    end_column: int
    rule_id: str
    message: str
    fix_range: Optional[tuple[int, int]] = None
    fix_text: Optional[str] = None
    auto_fixable: bool = False


class ConfigFile(BaseModel):
    """Shape of the [tool.linestyle] table"""

    model_config = ConfigDict(extra="forbid")

    rules: dict[str, dict] = Field(default_factory=dict)
    max_passes: int = Field(default=10, ge=1, alias="maxPasses")
