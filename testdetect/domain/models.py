"""
Domain models for the testdetect system.

These models describe what the detection engine knows about a project:
the normalized test patterns read from a framework config file, the
directory that owns a file, and the result of comparing the Jest and
Vitest patterns that apply to the same directory.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Framework(str, Enum):
    """Test frameworks the engine can assign a file to."""

    JEST = "jest"
    VITEST = "vitest"
    CYPRESS = "cypress"
    PLAYWRIGHT = "playwright"

    def __str__(self) -> str:
        return self.value


class ConflictReason(str, Enum):
    """Why the Jest and Vitest patterns of a directory are ambiguous."""

    BOTH_DEFAULT = "both_default"
    BOTH_SAME_EXPLICIT = "both_same_explicit"
    EXPLICIT_MATCHES_DEFAULT = "explicit_matches_default"


class TestPatterns(BaseModel):
    """
    Normalized result of parsing one config file for one framework.

    An empty ``patterns`` list means the config declared no explicit test
    patterns and the caller should fall back to framework defaults.
    ``is_regex`` applies to the whole record: a config never mixes glob and
    regex semantics in one value.
    """

    model_config = ConfigDict(frozen=True)
    __test__ = False  # not a pytest test class

    patterns: list[str] = Field(
        default_factory=list, description="testMatch / testRegex / include entries"
    )
    is_regex: bool = Field(
        default=False, description="Interpret patterns as regular expressions"
    )
    root_dir: str | None = Field(
        default=None, description="Anchor directory, relative to the config file"
    )
    roots: list[str] | None = Field(
        default=None, description="Allow-list of directories (Jest roots)"
    )
    ignore_patterns: list[str] | None = Field(
        default=None, description="Regex exclusions (Jest testPathIgnorePatterns)"
    )
    exclude_patterns: list[str] | None = Field(
        default=None, description="Glob exclusions (Vitest exclude)"
    )
    dir: str | None = Field(
        default=None, description="Sub-root restricting discovery (Vitest test.dir)"
    )

    @model_validator(mode="after")
    def validate_regex_flag(self) -> "TestPatterns":
        """A record without patterns has nothing to interpret as regex."""
        if self.is_regex and not self.patterns:
            raise ValueError("is_regex requires at least one pattern")
        return self

    @property
    def has_explicit_patterns(self) -> bool:
        return bool(self.patterns)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary, dropping unset optionals."""
        return self.model_dump(exclude_none=True)


class FrameworkDirectoryResult(BaseModel):
    """The nearest ancestor directory (inclusive) owning a usable config."""

    model_config = ConfigDict(frozen=True)

    directory: str
    framework: Framework


class PatternConflictInfo(BaseModel):
    """Outcome of comparing Jest and Vitest effective patterns."""

    has_conflict: bool
    reason: ConflictReason | None = None
    jest_patterns: list[str] = Field(default_factory=list)
    vitest_patterns: list[str] = Field(default_factory=list)
    jest_is_default: bool = False
    vitest_is_default: bool = False
