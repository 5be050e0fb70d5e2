"""Immutable rule set and its TOML override loader.

The rule set is built once at startup from the bundled defaults, with
optional per-table replacements read from a TOML file::

    [rules]
    interesting_extensions = [".kdbx", ".pem"]
    excluded_directory_names = ["IPC$", "PRINT$", "NETLOGON"]

Tables not mentioned in the file keep their default contents.
"""

import logging
import tomllib
from functools import cached_property
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from azsnaffler.core.paths import get_rules_path
from azsnaffler.rules import defaults

logger = logging.getLogger(__name__)

RuleTable = tuple[str, ...]


class RuleSet(BaseModel):
    """The seven static rule tables consulted by the classifier.

    Instances are frozen. Upper-cased views of every table are computed
    lazily once and reused for all comparisons.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    excluded_directory_names: Annotated[
        RuleTable, Field(description="Directory names never descended into")
    ] = defaults.EXCLUDED_DIRECTORY_NAMES
    interesting_directory_names: Annotated[
        RuleTable, Field(description="Directory names reported on sight")
    ] = defaults.INTERESTING_DIRECTORY_NAMES
    excluded_extensions: Annotated[
        RuleTable, Field(description="File suffixes ignored outright")
    ] = defaults.EXCLUDED_EXTENSIONS
    excluded_path_suffixes: Annotated[
        RuleTable, Field(description="Known-benign full-path suffixes")
    ] = defaults.EXCLUDED_PATH_SUFFIXES
    interesting_filename_substrings: Annotated[
        RuleTable, Field(description="Tokens flagged when contained in a file name")
    ] = defaults.INTERESTING_FILENAME_SUBSTRINGS
    interesting_extensions: Annotated[
        RuleTable, Field(description="File suffixes flagged by default")
    ] = defaults.INTERESTING_EXTENSIONS
    interesting_path_suffixes: Annotated[
        RuleTable, Field(description="Known-sensitive full-path suffixes")
    ] = defaults.INTERESTING_PATH_SUFFIXES

    @field_validator("*", mode="after")
    @classmethod
    def drop_blank_tokens(cls, v: RuleTable) -> RuleTable:
        """Strip whitespace and drop empty tokens, keeping order."""
        return tuple(token.strip() for token in v if token.strip())

    @cached_property
    def upper(self) -> "UpperRuleSet":
        """Upper-cased copy of every table for case-insensitive matching."""
        return UpperRuleSet(
            excluded_directory_names=frozenset(t.upper() for t in self.excluded_directory_names),
            interesting_directory_names=frozenset(
                t.upper() for t in self.interesting_directory_names
            ),
            excluded_extensions=tuple(t.upper() for t in self.excluded_extensions),
            excluded_path_suffixes=tuple(t.upper() for t in self.excluded_path_suffixes),
            interesting_filename_substrings=tuple(
                t.upper() for t in self.interesting_filename_substrings
            ),
            interesting_extensions=tuple(t.upper() for t in self.interesting_extensions),
            interesting_path_suffixes=tuple(t.upper() for t in self.interesting_path_suffixes),
        )

    def tables(self) -> dict[str, RuleTable]:
        """Return every table keyed by field name, in declaration order."""
        return {name: getattr(self, name) for name in type(self).model_fields}


class UpperRuleSet(BaseModel):
    """Precomputed upper-case lookup view of a RuleSet."""

    model_config = ConfigDict(frozen=True)

    excluded_directory_names: frozenset[str]
    interesting_directory_names: frozenset[str]
    excluded_extensions: RuleTable
    excluded_path_suffixes: RuleTable
    interesting_filename_substrings: RuleTable
    interesting_extensions: RuleTable
    interesting_path_suffixes: RuleTable


class RuleSetError(Exception):
    """Base exception for rule set loading errors."""


class RuleSetParseError(RuleSetError):
    """Raised when a rule override file is not valid TOML."""


def load_ruleset(path: Path | None = None) -> RuleSet:
    """Build the rule set from defaults plus an optional override file.

    Args:
        path: Override file. If None, uses ~/.config/azsnaffler/rules.toml.
            A missing file is not an error.

    Returns:
        Validated, frozen RuleSet.

    Raises:
        RuleSetParseError: If the file is not valid TOML.
        RuleSetError: If the file cannot be read or violates the schema.
    """
    rules_path = path or get_rules_path()

    try:
        with open(rules_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No rule overrides at %s, using defaults", rules_path)
        return RuleSet()
    except tomllib.TOMLDecodeError as e:
        raise RuleSetParseError(f"Invalid TOML syntax in {rules_path}: {e}") from e
    except OSError as e:
        raise RuleSetError(f"Failed to read rule overrides: {e}") from e

    overrides = data.get("rules", {})
    if not isinstance(overrides, dict):
        raise RuleSetError(f"'rules' in {rules_path} must be a table")

    try:
        ruleset = RuleSet.model_validate(overrides)
    except ValidationError as e:
        raise RuleSetError(f"Invalid rule overrides in {rules_path}: {e}") from e

    logger.debug("Loaded rule overrides for %s from %s", sorted(overrides), rules_path)
    return ruleset

