"""Static rule tables for sensitive file classification."""

from azsnaffler.rules.ruleset import (
    RuleSet,
    RuleSetError,
    RuleSetParseError,
    load_ruleset,
)

__all__ = [
    "RuleSet",
    "RuleSetError",
    "RuleSetParseError",
    "load_ruleset",
]
