"""Rules: persisted glob patterns and the engine that lists and cleans them."""

from clir.rules.pattern import ExpandedPattern, MatchedPath, PathKind, PatternRule
from clir.rules.ruleset import (
    RuleSet,
    RulesError,
    RulesParseError,
    RulesWriteError,
    require_rules,
)

__all__ = [
    "ExpandedPattern",
    "MatchedPath",
    "PathKind",
    "PatternRule",
    "RuleSet",
    "RulesError",
    "RulesParseError",
    "RulesWriteError",
    "require_rules",
]
