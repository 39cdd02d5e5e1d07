"""Import classification rules."""

from .engine import Rule, RuleEngine, build_rule_engine

__all__ = ["Rule", "RuleEngine", "build_rule_engine"]
