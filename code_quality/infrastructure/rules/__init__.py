"""Rule thresholds and pattern tables."""

from code_quality.infrastructure.rules.rule_catalog import DEFAULT_RULES, RuleSet, get_rule_set

__all__ = ["DEFAULT_RULES", "RuleSet", "get_rule_set"]
