"""
Duplicate Rule Analyzer.

Finds rules in a rule set whose expressions are logically equivalent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from .compare import ExpressionComparator
from .errors import ExpressionCompareError
from .models import ComparisonConfig, Rule, RuleSet

logger = logging.getLogger(__name__)


@dataclass
class InvalidRule:
    """A rule that could not be compared."""
    rule_id: str
    condition: str
    error: str
    error_type: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "rule_id": self.rule_id,
            "condition": self.condition,
            "error": self.error,
            "error_type": self.error_type,
        }


@dataclass
class DuplicateAnalysisResult:
    """Result of duplicate detection over a rule set."""
    total_rules: int = 0
    duplicate_groups: List[List[str]] = field(default_factory=list)
    invalid_rules: List[InvalidRule] = field(default_factory=list)
    comparisons: int = 0

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_groups)

    @property
    def duplicate_pairs(self) -> List[Tuple[str, str]]:
        """Every pair of rule ids that are duplicates of each other."""
        pairs = []
        for group in self.duplicate_groups:
            for i, first in enumerate(group):
                for second in group[i + 1:]:
                    pairs.append((first, second))
        return pairs

    def summary(self) -> str:
        """Generate a summary of the analysis."""
        lines = [
            f"Rules analyzed: {self.total_rules}",
            f"  Comparisons: {self.comparisons}",
            f"  Duplicate groups: {len(self.duplicate_groups)}",
            f"  Invalid rules: {len(self.invalid_rules)}",
        ]
        for group in self.duplicate_groups:
            lines.append(f"  - duplicates: {', '.join(group)}")
        for invalid in self.invalid_rules:
            lines.append(f"  - invalid: {invalid.rule_id}: {invalid.error}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_rules": self.total_rules,
            "comparisons": self.comparisons,
            "duplicate_groups": self.duplicate_groups,
            "duplicate_pairs": [list(p) for p in self.duplicate_pairs],
            "invalid_rules": [r.to_dict() for r in self.invalid_rules],
        }


@dataclass
class _Group:
    representative: Rule
    variables: FrozenSet[str]
    members: List[str]


class DuplicateRuleFinder:
    """
    Groups rules with equivalent conditions.

    Each rule is compared against one representative per existing group.
    Equivalence is transitive, so a rule matching a representative matches
    every member of its group. Rules are only compared when they reference
    the same variables; other pairs cannot be duplicates.
    """

    def __init__(self, config: Optional[ComparisonConfig] = None):
        self.comparator = ExpressionComparator(config)

    def analyze(self, rules: List[Union[Rule, Dict[str, Any]]]) -> DuplicateAnalysisResult:
        """
        Find duplicate rules.

        Args:
            rules: Rules as models or dicts with `id` and `when`.

        Returns:
            DuplicateAnalysisResult with groups of equivalent rule ids.
        """
        parsed = [r if isinstance(r, Rule) else Rule.model_validate(r) for r in rules]
        result = DuplicateAnalysisResult(total_rules=len(parsed))
        groups: List[_Group] = []

        for rule in parsed:
            variables = self._prepare(rule, result)
            if variables is None:
                continue

            try:
                group = self._find_group(rule, variables, groups, result)
            except ExpressionCompareError as e:
                self._mark_invalid(rule, e, result)
                continue

            if group is None:
                groups.append(_Group(rule, variables, [rule.id]))
            else:
                group.members.append(rule.id)

        result.duplicate_groups = [g.members for g in groups if len(g.members) > 1]

        logger.info(
            "Analyzed %d rules: %d duplicate groups, %d invalid",
            result.total_rules, len(result.duplicate_groups), len(result.invalid_rules),
        )
        return result

    def _prepare(self, rule: Rule, result: DuplicateAnalysisResult) -> Optional[FrozenSet[str]]:
        """
        Check a rule on its own, returning its variable set.

        Comparing the rule with itself validates it, applies the variable
        limit and evaluates it over every assignment, so a rule that would
        fail later never becomes a group representative.
        """
        try:
            checked = self.comparator.compare(rule.when, rule.when)
        except ExpressionCompareError as e:
            self._mark_invalid(rule, e, result)
            return None
        return frozenset(checked.variables)

    def _find_group(
        self,
        rule: Rule,
        variables: FrozenSet[str],
        groups: List[_Group],
        result: DuplicateAnalysisResult
    ) -> Optional[_Group]:
        for group in groups:
            if group.variables != variables:
                continue
            result.comparisons += 1
            comparison = self.comparator.compare(group.representative.when, rule.when)
            if comparison.equivalent:
                logger.debug("Rule %s duplicates %s", rule.id, group.representative.id)
                return group
        return None

    def _mark_invalid(
        self,
        rule: Rule,
        error: ExpressionCompareError,
        result: DuplicateAnalysisResult
    ) -> None:
        logger.debug("Rule %s cannot be compared: %s", rule.id, error)
        result.invalid_rules.append(InvalidRule(
            rule_id=rule.id,
            condition=rule.when,
            error=str(error),
            error_type=type(error).__name__,
        ))


def find_duplicates_in_file(path: Path) -> DuplicateAnalysisResult:
    """
    Load a YAML rule file and find duplicate rules.

    Args:
        path: Path to a file with `config` and `rules` keys.

    Returns:
        DuplicateAnalysisResult for the file's rules.
    """
    rule_set = RuleSet.from_yaml(Path(path))
    return DuplicateRuleFinder(rule_set.config).analyze(rule_set.rules)
