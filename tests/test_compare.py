"""
Tests for expression equivalence checking.
"""

import pytest

from backend.rulecompare import (
    ComparisonConfig,
    ComparisonResult,
    ExpressionComparator,
    check_equivalence,
)
from backend.rulecompare.compare import combine_expressions
from backend.rulecompare.errors import (
    CombinatorError,
    CompileError,
    EvalError,
    FormatError,
    ParameterCountMismatch,
    ParameterSetMismatch,
    VariableLimitExceeded,
)


EQUIVALENT_PAIRS = [
    ("a == 1", "a == 1"),
    ("a == 1 && b == 1", "b == 1 && a == 1"),
    ("a == 1 && b == 1 && c == 0", "b == 1 && a == 1 && c == 0"),
    ("a == 1 || b == 1 || c == 0", "b == 1 || a == 1 || c == 0"),
    ("a == 1 || b == 1 && c == 0", "c == 0 &&  b == 1 || a == 1"),
    ("(a == 1 || b == 1) && c == 0", "c == 0 &&  (b == 1 || a == 1)"),
    ("a == 1 || (b == 1 && c == 0)", "(c == 0 &&  b == 1) || a == 1"),
    ("(a == 1 || b == 1 ) && (c == 0 || a == 1)", "(a == 1 || c == 0 ) && (b == 1 || a == 1)"),
    ("a != 0", "a == 1"),
    ("a >= 1", "a == 1"),
    ("a <= 0", "a != 1"),
    ("(foo == 1 && bar == 1) || baz == 0 ", "baz == 0 || (bar == 1 && foo == 1)"),
    ("foo == 1 && bar == 1 || baz == 0 ", "baz == 0 || bar == 1 && foo == 1"),
    ("a == 1 || a == 0 && b == 1", "a == 1 || b == 1"),
]

NON_EQUIVALENT_PAIRS = [
    ("(a == 1 || b == 1 ) && (c == 0 || a == 1)", "(a == 0 || c == 0 ) && (b == 1 || a == 1)"),
    ("a == 1", "a == 0"),
    ("a == 1 && b == 1", "a == 1 || b == 1"),
    ("a == 1 || b == 1 && c == 0", "(a == 1 || b == 1) && c == 0"),
]


class TestCheckEquivalence:
    """Tests for check_equivalence."""

    @pytest.mark.parametrize("expr1,expr2", EQUIVALENT_PAIRS)
    def test_equivalent(self, expr1, expr2):
        """Test expressions that are duplicates."""
        assert check_equivalence(expr1, expr2) is True

    @pytest.mark.parametrize("expr1,expr2", NON_EQUIVALENT_PAIRS)
    def test_not_equivalent(self, expr1, expr2):
        """Test expressions that differ on some assignment."""
        assert check_equivalence(expr1, expr2) is False

    @pytest.mark.parametrize("expr1,expr2", EQUIVALENT_PAIRS + NON_EQUIVALENT_PAIRS)
    def test_symmetry(self, expr1, expr2):
        """Test that argument order does not change the verdict."""
        assert check_equivalence(expr1, expr2) == check_equivalence(expr2, expr1)

    @pytest.mark.parametrize("expression", [pair[0] for pair in EQUIVALENT_PAIRS])
    def test_reflexivity(self, expression):
        """Test that every expression is equivalent to itself."""
        assert check_equivalence(expression, expression) is True

    def test_count_mismatch(self):
        """Test expressions with a different number of variables."""
        with pytest.raises(ParameterCountMismatch) as exc_info:
            check_equivalence("a == 1", "a == 1 || b == 0")
        assert exc_info.value.params1 == ["a"]
        assert exc_info.value.params2 == ["a", "b"]

    def test_count_mismatch_message(self):
        """Test the diagnostic message of a count mismatch."""
        with pytest.raises(ParameterCountMismatch) as exc_info:
            check_equivalence(
                "(a == 1 || b == 1 ) && (c == 0 || a == 1)",
                "(a == 0 ) && (b == 1 || a == 1)",
            )
        assert str(exc_info.value) == (
            "expressions have different number of parameters, "
            "params1: ['a', 'b', 'c'], params2: ['a', 'b']"
        )

    def test_set_mismatch(self):
        """Test expressions with the same count but different variables."""
        with pytest.raises(ParameterSetMismatch):
            check_equivalence("a == 1 && b == 1", "a == 1 && c == 1")

    def test_word_operators(self):
        """Test that 'and' / 'or' words end in a variable mismatch."""
        with pytest.raises(ParameterSetMismatch):
            check_equivalence("boo == 1 and foo == 0", "foo == 1 or boo == 0")

    def test_word_operator_compile_error(self):
        """Test that a word operator with matching variables fails to compile."""
        with pytest.raises(CompileError):
            check_equivalence("boo == 1 and foo == 0", "foo == 1 && boo == 0 && and == 1")

    def test_format_error_before_enumeration(self):
        """Test that validation fails before anything is evaluated."""
        comparator = ExpressionComparator()
        calls = []
        comparator.enumerator.enumerate = lambda *args: calls.append(args)

        with pytest.raises(FormatError):
            comparator.compare("a === 1", "a == 1")
        assert calls == []

    def test_unsupported_comparator(self):
        """Test comparators outside the supported set."""
        with pytest.raises(FormatError):
            check_equivalence("boo > 1 || foo == 0", "foo > 1 || boo == 0")

    def test_combinator_error(self):
        """Test combinators outside the supported set."""
        with pytest.raises(CombinatorError):
            check_equivalence("a == 1", "a == 1 &&& a == 0")

    def test_unbalanced_parentheses(self):
        """Test that imbalance surfaces as a compile error."""
        with pytest.raises(CompileError):
            check_equivalence(
                "(foo == 1 && (bar == 1 || baz == 0) || boo == 0",
                "((baz == 0 || bar == 1) && foo == 1) || boo == 0",
            )

    def test_bare_variable_eval_error(self):
        """Test that a bare variable operand fails at evaluation."""
        with pytest.raises(EvalError):
            check_equivalence("a && b == 1", "b == 1 && a == 1")

    def test_dotted_variables(self):
        """Test names with dots and underscores that would collide if rewritten."""
        assert check_equivalence("geo.eu == 1 && geo_eu == 0", "geo_eu == 0 && geo.eu == 1") is True
        assert check_equivalence("geo.eu == 1 && geo_eu == 0", "geo_eu == 1 && geo.eu == 0") is False


class TestExpressionComparator:
    """Tests for ExpressionComparator."""

    def test_result_for_equivalent(self):
        """Test the detailed result of an equivalent pair."""
        result = ExpressionComparator().compare("a == 1 && b == 1", "b == 1 && a == 1")
        assert isinstance(result, ComparisonResult)
        assert result.equivalent is True
        assert result.variables == ["a", "b"]
        assert result.assignments_checked == 4
        assert result.mismatches == 0
        assert result.counterexample is None

    def test_result_for_non_equivalent(self):
        """Test that every assignment is evaluated and the first mismatch kept."""
        result = ExpressionComparator().compare("a == 1 && b == 1", "a == 1 || b == 1")
        assert result.equivalent is False
        assert result.assignments_checked == 4
        assert result.mismatches == 2
        assert result.counterexample == {"a": 1, "b": 0}

    @pytest.mark.parametrize("count", [1, 3, 6])
    def test_exhaustive(self, count):
        """Test that exactly 2^n assignments are evaluated."""
        names = [f"x{i}" for i in range(count)]
        expr1 = " && ".join(f"{n} == 1" for n in names)
        expr2 = " && ".join(f"{n} == 1" for n in reversed(names))
        result = ExpressionComparator().compare(expr1, expr2)
        assert result.assignments_checked == 2 ** count
        assert result.equivalent is True

    def test_single_disagreement_flips_verdict(self):
        """Test that one differing assignment is enough."""
        result = ExpressionComparator().compare(
            "a == 1 || b == 1 || c == 1",
            "(a == 1 || b == 1 || c == 1) && (a == 0 || b == 0 || c == 0)",
        )
        assert result.equivalent is False
        assert result.mismatches == 1
        assert result.counterexample == {"a": 1, "b": 1, "c": 1}

    def test_iterative_strategy(self):
        """Test the bit-counting traversal gives the same verdicts."""
        config = ComparisonConfig(strategy="iterative")
        for expr1, expr2 in EQUIVALENT_PAIRS:
            assert check_equivalence(expr1, expr2, config) is True
        for expr1, expr2 in NON_EQUIVALENT_PAIRS:
            assert check_equivalence(expr1, expr2, config) is False

    def test_uses_validated_expressions(self):
        """Test that both sides go through validate_expression."""
        comparator = ExpressionComparator()
        seen = []
        original = comparator.validator.validate_expression
        comparator.validator.validate_expression = lambda text: seen.append(text) or original(text)

        comparator.compare("a == 1 && b == 0", "b == 0 && a == 1")
        assert seen == ["a == 1 && b == 0", "b == 0 && a == 1"]

    def test_variable_limit(self):
        """Test the configured variable limit."""
        config = ComparisonConfig(max_variables=2)
        with pytest.raises(VariableLimitExceeded) as exc_info:
            check_equivalence("a == 1 && b == 1 && c == 1", "c == 1 && b == 1 && a == 1", config)
        assert exc_info.value.count == 3
        assert exc_info.value.limit == 2

    def test_to_dict(self):
        """Test conversion to dictionary."""
        data = ExpressionComparator().compare("a == 1", "a == 0").to_dict()
        assert data["equivalent"] is False
        assert data["variables"] == ["a"]
        assert data["assignments_checked"] == 2
        assert data["mismatches"] == 2
        assert data["counterexample"] == {"a": 1}


def test_combine_expressions():
    """Test the probe expression layout."""
    assert combine_expressions("a == 1", "b == 0") == "(a == 1) == (b == 0)"
