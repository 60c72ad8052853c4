import pytest

from core.assignment import Assignment
from core.errors import InvalidOperationError
from core.values import DoubleVal, SetVal, StringVal, create_value, none
from rules.basic_effects import ResolvedEffect, TemplateEffect
from rules.conditions import BinaryOperator, ComplexCondition, VoidCondition
from rules.effects import Effect


def test_construction_deduplicates_and_puts_negations_last() -> None:
    negated = ResolvedEffect("x", "a", negated=True)
    positive = ResolvedEffect("x", "b")
    effect = Effect([negated, positive, positive])
    assert effect.get_sub_effects() == (positive, negated)
    assert len(effect) == 2


def test_empty_and_single_construction() -> None:
    assert len(Effect()) == 0
    assert str(Effect()) == "Void"
    single = ResolvedEffect("x", "a")
    assert Effect(single).get_sub_effects() == (single,)


def test_concatenation_is_union_of_members() -> None:
    shared = ResolvedEffect("x", "a")
    left = Effect([shared, ResolvedEffect("y", "b")])
    right = Effect([shared, ResolvedEffect("z", "c", negated=True)])
    combined = left.concatenate(right)
    assert set(combined.get_sub_effects()) == set(left.get_sub_effects()) | set(right.get_sub_effects())
    assert len(combined) == 3
    assert left + right == combined


def test_concatenation_with_non_effect_fails() -> None:
    with pytest.raises(InvalidOperationError):
        Effect(ResolvedEffect("x", "a")).concatenate(StringVal("a"))


def test_lowest_priority_number_wins() -> None:
    effect = Effect([ResolvedEffect("x", 1, priority=5), ResolvedEffect("x", 2, priority=1)])
    assert effect.get_values("x") == {DoubleVal(2)}


def test_worse_priority_after_better_is_ignored() -> None:
    effect = Effect([ResolvedEffect("x", 2, priority=1), ResolvedEffect("x", 1, priority=5)])
    assert effect.get_values("x") == {DoubleVal(2)}


def test_ties_after_a_priority_reset_still_combine() -> None:
    effect = Effect(
        [
            ResolvedEffect("x", "z", priority=3),
            ResolvedEffect("x", create_value({"a", "b"}), priority=1),
            ResolvedEffect("x", "a", priority=1, negated=True),
            ResolvedEffect("x", "b", priority=2, negated=True),
        ]
    )
    assert effect.get_values("x") == {create_value({"b"})}


def test_tied_priorities_accumulate() -> None:
    effect = Effect([ResolvedEffect("x", "a"), ResolvedEffect("x", "b"), ResolvedEffect("y", "c")])
    assert effect.get_values("x") == {StringVal("a"), StringVal("b")}
    assert effect.get_values("unknown") == set()


def test_tied_negation_removes_scalar_value() -> None:
    effect = Effect(
        [ResolvedEffect("x", "a", negated=True), ResolvedEffect("x", "a"), ResolvedEffect("x", "b")]
    )
    assert effect.get_values("x") == {StringVal("b")}


def test_tied_negation_edits_set_values() -> None:
    effect = Effect(
        [
            ResolvedEffect("x", "b", negated=True),
            ResolvedEffect("x", create_value({"a", "b", "c"})),
        ]
    )
    assert effect.get_values("x") == {SetVal(frozenset({StringVal("a"), StringVal("c")}))}


def test_negation_at_better_priority_discards_worse_values() -> None:
    effect = Effect([ResolvedEffect("x", "a", priority=2), ResolvedEffect("x", "a", priority=1, negated=True)])
    assert effect.get_values("x") == set()


def test_none_value_is_never_returned() -> None:
    effect = Effect([ResolvedEffect("x", none())])
    assert effect.get_values("x") == set()


@pytest.mark.parametrize(
    ("members", "expected"),
    [
        ([ResolvedEffect("x", "a", add=True)], True),
        ([ResolvedEffect("x", "a", add=True), ResolvedEffect("x", "b")], False),
        ([ResolvedEffect("x", "b"), ResolvedEffect("x", "a", add=True)], False),
        ([ResolvedEffect("x", "a", add=True), ResolvedEffect("x", "b", negated=True)], True),
        ([ResolvedEffect("x", "a", add=True), ResolvedEffect("x", none())], True),
        ([ResolvedEffect("x", "b", negated=True)], False),
        ([ResolvedEffect("y", "a", add=True)], False),
        ([], False),
    ],
)
def test_is_add(members: list, expected: bool) -> None:
    assert Effect(members).is_add("x") is expected


def test_condition_of_single_member() -> None:
    member = ResolvedEffect("x", "a")
    assert Effect(member).convert_to_condition() == member.convert_to_condition()


def test_condition_of_empty_effect() -> None:
    assert isinstance(Effect().convert_to_condition(), VoidCondition)


def test_condition_over_distinct_variables_is_conjunction() -> None:
    condition = Effect([ResolvedEffect("x", "a"), ResolvedEffect("y", "b")]).convert_to_condition()
    assert isinstance(condition, ComplexCondition)
    assert condition.operator == BinaryOperator.AND
    assert len(condition.conditions) == 2


def test_condition_over_one_variable_is_disjunction() -> None:
    condition = Effect([ResolvedEffect("x", "a"), ResolvedEffect("x", "b")]).convert_to_condition()
    assert isinstance(condition, ComplexCondition)
    assert condition.operator == BinaryOperator.OR


def test_condition_is_cached() -> None:
    effect = Effect([ResolvedEffect("x", "a"), ResolvedEffect("y", "b")])
    assert effect.convert_to_condition() is effect.convert_to_condition()


def test_grounding_a_grounded_effect_keeps_members(grounding: Assignment) -> None:
    effect = Effect([ResolvedEffect("x", "a"), ResolvedEffect("y", "b", negated=True)])
    assert effect.is_fully_grounded()
    grounded = effect.ground(grounding)
    assert set(grounded.get_sub_effects()) == set(effect.get_sub_effects())


def test_grounding_drops_ungroundable_members(grounding: Assignment) -> None:
    effect = Effect(
        [
            TemplateEffect("a_m", "Greet({name})"),
            TemplateEffect("{slot}", "x"),
            ResolvedEffect("y", "b"),
        ]
    )
    assert not effect.is_fully_grounded()
    grounded = effect.ground(grounding)
    assert grounded.is_fully_grounded()
    assert set(grounded.get_sub_effects()) == {ResolvedEffect("a_m", "Greet(John)"), ResolvedEffect("y", "b")}


def test_grounding_with_full_coverage(grounding: Assignment) -> None:
    effect = Effect([TemplateEffect("{var}", "{intent}"), TemplateEffect("a_m", "Greet({name})")])
    grounded = effect.ground(grounding)
    assert len(grounded) == 2
    assert not any(member.contains_slots() for member in grounded)
    assert grounded.get_values("a_u") == {StringVal("Greet")}


def test_slots_and_output_variables() -> None:
    effect = Effect([TemplateEffect("{var}", "Greet({name})"), ResolvedEffect("y", "b")])
    assert effect.get_value_slots() == {"name"}
    assert effect.get_output_variables() == {"{var}", "y"}


def test_assignment_uses_primed_variables() -> None:
    effect = Effect([ResolvedEffect("a_m", "Greet"), ResolvedEffect("n", 2)])
    assignment = effect.get_assignment()
    assert assignment.get_value("a_m'") == StringVal("Greet")
    assert assignment.get_value("n'") == DoubleVal(2)


def test_structural_equality_copy_and_hash() -> None:
    effect = Effect([ResolvedEffect("x", "a"), ResolvedEffect("y", "b")])
    reordered = Effect([ResolvedEffect("y", "b"), ResolvedEffect("x", "a")])
    assert effect == reordered
    assert hash(effect) == hash(reordered)
    assert effect.copy() == effect
    assert effect != Effect(ResolvedEffect("x", "a"))
    assert not effect.contains(StringVal("a"))
    assert sorted([effect, Effect()]) in ([effect, Effect()], [Effect(), effect])
