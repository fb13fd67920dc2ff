# rulefsm/tests/unit/test_ruleset.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
import pytest
from hypothesis import given
from hypothesis import strategies as st

from rulefsm.core.errors import GuardDenied, NoRuleForTransition, ValidationError
from rulefsm.core.ruleset import Ruleset, create_ruleset
from rulefsm.core.states import State
from rulefsm.core.transitions import Transition
from rulefsm.runtime.evaluator import GuardEvaluator

STATES = ["pending", "started", "finished"]

# -----------------------------------------------------------------------------
# CONSTRUCTION
# -----------------------------------------------------------------------------


def test_add_rule_appends_without_dedup():
    rules = Ruleset()
    t = Transition("a", "b")

    def guard(current, goal):
        return True

    rules.add_rule(t, guard)
    rules.add_rule(t, guard, guard)
    assert rules.guards_for(t) == [guard, guard, guard]
    assert t in rules
    assert len(rules) == 1


def test_add_rule_rejects_non_callable():
    with pytest.raises(ValidationError):
        Ruleset().add_rule(Transition("a", "b"), "not a guard")


def test_guards_for_returns_copy():
    rules = create_ruleset(Transition("a", "b"))
    rules.guards_for(Transition("a", "b")).clear()
    assert len(rules.guards_for(Transition("a", "b"))) == 1


def test_guards_for_unknown_transition():
    with pytest.raises(NoRuleForTransition):
        Ruleset().guards_for(Transition("a", "b"))


def test_create_ruleset_registers_default_guards():
    rules = create_ruleset(Transition("pending", "started"), Transition("started", "finished"))
    assert rules.transitions() == [Transition("pending", "started"), Transition("started", "finished")]
    assert all(len(rules.guards_for(t)) == 1 for t in rules)


def test_from_graph():
    rules = Ruleset.from_graph({"CREATED": ["APPROVED", "FAILED"], "APPROVED": ["SETTLED"], "SETTLED": []})
    assert len(rules) == 3
    assert rules.is_permitted("CREATED", "FAILED")
    assert not rules.is_permitted("CREATED", "SETTLED")
    assert not rules.is_permitted("SETTLED", "CREATED")


def test_repr_lists_guards():
    assert "pending -> started" in repr(create_ruleset(Transition("pending", "started")))


# -----------------------------------------------------------------------------
# PERMITTED
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "current, goal, outcome",
    [
        (None, "started", NoRuleForTransition),
        (None, "pending", NoRuleForTransition),
        (None, "finished", NoRuleForTransition),
        ("pending", "started", None),
        ("pending", "pending", NoRuleForTransition),
        ("pending", "finished", NoRuleForTransition),
        ("started", "started", NoRuleForTransition),
        ("started", "pending", NoRuleForTransition),
        ("started", "finished", None),
    ],
)
def test_permitted_table(order_rules, current, goal, outcome):
    if outcome is None:
        assert order_rules.permitted(current, goal) is None
        assert order_rules.is_permitted(current, goal)
    else:
        with pytest.raises(outcome):
            order_rules.permitted(current, goal)
        assert not order_rules.is_permitted(current, goal)


def test_permitted_accepts_state_values(order_rules):
    order_rules.permitted(State("pending", data={"user": 1}), State("started"))


def test_no_rule_message(order_rules):
    with pytest.raises(NoRuleForTransition, match="No rules found for pending to finished"):
        order_rules.permitted("pending", "finished")


def test_unregistered_pair_runs_no_guard():
    calls = []
    rules = Ruleset()
    rules.add_rule(Transition("a", "b"), lambda c, g: calls.append((c, g)))
    with pytest.raises(NoRuleForTransition):
        rules.permitted("a", "c")
    assert calls == []


def test_unregistered_pair_starts_no_evaluation():
    evaluated = []

    class RecordingEvaluator(GuardEvaluator):
        def evaluate(self, transition, guards, current, goal):
            evaluated.append(transition)
            super().evaluate(transition, guards, current, goal)

    rules = Ruleset(evaluator=RecordingEvaluator())
    rules.add_transition(Transition("a", "b"))
    with pytest.raises(NoRuleForTransition):
        rules.permitted("a", "c")
    assert not rules.is_permitted("b", "a")
    assert evaluated == []

    rules.permitted("a", "b")
    assert evaluated == [Transition("a", "b")]


def test_shared_denial_reports_each_transition():
    not_paid = GuardDenied("not paid")

    def require_payment(current, goal):
        raise not_paid

    rules = Ruleset()
    rules.add_rule(Transition("a", "b"), require_payment)
    rules.add_rule(Transition("b", "c"), require_payment)

    with pytest.raises(GuardDenied) as first:
        rules.permitted("a", "b")
    with pytest.raises(GuardDenied) as second:
        rules.permitted("b", "c")

    assert first.value.transition == Transition("a", "b")
    assert second.value.transition == Transition("b", "c")
    assert str(second.value) == "not paid"
    assert not_paid.transition is None


def test_guards_receive_caller_values():
    seen = []
    current, goal = State("a", data="payload"), State("b")
    rules = Ruleset()
    rules.add_rule(Transition("a", "b"), lambda c, g: seen.append((c, g)))
    rules.permitted(current, goal)
    assert seen == [(current, goal)]
    assert seen[0][0].data == "payload"


@pytest.mark.parametrize("deny_first", [True, False])
def test_all_guards_must_pass(deny_first):
    def allow(current, goal):
        return True

    def deny(current, goal):
        raise GuardDenied("nope")

    rules = Ruleset()
    guards = (deny, allow) if deny_first else (allow, deny)
    rules.add_rule(Transition("a", "b"), *guards)
    with pytest.raises(GuardDenied, match="nope"):
        rules.permitted("a", "b")


def test_self_transition_needs_its_own_rule(order_rules):
    assert not order_rules.is_permitted("started", "started")
    order_rules.add_transition(Transition("started", "started"))
    assert order_rules.is_permitted("started", "started")


def test_transition_without_guards_is_permitted_from_registered_origin():
    # A registered transition with zero guards passes vacuously; Validator reports it.
    rules = Ruleset()
    rules.add_rule(Transition("a", "b"))
    assert Transition("a", "b") in rules
    assert rules.guards_for(Transition("a", "b")) == []
    assert rules.is_permitted("a", "b")


def test_lookup_is_exact_match_on_both_identities():
    rules = Ruleset()
    rules.add_rule(Transition("a", "b"), lambda c, g: True)
    assert rules.is_permitted("a", "b")
    assert not rules.is_permitted("x", "b")


# -----------------------------------------------------------------------------
# PROPERTIES
# -----------------------------------------------------------------------------

identities = st.one_of(st.text(max_size=8), st.integers(), st.none())


@pytest.mark.property
@given(origin=identities, goal=identities)
def test_default_guard_only_permits_registered_pairs(origin, goal):
    rules = create_ruleset(Transition(origin, goal))
    assert rules.is_permitted(origin, goal)
    other = "other" if origin != "other" else "another"
    assert not rules.is_permitted(other, goal)


@pytest.mark.property
@given(current=identities, goal=identities)
def test_unregistered_pairs_fail_with_no_rule(current, goal):
    rules = create_ruleset(Transition("pending", "started"), Transition("started", "finished"))
    if (current, goal) in {("pending", "started"), ("started", "finished")}:
        return
    with pytest.raises(NoRuleForTransition):
        rules.permitted(current, goal)


@pytest.mark.property
@given(pairs=st.lists(st.tuples(st.sampled_from(STATES), st.sampled_from(STATES)), max_size=6))
def test_building_twice_gives_same_behaviour(pairs):
    transitions = [Transition(a, b) for a, b in pairs]
    first, second = create_ruleset(*transitions), create_ruleset(*transitions)
    for current in STATES:
        for goal in STATES:
            assert first.is_permitted(current, goal) == second.is_permitted(current, goal)
