# rulefsm/core/ruleset.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from rulefsm.core.errors import NoRuleForTransition, TransitionError, ValidationError
from rulefsm.core.guards import default_guard, guard_name
from rulefsm.core.transitions import Transition
from rulefsm.interfaces.types import Guard, Identity
from rulefsm.runtime.async_support import AsyncGuardEvaluator
from rulefsm.runtime.evaluator import GuardEvaluator

logger = logging.getLogger(__name__)

_default_evaluator = GuardEvaluator()
_default_async_evaluator = AsyncGuardEvaluator()


class Ruleset:
    """
    Stores, per transition, the guards that must all pass for the transition to
    be permitted.

    A transition missing from the rule set is never permitted. A transition
    registered with no guards at all is permitted from any state, so every
    registered transition should carry at least the default guard (see
    :meth:`add_transition` and :class:`~rulefsm.core.validation.Validator`).

    Lookups are safe from many threads once the rule set is fully built.
    Adding rules while other threads evaluate is not supported.
    """

    def __init__(
        self,
        evaluator: Optional[GuardEvaluator] = None,
        async_evaluator: Optional[AsyncGuardEvaluator] = None,
    ) -> None:
        """
        :param evaluator: Engine used by :meth:`permitted`.
        :param async_evaluator: Engine used by :meth:`permitted_async`.
        """
        self._rules: Dict[Transition, List[Guard]] = {}
        self._evaluator = evaluator or _default_evaluator
        self._async_evaluator = async_evaluator or _default_async_evaluator

    @classmethod
    def from_graph(cls, graph: Mapping[Identity, Iterable[Identity]], **kwargs: Any) -> "Ruleset":
        """
        Build a rule set from an adjacency mapping such as
        ``{"CREATED": {"APPROVED", "FAILED"}, "APPROVED": {"SETTLED"}}``. Every
        edge gets the default guard.
        """
        rules = cls(**kwargs)
        for origin, destinations in graph.items():
            for destination in destinations:
                rules.add_transition(Transition(origin, destination))
        return rules

    def add_rule(self, transition: Transition, *guards: Guard) -> None:
        """
        Append guards to ``transition``, registering it if needed. Guards are
        not deduplicated.

        :raises ValidationError: If a guard is not callable.
        """
        for guard in guards:
            if not callable(guard):
                raise ValidationError(
                    f"Guard for {transition} is not callable: {guard!r}",
                    {"transition": transition},
                )
        self._rules.setdefault(transition, []).extend(guards)

    def add_transition(self, transition: Transition) -> None:
        """
        Register ``transition`` guarded only by the origin check.
        """
        self.add_rule(transition, default_guard(transition))

    def transitions(self) -> List[Transition]:
        return list(self._rules)

    def guards_for(self, transition: Transition) -> List[Guard]:
        """
        Return a copy of the guards registered for ``transition``.

        :raises NoRuleForTransition: If the transition is not registered.
        """
        try:
            return list(self._rules[transition])
        except KeyError:
            raise NoRuleForTransition(transition) from None

    def permitted(self, current: Any, goal: Any) -> None:
        """
        Decide whether a subject in ``current`` may move to ``goal``. All guards
        run in parallel and the first denial is raised as soon as it is seen.

        :param current: The current state (a State, IDer or raw identity).
        :param goal: The requested state.
        :raises NoRuleForTransition: If no rule exists for the pair.
        :raises GuardDenied: If a guard rejects the transition.
        """
        transition = Transition.between(current, goal)
        guards = self._lookup(transition)
        self._evaluator.evaluate(transition, guards, current, goal)

    async def permitted_async(self, current: Any, goal: Any) -> None:
        """
        Coroutine version of :meth:`permitted`.
        """
        transition = Transition.between(current, goal)
        guards = self._lookup(transition)
        await self._async_evaluator.evaluate(transition, guards, current, goal)

    def is_permitted(self, current: Any, goal: Any) -> bool:
        try:
            self.permitted(current, goal)
        except TransitionError:
            return False
        return True

    async def is_permitted_async(self, current: Any, goal: Any) -> bool:
        try:
            await self.permitted_async(current, goal)
        except TransitionError:
            return False
        return True

    def _lookup(self, transition: Transition) -> List[Guard]:
        guards = self._rules.get(transition)
        if guards is None:
            logger.debug("No rules found for %s", transition)
            raise NoRuleForTransition(transition)
        return guards

    def __contains__(self, transition: object) -> bool:
        return transition in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._rules)

    def __repr__(self) -> str:
        rules = ", ".join(f"{t}: [{', '.join(guard_name(g) for g in gs)}]" for t, gs in self._rules.items())
        return f"Ruleset({{{rules}}})"


def create_ruleset(*transitions: Transition) -> Ruleset:
    """
    Create a rule set in which each of ``transitions`` carries the default guard.
    """
    rules = Ruleset()
    for transition in transitions:
        rules.add_transition(transition)
    return rules
