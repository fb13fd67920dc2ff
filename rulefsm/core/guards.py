# rulefsm/core/guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Optional

from rulefsm.core.errors import GuardDenied, InvalidTransitionAttempt
from rulefsm.core.states import identity_of
from rulefsm.core.transitions import Transition
from rulefsm.interfaces.types import Guard

logger = logging.getLogger(__name__)


def default_guard(transition: Transition) -> Guard:
    """
    Build the topology guard for ``transition``: it only lets a subject through
    when the subject's current state is the transition's origin.

    :param transition: The transition the guard protects.
    :return: A guard raising InvalidTransitionAttempt on a mismatched origin.
    """

    def check_origin(current: Any, goal: Any) -> None:
        if identity_of(current) != transition.origin:
            raise InvalidTransitionAttempt(identity_of(current), identity_of(goal), transition)

    check_origin.__qualname__ = f"default_guard({transition})"
    return check_origin


async def _await(awaitable: Any) -> Any:
    return await awaitable


def guard_name(guard: Guard) -> str:
    """Return a readable name for a guard, used in denial reasons and logs."""
    return getattr(guard, "__qualname__", None) or getattr(guard, "__name__", None) or repr(guard)


class _GuardAdapter:
    """
    Internal class adapting a user guard to a single outcome: ``None`` when the
    guard allows, a :class:`GuardDenied` when it does not.

    A guard allows by returning anything other than ``False``. It denies by
    returning ``False`` or raising ``GuardDenied``. Any other exception is a
    guard fault and is converted into a denial; it never escapes the adapter.
    """

    def __init__(self, guard: Guard, transition: Transition) -> None:
        self._guard = guard
        self._transition = transition
        self.name = guard_name(guard)

    @property
    def is_coroutine(self) -> bool:
        return inspect.iscoroutinefunction(self._guard)

    def check(self, current: Any, goal: Any) -> Optional[GuardDenied]:
        """
        Run the guard synchronously and return its denial, if any. Must not be
        called from a thread with a running event loop when the guard is a
        coroutine function.
        """
        try:
            outcome = self._guard(current, goal)
            if inspect.isawaitable(outcome):
                outcome = asyncio.run(_await(outcome))
        except Exception as e:
            return self._denial_from(e)
        return self._interpret(outcome)

    async def check_async(self, current: Any, goal: Any) -> Optional[GuardDenied]:
        """
        Await a coroutine guard and return its denial, if any.
        """
        try:
            outcome = await self._guard(current, goal)
        except Exception as e:
            return self._denial_from(e)
        return self._interpret(outcome)

    def _interpret(self, outcome: Any) -> Optional[GuardDenied]:
        if outcome is False:
            return GuardDenied(
                f"Guard {self.name} rejected {self._transition}",
                transition=self._transition,
                guard=self.name,
            )
        return None

    def _denial_from(self, error: Exception) -> GuardDenied:
        if isinstance(error, GuardDenied):
            # Guards may raise a shared instance; never mutate it.
            denial = type(error).__new__(type(error), *error.args)
            denial.__dict__.update(error.__dict__)
            denial.transition = self._transition
            if denial.guard is None:
                denial.guard = self.name
            denial.__cause__ = error
            return denial

        logger.warning("Guard %s failed on %s: %s", self.name, self._transition, error, exc_info=error)
        denial = GuardDenied(
            str(error) or type(error).__name__,
            transition=self._transition,
            guard=self.name,
            details={"fault": type(error).__name__},
        )
        denial.__cause__ = error
        return denial
