# rulefsm/runtime/async_support.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Optional, Sequence

from rulefsm.core.guards import _GuardAdapter
from rulefsm.core.transitions import Transition
from rulefsm.interfaces.protocols import Subject
from rulefsm.interfaces.types import Guard

if TYPE_CHECKING:
    from rulefsm.core.ruleset import Ruleset

logger = logging.getLogger(__name__)


class AsyncGuardEvaluator:
    """
    Asyncio counterpart of :class:`~rulefsm.runtime.evaluator.GuardEvaluator`.

    Coroutine guards run as tasks on the current loop; plain guards run in an
    executor so a blocking check never stalls the loop. Unless an executor is
    injected, each call gets its own pool with one worker per plain guard, so a
    fast denial never queues behind slow guards. The first denial wins
    and the remaining tasks are cancelled. Cancelling stops coroutine guards,
    while executor-backed guards keep running and their results are dropped.
    """

    def __init__(self, executor: Optional[Executor] = None, thread_name_prefix: str = "rulefsm-guard") -> None:
        """
        :param executor: Shared executor for plain guards; a per-call pool when None.
        :param thread_name_prefix: Prefix for the names of per-call worker threads.
        """
        self._executor = executor
        self._thread_name_prefix = thread_name_prefix

    async def evaluate(self, transition: Transition, guards: Sequence[Guard], current: Any, goal: Any) -> None:
        """
        Await ``guards`` against (current, goal).

        :raises GuardDenied: If any guard denies.
        """
        if not guards:
            return

        adapters = [_GuardAdapter(guard, transition) for guard in guards]
        executor = self._executor
        plain = sum(1 for adapter in adapters if not adapter.is_coroutine)
        owned = None
        if executor is None and plain:
            owned = executor = ThreadPoolExecutor(max_workers=plain, thread_name_prefix=self._thread_name_prefix)

        pending = {asyncio.ensure_future(self._run(adapter, executor, current, goal)) for adapter in adapters}
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    denial = task.result()
                    if denial is not None:
                        logger.debug("Transition %s denied by %s: %s", transition, denial.guard, denial.reason)
                        raise denial
        finally:
            for task in pending:
                task.cancel()
            if owned is not None:
                owned.shutdown(wait=False, cancel_futures=True)

    async def _run(self, adapter: _GuardAdapter, executor: Optional[Executor], current: Any, goal: Any):
        if adapter.is_coroutine:
            return await adapter.check_async(current, goal)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, adapter.check, current, goal)


class AsyncMachine:
    """
    Asynchronous version of :class:`~rulefsm.core.machine.Machine`. Guards are
    evaluated with the rule set's async engine; the subject is only updated
    once every guard has allowed the move.
    """

    def __init__(self, rules: "Ruleset", subject: Subject) -> None:
        self.rules = rules
        self.subject = subject

    @property
    def state(self) -> Any:
        return self.subject.current_state

    async def transition(self, goal: Any) -> None:
        """
        Attempt to move the subject to ``goal``.

        :raises TransitionError: If the move is not permitted; the subject is left untouched.
        """
        current = self.subject.current_state
        await self.rules.permitted_async(current, goal)
        self.subject.set_state(goal)
        logger.debug("Subject moved from %s to %s", current, goal)

    async def can_transition(self, goal: Any) -> bool:
        return await self.rules.is_permitted_async(self.subject.current_state, goal)
