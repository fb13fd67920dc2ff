# rulefsm/runtime/evaluator.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Sequence

from rulefsm.core.guards import _GuardAdapter
from rulefsm.core.transitions import Transition
from rulefsm.interfaces.types import Guard

logger = logging.getLogger(__name__)


class GuardEvaluator:
    """
    Evaluates every guard of a transition in parallel and raises the first
    denial it observes (first-failure-wins).

    Each call gets its own thread pool with one worker per guard, so total
    latency is bounded by the slowest allowing guard, or by the fastest denying
    one. Guards still running once a denial is seen are not stopped: they run
    to completion in the background and their results are discarded.
    """

    def __init__(self, thread_name_prefix: str = "rulefsm-guard") -> None:
        """
        :param thread_name_prefix: Prefix for the names of guard worker threads.
        """
        self._thread_name_prefix = thread_name_prefix

    def evaluate(self, transition: Transition, guards: Sequence[Guard], current: Any, goal: Any) -> None:
        """
        Run ``guards`` against (current, goal).

        :param transition: The transition being attempted, used in denials.
        :param guards: Guards registered for the transition.
        :param current: The subject's current state, passed to every guard.
        :param goal: The requested state, passed to every guard.
        :raises GuardDenied: If any guard denies.
        """
        if not guards:
            return

        adapters = [_GuardAdapter(guard, transition) for guard in guards]
        executor = ThreadPoolExecutor(max_workers=len(adapters), thread_name_prefix=self._thread_name_prefix)
        try:
            futures = [executor.submit(adapter.check, current, goal) for adapter in adapters]
            for future in as_completed(futures):
                denial = future.result()
                if denial is not None:
                    logger.debug("Transition %s denied by %s: %s", transition, denial.guard, denial.reason)
                    raise denial
        finally:
            # Never wait here: a slow guard must not delay a decided outcome.
            executor.shutdown(wait=False, cancel_futures=True)
