"""rulefsm: rule-set driven finite state machines

Given the transitions a workflow allows, each protected by one or more guards,
rulefsm decides whether a subject may move from its current state to a goal
state and performs the move if so.

Responsibilities:
    - Transition registration and lookup
    - Parallel guard evaluation with first-failure-wins semantics
    - Committing a subject's state only after a permitted transition

Interactions:
    - Host applications supply states (any hashable value or IDer) and subjects
    - Guards are plain callables or coroutine functions
    - Logging through the standard library; the library installs no handlers
"""

from rulefsm.core.errors import (
    FSMError,
    GuardDenied,
    InvalidTransitionAttempt,
    NoRuleForTransition,
    TransitionError,
    ValidationError,
)
from rulefsm.core.guards import default_guard
from rulefsm.core.machine import Machine, StateHolder
from rulefsm.core.ruleset import Ruleset, create_ruleset
from rulefsm.core.states import State, identity_of
from rulefsm.core.transitions import Transition
from rulefsm.core.validation import Validator
from rulefsm.interfaces.protocols import IDer, Subject
from rulefsm.runtime.async_support import AsyncGuardEvaluator, AsyncMachine
from rulefsm.runtime.evaluator import GuardEvaluator

__version__ = "0.1.0"

__all__ = [
    "AsyncGuardEvaluator",
    "AsyncMachine",
    "FSMError",
    "GuardDenied",
    "GuardEvaluator",
    "IDer",
    "InvalidTransitionAttempt",
    "Machine",
    "NoRuleForTransition",
    "Ruleset",
    "State",
    "StateHolder",
    "Subject",
    "Transition",
    "TransitionError",
    "ValidationError",
    "Validator",
    "create_ruleset",
    "default_guard",
    "identity_of",
]
