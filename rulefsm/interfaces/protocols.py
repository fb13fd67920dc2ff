# rulefsm/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Protocol, runtime_checkable

from rulefsm.interfaces.types import Identity


@runtime_checkable
class IDer(Protocol):
    """
    Anything that can name the state it represents.

    Attributes:
        id: The identity used to key transitions (e.g. ``"pending"``).

    Runtime Invariants:
    - The identity is hashable and does not change while the object is in use.
    """

    @property
    def id(self) -> Identity:
        """The identity of this state."""
        ...


@runtime_checkable
class Subject(Protocol):
    """
    The entity whose state is governed by a machine. Owned by the host
    application; the machine only reads ``current_state`` before a transition
    and calls ``set_state`` after a permitted one.

    Error Handling:
    - ``set_state`` should not raise. If it does, the exception propagates to
      the caller of the transition unchanged.
    """

    @property
    def current_state(self) -> Any:
        """The state the subject is currently in."""
        ...

    def set_state(self, state: Any) -> None:
        """Record ``state`` as the subject's new current state."""
        ...
