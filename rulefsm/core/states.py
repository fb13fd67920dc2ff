# rulefsm/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rulefsm.interfaces.protocols import IDer
from rulefsm.interfaces.types import Identity

_NO_ID = object()


def identity_of(value: Any) -> Identity:
    """
    Return the identity used to key transitions for ``value``.

    The check is duck-typed rather than an ``isinstance`` test against the
    :class:`IDer` protocol: any object with an ``id`` attribute contributes that
    attribute, :class:`State` taking a fast path. Anything else (strings, enums,
    ints) is its own identity.
    """
    if type(value) is State:
        return value.id
    ident = getattr(value, "id", _NO_ID)
    return value if ident is _NO_ID else ident


@dataclass(frozen=True)
class State:
    """
    A node of the machine: an identity plus optional payload data.

    Only the identity takes part in equality and hashing, so two states with
    the same id but different data select the same transitions. Guards can
    still look at ``data`` to decide whether a move is allowed.
    """

    id: Identity
    data: Any = field(default=None, compare=False)

    @classmethod
    def of(cls, ider: IDer) -> "State":
        """
        Build a state from an object exposing ``id``, keeping the object as the
        state's data.
        """
        return cls(id=ider.id, data=ider)

    def __str__(self) -> str:
        return str(self.id)
