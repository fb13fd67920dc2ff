# rulefsm/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Awaitable, Callable, Hashable

Identity = Hashable

# Guard callables receive (current, goal) exactly as the caller passed them.
Guard = Callable[[Any, Any], Any]
AsyncGuard = Callable[[Any, Any], Awaitable[Any]]
