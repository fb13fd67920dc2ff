# rulefsm/core/validation.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import List

from rulefsm.core.errors import ValidationError
from rulefsm.core.ruleset import Ruleset
from rulefsm.core.transitions import Transition


class Validator:
    """
    Checks a rule set for configurations that are legal but almost certainly
    mistakes. Validation never changes how transitions are evaluated.
    """

    def validate_ruleset(self, ruleset: Ruleset) -> None:
        """
        Check that every registered transition carries at least one guard.

        :param ruleset: The rule set to validate.
        :raises ValidationError: Listing the transitions that would be permitted from any state.
        """
        unguarded = self.unguarded_transitions(ruleset)
        if unguarded:
            names = ", ".join(str(t) for t in unguarded)
            raise ValidationError(
                f"Transitions without guards are permitted from any state: {names}",
                {"unguarded": unguarded},
            )

    def unguarded_transitions(self, ruleset: Ruleset) -> List[Transition]:
        return [t for t in ruleset if not ruleset.guards_for(t)]
