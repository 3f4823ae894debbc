# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2025 Canonical Ltd.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Definitions of installation actions and action types."""

import enum
from dataclasses import dataclass

from enb_installer.steps import Step


@enum.unique
class ActionType(enum.IntEnum):
    """The type of action taken for a step.

    ``RUN``: the step was not complete and its work was executed.

    ``SKIP``: the step was already complete and nothing was done.
    """

    RUN = 0
    SKIP = 1

    def __repr__(self):
        return f"{self.__class__.__name__}.{self.name}"


@dataclass(frozen=True)
class Action:
    """The action taken for a given step.

    :param step: The :class:`Step` this action refers to.
    :param action_type: Whether the step was executed or skipped.
    :param reason: A textual description of why this action was taken.
    """

    step: Step
    action_type: ActionType = ActionType.RUN
    reason: str | None = None
