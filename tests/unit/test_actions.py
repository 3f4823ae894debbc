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

import dataclasses

import pytest
from enb_installer.actions import Action, ActionType
from enb_installer.steps import Step


def test_action_type_repr():
    assert f"{ActionType.RUN!r}" == "ActionType.RUN"
    assert f"{ActionType.SKIP!r}" == "ActionType.SKIP"


def test_action_defaults():
    action = Action(Step.WINE)

    assert action.step == Step.WINE
    assert action.action_type == ActionType.RUN
    assert action.reason is None


def test_action_frozen():
    action = Action(Step.WINE, ActionType.SKIP, reason="already complete")

    with pytest.raises(dataclasses.FrozenInstanceError):
        action.reason = "changed"  # type: ignore[misc]
