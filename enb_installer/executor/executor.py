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

"""Definitions and helpers for the stage executor."""

import logging
from collections.abc import Sequence

from enb_installer import errors
from enb_installer.actions import Action, ActionType
from enb_installer.stages import Stage

logger = logging.getLogger(__name__)


class Executor:
    """Run installation stages in order.

    Each stage is skipped if its goal state already holds. Execution stops
    at the first failing stage; stages already executed are not undone, and
    a new run resumes from the first incomplete stage.

    :param stages: The stages to run, in execution order.
    """

    def __init__(self, stages: Sequence[Stage]) -> None:
        self._stages = list(stages)

    def plan(self) -> list[Action]:
        """Determine the action to take for each stage in the current state.

        The plan does not account for changes made by earlier stages, so a
        stage planned to run may be skipped on execution.
        """
        return [self._get_action(stage) for stage in self._stages]

    def execute(self) -> list[Action]:
        """Run all stages that are not complete.

        :return: The actions taken, one per stage.

        :raises InstallerError: If a stage fails. No later stage is run.
        """
        actions: list[Action] = []

        for stage in self._stages:
            action = self._get_action(stage)
            if action.action_type == ActionType.SKIP:
                logger.info("Skip %s (%s)", stage.name, action.reason)
            else:
                self._run_stage(stage)
            actions.append(action)

        logger.info("Installation complete")
        return actions

    @staticmethod
    def _get_action(stage: Stage) -> Action:
        if stage.is_complete():
            return Action(stage.step, ActionType.SKIP, reason="already complete")
        return Action(stage.step, ActionType.RUN)

    @staticmethod
    def _run_stage(stage: Stage) -> None:
        logger.info("Start %s", stage.name)
        try:
            stage.run()
        except errors.InstallerError as err:
            logger.error("Stage %r failed (exit code %d)", stage.name, err.exit_code)
            raise

        logger.debug("finished %s", stage.name)
