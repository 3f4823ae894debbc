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

"""The installation lifecycle manager."""

import logging
import shutil
from pathlib import Path

from enb_installer import errors, prompts, stages
from enb_installer.actions import Action
from enb_installer.executor import Executor
from enb_installer.infos import InstallInfo

logger = logging.getLogger(__name__)


class LifecycleManager:
    """Coordinate the installation of the game environment.

    The lifecycle manager is the entry point for the installation. It
    creates the stages for the given context and runs them with an
    :class:`Executor`.

    :param info: The installation context.
    """

    def __init__(self, info: InstallInfo) -> None:
        self._info = info
        self._executor = Executor(stages.create_stages(info))

    @property
    def info(self) -> InstallInfo:
        """The installation context."""
        return self._info

    def plan(self) -> list[Action]:
        """Obtain the list of actions to be executed in the current state."""
        return self._executor.plan()

    def prepare_prefix(self) -> bool:
        """Offer to remove an existing Wine prefix before installing.

        An existing prefix is kept unless the user confirms its removal, and
        the installation then updates it in place.

        :return: Whether the prefix was removed.

        :raises RemovalError: If the prefix cannot be removed.
        """
        prefix = self._info.prefix
        if not prefix.exists():
            return False

        print(f"WINEPREFIX '{prefix}' already exists!")
        if not prompts.ask(
            f"Permanently remove '{prefix}' so it can be recreated from scratch"
        ):
            return False

        remove_tree(prefix)
        logger.info("Removed %s", prefix)
        return True

    def install(self) -> list[Action]:
        """Run every installation stage that is not complete.

        :raises InstallerError: If a stage fails.
        """
        return self._executor.execute()


def remove_tree(path: Path) -> None:
    """Remove a directory tree.

    :raises RemovalError: If the tree cannot be removed.
    """
    try:
        shutil.rmtree(path)
    except OSError as err:
        raise errors.RemovalError(str(path), err.strerror or str(err)) from err
