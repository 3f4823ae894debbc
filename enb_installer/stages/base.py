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

"""Definition of the installation stage interface."""

import abc
import logging
from typing import ClassVar

from enb_installer.dirs import InstallDirs
from enb_installer.infos import InstallInfo
from enb_installer.packages import BaseRepository
from enb_installer.steps import Step
from enb_installer.wine import Wine, Winetricks

logger = logging.getLogger(__name__)


class Stage(abc.ABC):
    """A named unit of installation work.

    A stage converges one aspect of the host or the environment to its goal
    state. :meth:`is_complete` inspects the current state without changing
    anything; :meth:`run` performs the work, and is only called when the
    stage is not complete. A stage that fails raises an exception and the
    installation is aborted.

    :param info: The installation context.
    """

    step: ClassVar[Step]

    def __init__(self, info: InstallInfo) -> None:
        self._info = info

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.step!r})"

    @property
    def name(self) -> str:
        """The stage name used in logs."""
        return self.step.title

    @property
    def _dirs(self) -> InstallDirs:
        return self._info.dirs

    @property
    def _repository(self) -> type[BaseRepository]:
        return self._info.repository

    def _wine(self) -> Wine:
        return Wine.find(self._info.prefix)

    def _winetricks(self) -> Winetricks:
        return Winetricks(self._dirs.winetricks, wine=self._wine())

    @abc.abstractmethod
    def is_complete(self) -> bool:
        """Verify whether the stage goal state already holds.

        This method must not change the host or the environment.
        """

    @abc.abstractmethod
    def run(self) -> None:
        """Perform the stage work.

        :raises InstallerError: If the work could not be completed.
        """
