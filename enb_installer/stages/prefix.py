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

"""Stages creating and preparing the Wine prefix."""

import logging
import os

from overrides import overrides

from enb_installer import completion, sources, wine
from enb_installer.steps import Step
from enb_installer.utils import file_utils

from .base import Stage

logger = logging.getLogger(__name__)

PREFIX_DEPENDENCIES = [
    "winxp",
    "windowmanagerdecorated=y",
    "windowmanagermanaged=y",
    "dotnet20",
    "corefonts",
    "vcrun2008",
]

# Installed last, and required by the Net-7 launcher.
PREFIX_DEPENDENCIES_MARKER = "vcrun2008"


class PrefixStage(Stage):
    """Create the 32-bit Wine prefix."""

    step = Step.PREFIX

    @overrides
    def is_complete(self) -> bool:
        registry = self._dirs.system_registry
        if not registry.is_file():
            return False

        with registry.open(encoding="utf-8", errors="replace") as hive:
            return any(line.strip() == "#arch=win32" for line in hive)

    @overrides
    def run(self) -> None:
        logger.info("Creating Wine prefix %r", str(self._info.prefix))
        self._wine().boot()


class WinetricksStage(Stage):
    """Provide an up-to-date winetricks in the prefix.

    Winetricks is kept in the prefix instead of being installed on the host,
    so that no superuser access is needed and distribution packages, often
    outdated, are not used.
    """

    step = Step.WINETRICKS

    @overrides
    def is_complete(self) -> bool:
        path = self._dirs.winetricks
        return file_utils.is_executable(path) and completion.is_fresh(path)

    @overrides
    def run(self) -> None:
        path = self._dirs.winetricks
        sources.download(wine.WINETRICKS_URL, path)

        if not file_utils.is_executable(path):
            file_utils.make_executable(path)

        winetricks = self._winetricks()
        if not completion.is_fresh(path):
            logger.info("Updating winetricks...")
            winetricks.self_update()
            # record the refresh even if the script did not change
            os.utime(path)

        logger.info("Winetricks version: %s", winetricks.version())


class PrefixDependenciesStage(Stage):
    """Install the Windows runtime dependencies in the prefix."""

    step = Step.PREFIX_DEPENDENCIES

    @overrides
    def is_complete(self) -> bool:
        return completion.log_contains(
            self._dirs.winetricks_log, PREFIX_DEPENDENCIES_MARKER
        )

    @overrides
    def run(self) -> None:
        logger.info("Installing dependencies in the prefix (this will take several minutes)")
        self._winetricks().run("-q", *PREFIX_DEPENDENCIES)
