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

"""Helpers to run programs in the Wine prefix."""

import logging
from collections.abc import Sequence
from pathlib import Path, PureWindowsPath

from enb_installer import errors
from enb_installer.utils import os_utils, process

logger = logging.getLogger(__name__)

# Distribution wine-staging builds are preferred over the WineHQ ones.
WINE_CANDIDATES = ("/opt/wine-staging/bin/wine", "wine")
WINE_PACKAGE = "wine-staging"

WINETRICKS_URL = (
    "https://raw.githubusercontent.com/Winetricks/winetricks/master/src/winetricks"
)


def find_wine() -> Path | None:
    """Return the Wine executable to use, if installed."""
    return os_utils.find_executable(*WINE_CANDIDATES)


class Wine:
    """Run Windows programs in a Wine prefix.

    :param executable: The Wine executable.
    :param prefix: The Wine prefix.
    """

    def __init__(self, executable: Path, *, prefix: Path) -> None:
        self.executable = executable
        self.prefix = prefix

    @classmethod
    def find(cls, prefix: Path) -> "Wine":
        """Locate the installed Wine.

        :raises ToolUnavailable: If Wine is not installed.
        """
        executable = find_wine()
        if not executable:
            raise errors.ToolUnavailable(
                "wine",
                resolution=(
                    "Install wine-staging; winehq-* packages are not recommended, "
                    "but may be the best option on your distribution."
                ),
            )
        return cls(executable, prefix=prefix)

    @property
    def env(self) -> dict[str, str]:
        """Environment variables selecting the prefix."""
        return {"WINEPREFIX": str(self.prefix)}

    def tool(self, name: str) -> Path:
        """Return a Wine tool installed alongside the Wine executable."""
        candidate = self.executable.parent / name
        if candidate.exists():
            return candidate
        return Path(name)

    def version(self) -> str:
        """Return the Wine version string."""
        result = process.run_checked([self.executable, "--version"])
        return result.output.strip()

    def _start_command(
        self,
        program: str | PureWindowsPath,
        args: Sequence[str],
        *,
        wait: bool,
        workdir: PureWindowsPath | None,
    ) -> list[str]:
        command = [str(self.executable), "start"]
        if workdir:
            command.extend(["/d", str(workdir)])
        if wait:
            command.append("/wait")
        command.append(str(program))
        command.extend(args)
        return command

    def start(
        self,
        program: str | PureWindowsPath,
        *args: str,
        workdir: PureWindowsPath | None = None,
        wait: bool = True,
    ) -> process.ProcessResult:
        """Run a Windows program.

        :param program: The program to run.
        :param args: The program arguments.
        :param workdir: The program working directory.
        :param wait: Wait for the program to finish.

        :raises CommandError: If the program fails.
        """
        command = self._start_command(program, args, wait=wait, workdir=workdir)
        return process.run_checked(command, env=self.env)

    def boot(self) -> None:
        """Create or update the 32-bit prefix.

        The Mono installation prompt is disabled during prefix creation.
        """
        env = {**self.env, "WINEARCH": "win32", "WINEDLLOVERRIDES": "mscoree=d"}
        process.run_checked([self.tool("wineboot")], env=env)

    def wait_server(self) -> None:
        """Wait until the Wine server of the prefix exits."""
        process.run_checked([self.tool("wineserver"), "-w"], env=self.env)

    def import_registry(self, reg_file: Path) -> None:
        """Import a registry fragment into the prefix."""
        self.start("regedit.exe", str(reg_file))


class Winetricks:
    """Run winetricks verbs in a Wine prefix.

    :param executable: The winetricks script.
    :param wine: The Wine installation to use.
    """

    def __init__(self, executable: Path, *, wine: Wine) -> None:
        self.executable = executable
        self.wine = wine

    @property
    def env(self) -> dict[str, str]:
        """Environment variables selecting Wine and the prefix."""
        return {**self.wine.env, "WINE": str(self.wine.executable)}

    def run(self, *args: str | Path) -> process.ProcessResult:
        """Run winetricks with the given arguments.

        :raises CommandError: If winetricks fails.
        """
        return process.run_checked([self.executable, *args], env=self.env)

    def self_update(self) -> None:
        """Update the winetricks script in place."""
        self.run("--self-update")

    def version(self) -> str:
        """Return the winetricks version string."""
        return self.run("--version").output.strip()
