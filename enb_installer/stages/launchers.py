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

"""Stages generating launcher scripts and the links pointing to them."""

import logging
from pathlib import Path

from overrides import overrides

from enb_installer import completion, launch, prompts
from enb_installer.launch import App
from enb_installer.steps import Step
from enb_installer.utils import file_utils

from .base import Stage

logger = logging.getLogger(__name__)


class LaunchersStage(Stage):
    """Write the launcher scripts of the installed applications.

    The character creator shortcut created by its installer points to
    ``Character and Starship Creator.exe``. The executable is moved aside
    and replaced with a link to the launcher script so that the shortcut
    starts the creator in a virtual desktop.
    """

    step = Step.LAUNCHERS

    def _scripts(self) -> dict[Path, str]:
        prefix = self._info.prefix
        return {
            launch.get_script_path(app, self._dirs): launch.render_script(app, prefix)
            for app in App
        }

    @overrides
    def is_complete(self) -> bool:
        dirs = self._dirs
        if not all(
            completion.content_matches(path, content)
            for path, content in self._scripts().items()
        ):
            return False

        return completion.path_exists(dirs.csc_redirect_exe) and file_utils.points_to(
            dirs.csc_exe, dirs.csc_script
        )

    @overrides
    def run(self) -> None:
        dirs = self._dirs
        for path, content in self._scripts().items():
            logger.debug("write launcher script %s", path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
            file_utils.make_executable(path)

        if dirs.csc_exe.is_file() and not dirs.csc_exe.is_symlink():
            dirs.csc_exe.replace(dirs.csc_redirect_exe)

        file_utils.replace_symlink(dirs.csc_exe, dirs.csc_script)


class LinksStage(Stage):
    """Create links to the launcher scripts in the user binaries directory."""

    step = Step.LINKS

    def _links(self) -> dict[Path, App]:
        dirs = self._dirs
        return {
            dirs.n7_launcher_link: App.LAUNCHER,
            dirs.cfg_link: App.CONFIG,
            dirs.csc_link: App.CSC,
            dirs.enb_link: App.PROXY,
        }

    @overrides
    def is_complete(self) -> bool:
        return all(
            file_utils.points_to(link, launch.get_script_path(app, self._dirs))
            for link, app in self._links().items()
        )

    @overrides
    def run(self) -> None:
        self._dirs.bin_dir.mkdir(parents=True, exist_ok=True)

        for link, app in self._links().items():
            script = launch.get_script_path(app, self._dirs)
            file_utils.replace_symlink(link, script)
            print(f"{link.name}\n    {launch.get_description(app)}")

        if self._info.freedesktop:
            return

        print()
        for link, app in self._links().items():
            print(f'{link} => "{launch.get_script_path(app, self._dirs)}"')
        print()
        prompts.wait_for_response(
            "You do not appear to be running a freedesktop.org-compliant desktop "
            "environment.\nNo shortcuts will be managed; the links created are "
            "listed above for reference"
        )
