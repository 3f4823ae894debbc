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

"""Stages adjusting the desktop entries created by the Windows installers."""

import ast
import logging
from pathlib import Path

from overrides import overrides
from xdg.DesktopEntry import DesktopEntry  # type: ignore[import]

from enb_installer import errors
from enb_installer.steps import Step
from enb_installer.utils import os_utils, process

from .base import Stage

logger = logging.getLogger(__name__)

README_ICON = "libreoffice-writer"

GNOME_APP_FOLDER = "enb"
GNOME_APP_FOLDER_NAME = "Earth & Beyond"
GNOME_APP_FOLDERS_SCHEMA = "org.gnome.desktop.app-folders"
GNOME_APP_FOLDER_SCHEMA = (
    f"{GNOME_APP_FOLDERS_SCHEMA}.folder:"
    f"/org/gnome/desktop/app-folders/folders/{GNOME_APP_FOLDER}/"
)


def _quote_exec(path: Path) -> str:
    return f'"{path}"'


def _update_entry(path: Path, values: dict[str, str]) -> bool:
    """Set keys of a desktop entry, if it exists.

    :return: Whether the entry was changed.
    """
    if not path.is_file():
        return False

    entry = DesktopEntry(str(path))
    if all(entry.get(key) == value for key, value in values.items()):
        return False

    for key, value in values.items():
        entry.set(key, value)
    entry.write()
    logger.debug("updated desktop entry %s: %s", path, values)
    return True


def get_desktop_entries(directory: Path) -> list[Path]:
    """Return the desktop entries in a directory tree."""
    if not directory.is_dir():
        return []
    return sorted(directory.rglob("*.desktop"))


class ShortcutsStage(Stage):
    """Point the application shortcuts to the launcher scripts.

    Shortcuts to documents get a document icon, and shortcuts to the
    defunct website and the uninstallers are removed.
    """

    step = Step.SHORTCUTS

    def _launcher_path(self) -> str:
        """Return the working directory of the launcher shortcut."""
        entry = self._dirs.n7_app_dir / "LaunchNet7.desktop"
        if not entry.is_file():
            return ""
        path = DesktopEntry(str(entry)).getPath()
        if not path:
            return ""
        while path.endswith("/bin"):
            path = path[: -len("/bin")]
        return path + "/bin"

    def _updates(self) -> dict[Path, dict[str, str]]:
        dirs = self._dirs
        launcher_path = self._launcher_path()

        launcher: dict[str, str] = {
            "Name": "Net-7 Launcher",
            "Exec": _quote_exec(dirs.n7_launcher_script),
        }
        game: dict[str, str] = {"Exec": _quote_exec(dirs.n7_proxy_script)}
        if launcher_path:
            launcher["Path"] = launcher_path
            game["Path"] = launcher_path

        return {
            dirs.n7_app_dir / "LaunchNet7.desktop": launcher,
            dirs.enb_app_dir / "Earth & Beyond Configuration.desktop": {
                "Exec": _quote_exec(dirs.cfg_script),
            },
            dirs.enb_app_dir / "Character and Starship Creator.desktop": {
                "Exec": _quote_exec(dirs.csc_script),
            },
            dirs.enb_app_dir / "Character and Starship Creator ReadMe.desktop": {
                "Icon": README_ICON,
            },
            dirs.enb_app_dir / "Earth & Beyond.desktop": game,
            dirs.enb_app_dir / "Earth & Beyond ReadMe.desktop": {"Icon": README_ICON},
        }

    def _obsolete(self) -> list[Path]:
        dirs = self._dirs
        menu_prefix = "wine-Programs-EA GAMES-Earth & Beyond-"
        names = [
            "Earth & Beyond Website",
            "Uninstall Character and Starship Creator",
            "Uninstall Earth & Beyond",
        ]
        entries = [dirs.enb_app_dir / f"{name}.desktop" for name in names]
        menus = [dirs.menu_dir / f"{menu_prefix}{name}.menu" for name in names]
        return entries + menus

    @overrides
    def is_complete(self) -> bool:
        if not self._info.freedesktop:
            return True

        if any(path.exists() for path in self._obsolete()):
            return False

        for path, values in self._updates().items():
            if not path.is_file():
                continue
            entry = DesktopEntry(str(path))
            if any(entry.get(key) != value for key, value in values.items()):
                return False

        return True

    @overrides
    def run(self) -> None:
        for path, values in self._updates().items():
            _update_entry(path, values)

        for path in self._obsolete():
            path.unlink(missing_ok=True)

        if os_utils.find_executable("update-desktop-database"):
            process.run_checked(["update-desktop-database", self._dirs.app_dir])


def parse_string_list(value: str) -> list[str]:
    """Parse a GVariant string array as printed by ``gsettings get``.

    :param value: The printed array, for example ``['a', 'b']`` or ``@as []``.
    """
    value = value.strip()
    if value.startswith("@as "):
        value = value[len("@as ") :]

    try:
        items = ast.literal_eval(value)
    except (SyntaxError, ValueError):
        return []

    if not isinstance(items, list):
        return []

    return [str(item) for item in items]


def format_string_list(items: list[str]) -> str:
    """Format a GVariant string array for ``gsettings set``."""
    return "[" + ", ".join(repr(item) for item in items) + "]"


class GnomeFolderStage(Stage):
    """Group the game shortcuts into a GNOME application folder.

    The folder is a convenience: failures are logged, and the stage is
    complete when the GNOME settings cannot be read.
    """

    step = Step.GNOME_FOLDER

    def _entries(self) -> list[Path]:
        dirs = self._dirs
        return get_desktop_entries(dirs.enb_app_dir) + get_desktop_entries(
            dirs.n7_app_dir
        )

    def _folder_children(self) -> list[str]:
        result = process.run_checked(
            ["gsettings", "get", GNOME_APP_FOLDERS_SCHEMA, "folder-children"]
        )
        return parse_string_list(result.output)

    @overrides
    def is_complete(self) -> bool:
        if not self._info.gnome:
            return True

        try:
            children = self._folder_children()
        except (errors.CommandError, FileNotFoundError) as err:
            logger.debug("GNOME application folders unavailable: %s", err)
            return True

        if GNOME_APP_FOLDER not in children:
            return False

        return all(
            DesktopEntry(str(path)).get("Categories") == GNOME_APP_FOLDER
            for path in self._entries()
        )

    @overrides
    def run(self) -> None:
        try:
            self._add_folder()
        except (errors.CommandError, FileNotFoundError) as err:
            logger.warning("Cannot create the GNOME application folder: %s", err)
            return

        for path in self._entries():
            _update_entry(path, {"Categories": GNOME_APP_FOLDER})

    def _add_folder(self) -> None:
        children = self._folder_children()
        if GNOME_APP_FOLDER in children:
            return

        gsettings = ["gsettings", "set"]
        process.run_checked(
            [
                *gsettings,
                GNOME_APP_FOLDERS_SCHEMA,
                "folder-children",
                format_string_list([*children, GNOME_APP_FOLDER]),
            ]
        )
        process.run_checked(
            [*gsettings, GNOME_APP_FOLDER_SCHEMA, "name", GNOME_APP_FOLDER_NAME]
        )
        process.run_checked(
            [
                *gsettings,
                GNOME_APP_FOLDER_SCHEMA,
                "categories",
                format_string_list([GNOME_APP_FOLDER]),
            ]
        )
