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

"""Optional actions offered after the installation."""

import logging

from enb_installer import automation, launch, prompts
from enb_installer.dirs import InstallDirs
from enb_installer.launch import App
from enb_installer.lifecycle import remove_tree
from enb_installer.utils import process
from enb_installer.wine import Wine, Winetricks

logger = logging.getLogger(__name__)

FORUM_REGISTRATION_URL = "https://forum.enb-emulator.com/index.php?/register/"
GAME_REGISTRATION_URL = "https://www.net-7.org/?#login"

CSC_AVATAR_NOTES = """
If you don't already have a character in the same slot, you don't need to do \
anything special, otherwise see:
https://forum.enb-emulator.com/index.php?/topic/6778-how-do-i-get-the-new-classes/&do=findComment&comment=87200

Most of this has been handled for you, but for reference:
https://forum.enb-emulator.com/index.php?/topic/7262-how-to-create-the-3-new-classes-npc-skins/
"""


def update_launcher(dirs: InstallDirs, winetricks: Winetricks) -> None:
    """Let the Net-7 launcher download and apply client updates."""
    print("Launching Net-7 Launcher to perform updates")
    script = automation.launcher_update_script(
        dirs.n7_launcher_script, launch.N7_LAUNCHER_EXE
    )
    automation.run_script(script, winetricks)


def cleanup_install_source(dirs: InstallDirs) -> None:
    """Offer to remove the downloaded and extracted installers.

    :raises RemovalError: If the directory cannot be removed.
    """
    source = dirs.install_source_dir
    if not source.exists():
        return

    if prompts.ask(f"Cleanup downloaded and installer files from '{source}'"):
        remove_tree(source)


def show_avatars(dirs: InstallDirs) -> None:
    """List the avatars saved by the character creator."""
    if not dirs.csc_avatar_dir.is_dir():
        return

    print("Your Character and Starship Creator avatars are located here:\n")
    for path in sorted(dirs.csc_avatar_dir.rglob("*")):
        if path.is_file():
            print(path)
    print(CSC_AVATAR_NOTES)


def open_url(url: str) -> None:
    """Open a web page in the preferred browser."""
    process.run_checked(["xdg-open", url])


def run(dirs: InstallDirs, wine: Wine, winetricks: Winetricks) -> None:
    """Perform the post-installation steps.

    The launcher update and the client configuration always run, the other
    actions are offered to the user.

    :param dirs: The installation directories.
    :param wine: The Wine installation.
    :param winetricks: The winetricks installation.

    :raises InstallerError: If an action fails.
    """
    update_launcher(dirs, winetricks)

    print("Run Net-7 Config")
    launch.run_app(App.CONFIG, dirs, wine, wait=True)

    cleanup_install_source(dirs)

    if prompts.ask("Run the Character and Starship Creator to create a character"):
        launch.run_app(App.CSC, dirs, wine, wait=True)
        show_avatars(dirs)

    if prompts.ask(
        "Register for an Earth & Beyond Emulator forum account "
        "(this is a prereq to creating a game account)"
    ):
        open_url(FORUM_REGISTRATION_URL)

    if prompts.ask("Register for an Earth & Beyond Emulator game account"):
        open_url(GAME_REGISTRATION_URL)

    if prompts.ask("Start Earth & Beyond Emulator"):
        launch.run_app(App.PROXY, dirs, wine)
