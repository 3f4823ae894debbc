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

"""GUI automation of Windows programs with no unattended mode.

Automation scripts are AutoHotkey programs run by winetricks through its
``w_ahk_do`` helper, packaged as a custom winetricks verb.
"""

import dataclasses
import logging
from pathlib import Path, PureWindowsPath

from enb_installer.utils import file_utils, process
from enb_installer.wine import Winetricks

logger = logging.getLogger(__name__)

_WIN_WAIT_ACTIVATE = """\
WinWaitActivate(WaitTitle, WaitText:="", WaitTimeout:=2)
{
    Loop
    {
        WinWaitActive, %WaitTitle%, %WaitText%, %WaitTimeout%
        If ErrorLevel
        {
            WinActivate, %WaitTitle%, %WaitText%
        }
        Else
        {
            Break
        }
    }
}
"""


def shell_quote(text: str) -> str:
    """Escape text for use inside a shell double-quoted string."""
    for char in ("\\", '"', "$", "`"):
        text = text.replace(char, "\\" + char)
    return text


@dataclasses.dataclass(frozen=True)
class AutomationScript:
    """An AutoHotkey program packaged as a winetricks verb.

    :param name: The verb name prefix.
    :param title: The verb title shown by winetricks.
    :param body: The AutoHotkey program.
    """

    name: str
    title: str
    body: str

    def render(self, verb: str) -> str:
        """Render the winetricks verb file.

        :param verb: The verb name, which must match the file name.
        """
        body = "\n".join(
            f"        {line}" if line else "" for line in self.body.splitlines()
        )
        return (
            f'w_metadata {verb} apps title="{shell_quote(self.title)}"\n'
            "\n"
            f"load_{verb}()\n"
            "{\n"
            '    w_ahk_do "\n'
            f"{shell_quote(body)}\n"
            '    "\n'
            "}\n"
        )


def run_script(script: AutomationScript, winetricks: Winetricks) -> process.ProcessResult:
    """Run an automation script in the Wine prefix.

    The verb file is removed when the installer exits.

    :param script: The automation script.
    :param winetricks: The winetricks runner for the prefix.

    :raises CommandError: If the script fails.
    """
    verb_file = file_utils.create_temporary(prefix=f"{script.name}_", suffix=".verb")
    verb = verb_file.name.removesuffix(".verb")
    verb_file.write_text(script.render(verb))
    logger.debug("running automation verb %s", verb)
    return winetricks.run(verb_file)


def net7_installer_script(
    installer: PureWindowsPath, install_dir: PureWindowsPath
) -> AutomationScript:
    """Create the script driving the Net-7 unified installer.

    The game client update offered by the installer is declined: the
    launcher performs a more reliable update later.

    :param installer: The installer, as seen from the prefix.
    :param install_dir: The Net-7 installation directory.
    """
    window = f"Net-7 - Emulator Setup ahk_exe {installer.name}"
    dialogs = [
        (r"\.NET 2\.0 or better already installed!", "OK"),
        (
            r"Your version of Windows is Windows XP, your installation will "
            r"continue now\. we just needed to determine the version to "
            r"determine if you need special privileges because you're on a "
            r"system that has User Account Control\. \(UAC\)",
            "OK",
        ),
        (
            r"User .* is in the Administrators group.*Original non-restricted "
            r"account type: Admin",
            "OK",
        ),
        (
            r"We will now test to see if this is a 32 bit or 64 bit system, 64 "
            r"bit systems require that the registry keys installed by the "
            r"client are copied to a second location\.",
            "OK",
        ),
        (r"Your system is 32-bit, no additional registry keys are required\.", "OK"),
        (r"Game Client detected\. Would you like to update it?", "No"),
        (
            r"You have chosen not to install the patch, program will now "
            r"complete and you'll have to patch with the launcher\.",
            "OK",
        ),
        (
            r"Last but not least, you must register your game accounts\. "
            r"Hopefully you've done this already, but if not we'll go ahead "
            r"and open the websites for you to do so\.",
            "OK",
        ),
        (r"Did you already register?", "Yes"),
    ]

    lines = [
        _WIN_WAIT_ACTIVATE,
        "SetWinDelay 1000",
        "SetTitleMatchMode, RegEx",
        f'Run "{installer}" /S /D="{install_dir}"',
    ]
    for text, button in dialogs:
        lines.append(f'WinWaitActivate("{window}", "{text}")')
        lines.append(f"ControlClick, {button}")

    return AutomationScript(
        name="n7install", title="Net-7 Unified Installer", body="\n".join(lines)
    )


def launcher_update_script(launcher_script: Path, launcher_exe: str) -> AutomationScript:
    """Create the script updating the game through the Net-7 launcher.

    Updates are accepted until the launcher stops offering them, then the
    launcher is closed.

    :param launcher_script: The launcher start script.
    :param launcher_exe: The launcher executable name.
    """
    body = f"""\
{_WIN_WAIT_ACTIVATE}
SetWinDelay 1000
SetTitleMatchMode, 2
Run "{launcher_script}"
Loop
{{
    updates_complete = 0
    Loop
    {{
        WinWaitActive, Update available ahk_exe {launcher_exe}, Version cannot be determined., 1
        If ErrorLevel
        {{
            updates_complete += 1
            If updates_complete >= 5
                Break
            WinActivate, Update available ahk_exe {launcher_exe}, Version cannot be determined.
        }}
        else
        {{
            Break
        }}
    }}

    If updates_complete = 5
    {{
        WinWaitActivate("LaunchNet7 v ahk_exe {launcher_exe}", "Please select a server and hit play.")
        ; Edit1 holds the server name; button 11 is Cancel
        ControlClick, WindowsForms10.BUTTON.app.0.2004eee11
        Break
    }}

    ; button 5 is Update
    ControlClick, WindowsForms10.BUTTON.app.0.2004eee5
    WinWaitActivate("LaunchNet7 - Information ahk_exe {launcher_exe}", "Do you want to view the update report?")
    ControlClick, Cancel
}}
"""
    return AutomationScript(
        name="n7launcher", title="Net-7 Launcher Update", body=body
    )
