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

from pathlib import Path, PureWindowsPath

import pytest
from enb_installer import automation
from enb_installer.wine import Wine, Winetricks


@pytest.mark.parametrize(
    ("text", "quoted"),
    [
        ("plain", "plain"),
        ('Run "setup.exe"', 'Run \\"setup.exe\\"'),
        ("C:\\Program Files", "C:\\\\Program Files"),
        ("%Var% $HOME `cmd`", "%Var% \\$HOME \\`cmd\\`"),
        ('\\"', '\\\\\\"'),
    ],
)
def test_shell_quote(text, quoted):
    assert automation.shell_quote(text) == quoted


def test_render():
    script = automation.AutomationScript(
        name="test", title="A \"quoted\" title", body='Run "x.exe"\n\nSleep 1'
    )

    assert script.render("test_abc") == (
        'w_metadata test_abc apps title="A \\"quoted\\" title"\n'
        "\n"
        "load_test_abc()\n"
        "{\n"
        '    w_ahk_do "\n'
        '        Run \\"x.exe\\"\n'
        "\n"
        "        Sleep 1\n"
        '    "\n'
        "}\n"
    )


def test_net7_installer_script():
    script = automation.net7_installer_script(
        PureWindowsPath(r"C:\Program Files\EA GAMES\Earth & Beyond Install\Net-7_Install.exe"),
        PureWindowsPath(r"C:\Program Files\Net-7"),
    )

    assert script.name == "n7install"
    lines = script.body.splitlines()
    assert "SetTitleMatchMode, RegEx" in lines
    assert (
        'Run "C:\\Program Files\\EA GAMES\\Earth & Beyond Install\\Net-7_Install.exe" '
        '/S /D="C:\\Program Files\\Net-7"'
    ) in lines
    clicks = [line for line in lines if line.startswith("ControlClick")]
    assert len(clicks) == 9
    assert clicks[5] == "ControlClick, No"
    assert clicks[-1] == "ControlClick, Yes"
    assert all(
        "Net-7 - Emulator Setup ahk_exe Net-7_Install.exe" in line
        for line in lines
        if line.startswith('WinWaitActivate("')
    )


def test_launcher_update_script():
    script = automation.launcher_update_script(
        Path("/prefix/drive_c/Program Files/Net-7/bin/LaunchNet7.exe_wine_launcher.sh"),
        "LaunchNet7.exe",
    )

    assert script.name == "n7launcher"
    assert (
        'Run "/prefix/drive_c/Program Files/Net-7/bin/LaunchNet7.exe_wine_launcher.sh"'
        in script.body
    )
    assert "Update available ahk_exe LaunchNet7.exe" in script.body
    assert script.body.count("{") == script.body.count("}")


def test_run_script(mocker, fake_process, new_dir):
    mocker.patch("atexit.register")
    wine = Wine(new_dir / "wine", prefix=new_dir / "prefix")
    winetricks = Winetricks(new_dir / "winetricks", wine=wine)
    fake_process.register([str(new_dir / "winetricks"), fake_process.any()])
    script = automation.AutomationScript(name="n7install", title="t", body="Sleep 1")

    automation.run_script(script, winetricks)

    verb_file = Path(fake_process.calls[0][1])
    assert verb_file.name.startswith("n7install_")
    verb = verb_file.name.removesuffix(".verb")
    assert verb_file.read_text().startswith(f"w_metadata {verb} apps")
    verb_file.unlink()
