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
from enb_installer import errors, wine
from enb_installer.wine import Wine, Winetricks


def test_find_wine(mocker):
    find = mocker.patch(
        "enb_installer.utils.os_utils.find_executable",
        return_value=Path("/opt/wine-staging/bin/wine"),
    )

    assert wine.find_wine() == Path("/opt/wine-staging/bin/wine")
    find.assert_called_once_with("/opt/wine-staging/bin/wine", "wine")


def test_find(fake_wine, new_dir):
    found = Wine.find(new_dir / "prefix")

    assert found.executable == fake_wine
    assert found.prefix == new_dir / "prefix"
    assert found.env == {"WINEPREFIX": str(new_dir / "prefix")}


def test_find_not_installed(mocker, new_dir):
    mocker.patch("enb_installer.wine.find_wine", return_value=None)

    with pytest.raises(errors.ToolUnavailable) as raised:
        Wine.find(new_dir / "prefix")

    assert raised.value.tool == "wine"
    assert "wine-staging" in str(raised.value)


def test_tool(fake_wine, new_dir):
    (fake_wine.parent / "wineboot").touch()
    found = Wine.find(new_dir / "prefix")

    assert found.tool("wineboot") == fake_wine.parent / "wineboot"
    assert found.tool("wineserver") == Path("wineserver")


class TestStart:
    @pytest.fixture
    def wine_runner(self, new_dir):
        return Wine(Path("/usr/bin/wine"), prefix=new_dir / "prefix")

    def test_start(self, wine_runner, fake_process):
        fake_process.register(
            ["/usr/bin/wine", "start", "/d", r"C:\Program Files\Net-7\bin", "/wait",
             "LaunchNet7.exe"]
        )

        wine_runner.start(
            "LaunchNet7.exe", workdir=PureWindowsPath(r"C:\Program Files\Net-7\bin")
        )

        assert len(fake_process.calls) == 1

    def test_start_no_wait(self, wine_runner, fake_process):
        fake_process.register(
            ["/usr/bin/wine", "start", "net7config.exe", "/opt"]
        )

        wine_runner.start("net7config.exe", "/opt", wait=False)

        assert len(fake_process.calls) == 1

    def test_start_failure(self, wine_runner, fake_process):
        fake_process.register(
            ["/usr/bin/wine", "start", "/wait", "setup.exe"], returncode=5
        )

        with pytest.raises(errors.CommandError) as raised:
            wine_runner.start("setup.exe")

        assert raised.value.exit_code == 5

    def test_import_registry(self, wine_runner, fake_process):
        fake_process.register(
            ["/usr/bin/wine", "start", "/wait", "regedit.exe", "/tmp/f.reg"]
        )

        wine_runner.import_registry(Path("/tmp/f.reg"))

        assert len(fake_process.calls) == 1

    def test_version(self, wine_runner, fake_process):
        fake_process.register(["/usr/bin/wine", "--version"], stdout="wine-9.0\n")

        assert wine_runner.version() == "wine-9.0"


def test_boot(fake_wine, new_dir, fake_process, mocker):
    (fake_wine.parent / "wineboot").touch()
    fake_process.register([str(fake_wine.parent / "wineboot")])
    run_checked = mocker.spy(wine.process, "run_checked")

    Wine.find(new_dir / "prefix").boot()

    env = run_checked.call_args.kwargs["env"]
    assert env == {
        "WINEPREFIX": str(new_dir / "prefix"),
        "WINEARCH": "win32",
        "WINEDLLOVERRIDES": "mscoree=d",
    }


def test_winetricks(fake_process, new_dir, mocker):
    runner = Wine(Path("/usr/bin/wine"), prefix=new_dir / "prefix")
    winetricks = Winetricks(new_dir / "winetricks", wine=runner)
    fake_process.register([str(new_dir / "winetricks"), "--version"], stdout="20240105\n")
    run_checked = mocker.spy(wine.process, "run_checked")

    assert winetricks.version() == "20240105"
    assert run_checked.call_args.kwargs["env"] == {
        "WINEPREFIX": str(new_dir / "prefix"),
        "WINE": "/usr/bin/wine",
    }
