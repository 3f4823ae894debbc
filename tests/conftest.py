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

import os
from pathlib import Path

import pytest
import xdg  # type: ignore[import]
from enb_installer.infos import InstallInfo
from enb_installer.packages import PackageFamily


@pytest.fixture
def new_dir(monkeypatch, tmp_path):
    """Change to a new temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def temp_xdg(tmp_path, mocker):
    """Use a temporary locaction for XDG directories."""
    mocker.patch("xdg.BaseDirectory.xdg_config_home", new=str(tmp_path / ".config"))
    mocker.patch("xdg.BaseDirectory.xdg_data_home", new=str(tmp_path / ".local/share"))
    mocker.patch("xdg.BaseDirectory.xdg_cache_home", new=str(tmp_path / ".cache"))
    mocker.patch(
        "xdg.BaseDirectory.xdg_data_dirs",
        new=[
            xdg.BaseDirectory.xdg_data_home  # pyright: ignore[reportGeneralTypeIssues]
        ],
    )
    mocker.patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path / ".config")})


@pytest.fixture
def home_dir(tmp_path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def install_info(tmp_path, home_dir) -> InstallInfo:
    """An installation context for a Debian host with a desktop session."""
    return InstallInfo(
        prefix=tmp_path / "prefix",
        user="player",
        family=PackageFamily.DEBIAN,
        freedesktop=True,
        home=home_dir,
    )


@pytest.fixture
def fake_wine(mocker, tmp_path):
    """Resolve Wine to a fake executable in the temporary directory."""
    wine_dir = tmp_path / "wine" / "bin"
    wine_dir.mkdir(parents=True)
    executable = wine_dir / "wine"
    executable.touch()
    mocker.patch("enb_installer.wine.find_wine", return_value=executable)
    return executable
