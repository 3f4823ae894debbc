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

import pytest
from enb_installer.stages.base import Stage


@pytest.fixture
def repository(mocker):
    """Replace the host package repository seen by stages."""
    repo = mocker.Mock()
    repo.is_package_installed.return_value = False
    mocker.patch.object(
        Stage, "_repository", new_callable=mocker.PropertyMock, return_value=repo
    )
    return repo


@pytest.fixture
def wine_runner(mocker):
    """Replace the Wine runner seen by stages."""
    runner = mocker.Mock()
    mocker.patch.object(Stage, "_wine", return_value=runner)
    return runner


@pytest.fixture
def winetricks_runner(mocker):
    """Replace the winetricks runner seen by stages."""
    runner = mocker.Mock()
    mocker.patch.object(Stage, "_winetricks", return_value=runner)
    return runner
