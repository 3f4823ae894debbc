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

from enb_installer.steps import Step


def test_step_repr():
    assert f"{Step.PREFIX!r}" == "Step.PREFIX"
    assert f"{Step.GNOME_FOLDER!r}" == "Step.GNOME_FOLDER"


def test_step_title():
    assert Step.WINE_GECKO.title == "wine gecko"
    assert Step.NET7_INSTALL.title == "net7 install"


def test_ordering():
    slist = list(Step)
    assert sorted(slist) == slist
    assert slist[0] == Step.DIRECT_RENDERING
    assert slist[-1] == Step.GNOME_FOLDER
    assert Step.PREFIX < Step.WINETRICKS < Step.PREFIX_DEPENDENCIES
    assert Step.CLIENT_INSTALL < Step.NET7_INSTALL < Step.CSC_INSTALL
    assert Step.CERTIFICATE < Step.REGISTRY < Step.LAUNCHERS < Step.LINKS

