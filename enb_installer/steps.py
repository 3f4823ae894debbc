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

"""Definitions and helpers to handle installation steps."""

import enum


@enum.unique
class Step(enum.IntEnum):
    """All the steps needed to provision the Earth & Beyond environment.

    Steps run in the order they are declared. Host requirements are
    satisfied first (``DIRECT_RENDERING``, ``WINE``, ``WINE_GECKO``), then
    the Wine prefix is created and populated with its runtime dependencies
    (``PREFIX`` to ``PREFIX_DEPENDENCIES``). The game client, the Net-7
    emulator client and the Character and Starship Creator are then
    downloaded and installed, the server certificate and game settings are
    imported into the prefix registry, and finally the desktop integration
    is generated (``LAUNCHERS`` to ``GNOME_FOLDER``).
    """

    DIRECT_RENDERING = 1
    WINE = 2
    WINE_GECKO = 3
    PREFIX = 4
    WINETRICKS = 5
    PREFIX_DEPENDENCIES = 6
    CLIENT_DOWNLOAD = 7
    CLIENT_EXTRACT = 8
    CLIENT_INSTALL = 9
    NET7_DOWNLOAD = 10
    NET7_INSTALL = 11
    CSC_DOWNLOAD = 12
    CSC_INSTALL = 13
    CERTIFICATE = 14
    REGISTRY = 15
    LAUNCHERS = 16
    LINKS = 17
    SHORTCUTS = 18
    GNOME_FOLDER = 19

    def __repr__(self):
        return f"{self.__class__.__name__}.{self.name}"

    @property
    def title(self) -> str:
        """A human readable name of the step."""
        return self.name.replace("_", " ").lower()

