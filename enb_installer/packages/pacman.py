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

"""Package handling for Arch-like hosts."""

from .base import BaseRepository
from .platform import PackageFamily


class PacmanRepository(BaseRepository):
    """Repository management using pacman.

    Packages that are only available in the user repository (AUR) are
    handled by pamac through the extra channel.
    """

    family = PackageFamily.ARCH
    query_command = ["pacman", "--query"]
    install_command = ["sudo", "pacman", "--sync", "--noconfirm"]
    extra_query_command = ["pamac", "list", "--installed"]
    extra_install_command = ["sudo", "pamac", "install", "--no-confirm"]
