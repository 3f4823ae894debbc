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

"""Package handling for RHEL-like hosts."""

from .base import BaseRepository
from .platform import PackageFamily


class DNFRepository(BaseRepository):
    """Repository management using DNF.

    Installed packages are listed with dnf, installation goes through the
    yum compatibility command which is available on every RHEL release.
    """

    family = PackageFamily.RHEL
    query_command = ["dnf", "list", "installed"]
    install_command = ["sudo", "yum", "--assumeyes", "install"]
