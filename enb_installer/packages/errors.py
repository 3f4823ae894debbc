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

"""Exceptions raised by the packages handling subsystem."""

from collections.abc import Sequence

from enb_installer.errors import InstallerError, exit_status


class PackagesError(InstallerError):
    """Base class for package handler errors."""


class PackageFamilyNotSupported(PackagesError):
    """The host operating system family is not supported.

    :param os_id: The operating system ID.
    :param id_like: The operating systems the host derives from.
    """

    def __init__(self, *, os_id: str, id_like: Sequence[str]):
        self.os_id = os_id
        self.id_like = list(id_like)
        brief = f"Unknown OS ID:{os_id} ID_LIKE:{' '.join(self.id_like)}"
        details = "Supported families are arch, debian, gentoo, rhel and suse."

        super().__init__(brief=brief, details=details)


class PackagesNotInstalled(PackagesError):
    """Could not install all requested packages.

    :param packages: The packages to install.
    :param exit_code: The package manager exit code.
    :param output: The package manager output.
    """

    def __init__(self, *, packages: Sequence[str], exit_code: int, output: str = ""):
        self.packages = list(packages)
        self.exit_code = exit_status(exit_code)
        self.output = output
        pkgs = ", ".join(repr(name) for name in sorted(packages))
        brief = f"Cannot install all requested packages: {pkgs}."
        details = f"rc: {exit_code}, output: {output.strip()}" if output.strip() else None

        super().__init__(brief=brief, details=details)


class ExtraChannelNotConfigured(PackagesError):
    """The secondary package source was requested but is not available.

    :param family: The package manager family.
    :param operation: The requested operation, either "query" or "install".
    """

    def __init__(self, *, family: str, operation: str):
        self.family = family
        self.operation = operation
        brief = f"No secondary package source to {operation} packages on {family} hosts."

        super().__init__(brief=brief)
