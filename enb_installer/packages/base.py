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

"""Definition and helpers for the repository base class."""

import logging
import re
from collections.abc import Sequence
from typing import ClassVar

from enb_installer.utils import process

from . import errors
from .platform import PackageFamily

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base implementation for a platform specific repository handler.

    Subclasses declare the argument lists used to query installed packages
    and to install new ones. Package names are appended to the install
    command. An optional secondary package source (the "extra" channel) can
    be declared separately for queries and installs; when it is missing, each
    operation independently falls back to the primary command if allowed.
    """

    family: ClassVar[PackageFamily]

    query_command: ClassVar[Sequence[str]]
    install_command: ClassVar[Sequence[str]]

    extra_query_command: ClassVar[Sequence[str] | None] = None
    extra_install_command: ClassVar[Sequence[str] | None] = None
    extra_query_falls_back: ClassVar[bool] = True
    extra_install_falls_back: ClassVar[bool] = True

    @classmethod
    def _select_query_command(cls, *, extra: bool) -> Sequence[str]:
        if not extra:
            return cls.query_command
        if cls.extra_query_command:
            return cls.extra_query_command
        if cls.extra_query_falls_back:
            return cls.query_command
        raise errors.ExtraChannelNotConfigured(family=str(cls.family), operation="query")

    @classmethod
    def _select_install_command(cls, *, extra: bool) -> Sequence[str]:
        if not extra:
            return cls.install_command
        if cls.extra_install_command:
            return cls.extra_install_command
        if cls.extra_install_falls_back:
            return cls.install_command
        raise errors.ExtraChannelNotConfigured(
            family=str(cls.family), operation="install"
        )

    @classmethod
    def get_installed_packages(cls, *, extra: bool = False) -> str:
        """Obtain the package manager listing of installed packages.

        :param extra: Query the secondary package source.

        :return: The raw query output, or an empty string if the query failed.
        """
        command = cls._select_query_command(extra=extra)
        try:
            result = process.run(command)
        except FileNotFoundError:
            logger.debug("package query command %r not found", command[0])
            return ""

        if result.returncode:
            logger.debug("package query %s exited with %d", command, result.returncode)
            return ""

        return result.output

    @classmethod
    def is_package_installed(cls, package_name: str, *, extra: bool = False) -> bool:
        """Inform if a package is installed on the host system.

        :param package_name: The package name to query.
        :param extra: Query the secondary package source.

        :return: Whether the package is installed.
        """
        output = cls.get_installed_packages(extra=extra)
        return is_listed(output, package_name)

    @classmethod
    def install_packages(cls, package_names: list[str], *, extra: bool = False) -> None:
        """Install packages on the host system.

        :param package_names: A list of package names to install.
        :param extra: Install from the secondary package source.

        :raises PackagesNotInstalled: If the package manager failed.
        """
        if not package_names:
            return

        command = [*cls._select_install_command(extra=extra), *package_names]
        logger.info("Installing packages: %s", " ".join(package_names))
        try:
            result = process.run(command)
        except FileNotFoundError as err:
            raise errors.PackagesNotInstalled(
                packages=package_names, exit_code=127, output=str(err)
            ) from err

        if result.returncode:
            raise errors.PackagesNotInstalled(
                packages=package_names,
                exit_code=result.returncode,
                output=result.output,
            )


def is_listed(output: str, package_name: str) -> bool:
    """Verify whether a package name appears as a whole token in a listing.

    Listings vary between package managers (name version,
    name/suite, category/name, name.arch, | name |), so the
    name must be delimited by whitespace, a slash, a pipe, a dot, a colon,
    a version suffix or the line boundaries.
    """
    pattern = rf"(?:^|[\s/|]){re.escape(package_name)}(?=$|[\s/|.:,]|-\d)"
    return re.search(pattern, output, re.MULTILINE) is not None
