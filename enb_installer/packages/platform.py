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

"""Helpers to determine the package manager family for the platform."""

import enum
import logging

from enb_installer import errors
from enb_installer.utils import os_utils

from .errors import PackageFamilyNotSupported

logger = logging.getLogger(__name__)


@enum.unique
class PackageFamily(str, enum.Enum):
    """The package management families supported by the installer."""

    ARCH = "arch"
    DEBIAN = "debian"
    GENTOO = "gentoo"
    RHEL = "rhel"
    SUSE = "suse"

    def __str__(self) -> str:
        return self.value


# Distributions that do not declare their lineage in ID_LIKE.
_FAMILY_ALIASES: dict[PackageFamily, list[str]] = {
    PackageFamily.ARCH: ["arch"],
    PackageFamily.DEBIAN: ["debian", "ubuntu"],
    PackageFamily.GENTOO: ["gentoo"],
    PackageFamily.RHEL: ["rhel", "fedora", "centos"],
    PackageFamily.SUSE: ["suse"],
}


def _match(identifier: str) -> PackageFamily | None:
    for family, aliases in _FAMILY_ALIASES.items():
        if any(alias in identifier for alias in aliases):
            return family
    return None


def get_family(os_release: os_utils.OsRelease | None = None) -> PackageFamily:
    """Resolve the package manager family of the host.

    ID_LIKE entries are checked first, then ID.

    :param os_release: The parsed os-release data. If not specified, the
        host's /etc/os-release is used.

    :return: The package manager family.

    :raises PackageFamilyNotSupported: If the family is not supported.
    """
    if os_release is None:
        os_release = os_utils.OsRelease()

    try:
        os_id = os_release.id()
    except errors.OsReleaseIdError:
        os_id = "unknown"

    id_like = os_release.id_like()
    for identifier in [*id_like, os_id]:
        family = _match(identifier.lower())
        if family:
            logger.debug("package family for %r (%s): %s", os_id, id_like, family)
            return family

    raise PackageFamilyNotSupported(os_id=os_id, id_like=id_like)
