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

"""Operations with platform-specific package repositories."""

import logging

from . import errors
from .base import BaseRepository
from .deb import AptRepository
from .dnf import DNFRepository
from .pacman import PacmanRepository
from .platform import PackageFamily, get_family
from .portage import PortageRepository
from .zypper import ZypperRepository

logger = logging.getLogger(__name__)

_REPOSITORIES: dict[PackageFamily, type[BaseRepository]] = {
    PackageFamily.ARCH: PacmanRepository,
    PackageFamily.DEBIAN: AptRepository,
    PackageFamily.GENTOO: PortageRepository,
    PackageFamily.RHEL: DNFRepository,
    PackageFamily.SUSE: ZypperRepository,
}


def get_repository(family: PackageFamily) -> type[BaseRepository]:
    """Return the repository handler for the given package manager family."""
    repo = _REPOSITORIES[family]
    logger.debug("repository for %s: %s", family, repo.__name__)
    return repo


__all__ = [
    "errors",
    "BaseRepository",
    "PackageFamily",
    "get_family",
    "get_repository",
]
