# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2015-2025 Canonical Ltd.
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

"""Utilities related to the operating system."""

import contextlib
import logging
import os
import platform
import shutil
from collections.abc import Mapping
from pathlib import Path

from enb_installer import errors

logger = logging.getLogger(__name__)


def get_kernel_name() -> str:
    """Return the name of the running kernel, as in ``uname -s``."""
    return platform.system()


def is_superuser() -> bool:
    """Verify whether the process runs with an effective user ID of 0."""
    return os.geteuid() == 0


def find_executable(*candidates: str) -> Path | None:
    """Return the first candidate that resolves to an executable.

    Candidates can be absolute paths or names to look up in ``PATH``.
    """
    for candidate in candidates:
        found = shutil.which(candidate)
        if found:
            logger.debug("found executable %r at %s", candidate, found)
            return Path(found)

    return None


def is_freedesktop(environ: Mapping[str, str] | None = None) -> bool:
    """Determine whether a freedesktop.org-compliant desktop is in use."""
    if environ is None:
        environ = os.environ

    return bool(environ.get("XDG_DATA_DIRS"))


class OsRelease:
    """A class to intelligently determine the OS on which we're running."""

    def __init__(self, *, os_release_file: str = "/etc/os-release") -> None:
        """Create a new OsRelease instance.

        :param os_release_file: Path to os-release file to be parsed.
        """
        self._os_release: dict[str, str] = {}
        with contextlib.suppress(FileNotFoundError):
            with open(os_release_file) as file:
                for line in file:
                    entry = line.rstrip().split("=", 1)
                    if len(entry) == 2:
                        self._os_release[entry[0]] = entry[1].strip('"').strip("'")

    def id(self) -> str:
        """Return the OS ID.

        :raises OsReleaseIdError: If no ID can be determined.
        """
        with contextlib.suppress(KeyError):
            return self._os_release["ID"]

        raise errors.OsReleaseIdError()

    def id_like(self) -> list[str]:
        """Return the identifiers of the operating systems this one derives from.

        An empty list is returned if ``ID_LIKE`` is not set.
        """
        return self._os_release.get("ID_LIKE", "").split()


def is_gnome(environ: Mapping[str, str] | None = None) -> bool:
    """Determine whether the GNOME desktop settings tool is usable.

    The ``gsettings`` tool must be available and the session environment
    must mention GNOME.
    """
    if environ is None:
        environ = os.environ

    if not find_executable("gsettings"):
        return False

    return any("gnome" in f"{key}={value}".lower() for key, value in environ.items())
