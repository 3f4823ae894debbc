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

"""Installation information shared by all installer components."""

from __future__ import annotations

import functools
import getpass
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import pydantic

from enb_installer import packages
from enb_installer.dirs import InstallDirs
from enb_installer.utils import os_utils

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "~/.wine-enb"


class InstallInfo(pydantic.BaseModel):
    """Immutable installation context.

    The context is created once at startup, from environment variables and
    command line options, and passed to every installer component.
    """

    model_config = pydantic.ConfigDict(
        frozen=True,
        extra="forbid",
    )

    prefix: Path
    """The root of the isolated Windows application environment."""

    architecture: Literal["win32"] = "win32"
    """The environment architecture. The game client is 32-bit only."""

    user: str
    """The name of the user who will run the game."""

    family: packages.PackageFamily
    """The host package manager family."""

    verbose: int = 0
    """The verbosity level."""

    debug: int = 0
    """The debug level."""

    freedesktop: bool = False
    """Whether a freedesktop.org compliant desktop environment is in use."""

    gnome: bool = False
    """Whether GNOME desktop settings can be managed."""

    home: Path | None = None
    """The user's home directory, if different from the current one."""

    @pydantic.field_validator("prefix")
    @classmethod
    def _expand_prefix(cls, prefix: Path) -> Path:
        return prefix.expanduser().absolute()

    @functools.cached_property
    def dirs(self) -> InstallDirs:
        """The locations used by the installation."""
        return InstallDirs(self.prefix, user=self.user, home=self.home)

    @property
    def repository(self) -> type[packages.BaseRepository]:
        """The package repository handler for the host."""
        return packages.get_repository(self.family)

    @classmethod
    def from_environment(
        cls,
        *,
        verbose: int = 0,
        debug: int = 0,
        environ: Mapping[str, str] | None = None,
        os_release: os_utils.OsRelease | None = None,
    ) -> InstallInfo:
        """Create the installation context from the process environment.

        Command line verbosity and debug levels are added to the levels set
        in ``ENB_INSTALLER_VERBOSE`` and ``ENB_INSTALLER_DEBUG``.

        :param verbose: The verbosity level requested on the command line.
        :param debug: The debug level requested on the command line.
        :param environ: The environment to read, defaults to ``os.environ``.
        :param os_release: The parsed os-release data of the host.

        :raises PackageFamilyNotSupported: If the host package manager
            family is not supported.
        """
        if environ is None:
            environ = os.environ

        family = packages.get_family(os_release)
        debug += _get_level(environ.get("ENB_INSTALLER_DEBUG"))
        verbose += _get_level(environ.get("ENB_INSTALLER_VERBOSE"))

        info = cls(
            prefix=get_prefix(environ),
            user=get_user(environ),
            family=family,
            verbose=max(verbose, debug),
            debug=debug,
            freedesktop=os_utils.is_freedesktop(environ),
            gnome=os_utils.is_gnome(environ),
        )
        logger.debug("install info: %r", info)
        return info


def get_prefix(environ: Mapping[str, str]) -> Path:
    """Return the Wine prefix selected by the environment."""
    prefix = Path(environ.get("WINEPREFIX") or DEFAULT_PREFIX)
    return prefix.expanduser().absolute()


def get_user(environ: Mapping[str, str]) -> str:
    """Return the name of the user running the installer."""
    return environ.get("USER") or getpass.getuser()


def _get_level(value: str | None) -> int:
    if not value:
        return 0
    try:
        return max(int(value), 0)
    except ValueError:
        return 1
