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

"""Helpers to compute and verify file checksums.

Digests are computed by the first content hashing tool available on the
host. If none is found, the tool is installed using the host package manager
and the lookup is attempted once more.
"""

import abc
import logging
from pathlib import Path

from overrides import overrides

from enb_installer import errors as installer_errors
from enb_installer.packages import BaseRepository
from enb_installer.utils import os_utils, process

from . import errors

logger = logging.getLogger(__name__)

# Package providing sha256sum on every supported family.
HASHER_PACKAGE = "coreutils"


class ContentHasher(abc.ABC):
    """A tool that computes SHA-256 file digests."""

    executable: str

    def is_available(self) -> bool:
        """Verify whether the hashing tool can be used on this host."""
        return os_utils.find_executable(self.executable) is not None

    def digest(self, path: Path) -> str:
        """Compute the digest of a file.

        :param path: The file to digest.

        :return: The digest as a lowercase hexadecimal string.

        :raises CommandError: If the hashing tool fails.
        """
        result = process.run_checked(self.get_command(path))
        return self.parse(result.output)

    @abc.abstractmethod
    def get_command(self, path: Path) -> list[str]:
        """Return the command computing the digest of the given file."""

    def parse(self, output: str) -> str:
        """Extract the digest from the tool output."""
        return output.split()[0].lower()


class Sha256sumHasher(ContentHasher):
    """Digests computed by GNU coreutils."""

    executable = "sha256sum"

    @overrides
    def get_command(self, path: Path) -> list[str]:
        return [self.executable, str(path)]


class Sha256Hasher(ContentHasher):
    """Digests computed by the BSD ``sha256`` tool."""

    executable = "sha256"

    @overrides
    def get_command(self, path: Path) -> list[str]:
        return [self.executable, "-q", str(path)]

    @overrides
    def parse(self, output: str) -> str:
        return output.strip().lower()


class ShasumHasher(ContentHasher):
    """Digests computed by the Perl ``shasum`` tool."""

    executable = "shasum"

    @overrides
    def get_command(self, path: Path) -> list[str]:
        return [self.executable, "-a", "256", str(path)]


HASHERS: list[ContentHasher] = [Sha256sumHasher(), Sha256Hasher(), ShasumHasher()]


def get_hasher(repository: type[BaseRepository] | None = None) -> ContentHasher:
    """Return the first available content hasher.

    :param repository: The host package repository handler, used to install
        a hashing tool if none is available.

    :raises ToolUnavailable: If no hashing tool is available.
    """
    hasher = _find_hasher()
    if hasher:
        return hasher

    if repository:
        logger.info("No checksum tool found, attempting to install %s...", HASHER_PACKAGE)
        repository.install_packages([HASHER_PACKAGE])
        hasher = _find_hasher()
        if hasher:
            return hasher

    raise installer_errors.ToolUnavailable(
        "sha256sum",
        resolution="Install sha256sum, sha256 or shasum and try again.",
    )


def _find_hasher() -> ContentHasher | None:
    for hasher in HASHERS:
        if hasher.is_available():
            logger.debug("using content hasher %s", hasher.executable)
            return hasher
    return None


def verify(
    path: Path,
    expected: str | None = None,
    *,
    repository: type[BaseRepository] | None = None,
) -> tuple[str, bool]:
    """Compute the digest of a file and compare it to the expected value.

    :param path: The file to verify.
    :param expected: The expected SHA-256 digest, if known.
    :param repository: The host package repository handler.

    :return: A tuple consisting of the digest and whether it matches the
        expected value. A file without an expected digest always matches.
    """
    digest = get_hasher(repository).digest(path)
    logger.info("sha256 %s: %s", path.name, digest)
    if expected is None:
        return digest, True

    return digest, digest == expected.lower()


def verify_checksum(
    path: Path,
    expected: str,
    *,
    repository: type[BaseRepository] | None = None,
) -> str:
    """Verify that a file matches the expected digest.

    :param path: The file to verify.
    :param expected: The expected SHA-256 digest.
    :param repository: The host package repository handler.

    :return: The file digest.

    :raises ChecksumMismatch: If the file does not match the expected digest.
    """
    digest, matched = verify(path, expected, repository=repository)
    if not matched:
        raise errors.ChecksumMismatch(path=path, expected=expected, obtained=digest)

    return digest
