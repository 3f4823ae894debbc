# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2016-2025 Canonical Ltd.
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

"""File-related helpers."""

import atexit
import contextlib
import hashlib
import logging
import os
import stat
import tempfile
from collections.abc import Generator
from pathlib import Path

logger = logging.getLogger(__name__)


def calculate_hash(filename: Path, *, algorithm: str) -> str:
    """Calculate the hash of the given file.

    :param filename: The path to the file to digest.
    :param algorithm: The algorithm to use, as defined by ``hashlib``.

    :return: The file hash.

    :raise ValueError: If the algorithm is unsupported.
    """
    if algorithm not in hashlib.algorithms_available:
        raise ValueError(f"unsupported algorithm {algorithm!r}")

    hasher = hashlib.new(algorithm)

    for block in _file_reader_iter(filename):
        hasher.update(block)
    return hasher.hexdigest()


def _file_reader_iter(
    path: Path, block_size: int = 2**20
) -> Generator[bytes, None, None]:
    """Read a file in blocks.

    :param path: The path to the file to read.
    :param block_size: The size of the block to read, default is 1MiB.
    """
    with path.open("rb") as file:
        block = file.read(block_size)
        while len(block) > 0:
            yield block
            block = file.read(block_size)


def is_executable(path: Path) -> bool:
    """Verify whether a file exists and is executable by the current user."""
    return path.is_file() and os.access(path, os.X_OK)


def make_executable(path: Path) -> None:
    """Add execute permission for everyone, like ``chmod a+x``."""
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def points_to(link: Path, target: Path) -> bool:
    """Verify whether ``link`` is a symbolic link to ``target``."""
    return link.is_symlink() and Path(os.readlink(link)) == target


def replace_symlink(link: Path, target: Path) -> None:
    """Create a symbolic link, replacing an existing link at the same path."""
    if link.is_symlink():
        link.unlink()
    link.symlink_to(target)


def register_temporary(path: Path) -> None:
    """Remove the given file when the process exits, ignoring errors."""

    def _remove() -> None:
        with contextlib.suppress(OSError):
            path.unlink()
            logger.debug("removed temporary file %s", path)

    atexit.register(_remove)


def create_temporary(*, prefix: str, suffix: str = "", text: str = "") -> Path:
    """Create a temporary file registered for removal at exit.

    :param prefix: The file name prefix.
    :param suffix: The file name suffix.
    :param text: The initial file content.

    :return: The path to the temporary file.
    """
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    path = Path(name)
    register_temporary(path)
    with os.fdopen(fd, "w") as file:
        file.write(text)

    return path
