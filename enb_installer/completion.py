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

"""Predicates deciding whether the goal state of a step already holds.

All predicates are read-only: they inspect files or query the package
manager, and never change the host or the environment.
"""

import hashlib
import logging
import time
from pathlib import Path

from enb_installer.packages import BaseRepository
from enb_installer.utils import file_utils

logger = logging.getLogger(__name__)

# Refresh interval of self-updating helper tools, in seconds.
FRESHNESS_LIMIT = 2 * 24 * 60 * 60


def path_exists(path: Path) -> bool:
    """Verify whether a file, directory or link target exists."""
    exists = path.exists()
    logger.debug("path %s exists: %s", path, exists)
    return exists


def package_installed(
    repository: type[BaseRepository], name: str, *, extra: bool = False
) -> bool:
    """Verify whether a package is installed on the host.

    :param repository: The host package repository handler.
    :param name: The package name.
    :param extra: Query the secondary package source.
    """
    installed = repository.is_package_installed(name, extra=extra)
    logger.debug("package %r installed: %s", name, installed)
    return installed


def is_fresh(path: Path, *, max_age: float = FRESHNESS_LIMIT) -> bool:
    """Verify whether a marker file exists and was modified recently.

    :param path: The marker file.
    :param max_age: The maximum age of the file, in seconds.
    """
    try:
        mtime = path.stat().st_mtime
    except FileNotFoundError:
        return False

    return mtime >= time.time() - max_age


def log_contains(log_path: Path, entry: str) -> bool:
    """Verify whether a log of applied operations records an entry.

    Each line of the log records one entry.

    :param log_path: The log file.
    :param entry: The entry to look for.
    """
    try:
        with log_path.open(encoding="utf-8", errors="replace") as log:
            return any(line.strip() == entry for line in log)
    except FileNotFoundError:
        return False


def content_matches(path: Path, expected: str) -> bool:
    """Verify whether a generated file has the expected content.

    :param path: The generated file.
    :param expected: The expected file content.
    """
    if not path.is_file():
        return False

    actual = file_utils.calculate_hash(path, algorithm="sha256")
    return actual == hashlib.sha256(expected.encode()).hexdigest()


def registry_contains(registry_path: Path, key: str) -> bool:
    """Verify whether a Wine registry hive file contains a key.

    Keys are written to hive files with doubled backslashes and are matched
    case-insensitively, as they are in the Windows registry.

    :param registry_path: The hive file, ``system.reg`` or ``user.reg``.
    :param key: The key path relative to the hive root, with single
        backslashes.
    """
    hive_key = "[" + key.replace("\\", "\\\\").lower() + "]"
    try:
        with registry_path.open(encoding="utf-8", errors="replace") as hive:
            return any(line.lower().startswith(hive_key) for line in hive)
    except FileNotFoundError:
        return False
