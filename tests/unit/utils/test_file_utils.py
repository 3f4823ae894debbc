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

import hashlib
import os
import stat
from pathlib import Path

import pytest
from enb_installer.utils import file_utils


def test_calculate_hash(new_dir):
    path = Path("file")
    path.write_bytes(b"earth and beyond")

    digest = file_utils.calculate_hash(path, algorithm="sha256")

    assert digest == hashlib.sha256(b"earth and beyond").hexdigest()


def test_calculate_hash_unsupported(new_dir):
    path = Path("file")
    path.touch()

    with pytest.raises(ValueError, match="unsupported algorithm 'nope'"):
        file_utils.calculate_hash(path, algorithm="nope")


def test_make_executable(new_dir):
    path = Path("script.sh")
    path.write_text("#!/bin/sh\n")
    path.chmod(0o644)

    assert file_utils.is_executable(path) is False

    file_utils.make_executable(path)

    assert stat.S_IMODE(path.stat().st_mode) == 0o755
    assert file_utils.is_executable(path) is True


def test_is_executable_missing(new_dir):
    assert file_utils.is_executable(Path("missing")) is False


def test_points_to(new_dir):
    target = Path("target")
    target.touch()
    Path("link").symlink_to(target)

    assert file_utils.points_to(Path("link"), target) is True
    assert file_utils.points_to(Path("link"), Path("other")) is False
    assert file_utils.points_to(target, target) is False


def test_points_to_dangling_link(new_dir):
    Path("link").symlink_to("missing")

    assert file_utils.points_to(Path("link"), Path("missing")) is True


def test_replace_symlink(new_dir):
    old = Path("old")
    new = Path("new")
    old.touch()
    new.touch()
    link = Path("link")
    link.symlink_to(old)

    file_utils.replace_symlink(link, new)

    assert os.readlink(link) == "new"


def test_replace_symlink_does_not_replace_files(new_dir):
    Path("file").touch()

    with pytest.raises(FileExistsError):
        file_utils.replace_symlink(Path("file"), Path("target"))


def test_create_temporary(mocker):
    register = mocker.patch("atexit.register")

    path = file_utils.create_temporary(prefix="n7install_", suffix=".verb", text="x")

    assert path.name.startswith("n7install_")
    assert path.name.endswith(".verb")
    assert path.read_text() == "x"
    register.assert_called_once()

    remove = register.call_args.args[0]
    remove()
    assert path.exists() is False
    # removing twice is harmless
    remove()
