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

import pytest
from enb_installer.packages import PackageFamily, errors, get_family, get_repository
from enb_installer.packages.deb import AptRepository
from enb_installer.packages.dnf import DNFRepository
from enb_installer.packages.pacman import PacmanRepository
from enb_installer.packages.portage import PortageRepository
from enb_installer.packages.zypper import ZypperRepository
from enb_installer.utils import os_utils


def _os_release(tmp_path, content: str) -> os_utils.OsRelease:
    os_release = tmp_path / "os-release"
    os_release.write_text(content)
    return os_utils.OsRelease(os_release_file=str(os_release))


@pytest.mark.parametrize(
    ("content", "family"),
    [
        ('ID=ubuntu\nID_LIKE=debian\n', PackageFamily.DEBIAN),
        ("ID=debian\n", PackageFamily.DEBIAN),
        ("ID=linuxmint\nID_LIKE='ubuntu debian'\n", PackageFamily.DEBIAN),
        ("ID=manjaro\nID_LIKE=arch\n", PackageFamily.ARCH),
        ("ID=arch\n", PackageFamily.ARCH),
        ("ID=gentoo\n", PackageFamily.GENTOO),
        ('ID="rocky"\nID_LIKE="rhel centos fedora"\n', PackageFamily.RHEL),
        ("ID=fedora\n", PackageFamily.RHEL),
        ('ID="opensuse-leap"\nID_LIKE="suse opensuse"\n', PackageFamily.SUSE),
        ("ID=opensuse-tumbleweed\n", PackageFamily.SUSE),
    ],
)
def test_get_family(tmp_path, content, family):
    assert get_family(_os_release(tmp_path, content)) == family


def test_get_family_id_like_first(tmp_path):
    os_release = _os_release(tmp_path, "ID=fedora-remix\nID_LIKE=debian\n")
    assert get_family(os_release) == PackageFamily.DEBIAN


def test_get_family_unsupported(tmp_path):
    os_release = _os_release(tmp_path, "ID=alpine\n")

    with pytest.raises(errors.PackageFamilyNotSupported) as raised:
        get_family(os_release)

    assert raised.value.os_id == "alpine"
    assert raised.value.id_like == []
    assert raised.value.exit_code == 1
    assert str(raised.value).startswith("Unknown OS ID:alpine ID_LIKE:")


def test_get_family_missing_os_release(tmp_path):
    os_release = os_utils.OsRelease(os_release_file=str(tmp_path / "missing"))

    with pytest.raises(errors.PackageFamilyNotSupported) as raised:
        get_family(os_release)

    assert raised.value.os_id == "unknown"


@pytest.mark.parametrize(
    ("family", "repository"),
    [
        (PackageFamily.ARCH, PacmanRepository),
        (PackageFamily.DEBIAN, AptRepository),
        (PackageFamily.GENTOO, PortageRepository),
        (PackageFamily.RHEL, DNFRepository),
        (PackageFamily.SUSE, ZypperRepository),
    ],
)
def test_get_repository(family, repository):
    assert get_repository(family) is repository
    assert repository.family == family


def test_family_str():
    assert str(PackageFamily.DEBIAN) == "debian"
    assert PackageFamily("suse") == PackageFamily.SUSE
