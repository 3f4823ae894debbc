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

from pathlib import Path

import pytest
from enb_installer import errors
from enb_installer.packages.deb import AptRepository
from enb_installer.sources import checksum
from enb_installer.sources.errors import ChecksumMismatch

DIGEST = "a" * 64


@pytest.fixture
def available(mocker):
    """Make the given hashing tools available."""

    def _available(*names):
        mocker.patch(
            "enb_installer.utils.os_utils.find_executable",
            side_effect=lambda name: Path(f"/usr/bin/{name}") if name in names else None,
        )

    return _available


@pytest.mark.parametrize(
    ("hasher", "command", "output"),
    [
        (checksum.Sha256sumHasher(), ["sha256sum", "f"], f"{DIGEST}  f\n"),
        (checksum.Sha256Hasher(), ["sha256", "-q", "f"], f"{DIGEST}\n"),
        (checksum.ShasumHasher(), ["shasum", "-a", "256", "f"], f"{DIGEST.upper()}  f\n"),
    ],
)
def test_hasher_digest(fake_process, hasher, command, output):
    fake_process.register(command, stdout=output)

    assert hasher.digest(Path("f")) == DIGEST


def test_hasher_failure(fake_process):
    fake_process.register(["sha256sum", "f"], stdout="no such file", returncode=1)

    with pytest.raises(errors.CommandError):
        checksum.Sha256sumHasher().digest(Path("f"))


@pytest.mark.parametrize(
    ("names", "executable"),
    [
        (["sha256sum", "sha256", "shasum"], "sha256sum"),
        (["sha256", "shasum"], "sha256"),
        (["shasum"], "shasum"),
    ],
)
def test_get_hasher_order(available, names, executable):
    available(*names)

    assert checksum.get_hasher().executable == executable


def test_get_hasher_installs_tool(mocker):
    install = mocker.patch.object(AptRepository, "install_packages")
    mocker.patch(
        "enb_installer.utils.os_utils.find_executable",
        side_effect=[None, None, None, Path("/usr/bin/sha256sum")],
    )

    hasher = checksum.get_hasher(AptRepository)

    assert hasher.executable == "sha256sum"
    install.assert_called_once_with(["coreutils"])


def test_get_hasher_install_retried_once(mocker, available):
    available()
    install = mocker.patch.object(AptRepository, "install_packages")

    with pytest.raises(errors.ToolUnavailable) as raised:
        checksum.get_hasher(AptRepository)

    assert raised.value.tool == "sha256sum"
    install.assert_called_once()


def test_get_hasher_unavailable(available):
    available()

    with pytest.raises(errors.ToolUnavailable):
        checksum.get_hasher()


class TestVerify:
    @pytest.fixture(autouse=True)
    def fake_hasher(self, mocker):
        mocker.patch.object(checksum, "get_hasher", return_value=checksum.Sha256sumHasher())

    def test_verify_without_expected(self, fake_process):
        fake_process.register(["sha256sum", "f"], stdout=f"{DIGEST}  f\n")

        assert checksum.verify(Path("f")) == (DIGEST, True)

    def test_verify_matched(self, fake_process):
        fake_process.register(["sha256sum", "f"], stdout=f"{DIGEST}  f\n")

        assert checksum.verify(Path("f"), DIGEST.upper()) == (DIGEST, True)

    def test_verify_not_matched(self, fake_process):
        fake_process.register(["sha256sum", "f"], stdout=f"{DIGEST}  f\n")

        assert checksum.verify(Path("f"), "b" * 64) == (DIGEST, False)

    def test_verify_checksum(self, fake_process):
        fake_process.register(["sha256sum", "f"], stdout=f"{DIGEST}  f\n")

        assert checksum.verify_checksum(Path("f"), DIGEST) == DIGEST

    def test_verify_checksum_mismatch(self, fake_process):
        fake_process.register(["sha256sum", "f"], stdout=f"{DIGEST}  f\n")

        with pytest.raises(ChecksumMismatch) as raised:
            checksum.verify_checksum(Path("f"), "b" * 64)

        err = raised.value
        assert err.expected == "b" * 64
        assert err.obtained == DIGEST
        assert "tampering" in str(err)
        assert err.exit_code == 1
