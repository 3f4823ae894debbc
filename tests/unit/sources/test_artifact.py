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

import pydantic
import pytest
from enb_installer.sources import Artifact, checksum, fetch
from enb_installer.sources.errors import ChecksumMismatch

URL = "https://example.com/files/CharacterStarshipCreator.exe"
CONTENT = b"character creator"
DIGEST = hashlib.sha256(CONTENT).hexdigest()


@pytest.fixture(autouse=True)
def fake_tools(mocker, fake_process):
    """Download with requests and compute digests with sha256sum."""
    mocker.patch.object(fetch.CurlFetcher, "is_available", return_value=False)
    mocker.patch.object(fetch.WgetFetcher, "is_available", return_value=False)
    mocker.patch.object(checksum, "get_hasher", return_value=checksum.Sha256sumHasher())


def _register_digest(fake_process, path, digest):
    fake_process.register(["sha256sum", str(path)], stdout=f"{digest}  {path}\n")


def test_artifact_invalid_url(new_dir):
    with pytest.raises(pydantic.ValidationError):
        Artifact(url="ftp://example.com/f.exe", path=new_dir / "f.exe")


def test_artifact_frozen(new_dir):
    artifact = Artifact(url=URL, path=new_dir / "f.exe")

    with pytest.raises(pydantic.ValidationError):
        artifact.sha256 = DIGEST  # type: ignore[misc]


def test_download(new_dir, requests_mock, fake_process):
    path = new_dir / "csc" / "CharacterStarshipCreator.exe"
    requests_mock.get(URL, content=CONTENT)
    _register_digest(fake_process, path, DIGEST)
    artifact = Artifact(url=URL, path=path, sha256=DIGEST)

    assert artifact.is_present() is False
    assert artifact.download() == DIGEST
    assert artifact.is_present() is True
    assert path.read_bytes() == CONTENT


def test_download_present_is_verified(new_dir, requests_mock, fake_process):
    path = new_dir / "CharacterStarshipCreator.exe"
    path.write_bytes(CONTENT)
    _register_digest(fake_process, path, DIGEST)
    artifact = Artifact(url=URL, path=path, sha256=DIGEST)

    assert artifact.download() == DIGEST
    assert requests_mock.call_count == 0


def test_download_mismatch_removes_file(new_dir, requests_mock, fake_process):
    path = new_dir / "CharacterStarshipCreator.exe"
    requests_mock.get(URL, content=b"tampered")
    _register_digest(fake_process, path, "0" * 64)
    artifact = Artifact(url=URL, path=path, sha256=DIGEST)

    with pytest.raises(ChecksumMismatch):
        artifact.download()

    assert path.exists() is False


def test_verify_mismatch_removes_file(new_dir, fake_process):
    path = new_dir / "CharacterStarshipCreator.exe"
    path.write_bytes(b"tampered")
    _register_digest(fake_process, path, "0" * 64)
    artifact = Artifact(url=URL, path=path, sha256=DIGEST)

    with pytest.raises(ChecksumMismatch):
        artifact.verify()

    assert path.exists() is False


def test_verify_without_digest(new_dir, fake_process):
    path = new_dir / "Net-7_Install.exe"
    path.write_bytes(b"anything")
    _register_digest(fake_process, path, "1" * 64)
    artifact = Artifact(url=URL, path=path)

    assert artifact.verify() == "1" * 64
