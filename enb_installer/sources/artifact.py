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

"""Definition of downloaded artifacts."""

import logging
from pathlib import Path

import pydantic

from enb_installer.packages import BaseRepository
from enb_installer.utils import url_utils

from . import checksum, errors, fetch

logger = logging.getLogger(__name__)


class Artifact(pydantic.BaseModel):
    """A remote file downloaded into the installation environment."""

    model_config = pydantic.ConfigDict(frozen=True, extra="forbid")

    url: str
    """The remote location of the file."""

    path: Path
    """The local copy of the file."""

    sha256: str | None = None
    """The expected SHA-256 digest, if the file content is known."""

    @pydantic.field_validator("url")
    @classmethod
    def _validate_url(cls, url: str) -> str:
        if url_utils.get_url_scheme(url) not in ("http", "https"):
            raise ValueError(f"unsupported URL {url!r}")
        return url

    def is_present(self) -> bool:
        """Verify whether the artifact was already downloaded."""
        return self.path.exists()

    def download(self, repository: type[BaseRepository] | None = None) -> str:
        """Download and verify the artifact.

        An artifact that is already present is not downloaded again. If the
        expected digest is known and the file does not match it, the file is
        removed.

        :param repository: The host package repository handler.

        :return: The file digest.

        :raises ChecksumMismatch: If the file does not match the expected digest.
        """
        fetch.download(self.url, self.path)
        return self.verify(repository)

    def verify(self, repository: type[BaseRepository] | None = None) -> str:
        """Verify the local copy of the artifact.

        Artifacts without an expected digest only have their digest logged.
        A file that does not match the expected digest is removed, so the
        next run downloads it again.

        :param repository: The host package repository handler.

        :return: The file digest.

        :raises ChecksumMismatch: If the file does not match the expected digest.
        """
        if self.sha256 is None:
            digest, _ = checksum.verify(self.path, repository=repository)
            return digest

        try:
            return checksum.verify_checksum(
                self.path, self.sha256, repository=repository
            )
        except errors.ChecksumMismatch:
            logger.debug("removing corrupted file %s", self.path)
            self.path.unlink(missing_ok=True)
            raise
