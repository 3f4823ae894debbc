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

"""Exceptions raised by the downloaded artifacts handling subsystem."""

from pathlib import Path

from enb_installer.errors import InstallerError


class SourceError(InstallerError):
    """Base class for artifact handling errors."""


class ChecksumMismatch(SourceError):
    """A file digest doesn't match the expected value.

    :param path: The verified file.
    :param expected: The expected digest.
    :param obtained: The actual digest.
    """

    def __init__(self, *, path: Path, expected: str, obtained: str):
        self.path = path
        self.expected = expected
        self.obtained = obtained
        brief = (
            f"The SHA-256 digest of {str(path)!r} is invalid: "
            f"expected digest {expected}, obtained {obtained}."
        )
        details = (
            "This could be dangerous; it could be an incomplete or corrupted "
            "download or tampering."
        )
        resolution = "Check the file, remove it and run the installer again."

        super().__init__(brief=brief, details=details, resolution=resolution)


class NetworkRequestError(SourceError):
    """A network request operation failed.

    :param message: The error message.
    :param url: The requested URL.
    """

    def __init__(self, message: str, *, url: str):
        self.message = message
        self.url = url
        brief = f"Network request error while downloading {url!r}: {message}."
        resolution = "Check the network and try again."

        super().__init__(brief=brief, resolution=resolution)


class SourceNotFound(SourceError):
    """The remote file does not exist.

    :param url: The requested URL.
    """

    def __init__(self, url: str):
        self.url = url
        brief = f"Failed to download {url!r}: not found."

        super().__init__(brief=brief)


class HttpRequestError(SourceError):
    """The server answered a download request with an error.

    :param url: The requested URL.
    :param status_code: The HTTP status code.
    :param reason: The HTTP reason phrase.
    """

    def __init__(self, url: str, *, status_code: int, reason: str):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        brief = f"Failed to download {url!r}: {status_code} {reason}."
        resolution = "Check the network and try again."

        super().__init__(brief=brief, resolution=resolution)
