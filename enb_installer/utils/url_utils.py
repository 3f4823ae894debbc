# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2021-2025 Canonical Ltd.
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

"""URL parsing and downloading helpers."""

import logging
import urllib.parse
from pathlib import Path

import requests

logger = logging.getLogger(__name__)


def get_url_scheme(url: str) -> str:
    """Return the given URL's scheme."""
    return urllib.parse.urlparse(url).scheme


def get_url_basename(url: str) -> str:
    """Return the last component of the given URL's path."""
    return Path(urllib.parse.urlparse(url).path).name


def download_request(request: requests.Response, destination: Path) -> None:
    """Write the content of a streamed request to a file.

    :param request: The URL download request.
    :param destination: The destination file name.
    """
    total_length = int(request.headers.get("Content-Length", "0"))
    logger.debug("Downloading %r (%d bytes)", str(destination), total_length)

    with destination.open("wb") as destination_file:
        for buf in request.iter_content(1024):
            destination_file.write(buf)
