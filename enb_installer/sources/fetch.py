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

"""Download remote files using the first available fetcher.

The ``curl`` and ``wget`` tools are preferred when present on the host;
the in-process fetcher based on :mod:`requests` is always available and is
used as the last resort.
"""

import abc
import logging
import os
from pathlib import Path

import requests
from overrides import overrides

from enb_installer.utils import os_utils, process, url_utils

from . import errors

logger = logging.getLogger(__name__)


class Fetcher(abc.ABC):
    """Retrieve a remote file into a local path."""

    name: str

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Verify whether this fetcher can be used on this host."""

    @abc.abstractmethod
    def fetch(self, url: str, destination: Path) -> None:
        """Download a file.

        :param url: The file URL.
        :param destination: The local file to create.
        """


class CurlFetcher(Fetcher):
    """Download files using curl."""

    name = "curl"

    @overrides
    def is_available(self) -> bool:
        return os_utils.find_executable("curl") is not None

    @overrides
    def fetch(self, url: str, destination: Path) -> None:
        process.run_checked(
            ["curl", "--fail", "--location", url, "--output", destination]
        )


class WgetFetcher(Fetcher):
    """Download files using wget."""

    name = "wget"

    @overrides
    def is_available(self) -> bool:
        return os_utils.find_executable("wget") is not None

    @overrides
    def fetch(self, url: str, destination: Path) -> None:
        process.run_checked(
            ["wget", "--no-verbose", "--output-document", destination, url]
        )


class RequestsFetcher(Fetcher):
    """Download files using the requests library."""

    name = "requests"

    @overrides
    def is_available(self) -> bool:
        return True

    @overrides
    def fetch(self, url: str, destination: Path) -> None:
        try:
            request = requests.get(url, stream=True, allow_redirects=True, timeout=3600)
            request.raise_for_status()
        except requests.exceptions.HTTPError as err:
            if err.response.status_code == requests.codes.not_found:
                raise errors.SourceNotFound(url) from err

            raise errors.HttpRequestError(
                url,
                status_code=err.response.status_code,
                reason=err.response.reason,
            ) from err
        except requests.exceptions.RequestException as err:
            raise errors.NetworkRequestError(
                f"network request failed (request={err.request!r}, "
                f"response={err.response!r})",
                url=url,
            ) from err

        url_utils.download_request(request, destination)


FETCHERS: list[Fetcher] = [CurlFetcher(), WgetFetcher(), RequestsFetcher()]


def get_fetcher() -> Fetcher:
    """Return the first available fetcher."""
    for fetcher in FETCHERS:
        if fetcher.is_available():
            logger.debug("using fetcher %s", fetcher.name)
            return fetcher

    # the requests fetcher is always available
    raise RuntimeError("no fetcher available")


def partial_path(destination: Path) -> Path:
    """Return the path a download is written to before it completes."""
    return destination.with_name(destination.name + ".part")


def download(url: str, destination: Path) -> bool:
    """Download a file unless it is already present.

    The file is written under a temporary name and moved into place once
    complete, so an interrupted download never leaves a file at
    ``destination``. The partial file is removed if the download fails.

    :param url: The file URL.
    :param destination: The local file to create.

    :return: Whether the file was downloaded.
    """
    if destination.exists():
        logger.debug("%s already present, not downloading", destination)
        return False

    destination.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s", url_utils.get_url_basename(url))
    partial = partial_path(destination)
    try:
        get_fetcher().fetch(url, partial)
        os.replace(partial, destination)
    except BaseException:
        partial.unlink(missing_ok=True)
        raise

    return True


def fetch_text(url: str) -> str:
    """Retrieve the content of a small remote text file.

    :param url: The file URL.

    :return: The file content.
    """
    try:
        response = requests.get(url, allow_redirects=True, timeout=60)
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        raise errors.HttpRequestError(
            url,
            status_code=err.response.status_code,
            reason=err.response.reason,
        ) from err
    except requests.exceptions.RequestException as err:
        raise errors.NetworkRequestError(str(err), url=url) from err

    return response.text
