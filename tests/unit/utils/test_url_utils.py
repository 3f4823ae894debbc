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
import requests
from enb_installer.utils import url_utils


@pytest.mark.parametrize(
    ("url", "scheme"),
    [
        ("https://example.com/file.exe", "https"),
        ("http://example.com/file.exe", "http"),
        ("ftp://example.com/file.exe", "ftp"),
        ("file.exe", ""),
    ],
)
def test_get_url_scheme(url, scheme):
    assert url_utils.get_url_scheme(url) == scheme


@pytest.mark.parametrize(
    ("url", "basename"),
    [
        ("https://example.com/path/eandb_demo.exe", "eandb_demo.exe"),
        ("https://example.com/path/Net-7_Install.exe?dl=1", "Net-7_Install.exe"),
        ("https://example.com/", ""),
    ],
)
def test_get_url_basename(url, basename):
    assert url_utils.get_url_basename(url) == basename


def test_download_request(new_dir, requests_mock):
    requests_mock.get("https://example.com/file", content=b"x" * 3000)
    request = requests.get("https://example.com/file", stream=True, timeout=10)

    url_utils.download_request(request, new_dir / "file")

    assert (new_dir / "file").read_bytes() == b"x" * 3000
