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

"""Generate registry fragments for the game settings and trusted certificate."""

import hashlib
import logging
import ssl
import struct
from collections.abc import Mapping
from pathlib import Path

from enb_installer.utils import file_utils

logger = logging.getLogger(__name__)

GAME_KEY = r"Software\Westwood Studios\Earth and Beyond"
REGISTRATION_KEY = GAME_KEY + r"\Registration"
RENDER_KEY = GAME_KEY + r"\Render"
SOUND_KEY = GAME_KEY + r"\Sound"
ROOT_CERTIFICATES_KEY = r"Software\Microsoft\SystemCertificates\Root\Certificates"

HKLM = "HKEY_LOCAL_MACHINE"
HKCU = "HKEY_CURRENT_USER"

# The game server, whose certificate is added to the trusted root store.
N7_SERVER_HOSTNAME = "sunrise.net-7.org"

# 1312x984 is a 4:3 windowed resolution that fits a 1920x1080 screen.
GAME_SETTINGS: dict[str, dict[str, int]] = {
    REGISTRATION_KEY: {
        "Enabled": 0,
        "Registered": 1,
    },
    RENDER_KEY: {
        "N7ConfigAutoDetectPerf": 1,
        "RenderDeviceDepth": 0x20,
        "RenderDeviceTextureDepth": 0x20,
        "RenderDeviceWidth": 0x520,
        "RenderDeviceHeight": 0x3D8,
        "RenderDeviceWindowed": 1,
        "SettingsTested": 1,
        "TextureFilter": 2,
    },
    SOUND_KEY: {
        "cinematic enabled": 1,
        "dialog enabled": 1,
        "music enabled": 1,
        "sound enabled": 1,
    },
}

# Certificate store property identifiers.
_CERT_SHA1_HASH_PROP_ID = 3
_CERT_CERT_PROP_ID = 32


def load_certificate(path: Path) -> bytes:
    """Read a PEM certificate and return its DER encoding."""
    return ssl.PEM_cert_to_DER_cert(path.read_text())


def get_thumbprint(der: bytes) -> str:
    """Return the SHA-1 thumbprint identifying a certificate in the store."""
    return hashlib.sha1(der).hexdigest().upper()  # noqa: S324


def certificate_key(der: bytes) -> str:
    """Return the root certificate store key of a certificate."""
    return rf"{ROOT_CERTIFICATES_KEY}\{get_thumbprint(der)}"


def certificate_blob(der: bytes) -> bytes:
    """Encode a certificate as a serialized certificate store entry.

    The entry holds the SHA-1 hash property followed by the certificate
    property, each as a little-endian (id, reserved, length) header and its
    data.
    """
    sha1 = hashlib.sha1(der).digest()  # noqa: S324
    return (
        struct.pack("<III", _CERT_SHA1_HASH_PROP_ID, 1, len(sha1))
        + sha1
        + struct.pack("<III", _CERT_CERT_PROP_ID, 1, len(der))
        + der
    )


def format_dword(name: str, value: int) -> str:
    """Format a DWORD registry value."""
    return f'"{name}"=dword:{value:08x}'


def format_hex(name: str, data: bytes, *, width: int = 80) -> str:
    """Format a binary registry value, wrapping lines as regedit does."""
    line = f'"{name}"=hex:'
    lines = []
    for index, byte in enumerate(data):
        item = f"{byte:02x}"
        if index < len(data) - 1:
            item += ","
        if len(line) + len(item) > width - 1:
            lines.append(line + "\\")
            line = "  "
        line += item
    lines.append(line)
    return "\n".join(lines)


def render_fragment(
    settings: Mapping[str, Mapping[str, int]], certificate_der: bytes
) -> str:
    """Render the registry fragment importing settings and the certificate.

    :param settings: DWORD values under HKEY_LOCAL_MACHINE, by key.
    :param certificate_der: The DER encoded certificate to trust.

    :return: The registry fragment in REGEDIT4 format.
    """
    sections = ["REGEDIT4"]
    for key, values in settings.items():
        section = [f"[{HKLM}\\{key}]"]
        section.extend(format_dword(name, value) for name, value in values.items())
        sections.append("\n".join(section))

    sections.append(
        f"[{HKCU}\\{certificate_key(certificate_der)}]\n"
        + format_hex("Blob", certificate_blob(certificate_der))
    )
    return "\n\n".join(sections) + "\n"


def write_fragment(certificate_der: bytes, *, name: str) -> Path:
    """Write the registry fragment to a temporary file removed at exit.

    :param certificate_der: The DER encoded certificate to trust.
    :param name: The fragment file name prefix.

    :return: The fragment file.
    """
    text = render_fragment(GAME_SETTINGS, certificate_der)
    path = file_utils.create_temporary(prefix=f"{name}.", suffix=".reg", text=text)
    logger.debug("registry fragment written to %s", path)
    return path
