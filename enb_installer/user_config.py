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

"""Read and update the Net-7 launcher settings.

The launcher keeps its settings in a .NET ``user.config`` XML file, and
creates a new file, in a new directory, every time it is updated. The file
is edited as text to preserve the layout the launcher writes.
"""

import codecs
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from xml.sax import saxutils

logger = logging.getLogger(__name__)

USER_CONFIG_NAME = "user.config"

SETTINGS_END = "</LaunchNet7.Properties.Settings>"

# User preferences kept across launcher updates. ServerList is set upstream
# and must not be carried over.
MIGRATED_SETTINGS = [
    "ClientPath",
    "UseLocalCert",
    "UsePacketOpt",
    "UseExperimentalReorder",
    "DisableMouseLock",
    "LastServerName",
    "AuthenticationPort",
    "UseSecureAuthentication",
    "DebugLaunch",
    "SelectedIP",
    "ServerIndex",
    "LockPort",
    "EnBConfigPath",
    "CharCreatorPath",
    "DeleteTH6Files",
    "FormMainPosition",
]

_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_REVERSE_ENTITIES = {value: key for key, value in _ENTITIES.items()}


def _setting_pattern(key: str) -> re.Pattern:
    return re.compile(
        rf'<setting name="{re.escape(key)}"[^>]*?(?:/>|>.*?</setting>)', re.DOTALL
    )


def _render_setting(key: str, value: str) -> str:
    escaped = saxutils.escape(value, _ENTITIES)
    return (
        f'<setting name="{key}" serializeAs="String">\r\n'
        f"                <value>{escaped}</value>\r\n"
        f"            </setting>"
    )


def get_value(text: str, key: str) -> str:
    """Obtain the value of a setting.

    :param text: The settings file content.
    :param key: The setting name.

    :return: The setting value, or an empty string if the setting is
        missing or has no value.
    """
    match = _setting_pattern(key).search(text)
    if not match:
        return ""

    value = re.search(r"<value>(.*?)</value>", match.group(0), re.DOTALL)
    if not value:
        return ""

    return saxutils.unescape(value.group(1).strip(), _REVERSE_ENTITIES)


def set_value(text: str, key: str, value: str) -> str:
    """Update the value of a setting, or add it if missing.

    New settings are added at the end of the launcher settings section.

    :param text: The settings file content.
    :param key: The setting name.
    :param value: The new setting value.

    :return: The updated settings file content.

    :raises ValueError: If the settings section is missing.
    """
    setting = _render_setting(key, value)
    text, count = _setting_pattern(key).subn(lambda _: setting, text, count=1)
    if count:
        return text

    if SETTINGS_END not in text:
        raise ValueError(f"settings section {SETTINGS_END!r} not found")

    return text.replace(
        SETTINGS_END, f"    {setting}\r\n        {SETTINGS_END}", 1
    )


class UserConfigFile:
    """A launcher settings file.

    :param path: The ``user.config`` file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        data = path.read_bytes()
        self._bom = data.startswith(codecs.BOM_UTF8)
        self.text = data.decode("utf-8-sig")

    def get(self, key: str) -> str:
        """Obtain the value of a setting, or an empty string."""
        return get_value(self.text, key)

    def set(self, key: str, value: str) -> None:
        """Update or add a setting."""
        self.text = set_value(self.text, key, value)

    def save(self) -> None:
        """Write the settings back to the file."""
        data = self.text.encode("utf-8")
        if self._bom:
            data = codecs.BOM_UTF8 + data
        self.path.write_bytes(data)


def find_user_configs(config_dir: Path) -> list[Path]:
    """List the launcher settings files, oldest first."""
    if not config_dir.is_dir():
        return []

    configs = [path for path in config_dir.rglob(USER_CONFIG_NAME) if path.is_file()]
    return sorted(configs, key=lambda path: (path.stat().st_mtime, str(path)))


def get_latest_user_config(config_dir: Path) -> Path | None:
    """Return the most recently modified launcher settings file."""
    configs = find_user_configs(config_dir)
    return configs[-1] if configs else None


def get_sentinel(config_path: Path) -> Path:
    """Return the marker recording that a settings file was configured."""
    return config_path.with_name(f".{config_path.name}.seen")


def migrate(config_dir: Path, defaults: Mapping[str, str]) -> bool:
    """Configure a settings file created by a launcher update.

    The most recent settings file is configured only once: the given
    defaults are applied, then preferences set in the previous settings file
    are copied over.

    :param config_dir: The launcher settings directory.
    :param defaults: Settings to apply to new settings files.

    :return: Whether a settings file was configured.
    """
    configs = find_user_configs(config_dir)
    if not configs:
        return False

    latest = configs[-1]
    sentinel = get_sentinel(latest)
    if sentinel.exists():
        return False

    previous = configs[-2] if len(configs) > 1 else None

    logger.info("Configuring new %r", str(latest))
    config = UserConfigFile(latest)
    for key, value in defaults.items():
        config.set(key, value)

    if previous:
        logger.info("Migrating previous %r into new %r", str(previous), str(latest))
        previous_config = UserConfigFile(previous)
        for key in MIGRATED_SETTINGS:
            previous_value = previous_config.get(key)
            current_value = config.get(key)
            if previous_value and previous_value != current_value:
                logger.info(
                    "Migrating previous setting %s=%r, replacing %r",
                    key,
                    previous_value,
                    current_value,
                )
                config.set(key, previous_value)

    config.save()
    sentinel.touch()
    return True
