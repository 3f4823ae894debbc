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

import codecs
import os
from pathlib import Path

import pytest
from enb_installer import user_config

_CONFIG = (
    '<?xml version="1.0" encoding="utf-8"?>\r\n'
    "<configuration>\r\n"
    "    <userSettings>\r\n"
    "        <LaunchNet7.Properties.Settings>\r\n"
    '            <setting name="ServerList" serializeAs="String">\r\n'
    "                <value>sunrise.net-7.org</value>\r\n"
    "            </setting>\r\n"
    '            <setting name="UsePacketOpt" serializeAs="String">\r\n'
    "                <value>True</value>\r\n"
    "            </setting>\r\n"
    '            <setting name="LastServerName" serializeAs="String">\r\n'
    "                <value />\r\n"
    "            </setting>\r\n"
    "        </LaunchNet7.Properties.Settings>\r\n"
    "    </userSettings>\r\n"
    "</configuration>"
)


def _write_config(path: Path, text: str = _CONFIG, *, mtime: float | None = None):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(codecs.BOM_UTF8 + text.encode())
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


class TestValues:
    def test_get_value(self):
        assert user_config.get_value(_CONFIG, "UsePacketOpt") == "True"

    def test_get_value_empty(self):
        assert user_config.get_value(_CONFIG, "LastServerName") == ""

    def test_get_value_missing(self):
        assert user_config.get_value(_CONFIG, "DisableMouseLock") == ""

    def test_get_value_does_not_match_prefix(self):
        assert user_config.get_value(_CONFIG, "UsePacket") == ""

    def test_set_value_new(self):
        text = user_config.set_value(_CONFIG, "DisableMouseLock", "False")

        assert user_config.get_value(text, "DisableMouseLock") == "False"
        assert text.count('name="DisableMouseLock"') == 1
        assert (
            '            <setting name="DisableMouseLock" serializeAs="String">\r\n'
            "                <value>False</value>\r\n"
            "            </setting>\r\n"
            "        </LaunchNet7.Properties.Settings>"
        ) in text

    def test_set_value_existing(self):
        text = user_config.set_value(_CONFIG, "UsePacketOpt", "False")

        assert user_config.get_value(text, "UsePacketOpt") == "False"
        assert text.count('name="UsePacketOpt"') == 1
        assert user_config.get_value(text, "ServerList") == "sunrise.net-7.org"

    def test_set_value_self_closing(self):
        text = user_config.set_value(_CONFIG, "LastServerName", "Sunrise")

        assert user_config.get_value(text, "LastServerName") == "Sunrise"
        assert text.count('name="LastServerName"') == 1

    def test_set_value_twice(self):
        text = user_config.set_value(_CONFIG, "SelectedIP", "1")
        text = user_config.set_value(text, "SelectedIP", "2")

        assert user_config.get_value(text, "SelectedIP") == "2"
        assert text.count('name="SelectedIP"') == 1

    @pytest.mark.parametrize(
        "value",
        [
            r"C:\Program Files\EA GAMES\Earth & Beyond\release\client.exe",
            "<b>\"quoted\" 'single'</b>",
            r"\1 \g<0>",
        ],
    )
    def test_set_value_escaping(self, value):
        text = user_config.set_value(_CONFIG, "ClientPath", value)

        assert user_config.get_value(text, "ClientPath") == value
        assert "& " not in text.split("ClientPath")[1].split("</setting>")[0]

    def test_set_value_without_settings_section(self):
        with pytest.raises(ValueError, match="not found"):
            user_config.set_value("<configuration />", "ClientPath", "x")


class TestUserConfigFile:
    def test_bom_preserved(self, new_dir):
        path = _write_config(new_dir / "user.config")

        config = user_config.UserConfigFile(path)
        config.set("DisableMouseLock", "True")
        config.save()

        data = path.read_bytes()
        assert data.startswith(codecs.BOM_UTF8)
        assert data.count(codecs.BOM_UTF8) == 1
        assert user_config.UserConfigFile(path).get("DisableMouseLock") == "True"

    def test_no_bom(self, new_dir):
        path = new_dir / "user.config"
        path.write_bytes(_CONFIG.encode())

        config = user_config.UserConfigFile(path)
        config.save()

        assert path.read_bytes() == _CONFIG.encode()


class TestUserConfigs:
    def test_find_user_configs(self, new_dir):
        newer = _write_config(new_dir / "b" / "1.0.1" / "user.config", mtime=2000)
        older = _write_config(new_dir / "a" / "1.0.0" / "user.config", mtime=1000)
        (new_dir / "a" / "other.config").touch()

        assert user_config.find_user_configs(new_dir) == [older, newer]
        assert user_config.get_latest_user_config(new_dir) == newer

    def test_find_user_configs_missing_dir(self, new_dir):
        assert user_config.find_user_configs(new_dir / "missing") == []
        assert user_config.get_latest_user_config(new_dir / "missing") is None

    def test_get_sentinel(self):
        path = Path("/config/1.0/user.config")
        assert user_config.get_sentinel(path) == Path("/config/1.0/.user.config.seen")


class TestMigrate:
    def test_no_config(self, new_dir):
        assert user_config.migrate(new_dir, {"ClientPath": "x"}) is False

    def test_first_config(self, new_dir):
        path = _write_config(new_dir / "1.0" / "user.config")

        assert user_config.migrate(new_dir, {"ClientPath": "client.exe"}) is True

        config = user_config.UserConfigFile(path)
        assert config.get("ClientPath") == "client.exe"
        assert user_config.get_sentinel(path).exists()

    def test_runs_once(self, new_dir):
        path = _write_config(new_dir / "1.0" / "user.config")
        user_config.migrate(new_dir, {"ClientPath": "client.exe"})
        config = user_config.UserConfigFile(path)
        config.set("ClientPath", "changed.exe")
        config.save()

        assert user_config.migrate(new_dir, {"ClientPath": "client.exe"}) is False
        assert user_config.UserConfigFile(path).get("ClientPath") == "changed.exe"

    def test_allow_list(self, new_dir):
        previous_text = _CONFIG
        for key, value in [
            ("DisableMouseLock", "True"),
            ("SelectedIP", "2"),
            ("NotMigrated", "1"),
        ]:
            previous_text = user_config.set_value(previous_text, key, value)
        previous_text = user_config.set_value(previous_text, "ServerList", "old")
        previous = _write_config(new_dir / "1.0" / "user.config", previous_text, mtime=1000)
        user_config.get_sentinel(previous).touch()
        latest = _write_config(new_dir / "1.1" / "user.config", mtime=2000)

        assert user_config.migrate(new_dir, {"DisableMouseLock": "False"}) is True

        config = user_config.UserConfigFile(latest)
        assert config.get("DisableMouseLock") == "True"
        assert config.get("SelectedIP") == "2"
        assert config.get("NotMigrated") == ""
        assert config.get("ServerList") == "sunrise.net-7.org"
        assert config.get("UsePacketOpt") == "True"

    def test_empty_previous_values_not_copied(self, new_dir):
        previous_text = user_config.set_value(_CONFIG, "UsePacketOpt", "")
        _write_config(new_dir / "1.0" / "user.config", previous_text, mtime=1000)
        latest = _write_config(new_dir / "1.1" / "user.config", mtime=2000)

        user_config.migrate(new_dir, {})

        assert user_config.UserConfigFile(latest).get("UsePacketOpt") == "True"
