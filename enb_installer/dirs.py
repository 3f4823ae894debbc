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

"""Definitions for installation directories."""

from pathlib import Path, PureWindowsPath

from xdg import BaseDirectory  # type: ignore[import]

# The installers and the Net-7 launcher expect these locations.
_ENB_WINDOWS_DIR = PureWindowsPath(r"C:\Program Files\EA GAMES\Earth & Beyond")
_N7_WINDOWS_DIR = PureWindowsPath(r"C:\Program Files\Net-7")


class InstallDirs:
    """The locations used by the installation.

    Host-side locations are :class:`pathlib.Path` objects, locations as seen
    by Windows programs running in the prefix are
    :class:`pathlib.PureWindowsPath` objects.

    :param prefix: The root of the isolated Windows application environment.
    :param user: The name of the user owning the environment.
    :param home: The user's home directory.
    :param data_home: The XDG data directory.
    :param config_home: The XDG configuration directory.
    :param cache_home: The XDG cache directory.

    :ivar prefix: The root of the Wine prefix.
    :ivar bin_dir: The directory where launcher links are created.
    :ivar app_dir: The directory containing Wine generated desktop entries.
    :ivar menu_dir: The directory containing Wine generated menu entries.
    :ivar wine_cache_dir: The directory Wine looks for add-on installers in.
    :ivar install_source_dir: Where installers are downloaded and extracted.
    """

    # pylint: disable=too-many-instance-attributes,too-many-statements

    def __init__(
        self,
        prefix: Path,
        *,
        user: str,
        home: Path | None = None,
        data_home: Path | None = None,
        config_home: Path | None = None,
        cache_home: Path | None = None,
    ) -> None:
        home = home or Path.home()
        data_home = data_home or Path(BaseDirectory.xdg_data_home)
        config_home = config_home or Path(BaseDirectory.xdg_config_home)
        cache_home = cache_home or Path(BaseDirectory.xdg_cache_home)

        self.prefix = prefix
        self.drive_c = prefix / "drive_c"
        self.system_registry = prefix / "system.reg"
        self.user_registry = prefix / "user.reg"
        self.winetricks = prefix / "winetricks"
        self.winetricks_log = prefix / "winetricks.log"

        self.bin_dir = home / ".local" / "bin"
        self.app_dir = data_home / "applications" / "wine" / "Programs"
        self.menu_dir = config_home / "menus" / "applications-merged"
        self.wine_cache_dir = cache_home / "wine"

        # Earth & Beyond client
        self.enb_dir = self.drive_c / "Program Files" / "EA GAMES" / "Earth & Beyond"
        self.enb_windows_dir = _ENB_WINDOWS_DIR
        self.install_source_dir = self.enb_dir.with_name("Earth & Beyond Install")
        self.install_source_windows_dir = _ENB_WINDOWS_DIR.with_name(
            "Earth & Beyond Install"
        )
        self.client_installer = self.install_source_dir / "eandb_demo.exe"
        self.demo_source_dir = self.install_source_dir / "demo"
        self.demo_source_windows_dir = self.install_source_windows_dir / "demo"
        self.client_setup = self.demo_source_dir / "e&bsetup.exe"
        self.client_windows_exe = _ENB_WINDOWS_DIR / "release" / "client.exe"
        self.mixfiles_dir = self.enb_dir / "Data" / "client" / "mixfiles"
        self.enb_app_dir = self.app_dir / "EA GAMES" / "Earth & Beyond"

        # Net-7 emulator
        self.n7_dir = self.drive_c / "Program Files" / "Net-7"
        self.n7_windows_dir = _N7_WINDOWS_DIR
        self.n7_bin_dir = self.n7_dir / "bin"
        self.n7_config_dir = (
            self.drive_c / "users" / user / "AppData" / "Local" / "LaunchNet7"
        )
        self.n7_installer = self.install_source_dir / "Net-7_Install.exe"
        self.n7_launcher_exe = self.n7_bin_dir / "LaunchNet7.exe"
        self.n7_launcher_script = self.n7_bin_dir / "LaunchNet7.exe_wine_launcher.sh"
        self.n7_proxy_script = self.n7_bin_dir / "net7proxy.exe_wine_launcher.sh"
        self.n7_app_dir = self.app_dir / "Net-7 Entertainment" / "EnB Emulator"

        # Net-7 client configuration tool
        self.cfg_dir = self.enb_dir / "EBCONFIG"
        self.cfg_windows_dir = _ENB_WINDOWS_DIR / "EBCONFIG"
        self.cfg_original_exe = self.cfg_dir / "E&BConfig.exe"
        self.cfg_script = self.cfg_dir / "net7config.exe_wine_launcher.sh"

        # Character and Starship Creator
        self.csc_source_dir = self.install_source_dir / "csc"
        self.csc_source_windows_dir = self.install_source_windows_dir / "csc"
        self.csc_installer = self.csc_source_dir / "CharacterStarshipCreator.exe"
        self.csc_dir = self.enb_dir / "Character and Starship Creator"
        self.csc_windows_dir = _ENB_WINDOWS_DIR / "Character and Starship Creator"
        self.csc_exe = self.csc_dir / "Character and Starship Creator.exe"
        self.csc_redirect_exe = self.csc_dir / "CnSC.exe"
        self.csc_script = self.enb_dir / "CnSC.exe_wine_launcher.sh"
        self.csc_avatar_dir = (
            self.drive_c
            / "ProgramData"
            / "Westwood Studios"
            / "Earth and Beyond"
            / "Character and Starship Creator"
        )

        # kept in the prefix, the install sources are removed after installing
        self.certificate = prefix / "sunrise.net-7.org.crt"

        # Launcher links
        self.enb_link = self.bin_dir / "enb"
        self.n7_launcher_link = self.bin_dir / "enb-launcher"
        self.cfg_link = self.bin_dir / "enb-cfg"
        self.csc_link = self.bin_dir / "enb-csc"
