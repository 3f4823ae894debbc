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

"""Start the installed Windows applications.

This is the entry point of the launcher scripts generated by the installer,
invoked as ``enb-launch`` or ``python -m enb_installer.launch``.
"""

import argparse
import enum
import logging
import os
import shlex
import socket
import sys
from pathlib import Path

from enb_installer import errors, infos, registry, user_config
from enb_installer.dirs import InstallDirs
from enb_installer.wine import Wine

logger = logging.getLogger(__name__)

N7_LAUNCHER_EXE = "LaunchNet7.exe"
N7_PROXY_EXE = "net7proxy.exe"
CFG_EXE = "net7config.exe"
CSC_VIRTUAL_DESKTOP = "Earth_and_Beyond_Character_and_Starship_Creator,800x600"

INTRO_MOVIES = ["EB_Sizzle.bik", "eb_ws_logo.bik"]


@enum.unique
class App(str, enum.Enum):
    """The applications started by launcher scripts."""

    LAUNCHER = "launcher"
    CONFIG = "config"
    CSC = "csc"
    PROXY = "proxy"

    def __str__(self) -> str:
        return self.value


_DESCRIPTIONS = {
    App.LAUNCHER: "Starts the Net-7 Launcher (to perform updates or launch the game)",
    App.CONFIG: "Starts Net-7 Config",
    App.CSC: "Starts the Character and Starship Creator",
    App.PROXY: (
        "Starts the Net-7 Proxy (starts Earth & Beyond Emulator directly "
        "without the launcher)"
    ),
}


def get_description(app: App) -> str:
    """Return what the launcher script of an application does."""
    return _DESCRIPTIONS[app]


def get_script_path(app: App, dirs: InstallDirs) -> Path:
    """Return the location of the launcher script of an application."""
    return {
        App.LAUNCHER: dirs.n7_launcher_script,
        App.CONFIG: dirs.cfg_script,
        App.CSC: dirs.csc_script,
        App.PROXY: dirs.n7_proxy_script,
    }[app]


def render_script(app: App, prefix: Path, *, python: str | None = None) -> str:
    """Render the launcher script of an application.

    :param app: The application to start.
    :param prefix: The Wine prefix.
    :param python: The Python interpreter running the launcher.
    """
    python = python or sys.executable
    return (
        "#!/bin/sh\n"
        "\n"
        f"# {get_description(app)}\n"
        "\n"
        f"WINEPREFIX={shlex.quote(str(prefix))}\n"
        "export WINEPREFIX\n"
        f'exec {shlex.quote(python)} -m enb_installer.launch {app} "$@"\n'
    )


def get_config_defaults(dirs: InstallDirs) -> dict[str, str]:
    """Return the launcher settings applied to new launcher settings files.

    The launcher resets the application paths on updates. Prototype reorder
    is widely recommended, and mouse lock works well on recent Wine versions.
    """
    return {
        "ClientPath": str(dirs.client_windows_exe),
        "UseExperimentalReorder": "True",
        "DisableMouseLock": "False",
        "EnBConfigPath": str(dirs.cfg_windows_dir / CFG_EXE),
        "CharCreatorPath": str(dirs.csc_windows_dir / dirs.csc_exe.name),
    }


def disable_intro_movies(dirs: InstallDirs) -> None:
    """Rename the game intro movies so that the client skips them."""
    for name in INTRO_MOVIES:
        movie = dirs.mixfiles_dir / name
        if movie.exists():
            movie.replace(movie.with_name(name + ".bak"))
            logger.debug("disabled intro movie %s", name)


def get_proxy_flags(config_dir: Path) -> list[str]:
    """Derive the proxy options from the latest launcher settings.

    ``/DML`` disables the mouse lock, ``/EXREORDER`` enables the prototype
    reorder and ``/POPT`` enables packet optimization. Settings missing from
    the file keep their defaults: off, on and on.
    """
    options = {
        "DisableMouseLock": ("/DML", False),
        "UseExperimentalReorder": ("/EXREORDER", True),
        "UsePacketOpt": ("/POPT", True),
    }

    latest = user_config.get_latest_user_config(config_dir)
    config = user_config.UserConfigFile(latest) if latest else None

    flags = []
    for key, (flag, enabled) in options.items():
        value = config.get(key) if config else ""
        if value:
            enabled = "True" in value
        if enabled:
            flags.append(flag)

    return flags


def resolve_server_address(hostname: str) -> str:
    """Resolve the game server IPv4 address.

    The host name is returned if it cannot be resolved.
    """
    try:
        return socket.gethostbyname(hostname)
    except OSError as err:
        logger.warning("Cannot resolve %s: %s", hostname, err)
        return hostname


def run_app(app: App, dirs: InstallDirs, wine: Wine, *, wait: bool = False) -> None:
    """Start an application in the Wine prefix.

    :param app: The application to start.
    :param dirs: The installation directories.
    :param wine: The Wine installation to use.
    :param wait: Wait for the application to exit.

    :raises CommandError: If the application fails to start.
    """
    logger.debug("launch %s (wait=%s)", app, wait)

    if app == App.LAUNCHER:
        user_config.migrate(dirs.n7_config_dir, get_config_defaults(dirs))
        wine.start(
            N7_LAUNCHER_EXE, workdir=dirs.n7_windows_dir / "bin", wait=wait
        )
        disable_intro_movies(dirs)

    elif app == App.CONFIG:
        wine.start(CFG_EXE, workdir=dirs.cfg_windows_dir, wait=wait)

    elif app == App.CSC:
        wine.start(
            "explorer",
            f"/desktop={CSC_VIRTUAL_DESKTOP}",
            dirs.csc_redirect_exe.name,
            "-noclassrestrictions",
            workdir=dirs.csc_windows_dir,
            wait=wait,
        )

    elif app == App.PROXY:
        disable_intro_movies(dirs)
        address = resolve_server_address(registry.N7_SERVER_HOSTNAME)
        wine.start(
            N7_PROXY_EXE,
            "/LADDRESS:0",
            f"/ADDRESS:{address}",
            f"/CLIENT:{dirs.client_windows_exe}",
            *get_proxy_flags(dirs.n7_config_dir),
            workdir=dirs.n7_windows_dir / "bin",
            wait=wait,
        )


def main(argv: list[str] | None = None) -> None:
    """Run the launcher command line interface."""
    options = _parse_arguments(argv)

    logging.basicConfig(level=logging.INFO)

    environ = os.environ
    dirs = InstallDirs(infos.get_prefix(environ), user=infos.get_user(environ))
    wait = options.wait or bool(environ.get("WAIT"))

    try:
        wine = Wine.find(dirs.prefix)
        run_app(App(options.app), dirs, wine, wait=wait)
    except OSError as err:
        msg = err.strerror
        if err.filename:
            msg = f"{err.filename}: {msg}"
        print(f"Error: {msg}.", file=sys.stderr)
        sys.exit(1)
    except errors.InstallerError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(err.exit_code)


def _parse_arguments(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="enb-launch",
        description="Start Earth & Beyond applications installed in the Wine prefix.",
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="Show this help message and exit.",
    )
    parser.add_argument(
        "--wait",
        action="store_true",
        help="Wait for the application to exit.",
    )
    parser.add_argument(
        "app",
        choices=[str(app) for app in App],
        help="The application to start.",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    main()
