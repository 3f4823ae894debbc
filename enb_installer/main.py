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

"""Earth & Beyond Emulator installer command line tool.

This is the main entry point for the enb_installer package, invoked when
running ``enb-installer`` or ``python -m enb_installer``. It provisions the
Wine prefix, installs the game client and its companion tools, and offers
optional post-installation steps. The planned sequence of actions can be
displayed with ``--dry-run``.

Running the installer again resumes an interrupted installation, or updates
an existing one: steps already performed are skipped.
"""

import argparse
import logging
import signal
import sys
import types

import enb_installer
from enb_installer import errors, post_install
from enb_installer.actions import Action, ActionType
from enb_installer.infos import InstallInfo
from enb_installer.lifecycle import LifecycleManager
from enb_installer.utils import os_utils
from enb_installer.wine import Wine, Winetricks

logger = logging.getLogger(__name__)

_EXIT_SIGNALS = [signal.SIGINT, signal.SIGHUP, signal.SIGTERM, signal.SIGABRT]


def main(argv: list[str] | None = None) -> None:
    """Run the command-line interface."""
    options = _parse_arguments(argv)

    if options.version:
        print(f"enb-installer {enb_installer.__version__}")
        sys.exit()

    _install_signal_handlers()

    try:
        validate_host()
        info = InstallInfo.from_environment(
            verbose=options.verbose, debug=options.debug
        )
        _configure_logging(info)
        _process(info, options)
    except OSError as err:
        msg = err.strerror
        if err.filename:
            msg = f"{err.filename}: {msg}"
        print(f"Error: {msg}.", file=sys.stderr)
        sys.exit(1)
    except errors.InstallerError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(err.exit_code)


def validate_host() -> None:
    """Verify that the installer can run on this host.

    :raises UnsupportedKernel: If the host does not run Linux.
    :raises RunningAsSuperuser: If the installer runs as root.
    """
    kernel_name = os_utils.get_kernel_name()
    if kernel_name != "Linux":
        raise errors.UnsupportedKernel(kernel_name)

    if os_utils.is_superuser():
        raise errors.RunningAsSuperuser()


def _process(info: InstallInfo, options: argparse.Namespace) -> None:
    lcm = LifecycleManager(info)

    if options.dry_run:
        for action in lcm.plan():
            print(_action_message(action))
        sys.exit()

    lcm.prepare_prefix()
    lcm.install()

    wine = Wine.find(info.prefix)
    winetricks = Winetricks(info.dirs.winetricks, wine=wine)
    post_install.run(info.dirs, wine, winetricks)


def _action_message(action: Action) -> str:
    verb = {ActionType.RUN: "Run", ActionType.SKIP: "Skip"}[action.action_type]
    message = f"{verb} {action.step.title}"

    if action.reason:
        message += f" ({action.reason})"

    return message


def _configure_logging(info: InstallInfo) -> None:
    if info.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")
    logger.debug("debug level %d, verbosity %d", info.debug, info.verbose)


def _handle_signal(signum: int, frame: types.FrameType | None) -> None:
    exit_code = 128 + signum
    logger.error("Interrupted by %s, exit status %d", signal.Signals(signum).name, exit_code)
    sys.exit(exit_code)


def _install_signal_handlers() -> None:
    for signum in _EXIT_SIGNALS:
        signal.signal(signum, _handle_signal)


def _parse_arguments(argv: list[str] | None) -> argparse.Namespace:
    prog = "enb-installer"
    description = (
        "Install or update the Earth & Beyond Emulator client in a Wine prefix. "
        "The prefix is selected with WINEPREFIX and defaults to ~/.wine-enb."
    )

    parser = argparse.ArgumentParser(prog=prog, description=description, add_help=False)
    parser.add_argument(
        "-h",
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="Show this help message and exit.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="count",
        default=0,
        help="Enable debug messages, implies --verbose. Can be repeated.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show execution output. Can be repeated.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show planned actions to be executed and exit.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Display the enb-installer version and exit.",
    )

    return parser.parse_args(argv)
