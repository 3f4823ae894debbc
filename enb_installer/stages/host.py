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

"""Stages satisfying the host requirements."""

import logging
import re

from overrides import overrides

from enb_installer import completion, errors, sources, wine
from enb_installer.packages import errors as packages_errors
from enb_installer.steps import Step
from enb_installer.utils import process

from .base import Stage

logger = logging.getLogger(__name__)

GECKO_PACKAGE = "wine-gecko"
GECKO_VERSION_URL = (
    "https://source.winehq.org/git/wine.git/blob_plain/HEAD:/dlls/appwiz.cpl/addons.c"
)
GECKO_DOWNLOAD_URL = "https://dl.winehq.org/wine/wine-gecko/{version}/{name}"

_GECKO_VERSION_RE = re.compile(r'^#define GECKO_VERSION\s+"(.*)"', re.MULTILINE)


class DirectRenderingStage(Stage):
    """Make sure OpenGL direct rendering is available."""

    step = Step.DIRECT_RENDERING

    @overrides
    def is_complete(self) -> bool:
        try:
            result = process.run(["glxinfo"])
        except FileNotFoundError:
            return False

        return "direct rendering: Yes" in result.output

    @overrides
    def run(self) -> None:
        logger.info("Direct rendering is not available, attempting to install mesa-utils...")
        self._repository.install_packages(["mesa-utils"])

        if not self.is_complete():
            raise errors.StageError(
                stage_name=self.name,
                message=(
                    "direct rendering is still not available after attempting "
                    "to install mesa-utils"
                ),
                resolution=(
                    "Determine how to enable direct rendering on your distribution "
                    "and retry."
                ),
            )


class WineStage(Stage):
    """Install Wine on the host."""

    step = Step.WINE

    @overrides
    def is_complete(self) -> bool:
        return wine.find_wine() is not None

    @overrides
    def run(self) -> None:
        logger.info(
            "%s is not installed, attempting to install %s...",
            wine.WINE_PACKAGE,
            wine.WINE_PACKAGE,
        )
        try:
            self._repository.install_packages([wine.WINE_PACKAGE])
        except packages_errors.PackagesNotInstalled as err:
            raise errors.ToolUnavailable(
                wine.WINE_PACKAGE,
                resolution=(
                    "Determine how to install wine-staging on your distribution; "
                    "winehq-* packages are not recommended, but may be the best "
                    "option on your distribution."
                ),
            ) from err

        logger.info("Wine version: %s", self._wine().version())


class WineGeckoStage(Stage):
    """Make the Gecko HTML engine available to Wine.

    Gecko is needed by the Net-7 launcher. If no package provides it, the
    Gecko installer is placed in the Wine cache so that Wine installs it
    when the prefix is created.
    """

    step = Step.WINE_GECKO

    @overrides
    def is_complete(self) -> bool:
        if completion.package_installed(self._repository, GECKO_PACKAGE, extra=True):
            return True

        return any(self._dirs.wine_cache_dir.glob("wine-gecko-*-x86.msi"))

    @overrides
    def run(self) -> None:
        logger.info(
            "%s is not installed, attempting to install %s...",
            GECKO_PACKAGE,
            GECKO_PACKAGE,
        )
        try:
            self._repository.install_packages([GECKO_PACKAGE], extra=True)
        except packages_errors.PackagesError as err:
            logger.warning("Could not install %s: %s", GECKO_PACKAGE, err.brief)

        if completion.package_installed(self._repository, GECKO_PACKAGE, extra=True):
            return

        version = get_gecko_version()
        name = f"wine-gecko-{version}-x86.msi"
        cache_dir = self._dirs.wine_cache_dir
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise errors.StageError(
                stage_name=self.name,
                message=(
                    f"could not install {GECKO_PACKAGE} nor use the Wine cache "
                    f"{str(cache_dir)!r}: {err.strerror}"
                ),
            ) from err

        url = GECKO_DOWNLOAD_URL.format(version=version, name=name)
        sources.download(url, cache_dir / name)
        logger.error(
            "Unable to install %s, its installer was placed in the Wine cache so "
            "that Wine can install it automatically; otherwise determine how to "
            "install %s on your distribution: https://wiki.winehq.org/Gecko",
            GECKO_PACKAGE,
            GECKO_PACKAGE,
        )


def get_gecko_version() -> str:
    """Obtain the Gecko version expected by the current Wine development tree.

    :raises StageError: If the version cannot be determined.
    """
    text = sources.fetch_text(GECKO_VERSION_URL)
    match = _GECKO_VERSION_RE.search(text)
    if not match:
        raise errors.StageError(
            stage_name=Step.WINE_GECKO.title,
            message=f"cannot determine the Gecko version from {GECKO_VERSION_URL}",
        )

    return match.group(1)
