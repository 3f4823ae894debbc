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

"""Stages downloading and installing the Windows applications."""

import abc
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from overrides import overrides

from enb_installer import automation
from enb_installer.dirs import InstallDirs
from enb_installer.sources import Artifact
from enb_installer.steps import Step
from enb_installer.utils import file_utils

from .base import Stage

logger = logging.getLogger(__name__)

CLIENT_URL = "http://www.bothouse.com/enb/eandb_demo.exe"
CLIENT_SHA256 = "dbb729c252ab21cbf85045bdcb8c0ef05611edcedc28029118fa877ad094a3c8"

# Net-7 updates the installer in place, so its digest is not known.
NET7_URL = "https://www.net-7.org/download/Net-7_Install.exe"

CSC_URL = "http://www.bothouse.com/enb/CharacterStarshipCreator.exe"
CSC_SHA256 = "4a9fbb066b8061cff8d2fedc9297c97938e251f878c150fcdf0012166797d142"

CLIENT_SETUP_GUID = "{F788D81C-F5EC-4CBE-B1D6-C98E2B8EC7E9}"
CSC_SETUP_GUID = "{17FF7B21-A872-429C-9331-5883ACD12EE8}"
SETUP_FOLDER = r"EA GAMES\Earth & Beyond"


def client_artifact(dirs: InstallDirs) -> Artifact:
    """Return the game client installer."""
    return Artifact(url=CLIENT_URL, path=dirs.client_installer, sha256=CLIENT_SHA256)


def net7_artifact(dirs: InstallDirs) -> Artifact:
    """Return the Net-7 unified installer."""
    return Artifact(url=NET7_URL, path=dirs.n7_installer)


def csc_artifact(dirs: InstallDirs) -> Artifact:
    """Return the Character and Starship Creator installer."""
    return Artifact(url=CSC_URL, path=dirs.csc_installer, sha256=CSC_SHA256)


def render_setup_script(
    guid: str, dialogs: Sequence[tuple[str, Mapping[str, str]]]
) -> str:
    """Render an InstallShield response file for a silent installation.

    :param guid: The installer product identifier.
    :param dialogs: The dialogs shown by the installer, in order, with the
        responses to each of them.

    :return: The ``setup.iss`` content.
    """
    order = [f"[{guid}-DlgOrder]"]
    sections = []
    for index, (dialog, responses) in enumerate(dialogs):
        order.append(f"Dlg{index}={guid}-{dialog}-0")
        if index == 0:
            order.append(f"Count={len(dialogs)}")
        sections.append(f"[{guid}-{dialog}-0]")
        sections.extend(f"{key}={value}" for key, value in responses.items())

    return "\n".join(order + sections) + "\n"


class ArtifactDownloadStage(Stage):
    """Download an installer into the installation source directory."""

    @abc.abstractmethod
    def get_artifact(self) -> Artifact:
        """Return the artifact handled by this stage."""

    @abc.abstractmethod
    def is_installed(self) -> bool:
        """Verify whether the application this artifact installs is present."""

    @overrides
    def is_complete(self) -> bool:
        # once installed, the installer is not needed again
        return self.get_artifact().is_present() or self.is_installed()

    @overrides
    def run(self) -> None:
        artifact = self.get_artifact()
        artifact.download(self._repository)
        file_utils.make_executable(artifact.path)


class ClientDownloadStage(ArtifactDownloadStage):
    """Download the game client installer."""

    step = Step.CLIENT_DOWNLOAD

    @overrides
    def get_artifact(self) -> Artifact:
        return client_artifact(self._dirs)

    @overrides
    def is_installed(self) -> bool:
        return self._dirs.cfg_original_exe.exists()


class Net7DownloadStage(ArtifactDownloadStage):
    """Download the Net-7 unified installer."""

    step = Step.NET7_DOWNLOAD

    @overrides
    def get_artifact(self) -> Artifact:
        return net7_artifact(self._dirs)

    @overrides
    def is_installed(self) -> bool:
        return self._dirs.n7_launcher_exe.exists()


class CscDownloadStage(ArtifactDownloadStage):
    """Download the Character and Starship Creator installer."""

    step = Step.CSC_DOWNLOAD

    @overrides
    def get_artifact(self) -> Artifact:
        return csc_artifact(self._dirs)

    @overrides
    def is_installed(self) -> bool:
        dirs = self._dirs
        return dirs.csc_exe.exists() or dirs.csc_redirect_exe.exists()


class ClientExtractStage(Stage):
    """Extract the game client InstallShield setup from its Wise installer."""

    step = Step.CLIENT_EXTRACT

    @overrides
    def is_complete(self) -> bool:
        return self._dirs.client_setup.exists() or self._dirs.cfg_original_exe.exists()

    @overrides
    def run(self) -> None:
        dirs = self._dirs
        client_artifact(dirs).verify(self._repository)
        dirs.demo_source_dir.mkdir(parents=True, exist_ok=True)

        logger.info("Extracting the game client from its Wise installer")
        # The Wise installer reads the destination from the raw command line
        # and rejects it quoted.
        destination = str(dirs.demo_source_windows_dir).split(" ")
        self._wine().start(
            dirs.install_source_windows_dir / dirs.client_installer.name,
            "/S",
            "/X",
            *destination,
        )


class ClientInstallStage(Stage):
    """Install the game client."""

    step = Step.CLIENT_INSTALL

    @overrides
    def is_complete(self) -> bool:
        return self._dirs.cfg_original_exe.exists()

    @overrides
    def run(self) -> None:
        dirs = self._dirs
        script = render_setup_script(
            CLIENT_SETUP_GUID,
            [
                ("SdWelcome", {"Result": "1"}),
                ("SdAskDestPath", {"szDir": f"{dirs.enb_windows_dir}\\", "Result": "1"}),
                ("SdSelectFolder", {"szFolder": SETUP_FOLDER, "Result": "1"}),
                ("SdStartCopy", {"Result": "1"}),
                ("SdFinish", {"Result": "1", "bOpt1": "0", "bOpt2": "1"}),
            ],
        )
        _write_setup_script(dirs.demo_source_dir, script)

        logger.info(
            "Installing the game client into %r (this will take a few minutes)",
            str(dirs.enb_windows_dir),
        )
        logger.info("Don't be alarmed when Megan starts talking!")
        self._wine().start(
            dirs.demo_source_windows_dir / dirs.client_setup.name, "/s", "/sms"
        )


class Net7InstallStage(Stage):
    """Install the Net-7 emulator client by driving its installer."""

    step = Step.NET7_INSTALL

    @overrides
    def is_complete(self) -> bool:
        return self._dirs.n7_launcher_exe.exists()

    @overrides
    def run(self) -> None:
        dirs = self._dirs
        net7_artifact(dirs).verify(self._repository)

        logger.info("Installing the Net-7 unified installer")
        script = automation.net7_installer_script(
            dirs.install_source_windows_dir / dirs.n7_installer.name,
            dirs.n7_windows_dir,
        )
        automation.run_script(script, self._winetricks())


class CscInstallStage(Stage):
    """Install the Character and Starship Creator."""

    step = Step.CSC_INSTALL

    @overrides
    def is_complete(self) -> bool:
        dirs = self._dirs
        return dirs.csc_exe.exists() or dirs.csc_redirect_exe.exists()

    @overrides
    def run(self) -> None:
        dirs = self._dirs
        csc_artifact(dirs).verify(self._repository)

        script = render_setup_script(
            CSC_SETUP_GUID,
            [
                ("SdWelcome", {"Result": "1"}),
                ("SdLicense", {"Result": "1"}),
                ("SdAskDestPath", {"szDir": f"{dirs.csc_windows_dir}\\", "Result": "1"}),
                ("SdSelectFolder", {"szFolder": SETUP_FOLDER, "Result": "1"}),
                ("SdFinish", {"Result": "1", "bOpt1": "0", "bOpt2": "0"}),
            ],
        )
        _write_setup_script(dirs.csc_source_dir, script)

        logger.info(
            "Installing the Character and Starship Creator (this will take a few minutes)"
        )
        self._wine().start(
            dirs.csc_source_windows_dir / dirs.csc_installer.name, "/s", "/sms"
        )


def _write_setup_script(directory: Path, script: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "setup.iss").write_text(script)
