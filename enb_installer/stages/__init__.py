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

"""Installation stages."""

from enb_installer.infos import InstallInfo

from .applications import (
    ClientDownloadStage,
    ClientExtractStage,
    ClientInstallStage,
    CscDownloadStage,
    CscInstallStage,
    Net7DownloadStage,
    Net7InstallStage,
)
from .base import Stage
from .desktop import GnomeFolderStage, ShortcutsStage
from .host import DirectRenderingStage, WineGeckoStage, WineStage
from .launchers import LaunchersStage, LinksStage
from .prefix import PrefixDependenciesStage, PrefixStage, WinetricksStage
from .trust import CertificateStage, RegistryStage

_STAGES: list[type[Stage]] = [
    DirectRenderingStage,
    WineStage,
    WineGeckoStage,
    PrefixStage,
    WinetricksStage,
    PrefixDependenciesStage,
    ClientDownloadStage,
    ClientExtractStage,
    ClientInstallStage,
    Net7DownloadStage,
    Net7InstallStage,
    CscDownloadStage,
    CscInstallStage,
    CertificateStage,
    RegistryStage,
    LaunchersStage,
    LinksStage,
    ShortcutsStage,
    GnomeFolderStage,
]


def create_stages(info: InstallInfo) -> list[Stage]:
    """Create the installation stages, in execution order.

    :param info: The installation context.
    """
    return [stage_class(info) for stage_class in sorted(_STAGES, key=lambda s: s.step)]


__all__ = ["Stage", "create_stages"]
