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

"""Stages importing the server certificate and game settings."""

import logging
import ssl

from overrides import overrides

from enb_installer import completion, registry, sources
from enb_installer.steps import Step

from .base import Stage

logger = logging.getLogger(__name__)

N7_SERVER_PORT = 443


class CertificateStage(Stage):
    """Retrieve the certificate presented by the game server.

    The certificate is renewed every few months, so its digest is only
    logged.
    """

    step = Step.CERTIFICATE

    @overrides
    def is_complete(self) -> bool:
        return completion.path_exists(self._dirs.certificate)

    @overrides
    def run(self) -> None:
        path = self._dirs.certificate
        host = registry.N7_SERVER_HOSTNAME
        logger.info("Retrieving the %s certificate", host)
        try:
            pem = ssl.get_server_certificate((host, N7_SERVER_PORT), timeout=60)
        except OSError as err:
            raise sources.errors.NetworkRequestError(
                str(err), url=f"https://{host}:{N7_SERVER_PORT}"
            ) from err

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(pem)
        sources.verify(path, repository=self._repository)


class RegistryStage(Stage):
    """Import the game settings and trust the server certificate."""

    step = Step.REGISTRY

    @overrides
    def is_complete(self) -> bool:
        dirs = self._dirs
        if not dirs.certificate.is_file():
            return False

        der = registry.load_certificate(dirs.certificate)
        return completion.registry_contains(
            dirs.user_registry, registry.certificate_key(der)
        ) and completion.registry_contains(dirs.system_registry, registry.RENDER_KEY)

    @overrides
    def run(self) -> None:
        der = registry.load_certificate(self._dirs.certificate)
        logger.info(
            "Installing the %s certificate (%s) into the prefix",
            registry.N7_SERVER_HOSTNAME,
            registry.get_thumbprint(der),
        )
        fragment = registry.write_fragment(der, name=registry.N7_SERVER_HOSTNAME)

        wine = self._wine()
        wine.import_registry(fragment)
        # registry changes are written when the server exits
        wine.wait_server()
