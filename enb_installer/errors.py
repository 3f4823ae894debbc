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

"""Installer errors."""

import dataclasses
from collections.abc import Sequence


@dataclasses.dataclass(repr=True)
class InstallerError(Exception):
    """Unexpected error.

    :param brief: Brief description of error.
    :param details: Detailed information.
    :param resolution: Recommendation, if any.
    """

    brief: str
    details: str | None = None
    resolution: str | None = None

    exit_code = 1

    def __str__(self) -> str:
        components = [self.brief]

        if self.details:
            components.append(self.details)

        if self.resolution:
            components.append(self.resolution)

        return "\n".join(components)


class UnsupportedKernel(InstallerError):
    """The host kernel is not supported.

    :param kernel_name: The name of the running kernel.
    """

    def __init__(self, kernel_name: str):
        self.kernel_name = kernel_name
        brief = f"Unsupported kernel name: {kernel_name!r}."
        resolution = "Only Linux hosts are supported."

        super().__init__(brief=brief, resolution=resolution)


class RunningAsSuperuser(InstallerError):
    """The installer was started with superuser privileges."""

    def __init__(self) -> None:
        brief = "This installer should not be run as root."
        details = (
            "Most of what it does needs to happen as the normal user who will "
            "run the game and related tools."
        )
        resolution = (
            "Run it as a regular user; you will only be prompted for sudo access "
            "in the event that additional OS packages are required."
        )

        super().__init__(brief=brief, details=details, resolution=resolution)


class OsReleaseIdError(InstallerError):
    """Failed to determine the host operating system identification string."""

    def __init__(self) -> None:
        brief = "Unable to determine the host operating system ID."

        super().__init__(brief=brief)


def exit_status(returncode: int) -> int:
    """Return the shell exit status for a process return code.

    A process killed by a signal has a negative return code, reported as
    ``128 + signum``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class CommandError(InstallerError):
    """An external command exited with a non-zero status.

    :param command: The command that failed.
    :param exit_code: The command exit code.
    :param output: The combined standard output and error of the command.
    """

    def __init__(self, *, command: Sequence[str], exit_code: int, output: str = ""):
        self.command = list(command)
        self.exit_code = exit_status(exit_code)
        self.output = output
        brief = f"Command {' '.join(self.command)!r} failed with exit code {exit_code}."
        details = f"rc: {exit_code}, output: {output.strip()}" if output.strip() else None

        super().__init__(brief=brief, details=details)


class ToolUnavailable(InstallerError):
    """A required tool is missing and could not be installed.

    :param tool: The name of the missing tool.
    :param resolution: Guidance on how to make the tool available.
    """

    def __init__(self, tool: str, *, resolution: str | None = None):
        self.tool = tool
        brief = f"Required tool {tool!r} is not available."

        super().__init__(brief=brief, resolution=resolution)


class StageError(InstallerError):
    """A stage failed to converge the environment.

    :param stage_name: The name of the stage.
    :param message: What went wrong.
    """

    def __init__(self, *, stage_name: str, message: str, resolution: str | None = None):
        self.stage_name = stage_name
        self.message = message
        brief = f"Stage {stage_name!r} failed: {message}"

        super().__init__(brief=brief, resolution=resolution)


class RemovalError(InstallerError):
    """A directory tree could not be removed.

    :param path: The directory path.
    :param message: The underlying error message.
    """

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        brief = f"There was an error while trying to remove {path!r}: {message}."

        super().__init__(brief=brief)
