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

"""Utilities for executing subprocesses and collecting their combined output."""

import logging
import os
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from enb_installer import errors

logger = logging.getLogger(__name__)

Command = Sequence[str | Path]

# Seconds an interrupted command is given to exit before it is killed.
TERMINATE_TIMEOUT = 5.0


@dataclass
class ProcessResult:
    """Describes the outcome of a process."""

    returncode: int
    output: str
    command: Command

    def check_returncode(self) -> None:
        """Raise an exception if the process returned non-zero."""
        if self.returncode != 0:
            raise errors.CommandError(
                command=[str(c) for c in self.command],
                exit_code=self.returncode,
                output=self.output,
            )


def run(
    command: Command,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    log_func: Callable[[str], None] = logger.debug,
) -> ProcessResult:
    """Execute a command and collect its merged stdout and stderr.

    The command is executed directly, without shell interpretation. The
    caller decides whether a non-zero exit status is fatal.

    Output is decoded as UTF-8, undecodable bytes are replaced. If the
    caller is interrupted, for example by a signal handler raising
    ``SystemExit``, the command is terminated before the exception
    propagates.

    :param command: The command to execute, as a list of arguments.
    :param env: Environment variables to overlay on the current environment.
    :param cwd: Path to execute in.
    :param log_func: The function used to log each line of output.

    :raises OSError: If the specified executable is not found.

    :return: A description of the process outcome.
    """
    cmd = [str(c) for c in command]
    proc_env = None
    if env:
        proc_env = os.environ.copy()
        proc_env.update(env)
        logger.debug("run %s (env overlay: %s)", cmd, dict(env))
    else:
        logger.debug("run %s", cmd)

    lines: list[str] = []
    with subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        stdin=subprocess.DEVNULL,
        encoding="utf-8",
        errors="replace",
        env=proc_env,
        cwd=cwd,
    ) as proc:
        try:
            if proc.stdout:
                for line in iter(proc.stdout.readline, ""):
                    lines.append(line)
                    log_func(":: " + line.rstrip())
            ret = proc.wait()
        except BaseException:
            # interrupted, do not leave the child running
            terminate(proc)
            raise

    return ProcessResult(ret, "".join(lines), cmd)


def run_checked(
    command: Command,
    *,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> ProcessResult:
    """Execute a command and raise if it fails.

    :raises CommandError: If the command exits with a non-zero status.
    """
    result = run(command, env=env, cwd=cwd)
    result.check_returncode()
    return result


def terminate(proc: subprocess.Popen, *, timeout: float = TERMINATE_TIMEOUT) -> None:
    """Stop a running process, killing it if it does not exit in time.

    :param proc: The process to stop.
    :param timeout: How long to wait for the process to exit after
        ``SIGTERM``, in seconds.
    """
    if proc.poll() is not None:
        return

    logger.debug("terminate %s", proc.args)
    proc.terminate()
    try:
        proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.debug("kill %s", proc.args)
        proc.kill()
        proc.wait()
