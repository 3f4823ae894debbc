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

"""Interactive confirmation prompts."""

import contextlib
import logging
import sys
import termios
import tty
from typing import TextIO

logger = logging.getLogger(__name__)


def ask(question: str, *, stdin: TextIO | None = None) -> bool:
    """Ask a yes/no question.

    An answer starting with ``y`` or ``Y`` is affirmative, anything else is
    negative. Without a terminal attached to the input, or when the input
    ends, the answer is negative and nothing blocks.

    :param question: The question to ask, without a trailing question mark.
    :param stdin: The input stream, defaults to ``sys.stdin``.

    :return: Whether the answer is affirmative.
    """
    stdin = stdin or sys.stdin
    print(f"{question} [y/n]? ", end="", flush=True)

    if not _is_tty(stdin):
        print()
        logger.debug("no terminal attached, assuming 'no' to %r", question)
        return False

    answer = stdin.readline()
    if not answer:
        print()
        return False

    return answer.strip().lower().startswith("y")


def wait_for_response(message: str, *, stdin: TextIO | None = None) -> None:
    """Show a message and wait for a single keypress.

    Returns immediately if no terminal is attached to the input.

    :param message: The message to show.
    :param stdin: The input stream, defaults to ``sys.stdin``.
    """
    stdin = stdin or sys.stdin
    print(f"{message}, press any key to continue", flush=True)

    if not _is_tty(stdin):
        return

    fd = stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        # discard anything typed after the key
        with contextlib.suppress(termios.error):
            termios.tcflush(fd, termios.TCIFLUSH)


def _is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False
