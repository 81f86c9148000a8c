# /*
# Copyright 2026 The Grove Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Synchronous external command execution and PATH checks."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable, Sequence

import sh

from stack_manager import logger
from stack_manager.config import CommandResult
from stack_manager.constants import EXIT_COMMAND_NOT_FOUND, EXIT_TIMED_OUT

Runner = Callable[..., CommandResult]


def command_exists(cmd: str) -> bool:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Returns:
        True if ``which`` resolves the command.
    """
    try:
        sh.which(cmd)
    except sh.ErrorReturnCode:
        return False
    return True


def execute(command: str, args: Sequence[str], timeout: float | None = None) -> CommandResult:
    """Run a command and capture its result.

    A non-zero exit status is returned as data, never raised. Uses subprocess
    instead of sh so stdout and stderr stay separate for diagnostics.

    Args:
        command: Executable name or path (e.g. ``kubectl``).
        args: Arguments passed to the executable.
        timeout: Optional guard in seconds. Callers that need a bound should
            prefer the tool's own timeout flag and use this as a backstop.

    Returns:
        The captured CommandResult.
    """
    argv = [command, *args]
    logger.debug("exec: %s", shlex.join(argv))
    try:
        proc = subprocess.run(argv, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        logger.debug("exec timed out after %ss: %s", timeout, argv[0])
        return CommandResult(
            succeeded=False,
            stdout=_as_text(exc.stdout),
            stderr=f"command timed out after {timeout}s",
            exit_code=EXIT_TIMED_OUT,
            timed_out=True,
        )
    except OSError as exc:
        return CommandResult(succeeded=False, stderr=str(exc), exit_code=EXIT_COMMAND_NOT_FOUND)

    logger.debug("exit %d: %s", proc.returncode, argv[0])
    return CommandResult(
        succeeded=proc.returncode == 0,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        exit_code=proc.returncode,
    )


def _as_text(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data
