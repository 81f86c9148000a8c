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

"""Cleanup command."""

from __future__ import annotations

import typer

from stack_manager import OperatorLog, configure_logging
from stack_manager.config import StackSettings
from stack_manager.errors import StackError
from stack_manager.orchestrator import run_cleanup


def cleanup() -> None:
    """Delete the application namespace after typing 'yes' to confirm."""
    settings = StackSettings()
    out = OperatorLog()
    try:
        run_cleanup(settings, out)
    except StackError as e:
        out.error(str(e))
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the standalone ``stack-cleanup`` script."""
    configure_logging(StackSettings().log_level)
    typer.run(cleanup)
