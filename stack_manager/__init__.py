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

"""stack_manager - deploy and tear down the FastAPI/Redis stack on Kubernetes."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.panel import Panel

logger = logging.getLogger("stack_manager")


class OperatorLog:
    """Levelled operator output written to a single rich console.

    Components receive an instance explicitly instead of printing through
    module-level state, so tests can hand in a console backed by a buffer.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()

    def header(self, title: str) -> None:
        self.console.print(Panel.fit(title, style="bold blue"))

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")

    def info(self, message: str) -> None:
        self.console.print(f"[yellow]ℹ️  {message}[/yellow]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def detail(self, message: str) -> None:
        """Print an indented plain line (commands, hints)."""
        self.console.print(f"   {message}", highlight=False)

    def raw(self, text: str) -> None:
        """Print command output verbatim, without markup parsing."""
        self.console.print(text, markup=False, highlight=False, end="")

    def progress(self, marker: str = ".") -> None:
        self.console.print(marker, end="", markup=False, highlight=False)

    def blank(self) -> None:
        self.console.print()


def configure_logging(level: str = "WARNING") -> None:
    """Initialize diagnostic logging for a CLI invocation."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
