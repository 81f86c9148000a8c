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

"""
cli.py - Unified CLI for the FastAPI/Redis stack.

Subcommands:
    deploy     Check prerequisites, apply manifests, wait for rollouts, report
    cleanup    Delete the application namespace (asks for 'yes')

Examples:
    # Deploy using manifests in ./k8s-specifications
    stack-manager deploy

    # Deploy from another manifest directory
    STACK_MANIFEST_DIR=deploy/k8s stack-manager deploy

    # Tear everything down
    stack-manager cleanup

Environment Variables:
    All tooling knobs can be overridden via STACK_* environment variables
    (see StackSettings for the full list).
"""

from __future__ import annotations

import typer

from stack_manager import configure_logging
from stack_manager.commands import cleanup_cmd, deploy_cmd
from stack_manager.config import StackSettings

app = typer.Typer(
    help="Deploy and tear down the FastAPI/Redis stack on Kubernetes.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all subcommands."""
    configure_logging(StackSettings().log_level)


app.command("deploy")(deploy_cmd.deploy)
app.command("cleanup")(cleanup_cmd.cleanup)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
