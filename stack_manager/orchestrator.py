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

"""Orchestration functions that compose the steps into the two workflows."""

from __future__ import annotations

import threading
from collections.abc import Callable

from stack_manager import OperatorLog, logger
from stack_manager.cleanup import cleanup
from stack_manager.config import CleanupOutcome, ClusterContext, StackSettings
from stack_manager.constants import NS_APP
from stack_manager.helm import HelmClient
from stack_manager.kubectl import ControlPlaneClient, KubectlClient
from stack_manager.manifests import apply_all, load_definitions
from stack_manager.prerequisites import check_prerequisites
from stack_manager.report import print_cluster_summary, print_inventory, print_next_steps
from stack_manager.rollout import default_targets, wait_all


def build_clients(settings: StackSettings) -> tuple[KubectlClient, HelmClient]:
    return (
        KubectlClient(settings.kubectl_bin, guard_seconds=settings.rollout_guard_seconds),
        HelmClient(settings.helm_bin),
    )


def run_deploy(
    settings: StackSettings,
    out: OperatorLog,
    client: ControlPlaneClient | None = None,
    helm: HelmClient | None = None,
) -> ClusterContext:
    """Run the deploy workflow: prerequisites, apply, rollout wait, report.

    Args:
        settings: Tool settings.
        out: Operator output sink.
        client: Control-plane client, or None to build one from settings.
        helm: Helm client, or None to build one from settings.

    Returns:
        The cluster context gathered by the prerequisite checks.

    Raises:
        StackError: If any fatal step fails.
    """
    if client is None or helm is None:
        default_client, default_helm = build_clients(settings)
        client = client if client is not None else default_client
        helm = helm if helm is not None else default_helm

    context = check_prerequisites(client, helm, out)

    definitions = load_definitions(settings.manifest_dir)
    logger.info("applying %d manifests from %s", len(definitions), settings.manifest_dir)
    apply_all(client, definitions, out)
    out.header("Deployment Complete!")

    wait_all(client, default_targets(settings.rollout_timeout_seconds), out)

    print_cluster_summary(context, out)
    print_inventory(client, NS_APP, out)
    print_next_steps(client, NS_APP, out)
    return context


def run_cleanup(
    settings: StackSettings,
    out: OperatorLog,
    client: ControlPlaneClient | None = None,
    confirm: Callable[[str], str] | None = None,
    cancel: threading.Event | None = None,
) -> CleanupOutcome:
    """Run the teardown workflow.

    Args:
        settings: Tool settings.
        out: Operator output sink.
        client: Control-plane client, or None to build one from settings.
        confirm: Line reader for the confirmation prompt; defaults to the console.
        cancel: Optional event that interrupts the deletion wait.

    Raises:
        StackError: If connectivity, deletion or the deletion wait fails.
    """
    if client is None:
        client, _ = build_clients(settings)
    if confirm is None:
        confirm = out.console.input
    return cleanup(client, out, confirm, settings, cancel=cancel)
