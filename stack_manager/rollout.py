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

"""Bounded waits for deployment rollouts."""

from __future__ import annotations

from collections.abc import Sequence

from stack_manager import OperatorLog
from stack_manager.config import DeploymentTarget
from stack_manager.constants import DEPLOYMENT_API, DEPLOYMENT_CACHE, NS_APP
from stack_manager.errors import RolloutTimeoutError
from stack_manager.kubectl import ControlPlaneClient


def default_targets(timeout_seconds: int) -> list[DeploymentTarget]:
    """Cache tier first: the API tier depends on Redis."""
    return [
        DeploymentTarget(DEPLOYMENT_CACHE, NS_APP, timeout_seconds),
        DeploymentTarget(DEPLOYMENT_API, NS_APP, timeout_seconds),
    ]


def wait_ready(client: ControlPlaneClient, target: DeploymentTarget, out: OperatorLog) -> None:
    """Block until a deployment's rollout completes.

    Args:
        client: Control-plane client.
        target: Deployment and its readiness bound.
        out: Operator output sink.

    Raises:
        RolloutTimeoutError: If the rollout does not complete within the bound.
    """
    out.info(f"Waiting for {target.name} to be ready (timeout {target.timeout_seconds}s)...")
    result = client.rollout_status("deployment", target.name, target.namespace, target.timeout_seconds)
    if not result.succeeded:
        out.error(f"{target.name} did not become ready")
        raise RolloutTimeoutError(target.name, target.namespace, target.timeout_seconds, result.diagnostic)
    out.success(f"{target.name} is ready")


def wait_all(client: ControlPlaneClient, targets: Sequence[DeploymentTarget], out: OperatorLog) -> None:
    """Wait for each target in order; the first failure aborts the rest."""
    out.header("Waiting for Deployments to be Ready")
    for target in targets:
        wait_ready(client, target, out)
    out.success("All deployments are ready!")
