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

"""Read-only post-deploy inventory and operator hints."""

from __future__ import annotations

from stack_manager import OperatorLog
from stack_manager.config import ClusterContext
from stack_manager.constants import (
    APP_LABEL_SELECTOR,
    DEFAULT_PORT_FORWARD,
    INGRESS_HOST,
    INGRESS_IP_JSONPATH,
    INGRESS_IP_PLACEHOLDER,
    SERVICE_API,
)
from stack_manager.kubectl import ControlPlaneClient

INVENTORY = (
    ("Deployments", "deployments"),
    ("Services", "svc"),
    ("Ingress", "ingress"),
    ("Pods", "pods"),
)


def print_cluster_summary(context: ClusterContext, out: OperatorLog) -> None:
    """Print the context name and how each add-on check ended."""
    out.detail(f"Cluster context: {context.context_name or '<unknown>'}")
    for name, status in context.addons.items():
        out.detail(f"{name}: {status.value}")


def print_inventory(client: ControlPlaneClient, namespace: str, out: OperatorLog) -> None:
    """List deployments, services, ingress and pods in ``namespace``.

    Failures only produce a warning; this never affects the run's outcome.
    """
    out.header("Deployment Information")
    out.detail(f"Namespace: {namespace}")
    for title, kind in INVENTORY:
        out.blank()
        out.console.print(f"[bold]{title}:[/bold]")
        result = client.get_resources(kind, namespace)
        if result.succeeded:
            out.raw(result.stdout)
        else:
            out.warning(f"Could not list {kind}: {result.diagnostic}")


def ingress_address(client: ControlPlaneClient, namespace: str) -> str:
    result = client.get_resources("ingress", namespace, output=INGRESS_IP_JSONPATH)
    address = result.stdout.strip() if result.succeeded else ""
    return address or INGRESS_IP_PLACEHOLDER


def print_next_steps(client: ControlPlaneClient, namespace: str, out: OperatorLog) -> None:
    out.header("Next Steps")
    steps = [
        ("Port forward to access the application locally:",
         [f"kubectl port-forward -n {namespace} svc/{SERVICE_API} {DEFAULT_PORT_FORWARD}"]),
        ("Get the Ingress IP/Hostname:",
         [f"kubectl get ingress -n {namespace} -o wide"]),
        ("Add to your hosts file (on Linux/Mac):",
         [f"{ingress_address(client, namespace)} {INGRESS_HOST}"]),
        ("Access the application:",
         [f"http://{INGRESS_HOST} (via ingress)",
          f"http://localhost:{DEFAULT_PORT_FORWARD.split(':')[0]} (via port-forward)"]),
        ("View logs:",
         [f"kubectl logs -n {namespace} -l {APP_LABEL_SELECTOR} -f"]),
        ("Monitor HPA:",
         [f"kubectl get hpa -n {namespace} -w"]),
    ]
    for idx, (title, lines) in enumerate(steps, start=1):
        out.console.print(f"{idx}. {title}", highlight=False)
        for line in lines:
            out.detail(line)
        out.blank()
