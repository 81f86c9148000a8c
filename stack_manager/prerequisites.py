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

"""Environment checks run before any manifest is applied."""

from __future__ import annotations

from stack_manager import OperatorLog
from stack_manager.config import AddonStatus, ClusterContext, Prerequisite, Severity
from stack_manager.constants import dep_value
from stack_manager.errors import FatalPrerequisiteError
from stack_manager.helm import ChartInstall, HelmClient
from stack_manager.kubectl import ControlPlaneClient

INGRESS_ADDON = "NGINX Ingress Controller"
METRICS_ADDON = "Metrics Server"
CLUSTER_CONNECTIVITY = "cluster connectivity"


def ingress_chart() -> ChartInstall:
    """Build the ingress-nginx chart coordinates from dependencies.yaml."""
    return ChartInstall(
        repo_name=dep_value("ingress_nginx", "repo_name", default="ingress-nginx"),
        repo_url=dep_value("ingress_nginx", "repo_url", default="https://kubernetes.github.io/ingress-nginx"),
        chart=dep_value("ingress_nginx", "chart", default="ingress-nginx/ingress-nginx"),
        release=dep_value("ingress_nginx", "release", default="ingress-nginx"),
        namespace=dep_value("ingress_nginx", "namespace", default="ingress-nginx"),
        set_values=tuple(dep_value("ingress_nginx", "set_values", default=[])),
    )


def require_cluster_connection(client: ControlPlaneClient) -> None:
    """Abort unless kubectl can reach the cluster.

    Shared by the deploy and cleanup workflows.

    Raises:
        FatalPrerequisiteError: If ``kubectl cluster-info`` fails.
    """
    if not client.cluster_info():
        raise FatalPrerequisiteError("Not connected to a Kubernetes cluster. Please configure kubectl.")


def _install_ingress(helm: HelmClient, out: OperatorLog) -> AddonStatus:
    chart = ingress_chart()
    if not helm.available():
        out.error("Helm is not installed. Please install NGINX Ingress Controller manually:")
        out.detail(f"helm repo add {chart.repo_name} {chart.repo_url}")
        out.detail(f"helm install {chart.release} {chart.chart} --namespace {chart.namespace} --create-namespace")
        return AddonStatus.SKIPPED_NO_INSTALLER

    out.warning(f"{INGRESS_ADDON} not found. Installing...")
    if helm.install_chart(chart):
        out.success(f"{INGRESS_ADDON} installed")
        return AddonStatus.INSTALLED
    out.warning(f"{INGRESS_ADDON} install did not complete cleanly; continuing without verification")
    return AddonStatus.INSTALL_ATTEMPTED_UNVERIFIED


def build_prerequisites(client: ControlPlaneClient, helm: HelmClient, out: OperatorLog) -> list[Prerequisite]:
    """Return the ordered checks for the deploy workflow."""
    ingress_ns = dep_value("ingress_nginx", "namespace", default="ingress-nginx")
    metrics_deployment = dep_value("metrics_server", "deployment", default="metrics-server")
    metrics_ns = dep_value("metrics_server", "namespace", default="kube-system")
    return [
        Prerequisite(
            name="kubectl",
            probe=client.client_version_check,
            severity=Severity.FATAL,
            guidance=("kubectl is not installed. Please install kubectl first.",),
        ),
        Prerequisite(
            name=CLUSTER_CONNECTIVITY,
            probe=client.cluster_info,
            severity=Severity.FATAL,
            guidance=("Not connected to a Kubernetes cluster. Please configure kubectl.",),
        ),
        Prerequisite(
            name=INGRESS_ADDON,
            probe=lambda: client.namespace_exists(ingress_ns),
            severity=Severity.ADVISORY,
            remediation=lambda: _install_ingress(helm, out),
        ),
        Prerequisite(
            name=METRICS_ADDON,
            probe=lambda: client.deployment_exists(metrics_deployment, metrics_ns),
            severity=Severity.ADVISORY,
            guidance=(
                f"{METRICS_ADDON} not found.",
                "Note: GKE Autopilot manages system namespaces and includes Metrics Server by default.",
                "If you need a custom metrics server, use a separate namespace.",
            ),
        ),
    ]


def check_prerequisites(client: ControlPlaneClient, helm: HelmClient, out: OperatorLog) -> ClusterContext:
    """Verify tooling and connectivity, and prepare optional add-ons.

    Fatal checks stop the run at the first failure. Advisory checks never do:
    a missing add-on is remediated when possible, otherwise guidance is
    printed and the sequence continues.

    Args:
        client: Control-plane client.
        helm: Helm client used to install a missing ingress controller.
        out: Operator output sink.

    Returns:
        The active context name and the status of each add-on.

    Raises:
        FatalPrerequisiteError: If kubectl is missing or the cluster is unreachable.
    """
    out.header("Checking Prerequisites")
    context = ClusterContext()

    for prereq in build_prerequisites(client, helm, out):
        if prereq.severity is Severity.ADVISORY:
            out.warning(f"Checking for {prereq.name}...")
        satisfied = prereq.probe()

        if prereq.severity is Severity.FATAL:
            if not satisfied:
                raise FatalPrerequisiteError(" ".join(prereq.guidance) or f"{prereq.name} check failed")
            out.success(f"{prereq.name} OK")
            if prereq.name == CLUSTER_CONNECTIVITY:
                context.context_name = client.current_context_name()
                out.success(f"Using cluster context: {context.context_name or '<unknown>'}")
            continue

        if satisfied:
            out.success(f"{prereq.name} is installed")
            context.addons[prereq.name] = AddonStatus.ALREADY_PRESENT
        elif prereq.remediation is not None:
            context.addons[prereq.name] = prereq.remediation()
        else:
            for line in prereq.guidance:
                out.warning(line)
            context.addons[prereq.name] = AddonStatus.MISSING

    return context
