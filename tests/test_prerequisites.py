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

from __future__ import annotations

import pytest

from stack_manager.config import AddonStatus
from stack_manager.errors import FatalPrerequisiteError
from stack_manager.prerequisites import INGRESS_ADDON, METRICS_ADDON, check_prerequisites

from conftest import FakeHelm


def test_all_present(control_plane, helm, out, output_buffer):
    context = check_prerequisites(control_plane, helm, out)

    assert context.context_name == "test-context"
    assert context.addons == {
        INGRESS_ADDON: AddonStatus.ALREADY_PRESENT,
        METRICS_ADDON: AddonStatus.ALREADY_PRESENT,
    }
    assert helm.installs == []
    assert "Using cluster context: test-context" in output_buffer.getvalue()


def test_missing_kubectl_is_fatal_and_stops(control_plane, helm, out):
    control_plane.has_client = False

    with pytest.raises(FatalPrerequisiteError, match="kubectl is not installed"):
        check_prerequisites(control_plane, helm, out)

    assert control_plane.calls_named("cluster_info") == []


def test_unreachable_cluster_is_fatal_without_retry(control_plane, helm, out):
    control_plane.reachable = False

    with pytest.raises(FatalPrerequisiteError, match="Not connected"):
        check_prerequisites(control_plane, helm, out)

    assert len(control_plane.calls_named("cluster_info")) == 1
    assert control_plane.calls_named("namespace_exists") == []


def test_missing_ingress_installed_with_helm(control_plane, helm, out):
    control_plane.namespaces.discard("ingress-nginx")

    context = check_prerequisites(control_plane, helm, out)

    assert context.addons[INGRESS_ADDON] is AddonStatus.INSTALLED
    assert len(helm.installs) == 1
    assert helm.installs[0].namespace == "ingress-nginx"
    # installation is not re-probed
    assert len(control_plane.calls_named("namespace_exists")) == 1


def test_failed_ingress_install_continues(control_plane, out):
    control_plane.namespaces.discard("ingress-nginx")
    helm = FakeHelm(install_ok=False)

    context = check_prerequisites(control_plane, helm, out)

    assert context.addons[INGRESS_ADDON] is AddonStatus.INSTALL_ATTEMPTED_UNVERIFIED
    assert METRICS_ADDON in context.addons


def test_missing_ingress_without_helm_prints_manual_steps(control_plane, out, output_buffer):
    control_plane.namespaces.discard("ingress-nginx")
    helm = FakeHelm(available=False)

    context = check_prerequisites(control_plane, helm, out)

    assert context.addons[INGRESS_ADDON] is AddonStatus.SKIPPED_NO_INSTALLER
    assert helm.installs == []
    text = output_buffer.getvalue()
    assert "Helm is not installed" in text
    assert "helm install ingress-nginx ingress-nginx/ingress-nginx" in text


def test_missing_metrics_server_is_advisory(control_plane, helm, out, output_buffer):
    control_plane.deployments.clear()

    context = check_prerequisites(control_plane, helm, out)

    assert context.addons[METRICS_ADDON] is AddonStatus.MISSING
    assert "GKE Autopilot" in output_buffer.getvalue()
