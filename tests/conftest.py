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

import io
from pathlib import Path

import pytest
from rich.console import Console

from stack_manager import OperatorLog
from stack_manager.config import CommandResult, StackSettings
from stack_manager.constants import MANIFEST_FILES, NS_APP


class FakeControlPlane:
    """In-memory ControlPlaneClient that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.has_client = True
        self.reachable = True
        self.context = "test-context"
        self.namespaces: set[str] = {"default", "kube-system", "kube-public", "ingress-nginx"}
        self.deployments: set[tuple[str, str]] = {("metrics-server", "kube-system")}
        self.fail_apply: set[str] = set()
        self.not_ready: set[str] = set()
        self.delete_fails = False
        # Number of probes the namespace survives after a delete call.
        self.delete_lingers = 0

    def _record(self, *call) -> None:
        self.calls.append(call)

    def calls_named(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    def client_version_check(self) -> bool:
        self._record("client_version_check")
        return self.has_client

    def cluster_info(self) -> bool:
        self._record("cluster_info")
        return self.reachable

    def current_context_name(self) -> str:
        self._record("current_context_name")
        return self.context

    def namespace_exists(self, name: str) -> bool:
        self._record("namespace_exists", name)
        if name in self.namespaces:
            return True
        if name == NS_APP and self.delete_lingers > 0:
            self.delete_lingers -= 1
            return True
        return False

    def deployment_exists(self, name: str, namespace: str) -> bool:
        self._record("deployment_exists", name, namespace)
        return (name, namespace) in self.deployments

    def apply_resource(self, path: Path) -> CommandResult:
        self._record("apply_resource", path.name)
        if path.name in self.fail_apply:
            return CommandResult(False, "", f"error validating {path.name}", 1)
        if path.name.startswith("01-"):
            self.namespaces.add(NS_APP)
        return CommandResult(True, f"{path.name} configured\n", "", 0)

    def rollout_status(self, kind: str, name: str, namespace: str, timeout_seconds: int) -> CommandResult:
        self._record("rollout_status", kind, name, namespace, timeout_seconds)
        if name in self.not_ready:
            return CommandResult(
                False, "", f"error: timed out waiting for the condition on {kind}s/{name}", 1,
            )
        return CommandResult(True, f'deployment "{name}" successfully rolled out\n', "", 0)

    def delete_namespace(self, name: str, ignore_if_absent: bool = True) -> CommandResult:
        self._record("delete_namespace", name, ignore_if_absent)
        if self.delete_fails:
            return CommandResult(False, "", "Error from server (Forbidden)", 1)
        if name not in self.namespaces and not ignore_if_absent:
            return CommandResult(False, "", f'namespaces "{name}" not found', 1)
        self.namespaces.discard(name)
        return CommandResult(True, f'namespace "{name}" deleted\n', "", 0)

    def get_resources(self, kind: str, namespace: str | None = None, output: str | None = None) -> CommandResult:
        self._record("get_resources", kind, namespace, output)
        if output:
            return CommandResult(True, "203.0.113.10", "", 0)
        return CommandResult(True, f"NAME    READY\n{kind}-sample   1/1\n", "", 0)

    def list_namespaces(self) -> list[str]:
        self._record("list_namespaces")
        return sorted(self.namespaces)


class FakeHelm:
    def __init__(self, available: bool = True, install_ok: bool = True) -> None:
        self._available = available
        self.install_ok = install_ok
        self.installs: list = []

    def available(self) -> bool:
        return self._available

    def install_chart(self, chart) -> bool:
        self.installs.append(chart)
        return self.install_ok


@pytest.fixture
def control_plane() -> FakeControlPlane:
    return FakeControlPlane()


@pytest.fixture
def helm() -> FakeHelm:
    return FakeHelm()


@pytest.fixture
def output_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def out(output_buffer: io.StringIO) -> OperatorLog:
    return OperatorLog(Console(file=output_buffer, width=200, color_system=None))


@pytest.fixture
def manifest_dir(tmp_path: Path) -> Path:
    for name in MANIFEST_FILES:
        stem = name.split(".")[0]
        (tmp_path / name).write_text(f"apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: {stem}\n")
    return tmp_path


@pytest.fixture
def settings(manifest_dir: Path) -> StackSettings:
    return StackSettings(
        manifest_dir=manifest_dir,
        namespace_delete_timeout_seconds=5,
        namespace_poll_interval_seconds=0,
    )
