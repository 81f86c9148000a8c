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

"""Control-plane client interface and its kubectl implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from stack_manager.config import CommandResult
from stack_manager.executor import Runner, command_exists, execute


class ControlPlaneClient(Protocol):
    """Everything the workflows need from the cluster.

    Probes return booleans; mutating and reading calls return the raw
    CommandResult so callers decide what a failure means.
    """

    def client_version_check(self) -> bool: ...

    def cluster_info(self) -> bool: ...

    def current_context_name(self) -> str: ...

    def namespace_exists(self, name: str) -> bool: ...

    def deployment_exists(self, name: str, namespace: str) -> bool: ...

    def apply_resource(self, path: Path) -> CommandResult: ...

    def rollout_status(self, kind: str, name: str, namespace: str, timeout_seconds: int) -> CommandResult: ...

    def delete_namespace(self, name: str, ignore_if_absent: bool = True) -> CommandResult: ...

    def get_resources(self, kind: str, namespace: str | None = None, output: str | None = None) -> CommandResult: ...

    def list_namespaces(self) -> list[str]: ...


class KubectlClient:
    """ControlPlaneClient backed by the kubectl binary.

    Args:
        binary: kubectl executable name or path.
        runner: Command executor, replaceable in tests.
        guard_seconds: Extra executor timeout granted beyond a rollout bound.
    """

    def __init__(self, binary: str = "kubectl", runner: Runner = execute, guard_seconds: int = 10) -> None:
        self.binary = binary
        self._run = runner
        self.guard_seconds = guard_seconds

    def _kubectl(self, *args: str, timeout: float | None = None) -> CommandResult:
        return self._run(self.binary, list(args), timeout=timeout)

    def client_version_check(self) -> bool:
        if not command_exists(self.binary):
            return False
        return self._kubectl("version", "--client").succeeded

    def cluster_info(self) -> bool:
        return self._kubectl("cluster-info").succeeded

    def current_context_name(self) -> str:
        result = self._kubectl("config", "current-context")
        return result.stdout.strip() if result.succeeded else ""

    def namespace_exists(self, name: str) -> bool:
        return self._kubectl("get", "namespace", name).succeeded

    def deployment_exists(self, name: str, namespace: str) -> bool:
        return self._kubectl("get", "deployment", name, "-n", namespace).succeeded

    def apply_resource(self, path: Path) -> CommandResult:
        return self._kubectl("apply", "-f", str(path))

    def rollout_status(self, kind: str, name: str, namespace: str, timeout_seconds: int) -> CommandResult:
        """Block until the rollout completes or kubectl's own timeout fires."""
        return self._kubectl(
            "rollout", "status", f"{kind}/{name}",
            "-n", namespace,
            f"--timeout={timeout_seconds}s",
            timeout=timeout_seconds + self.guard_seconds,
        )

    def delete_namespace(self, name: str, ignore_if_absent: bool = True) -> CommandResult:
        args = ["delete", "namespace", name]
        if ignore_if_absent:
            args.append("--ignore-not-found=true")
        return self._kubectl(*args)

    def get_resources(self, kind: str, namespace: str | None = None, output: str | None = None) -> CommandResult:
        args = ["get", kind]
        if namespace:
            args += ["-n", namespace]
        if output:
            args += ["-o", output]
        return self._kubectl(*args)

    def list_namespaces(self) -> list[str]:
        result = self._kubectl("get", "namespaces", "-o", "jsonpath={.items[*].metadata.name}")
        if not result.succeeded:
            return []
        return result.stdout.split()
