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

"""Settings and the value types shared between workflow steps."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stack_manager.constants import (
    DEFAULT_MANIFEST_DIR,
    DEFAULT_NAMESPACE_DELETE_TIMEOUT_SECONDS,
    DEFAULT_NAMESPACE_POLL_INTERVAL_SECONDS,
    DEFAULT_ROLLOUT_GUARD_SECONDS,
    DEFAULT_ROLLOUT_TIMEOUT_SECONDS,
)


# ============================================================================
# Settings
# ============================================================================

class StackSettings(BaseSettings):
    """Tool settings, auto-loaded from STACK_* env vars.

    The namespace, manifest order and deployment names are fixed for this
    topology and live in ``constants``; only tooling knobs are configurable.

    Attributes:
        manifest_dir: Directory holding the ordered YAML manifests.
        kubectl_bin: kubectl executable name or path.
        helm_bin: helm executable name or path.
        rollout_timeout_seconds: Readiness bound per deployment.
        rollout_guard_seconds: Extra time the executor grants kubectl beyond the bound.
        namespace_delete_timeout_seconds: Bound on waiting for namespace removal.
        namespace_poll_interval_seconds: Sleep between namespace existence probes.
        log_level: Level for the ``stack_manager`` diagnostic logger.
    """

    model_config = SettingsConfigDict(env_prefix="STACK_", extra="ignore")

    manifest_dir: Path = Path(DEFAULT_MANIFEST_DIR)
    kubectl_bin: str = "kubectl"
    helm_bin: str = "helm"
    rollout_timeout_seconds: int = Field(default=DEFAULT_ROLLOUT_TIMEOUT_SECONDS, ge=1)
    rollout_guard_seconds: int = Field(default=DEFAULT_ROLLOUT_GUARD_SECONDS, ge=0)
    namespace_delete_timeout_seconds: float = Field(default=DEFAULT_NAMESPACE_DELETE_TIMEOUT_SECONDS, ge=0)
    namespace_poll_interval_seconds: float = Field(default=DEFAULT_NAMESPACE_POLL_INTERVAL_SECONDS, ge=0)
    log_level: str = Field(default="WARNING", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


# ============================================================================
# Value types
# ============================================================================

@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external process invocation.

    Attributes:
        succeeded: True when the process exited with status 0.
        stdout: Captured standard output.
        stderr: Captured standard error.
        exit_code: Process exit status (127 if not found, 124 on guard expiry).
        timed_out: Whether the executor's guard timeout fired.
    """

    succeeded: bool
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    timed_out: bool = False

    @property
    def diagnostic(self) -> str:
        """Best human-readable explanation of the result."""
        return (self.stderr or self.stdout).strip()


@dataclass(frozen=True)
class ResourceDefinition:
    """One manifest file, identified by its position in the apply order."""

    position: int
    identifier: str
    path: Path


@dataclass(frozen=True)
class ApplyOutcome:
    identifier: str
    success: bool
    diagnostic: str = ""


@dataclass(frozen=True)
class DeploymentTarget:
    """A deployment whose rollout must complete within ``timeout_seconds``."""

    name: str
    namespace: str
    timeout_seconds: int = DEFAULT_ROLLOUT_TIMEOUT_SECONDS


class Severity(enum.Enum):
    FATAL = "fatal"
    ADVISORY = "advisory"


class AddonStatus(enum.Enum):
    """Result of checking (and possibly installing) a cluster add-on."""

    ALREADY_PRESENT = "already present"
    INSTALLED = "installed"
    INSTALL_ATTEMPTED_UNVERIFIED = "install attempted, not verified"
    SKIPPED_NO_INSTALLER = "missing, no installer available"
    MISSING = "missing"


@dataclass(frozen=True)
class Prerequisite:
    """An environment check run before anything is applied.

    Attributes:
        name: Human-readable name printed in the report.
        probe: Returns True when the prerequisite is satisfied.
        severity: FATAL aborts the run on failure; ADVISORY only warns.
        remediation: Optional action run when an advisory probe fails.
        guidance: Lines printed when the probe fails and nothing remediates it.
    """

    name: str
    probe: Callable[[], bool]
    severity: Severity
    remediation: Callable[[], AddonStatus] | None = None
    guidance: tuple[str, ...] = ()


@dataclass
class ClusterContext:
    """What the prerequisite checker learned about the target cluster."""

    context_name: str = ""
    addons: dict[str, AddonStatus] = field(default_factory=dict)


class CleanupOutcome(enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
