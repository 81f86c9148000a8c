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

"""Errors that abort a deploy or cleanup run with exit status 1."""

from __future__ import annotations


class StackError(RuntimeError):
    """Base class for every fatal workflow condition."""


class FatalPrerequisiteError(StackError):
    """A required tool is missing or the cluster is unreachable."""


class ApplyError(StackError):
    """A manifest failed to apply; earlier manifests stay applied."""

    def __init__(self, identifier: str, diagnostic: str = "") -> None:
        self.identifier = identifier
        self.diagnostic = diagnostic
        message = f"Failed to apply {identifier}"
        if diagnostic:
            message = f"{message}: {diagnostic}"
        super().__init__(message)


class ManifestNotFoundError(ApplyError):
    def __init__(self, identifier: str, path: str) -> None:
        super().__init__(identifier, f"File not found: {path}")
        self.path = path


class RolloutTimeoutError(StackError):
    def __init__(self, deployment: str, namespace: str, timeout_seconds: int, diagnostic: str = "") -> None:
        self.deployment = deployment
        self.namespace = namespace
        self.timeout_seconds = timeout_seconds
        self.diagnostic = diagnostic
        message = f"Deployment {namespace}/{deployment} not ready within {timeout_seconds}s"
        if diagnostic:
            message = f"{message}: {diagnostic}"
        super().__init__(message)


class DeletionError(StackError):
    """The namespace delete call itself failed (absence is not a failure)."""


class NamespaceDeletionTimeoutError(StackError):
    """The namespace still exists after the deletion wait bound."""


class WaitCancelledError(StackError):
    """A bounded wait was cancelled before its condition was met."""
