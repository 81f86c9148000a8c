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

"""Ordered, fail-fast application of the stack's manifests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import yaml

from stack_manager import OperatorLog, logger
from stack_manager.config import ApplyOutcome, ResourceDefinition
from stack_manager.constants import MANIFEST_FILES
from stack_manager.errors import ApplyError, ManifestNotFoundError
from stack_manager.kubectl import ControlPlaneClient


def load_definitions(manifest_dir: Path, files: Sequence[str] = MANIFEST_FILES) -> list[ResourceDefinition]:
    """Build the ordered resource definitions for a manifest directory.

    Files are not checked here; a missing file is reported when its turn to
    be applied comes.

    Args:
        manifest_dir: Directory containing the manifests.
        files: Manifest file names in apply order.

    Returns:
        One ResourceDefinition per file, positions starting at 1.
    """
    return [
        ResourceDefinition(position=idx, identifier=name, path=manifest_dir / name)
        for idx, name in enumerate(files, start=1)
    ]


def describe_manifest(path: Path) -> str:
    """Summarize the objects in a manifest as ``Kind/name`` pairs.

    Best effort only: kubectl is the authority on whether a file is valid,
    so unreadable or unparsable content yields an empty string.
    """
    try:
        with open(path) as f:
            docs = [doc for doc in yaml.safe_load_all(f) if isinstance(doc, dict)]
    except (OSError, yaml.YAMLError) as exc:
        logger.debug("could not summarize %s: %s", path, exc)
        return ""
    refs = [f"{doc.get('kind', '?')}/{(doc.get('metadata') or {}).get('name', '?')}" for doc in docs]
    return ", ".join(refs)


def apply_all(
    client: ControlPlaneClient,
    definitions: Sequence[ResourceDefinition],
    out: OperatorLog,
) -> list[ApplyOutcome]:
    """Apply every definition in order, stopping at the first failure.

    Nothing is retried or rolled back: definitions applied before a failure
    are left in place.

    Args:
        client: Control-plane client.
        definitions: Definitions in apply order.
        out: Operator output sink.

    Returns:
        One successful ApplyOutcome per definition.

    Raises:
        ManifestNotFoundError: If a definition's file does not exist.
        ApplyError: If kubectl rejects a definition.
    """
    out.header("Deploying FastAPI Application")
    out.info("Applying Kubernetes manifests...")
    outcomes: list[ApplyOutcome] = []
    for definition in sorted(definitions, key=lambda d: d.position):
        if not definition.path.is_file():
            out.error(f"File not found: {definition.path}")
            raise ManifestNotFoundError(definition.identifier, str(definition.path))

        summary = describe_manifest(definition.path)
        result = client.apply_resource(definition.path)
        outcome = ApplyOutcome(definition.identifier, result.succeeded, result.diagnostic)
        if not outcome.success:
            out.error(definition.identifier)
            raise ApplyError(definition.identifier, outcome.diagnostic)

        out.success(f"{definition.identifier} ({summary})" if summary else definition.identifier)
        outcomes.append(outcome)

    out.success(f"Applied {len(outcomes)} manifests")
    return outcomes
