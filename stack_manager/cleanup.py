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

"""Confirmation-gated teardown of the application namespace."""

from __future__ import annotations

import threading
from collections.abc import Callable

from tenacity import RetryError, Retrying, retry_if_result, stop_after_delay, stop_when_event_set, wait_fixed

from stack_manager import OperatorLog, logger
from stack_manager.config import CleanupOutcome, StackSettings
from stack_manager.constants import CONFIRMATION_TOKEN, NS_APP, RELATED_NAMESPACE_PATTERNS
from stack_manager.errors import DeletionError, NamespaceDeletionTimeoutError, WaitCancelledError
from stack_manager.kubectl import ControlPlaneClient
from stack_manager.prerequisites import require_cluster_connection

CONFIRM_PROMPT = f"Are you sure you want to continue? ({CONFIRMATION_TOKEN}/no): "


def is_confirmed(answer: str) -> bool:
    """Only the exact token counts; no trimming, no case folding."""
    return answer == CONFIRMATION_TOKEN


def wait_namespace_gone(
    client: ControlPlaneClient,
    namespace: str,
    out: OperatorLog,
    timeout_seconds: float,
    interval_seconds: float,
    cancel: threading.Event | None = None,
) -> None:
    """Poll until ``namespace`` no longer exists.

    The namespace is re-probed on every attempt, never cached.

    Args:
        client: Control-plane client.
        namespace: Namespace being deleted.
        out: Operator output sink; a dot is printed per pending probe.
        timeout_seconds: Give up after this many seconds.
        interval_seconds: Sleep between probes.
        cancel: Event that interrupts the wait when set.

    Raises:
        NamespaceDeletionTimeoutError: If the namespace outlives the bound.
        WaitCancelledError: If ``cancel`` is set first.
    """
    cancel = cancel if cancel is not None else threading.Event()

    def _gone() -> bool:
        exists = client.namespace_exists(namespace)
        if exists:
            out.progress()
        return not exists

    retrying = Retrying(
        stop=stop_after_delay(timeout_seconds) | stop_when_event_set(cancel),
        wait=wait_fixed(interval_seconds),
        retry=retry_if_result(lambda gone: not gone),
        sleep=cancel.wait,
    )
    try:
        retrying(_gone)
    except RetryError as err:
        out.blank()
        if cancel.is_set():
            raise WaitCancelledError(f"Wait for namespace '{namespace}' deletion was cancelled") from err
        raise NamespaceDeletionTimeoutError(
            f"Namespace '{namespace}' still exists after {timeout_seconds:g}s; "
            f"check for stuck finalizers with: kubectl get namespace {namespace} -o yaml"
        ) from err
    out.blank()


def print_remaining_namespaces(client: ControlPlaneClient, out: OperatorLog) -> None:
    out.header("Summary")
    out.detail("All FastAPI application resources have been removed from the cluster.")
    out.blank()
    out.detail("Remaining resources:")
    related = [
        ns for ns in client.list_namespaces()
        if any(pattern in ns for pattern in RELATED_NAMESPACE_PATTERNS)
    ]
    if not related:
        out.detail("No related namespaces found")
    for ns in related:
        out.detail(ns)


def cleanup(
    client: ControlPlaneClient,
    out: OperatorLog,
    confirm: Callable[[str], str],
    settings: StackSettings,
    cancel: threading.Event | None = None,
) -> CleanupOutcome:
    """Delete the application namespace after an explicit confirmation.

    Args:
        client: Control-plane client.
        out: Operator output sink.
        confirm: Reads one line of operator input for the given prompt.
        settings: Supplies the deletion wait bound and poll interval.
        cancel: Optional event that interrupts the deletion wait.

    Returns:
        COMPLETED once the namespace is gone, CANCELLED if the operator
        declined.

    Raises:
        FatalPrerequisiteError: If the cluster is unreachable.
        DeletionError: If the delete call fails.
        NamespaceDeletionTimeoutError: If the namespace outlives the bound.
        WaitCancelledError: If ``cancel`` is set during the wait.
    """
    require_cluster_connection(client)

    out.header("Kubernetes Cleanup")
    out.warning(f"Using cluster context: {client.current_context_name() or '<unknown>'}")
    out.blank()
    out.warning(f"This will DELETE the entire {NS_APP} namespace and all resources within it!")
    out.blank()

    try:
        answer = confirm(CONFIRM_PROMPT)
    except EOFError:
        answer = ""
    if not is_confirmed(answer):
        out.warning("Cleanup cancelled")
        return CleanupOutcome.CANCELLED

    out.header("Deleting Resources")
    out.info(f"Deleting namespace '{NS_APP}'...")
    result = client.delete_namespace(NS_APP, ignore_if_absent=True)
    if not result.succeeded:
        out.error("Failed to delete namespace")
        raise DeletionError(f"Failed to delete namespace '{NS_APP}': {result.diagnostic}")
    out.success("Namespace delete requested")

    out.info("Waiting for namespace to be completely deleted...")
    wait_namespace_gone(
        client,
        NS_APP,
        out,
        timeout_seconds=settings.namespace_delete_timeout_seconds,
        interval_seconds=settings.namespace_poll_interval_seconds,
        cancel=cancel,
    )
    out.success("Cleanup complete!")
    logger.info("namespace %s deleted", NS_APP)

    print_remaining_namespaces(client, out)
    return CleanupOutcome.COMPLETED
