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

import threading

import pytest

from stack_manager.cleanup import cleanup, is_confirmed, wait_namespace_gone
from stack_manager.config import CleanupOutcome
from stack_manager.constants import NS_APP
from stack_manager.errors import (
    DeletionError,
    FatalPrerequisiteError,
    NamespaceDeletionTimeoutError,
    WaitCancelledError,
)


def _answer(text):
    def confirm(prompt):
        return text
    return confirm


@pytest.mark.parametrize("answer", ["no", "y", "", "YES", "Yes", "yes ", " yes", "yess"])
def test_anything_but_exact_yes_cancels(control_plane, out, settings, answer):
    control_plane.namespaces.add(NS_APP)

    outcome = cleanup(control_plane, out, _answer(answer), settings)

    assert outcome is CleanupOutcome.CANCELLED
    assert control_plane.calls_named("delete_namespace") == []
    assert NS_APP in control_plane.namespaces


def test_yes_deletes_exactly_once(control_plane, out, settings, output_buffer):
    control_plane.namespaces.add(NS_APP)
    control_plane.delete_lingers = 3

    outcome = cleanup(control_plane, out, _answer("yes"), settings)

    assert outcome is CleanupOutcome.COMPLETED
    assert control_plane.calls_named("delete_namespace") == [("delete_namespace", NS_APP, True)]
    text = output_buffer.getvalue()
    assert "..." in text
    assert "Cleanup complete!" in text
    assert "kube-system" in text


def test_absent_namespace_is_success(control_plane, out, settings):
    assert NS_APP not in control_plane.namespaces

    assert cleanup(control_plane, out, _answer("yes"), settings) is CleanupOutcome.COMPLETED
    assert len(control_plane.calls_named("delete_namespace")) == 1


def test_unreachable_cluster_is_fatal_before_prompt(control_plane, out, settings):
    control_plane.reachable = False
    prompted = []

    with pytest.raises(FatalPrerequisiteError):
        cleanup(control_plane, out, lambda p: prompted.append(p) or "yes", settings)

    assert prompted == []
    assert control_plane.calls_named("delete_namespace") == []


def test_delete_failure_raises(control_plane, out, settings):
    control_plane.namespaces.add(NS_APP)
    control_plane.delete_fails = True

    with pytest.raises(DeletionError, match="Forbidden"):
        cleanup(control_plane, out, _answer("yes"), settings)

    assert control_plane.calls_named("namespace_exists") == []


def test_eof_on_prompt_cancels(control_plane, out, settings):
    def confirm(prompt):
        raise EOFError

    assert cleanup(control_plane, out, confirm, settings) is CleanupOutcome.CANCELLED


def test_wait_times_out_when_namespace_never_disappears(control_plane, out):
    control_plane.namespaces.add(NS_APP)

    with pytest.raises(NamespaceDeletionTimeoutError, match="finalizers"):
        wait_namespace_gone(control_plane, NS_APP, out, timeout_seconds=0, interval_seconds=0)

    assert len(control_plane.calls_named("namespace_exists")) == 1


def test_wait_is_cancellable(control_plane, out):
    control_plane.namespaces.add(NS_APP)
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(WaitCancelledError):
        wait_namespace_gone(control_plane, NS_APP, out, timeout_seconds=60, interval_seconds=0, cancel=cancel)


def test_is_confirmed_is_exact():
    assert is_confirmed("yes")
    assert not is_confirmed("yes\n")
    assert not is_confirmed("YES")
