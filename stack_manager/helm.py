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

"""Helm chart installation used for missing cluster add-ons."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import sh

from stack_manager import logger
from stack_manager.executor import command_exists


@dataclass(frozen=True)
class ChartInstall:
    """Coordinates of one Helm chart install.

    Attributes:
        repo_name: Local name for the chart repository.
        repo_url: Chart repository URL.
        chart: Chart reference (``repo/chart``).
        release: Helm release name.
        namespace: Namespace to install into (created if missing).
        set_values: ``key=value`` strings for ``--set``.
    """

    repo_name: str
    repo_url: str
    chart: str
    release: str
    namespace: str
    set_values: Sequence[str] = field(default_factory=tuple)


class HelmClient:
    """Thin wrapper over the helm binary.

    Args:
        binary: helm executable name or path.
    """

    def __init__(self, binary: str = "helm") -> None:
        self.binary = binary

    def available(self) -> bool:
        return command_exists(self.binary)

    def install_chart(self, chart: ChartInstall) -> bool:
        """Add the repo, refresh it, and install the chart.

        Args:
            chart: Chart coordinates.

        Returns:
            True if every helm step exited 0. The release is not re-checked.
        """
        helm = sh.Command(self.binary)
        set_args = [item for val in chart.set_values for item in ("--set", val)]
        steps: list[list[str]] = [
            ["repo", "add", chart.repo_name, chart.repo_url, "--force-update"],
            ["repo", "update", chart.repo_name],
            [
                "install", chart.release, chart.chart,
                "--namespace", chart.namespace,
                "--create-namespace",
                *set_args,
            ],
        ]
        for args in steps:
            try:
                helm(*args)
            except sh.ErrorReturnCode as err:
                logger.warning("helm %s failed: %s", args[0], err.stderr.decode(errors="replace").strip())
                return False
        return True
