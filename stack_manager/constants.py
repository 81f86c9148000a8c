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

"""Constants, add-on dependency loading, and dep_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_dependencies() -> dict:
    """Load add-on chart coordinates from dependencies.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    deps_file = Path(__file__).resolve().parent / "dependencies.yaml"
    with open(deps_file) as f:
        return yaml.safe_load(f)


DEPENDENCIES = load_dependencies()


def dep_value(*keys: str, default: Any = None) -> Any:
    """Safely traverse the DEPENDENCIES dict by key path.

    Args:
        *keys: Sequence of dictionary keys to traverse.
        default: Value to return if any key is missing.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEPENDENCIES
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


# -- Application topology --
NS_APP = "fastapi-app"
DEPLOYMENT_CACHE = "redis-db"
DEPLOYMENT_API = "fastapi-app"
SERVICE_API = "fastapi-app"
APP_LABEL_SELECTOR = "app=fastapi-app"
INGRESS_HOST = "fastapi.local"

MANIFEST_FILES = (
    "01-namespace.yaml",
    "02-redis-configmap.yaml",
    "03-redis-deployment.yaml",
    "04-redis-service.yaml",
    "05-fastapi-configmap.yaml",
    "06-fastapi-deployment.yaml",
    "07-fastapi-service.yaml",
    "08-ingress.yaml",
    "09-hpa.yaml",
    "10-network-policy.yaml",
)

# -- Cleanup --
CONFIRMATION_TOKEN = "yes"
RELATED_NAMESPACE_PATTERNS = ("fastapi", "default", "kube-system", "kube-public")

# -- Defaults --
DEFAULT_MANIFEST_DIR = "k8s-specifications"
DEFAULT_ROLLOUT_TIMEOUT_SECONDS = 300
DEFAULT_ROLLOUT_GUARD_SECONDS = 10
DEFAULT_NAMESPACE_DELETE_TIMEOUT_SECONDS = 600
DEFAULT_NAMESPACE_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_PORT_FORWARD = "8080:80"

INGRESS_IP_JSONPATH = "jsonpath={.items[0].status.loadBalancer.ingress[0].ip}"
INGRESS_IP_PLACEHOLDER = "YOUR_INGRESS_IP"

# Exit codes the executor synthesizes when no process status exists.
EXIT_COMMAND_NOT_FOUND = 127
EXIT_TIMED_OUT = 124
