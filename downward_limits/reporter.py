"""Reports the effective limits of a live pod's containers."""

import json
import logging
from typing import Any, Dict, List, Optional

from kubernetes import client
from kubernetes.client.rest import ApiException

from .config import DEFAULTED_RESOURCES, RESOURCE_CPU, RESOURCE_MEMORY, UNSET_DISPLAY
from .defaulter import default_pod_limits, fallback_limits, limit_sources
from .errors import InvalidPodError
from .feature_gates import FeatureGates
from .node_client import KubeNodeCapacityProvider
from .utils import get_container_limits, parse_cpu, parse_memory

logger = logging.getLogger(__name__)


class EffectiveLimitsReporter:
    """Computes the Downward API view of a pod's limits."""

    def __init__(
        self,
        feature_gates: Optional[FeatureGates] = None,
        api: Optional[client.CoreV1Api] = None,
        node_provider=None,
    ):
        """
        Initialize the reporter.

        Args:
            feature_gates: Feature gate snapshot
            api: CoreV1Api client used to read pods
            node_provider: Node capacity provider (API backed when omitted)
        """
        self.feature_gates = feature_gates or FeatureGates()
        self.v1 = api or client.CoreV1Api()
        self.node_provider = node_provider or KubeNodeCapacityProvider(self.v1)

    def get_pod(self, name: str, namespace: str) -> client.V1Pod:
        """Read a pod, raising InvalidPodError if it does not exist."""
        try:
            return self.v1.read_namespaced_pod(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                raise InvalidPodError(f"pod {namespace}/{name} not found") from e
            logger.error(f"Error reading pod {namespace}/{name}: {e}")
            raise

    def report(
        self,
        pod: client.V1Pod,
        node_name: Optional[str] = None,
        container_name: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Compute effective limits for the containers of a pod.

        Args:
            pod: The pod to report on
            node_name: Node to resolve capacity from (pod.spec.node_name if omitted)
            container_name: Restrict the report to one container

        Returns:
            One entry per container with declared and effective limits
        """
        node_name = node_name or pod.spec.node_name
        if not node_name:
            raise InvalidPodError(f"pod {pod.metadata.name} is not scheduled to a node")

        enabled = self.feature_gates.pod_level_resources
        allocatable = self.node_provider.get_allocatable(node_name)
        defaulted_pod, _ = default_pod_limits(pod, None, allocatable, enabled)
        fallback = fallback_limits(pod, allocatable, enabled)

        entries = []
        for original, defaulted in zip(pod.spec.containers or [], defaulted_pod.spec.containers):
            if container_name and original.name != container_name:
                continue

            effective = get_container_limits(defaulted)
            entries.append({
                "container": original.name,
                "node": node_name,
                "declared": get_container_limits(original),
                "effective": effective,
                "source": limit_sources(original, fallback),
                "cpuCores": parse_cpu(effective[RESOURCE_CPU]) if effective[RESOURCE_CPU] != UNSET_DISPLAY else None,
                "memoryBytes": parse_memory(effective[RESOURCE_MEMORY]) if effective[RESOURCE_MEMORY] != UNSET_DISPLAY else None,
            })

        if container_name and not entries:
            raise InvalidPodError(f"container {container_name!r} not found in pod {pod.metadata.name}")

        logger.debug(f"Computed effective limits for {len(entries)} container(s)")
        return entries


def format_report(entries: List[Dict[str, Any]], output: str = "table") -> str:
    """Render report entries as a text table or JSON."""
    if output == "json":
        return json.dumps(entries, indent=2)

    header = ["CONTAINER"]
    for name in DEFAULTED_RESOURCES:
        header.extend([f"{name.upper()} LIMIT", f"{name.upper()} SOURCE"])

    rows = [header]
    for entry in entries:
        row = [entry["container"]]
        for name in DEFAULTED_RESOURCES:
            row.extend([entry["effective"][name], entry["source"][name] or "-"])
        rows.append(row)

    widths = [max(len(row[i]) for row in rows) for i in range(len(header))]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in rows
    )
