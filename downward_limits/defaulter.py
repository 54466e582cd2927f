"""Effective limit defaulting for containers consumed by the Downward API."""

import copy
import logging
from typing import Dict, Optional, Tuple

from kubernetes import client

from .config import (
    DEFAULTED_RESOURCES,
    SOURCE_CONTAINER,
    SOURCE_NODE,
    SOURCE_POD,
)
from .errors import InvalidPodError
from .feature_gates import FeatureGates
from .utils import get_limit

logger = logging.getLogger(__name__)


def pod_level_limits(pod: client.V1Pod) -> Optional[Dict[str, str]]:
    """Return the pod-level limits of a pod, or None when it declares none."""
    # Older client models have no pod-level resources field
    resources = getattr(pod.spec, "resources", None)
    if resources is None:
        return None
    return resources.limits


def fallback_limits(
    pod: client.V1Pod,
    node_allocatable: Optional[Dict[str, str]],
    pod_level_resources_enabled: bool,
) -> Dict[str, Tuple[str, str]]:
    """
    Build the values used to fill unset container limits.

    Node allocatable is the base; non-zero pod-level limits override it
    when pod-level resources are enabled.

    Returns:
        {resource_name: (quantity, source)}
    """
    fallback = {}
    allocatable = node_allocatable or {}

    for name in DEFAULTED_RESOURCES:
        if name in allocatable:
            fallback[name] = (allocatable[name], SOURCE_NODE)

    if pod_level_resources_enabled:
        pod_limits = pod_level_limits(pod)
        for name in DEFAULTED_RESOURCES:
            quantity = get_limit(pod_limits, name)
            if quantity is not None:
                fallback[name] = (quantity, SOURCE_POD)

    return fallback


def limit_sources(
    container: client.V1Container,
    fallback: Dict[str, Tuple[str, str]],
) -> Dict[str, Optional[str]]:
    """
    Report where each effective limit of a container comes from.

    A resource that stays unset maps to None.
    """
    limits = container.resources.limits if container.resources else None
    sources = {}
    for name in DEFAULTED_RESOURCES:
        if get_limit(limits, name) is not None:
            sources[name] = SOURCE_CONTAINER
        elif name in fallback:
            sources[name] = fallback[name][1]
        else:
            sources[name] = None
    return sources


def merge_container_limits(
    container: client.V1Container,
    fallback: Dict[str, Tuple[str, str]],
) -> None:
    """Fill unset CPU and memory limits of container in place."""
    if container.resources is None:
        container.resources = client.V1ResourceRequirements()
    if container.resources.limits is None:
        container.resources.limits = {}

    limits = container.resources.limits
    for name in DEFAULTED_RESOURCES:
        if get_limit(limits, name) is not None:
            continue
        if name not in fallback:
            logger.debug(f"No fallback for {name} limit of container {container.name}, leaving it unset")
            continue
        limits[name] = fallback[name][0]


def default_pod_limits(
    pod: client.V1Pod,
    container: Optional[client.V1Container],
    node_allocatable: Optional[Dict[str, str]],
    pod_level_resources_enabled: bool,
) -> Tuple[client.V1Pod, Optional[client.V1Container]]:
    """
    Return copies of pod and container with CPU and memory limits defaulted.

    A container limit that is absent or zero is replaced by the pod-level
    limit (when pod_level_resources_enabled and that limit is non-zero),
    otherwise by the node's allocatable value. Pod-level limits are copied
    through unchanged. Neither input is mutated.

    Args:
        pod: Pod whose containers should be defaulted
        container: Optional single container to default as well
        node_allocatable: Allocatable ResourceList of the pod's node
        pod_level_resources_enabled: Whether pod-level limits take part

    Returns:
        Tuple of (defaulted pod, defaulted container or None)
    """
    if pod is None:
        raise InvalidPodError("invalid input, pod cannot be None")
    if pod.spec is None:
        raise InvalidPodError("invalid input, pod has no spec")

    fallback = fallback_limits(pod, node_allocatable, pod_level_resources_enabled)

    output_pod = copy.deepcopy(pod)
    for output_container in output_pod.spec.containers or []:
        merge_container_limits(output_container, fallback)

    output_container = None
    if container is not None:
        output_container = copy.deepcopy(container)
        merge_container_limits(output_container, fallback)

    return output_pod, output_container


class LimitDefaulter:
    """Defaults pod limits against the allocatable capacity of one node."""

    def __init__(self, node_provider, node_name: str, feature_gates: Optional[FeatureGates] = None):
        """
        Initialize the defaulter.

        Args:
            node_provider: Object with get_allocatable(node_name)
            node_name: Node the pods run on
            feature_gates: Feature gate snapshot (defaults when omitted)
        """
        self.node_provider = node_provider
        self.node_name = node_name
        self.feature_gates = feature_gates or FeatureGates()

    def default_limits(
        self,
        pod: client.V1Pod,
        container: Optional[client.V1Container] = None,
    ) -> Tuple[client.V1Pod, Optional[client.V1Container]]:
        """
        Default pod (and optionally container) limits for the Downward API.

        Raises:
            NodeNotFoundError: if the node capacity cannot be resolved
            InvalidPodError: if the pod is None
        """
        if pod is None:
            raise InvalidPodError("invalid input, pod cannot be None")

        allocatable = self.node_provider.get_allocatable(self.node_name)
        logger.debug(f"Allocatable for node {self.node_name}: {allocatable}")

        return default_pod_limits(
            pod,
            container,
            allocatable,
            self.feature_gates.pod_level_resources,
        )

    def effective_limits(self, pod: client.V1Pod, container_name: str) -> Dict[str, str]:
        """Get the defaulted limits of one named container."""
        defaulted_pod, _ = self.default_limits(pod)
        for container in defaulted_pod.spec.containers or []:
            if container.name == container_name:
                return dict(container.resources.limits)
        raise InvalidPodError(f"container {container_name!r} not found in pod")
