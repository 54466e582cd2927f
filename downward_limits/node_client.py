"""Node capacity providers used to resolve allocatable resources."""

import copy
import logging
import threading
from typing import Dict, Optional

from kubernetes import client
from kubernetes.client.rest import ApiException

from .errors import NodeNotFoundError

logger = logging.getLogger(__name__)


class KubeNodeCapacityProvider:
    """Resolves node allocatable capacity through the Kubernetes API."""

    def __init__(self, api: Optional[client.CoreV1Api] = None):
        """
        Initialize the provider.

        Args:
            api: CoreV1Api client (a new one is created when omitted)
        """
        self.v1 = api or client.CoreV1Api()

    def get_allocatable(self, node_name: str) -> Dict[str, str]:
        """
        Get the allocatable resources of a node.

        Args:
            node_name: Name of the node

        Returns:
            ResourceList of the node's allocatable capacity

        Raises:
            NodeNotFoundError: if the node does not exist
        """
        if not node_name:
            raise NodeNotFoundError(node_name)

        try:
            node = self.v1.read_node(name=node_name)
        except ApiException as e:
            if e.status == 404:
                logger.warning(f"Node {node_name} not found")
                raise NodeNotFoundError(node_name) from e
            logger.error(f"Error reading node {node_name}: {e}")
            raise

        allocatable = dict((node.status and node.status.allocatable) or {})
        logger.debug(f"Node {node_name} allocatable: {allocatable}")
        return allocatable


class StaticNodeCapacityProvider:
    """Thread-safe in-memory node capacity table."""

    def __init__(self, nodes: Optional[Dict[str, Dict[str, str]]] = None):
        """Initialize the table from a {node_name: allocatable} mapping."""
        self._nodes: Dict[str, Dict[str, str]] = copy.deepcopy(nodes or {})
        self._lock = threading.RLock()

    def set_allocatable(self, node_name: str, allocatable: Dict[str, str]) -> None:
        """Add or replace the allocatable resources for a node."""
        with self._lock:
            self._nodes[node_name] = dict(allocatable)
            logger.debug(f"Stored allocatable for node {node_name}")

    def remove(self, node_name: str) -> Optional[Dict[str, str]]:
        """Remove a node from the table."""
        with self._lock:
            return self._nodes.pop(node_name, None)

    def get_allocatable(self, node_name: str) -> Dict[str, str]:
        """
        Get the allocatable resources of a node.

        Raises:
            NodeNotFoundError: if the node is not in the table
        """
        with self._lock:
            if node_name not in self._nodes:
                raise NodeNotFoundError(node_name)
            return dict(self._nodes[node_name])
