"""
Shared fixtures for the limit defaulter tests

Pods are built with the official Kubernetes client models.
"""
import pytest
from unittest.mock import MagicMock

from kubernetes import client
from kubernetes.client.rest import ApiException

from downward_limits.feature_gates import FeatureGates
from downward_limits.node_client import StaticNodeCapacityProvider

NODE_NAME = "worker-1"


def _resources(cpu_limit: str, memory_limit: str) -> client.V1ResourceRequirements:
    resources = client.V1ResourceRequirements()
    if cpu_limit != "" or memory_limit != "":
        resources.limits = {}
    if cpu_limit != "":
        resources.limits["cpu"] = cpu_limit
    if memory_limit != "":
        resources.limits["memory"] = memory_limit
    return resources


@pytest.fixture
def node_allocatable():
    return {"cpu": "6", "memory": "4Gi"}


@pytest.fixture
def make_pod():
    """
    Factory for a single-container pod

    Usage:
        make_pod("1", "0")                      # container limits only
        make_pod("0", "0", pod_level=("1", "")) # with pod-level limits
    An empty string leaves that limit out entirely.
    """
    def _make_pod(cpu_limit, memory_limit, pod_level=None, node_name=NODE_NAME):
        spec = client.V1PodSpec(
            node_name=node_name,
            containers=[
                client.V1Container(name="foo", resources=_resources(cpu_limit, memory_limit)),
            ],
        )
        if pod_level is not None:
            spec.resources = _resources(*pod_level)
        return client.V1Pod(
            metadata=client.V1ObjectMeta(name="test-pod", namespace="default"),
            spec=spec,
        )

    return _make_pod


@pytest.fixture
def static_provider(node_allocatable):
    return StaticNodeCapacityProvider({NODE_NAME: node_allocatable})


@pytest.fixture
def pod_level_gates():
    return FeatureGates.from_string("PodLevelResources=true")


@pytest.fixture
def mock_core_api(node_allocatable):
    """CoreV1Api mock that knows one node"""
    api = MagicMock()

    def read_node(name):
        if name != NODE_NAME:
            raise ApiException(status=404, reason="Not Found")
        return client.V1Node(
            metadata=client.V1ObjectMeta(name=name),
            status=client.V1NodeStatus(allocatable=dict(node_allocatable)),
        )

    api.read_node.side_effect = read_node
    return api


@pytest.fixture
def node_name():
    return NODE_NAME
