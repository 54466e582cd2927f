"""
Tests for node capacity providers
"""
import pytest
from kubernetes.client.rest import ApiException

from downward_limits.errors import NodeNotFoundError
from downward_limits.node_client import KubeNodeCapacityProvider, StaticNodeCapacityProvider


class TestKubeNodeCapacityProvider:
    """Test allocatable lookups through the API"""

    def test_get_allocatable(self, mock_core_api, node_name):
        provider = KubeNodeCapacityProvider(mock_core_api)

        assert provider.get_allocatable(node_name) == {"cpu": "6", "memory": "4Gi"}
        mock_core_api.read_node.assert_called_once_with(name=node_name)

    def test_node_not_found(self, mock_core_api):
        provider = KubeNodeCapacityProvider(mock_core_api)

        with pytest.raises(NodeNotFoundError) as excinfo:
            provider.get_allocatable("missing-node")

        assert "missing-node" in str(excinfo.value)

    def test_empty_node_name(self, mock_core_api):
        provider = KubeNodeCapacityProvider(mock_core_api)

        with pytest.raises(NodeNotFoundError):
            provider.get_allocatable("")
        mock_core_api.read_node.assert_not_called()

    def test_other_api_errors_propagate(self, mock_core_api, node_name):
        mock_core_api.read_node.side_effect = ApiException(status=500, reason="Internal Server Error")
        provider = KubeNodeCapacityProvider(mock_core_api)

        with pytest.raises(ApiException):
            provider.get_allocatable(node_name)


class TestStaticNodeCapacityProvider:
    """Test the in-memory capacity table"""

    def test_get_allocatable_returns_copy(self, static_provider, node_name):
        allocatable = static_provider.get_allocatable(node_name)
        allocatable["cpu"] = "1"

        assert static_provider.get_allocatable(node_name)["cpu"] == "6"

    def test_set_and_remove(self):
        provider = StaticNodeCapacityProvider()
        provider.set_allocatable("node-a", {"cpu": "2"})

        assert provider.get_allocatable("node-a") == {"cpu": "2"}
        assert provider.remove("node-a") == {"cpu": "2"}
        with pytest.raises(NodeNotFoundError):
            provider.get_allocatable("node-a")
