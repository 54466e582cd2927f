"""Exceptions raised while computing effective container limits."""


class DefaultingError(Exception):
    """Base class for limit defaulting errors."""


class InvalidPodError(DefaultingError):
    """The pod (or the requested container) cannot be defaulted."""


class NodeNotFoundError(DefaultingError):
    """The node whose allocatable capacity was requested does not exist."""

    def __init__(self, node_name: str):
        self.node_name = node_name
        super().__init__(f"failed to find node object {node_name!r}, expected a node")
