"""Utility functions for resource quantity parsing and formatting."""

from typing import Dict, Optional

from kubernetes.utils import parse_quantity

from .config import DEFAULTED_RESOURCES, UNSET_DISPLAY


def is_unset_quantity(quantity) -> bool:
    """
    Check whether a quantity counts as unspecified.

    An absent (None or empty) quantity and a quantity whose value is zero
    are both unspecified.

    Examples:
        None -> True
        "0" -> True
        "0Mi" -> True
        "100m" -> False
    """
    if quantity is None or quantity == "":
        return True
    return parse_quantity(quantity) == 0


def get_limit(limits: Optional[Dict[str, str]], resource_name: str) -> Optional[str]:
    """Return the limit for resource_name if it is set to a non-zero value."""
    if not limits:
        return None
    quantity = limits.get(resource_name)
    if is_unset_quantity(quantity):
        return None
    return quantity


def parse_cpu(cpu_string) -> float:
    """
    Parse CPU quantity to cores (float).

    Examples:
        "100m" -> 0.1
        "1" -> 1.0
        "2500m" -> 2.5
    """
    if not cpu_string:
        return 0.0
    return float(parse_quantity(cpu_string))


def parse_memory(memory_string) -> int:
    """
    Parse memory quantity to bytes.

    Examples:
        "128Mi" -> 134217728
        "1Gi" -> 1073741824
        "512M" -> 512000000
    """
    if not memory_string:
        return 0
    return int(parse_quantity(memory_string))


def get_container_limits(container) -> Dict[str, str]:
    """
    Extract CPU and memory limits from a container for display.

    Returns:
        {"cpu": "500m", "memory": "<unset>"}
    """
    result = {name: UNSET_DISPLAY for name in DEFAULTED_RESOURCES}

    resources = container.resources
    if resources and resources.limits:
        for name in DEFAULTED_RESOURCES:
            if name in resources.limits:
                result[name] = str(resources.limits[name])

    return result
