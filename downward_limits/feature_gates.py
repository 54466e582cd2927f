"""Feature gate snapshot for limit defaulting."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .config import DEFAULT_FEATURE_GATES, POD_LEVEL_RESOURCES_GATE

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ValueError(f"invalid value {value!r}, expected true or false")


@dataclass(frozen=True)
class FeatureGates:
    """Immutable view of the enabled feature gates."""
    gates: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_FEATURE_GATES))

    @classmethod
    def from_string(cls, value: Optional[str]) -> "FeatureGates":
        """
        Parse a kubelet style feature gate string.

        Examples:
            "PodLevelResources=true"
            "PodLevelResources=true,SomeOtherGate=false"
        """
        gates = dict(DEFAULT_FEATURE_GATES)
        if not value:
            return cls(gates=gates)

        for entry in value.split(","):
            entry = entry.strip()
            if not entry:
                continue
            if "=" not in entry:
                raise ValueError(f"missing bool value for feature gate {entry!r}")
            name, raw = entry.split("=", 1)
            name = name.strip()
            try:
                gates[name] = _parse_bool(raw)
            except ValueError as e:
                raise ValueError(f"invalid feature gate {name!r}: {e}") from e
            if name not in DEFAULT_FEATURE_GATES:
                logger.debug(f"Ignoring unknown feature gate {name}")

        return cls(gates=gates)

    def enabled(self, name: str) -> bool:
        return self.gates.get(name, False)

    @property
    def pod_level_resources(self) -> bool:
        return self.enabled(POD_LEVEL_RESOURCES_GATE)
