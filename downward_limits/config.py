"""Configuration settings for the Downward API limit defaulter."""

# Resource names handled by limit defaulting
RESOURCE_CPU = "cpu"
RESOURCE_MEMORY = "memory"
DEFAULTED_RESOURCES = (RESOURCE_CPU, RESOURCE_MEMORY)

# Feature gate controlling whether pod-level limits participate in defaulting
POD_LEVEL_RESOURCES_GATE = "PodLevelResources"
DEFAULT_FEATURE_GATES = {
    POD_LEVEL_RESOURCES_GATE: False,
}

# Environment variables read by run.py
FEATURE_GATES_ENV = "DOWNWARD_LIMITS_FEATURE_GATES"
NODE_NAME_ENV = "DOWNWARD_LIMITS_NODE_NAME"

# Report settings
DEFAULT_NAMESPACE = "default"
OUTPUT_FORMATS = ("table", "json")
UNSET_DISPLAY = "<unset>"

# Where an effective limit came from
SOURCE_CONTAINER = "container"
SOURCE_POD = "pod"
SOURCE_NODE = "node"
