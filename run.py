#!/usr/bin/env python3
"""
Downward API Limit Defaulter - Entry Point

Prints the effective CPU and memory limits the Downward API would expose
to each container of a pod, falling back to pod-level limits and then to
the node's allocatable capacity for containers without explicit limits.

Usage:
    python run.py --pod NAME [--namespace NAMESPACE] [--container NAME]
                  [--node NODE] [--feature-gates PodLevelResources=true]
                  [--output table|json] [--in-cluster]
"""

import argparse
import logging
import os
import sys

from kubernetes import config
from kubernetes.client.rest import ApiException

from downward_limits.config import (
    DEFAULT_NAMESPACE,
    FEATURE_GATES_ENV,
    NODE_NAME_ENV,
    OUTPUT_FORMATS,
)
from downward_limits.errors import DefaultingError
from downward_limits.feature_gates import FeatureGates
from downward_limits.reporter import EffectiveLimitsReporter, format_report

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Downward API Limit Defaulter - Show effective container limits of a pod"
    )
    parser.add_argument(
        "--pod", "-p",
        required=True,
        help="Name of the pod to report on"
    )
    parser.add_argument(
        "--namespace", "-n",
        default=DEFAULT_NAMESPACE,
        help=f"Namespace of the pod (default: {DEFAULT_NAMESPACE})"
    )
    parser.add_argument(
        "--container", "-c",
        default=None,
        help="Only report this container"
    )
    parser.add_argument(
        "--node",
        default=os.environ.get(NODE_NAME_ENV),
        help=f"Node to read allocatable capacity from (default: ${NODE_NAME_ENV} or the pod's node)"
    )
    parser.add_argument(
        "--feature-gates",
        default=os.environ.get(FEATURE_GATES_ENV, ""),
        help="Comma separated feature gates, e.g. PodLevelResources=true"
    )
    parser.add_argument(
        "--output", "-o",
        choices=OUTPUT_FORMATS,
        default="table",
        help="Output format (default: table)"
    )
    parser.add_argument(
        "--in-cluster",
        action="store_true",
        help="Use in-cluster config (for running inside Kubernetes)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose/debug logging"
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Set log level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        feature_gates = FeatureGates.from_string(args.feature_gates)
    except ValueError as e:
        logger.error(f"Invalid --feature-gates: {e}")
        sys.exit(2)

    # Load Kubernetes configuration
    try:
        if args.in_cluster:
            config.load_incluster_config()
            logger.info("Loaded in-cluster configuration")
        else:
            config.load_kube_config()
            logger.info("Loaded kubeconfig from default location")
    except Exception as e:
        logger.error(f"Failed to load Kubernetes config: {e}")
        sys.exit(1)

    reporter = EffectiveLimitsReporter(feature_gates=feature_gates)

    try:
        pod = reporter.get_pod(args.pod, args.namespace)
        entries = reporter.report(pod, node_name=args.node, container_name=args.container)
    except DefaultingError as e:
        logger.error(f"Cannot compute effective limits: {e}")
        sys.exit(1)
    except ApiException as e:
        logger.error(f"Kubernetes API error: {e.reason} (status: {e.status})")
        sys.exit(1)

    print(format_report(entries, args.output))


if __name__ == "__main__":
    main()
