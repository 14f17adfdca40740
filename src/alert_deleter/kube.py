"""Kubernetes client bootstrap."""

import logging
from pathlib import Path

from kubernetes import client as k8s_client
from kubernetes import config as k8s_config
from kubernetes.config.config_exception import ConfigException

logger = logging.getLogger(__name__)

SERVICE_ACCOUNT_NAMESPACE = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")
FALLBACK_NAMESPACE = "default"


def load_config() -> bool:
    """Load in-cluster configuration, falling back to the local kubeconfig.

    Returns True when running inside a cluster.
    """
    try:
        k8s_config.load_incluster_config()
        logger.debug("Loaded in-cluster Kubernetes configuration")
        return True
    except ConfigException:
        k8s_config.load_kube_config()
        logger.debug("Loaded Kubernetes configuration from kubeconfig")
        return False


def default_namespace(in_cluster: bool, sa_namespace_file: Path = SERVICE_ACCOUNT_NAMESPACE) -> str:
    if in_cluster and sa_namespace_file.exists():
        namespace = sa_namespace_file.read_text(encoding="utf-8").strip()
        if namespace:
            return namespace

    if not in_cluster:
        try:
            _, active_context = k8s_config.list_kube_config_contexts()
        except ConfigException:
            active_context = None
        namespace = (active_context or {}).get("context", {}).get("namespace")
        if namespace:
            return namespace

    return FALLBACK_NAMESPACE


def core_api() -> k8s_client.CoreV1Api:
    return k8s_client.CoreV1Api()


def coordination_api() -> k8s_client.CoordinationV1Api:
    return k8s_client.CoordinationV1Api()
