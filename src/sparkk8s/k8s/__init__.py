"""Kubernetes client module for sparkk8s."""

from .client import (
    K8sClient,
    K8sConnectionError,
    K8sError,
    K8sResourceError,
    get_k8s_client,
    label_selector,
)
from .components import KubernetesTestComponents
from .wait import (
    WaitError,
    WaitResult,
    WaitStatus,
    WaitTimeout,
    eventually,
    wait_for_condition,
    wait_for_log_contains,
    wait_for_pod_deleted,
)

__all__ = [
    # Client
    "K8sClient",
    "KubernetesTestComponents",
    "get_k8s_client",
    "label_selector",
    # Errors
    "K8sError",
    "K8sConnectionError",
    "K8sResourceError",
    "WaitError",
    "WaitTimeout",
    # Wait
    "WaitResult",
    "WaitStatus",
    "eventually",
    "wait_for_condition",
    "wait_for_log_contains",
    "wait_for_pod_deleted",
]
