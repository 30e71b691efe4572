"""Cluster backends for the integration suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sparkk8s.config import DeployMode

from .base import BackendError, IntegrationTestBackend
from .cloud import CloudTestBackend
from .minikube import MinikubeTestBackend

if TYPE_CHECKING:
    from sparkk8s.config import SuiteProperties


def get_test_backend(properties: SuiteProperties) -> IntegrationTestBackend:
    """Pick the backend named by the ``deploy_mode`` property."""
    if properties.deploy_mode == DeployMode.CLOUD:
        return CloudTestBackend(context=properties.kube_context, master=properties.master)
    return MinikubeTestBackend()


__all__ = [
    "BackendError",
    "IntegrationTestBackend",
    "MinikubeTestBackend",
    "CloudTestBackend",
    "get_test_backend",
]
