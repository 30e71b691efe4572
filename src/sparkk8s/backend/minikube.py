"""Minikube test backend."""

from __future__ import annotations

import logging
import subprocess

from sparkk8s.k8s import get_k8s_client

from .base import BackendError, IntegrationTestBackend

logger = logging.getLogger(__name__)

MINIKUBE_CONTEXT = "minikube"


def get_minikube_status() -> dict[str, str]:
    """Parse ``minikube status`` into a component -> state mapping.

    Raises:
        BackendError: If minikube is not installed or the call times out
    """
    try:
        result = subprocess.run(
            ["minikube", "status"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise BackendError(f"Could not run 'minikube status': {e}")  # noqa: B904

    status: dict[str, str] = {}
    for line in result.stdout.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            status[key.strip().lower()] = value.strip()
    return status


class MinikubeTestBackend(IntegrationTestBackend):
    """Runs against a local minikube cluster through its kubeconfig context."""

    name = "minikube"

    def initialize(self) -> None:
        status = get_minikube_status()
        # Older minikube releases report "minikube:" instead of "host:"
        host_state = status.get("host") or status.get("minikube", "")
        if host_state != "Running":
            raise BackendError(
                f"Minikube is not running (status: {status or 'unknown'}). Start it first."
            )
        logger.info("Using minikube backend")
        self._client = get_k8s_client(context=MINIKUBE_CONTEXT)
