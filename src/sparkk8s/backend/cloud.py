"""Backend for an existing, already reachable cluster."""

from __future__ import annotations

import logging

from sparkk8s.k8s import get_k8s_client

from .base import BackendError, IntegrationTestBackend

logger = logging.getLogger(__name__)


class CloudTestBackend(IntegrationTestBackend):
    """Uses a kubeconfig context, optionally pointed at another API server."""

    name = "cloud"

    def __init__(self, context: str = "", master: str = ""):
        super().__init__()
        self.context = context
        self.master = master

    def initialize(self) -> None:
        client = get_k8s_client(context=self.context, master=self.master)
        ok, message = client.test_connectivity()
        if not ok:
            client.close()
            raise BackendError(f"Cluster is unreachable: {message}")
        logger.info("Using cloud backend at %s: %s", client.master_url, message)
        self._client = client
