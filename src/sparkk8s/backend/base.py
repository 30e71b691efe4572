"""Integration test backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sparkk8s.k8s import K8sClient


class BackendError(Exception):
    """Raised when a test backend cannot be initialized."""

    pass


class IntegrationTestBackend(ABC):
    """A cluster the suite can run against.

    ``initialize`` must be called before ``get_kubernetes_client``;
    ``clean_up`` releases whatever ``initialize`` acquired.
    """

    name: str = ""

    def __init__(self) -> None:
        self._client: K8sClient | None = None

    @abstractmethod
    def initialize(self) -> None:
        """Verify the cluster is usable and build its client."""

    def get_kubernetes_client(self) -> K8sClient:
        if self._client is None:
            raise BackendError(f"Backend '{self.name}' is not initialized")
        return self._client

    def clean_up(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
