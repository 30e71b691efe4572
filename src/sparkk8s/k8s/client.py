"""Kubernetes client for sparkk8s."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from sparkk8s._constants import REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class K8sError(Exception):
    """Base exception for Kubernetes errors."""

    pass


class K8sConnectionError(K8sError):
    """Raised when Kubernetes cluster is unreachable."""

    pass


class K8sResourceError(K8sError):
    """Raised when resource operations fail."""

    pass


def label_selector(labels: Mapping[str, str]) -> str:
    """Render label pairs as an equality-based label selector."""
    return ",".join(f"{key}={value}" for key, value in labels.items())


class K8sClient:
    """Kubernetes client for the integration suite.

    This client wraps the official kubernetes-client and exposes the
    handful of namespace and pod operations the suite needs.
    """

    def __init__(self, context: str = "", namespace: str = "", master: str = ""):
        """Initialize Kubernetes client.

        Args:
            context: Kubeconfig context (empty = in-cluster, then current)
            namespace: Default namespace
            master: API server URL overriding the one from kubeconfig
        """
        self._namespace = namespace

        try:
            if context:
                config.load_kube_config(context=context)
            else:
                # Try in-cluster config first, fall back to kubeconfig
                try:
                    config.load_incluster_config()
                except config.ConfigException:
                    config.load_kube_config()
        except Exception as e:
            raise K8sConnectionError(f"Failed to load Kubernetes config: {e}")  # noqa: B904

        if master:
            configuration = client.Configuration.get_default_copy()
            configuration.host = master
            client.Configuration.set_default(configuration)

        self._core_v1 = client.CoreV1Api()

    @property
    def namespace(self) -> str:
        """Namespace used when a call does not name one."""
        return self._namespace or "default"

    @namespace.setter
    def namespace(self, value: str) -> None:
        self._namespace = value

    @property
    def master_url(self) -> str:
        """API server URL the client talks to."""
        return self._core_v1.api_client.configuration.host

    def close(self) -> None:
        """Release the underlying API client's connection pool."""
        self._core_v1.api_client.close()

    def test_connectivity(self) -> tuple[bool, str]:
        """Test connectivity to the Kubernetes cluster.

        Returns:
            Tuple of (success, message)
        """
        try:
            # Try to get API versions - lightweight call
            version = client.VersionApi().get_code()
            return True, f"Connected to Kubernetes {version.git_version}"
        except ApiException as e:
            return False, f"API error: {e.reason}"
        except Exception as e:
            return False, f"Connection error: {e}"

    # ------------------------------------------------------------------
    # Namespaces
    # ------------------------------------------------------------------

    def namespace_exists(self, name: str) -> bool:
        """Check if a namespace exists."""
        try:
            self._core_v1.read_namespace(name)
            return True
        except ApiException as e:
            if e.status == 404:
                return False
            raise K8sResourceError(f"Error checking namespace: {e}")  # noqa: B904

    def create_namespace(self, name: str) -> bool:
        """Create a namespace.

        Args:
            name: Namespace name

        Returns:
            True if created, False if already existed
        """
        if self.namespace_exists(name):
            return False

        try:
            ns = client.V1Namespace(
                metadata=client.V1ObjectMeta(
                    name=name,
                    labels={
                        "app.kubernetes.io/managed-by": "sparkk8s",
                    },
                )
            )
            self._core_v1.create_namespace(ns)
            logger.info("Created namespace %s", name)
            return True
        except ApiException as e:
            if e.status == 409:  # Already exists
                return False
            raise K8sResourceError(f"Failed to create namespace: {e}")  # noqa: B904

    def delete_namespace(self, name: str) -> bool:
        """Delete a namespace.

        Args:
            name: Namespace name

        Returns:
            True if deleted, False if didn't exist
        """
        if not self.namespace_exists(name):
            return False

        try:
            self._core_v1.delete_namespace(name)
            logger.info("Deleted namespace %s", name)
            return True
        except ApiException as e:
            raise K8sResourceError(f"Failed to delete namespace: {e}")  # noqa: B904

    def wait_for_namespace_deleted(self, name: str, timeout: int = 120) -> None:
        """Wait for a namespace to be fully deleted."""
        deadline = time.time() + timeout
        while time.time() < deadline:
            if not self.namespace_exists(name):
                return
            time.sleep(2)
        raise K8sResourceError(
            f"Namespace '{name}' still exists after {timeout}s (may still be terminating)"
        )

    # ------------------------------------------------------------------
    # Pods
    # ------------------------------------------------------------------

    def list_pods(
        self, labels: Mapping[str, str], namespace: str | None = None
    ) -> list[client.V1Pod]:
        """List pods carrying every given label.

        Args:
            labels: Label pairs the pods must match
            namespace: Namespace (default: client's namespace)

        Returns:
            Matching pods, possibly empty
        """
        ns = namespace or self.namespace
        selector = label_selector(labels)
        try:
            pods = self._core_v1.list_namespaced_pod(
                ns, label_selector=selector, _request_timeout=REQUEST_TIMEOUT_SECONDS
            )
        except ApiException as e:
            raise K8sResourceError(f"Failed to list pods ({selector}): {e}")  # noqa: B904
        return list(pods.items or [])

    def get_pod(self, name: str, namespace: str | None = None) -> client.V1Pod | None:
        """Read a pod by name.

        Returns:
            The pod, or None if it does not exist
        """
        ns = namespace or self.namespace
        try:
            return self._core_v1.read_namespaced_pod(
                name, ns, _request_timeout=REQUEST_TIMEOUT_SECONDS
            )
        except ApiException as e:
            if e.status == 404:
                return None
            raise K8sResourceError(f"Error reading pod {name}: {e}")  # noqa: B904

    def read_pod_log(
        self,
        name: str,
        namespace: str | None = None,
        container: str | None = None,
    ) -> str:
        """Fetch a pod's log as text.

        Args:
            name: Pod name
            namespace: Namespace (default: client's namespace)
            container: Container name (optional for single-container pods)

        Returns:
            Log content (empty string when the container has not logged yet)
        """
        ns = namespace or self.namespace
        kwargs: dict = {"_request_timeout": REQUEST_TIMEOUT_SECONDS}
        if container:
            kwargs["container"] = container
        try:
            return self._core_v1.read_namespaced_pod_log(name, ns, **kwargs) or ""
        except ApiException as e:
            raise K8sResourceError(f"Failed to read log of pod {name}: {e}")  # noqa: B904

    def delete_pod(self, name: str, namespace: str | None = None) -> bool:
        """Delete a pod by name.

        Returns:
            True if deleted, False if it didn't exist
        """
        ns = namespace or self.namespace
        try:
            self._core_v1.delete_namespaced_pod(name, ns)
            logger.debug("Deleted pod %s/%s", ns, name)
            return True
        except ApiException as e:
            if e.status == 404:
                return False
            raise K8sResourceError(f"Failed to delete pod {name}: {e}")  # noqa: B904


def get_k8s_client(context: str = "", namespace: str = "", master: str = "") -> K8sClient:
    """Create a Kubernetes client.

    Args:
        context: Kubernetes context (empty = current)
        namespace: Default namespace (empty = from context)
        master: API server URL override (empty = from kubeconfig)

    Returns:
        K8sClient instance
    """
    return K8sClient(context=context, namespace=namespace, master=master)
