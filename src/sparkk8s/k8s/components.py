"""Per-suite Kubernetes state: the client and the test namespace."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from sparkk8s.spark.conf import SparkAppConf

if TYPE_CHECKING:
    from .client import K8sClient

logger = logging.getLogger(__name__)


class KubernetesTestComponents:
    """Owns the test namespace and hands out base application configs.

    When no namespace is configured a random one is used, and the suite
    creates and deletes it around every test.
    """

    def __init__(
        self,
        kubernetes_client: K8sClient,
        namespace: str = "",
        service_account_name: str = "default",
    ):
        self.kubernetes_client = kubernetes_client
        self.has_user_specified_namespace = bool(namespace)
        self.namespace = namespace or uuid.uuid4().hex
        self.service_account_name = service_account_name
        self.kubernetes_client.namespace = self.namespace

    def create_namespace(self) -> None:
        logger.info("Creating test namespace %s", self.namespace)
        self.kubernetes_client.create_namespace(self.namespace)

    def delete_namespace(self, wait: bool = True) -> None:
        """Delete the test namespace, optionally waiting until it is gone."""
        logger.info("Deleting test namespace %s", self.namespace)
        if self.kubernetes_client.delete_namespace(self.namespace) and wait:
            self.kubernetes_client.wait_for_namespace_deleted(self.namespace)

    def new_spark_app_conf(self) -> SparkAppConf:
        """Base configuration shared by every test application."""
        return (
            SparkAppConf()
            .set("spark.master", f"k8s://{self.kubernetes_client.master_url}")
            .set("spark.kubernetes.namespace", self.namespace)
            .set("spark.executor.memory", "500m")
            .set("spark.executor.cores", "1")
            .set("spark.executor.instances", "1")
            .set("spark.app.name", "spark-test-app")
            .set("spark.ui.enabled", "true")
            .set("spark.testing", "false")
            .set("spark.kubernetes.submission.waitAppCompletion", "false")
            .set(
                "spark.kubernetes.authenticate.driver.serviceAccountName",
                self.service_account_name,
            )
        )
