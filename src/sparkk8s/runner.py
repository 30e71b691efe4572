"""Launch a test application and verify what it did on the cluster.

Every run is identified by a random app locator that Spark copies onto the
driver and executor pods as the ``spark-app-locator`` label, so pods from
earlier runs in the same namespace are never picked up.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from sparkk8s import spark
from sparkk8s._constants import (
    APP_LOCATOR_LABEL,
    DRIVER_POD_NAME_PREFIX,
    DRIVER_ROLE,
    EXECUTOR_ROLE,
    INTERVAL_SECONDS,
    SPARK_DRIVER_MAIN_CLASS,
    SPARK_PI_MAIN_CLASS,
    SPARK_REMOTE_MAIN_CLASS,
    SPARK_ROLE_LABEL,
    TIMEOUT_SECONDS,
)
from sparkk8s.checks import PodChecker, driver_pod_checker, executor_pod_checker
from sparkk8s.k8s.wait import wait_for_log_contains, wait_for_pod_deleted
from sparkk8s.spark import SparkAppArguments

if TYPE_CHECKING:
    from kubernetes.client import V1Pod

    from sparkk8s.k8s import KubernetesTestComponents
    from sparkk8s.spark import SparkAppConf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppRun:
    """Identity of one test application run."""

    app_locator: str
    driver_pod_name: str

    @classmethod
    def new(cls) -> AppRun:
        return cls(
            app_locator=uuid.uuid4().hex,
            driver_pod_name=DRIVER_POD_NAME_PREFIX + uuid.uuid4().hex,
        )

    def apply(self, conf: SparkAppConf, image: str) -> SparkAppConf:
        """Point ``conf`` at this run's image, driver pod name and locator labels."""
        return (
            conf.set("spark.kubernetes.container.image", image)
            .set("spark.kubernetes.driver.pod.name", self.driver_pod_name)
            .set(f"spark.kubernetes.driver.label.{APP_LOCATOR_LABEL}", self.app_locator)
            .set(f"spark.kubernetes.executor.label.{APP_LOCATOR_LABEL}", self.app_locator)
        )


class SparkAppRunner:
    """Submits applications with spark-submit and checks their pods and logs."""

    def __init__(
        self,
        components: KubernetesTestComponents,
        spark_home: Path,
        image: str,
        timeout_seconds: int = TIMEOUT_SECONDS,
        poll_interval: int = INTERVAL_SECONDS,
    ):
        """Initialize the runner.

        Args:
            components: Kubernetes client and test namespace
            spark_home: Unpacked Spark distribution holding bin/spark-submit
            image: Image JVM applications are expected to run with
            timeout_seconds: Bound for spark-submit and every poll
            poll_interval: Seconds between polls
        """
        self.components = components
        self.spark_home = spark_home
        self.image = image
        self.timeout_seconds = timeout_seconds
        self.poll_interval = poll_interval

    @property
    def k8s(self):
        return self.components.kubernetes_client

    def _pods(self, app_locator: str, role: str) -> list[V1Pod]:
        return self.k8s.list_pods({APP_LOCATOR_LABEL: app_locator, SPARK_ROLE_LABEL: role})

    def get_driver_pod(self, app_locator: str) -> V1Pod:
        pods = self._pods(app_locator, DRIVER_ROLE)
        assert pods, f"No driver pod found with {APP_LOCATOR_LABEL}={app_locator}"
        return pods[0]

    def get_executor_pods(self, app_locator: str) -> list[V1Pod]:
        return self._pods(app_locator, EXECUTOR_ROLE)

    def run_spark_application_and_verify_completion(
        self,
        conf: SparkAppConf,
        run: AppRun,
        app_resource: str,
        main_class: str,
        expected_log_on_completion: Sequence[str],
        app_args: Sequence[str] = (),
        driver_pod_check: PodChecker | None = None,
        executor_pod_check: PodChecker | None = None,
        is_jvm: bool = True,
        py_files: str | None = None,
    ) -> V1Pod:
        """Submit one application, check its pods, and wait for its output.

        Checkers default to the basic driver/executor checks against the
        runner's image.

        Returns:
            The driver pod as first observed

        Raises:
            AssertionError: If a pod checker fails or no driver pod exists
            SparkSubmitError: If spark-submit fails
            WaitTimeout: If the driver log never contains the expected output
        """
        driver_pod_check = driver_pod_check or driver_pod_checker(run.driver_pod_name, self.image)
        executor_pod_check = executor_pod_check or executor_pod_checker(self.image)

        app_arguments = SparkAppArguments(
            main_app_resource=app_resource,
            main_class=main_class,
            app_args=tuple(app_args),
        )
        spark.launch(
            app_arguments,
            conf,
            self.timeout_seconds,
            self.spark_home,
            is_jvm,
            py_files,
        )

        driver_pod = self.get_driver_pod(run.app_locator)
        driver_pod_check(driver_pod)

        for pod in self.get_executor_pods(run.app_locator):
            executor_pod_check(pod)

        self.wait_for_driver_log(driver_pod.metadata.name, expected_log_on_completion)
        return driver_pod

    def run_spark_pi_and_verify_completion(
        self,
        conf: SparkAppConf,
        run: AppRun,
        app_resource: str,
        app_args: Sequence[str] = (),
        driver_pod_check: PodChecker | None = None,
        executor_pod_check: PodChecker | None = None,
    ) -> V1Pod:
        return self.run_spark_application_and_verify_completion(
            conf,
            run,
            app_resource,
            SPARK_PI_MAIN_CLASS,
            ["Pi is roughly 3"],
            app_args,
            driver_pod_check,
            executor_pod_check,
        )

    def run_spark_remote_check_and_verify_completion(
        self,
        conf: SparkAppConf,
        run: AppRun,
        app_resource: str,
        app_args: Sequence[str],
    ) -> V1Pod:
        """Run SparkRemoteFileTest; the first argument names the mounted file."""
        return self.run_spark_application_and_verify_completion(
            conf,
            run,
            app_resource,
            SPARK_REMOTE_MAIN_CLASS,
            [f"Mounting of {app_args[0]} was true"],
            app_args,
        )

    def run_spark_jvm_check_and_verify_completion(
        self,
        conf: SparkAppConf,
        run: AppRun,
        app_resource: str,
        expected_jvm_values: Sequence[str],
        main_class: str = SPARK_DRIVER_MAIN_CLASS,
        app_args: Sequence[str] = ("5",),
    ) -> V1Pod:
        """Run the driver submission test and look for JVM properties in its log.

        Only the driver pod is checked; executors are not inspected.
        """
        app_arguments = SparkAppArguments(
            main_app_resource=app_resource,
            main_class=main_class,
            app_args=tuple(app_args),
        )
        spark.launch(app_arguments, conf, self.timeout_seconds, self.spark_home, True)

        driver_pod = self.get_driver_pod(run.app_locator)
        driver_pod_checker(run.driver_pod_name, self.image)(driver_pod)

        self.wait_for_driver_log(driver_pod.metadata.name, expected_jvm_values)
        return driver_pod

    def wait_for_driver_log(self, driver_pod_name: str, expected: Sequence[str]) -> None:
        logger.info("Waiting for %s to log %s", driver_pod_name, list(expected))
        wait_for_log_contains(
            self.k8s,
            driver_pod_name,
            expected,
            timeout_seconds=self.timeout_seconds,
            poll_interval=self.poll_interval,
        )

    def delete_driver_pod(self, driver_pod_name: str) -> None:
        """Delete the driver pod and wait until a lookup no longer finds it."""
        self.k8s.delete_pod(driver_pod_name)
        wait_for_pod_deleted(
            self.k8s,
            driver_pod_name,
            timeout_seconds=self.timeout_seconds,
            poll_interval=self.poll_interval,
        )
