"""Shared fixtures for the sparkk8s unit tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client import (
    V1Container,
    V1EnvVar,
    V1ObjectMeta,
    V1Pod,
    V1PodSpec,
    V1PodStatus,
)

from sparkk8s.config import SuiteProperties

EXAMPLES_JAR_NAME = "spark-examples_2.12-3.5.0.jar"
MASTER_URL = "https://192.168.49.2:8443"


def make_spark_home(root: Path) -> Path:
    """Lay out the parts of an unpacked Spark distribution the harness touches."""
    home = root / "spark"
    (home / "bin").mkdir(parents=True)
    (home / "bin" / "spark-submit").write_text("#!/bin/sh\n")
    jars = home / "examples" / "jars"
    jars.mkdir(parents=True)
    (jars / EXAMPLES_JAR_NAME).write_bytes(b"")
    (jars / "scopt_2.12-3.7.1.jar").write_bytes(b"")
    return home


def make_properties(spark_home: Path, **overrides) -> SuiteProperties:
    """Create SuiteProperties with sensible defaults for testing."""
    base: dict = {
        "unpack_spark_dir": spark_home,
        "image_repo": "docker.io/kubespark",
        "image_tag": "dev",
    }
    base.update(overrides)
    return SuiteProperties(**base)


def make_pod(
    name: str = "spark-test-app-abc",
    image: str = "docker.io/kubespark/spark:dev",
    container_name: str = "spark-kubernetes-driver",
    labels: dict[str, str] | None = None,
    annotations: dict[str, str] | None = None,
    env: dict[str, str] | None = None,
    phase: str = "Running",
) -> V1Pod:
    """Build a pod the way the API server would return it."""
    return V1Pod(
        metadata=V1ObjectMeta(name=name, labels=labels, annotations=annotations),
        spec=V1PodSpec(
            containers=[
                V1Container(
                    name=container_name,
                    image=image,
                    env=[V1EnvVar(name=k, value=v) for k, v in (env or {}).items()],
                )
            ]
        ),
        status=V1PodStatus(phase=phase),
    )


@pytest.fixture
def spark_home(tmp_path) -> Path:
    return make_spark_home(tmp_path)


@pytest.fixture
def default_properties(spark_home) -> SuiteProperties:
    """Properties for tests that don't care about specifics."""
    return make_properties(spark_home)


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for tests that exercise spark-submit/minikube calls."""
    with patch("subprocess.run") as m:
        m.return_value = MagicMock(
            returncode=0,
            stdout="",
            stderr="",
        )
        yield m


@pytest.fixture
def mock_k8s_client():
    """Pre-configured mock K8sClient for unit tests."""
    client = MagicMock()
    client.namespace = "test-ns"
    client.master_url = MASTER_URL
    client.namespace_exists.return_value = True
    client.list_pods.return_value = []
    client.get_pod.return_value = None
    client.read_pod_log.return_value = ""
    client.test_connectivity.return_value = (True, "Connected")
    return client
