"""Fixtures for the Spark-on-Kubernetes integration suite.

Session scope holds the validated properties, the backend and the test
namespace owner; every test gets a fresh app locator, driver pod name and
application config, and leaves no driver pod behind.
"""

from __future__ import annotations

import pytest

from sparkk8s.backend import get_test_backend
from sparkk8s.config import ConfigError, SuiteProperties, load_properties
from sparkk8s.k8s import KubernetesTestComponents
from sparkk8s.runner import AppRun, SparkAppRunner


@pytest.fixture(scope="session")
def properties() -> SuiteProperties:
    """Validated test properties; missing ones fail the suite outright."""
    try:
        return load_properties()
    except ConfigError as e:
        pytest.fail(str(e), pytrace=False)


@pytest.fixture(scope="session")
def backend(properties: SuiteProperties):
    test_backend = get_test_backend(properties)
    test_backend.initialize()
    yield test_backend
    test_backend.clean_up()


@pytest.fixture(scope="session")
def components(backend, properties: SuiteProperties) -> KubernetesTestComponents:
    return KubernetesTestComponents(
        backend.get_kubernetes_client(),
        namespace=properties.namespace,
        service_account_name=properties.service_account_name,
    )


@pytest.fixture(scope="session")
def examples_jar(properties: SuiteProperties) -> str:
    """Container-local URI of the Spark examples jar."""
    return properties.container_examples_jar()


@pytest.fixture(scope="session")
def runner(components: KubernetesTestComponents, properties: SuiteProperties) -> SparkAppRunner:
    return SparkAppRunner(components, properties.spark_home, properties.jvm_image)


@pytest.fixture
def app_run() -> AppRun:
    return AppRun.new()


@pytest.fixture
def spark_app_conf(components, properties, app_run, runner):
    """Fresh application config for one test; cleans up the run afterwards."""
    if not components.has_user_specified_namespace:
        components.create_namespace()
    conf = app_run.apply(components.new_spark_app_conf(), properties.jvm_image)
    yield conf
    try:
        runner.delete_driver_pod(app_run.driver_pod_name)
    finally:
        if not components.has_user_specified_namespace:
            components.delete_namespace()
