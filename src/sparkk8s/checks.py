"""Pod checkers applied to driver and executor pods.

A checker is any callable taking a ``V1Pod`` and raising ``AssertionError``
when the pod does not have the expected shape. The factories below build
the common ones; ``all_of`` chains several.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from kubernetes.client import V1Container, V1Pod

from sparkk8s._constants import DRIVER_CONTAINER_NAME, EXECUTOR_CONTAINER_NAME

PodChecker = Callable[[V1Pod], None]


def first_container(pod: V1Pod) -> V1Container:
    containers = pod.spec.containers if pod.spec else None
    assert containers, f"Pod {pod.metadata.name} has no containers"
    return containers[0]


def container_env(container: V1Container) -> dict[str, str]:
    """Plain environment variables of a container (valueFrom entries map to None)."""
    return {env.name: env.value for env in (container.env or [])}


def driver_pod_checker(driver_pod_name: str, image: str) -> PodChecker:
    """Driver pod has the configured name and image and the driver container."""

    def check(pod: V1Pod) -> None:
        assert pod.metadata.name == driver_pod_name, (
            f"Driver pod name {pod.metadata.name!r} != {driver_pod_name!r}"
        )
        container = first_container(pod)
        assert container.image == image, f"Driver image {container.image!r} != {image!r}"
        assert container.name == DRIVER_CONTAINER_NAME, (
            f"Driver container name {container.name!r} != {DRIVER_CONTAINER_NAME!r}"
        )

    return check


def executor_pod_checker(image: str) -> PodChecker:
    """Executor pod runs the configured image in the executor container."""

    def check(pod: V1Pod) -> None:
        container = first_container(pod)
        assert container.image == image, f"Executor image {container.image!r} != {image!r}"
        assert container.name == EXECUTOR_CONTAINER_NAME, (
            f"Executor container name {container.name!r} != {EXECUTOR_CONTAINER_NAME!r}"
        )

    return check


def custom_settings_checker(
    labels: Mapping[str, str] | None = None,
    annotations: Mapping[str, str] | None = None,
    env: Mapping[str, str] | None = None,
) -> PodChecker:
    """Pod metadata and first container environment carry the given pairs."""

    def check(pod: V1Pod) -> None:
        pod_labels = pod.metadata.labels or {}
        for key, value in (labels or {}).items():
            assert pod_labels.get(key) == value, (
                f"Label {key}={pod_labels.get(key)!r}, expected {value!r}"
            )

        pod_annotations = pod.metadata.annotations or {}
        for key, value in (annotations or {}).items():
            assert pod_annotations.get(key) == value, (
                f"Annotation {key}={pod_annotations.get(key)!r}, expected {value!r}"
            )

        env_vars = container_env(first_container(pod))
        for key, value in (env or {}).items():
            assert env_vars.get(key) == value, (
                f"Env var {key}={env_vars.get(key)!r}, expected {value!r}"
            )

    return check


def all_of(*checkers: PodChecker) -> PodChecker:
    """Run every checker in order against the same pod."""

    def check(pod: V1Pod) -> None:
        for checker in checkers:
            checker(pod)

    return check
