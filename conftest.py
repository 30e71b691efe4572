"""Pytest configuration for sparkk8s."""

import os

import pytest

# Prevent collection from source tree
collect_ignore = ["src"]


def pytest_addoption(parser):
    parser.addoption(
        "--k8s",
        action="store_true",
        default=False,
        help="Run the Kubernetes integration suite (needs a cluster and test properties)",
    )


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies, fast)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require K8s connectivity)"
    )
    config.addinivalue_line("markers", "k8s: Spark-on-Kubernetes suite (opt in with --k8s)")
    config.addinivalue_line("markers", "slow: Slow tests (skip with -m 'not slow')")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--k8s") or os.environ.get("SPARK_K8S_TEST_ENABLED") == "1":
        return
    skip_k8s = pytest.mark.skip(reason="Kubernetes suite disabled; pass --k8s to run it")
    for item in items:
        if "k8s" in item.keywords:
            item.add_marker(skip_k8s)
