"""Polling helpers for Kubernetes state.

Everything here is a fixed-interval, fixed-timeout loop over the
Kubernetes API. Only the read is retried, never the action that caused
the state being waited on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from sparkk8s._constants import INTERVAL_SECONDS, TIMEOUT_SECONDS

from .client import K8sError

if TYPE_CHECKING:
    from .client import K8sClient

logger = logging.getLogger(__name__)

APP_NOT_COMPLETED = "The application did not complete."


class WaitStatus(Enum):
    """Status of a wait operation."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"
    TIMEOUT = "timeout"


@dataclass
class WaitResult:
    """Result of a wait operation."""

    status: WaitStatus
    message: str
    elapsed_seconds: float
    attempts: int


class WaitError(K8sError):
    """Raised when a wait operation fails.

    Raising it from a check function aborts the wait without retrying.
    """

    pass


class WaitTimeout(WaitError):
    """Raised when a wait operation times out."""

    pass


def wait_for_condition(
    check_fn: Callable[[], tuple[bool, str]],
    timeout_seconds: int = TIMEOUT_SECONDS,
    poll_interval: int = INTERVAL_SECONDS,
    description: str = "condition",
) -> WaitResult:
    """Generic wait for a condition to be true.

    Args:
        check_fn: Function that returns (success, message)
        timeout_seconds: Maximum time to wait
        poll_interval: Seconds between checks
        description: Description for logging

    Returns:
        WaitResult with outcome

    Raises:
        WaitError: Propagated unchanged when raised by ``check_fn``
    """
    start_time = time.time()
    attempts = 0

    while True:
        attempts += 1
        elapsed = time.time() - start_time

        try:
            success, message = check_fn()
            if success:
                return WaitResult(
                    status=WaitStatus.READY,
                    message=message,
                    elapsed_seconds=elapsed,
                    attempts=attempts,
                )
        except WaitError:
            raise
        except Exception as e:
            message = str(e) or type(e).__name__

        logger.debug("Waiting for %s (attempt %d): %s", description, attempts, message)

        if elapsed >= timeout_seconds:
            return WaitResult(
                status=WaitStatus.TIMEOUT,
                message=f"Timeout after {int(elapsed)}s waiting for {description}: {message}",
                elapsed_seconds=elapsed,
                attempts=attempts,
            )

        time.sleep(poll_interval)


def eventually(
    probe: Callable[[], object],
    timeout_seconds: int = TIMEOUT_SECONDS,
    poll_interval: int = INTERVAL_SECONDS,
    description: str = "condition",
    message: str = "",
) -> WaitResult:
    """Retry ``probe`` until it stops raising.

    Any exception (failed assertions included) counts as "not yet".

    Args:
        probe: Callable asserting the awaited state
        timeout_seconds: Maximum time to wait
        poll_interval: Seconds between attempts
        description: Description for logging
        message: Message prefix for the timeout error

    Returns:
        WaitResult of the successful attempt

    Raises:
        WaitTimeout: If ``probe`` still fails when the timeout elapses
    """

    def check() -> tuple[bool, str]:
        probe()
        return True, f"{description} satisfied"

    result = wait_for_condition(
        check,
        timeout_seconds=timeout_seconds,
        poll_interval=poll_interval,
        description=description,
    )
    if result.status != WaitStatus.READY:
        raise WaitTimeout(f"{message} {result.message}" if message else result.message)
    return result


def wait_for_pod_deleted(
    client: K8sClient,
    name: str,
    namespace: str | None = None,
    timeout_seconds: int = TIMEOUT_SECONDS,
    poll_interval: int = INTERVAL_SECONDS,
) -> WaitResult:
    """Wait until a lookup of the pod by name returns nothing.

    Raises:
        WaitTimeout: If the pod still exists after the timeout
    """

    def probe() -> None:
        assert client.get_pod(name, namespace) is None, f"Pod {name} still exists"

    return eventually(
        probe,
        timeout_seconds=timeout_seconds,
        poll_interval=poll_interval,
        description=f"deletion of pod {name}",
    )


def wait_for_log_contains(
    client: K8sClient,
    pod_name: str,
    expected: Iterable[str],
    namespace: str | None = None,
    timeout_seconds: int = TIMEOUT_SECONDS,
    poll_interval: int = INTERVAL_SECONDS,
) -> WaitResult:
    """Wait until the pod's log contains every expected substring.

    A pod that reached phase ``Failed`` without logging the expected
    output aborts the wait immediately.

    Raises:
        WaitError: If the pod failed
        WaitTimeout: If the log is still incomplete after the timeout
    """
    expected = list(expected)

    def probe() -> None:
        log = client.read_pod_log(pod_name, namespace)
        missing = [e for e in expected if e not in log]
        if not missing:
            return
        pod = client.get_pod(pod_name, namespace)
        if pod is not None and pod.status is not None and pod.status.phase == "Failed":
            raise WaitError(f"{APP_NOT_COMPLETED} Pod {pod_name} failed; missing {missing}")
        raise AssertionError(f"missing {missing}")

    return eventually(
        probe,
        timeout_seconds=timeout_seconds,
        poll_interval=poll_interval,
        description=f"log of pod {pod_name}",
        message=APP_NOT_COMPLETED,
    )
