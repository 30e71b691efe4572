"""spark-submit launcher for test applications.

Builds a cluster-mode ``spark-submit`` command line from the unpacked
Spark distribution and runs it to completion. With
``spark.kubernetes.submission.waitAppCompletion=false`` the process returns
as soon as the driver pod has been created.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from .conf import SparkAppArguments, SparkAppConf

logger = logging.getLogger(__name__)


class LaunchError(Exception):
    """Base exception for application launch errors."""

    pass


class SparkSubmitError(LaunchError):
    """Raised when spark-submit fails, cannot start, or times out."""

    def __init__(self, message: str, returncode: int | None = None, output: list[str] | None = None):
        super().__init__(message)
        self.returncode = returncode
        self.output = output or []


@dataclass
class ProcessResult:
    """Exit code and combined stdout/stderr lines of a finished process."""

    returncode: int
    output: list[str] = field(default_factory=list)


def _decode(output: str | bytes | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def execute_process(command: list[str], timeout_seconds: int) -> ProcessResult:
    """Run a command, logging its output, and require a zero exit code.

    Args:
        command: Command line
        timeout_seconds: Maximum run time

    Returns:
        ProcessResult of the successful run

    Raises:
        SparkSubmitError: On non-zero exit, timeout, or if the command can't start
    """
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout_seconds,
        )
    except subprocess.TimeoutExpired as e:
        output = _decode(e.output).splitlines()
        raise SparkSubmitError(  # noqa: B904
            f"{command[0]} did not finish within {timeout_seconds}s", output=output
        )
    except OSError as e:
        raise SparkSubmitError(f"Failed to start {command[0]}: {e}")  # noqa: B904

    lines = _decode(result.stdout).splitlines()
    for line in lines:
        logger.info("%s", line)

    if result.returncode != 0:
        raise SparkSubmitError(
            f"{command[0]} exited with code {result.returncode}",
            returncode=result.returncode,
            output=lines,
        )
    return ProcessResult(returncode=result.returncode, output=lines)


def build_submit_command(
    app_arguments: SparkAppArguments,
    app_conf: SparkAppConf,
    spark_home_dir: Path,
    is_jvm: bool = True,
    py_files: str | None = None,
) -> list[str]:
    """Assemble the spark-submit command line.

    ``--class`` is only passed for JVM applications; Python applications
    are identified by their resource alone.
    """
    spark_submit = Path(spark_home_dir) / "bin" / "spark-submit"
    command = [str(spark_submit.absolute()), "--deploy-mode", "cluster"]
    if is_jvm:
        command.extend(["--class", app_arguments.main_class])
    command.extend(["--master", app_conf["spark.master"]])
    if py_files:
        command.extend(["--py-files", py_files])
    command.extend(app_conf.to_submit_args())
    command.append(app_arguments.main_app_resource)
    command.extend(app_arguments.app_args)
    return command


def launch(
    app_arguments: SparkAppArguments,
    app_conf: SparkAppConf,
    timeout_seconds: int,
    spark_home_dir: Path,
    is_jvm: bool = True,
    py_files: str | None = None,
) -> ProcessResult:
    """Submit an application to the cluster and wait for spark-submit to exit.

    Raises:
        SparkSubmitError: If spark-submit fails or times out
    """
    logger.info("Launching a spark app with arguments %s and conf %s", app_arguments, app_conf)
    command = build_submit_command(app_arguments, app_conf, spark_home_dir, is_jvm, py_files)
    logger.info("Launching a spark app with command line: %s", " ".join(command))
    return execute_process(command, timeout_seconds)
