"""Spark module for sparkk8s.

Builds submission configs and launches applications with spark-submit.
"""

from .conf import SparkAppArguments, SparkAppConf
from .launcher import LaunchError, ProcessResult, SparkSubmitError, build_submit_command, launch

__all__ = [
    "SparkAppConf",
    "SparkAppArguments",
    "ProcessResult",
    "build_submit_command",
    "launch",
    # Errors
    "LaunchError",
    "SparkSubmitError",
]
