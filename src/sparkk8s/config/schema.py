"""Pydantic models for the integration test properties.

The properties mirror the dotted ``spark.kubernetes.test.*`` keys a build
passes to the suite: where the unpacked Spark distribution lives, which
image repository/tag to run, and which cluster backend to target.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from sparkk8s._constants import CONTAINER_LOCAL_EXAMPLES_JARS

# =============================================================================
# Enums
# =============================================================================


class DeployMode(str, Enum):
    """Cluster backend the suite runs against."""

    MINIKUBE = "minikube"
    CLOUD = "cloud"


# =============================================================================
# Properties
# =============================================================================


class SuiteProperties(BaseModel):
    """Validated process inputs for the integration suite."""

    model_config = ConfigDict(extra="forbid")

    unpack_spark_dir: Path
    image_repo: str
    image_tag: str = ""
    image_tag_file: Path | None = None

    namespace: str = ""  # Empty = random namespace created per test
    service_account_name: str = "default"
    deploy_mode: DeployMode = DeployMode.MINIKUBE
    master: str = ""  # Cloud backend only; empty = kubeconfig server
    kube_context: str = ""  # Empty = current context

    @field_validator("unpack_spark_dir")
    @classmethod
    def validate_spark_dir(cls, v: Path) -> Path:
        """Ensure the Spark home points at an unpacked distribution."""
        if not v.is_dir():
            raise ValueError(f"No directory found for spark home specified at {v}.")
        return v

    @field_validator("image_repo")
    @classmethod
    def validate_image_repo(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Image repo must be provided in test properties.")
        return v.strip().rstrip("/")

    @model_validator(mode="after")
    def validate_image_tag(self) -> SuiteProperties:
        """Require an image tag, inline or through a tag file."""
        if self.image_tag:
            return self
        if self.image_tag_file is None:
            raise ValueError("Image tag or image tag file must be provided in test properties.")
        if not self.image_tag_file.is_file():
            raise ValueError(f"No file found for image tag at {self.image_tag_file.resolve()}.")
        return self

    @property
    def spark_home(self) -> Path:
        return self.unpack_spark_dir

    def get_image_tag(self) -> str:
        """Return the image tag, reading the tag file when no inline tag is set."""
        if self.image_tag or self.image_tag_file is None:
            return self.image_tag
        return self.image_tag_file.read_text(encoding="utf-8").strip()

    @property
    def jvm_image(self) -> str:
        """Image used for JVM applications."""
        return f"{self.image_repo}/spark:{self.get_image_tag()}"

    @property
    def py_image(self) -> str:
        """Image used for PySpark applications."""
        return f"{self.image_repo}/spark-py:{self.get_image_tag()}"

    def examples_jar(self) -> Path:
        """Locate the Spark examples jar inside the unpacked distribution.

        Raises:
            FileNotFoundError: If ``examples/jars`` holds no spark-examples jar
        """
        jars_dir = self.unpack_spark_dir / "examples" / "jars"
        matches = sorted(jars_dir.glob("spark-examples_*.jar"))
        if not matches:
            raise FileNotFoundError(f"No spark-examples jar found under {jars_dir}")
        return matches[0]

    def container_examples_jar(self) -> str:
        """Container-local URI of the examples jar baked into the image."""
        return CONTAINER_LOCAL_EXAMPLES_JARS + self.examples_jar().name
