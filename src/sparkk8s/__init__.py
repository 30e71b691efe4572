"""sparkk8s -- integration test harness for Spark on Kubernetes."""

__version__ = "0.1.0"
