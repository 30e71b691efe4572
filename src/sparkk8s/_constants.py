"""Shared constants for sparkk8s."""

# Polling bounds for log and deletion waits (and the spark-submit process)
TIMEOUT_SECONDS = 120
INTERVAL_SECONDS = 2

# Bound for a single API read made while polling
REQUEST_TIMEOUT_SECONDS = INTERVAL_SECONDS * 5

# Pod labels Spark puts on every driver/executor pod it creates
APP_LOCATOR_LABEL = "spark-app-locator"
SPARK_ROLE_LABEL = "spark-role"
DRIVER_ROLE = "driver"
EXECUTOR_ROLE = "executor"

# Container names Spark assigns inside the pods
DRIVER_CONTAINER_NAME = "spark-kubernetes-driver"
EXECUTOR_CONTAINER_NAME = "executor"

# Launcher sentinel: the application jar comes from spark.jars
NO_RESOURCE = "spark-internal"

SPARK_PI_MAIN_CLASS = "org.apache.spark.examples.SparkPi"
SPARK_REMOTE_MAIN_CLASS = "org.apache.spark.examples.SparkRemoteFileTest"
SPARK_DRIVER_MAIN_CLASS = "org.apache.spark.examples.DriverSubmissionTest"

CONTAINER_LOCAL_EXAMPLES_JARS = "local:///opt/spark/examples/jars/"
CONTAINER_LOCAL_PYSPARK = "local:///opt/spark/examples/src/main/python/"
PYSPARK_PI = CONTAINER_LOCAL_PYSPARK + "pi.py"
PYSPARK_FILES = CONTAINER_LOCAL_PYSPARK + "pyfiles.py"
PYSPARK_CONTAINER_TESTS = CONTAINER_LOCAL_PYSPARK + "py_container_checks.py"

REMOTE_PAGE_RANK_DATA_FILE = (
    "https://storage.googleapis.com/spark-k8s-integration-tests/files/pagerank_data.txt"
)
REMOTE_PAGE_RANK_FILE_NAME = "pagerank_data.txt"

# Default base name for the test driver pod; a random suffix is appended per test
DRIVER_POD_NAME_PREFIX = "spark-test-app-"
