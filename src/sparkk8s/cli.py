"""sparkk8s CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from sparkk8s import __version__
from sparkk8s._constants import PYSPARK_PI
from sparkk8s.backend import BackendError, get_test_backend
from sparkk8s.checks import driver_pod_checker, executor_pod_checker
from sparkk8s.config import ConfigError, SuiteProperties, load_properties
from sparkk8s.k8s import K8sError, KubernetesTestComponents
from sparkk8s.runner import AppRun, SparkAppRunner
from sparkk8s.spark import LaunchError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sparkk8s",
    help="Run Spark-on-Kubernetes integration checks against a cluster",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

FileOption = Annotated[
    Path | None,
    typer.Option(
        "--file",
        "-f",
        help="YAML file with test properties (default: $SPARK_K8S_TEST_CONFIG)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging"),
]


# =============================================================================
# Helper Functions
# =============================================================================


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]OK[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]ERROR[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]WARN[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]...[/blue] {message}")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(file_option: Path | None) -> SuiteProperties:
    try:
        return load_properties(path=file_option)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904


def _properties_table(props: SuiteProperties) -> Table:
    table = Table(title="Test properties")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Spark home", str(props.spark_home))
    table.add_row("JVM image", props.jvm_image)
    table.add_row("Python image", props.py_image)
    table.add_row("Deploy mode", props.deploy_mode.value)
    table.add_row("Namespace", props.namespace or "[dim](random per test)[/dim]")
    table.add_row("Service account", props.service_account_name)
    if props.master:
        table.add_row("Master", props.master)
    return table


# =============================================================================
# CLI Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"sparkk8s version {__version__}")


@app.command()
def check(
    file_option: FileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate test properties and cluster connectivity."""
    setup_logging(verbose)
    props = _load(file_option)
    console.print(_properties_table(props))
    print_success("Test properties are valid")

    try:
        jar = props.examples_jar()
        print_success(f"Examples jar: {jar.name}")
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904

    backend = get_test_backend(props)
    try:
        backend.initialize()
        k8s = backend.get_kubernetes_client()
        ok, message = k8s.test_connectivity()
    except (BackendError, K8sError) as e:
        print_error(f"Backend '{backend.name}' unavailable: {e}")
        raise typer.Exit(1)  # noqa: B904
    finally:
        backend.clean_up()

    if not ok:
        print_error(message)
        raise typer.Exit(1)
    print_success(message)


@app.command()
def submit(
    file_option: FileOption = None,
    python: Annotated[
        bool,
        typer.Option("--python", help="Run the PySpark pi.py example instead of SparkPi"),
    ] = False,
    args: Annotated[
        list[str] | None,
        typer.Option("--arg", "-a", help="Application argument (repeatable)"),
    ] = None,
    keep: Annotated[
        bool,
        typer.Option("--keep", help="Leave the driver pod and namespace in place"),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Submit a Pi example to the cluster and wait for it to complete."""
    setup_logging(verbose)
    props = _load(file_option)
    backend = get_test_backend(props)

    try:
        backend.initialize()
        components = KubernetesTestComponents(
            backend.get_kubernetes_client(),
            namespace=props.namespace,
            service_account_name=props.service_account_name,
        )
        if not components.has_user_specified_namespace:
            components.create_namespace()

        image = props.py_image if python else props.jvm_image
        run = AppRun.new()
        conf = run.apply(components.new_spark_app_conf(), image)
        runner = SparkAppRunner(components, props.spark_home, image)
        print_info(f"Submitting {run.driver_pod_name} to namespace {components.namespace}")

        try:
            if python:
                runner.run_spark_application_and_verify_completion(
                    conf,
                    run,
                    PYSPARK_PI,
                    "",
                    ["Pi is roughly 3"],
                    args or [],
                    driver_pod_checker(run.driver_pod_name, image),
                    executor_pod_checker(image),
                    is_jvm=False,
                )
            else:
                runner.run_spark_pi_and_verify_completion(
                    conf, run, props.container_examples_jar(), args or []
                )
            print_success(f"{run.driver_pod_name} completed")
        finally:
            if not keep:
                runner.delete_driver_pod(run.driver_pod_name)
                if not components.has_user_specified_namespace:
                    components.delete_namespace()
    except (BackendError, K8sError, LaunchError, FileNotFoundError) as e:
        print_error(str(e))
        raise typer.Exit(1)  # noqa: B904
    except AssertionError as e:
        print_error(f"Pod check failed: {e}")
        raise typer.Exit(1)  # noqa: B904
    finally:
        backend.clean_up()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
