"""Run command implementation.

Starts the watch loop against the configured mount and pod.
"""

import logging
import threading

import typer

from nfswatchdog.cluster.events import KubernetesEventSink
from nfswatchdog.cluster.identity import resolve_namespace
from nfswatchdog.cluster.kubernetes import KubernetesClusterClient
from nfswatchdog.config import load_config
from nfswatchdog.core.escalator import Escalator
from nfswatchdog.errors import (
    ClusterConfigError,
    ConfigurationError,
    NamespaceResolutionError,
    PodDeletionError,
)
from nfswatchdog.models.identity import PodIdentity
from nfswatchdog.probers.deadline import DeadlineProber
from nfswatchdog.probers.directory import DirectoryProber
from nfswatchdog.utils.formatting import print_error, print_info, print_warning
from nfswatchdog.utils.signals import install_stop_handlers

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Watch the configured mount and replace the pod when it goes stale.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run_watchdog(ctx: typer.Context) -> None:
    """Run the watchdog until the pod is deleted or a stop signal arrives.

    All settings come from the environment (watchdog_directory, HOSTNAME,
    watchdog_loop_seconds, watchdog_initial_backoff_seconds,
    watchdog_timeout_seconds, watchdog_attempt_timeout_seconds,
    POD_NAMESPACE).

    Exit codes:
        0  stopped by signal, or pod deleted after a stale mount
        1  invalid configuration, cluster setup failure, or deletion failure
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        cluster = KubernetesClusterClient.from_environment()
        namespace = resolve_namespace(override=config.namespace)
    except (ClusterConfigError, NamespaceResolutionError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    pod = PodIdentity(namespace=namespace, name=config.pod_name)
    prober = DeadlineProber(
        DirectoryProber(config.probe_target()),
        timeout=config.effective_attempt_timeout,
    )
    escalator = Escalator(
        prober=prober,
        pod=pod,
        cluster=cluster,
        events=KubernetesEventSink(cluster.core_api),
        policy=config.retry_policy(),
    )
    logger.info(
        "Watching %s for pod %s every %gs (backoff %gs, timeout %gs)",
        config.directory,
        pod,
        config.check_interval,
        config.initial_backoff,
        config.timeout,
    )

    stop = threading.Event()
    install_stop_handlers(stop)

    try:
        result = escalator.watch(config.check_interval, stop)
    except PodDeletionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if result is None:
        print_info("Watchdog stopped.")
    else:
        print_warning(f"Mount {config.directory} went stale; pod {pod} was deleted.")
