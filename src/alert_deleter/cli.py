import asyncio
import logging
import sys
from collections.abc import Sequence
from datetime import timedelta

from alert_deleter import kube
from alert_deleter.actions import ActionRegistry, DeletePodAction, WebhookAction
from alert_deleter.config import Settings, parse_settings
from alert_deleter.core import AlertMatcher, RemediationAgent, RemediationDispatcher
from alert_deleter.leadership import (
    LEADERSHIP_LOST_EXIT_CODE,
    LeadershipCoordinator,
    LeaseLock,
    LeaseState,
)
from alert_deleter.log import setup_logging
from alert_deleter.source import AlertmanagerSource

logger = logging.getLogger(__name__)


class Shutdown:
    """Shutdown callback for the renewal watchdog.

    Records the exit code and cancels the main loop, which may interrupt a
    remediation action that is in flight.
    """

    def __init__(self) -> None:
        self.exit_code = 0
        self.requested = False
        self._task: asyncio.Task[None] | None = None

    def attach(self, task: asyncio.Task[None]) -> None:
        self._task = task

    def __call__(self, exit_code: int) -> None:
        if self.requested:
            return
        self.requested = True
        self.exit_code = exit_code
        if self._task is not None:
            self._task.cancel()


def build_agent(settings: Settings) -> RemediationAgent:
    registry = ActionRegistry()
    registry.register(DeletePodAction(kube.core_api(), request_timeout=settings.request_timeout))
    registry.register(WebhookAction(timeout=settings.request_timeout))

    return RemediationAgent(
        source=AlertmanagerSource(settings.alertmanager_url, timeout=settings.request_timeout),
        matcher=AlertMatcher(settings.alert_names, active_state=settings.active_state),
        dispatcher=RemediationDispatcher(registry),
        interval=settings.interval,
    )


async def run(
    agent: RemediationAgent, coordinator: LeadershipCoordinator, shutdown: Shutdown
) -> int:
    """Poll while holding leadership and return the process exit code.

    The remediation loop and the renewal watchdog stop together. If the
    watchdog ends without requesting shutdown, the lease is no longer being
    renewed, so the loop is cancelled and the run fails.
    """
    await coordinator.acquire_or_block()

    main_loop = asyncio.create_task(agent.run_forever(), name="remediation-loop")
    shutdown.attach(main_loop)
    watchdog = coordinator.start_renewal_watchdog()
    try:
        done, _ = await asyncio.wait({main_loop, watchdog}, return_when=asyncio.FIRST_COMPLETED)
        if shutdown.requested:
            return shutdown.exit_code
        if watchdog in done:
            error = None if watchdog.cancelled() else watchdog.exception()
            logger.error("lease renewal stopped unexpectedly, exiting...", exc_info=error)
            return LEADERSHIP_LOST_EXIT_CODE
        main_loop.result()
        return 0
    finally:
        for task in (main_loop, watchdog):
            task.cancel()
        await asyncio.gather(main_loop, watchdog, return_exceptions=True)


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_settings(argv)
    setup_logging(settings.log_level)

    in_cluster = kube.load_config()
    namespace = settings.lease_namespace or kube.default_namespace(in_cluster)
    logger.info(
        "Starting alert-deleter as %s (lease %s/%s, alerts: %s)",
        settings.pod_name,
        namespace,
        settings.lease_name,
        ", ".join(settings.alert_names),
    )

    state = LeaseState(
        holder_id=settings.pod_name,
        lease_name=settings.lease_name,
        namespace=namespace,
        ttl=timedelta(seconds=settings.lease_secs),
    )
    shutdown = Shutdown()
    coordinator = LeadershipCoordinator(LeaseLock(kube.coordination_api(), state), shutdown)

    try:
        return asyncio.run(run(build_agent(settings), coordinator, shutdown))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        return 130


if __name__ == "__main__":
    sys.exit(main())
