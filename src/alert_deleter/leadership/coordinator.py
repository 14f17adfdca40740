import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from alert_deleter.exceptions import LeaseError
from alert_deleter.leadership.lease import LeaseResult, LeaseState

logger = logging.getLogger(__name__)

LEADERSHIP_LOST_EXIT_CODE = 1


class LeaseClient(Protocol):
    @property
    def state(self) -> LeaseState:
        ...

    async def try_acquire_or_renew(self) -> LeaseResult:
        ...


class LeadershipCoordinator:
    """Wins leadership once, then keeps re-affirming it in the background.

    Lifecycle: not leader -> leader (``acquire_or_block`` returns) ->
    terminated (the watchdog saw the lease held by someone else). There is
    no way back from terminated; the process supervisor restarts the
    replica, which then competes for the lease again.

    Only the watchdog talks to the lease after the initial acquisition.
    """

    ACQUIRE_RETRY_SECONDS = 1.0
    RENEW_INTERVAL_SECONDS = 5.0

    def __init__(
        self,
        lease: LeaseClient,
        shutdown: Callable[[int], None],
        acquire_retry: float | None = None,
        renew_interval: float | None = None,
    ) -> None:
        self._lease = lease
        self._shutdown = shutdown
        self._acquire_retry = (
            self.ACQUIRE_RETRY_SECONDS if acquire_retry is None else acquire_retry
        )
        self._renew_interval = (
            self.RENEW_INTERVAL_SECONDS if renew_interval is None else renew_interval
        )

    async def acquire_or_block(self) -> None:
        """Block until this replica holds the lease.

        There is no timeout. Lease errors propagate: failing to reach the
        lease at startup is fatal, unlike during renewal.
        """
        logger.info("waiting for lock...")
        while True:
            result = await self._lease.try_acquire_or_renew()
            if result.acquired_lease:
                break
            logger.debug("Lease held by %s, retrying", result.holder_identity)
            await asyncio.sleep(self._acquire_retry)
        logger.info("acquired lock!")

    async def watch(self) -> None:
        """Renew the lease until it is confirmed lost, then shut down once.

        Transient lease errors are logged and the next renewal proceeds as
        usual; only an explicit "not acquired" answer ends leadership.
        """
        while True:
            await asyncio.sleep(self._renew_interval)
            try:
                result = await self._lease.try_acquire_or_renew()
            except LeaseError as e:
                logger.warning("background lease error: %s", e)
                continue

            if not self._lease.state.acquired:
                logger.error("lost lease to %s, exiting...", result.holder_identity or "<unknown>")
                self._shutdown(LEADERSHIP_LOST_EXIT_CODE)
                return

    def start_renewal_watchdog(self) -> asyncio.Task[None]:
        return asyncio.create_task(self.watch(), name="lease-renewal")
