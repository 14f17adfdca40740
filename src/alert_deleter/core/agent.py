import asyncio
import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from alert_deleter.core.dispatcher import DispatchOutcome, RemediationDispatcher
from alert_deleter.core.matcher import AlertMatcher
from alert_deleter.exceptions import AlertSourceError
from alert_deleter.source import AlertSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CycleReport:
    """Summary of one poll-match-dispatch cycle."""

    fetched: int = 0
    matched: int = 0
    outcomes: Mapping[DispatchOutcome, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    source_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.source_error is None


class RemediationAgent:
    def __init__(
        self,
        source: AlertSource,
        matcher: AlertMatcher,
        dispatcher: RemediationDispatcher,
        interval: float = 60.0,
    ) -> None:
        self._source = source
        self._matcher = matcher
        self._dispatcher = dispatcher
        self._interval = interval

    async def run_cycle(self) -> CycleReport:
        logger.info("Checking for alerts...")
        try:
            alerts = await self._source.fetch()
        except AlertSourceError as e:
            logger.error("Failed to get alerts: %s", e)
            return CycleReport(source_error=str(e))

        matched = self._matcher.filter(alerts)
        outcomes: Counter[DispatchOutcome] = Counter()
        for alert in matched:
            outcomes[await self._dispatcher.dispatch(alert)] += 1

        if matched:
            logger.info(
                "Processed %d of %d alerts: %s",
                len(matched),
                len(alerts),
                ", ".join(f"{o.value}={n}" for o, n in outcomes.items()),
            )
        return CycleReport(
            fetched=len(alerts),
            matched=len(matched),
            outcomes=MappingProxyType(dict(outcomes)),
        )

    async def run_forever(self) -> None:
        """Run cycles on a fixed cadence; the first cycle starts immediately.

        A cycle that overruns the interval is followed at once by the next
        one and the cadence restarts from there, so missed ticks never pile up.
        """
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            await self.run_cycle()
            next_tick = max(next_tick + self._interval, loop.time())
            await asyncio.sleep(next_tick - loop.time())
