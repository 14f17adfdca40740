from collections.abc import Sequence

from alert_deleter.domain import Alert


class StaticAlertSource:
    """Alert source returning a fixed list of alerts on every poll."""

    def __init__(self, alerts: Sequence[Alert]) -> None:
        self._alerts: tuple[Alert, ...] = tuple(alerts)
        self.fetch_count: int = 0

    async def fetch(self) -> list[Alert]:
        self.fetch_count += 1
        return list(self._alerts)
