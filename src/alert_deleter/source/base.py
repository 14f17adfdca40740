from typing import Protocol, runtime_checkable

from alert_deleter.domain import Alert


@runtime_checkable
class AlertSource(Protocol):
    """Protocol for sources that report the currently known alerts."""

    async def fetch(self) -> list[Alert]:
        ...
