from typing import Protocol, runtime_checkable

from alert_deleter.domain import Alert


@runtime_checkable
class RemediationAction(Protocol):
    """Protocol for remediation actions selected by an alert's ``action`` label."""

    @property
    def name(self) -> str:
        ...

    async def execute(self, alert: Alert) -> None:
        ...
