from collections.abc import Iterable

from alert_deleter.domain import Alert

DEFAULT_ACTIVE_STATE = "active"


class AlertMatcher:
    """Selects the alerts eligible for remediation.

    An alert matches when its ``alertname`` label is in the allow-list and
    its status equals the active state of the alert source's vocabulary
    (``"active"`` for Alertmanager's v2 API).
    """

    def __init__(
        self, alert_names: Iterable[str], active_state: str = DEFAULT_ACTIVE_STATE
    ) -> None:
        self._alert_names = frozenset(alert_names)
        self._active_state = active_state

    @property
    def alert_names(self) -> frozenset[str]:
        return self._alert_names

    @property
    def active_state(self) -> str:
        return self._active_state

    def matches(self, alert: Alert) -> bool:
        return (
            alert.labels.alertname in self._alert_names
            and alert.status.state == self._active_state
        )

    def filter(self, alerts: Iterable[Alert]) -> list[Alert]:
        return [alert for alert in alerts if self.matches(alert)]
