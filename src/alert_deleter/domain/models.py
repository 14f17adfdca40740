"""Core domain models for alerts and their labels."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

DEFAULT_ACTION = "delete_pod"

_KNOWN_LABELS = ("alertname", "pod", "namespace", "action", "webhook_url")


@dataclass(frozen=True, slots=True)
class AlertStatus:
    state: str


@dataclass(frozen=True, slots=True)
class AlertLabels:
    """Labels interpreted by the remediation agent.

    Labels outside the known set are kept in ``extra`` so that a forwarded
    alert carries everything the alert source reported.
    """

    alertname: str
    pod: str | None = None
    namespace: str | None = None
    action: str | None = None
    webhook_url: str | None = None
    extra: Mapping[str, str | None] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AlertLabels":
        alertname = data.get("alertname")
        if not isinstance(alertname, str):
            raise ValueError("labels.alertname must be a string")

        known: dict[str, str | None] = {}
        for key in _KNOWN_LABELS[1:]:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"labels.{key} must be a string")
            known[key] = value

        extra = {
            key: (None if value is None else str(value))
            for key, value in data.items()
            if key not in _KNOWN_LABELS
        }
        return cls(alertname=alertname, extra=MappingProxyType(extra), **known)

    def to_dict(self) -> dict[str, str | None]:
        data: dict[str, str | None] = dict(self.extra)
        data.update(
            alertname=self.alertname,
            pod=self.pod,
            namespace=self.namespace,
            action=self.action,
            webhook_url=self.webhook_url,
        )
        return data


@dataclass(frozen=True, slots=True)
class Alert:
    """A point-in-time snapshot of one alert reported by the alert source."""

    fingerprint: str
    status: AlertStatus
    labels: AlertLabels

    @property
    def action(self) -> str:
        """Return the requested remediation action, defaulting to pod deletion."""
        return self.labels.action or DEFAULT_ACTION

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Alert":
        """Build an alert from its wire representation.

        Raises:
            ValueError: If a required field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ValueError("alert must be a JSON object")

        fingerprint = data.get("fingerprint")
        if not isinstance(fingerprint, str):
            raise ValueError("fingerprint must be a string")

        status = data.get("status")
        if not isinstance(status, Mapping) or not isinstance(status.get("state"), str):
            raise ValueError(f"alert {fingerprint} has no status.state")

        labels = data.get("labels")
        if not isinstance(labels, Mapping):
            raise ValueError(f"alert {fingerprint} has no labels")

        return cls(
            fingerprint=fingerprint,
            status=AlertStatus(state=status["state"]),
            labels=AlertLabels.from_dict(labels),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fingerprint": self.fingerprint,
            "status": {"state": self.status.state},
            "labels": self.labels.to_dict(),
        }
