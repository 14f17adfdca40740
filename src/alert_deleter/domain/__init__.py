"""Domain models for alerts received from the alert source."""

from alert_deleter.domain.models import (
    DEFAULT_ACTION,
    Alert,
    AlertLabels,
    AlertStatus,
)

__all__ = [
    "DEFAULT_ACTION",
    "Alert",
    "AlertLabels",
    "AlertStatus",
]
