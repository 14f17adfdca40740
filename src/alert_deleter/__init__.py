__version__ = "0.1.0"

from alert_deleter.actions import (
    ActionRegistry,
    DeletePodAction,
    RemediationAction,
    WebhookAction,
)
from alert_deleter.core import (
    AlertMatcher,
    CycleReport,
    DispatchOutcome,
    RemediationAgent,
    RemediationDispatcher,
)
from alert_deleter.domain import DEFAULT_ACTION, Alert, AlertLabels, AlertStatus
from alert_deleter.leadership import (
    LeadershipCoordinator,
    LeaseLock,
    LeaseResult,
    LeaseState,
)
from alert_deleter.source import AlertmanagerSource, AlertSource, StaticAlertSource

__all__ = [
    "__version__",
    "DEFAULT_ACTION",
    "Alert",
    "AlertLabels",
    "AlertStatus",
    "AlertSource",
    "AlertmanagerSource",
    "StaticAlertSource",
    "AlertMatcher",
    "RemediationDispatcher",
    "DispatchOutcome",
    "RemediationAgent",
    "CycleReport",
    "RemediationAction",
    "ActionRegistry",
    "DeletePodAction",
    "WebhookAction",
    "LeadershipCoordinator",
    "LeaseLock",
    "LeaseResult",
    "LeaseState",
]
