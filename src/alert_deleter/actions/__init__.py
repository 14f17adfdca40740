from alert_deleter.actions.base import RemediationAction
from alert_deleter.actions.pod import DeletePodAction
from alert_deleter.actions.registry import ActionRegistry
from alert_deleter.actions.webhook import WebhookAction

__all__ = [
    "RemediationAction",
    "ActionRegistry",
    "DeletePodAction",
    "WebhookAction",
]
