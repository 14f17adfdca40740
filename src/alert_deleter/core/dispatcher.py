import logging
from enum import Enum

from alert_deleter.actions import ActionRegistry
from alert_deleter.domain import DEFAULT_ACTION, Alert
from alert_deleter.exceptions import MissingLabelError, RemediationError

logger = logging.getLogger(__name__)


class DispatchOutcome(Enum):
    EXECUTED = "executed"
    SKIPPED = "skipped"
    UNKNOWN_ACTION = "unknown_action"
    FAILED = "failed"


class RemediationDispatcher:
    """Routes each matched alert to the action named by its ``action`` label.

    Every failure is handled here and reported as an outcome, so one alert
    can never stop the remaining alerts of a batch from being dispatched.
    """

    def __init__(self, registry: ActionRegistry, default_action: str = DEFAULT_ACTION) -> None:
        self._registry = registry
        self._default_action = default_action

    async def dispatch(self, alert: Alert) -> DispatchOutcome:
        action_name = alert.labels.action or self._default_action
        action = self._registry.get(action_name)
        if action is None:
            logger.warning("Unknown action '%s' in alert %s", action_name, alert.fingerprint)
            return DispatchOutcome.UNKNOWN_ACTION

        try:
            await action.execute(alert)
        except MissingLabelError as e:
            logger.error("%s, skipping %s", e, action_name)
            return DispatchOutcome.SKIPPED
        except RemediationError as e:
            logger.error("Action %s failed for alert %s: %s", action_name, alert.fingerprint, e)
            return DispatchOutcome.FAILED
        except Exception:
            logger.exception(
                "Unexpected error running action %s for alert %s", action_name, alert.fingerprint
            )
            return DispatchOutcome.FAILED

        return DispatchOutcome.EXECUTED
