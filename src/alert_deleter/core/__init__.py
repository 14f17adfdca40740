from alert_deleter.core.agent import CycleReport, RemediationAgent
from alert_deleter.core.dispatcher import DispatchOutcome, RemediationDispatcher
from alert_deleter.core.matcher import DEFAULT_ACTIVE_STATE, AlertMatcher

__all__ = [
    "DEFAULT_ACTIVE_STATE",
    "AlertMatcher",
    "CycleReport",
    "DispatchOutcome",
    "RemediationAgent",
    "RemediationDispatcher",
]
