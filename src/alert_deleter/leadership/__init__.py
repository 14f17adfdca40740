from alert_deleter.leadership.coordinator import (
    LEADERSHIP_LOST_EXIT_CODE,
    LeadershipCoordinator,
    LeaseClient,
)
from alert_deleter.leadership.lease import LeaseLock, LeaseResult, LeaseState

__all__ = [
    "LEADERSHIP_LOST_EXIT_CODE",
    "LeadershipCoordinator",
    "LeaseClient",
    "LeaseLock",
    "LeaseResult",
    "LeaseState",
]
