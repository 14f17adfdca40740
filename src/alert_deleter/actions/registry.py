from alert_deleter.actions.base import RemediationAction


class ActionRegistry:
    """Registry mapping action names to remediation actions."""

    def __init__(self) -> None:
        self._actions: dict[str, RemediationAction] = {}

    def register(self, action: RemediationAction) -> None:
        self._actions[action.name] = action

    def get(self, name: str) -> RemediationAction | None:
        return self._actions.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._actions)
