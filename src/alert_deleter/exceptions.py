from collections.abc import Sequence


class AlertDeleterError(Exception):
    pass


class AlertSourceError(AlertDeleterError):
    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class LeaseError(AlertDeleterError):
    pass


class RemediationError(AlertDeleterError):
    def __init__(self, message: str, fingerprint: str | None = None) -> None:
        super().__init__(message)
        self.fingerprint = fingerprint


class MissingLabelError(RemediationError):
    def __init__(self, fingerprint: str, labels: Sequence[str]) -> None:
        self.labels = tuple(labels)
        super().__init__(
            f"Alert {fingerprint} is missing {' or '.join(self.labels)}",
            fingerprint=fingerprint,
        )
