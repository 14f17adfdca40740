from alert_deleter.source.alertmanager import AlertmanagerSource
from alert_deleter.source.base import AlertSource
from alert_deleter.source.static import StaticAlertSource

__all__ = ["AlertSource", "AlertmanagerSource", "StaticAlertSource"]
