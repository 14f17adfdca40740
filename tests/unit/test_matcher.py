from alert_deleter.core import AlertMatcher
from alert_deleter.domain import Alert, AlertLabels, AlertStatus


def make_alert(fingerprint: str, alertname: str, state: str = "active") -> Alert:
    return Alert(
        fingerprint=fingerprint,
        status=AlertStatus(state=state),
        labels=AlertLabels(alertname=alertname),
    )


class TestAlertMatcher:
    def test_matches_allowed_active_alert(self) -> None:
        matcher = AlertMatcher(["HighMemory"])
        assert matcher.matches(make_alert("f1", "HighMemory"))

    def test_excludes_alert_not_in_allow_list(self) -> None:
        matcher = AlertMatcher(["HighMemory"])
        assert not matcher.matches(make_alert("f1", "DiskFull"))

    def test_excludes_inactive_alert(self) -> None:
        matcher = AlertMatcher(["HighMemory"])
        assert not matcher.matches(make_alert("f1", "HighMemory", state="resolved"))
        assert not matcher.matches(make_alert("f2", "HighMemory", state="suppressed"))

    def test_active_state_is_configurable(self) -> None:
        matcher = AlertMatcher(["HighMemory"], active_state="firing")

        assert matcher.matches(make_alert("f1", "HighMemory", state="firing"))
        assert not matcher.matches(make_alert("f2", "HighMemory", state="active"))

    def test_filter_preserves_input_order(self) -> None:
        matcher = AlertMatcher(["A", "B"])
        alerts = [
            make_alert("1", "B"),
            make_alert("2", "C"),
            make_alert("3", "A"),
            make_alert("4", "B", state="resolved"),
            make_alert("5", "A"),
        ]

        result = matcher.filter(alerts)

        assert [a.fingerprint for a in result] == ["1", "3", "5"]

    def test_filter_empty_input(self) -> None:
        assert AlertMatcher(["A"]).filter([]) == []

    def test_empty_allow_list_matches_nothing(self) -> None:
        matcher = AlertMatcher([])
        assert matcher.filter([make_alert("1", "A")]) == []

    def test_exposes_configuration(self) -> None:
        matcher = AlertMatcher(["A", "B", "A"], active_state="firing")
        assert matcher.alert_names == frozenset({"A", "B"})
        assert matcher.active_state == "firing"
