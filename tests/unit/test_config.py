import pytest

from alert_deleter.config import Settings, parse_settings, split_names

REQUIRED = [
    "--alertmanager-url",
    "http://alertmanager:9093/api/v2/alerts",
    "--alert-names",
    "HighMemory",
    "--pod-name",
    "alert-deleter-0",
]


class TestParseSettings:
    def test_defaults(self) -> None:
        settings = parse_settings(REQUIRED, environ={})

        assert settings == Settings(
            alertmanager_url="http://alertmanager:9093/api/v2/alerts",
            alert_names=("HighMemory",),
            pod_name="alert-deleter-0",
        )
        assert settings.interval == 60
        assert settings.lease_name == "alert-deleter"
        assert settings.lease_secs == 10
        assert settings.lease_namespace is None
        assert settings.active_state == "active"
        assert settings.request_timeout == 30.0
        assert settings.log_level == "INFO"

    def test_flags_override_defaults(self) -> None:
        settings = parse_settings(
            REQUIRED
            + [
                "--interval", "15",
                "--lease-name", "remediator",
                "--lease-secs", "30",
                "--lease-namespace", "ops",
                "--active-state", "firing",
                "--request-timeout", "2.5",
                "--log-level", "debug",
            ],
            environ={},
        )

        assert settings.interval == 15
        assert settings.lease_name == "remediator"
        assert settings.lease_secs == 30
        assert settings.lease_namespace == "ops"
        assert settings.active_state == "firing"
        assert settings.request_timeout == 2.5
        assert settings.log_level == "debug"

    def test_reads_environment(self) -> None:
        settings = parse_settings(
            [],
            environ={
                "ALERTMANAGER_URL": "http://am/api/v2/alerts",
                "ALERT_NAMES": "HighMemory, CrashLoop,,",
                "POD_NAME": "replica-1",
                "INTERVAL": "30",
                "LEASE_SECS": "20",
            },
        )

        assert settings.alertmanager_url == "http://am/api/v2/alerts"
        assert settings.alert_names == ("HighMemory", "CrashLoop")
        assert settings.pod_name == "replica-1"
        assert settings.interval == 30
        assert settings.lease_secs == 20

    def test_flags_take_precedence_over_environment(self) -> None:
        settings = parse_settings(REQUIRED, environ={"POD_NAME": "from-env", "INTERVAL": "5"})

        assert settings.pod_name == "alert-deleter-0"
        assert settings.interval == 5

    def test_missing_required_option_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_settings(["--alertmanager-url", "http://am"], environ={})
        assert exc_info.value.code == 2

    def test_invalid_integer_exits(self) -> None:
        with pytest.raises(SystemExit):
            parse_settings(REQUIRED + ["--interval", "soon"], environ={})

    @pytest.mark.parametrize(
        "extra",
        [["--interval", "0"], ["--lease-secs", "-1"], ["--request-timeout", "0"]],
    )
    def test_non_positive_durations_exit(self, extra: list[str]) -> None:
        with pytest.raises(SystemExit):
            parse_settings(REQUIRED + extra, environ={})

    def test_blank_alert_names_exit(self) -> None:
        argv = ["--alertmanager-url", "http://am", "--alert-names", " , ", "--pod-name", "p"]
        with pytest.raises(SystemExit):
            parse_settings(argv, environ={})

    @pytest.mark.parametrize(
        "url", ["http://[zz]", "http://999.0.0.1", "alertmanager:9093", "ftp://am/alerts"]
    )
    def test_invalid_alertmanager_url_exits(self, url: str) -> None:
        argv = ["--alertmanager-url", url] + REQUIRED[2:]
        with pytest.raises(SystemExit):
            parse_settings(argv, environ={})


class TestSettings:
    def test_is_immutable(self) -> None:
        settings = parse_settings(REQUIRED, environ={})
        with pytest.raises(AttributeError):
            settings.interval = 1  # type: ignore[misc]

    def test_validate_rejects_empty_pod_name(self) -> None:
        settings = Settings(alertmanager_url="http://am", alert_names=("A",), pod_name="")
        with pytest.raises(ValueError, match="pod-name"):
            settings.validate()

    def test_validate_rejects_malformed_url(self) -> None:
        settings = Settings(alertmanager_url="http://[zz]", alert_names=("A",), pod_name="p")
        with pytest.raises(ValueError, match="not a valid URL"):
            settings.validate()


def test_split_names() -> None:
    assert split_names("A,B , C") == ("A", "B", "C")
    assert split_names("") == ()
