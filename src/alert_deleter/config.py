"""Command line and environment configuration."""

import argparse
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import httpx

from alert_deleter.core.matcher import DEFAULT_ACTIVE_STATE

DEFAULT_INTERVAL = 60
DEFAULT_LEASE_NAME = "alert-deleter"
DEFAULT_LEASE_SECS = 10
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True, slots=True)
class Settings:
    alertmanager_url: str
    alert_names: tuple[str, ...]
    pod_name: str
    interval: int = DEFAULT_INTERVAL
    lease_name: str = DEFAULT_LEASE_NAME
    lease_secs: int = DEFAULT_LEASE_SECS
    lease_namespace: str | None = None
    active_state: str = DEFAULT_ACTIVE_STATE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"

    def validate(self) -> None:
        if not self.alertmanager_url:
            raise ValueError("alertmanager-url must not be empty")
        try:
            url = httpx.URL(self.alertmanager_url)
        except httpx.InvalidURL as e:
            raise ValueError(f"alertmanager-url is not a valid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("alertmanager-url must be an absolute http(s) URL")
        if not self.alert_names:
            raise ValueError("alert-names must name at least one alert")
        if not self.pod_name:
            raise ValueError("pod-name must not be empty")
        if not self.lease_name:
            raise ValueError("lease-name must not be empty")
        if self.interval <= 0:
            raise ValueError("interval must be positive")
        if self.lease_secs <= 0:
            raise ValueError("lease-secs must be positive")
        if self.request_timeout <= 0:
            raise ValueError("request-timeout must be positive")


def split_names(value: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in value.split(",") if name.strip())


def build_parser(environ: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    """Build the argument parser; every option falls back to an environment variable."""
    env = os.environ if environ is None else environ

    parser = argparse.ArgumentParser(
        prog="alert-deleter",
        description="Remediate Alertmanager alerts by deleting pods or forwarding to webhooks.",
    )

    def option(flag: str, help_text: str, **kwargs: object) -> None:
        env_name = flag.lstrip("-").replace("-", "_").upper()
        default = env.get(env_name, kwargs.pop("default", None))
        required = bool(kwargs.pop("required", False)) and default is None
        parser.add_argument(
            flag,
            default=default,
            required=required,
            help=f"{help_text} [env: {env_name}]",
            **kwargs,  # type: ignore[arg-type]
        )

    option("--alertmanager-url", "Alertmanager URL to poll alerts from", required=True)
    option(
        "--alert-names",
        "Comma-separated alert names to match against the 'alertname' label",
        required=True,
    )
    option("--interval", "Interval in seconds to check for alerts", type=int, default=DEFAULT_INTERVAL)
    option("--pod-name", "Holder identity of this replica for leader election", required=True)
    option("--lease-name", "Name of the Lease used for leader election", default=DEFAULT_LEASE_NAME)
    option("--lease-secs", "Lease duration in seconds", type=int, default=DEFAULT_LEASE_SECS)
    option("--lease-namespace", "Namespace of the Lease (default: this pod's namespace)")
    option(
        "--active-state",
        "Alert status.state value treated as firing",
        default=DEFAULT_ACTIVE_STATE,
    )
    option(
        "--request-timeout",
        "Timeout in seconds for alert polling and webhook requests",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
    )
    option("--log-level", "Logging level", default="INFO")
    return parser


def parse_settings(
    argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None
) -> Settings:
    """Parse and validate settings; invalid input exits through argparse."""
    parser = build_parser(environ)
    args = parser.parse_args(argv)

    try:
        settings = Settings(
            alertmanager_url=args.alertmanager_url,
            alert_names=split_names(args.alert_names),
            pod_name=args.pod_name,
            interval=int(args.interval),
            lease_name=args.lease_name,
            lease_secs=int(args.lease_secs),
            lease_namespace=args.lease_namespace or None,
            active_state=args.active_state,
            request_timeout=float(args.request_timeout),
            log_level=args.log_level,
        )
        settings.validate()
    except ValueError as e:
        parser.error(str(e))

    return settings
