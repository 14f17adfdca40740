import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from kubernetes import client as k8s_client
from kubernetes.client.exceptions import ApiException

from alert_deleter.exceptions import LeaseError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LeaseState:
    """Leadership state of this replica.

    Only ``LeaseLock.try_acquire_or_renew`` changes ``acquired``. The renewal
    watchdog reads it after each renewal to decide whether leadership is lost.
    """

    holder_id: str
    lease_name: str
    namespace: str
    ttl: timedelta
    acquired: bool = False


@dataclass(frozen=True, slots=True)
class LeaseResult:
    acquired_lease: bool
    holder_identity: str | None = None


class LeaseLock:
    """Try-acquire-or-renew lock on a ``coordination.k8s.io/v1`` Lease.

    A replica holds leadership while the Lease names it as holder and its
    ``renewTime`` is younger than ``leaseDurationSeconds``. An expired Lease
    held by another replica is taken over. Writes carry the resourceVersion
    that was read, so two replicas racing for the same Lease cannot both
    win: the loser gets a conflict and reports an error.

    Safety rests on the TTL and on clocks being roughly in sync. After a
    partition heals two replicas may briefly both believe they lead, for at
    most the TTL plus one renewal interval. Every API call is bounded by
    ``request_timeout``, which defaults to half the TTL.
    """

    def __init__(
        self,
        coordination_api: k8s_client.CoordinationV1Api,
        state: LeaseState,
        clock: Callable[[], datetime] | None = None,
        request_timeout: float | None = None,
    ) -> None:
        self._api = coordination_api
        self._state = state
        self._request_timeout = (
            state.ttl.total_seconds() / 2 if request_timeout is None else request_timeout
        )
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def state(self) -> LeaseState:
        return self._state

    async def try_acquire_or_renew(self) -> LeaseResult:
        """Acquire the Lease, renew it if already held, or report it taken.

        Raises:
            LeaseError: On API or transport errors, including write conflicts.
        """
        try:
            result = await asyncio.to_thread(self._try_acquire_or_renew)
        except ApiException as e:
            raise LeaseError(
                f"Lease {self._state.namespace}/{self._state.lease_name}: {e.status} {e.reason}"
            ) from e
        except Exception as e:
            raise LeaseError(
                f"Lease {self._state.namespace}/{self._state.lease_name}: {e}"
            ) from e

        self._state.acquired = result.acquired_lease
        return result

    def _try_acquire_or_renew(self) -> LeaseResult:
        now = self._clock()
        try:
            lease = self._api.read_namespaced_lease(
                name=self._state.lease_name,
                namespace=self._state.namespace,
                _request_timeout=self._request_timeout,
            )
        except ApiException as e:
            if e.status != 404:
                raise
            self._create(now)
            logger.debug("Created lease %s", self._state.lease_name)
            return LeaseResult(acquired_lease=True, holder_identity=self._state.holder_id)

        spec = lease.spec or k8s_client.V1LeaseSpec()
        holder = spec.holder_identity

        if holder == self._state.holder_id:
            spec.renew_time = now
            spec.lease_duration_seconds = self._ttl_seconds
            self._replace(lease, spec)
            return LeaseResult(acquired_lease=True, holder_identity=holder)

        if holder and not self._is_expired(spec, now):
            return LeaseResult(acquired_lease=False, holder_identity=holder)

        logger.info("Taking over lease %s from %s", self._state.lease_name, holder or "<none>")
        spec.holder_identity = self._state.holder_id
        spec.acquire_time = now
        spec.renew_time = now
        spec.lease_duration_seconds = self._ttl_seconds
        spec.lease_transitions = (spec.lease_transitions or 0) + 1
        self._replace(lease, spec)
        return LeaseResult(acquired_lease=True, holder_identity=self._state.holder_id)

    @property
    def _ttl_seconds(self) -> int:
        return max(1, int(self._state.ttl.total_seconds()))

    @staticmethod
    def _is_expired(spec: k8s_client.V1LeaseSpec, now: datetime) -> bool:
        if spec.renew_time is None or spec.lease_duration_seconds is None:
            return True
        renew_time = spec.renew_time
        if renew_time.tzinfo is None:
            renew_time = renew_time.replace(tzinfo=UTC)
        return renew_time + timedelta(seconds=spec.lease_duration_seconds) < now

    def _create(self, now: datetime) -> None:
        body = k8s_client.V1Lease(
            metadata=k8s_client.V1ObjectMeta(
                name=self._state.lease_name, namespace=self._state.namespace
            ),
            spec=k8s_client.V1LeaseSpec(
                holder_identity=self._state.holder_id,
                lease_duration_seconds=self._ttl_seconds,
                acquire_time=now,
                renew_time=now,
                lease_transitions=0,
            ),
        )
        self._api.create_namespaced_lease(
            namespace=self._state.namespace, body=body, _request_timeout=self._request_timeout
        )

    def _replace(self, lease: k8s_client.V1Lease, spec: k8s_client.V1LeaseSpec) -> None:
        body = k8s_client.V1Lease(
            metadata=k8s_client.V1ObjectMeta(
                name=self._state.lease_name,
                namespace=self._state.namespace,
                resource_version=lease.metadata.resource_version if lease.metadata else None,
            ),
            spec=spec,
        )
        self._api.replace_namespaced_lease(
            name=self._state.lease_name,
            namespace=self._state.namespace,
            body=body,
            _request_timeout=self._request_timeout,
        )
