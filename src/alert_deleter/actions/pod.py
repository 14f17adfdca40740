import asyncio
import logging

from kubernetes import client as k8s_client
from kubernetes.client.exceptions import ApiException

from alert_deleter.domain import Alert
from alert_deleter.exceptions import MissingLabelError, RemediationError

logger = logging.getLogger(__name__)


class DeletePodAction:
    """Deletes the pod named by an alert's ``pod`` and ``namespace`` labels.

    The delete uses the API server's default options (no grace period
    override, no forced removal). The Kubernetes client is synchronous, so
    the call runs in a worker thread to keep the event loop free. Each call
    is bounded by ``request_timeout``.
    """

    name: str = "delete_pod"

    def __init__(self, core_api: k8s_client.CoreV1Api, request_timeout: float = 30.0) -> None:
        self._core_api = core_api
        self.request_timeout = request_timeout

    async def execute(self, alert: Alert) -> None:
        pod = alert.labels.pod
        namespace = alert.labels.namespace
        if not pod or not namespace:
            raise MissingLabelError(alert.fingerprint, ("pod", "namespace"))

        try:
            await self.terminate(pod, namespace)
        except RemediationError as e:
            e.fingerprint = alert.fingerprint
            raise

    async def terminate(self, pod: str, namespace: str) -> None:
        try:
            await asyncio.to_thread(
                lambda: self._core_api.delete_namespaced_pod(
                    name=pod, namespace=namespace, _request_timeout=self.request_timeout
                )
            )
        except ApiException as e:
            msg = f"Failed to delete pod {pod} in namespace {namespace}: {e.status} {e.reason}"
            raise RemediationError(msg) from e
        except Exception as e:
            msg = f"Failed to delete pod {pod} in namespace {namespace}: {e}"
            raise RemediationError(msg) from e

        logger.info("Deleted pod %s in namespace %s", pod, namespace)
