"""Shared plumbing for every sub-server client."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import grpc

logger = logging.getLogger(__name__)


class DomainClient:
    """A macaroon-scoped view of the shared gRPC channel.

    Subclasses add the RPCs of one sub-server. Clients that run streaming
    subscriptions start them through :meth:`_spawn` so that
    :meth:`wait_for_finished` can block until they have all exited.

    Usage::

        class VersionerClient(DomainClient):
            def get_version(self) -> VersionDescriptor:
                return self._unary(VERSIONER_GET_VERSION, VersionRequest(), Version)
    """

    def __init__(self, channel: grpc.Channel, macaroon: str) -> None:
        self._channel = channel
        self._macaroon = macaroon
        self._workers: list[threading.Thread] = []
        self._workers_lock = threading.Lock()

    @property
    def metadata(self) -> tuple[tuple[str, str], ...]:
        return (("macaroon", self._macaroon),)

    def _unary(
        self,
        method: str,
        request: Any,
        response_cls: type[Any],
        *,
        timeout: float | None = None,
    ) -> Any:
        rpc = self._channel.unary_unary(
            method,
            request_serializer=type(request).SerializeToString,
            response_deserializer=response_cls.FromString,
        )
        return rpc(request, metadata=self.metadata, timeout=timeout)

    def _stream(self, method: str, request: Any, response_cls: type[Any]) -> Any:
        rpc = self._channel.unary_stream(
            method,
            request_serializer=type(request).SerializeToString,
            response_deserializer=response_cls.FromString,
        )
        return rpc(request, metadata=self.metadata)

    def _spawn(self, name: str, target: Callable[[], None]) -> threading.Thread:
        worker = threading.Thread(target=target, name=name, daemon=True)
        with self._workers_lock:
            self._workers = [w for w in self._workers if w.is_alive()]
            self._workers.append(worker)
        worker.start()
        return worker

    def wait_for_finished(self, timeout: float | None = None) -> None:
        """Block until every background worker has exited."""
        with self._workers_lock:
            workers = list(self._workers)
        for worker in workers:
            worker.join(timeout)
            if worker.is_alive():
                logger.warning("Worker %s still running after shutdown wait", worker.name)
