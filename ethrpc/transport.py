"""Transport interfaces shared by every RPC namespace."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator


class Web3Error(Exception):
    """Raised when a call fails or its response cannot be decoded."""


class Transport(ABC):
    """Carries JSON-RPC calls to a node."""

    @abstractmethod
    def execute(self, method: str, params: list) -> Any:
        """Send one call and return the JSON result; raise Web3Error on failure."""


class DuplexTransport(Transport):
    """A transport that can also deliver server-side notifications."""

    @abstractmethod
    def subscribe(self, subscription_id: str) -> Iterator[Any]:
        """Return an iterator over the notifications of a subscription."""

    @abstractmethod
    def unsubscribe(self, subscription_id: str) -> None:
        """Stop delivering notifications of a subscription."""


class Namespace:
    """Common base of the API namespaces: a set of calls over one transport."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def transport(self) -> Transport:
        """Return the transport this namespace talks through."""
        return self._transport

    def _execute(self, method: str, *params: Any) -> Any:
        return self._transport.execute(method, list(params))