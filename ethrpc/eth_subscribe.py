"""The `eth` namespace, subscriptions."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from .codec import HASH_SIZE, Filter, decode_hash, decode_quantity
from .eth import SyncInfo
from .transport import DuplexTransport, Namespace, Web3Error

_I = TypeVar("_I")


def _decode_object(value: Any) -> dict:
    if not isinstance(value, dict):
        raise Web3Error(f"expected an object, got {value!r}")
    return value


def _decode_hash(value: Any) -> bytes:
    return decode_hash(value, HASH_SIZE)


def _decode_sync_state(value: Any) -> Optional[SyncInfo]:
    if value is False:
        return None
    if not isinstance(value, dict):
        raise Web3Error(f"unexpected sync state {value!r}")
    try:
        return SyncInfo(
            starting_block=decode_quantity(value["startingBlock"]),
            current_block=decode_quantity(value["currentBlock"]),
            highest_block=decode_quantity(value["highestBlock"]),
        )
    except KeyError as missing:
        raise Web3Error(f"sync state is missing field {missing}") from None


class SubscriptionStream(Generic[_I]):
    """Iterator over the notifications of one subscription."""

    def __init__(
        self, transport: DuplexTransport, subscription_id: str, decode_item: Callable[[Any], _I]
    ) -> None:
        self._transport = transport
        self._id = subscription_id
        self._decode_item = decode_item
        self._notifications = iter(transport.subscribe(subscription_id))
        self._closed = False

    def id(self) -> str:
        """Return the id of this subscription."""
        return self._id

    def __iter__(self) -> Iterator[_I]:
        return self

    def __next__(self) -> _I:
        if self._closed:
            raise StopIteration
        return self._decode_item(next(self._notifications))

    def unsubscribe(self) -> bool:
        """Cancel the subscription on the node and stop receiving notifications."""
        try:
            result = self._transport.execute("eth_unsubscribe", [self._id])
        finally:
            self.close()
        if not isinstance(result, bool):
            raise Web3Error(f"eth_unsubscribe: expected bool, got {result!r}")
        return result

    def close(self) -> None:
        """Stop receiving notifications; calling it again does nothing."""
        if not self._closed:
            self._closed = True
            self._transport.unsubscribe(self._id)

    def __enter__(self) -> "SubscriptionStream[_I]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class EthSubscribe(Namespace):
    """Subscriptions to node events."""

    def __init__(self, transport: DuplexTransport) -> None:
        if not isinstance(transport, DuplexTransport):
            raise TypeError("subscriptions need a transport that delivers notifications")
        super().__init__(transport)

    def _subscribe(self, decode_item: Callable[[Any], Any], *params: Any) -> SubscriptionStream:
        subscription_id = self._execute("eth_subscribe", *params)
        if not isinstance(subscription_id, str):
            raise Web3Error(f"eth_subscribe: expected a subscription id, got {subscription_id!r}")
        return SubscriptionStream(self._transport, subscription_id, decode_item)

    def subscribe_new_heads(self) -> SubscriptionStream[dict]:
        """Subscribe to new block headers."""
        return self._subscribe(_decode_object, "newHeads")

    def subscribe_logs(self, log_filter: Filter) -> SubscriptionStream[dict]:
        """Subscribe to logs matching a filter."""
        return self._subscribe(_decode_object, "logs", log_filter.to_rpc())

    def subscribe_new_pending_transactions(self) -> SubscriptionStream[bytes]:
        """Subscribe to hashes of new pending transactions."""
        return self._subscribe(_decode_hash, "newPendingTransactions")

    def subscribe_syncing(self) -> SubscriptionStream[Optional[SyncInfo]]:
        """Subscribe to sync status changes; None means not syncing."""
        return self._subscribe(_decode_sync_state, "syncing")