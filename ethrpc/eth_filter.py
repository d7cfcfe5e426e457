"""The `eth` namespace, filters."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar, Union

from .codec import HASH_SIZE, Filter, decode_hash
from .transport import Namespace, Transport, Web3Error

_I = TypeVar("_I")

Interval = Union[float, int, timedelta]


def _decode_log(value: Any) -> dict:
    if not isinstance(value, dict):
        raise Web3Error(f"expected a log object, got {value!r}")
    return value


def _decode_hash(value: Any) -> bytes:
    return decode_hash(value, HASH_SIZE)


def _seconds(interval: Interval) -> float:
    if isinstance(interval, timedelta):
        return interval.total_seconds()
    seconds = float(interval)
    if seconds < 0:
        raise ValueError(f"poll interval cannot be negative: {interval}")
    return seconds


class BaseFilter(Generic[_I]):
    """Handle of a filter installed on the node; polls it for changes."""

    def __init__(
        self,
        transport: Transport,
        filter_id: str,
        decode_item: Callable[[Any], _I],
        *,
        keeps_logs: bool = False,
    ) -> None:
        self._transport = transport
        self._id = filter_id
        self._decode_item = decode_item
        self._keeps_logs = keeps_logs

    @property
    def id(self) -> str:
        """The filter id the node assigned."""
        return self._id

    def transport(self) -> Transport:
        """Return the transport this filter talks through."""
        return self._transport

    def _items(self, method: str) -> Optional[list[_I]]:
        result = self._transport.execute(method, [self._id])
        if result is None:
            return None
        if not isinstance(result, list):
            raise Web3Error(f"{method}: expected a list, got {result!r}")
        return [self._decode_item(item) for item in result]

    def poll(self) -> Optional[list[_I]]:
        """Return the items that arrived since the previous poll."""
        return self._items("eth_getFilterChanges")

    def stream(self, poll_interval: Interval) -> Iterator[_I]:
        """Yield items forever, polling the node once per interval."""
        seconds = _seconds(poll_interval)
        while True:
            time.sleep(seconds)
            yield from self.poll() or ()

    def uninstall(self) -> bool:
        """Remove the filter from the node."""
        result = self._transport.execute("eth_uninstallFilter", [self._id])
        if not isinstance(result, bool):
            raise Web3Error(f"eth_uninstallFilter: expected bool, got {result!r}")
        return result

    def logs(self) -> list[_I]:
        """Return all logs matching a logs filter."""
        if not self._keeps_logs:
            raise TypeError("only a logs filter has logs")
        return self._items("eth_getFilterLogs") or []


class EthFilter(Namespace):
    """Installs filters on the node."""

    def _create(
        self, constructor: str, params: list, decode_item: Callable[[Any], Any], keeps_logs: bool
    ) -> BaseFilter:
        filter_id = self._execute(constructor, *params)
        if not isinstance(filter_id, str):
            raise Web3Error(f"{constructor}: expected a filter id, got {filter_id!r}")
        return BaseFilter(self._transport, filter_id, decode_item, keeps_logs=keeps_logs)

    def create_logs_filter(self, log_filter: Filter) -> BaseFilter[dict]:
        """Install a new logs filter."""
        return self._create("eth_newFilter", [log_filter.to_rpc()], _decode_log, True)

    def create_blocks_filter(self) -> BaseFilter[bytes]:
        """Install a new filter of block hashes."""
        return self._create("eth_newBlockFilter", [], _decode_hash, False)

    def create_pending_transactions_filter(self) -> BaseFilter[bytes]:
        """Install a new filter of pending transaction hashes."""
        return self._create("eth_newPendingTransactionFilter", [], _decode_hash, False)