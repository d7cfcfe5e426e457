"""The `trace` namespace."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Union

from .codec import (
    HASH_SIZE,
    BlockNumber,
    CallRequest,
    HashLike,
    encode_block_number,
    encode_data,
    encode_hash,
    encode_quantity,
)
from .transport import Namespace, Web3Error

BlockRef = Union[BlockNumber, int, None]


class TraceType(Enum):
    """Kinds of trace a node can produce."""

    TRACE = "trace"
    VM_TRACE = "vmTrace"
    STATE_DIFF = "stateDiff"


def _trace_types(trace_type: Iterable[TraceType]) -> list[str]:
    return [TraceType(kind).value for kind in trace_type]


def _object(value: Any, method: str) -> dict:
    if not isinstance(value, dict):
        raise Web3Error(f"{method}: expected an object, got {value!r}")
    return value


def _objects(value: Any, method: str) -> list[dict]:
    if not isinstance(value, list):
        raise Web3Error(f"{method}: expected a list, got {value!r}")
    return [_object(item, method) for item in value]


class Traces(Namespace):
    """Transaction and block tracing calls."""

    def call(
        self, req: CallRequest, trace_type: Iterable[TraceType], block: BlockRef = None
    ) -> dict:
        """Run a call and return its traces."""
        method = "trace_call"
        result = self._execute(
            method, req.to_rpc(), _trace_types(trace_type), encode_block_number(block)
        )
        return _object(result, method)

    def raw_transaction(self, data: bytes, trace_type: Iterable[TraceType]) -> dict:
        """Trace a raw transaction without sending it."""
        method = "trace_rawTransaction"
        return _object(self._execute(method, encode_data(data), _trace_types(trace_type)), method)

    def replay_transaction(self, tx_hash: HashLike, trace_type: Iterable[TraceType]) -> dict:
        """Replay a transaction and return its traces."""
        method = "trace_replayTransaction"
        result = self._execute(method, encode_hash(tx_hash, HASH_SIZE), _trace_types(trace_type))
        return _object(result, method)

    def replay_block_transactions(
        self, block: Union[BlockNumber, int], trace_type: Iterable[TraceType]
    ) -> list[dict]:
        """Replay every transaction of a block and return their traces."""
        method = "trace_replayBlockTransactions"
        result = self._execute(method, encode_block_number(block), _trace_types(trace_type))
        return _objects(result, method)

    def block(self, block: Union[BlockNumber, int]) -> list[dict]:
        """Return the traces created in a block."""
        method = "trace_block"
        return _objects(self._execute(method, encode_block_number(block)), method)

    def filter(self, trace_filter: Mapping[str, Any]) -> list[dict]:
        """Return the traces matching a filter given as its JSON object."""
        method = "trace_filter"
        return _objects(self._execute(method, dict(trace_filter)), method)

    def get(self, tx_hash: HashLike, index: Iterable[int]) -> dict:
        """Return the trace at a position within a transaction."""
        method = "trace_get"
        result = self._execute(
            method, encode_hash(tx_hash, HASH_SIZE), [encode_quantity(i) for i in index]
        )
        return _object(result, method)

    def transaction(self, tx_hash: HashLike) -> list[dict]:
        """Return all traces of a transaction."""
        method = "trace_transaction"
        return _objects(self._execute(method, encode_hash(tx_hash, HASH_SIZE)), method)