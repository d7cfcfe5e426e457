"""The `eth` namespace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union

from .codec import (
    ADDRESS_SIZE,
    HASH_SIZE,
    BlockNumber,
    CallRequest,
    Filter,
    HashLike,
    TransactionRequest,
    decode_data,
    decode_hash,
    decode_quantity,
    encode_block_number,
    encode_data,
    encode_hash,
    encode_quantity,
)
from .transport import Namespace, Web3Error

NONCE_SIZE = 8
SIGNATURE_SIZE = 65

BlockRef = Union[BlockNumber, int, None]
BlockId = Union[BlockNumber, int, bytes, bytearray, str]
TransactionId = Union[bytes, bytearray, str, tuple]

_T = TypeVar("_T")


@dataclass(frozen=True)
class Work:
    """A mining work package."""

    pow_hash: bytes
    seed_hash: bytes
    target: bytes
    number: Optional[int] = None


@dataclass(frozen=True)
class SyncInfo:
    """Progress of a node that is syncing."""

    starting_block: int
    current_block: int
    highest_block: int


def _is_hash(block: Any) -> bool:
    return isinstance(block, (bytes, bytearray, memoryview, str))


def _by_block(block: BlockId, by_hash: str, by_number: str) -> tuple[str, str]:
    """Pick the hash or number variant of a method and encode the block id."""
    if _is_hash(block):
        return by_hash, encode_hash(block, HASH_SIZE)
    if block is None:
        raise TypeError("a block id is required")
    return by_number, encode_block_number(block)


def _expect(value: Any, kind: type, method: str) -> Any:
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise Web3Error(f"{method}: expected {kind.__name__}, got {value!r}")
    return value


def _optional(value: Any, decode: Callable[[Any], _T]) -> Optional[_T]:
    return None if value is None else decode(value)


def _object(method: str) -> Callable[[Any], dict]:
    return lambda value: _expect(value, dict, method)


def _list_of(value: Any, decode: Callable[[Any], _T], method: str) -> list[_T]:
    return [decode(item) for item in _expect(value, list, method)]


def _address(value: Any) -> bytes:
    return decode_hash(value, ADDRESS_SIZE)


def _hash(value: Any) -> bytes:
    return decode_hash(value, HASH_SIZE)


def _work_number(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise Web3Error(f"eth_getWork: negative block number {value}")
        return value
    return decode_quantity(value)


class Eth(Namespace):
    """Chain state, transaction and mining calls."""

    def accounts(self) -> list[bytes]:
        """Return the addresses of the accounts the node holds."""
        return _list_of(self._execute("eth_accounts"), _address, "eth_accounts")

    def block_number(self) -> int:
        """Return the number of the most recent block."""
        return decode_quantity(self._execute("eth_blockNumber"))

    def call(self, req: CallRequest, block: Union[BlockId, None] = None) -> bytes:
        """Run a message call against a block without changing state."""
        if _is_hash(block):
            block_param: Any = {"blockHash": encode_hash(block, HASH_SIZE)}
        else:
            block_param = encode_block_number(block)
        return decode_data(self._execute("eth_call", req.to_rpc(), block_param))

    def coinbase(self) -> bytes:
        """Return the node's coinbase address."""
        return _address(self._execute("eth_coinbase"))

    def compile_lll(self, code: str) -> bytes:
        """Compile LLL source code."""
        return decode_data(self._execute("eth_compileLLL", code))

    def compile_solidity(self, code: str) -> bytes:
        """Compile Solidity source code."""
        return decode_data(self._execute("eth_compileSolidity", code))

    def compile_serpent(self, code: str) -> bytes:
        """Compile Serpent source code."""
        return decode_data(self._execute("eth_compileSerpent", code))

    def estimate_gas(self, req: CallRequest, block: BlockRef = None) -> int:
        """Estimate the gas a call would use."""
        if block is None:
            result = self._execute("eth_estimateGas", req.to_rpc())
        else:
            result = self._execute("eth_estimateGas", req.to_rpc(), encode_block_number(block))
        return decode_quantity(result)

    def gas_price(self) -> int:
        """Return the current recommended gas price."""
        return decode_quantity(self._execute("eth_gasPrice"))

    def balance(self, address: HashLike, block: BlockRef = None) -> int:
        """Return the balance of an address."""
        result = self._execute(
            "eth_getBalance", encode_hash(address, ADDRESS_SIZE), encode_block_number(block)
        )
        return decode_quantity(result)

    def logs(self, log_filter: Filter) -> list[dict]:
        """Return all logs matching a filter."""
        result = self._execute("eth_getLogs", log_filter.to_rpc())
        return _list_of(result, _object("eth_getLogs"), "eth_getLogs")

    def _get_block(self, block: BlockId, include_txs: bool) -> Optional[dict]:
        method, block_param = _by_block(block, "eth_getBlockByHash", "eth_getBlockByNumber")
        return _optional(self._execute(method, block_param, include_txs), _object(method))

    def block(self, block: BlockId) -> Optional[dict]:
        """Return a block with transaction hashes, or None if unknown."""
        return self._get_block(block, False)

    def block_with_txs(self, block: BlockId) -> Optional[dict]:
        """Return a block with full transaction objects, or None if unknown."""
        return self._get_block(block, True)

    def block_transaction_count(self, block: BlockId) -> Optional[int]:
        """Return the number of transactions in a block, or None if unknown."""
        method, block_param = _by_block(
            block, "eth_getBlockTransactionCountByHash", "eth_getBlockTransactionCountByNumber"
        )
        return _optional(self._execute(method, block_param), decode_quantity)

    def code(self, address: HashLike, block: BlockRef = None) -> bytes:
        """Return the code stored at an address."""
        result = self._execute(
            "eth_getCode", encode_hash(address, ADDRESS_SIZE), encode_block_number(block)
        )
        return decode_data(result)

    def compilers(self) -> list[str]:
        """Return the names of the compilers the node supports."""
        return _list_of(
            self._execute("eth_getCompilers"),
            lambda item: _expect(item, str, "eth_getCompilers"),
            "eth_getCompilers",
        )

    def chain_id(self) -> int:
        """Return the chain id."""
        return decode_quantity(self._execute("eth_chainId"))

    def storage(self, address: HashLike, idx: int, block: BlockRef = None) -> bytes:
        """Return one storage slot of an address."""
        result = self._execute(
            "eth_getStorageAt",
            encode_hash(address, ADDRESS_SIZE),
            encode_quantity(idx),
            encode_block_number(block),
        )
        return _hash(result)

    def transaction_count(self, address: HashLike, block: BlockRef = None) -> int:
        """Return the nonce of an address."""
        result = self._execute(
            "eth_getTransactionCount", encode_hash(address, ADDRESS_SIZE), encode_block_number(block)
        )
        return decode_quantity(result)

    def transaction(self, tx_id: TransactionId) -> Optional[dict]:
        """Return a transaction by hash or by (block, index), or None if unknown."""
        if isinstance(tx_id, tuple):
            block, index = tx_id
            method, block_param = _by_block(
                block,
                "eth_getTransactionByBlockHashAndIndex",
                "eth_getTransactionByBlockNumberAndIndex",
            )
            result = self._execute(method, block_param, encode_quantity(index))
        else:
            method = "eth_getTransactionByHash"
            result = self._execute(method, encode_hash(tx_id, HASH_SIZE))
        return _optional(result, _object(method))

    def transaction_receipt(self, tx_hash: HashLike) -> Optional[dict]:
        """Return the receipt of a transaction, or None if it is not mined."""
        method = "eth_getTransactionReceipt"
        return _optional(self._execute(method, encode_hash(tx_hash, HASH_SIZE)), _object(method))

    def uncle(self, block: BlockId, index: int) -> Optional[dict]:
        """Return an uncle of a block by index, or None if unknown."""
        method, block_param = _by_block(
            block, "eth_getUncleByBlockHashAndIndex", "eth_getUncleByBlockNumberAndIndex"
        )
        return _optional(
            self._execute(method, block_param, encode_quantity(index)), _object(method)
        )

    def uncle_count(self, block: BlockId) -> Optional[int]:
        """Return the number of uncles of a block, or None if unknown."""
        method, block_param = _by_block(
            block, "eth_getUncleCountByBlockHash", "eth_getUncleCountByBlockNumber"
        )
        return _optional(self._execute(method, block_param), decode_quantity)

    def work(self) -> Work:
        """Return the current work package."""
        result = _expect(self._execute("eth_getWork"), list, "eth_getWork")
        if len(result) == 3:
            pow_hash, seed_hash, target = result
            number = None
        elif len(result) == 4:
            pow_hash, seed_hash, target, raw_number = result
            number = _work_number(raw_number)
        else:
            raise Web3Error(f"eth_getWork: expected 3 or 4 items, got {len(result)}")
        return Work(_hash(pow_hash), _hash(seed_hash), _hash(target), number)

    def hashrate(self) -> int:
        """Return the node's hash rate."""
        return decode_quantity(self._execute("eth_hashrate"))

    def mining(self) -> bool:
        """Return whether the node is mining."""
        return _expect(self._execute("eth_mining"), bool, "eth_mining")

    def new_block_filter(self) -> int:
        """Install a new block filter and return its id."""
        return decode_quantity(self._execute("eth_newBlockFilter"))

    def new_pending_transaction_filter(self) -> int:
        """Install a new pending transaction filter and return its id."""
        return decode_quantity(self._execute("eth_newPendingTransactionFilter"))

    def protocol_version(self) -> str:
        """Return the protocol version."""
        return _expect(self._execute("eth_protocolVersion"), str, "eth_protocolVersion")

    def send_raw_transaction(self, rlp: bytes) -> bytes:
        """Send an RLP-encoded signed transaction and return its hash."""
        return _hash(self._execute("eth_sendRawTransaction", encode_data(rlp)))

    def send_transaction(self, tx: TransactionRequest) -> bytes:
        """Send a transaction signed by the node and return its hash."""
        return _hash(self._execute("eth_sendTransaction", tx.to_rpc()))

    def sign(self, address: HashLike, data: bytes) -> bytes:
        """Sign data with an account's key and return the 65-byte signature."""
        result = self._execute("eth_sign", encode_hash(address, ADDRESS_SIZE), encode_data(data))
        return decode_hash(result, SIGNATURE_SIZE)

    def submit_hashrate(self, rate: int, hash_id: HashLike) -> bool:
        """Submit the hash rate of an external miner."""
        result = self._execute(
            "eth_submitHashrate", encode_quantity(rate), encode_hash(hash_id, HASH_SIZE)
        )
        return _expect(result, bool, "eth_submitHashrate")

    def submit_work(self, nonce: HashLike, pow_hash: HashLike, mix_hash: HashLike) -> bool:
        """Submit a proof-of-work solution."""
        result = self._execute(
            "eth_submitWork",
            encode_hash(nonce, NONCE_SIZE),
            encode_hash(pow_hash, HASH_SIZE),
            encode_hash(mix_hash, HASH_SIZE),
        )
        return _expect(result, bool, "eth_submitWork")

    def syncing(self) -> Optional[SyncInfo]:
        """Return sync progress, or None when the node is not syncing."""
        result = self._execute("eth_syncing")
        if result is False:
            return None
        if not isinstance(result, dict):
            raise Web3Error(f"eth_syncing: unexpected result {result!r}")
        try:
            return SyncInfo(
                starting_block=decode_quantity(result["startingBlock"]),
                current_block=decode_quantity(result["currentBlock"]),
                highest_block=decode_quantity(result["highestBlock"]),
            )
        except KeyError as missing:
            raise Web3Error(f"eth_syncing: missing field {missing}") from None