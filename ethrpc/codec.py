"""Encoding of request values and decoding of response values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from .transport import Web3Error

ADDRESS_SIZE = 20
HASH_SIZE = 32

_MAX_U256 = (1 << 256) - 1
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")

HashLike = Union[bytes, bytearray, int, str]


class BlockNumber(Enum):
    """Named block tags; explicit block numbers are plain ints."""

    LATEST = "latest"
    EARLIEST = "earliest"
    PENDING = "pending"


def encode_quantity(value: int) -> str:
    """Encode an unsigned 256-bit integer as a minimal hex quantity."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"quantity must be an int, not {type(value).__name__}")
    if value < 0 or value > _MAX_U256:
        raise ValueError(f"quantity out of range: {value}")
    return hex(value)


def _hex_digits(value: Any) -> str:
    if not isinstance(value, str) or not value.startswith("0x"):
        raise Web3Error(f"expected a 0x-prefixed hex string, got {value!r}")
    digits = value[2:]
    if not _HEX_DIGITS.fullmatch(digits):
        raise Web3Error(f"invalid hex string: {value!r}")
    return digits


def decode_quantity(value: Any) -> int:
    """Decode a hex quantity string into an int."""
    digits = _hex_digits(value)
    if not digits:
        raise Web3Error(f"empty quantity: {value!r}")
    number = int(digits, 16)
    if number > _MAX_U256:
        raise Web3Error(f"quantity out of range: {value!r}")
    return number


def encode_data(value: bytes) -> str:
    """Encode bytes as 0x-prefixed hex."""
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"data must be bytes, not {type(value).__name__}")
    return "0x" + bytes(value).hex()


def decode_data(value: Any) -> bytes:
    """Decode 0x-prefixed hex into bytes."""
    digits = _hex_digits(value)
    if len(digits) % 2:
        raise Web3Error(f"odd number of hex digits: {value!r}")
    return bytes.fromhex(digits)


def _hash_bytes(value: HashLike, size: int) -> bytes:
    if isinstance(value, bool):
        raise TypeError("a hash cannot be a bool")
    if isinstance(value, int):
        if value < 0 or value >= 1 << (8 * size):
            raise ValueError(f"value does not fit in {size} bytes: {value}")
        return value.to_bytes(size, "big")
    if isinstance(value, str):
        digits = value[2:] if value.startswith("0x") else value
        if len(digits) != 2 * size or not _HEX_DIGITS.fullmatch(digits):
            raise ValueError(f"expected {size} bytes of hex, got {value!r}")
        return bytes.fromhex(digits)
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        if len(raw) != size:
            raise ValueError(f"expected {size} bytes, got {len(raw)}")
        return raw
    raise TypeError(f"cannot use {type(value).__name__} as a hash")


def encode_hash(value: HashLike, size: int) -> str:
    """Encode a fixed-size hash or address given as bytes, int or hex string."""
    return "0x" + _hash_bytes(value, size).hex()


def decode_hash(value: Any, size: int) -> bytes:
    """Decode a fixed-size hash or address into bytes of that size."""
    digits = _hex_digits(value)
    if len(digits) != 2 * size:
        raise Web3Error(f"expected {size} bytes of hex, got {value!r}")
    return bytes.fromhex(digits)


def encode_block_number(block: Union[BlockNumber, int, None]) -> str:
    """Encode a block tag or number; None stands for the latest block."""
    if block is None:
        return BlockNumber.LATEST.value
    if isinstance(block, BlockNumber):
        return block.value
    return encode_quantity(block)


def _optional_quantities(out: dict, **fields: Optional[int]) -> None:
    for key, value in fields.items():
        if value is not None:
            out[key] = encode_quantity(value)


@dataclass(frozen=True)
class CallRequest:
    """A message call that does not create a transaction."""

    to: HashLike
    from_: Optional[HashLike] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None
    value: Optional[int] = None
    data: Optional[bytes] = None

    def to_rpc(self) -> dict:
        """Return the JSON object sent to the node; unset fields are left out."""
        out: dict = {}
        if self.from_ is not None:
            out["from"] = encode_hash(self.from_, ADDRESS_SIZE)
        out["to"] = encode_hash(self.to, ADDRESS_SIZE)
        _optional_quantities(out, gas=self.gas, gasPrice=self.gas_price, value=self.value)
        if self.data is not None:
            out["data"] = encode_data(self.data)
        return out


@dataclass(frozen=True)
class TransactionRequest:
    """A transaction to be signed and sent by the node."""

    from_: HashLike
    to: Optional[HashLike] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None
    value: Optional[int] = None
    data: Optional[bytes] = None
    nonce: Optional[int] = None
    condition: Optional[Mapping[str, Any]] = None

    def to_rpc(self) -> dict:
        """Return the JSON object sent to the node; unset fields are left out."""
        out: dict = {"from": encode_hash(self.from_, ADDRESS_SIZE)}
        if self.to is not None:
            out["to"] = encode_hash(self.to, ADDRESS_SIZE)
        _optional_quantities(out, gas=self.gas, gasPrice=self.gas_price, value=self.value)
        if self.data is not None:
            out["data"] = encode_data(self.data)
        _optional_quantities(out, nonce=self.nonce)
        if self.condition is not None:
            out["condition"] = dict(self.condition)
        return out


def _one_or_many(values: list) -> Any:
    return values[0] if len(values) == 1 else values


@dataclass(frozen=True)
class Filter:
    """Criteria selecting logs."""

    from_block: Union[BlockNumber, int, None] = None
    to_block: Union[BlockNumber, int, None] = None
    address: Optional[Sequence[HashLike]] = None
    topics: Optional[Sequence[Optional[Sequence[HashLike]]]] = None
    limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.topics is not None and len(self.topics) > 4:
            raise ValueError("a filter takes at most 4 topic positions")

    def to_rpc(self) -> dict:
        """Return the JSON object sent to the node; unset fields are left out."""
        out: dict = {}
        if self.from_block is not None:
            out["fromBlock"] = encode_block_number(self.from_block)
        if self.to_block is not None:
            out["toBlock"] = encode_block_number(self.to_block)
        if self.address is not None:
            out["address"] = _one_or_many([encode_hash(a, ADDRESS_SIZE) for a in self.address])
        if self.topics is not None:
            encoded = [
                None if topic is None else _one_or_many([encode_hash(t, HASH_SIZE) for t in topic])
                for topic in self.topics
            ]
            while encoded and encoded[-1] is None:
                encoded.pop()
            out["topics"] = encoded
        if self.limit is not None:
            out["limit"] = self.limit
        return out