"""The `personal` namespace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .codec import (
    ADDRESS_SIZE,
    HASH_SIZE,
    HashLike,
    TransactionRequest,
    decode_data,
    decode_hash,
    encode_hash,
)
from .transport import Namespace, Web3Error

_MAX_DURATION = 0xFFFF


@dataclass(frozen=True)
class RawTransaction:
    """A signed transaction: its raw bytes and its details."""

    raw: bytes
    tx: dict


class Personal(Namespace):
    """Account management calls."""

    def list_accounts(self) -> list[bytes]:
        """Return the addresses of the accounts the node holds."""
        result = self._execute("personal_listAccounts")
        if not isinstance(result, list):
            raise Web3Error(f"personal_listAccounts: expected a list, got {result!r}")
        return [decode_hash(item, ADDRESS_SIZE) for item in result]

    def new_account(self, password: str) -> bytes:
        """Create an account protected by a password and return its address."""
        return decode_hash(self._execute("personal_newAccount", password), ADDRESS_SIZE)

    def unlock_account(
        self, address: HashLike, password: str, duration: Optional[int] = None
    ) -> bool:
        """Unlock an account for some seconds, or for one transaction when no duration is given."""
        if duration is not None:
            if isinstance(duration, bool) or not isinstance(duration, int):
                raise TypeError("duration must be an int")
            if not 0 <= duration <= _MAX_DURATION:
                raise ValueError(f"duration out of range: {duration}")
        result = self._execute(
            "personal_unlockAccount", encode_hash(address, ADDRESS_SIZE), password, duration
        )
        if not isinstance(result, bool):
            raise Web3Error(f"personal_unlockAccount: expected bool, got {result!r}")
        return result

    def send_transaction(self, transaction: TransactionRequest, password: str) -> bytes:
        """Send a transaction from a locked account and return its hash."""
        result = self._execute("personal_sendTransaction", transaction.to_rpc(), password)
        return decode_hash(result, HASH_SIZE)

    def sign_transaction(self, transaction: TransactionRequest, password: str) -> RawTransaction:
        """Sign a transaction without sending it; the account stays locked."""
        result: Any = self._execute("personal_signTransaction", transaction.to_rpc(), password)
        if not isinstance(result, dict):
            raise Web3Error(f"personal_signTransaction: expected an object, got {result!r}")
        try:
            raw, tx = result["raw"], result["tx"]
        except KeyError as missing:
            raise Web3Error(f"personal_signTransaction: missing field {missing}") from None
        if not isinstance(tx, dict):
            raise Web3Error(f"personal_signTransaction: expected a transaction object, got {tx!r}")
        return RawTransaction(raw=decode_data(raw), tx=tx)