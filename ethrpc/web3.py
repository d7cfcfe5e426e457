"""The `web3` namespace."""

from __future__ import annotations

from .codec import HASH_SIZE, decode_hash, encode_data
from .transport import Namespace, Web3Error


class Web3Api(Namespace):
    """Client information and hashing calls."""

    def client_version(self) -> str:
        """Return the node's client version string."""
        result = self._execute("web3_clientVersion")
        if not isinstance(result, str):
            raise Web3Error(f"web3_clientVersion: expected str, got {result!r}")
        return result

    def sha3(self, data: bytes) -> bytes:
        """Return the node's Keccak-256 hash of the given data."""
        return decode_hash(self._execute("web3_sha3", encode_data(data)), HASH_SIZE)