"""The `parity` namespace."""

from __future__ import annotations

from typing import Iterable

from .codec import CallRequest, decode_data
from .transport import Namespace, Web3Error


class Parity(Namespace):
    """Parity-specific calls."""

    def call(self, requests: Iterable[CallRequest]) -> list[bytes]:
        """Run several calls in sequence without changing state; return their outputs."""
        result = self._execute("parity_call", [req.to_rpc() for req in requests])
        if not isinstance(result, list):
            raise Web3Error(f"parity_call: expected a list, got {result!r}")
        return [decode_data(item) for item in result]