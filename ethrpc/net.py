"""The `net` namespace."""

from __future__ import annotations

from typing import Any

from .codec import decode_quantity
from .transport import Namespace, Web3Error


def _expect(value: Any, kind: type, method: str) -> Any:
    if not isinstance(value, kind):
        raise Web3Error(f"{method}: expected {kind.__name__}, got {value!r}")
    return value


class Net(Namespace):
    """Network status calls."""

    def version(self) -> str:
        """Return the network protocol version."""
        return _expect(self._execute("net_version"), str, "net_version")

    def peer_count(self) -> int:
        """Return the number of peers connected to the node."""
        return decode_quantity(self._execute("net_peerCount"))

    def is_listening(self) -> bool:
        """Return whether the node listens for network connections."""
        return _expect(self._execute("net_listening"), bool, "net_listening")