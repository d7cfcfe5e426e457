"""The `parity_set` namespace."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .codec import ADDRESS_SIZE, HASH_SIZE, HashLike, decode_hash, encode_hash
from .transport import Namespace, Web3Error


@dataclass(frozen=True)
class PeerNetworkInfo:
    """Network addresses of a peer connection."""

    remote_address: str
    local_address: str


@dataclass(frozen=True)
class PeerProtocolsInfo:
    """Protocol details of a peer; None where a protocol is not in use."""

    eth: Optional[dict] = None
    pip: Optional[dict] = None


@dataclass(frozen=True)
class ParityPeerInfo:
    """One connected or connecting peer."""

    id: Optional[str]
    name: str
    caps: list = field(default_factory=list)
    network: PeerNetworkInfo = field(default_factory=lambda: PeerNetworkInfo("", ""))
    protocols: PeerProtocolsInfo = field(default_factory=PeerProtocolsInfo)


@dataclass(frozen=True)
class ParityPeerType:
    """Summary of the node's peers."""

    active: int
    connected: int
    max: int
    peers: list = field(default_factory=list)


def _field(obj: dict, key: str, method: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise Web3Error(f"{method}: missing field {key!r}") from None


def _object(value: Any, method: str) -> dict:
    if not isinstance(value, dict):
        raise Web3Error(f"{method}: expected an object, got {value!r}")
    return value


def _typed(value: Any, kind: type, method: str) -> Any:
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise Web3Error(f"{method}: expected {kind.__name__}, got {value!r}")
    return value


def _optional_object(value: Any, method: str) -> Optional[dict]:
    return None if value is None else _object(value, method)


def _decode_peer(value: Any, method: str) -> ParityPeerInfo:
    peer = _object(value, method)
    peer_id = peer.get("id")
    if peer_id is not None:
        _typed(peer_id, str, method)
    network = _object(_field(peer, "network", method), method)
    protocols = _object(_field(peer, "protocols", method), method)
    return ParityPeerInfo(
        id=peer_id,
        name=_typed(_field(peer, "name", method), str, method),
        caps=list(_typed(_field(peer, "caps", method), list, method)),
        network=PeerNetworkInfo(
            remote_address=_typed(_field(network, "remoteAddress", method), str, method),
            local_address=_typed(_field(network, "localAddress", method), str, method),
        ),
        protocols=PeerProtocolsInfo(
            eth=_optional_object(protocols.get("eth"), method),
            pip=_optional_object(protocols.get("pip"), method),
        ),
    )


class ParitySet(Namespace):
    """Calls that change the node's settings."""

    def _bool(self, method: str, *params: Any) -> bool:
        return _typed(self._execute(method, *params), bool, method)

    def accept_non_reserved_peers(self) -> bool:
        """Let the node accept non-reserved peers (the default)."""
        return self._bool("parity_acceptNonReservedPeers")

    def add_reserved_peer(self, enode: str) -> bool:
        """Add a reserved peer."""
        return self._bool("parity_addReservedPeer", enode)

    def drop_non_reserved_peers(self) -> bool:
        """Drop all non-reserved peers until accept_non_reserved_peers is called."""
        return self._bool("parity_dropNonReservedPeers")

    def parity_net_peers(self) -> ParityPeerType:
        """Return the connected and connecting peers."""
        method = "parity_netPeers"
        result = _object(self._execute(method), method)
        peers = _typed(_field(result, "peers", method), list, method)
        return ParityPeerType(
            active=_typed(_field(result, "active", method), int, method),
            connected=_typed(_field(result, "connected", method), int, method),
            max=_typed(_field(result, "max", method), int, method),
            peers=[_decode_peer(peer, method) for peer in peers],
        )

    def execute_upgrade(self) -> bool:
        """Upgrade the node to the version reported by upgrade_ready."""
        return self._bool("parity_executeUpgrade")

    def hash_content(self, url: str) -> bytes:
        """Return the hash of the file at a URL."""
        return decode_hash(self._execute("parity_hashContent", url), HASH_SIZE)

    def remove_reserved_peer(self, enode: str) -> bool:
        """Remove a reserved peer."""
        return self._bool("parity_removeReservedPeer", enode)

    def set_author(self, author: HashLike) -> bool:
        """Set the author (coinbase) of mined blocks."""
        return self._bool("parity_setAuthor", encode_hash(author, ADDRESS_SIZE))

    def set_chain(self, chain: str) -> bool:
        """Set the network spec the node uses."""
        return self._bool("parity_setChain", chain)

    def set_engine_signer(self, address: HashLike, password: str) -> bool:
        """Set the authority account that signs consensus messages."""
        return self._bool("parity_setEngineSigner", encode_hash(address, ADDRESS_SIZE), password)

    def set_extra_data(self, data: HashLike) -> bool:
        """Set the extra data of newly mined blocks."""
        return self._bool("parity_setExtraData", encode_hash(data, HASH_SIZE))

    def set_gas_ceil_target(self, quantity: HashLike) -> bool:
        """Set the gas ceiling target of mined blocks."""
        return self._bool("parity_setGasCeilTarget", encode_hash(quantity, HASH_SIZE))

    def set_gas_floor_target(self, quantity: HashLike) -> bool:
        """Set the gas floor target of mined blocks."""
        return self._bool("parity_setGasFloorTarget", encode_hash(quantity, HASH_SIZE))

    def set_max_transaction_gas(self, quantity: HashLike) -> bool:
        """Set the most gas one transaction may use."""
        return self._bool("parity_setMaxTransactionGas", encode_hash(quantity, HASH_SIZE))

    def set_min_gas_price(self, quantity: HashLike) -> bool:
        """Set the lowest gas price a queued transaction may have."""
        return self._bool("parity_setMinGasPrice", encode_hash(quantity, HASH_SIZE))

    def set_mode(self, mode: str) -> bool:
        """Change the operating mode of the node."""
        return self._bool("parity_setMode", mode)

    def set_transactions_limit(self, limit: HashLike) -> bool:
        """Change the limit of transactions in the queue."""
        return self._bool("parity_setTransactionsLimit", encode_hash(limit, HASH_SIZE))

    def upgrade_ready(self) -> Optional[str]:
        """Return the release available for upgrade, or None."""
        result = self._execute("parity_upgradeReady")
        if result is None:
            return None
        return _typed(result, str, "parity_upgradeReady")