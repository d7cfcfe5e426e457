"""Entry point that hands out every API namespace over one transport."""

from __future__ import annotations

from typing import TypeVar

from . import confirm
from .codec import TransactionRequest
from .eth import Eth
from .eth_filter import EthFilter, Interval
from .eth_subscribe import EthSubscribe
from .net import Net
from .parity import Parity
from .parity_set import ParitySet
from .personal import Personal
from .traces import Traces
from .transport import Namespace, Transport
from .web3 import Web3Api

_N = TypeVar("_N", bound=Namespace)


class Web3:
    """Gives access to all namespaces that share one transport."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def transport(self) -> Transport:
        """Return the transport the namespaces talk through."""
        return self._transport

    def api(self, namespace: type[_N]) -> _N:
        """Return an instance of any namespace class bound to this transport."""
        return namespace(self._transport)

    def eth(self) -> Eth:
        """Return the `eth` namespace."""
        return self.api(Eth)

    def net(self) -> Net:
        """Return the `net` namespace."""
        return self.api(Net)

    def web3(self) -> Web3Api:
        """Return the `web3` namespace."""
        return self.api(Web3Api)

    def eth_filter(self) -> EthFilter:
        """Return the filter calls of the `eth` namespace."""
        return self.api(EthFilter)

    def eth_subscribe(self) -> EthSubscribe:
        """Return the subscription calls of the `eth` namespace.

        Raises TypeError unless the transport delivers notifications.
        """
        return self.api(EthSubscribe)

    def parity(self) -> Parity:
        """Return the `parity` namespace."""
        return self.api(Parity)

    def parity_set(self) -> ParitySet:
        """Return the `parity_set` namespace."""
        return self.api(ParitySet)

    def personal(self) -> Personal:
        """Return the `personal` namespace."""
        return self.api(Personal)

    def trace(self) -> Traces:
        """Return the `trace` namespace."""
        return self.api(Traces)

    def wait_for_confirmations(
        self,
        poll_interval: Interval,
        confirmations: int,
        check: confirm.ConfirmationCheck,
    ) -> None:
        """Block until the event that ``check`` locates has enough confirmations."""
        confirm.wait_for_confirmations(
            self.eth(), self.eth_filter(), poll_interval, confirmations, check
        )

    def send_transaction_with_confirmation(
        self, tx: TransactionRequest, poll_interval: Interval, confirmations: int
    ) -> dict:
        """Send a transaction, wait for its confirmations and return its receipt."""
        return confirm.send_transaction_with_confirmation(
            self._transport, tx, poll_interval, confirmations
        )

    def send_raw_transaction_with_confirmation(
        self, tx: bytes, poll_interval: Interval, confirmations: int
    ) -> dict:
        """Send a signed raw transaction, wait for its confirmations and return its receipt."""
        return confirm.send_raw_transaction_with_confirmation(
            self._transport, tx, poll_interval, confirmations
        )