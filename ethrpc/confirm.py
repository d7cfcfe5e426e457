"""Waiting for blocks to confirm an event, and sending transactions that wait for it."""

from __future__ import annotations

from functools import partial
from itertools import islice
from typing import Callable, Optional

from .codec import HashLike, TransactionRequest, decode_quantity
from .eth import Eth
from .eth_filter import EthFilter, Interval
from .transport import Transport, Web3Error

ConfirmationCheck = Callable[[], Optional[int]]


def _check_count(confirmations: int) -> None:
    if isinstance(confirmations, bool) or not isinstance(confirmations, int):
        raise TypeError("confirmations must be an int")
    if confirmations < 0:
        raise ValueError(f"confirmations cannot be negative: {confirmations}")


def wait_for_confirmations(
    eth: Eth,
    eth_filter: EthFilter,
    poll_interval: Interval,
    confirmations: int,
    check: ConfirmationCheck,
) -> None:
    """Block until an event is buried under enough blocks.

    On every new block after the first ``confirmations`` ones, ``check`` is
    called; it returns the number of the block holding the event, or None
    while the event is not known yet.  The wait ends once the chain head is
    at least ``confirmations`` blocks past that block.
    """
    _check_count(confirmations)
    block_filter = eth_filter.create_blocks_filter()
    new_blocks = islice(block_filter.stream(poll_interval), confirmations, None)
    for _ in new_blocks:
        confirmed_at = check()
        if confirmed_at is None:
            continue
        if confirmed_at + confirmations <= eth.block_number():
            return


def _receipt_block_number(eth: Eth, tx_hash: HashLike) -> Optional[int]:
    receipt = eth.transaction_receipt(tx_hash)
    if receipt is None:
        return None
    block_number = receipt.get("blockNumber")
    return None if block_number is None else decode_quantity(block_number)


def _confirmed_receipt(
    transport: Transport,
    send: Callable[[Eth], bytes],
    poll_interval: Interval,
    confirmations: int,
) -> dict:
    _check_count(confirmations)
    eth = Eth(transport)
    tx_hash = send(eth)
    if confirmations > 0:
        wait_for_confirmations(
            eth,
            EthFilter(transport),
            poll_interval,
            confirmations,
            partial(_receipt_block_number, Eth(transport), tx_hash),
        )
    receipt = eth.transaction_receipt(tx_hash)
    if receipt is None:
        raise Web3Error(f"no receipt for transaction 0x{tx_hash.hex()}")
    return receipt


def send_transaction_with_confirmation(
    transport: Transport,
    tx: TransactionRequest,
    poll_interval: Interval,
    confirmations: int,
) -> dict:
    """Send a transaction, wait for its confirmations and return its receipt."""
    return _confirmed_receipt(
        transport, lambda eth: eth.send_transaction(tx), poll_interval, confirmations
    )


def send_raw_transaction_with_confirmation(
    transport: Transport,
    tx: bytes,
    poll_interval: Interval,
    confirmations: int,
) -> dict:
    """Send a signed raw transaction, wait for its confirmations and return its receipt."""
    return _confirmed_receipt(
        transport, lambda eth: eth.send_raw_transaction(tx), poll_interval, confirmations
    )