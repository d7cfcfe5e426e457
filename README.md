# ethrpc

A small client for the Ethereum JSON-RPC interface with no dependencies
outside the standard library. Calls are grouped into namespaces (`eth`,
`net`, `web3`, `personal`, `parity`, `parity_set`, `trace`, filters and
subscriptions). Each method encodes its arguments into the hex strings and
objects the node expects, sends them through a transport that you supply,
and decodes the result into Python values.

## Installing

From a checkout of the package:

```
pip install .
```

Python 3.10 or newer is required.

## Transports

A transport is a subclass of `ethrpc.transport.Transport` that implements
`execute(method, params)`. It receives the RPC method name and a list of
already-encoded JSON parameters, and returns the JSON `result` of the call.
A failed call should raise `ethrpc.transport.Web3Error`; the namespaces also
raise `Web3Error` when a result cannot be decoded.

Transports that deliver server notifications derive from
`ethrpc.transport.DuplexTransport` and also implement
`subscribe(subscription_id)`, returning an iterator over the raw
notification payloads, and `unsubscribe(subscription_id)`. Subscriptions
need such a transport.

A minimal HTTP transport written with the standard library might look like:

```python
import itertools
import json
import urllib.request

from ethrpc.transport import Transport, Web3Error


class HttpTransport(Transport):
    def __init__(self, url):
        self._url = url
        self._ids = itertools.count(1)

    def execute(self, method, params):
        body = json.dumps(
            {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        ).encode()
        request = urllib.request.Request(
            self._url, body, {"Content-Type": "application/json"}
        )
        with urllib.request.urlopen(request) as response:
            reply = json.load(response)
        if "error" in reply:
            raise Web3Error(reply["error"])
        return reply["result"]
```

## Using the client

`ethrpc.client.Web3` hands out every namespace over one transport:

```python
from ethrpc.client import Web3
from ethrpc.codec import BlockNumber

web3 = Web3(HttpTransport("http://localhost:8545"))

accounts = web3.eth().accounts()                  # list of 20-byte addresses
latest = web3.eth().block_number()                # int
balance = web3.eth().balance(accounts[0], BlockNumber.PENDING)
peers = web3.net().peer_count()
version = web3.web3().client_version()
```

`Web3.api(cls)` binds any `ethrpc.transport.Namespace` subclass, including
your own, to the same transport.

### Values

- Quantities are plain `int`s; addresses, hashes and signatures come back
  as `bytes` of their fixed size; data comes back as `bytes`.
- Addresses and hashes may be passed as `bytes`, as an `int`, or as a hex
  string with or without `0x`.
- Block arguments take a `BlockNumber` (`LATEST`, `EARLIEST`, `PENDING`) or
  an `int`; `None` means the latest block. Where a block may also be named
  by hash (`block`, `block_with_txs`, `uncle`, `transaction` and others),
  pass the hash as `bytes` or a hex string.
- Blocks, transactions, receipts, logs and traces are returned as the JSON
  objects the node sent.
- `Eth.work()` returns a `Work`, `Eth.syncing()` returns a `SyncInfo` or
  `None`, `Personal.sign_transaction()` returns a `RawTransaction`, and
  `ParitySet.parity_net_peers()` returns a `ParityPeerType`.

`ethrpc.codec` holds the request types — `CallRequest`,
`TransactionRequest` and `Filter`, each with a `to_rpc()` method — and the
wire helpers `encode_quantity`, `decode_quantity`, `encode_data`,
`decode_data`, `encode_hash`, `decode_hash` and `encode_block_number`.
Note that the sender field of requests is spelled `from_`:

```python
from ethrpc.codec import TransactionRequest

tx = TransactionRequest(from_=accounts[0], to=accounts[1], value=10**18)
tx_hash = web3.eth().send_transaction(tx)
```

`Traces` methods take a list of `ethrpc.traces.TraceType` values
(`TRACE`, `VM_TRACE`, `STATE_DIFF`).

## Filters

```python
blocks = web3.eth_filter().create_blocks_filter()
new_hashes = blocks.poll()                 # list, or None

for block_hash in blocks.stream(1.0):      # sleeps, polls, yields; forever
    print(block_hash.hex())
```

`create_logs_filter(Filter(...))` and `create_pending_transactions_filter()`
work the same way. A logs filter also has `logs()`, and every filter has
`uninstall()`. The poll interval is seconds or a `datetime.timedelta`.

## Subscriptions

With a duplex transport:

```python
with web3.eth_subscribe().subscribe_new_heads() as heads:
    print(heads.id())
    for header in heads:
        print(header)
```

`subscribe_logs`, `subscribe_new_pending_transactions` and
`subscribe_syncing` are also available. `unsubscribe()` cancels the
subscription on the node; `close()` (also called when the `with` block ends)
only stops local delivery.

## Waiting for confirmations

`send_transaction_with_confirmation` sends a transaction, installs a block
filter, waits until the block holding the transaction is followed by the
requested number of blocks, and returns the receipt. With zero
confirmations it fetches the receipt straight away and raises `Web3Error`
if there is none.

```python
receipt = web3.send_transaction_with_confirmation(tx, 1.0, 3)
```

`send_raw_transaction_with_confirmation` does the same for signed raw
bytes, and `wait_for_confirmations(poll_interval, confirmations, check)`
waits on any callable `check` that returns the number of the block holding
an event, or `None` while it is unknown. The same functions are in
`ethrpc.confirm`. All of these block the calling thread.

## What the package does not do

- It ships no transport: no HTTP, IPC or WebSocket client is included.
- It does not batch requests.
- It has no contract support: no ABI encoding, deployment or call helpers.
- It does not sign transactions locally or derive keys; signing goes
  through the node (`eth_sign`, `personal_*`).
- Blocks, transactions, receipts, logs and traces are not turned into
  typed objects.

## Tests

```
pip install ".[test]"
pytest
```