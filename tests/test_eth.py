import json

import pytest

from ethrpc.codec import BlockNumber, CallRequest, Filter, TransactionRequest
from ethrpc.eth import Eth, SyncInfo, Work
from ethrpc.transport import Transport, Web3Error


class FakeTransport(Transport):
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def execute(self, method, params):
        self.requests.append((method, params))
        return self.responses.pop(0)


def _wire(params):
    return [json.dumps(p, separators=(",", ":"), sort_keys=True) for p in params]


def addr(n):
    return n.to_bytes(20, "big")


def h256(n):
    return n.to_bytes(32, "big")


def addr_hex(n):
    return "0x" + format(n, "040x")


def hash_hex(n):
    return "0x" + format(n, "064x")


ADDR_123 = addr_hex(0x123)
HASH_123 = hash_hex(0x123)
HASH_456 = hash_hex(0x456)
HASH_789 = hash_hex(0x789)

BLOOM = "0x" + "ab" * 256


def _block(**overrides):
    block = {
        "number": "0x1b4",
        "hash": hash_hex(0xB10C),
        "parentHash": hash_hex(0xB10B),
        "mixHash": hash_hex(0x1010),
        "nonce": "0x0000000000000000",
        "sealFields": [hash_hex(0x5EA1), "0x0123456789abcdef"],
        "sha3Uncles": hash_hex(0x5A3),
        "logsBloom": BLOOM,
        "transactionsRoot": hash_hex(0x7A),
        "receiptsRoot": hash_hex(0x7B),
        "stateRoot": hash_hex(0x7C),
        "miner": addr_hex(0x4E65),
        "difficulty": "0x27f07",
        "totalDifficulty": "0x27f07",
        "extraData": hash_hex(0),
        "size": "0x27f07",
        "gasLimit": "0x9f759",
        "minGasPrice": "0x9f759",
        "gasUsed": "0x9f759",
        "timestamp": "0x54e34e8e",
        "transactions": [],
        "uncles": [],
    }
    block.update(overrides)
    return block


EXAMPLE_BLOCK = _block()

EXAMPLE_PENDING_BLOCK = _block(
    author=addr_hex(0),
    hash=None,
    logsBloom=None,
    number=None,
    sealFields=[],
    transactions=[hash_hex(0x7000 + n) for n in range(10)],
)

EXAMPLE_LOG = {
    "logIndex": "0x1",
    "blockNumber": "0x1b4",
    "blockHash": hash_hex(0xB1),
    "transactionHash": hash_hex(0x71),
    "transactionIndex": "0x0",
    "address": addr_hex(0xC0DE),
    "data": hash_hex(0),
    "topics": [hash_hex(0x70)],
}

EXAMPLE_TX = {
    "hash": hash_hex(0x71),
    "nonce": "0x0",
    "blockHash": hash_hex(0xB1),
    "blockNumber": "0x15df",
    "transactionIndex": "0x1",
    "from": addr_hex(0xF1),
    "to": addr_hex(0xF2),
    "value": "0x7f110",
    "gas": "0x7f110",
    "gasPrice": "0x09184e72a000",
    "input": "0x6038",
}

EXAMPLE_RECEIPT = {
    "hash": hash_hex(0x72),
    "index": "0x1",
    "transactionHash": hash_hex(0x72),
    "transactionIndex": "0x1",
    "blockNumber": "0xb",
    "blockHash": hash_hex(0xB2),
    "cumulativeGasUsed": "0x33bc",
    "gasUsed": "0x4dc",
    "contractAddress": addr_hex(0xC1),
    "logsBloom": BLOOM,
    "logs": [],
}

CALL_REQ = CallRequest(to=addr(0x123), value=0x1)
CALL_REQ_WIRE = json.dumps({"to": ADDR_123, "value": "0x1"}, separators=(",", ":"))

TX_REQ = TransactionRequest(from_=addr(0x123), to=addr(0x123), gas_price=0x1, value=0x1)
TX_REQ_WIRE = json.dumps(
    {"from": ADDR_123, "gasPrice": "0x1", "to": ADDR_123, "value": "0x1"},
    separators=(",", ":"),
)


def q(text):
    return '"%s"' % text


CASES = [
    ("accounts", lambda e: e.accounts(), [ADDR_123], "eth_accounts", [], [addr(0x123)]),
    ("block_number", lambda e: e.block_number(), "0x123", "eth_blockNumber", [], 0x123),
    ("call", lambda e: e.call(CALL_REQ, None), "0x010203", "eth_call", [CALL_REQ_WIRE, q("latest")], bytes([1, 2, 3])),
    ("coinbase", lambda e: e.coinbase(), ADDR_123, "eth_coinbase", [], addr(0x123)),
    ("compile_lll", lambda e: e.compile_lll("code"), "0x0123", "eth_compileLLL", [q("code")], b"\x01\x23"),
    ("compile_solidity", lambda e: e.compile_solidity("code"), "0x0123", "eth_compileSolidity", [q("code")], b"\x01\x23"),
    ("compile_serpent", lambda e: e.compile_serpent("code"), "0x0123", "eth_compileSerpent", [q("code")], b"\x01\x23"),
    ("estimate_gas", lambda e: e.estimate_gas(CALL_REQ, None), "0x123", "eth_estimateGas", [CALL_REQ_WIRE], 0x123),
    (
        "estimate_gas_for_block",
        lambda e: e.estimate_gas(CALL_REQ, 0x123),
        "0x123",
        "eth_estimateGas",
        [CALL_REQ_WIRE, q("0x123")],
        0x123,
    ),
    ("gas_price", lambda e: e.gas_price(), "0x123", "eth_gasPrice", [], 0x123),
    ("balance", lambda e: e.balance(addr(0x123), None), "0x123", "eth_getBalance", [q(ADDR_123), q("latest")], 0x123),
    ("logs", lambda e: e.logs(Filter()), [EXAMPLE_LOG], "eth_getLogs", ["{}"], [EXAMPLE_LOG]),
    (
        "block_by_hash",
        lambda e: e.block(h256(0x123)),
        EXAMPLE_BLOCK,
        "eth_getBlockByHash",
        [q(HASH_123), "false"],
        EXAMPLE_BLOCK,
    ),
    (
        "block",
        lambda e: e.block(BlockNumber.PENDING),
        EXAMPLE_PENDING_BLOCK,
        "eth_getBlockByNumber",
        [q("pending"), "false"],
        EXAMPLE_PENDING_BLOCK,
    ),
    (
        "block_with_txs",
        lambda e: e.block_with_txs(BlockNumber.PENDING),
        EXAMPLE_BLOCK,
        "eth_getBlockByNumber",
        [q("pending"), "true"],
        EXAMPLE_BLOCK,
    ),
    (
        "block_tx_count_by_hash",
        lambda e: e.block_transaction_count(h256(0x123)),
        "0x123",
        "eth_getBlockTransactionCountByHash",
        [q(HASH_123)],
        0x123,
    ),
    (
        "block_transaction_count",
        lambda e: e.block_transaction_count(BlockNumber.PENDING),
        None,
        "eth_getBlockTransactionCountByNumber",
        [q("pending")],
        None,
    ),
    ("code", lambda e: e.code(0x123, BlockNumber.PENDING), "0x0123", "eth_getCode", [q(ADDR_123), q("pending")], b"\x01\x23"),
    ("compilers", lambda e: e.compilers(), [], "eth_getCompilers", [], []),
    ("chain_id", lambda e: e.chain_id(), "0x123", "eth_chainId", [], 0x123),
    (
        "storage",
        lambda e: e.storage(addr(0x123), 0x456, None),
        HASH_123,
        "eth_getStorageAt",
        [q(ADDR_123), q("0x456"), q("latest")],
        h256(0x123),
    ),
    (
        "transaction_count",
        lambda e: e.transaction_count(addr(0x123), None),
        "0x123",
        "eth_getTransactionCount",
        [q(ADDR_123), q("latest")],
        0x123,
    ),
    ("tx_by_hash", lambda e: e.transaction(h256(0x123)), EXAMPLE_TX, "eth_getTransactionByHash", [q(HASH_123)], EXAMPLE_TX),
    (
        "tx_by_block_hash_and_index",
        lambda e: e.transaction((h256(0x123), 5)),
        None,
        "eth_getTransactionByBlockHashAndIndex",
        [q(HASH_123), q("0x5")],
        None,
    ),
    (
        "tx_by_block_no_and_index",
        lambda e: e.transaction((BlockNumber.PENDING, 5)),
        EXAMPLE_TX,
        "eth_getTransactionByBlockNumberAndIndex",
        [q("pending"), q("0x5")],
        EXAMPLE_TX,
    ),
    (
        "transaction_receipt",
        lambda e: e.transaction_receipt(h256(0x123)),
        EXAMPLE_RECEIPT,
        "eth_getTransactionReceipt",
        [q(HASH_123)],
        EXAMPLE_RECEIPT,
    ),
    (
        "uncle_by_hash",
        lambda e: e.uncle(h256(0x123), 5),
        EXAMPLE_BLOCK,
        "eth_getUncleByBlockHashAndIndex",
        [q(HASH_123), q("0x5")],
        EXAMPLE_BLOCK,
    ),
    (
        "uncle_by_no",
        lambda e: e.uncle(BlockNumber.EARLIEST, 5),
        None,
        "eth_getUncleByBlockNumberAndIndex",
        [q("earliest"), q("0x5")],
        None,
    ),
    (
        "uncle_count_by_hash",
        lambda e: e.uncle_count(h256(0x123)),
        "0x123",
        "eth_getUncleCountByBlockHash",
        [q(HASH_123)],
        0x123,
    ),
    (
        "uncle_count_by_no",
        lambda e: e.uncle_count(BlockNumber.EARLIEST),
        None,
        "eth_getUncleCountByBlockNumber",
        [q("earliest")],
        None,
    ),
    (
        "work_3",
        lambda e: e.work(),
        [HASH_123, HASH_456, HASH_789],
        "eth_getWork",
        [],
        Work(pow_hash=h256(0x123), seed_hash=h256(0x456), target=h256(0x789), number=None),
    ),
    (
        "work_4",
        lambda e: e.work(),
        [HASH_123, HASH_456, HASH_789, 5],
        "eth_getWork",
        [],
        Work(pow_hash=h256(0x123), seed_hash=h256(0x456), target=h256(0x789), number=5),
    ),
    ("hashrate", lambda e: e.hashrate(), "0x123", "eth_hashrate", [], 0x123),
    ("mining", lambda e: e.mining(), True, "eth_mining", [], True),
    ("new_block_filter", lambda e: e.new_block_filter(), "0x123", "eth_newBlockFilter", [], 0x123),
    (
        "new_pending_transaction_filter",
        lambda e: e.new_pending_transaction_filter(),
        "0x123",
        "eth_newPendingTransactionFilter",
        [],
        0x123,
    ),
    ("protocol_version", lambda e: e.protocol_version(), "0x123", "eth_protocolVersion", [], "0x123"),
    (
        "send_raw_transaction",
        lambda e: e.send_raw_transaction(bytes([1, 2, 3, 4])),
        HASH_123,
        "eth_sendRawTransaction",
        [q("0x01020304")],
        h256(0x123),
    ),
    ("send_transaction", lambda e: e.send_transaction(TX_REQ), HASH_123, "eth_sendTransaction", [TX_REQ_WIRE], h256(0x123)),
    (
        "sign",
        lambda e: e.sign(0x123, bytes([1, 2, 3, 4])),
        "0x" + (0x123).to_bytes(65, "big").hex(),
        "eth_sign",
        [q(ADDR_123), q("0x01020304")],
        (0x123).to_bytes(65, "big"),
    ),
    (
        "submit_hashrate",
        lambda e: e.submit_hashrate(0x123, h256(0x456)),
        True,
        "eth_submitHashrate",
        [q("0x123"), q(HASH_456)],
        True,
    ),
    (
        "submit_work",
        lambda e: e.submit_work((0x123).to_bytes(8, "big"), h256(0x456), h256(0x789)),
        True,
        "eth_submitWork",
        [q("0x" + format(0x123, "016x")), q(HASH_456), q(HASH_789)],
        True,
    ),
    (
        "syncing",
        lambda e: e.syncing(),
        {"startingBlock": "0x384", "currentBlock": "0x386", "highestBlock": "0x454"},
        "eth_syncing",
        [],
        SyncInfo(starting_block=0x384, current_block=0x386, highest_block=0x454),
    ),
    ("not_syncing", lambda e: e.syncing(), False, "eth_syncing", [], None),
]


@pytest.mark.parametrize(
    "call, response, method, wire, expected",
    [case[1:] for case in CASES],
    ids=[case[0] for case in CASES],
)
def test_rpc_call(call, response, method, wire, expected):
    transport = FakeTransport(response)
    result = call(Eth(transport))
    assert result == expected
    assert len(transport.requests) == 1
    sent_method, sent_params = transport.requests[0]
    assert sent_method == method
    assert _wire(sent_params) == wire


def test_call_with_explicit_block_number():
    transport = FakeTransport("0x")
    assert Eth(transport).call(CALL_REQ, 0x10) == b""
    assert _wire(transport.requests[0][1]) == [CALL_REQ_WIRE, q("0x10")]


def test_balance_accepts_hex_address():
    transport = FakeTransport("0x0")
    assert Eth(transport).balance("407d73d8a49eeb85d32cf465507dd71d507100c1", BlockNumber.EARLIEST) == 0
    assert _wire(transport.requests[0][1]) == [
        q("0x407d73d8a49eeb85d32cf465507dd71d507100c1"),
        q("earliest"),
    ]


def test_block_number_rejects_non_string():
    with pytest.raises(Web3Error):
        Eth(FakeTransport(123)).block_number()


def test_accounts_rejects_non_list():
    with pytest.raises(Web3Error):
        Eth(FakeTransport("0x")).accounts()


def test_accounts_rejects_short_address():
    with pytest.raises(Web3Error):
        Eth(FakeTransport(["0x0123"])).accounts()


def test_work_rejects_wrong_length():
    with pytest.raises(Web3Error):
        Eth(FakeTransport([HASH_123, HASH_456])).work()


def test_work_accepts_hex_number():
    work = Eth(FakeTransport([HASH_123, HASH_456, HASH_789, "0x7"])).work()
    assert work.number == 7


def test_syncing_rejects_true():
    with pytest.raises(Web3Error):
        Eth(FakeTransport(True)).syncing()


def test_syncing_rejects_missing_field():
    with pytest.raises(Web3Error):
        Eth(FakeTransport({"startingBlock": "0x1"})).syncing()


def test_mining_rejects_string():
    with pytest.raises(Web3Error):
        Eth(FakeTransport("true")).mining()


def test_block_rejects_non_object():
    with pytest.raises(Web3Error):
        Eth(FakeTransport("0x1")).block(BlockNumber.LATEST)


def test_storage_rejects_negative_index():
    transport = FakeTransport(HASH_123)
    with pytest.raises(ValueError):
        Eth(transport).storage(addr(1), -1, None)
    assert transport.requests == []