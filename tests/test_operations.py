"""Unit tests for the dispatch table and parameter marshaling."""
import pytest

from zksync_gateway.operations import get_operation, list_operations, list_resources, OPERATIONS
from zksync_gateway.operations.params import extract_params
from zksync_gateway.operations import shaping
from zksync_gateway.utils.errors import (
    InvalidAddress,
    InvalidBlockNumber,
    InvalidJsonParameter,
    InvalidParameter,
    MissingParameter,
    UnsupportedOperation,
)

ADDRESS = "0x1234567890123456789012345678901234567890"
PAYMASTER = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"


def marshal(resource, operation, record):
    """Return the positional params an operation would send."""
    spec = get_operation(resource, operation)
    return spec.assemble(extract_params(spec.params, record))


class TestTable:
    """Test the static catalog."""

    def test_pairs_are_unique(self):
        keys = [spec.key for spec in OPERATIONS]
        assert len(keys) == len(set(keys))

    def test_resources(self):
        assert list_resources() == [
            "accounts", "transactions", "blocks", "paymasters", "proofs",
            "contracts", "tokens", "logs", "network", "bridging",
        ]

    @pytest.mark.parametrize("resource,operation,method", [
        ("accounts", "getBalance", "eth_getBalance"),
        ("accounts", "getAccountDetails", "zks_getAccount"),
        ("transactions", "sendRawTransaction", "eth_sendRawTransaction"),
        ("blocks", "getL1BatchDetails", "zks_getL1BatchDetails"),
        ("paymasters", "estimateFee", "zks_estimateFee"),
        ("proofs", "getProof", "zks_getProof"),
        ("contracts", "getBytecodeByHash", "zks_getBytecodeByHash"),
        ("tokens", "callTokenContract", "eth_call"),
        ("logs", "uninstallFilter", "eth_uninstallFilter"),
        ("network", "getNetworkVersion", "net_version"),
        ("bridging", "getBridgehubContract", "zks_getBridgehubContract"),
    ])
    def test_method_mapping(self, resource, operation, method):
        assert get_operation(resource, operation).method == method

    def test_unsupported_operation(self):
        with pytest.raises(UnsupportedOperation) as exc_info:
            get_operation("accounts", "transferEverything")
        assert exc_info.value.resource == "accounts"

        with pytest.raises(UnsupportedOperation):
            get_operation("unknown", "getBalance")

    def test_catalog_is_serializable(self):
        catalog = list_operations()
        assert len(catalog) == len(OPERATIONS)
        balance = next(op for op in catalog if op["operation"] == "getBalance")
        assert [p["name"] for p in balance["params"]] == ["address", "blockNumber"]
        assert balance["params"][1]["default"] == "latest"


class TestMarshaling:
    """Test parameter extraction and ordering."""

    def test_block_defaults_to_latest(self):
        assert marshal("accounts", "getBalance", {"address": ADDRESS}) == [ADDRESS, "latest"]
        assert marshal("accounts", "getBalance", {"address": ADDRESS, "blockNumber": ""}) == [ADDRESS, "latest"]

    def test_decimal_block_converted(self):
        params = marshal("accounts", "getTransactionCount", {"address": ADDRESS, "blockNumber": "100"})
        assert params == [ADDRESS, "0x64"]

    def test_invalid_block_number(self):
        with pytest.raises(InvalidBlockNumber):
            marshal("accounts", "getBalance", {"address": ADDRESS, "blockNumber": "yesterday"})

    def test_missing_required(self):
        with pytest.raises(MissingParameter) as exc_info:
            marshal("accounts", "getBalance", {})
        assert exc_info.value.field == "address"

    def test_invalid_address(self):
        with pytest.raises(InvalidAddress):
            marshal("accounts", "getBalance", {"address": "0x1234"})

    def test_address_fields_validated_everywhere(self):
        with pytest.raises(InvalidAddress):
            marshal("tokens", "getTokenPrice", {"tokenAddress": "not-an-address"})
        with pytest.raises(InvalidAddress):
            marshal("contracts", "getDetails", {"contractAddress": ADDRESS[:-1]})

    def test_proof_keys_split_and_trimmed(self):
        params = marshal("proofs", "getProof", {"address": ADDRESS, "keys": "0x1, 0x2", "l1BatchNumber": "12"})
        assert params == [ADDRESS, ["0x1", "0x2"], 12]

    def test_proof_keys_drop_empty_entries(self):
        params = marshal("proofs", "getProof", {"address": ADDRESS, "keys": "0x1,,0x2,", "l1BatchNumber": 5})
        assert params[1] == ["0x1", "0x2"]

    def test_proof_keys_all_empty(self):
        with pytest.raises(MissingParameter):
            marshal("proofs", "getProof", {"address": ADDRESS, "keys": " , ", "l1BatchNumber": 5})

    def test_transaction_json_text(self):
        params = marshal("transactions", "call", {"transaction": '{"to": "0x0", "data": "0x"}'})
        assert params == [{"to": "0x0", "data": "0x"}, "latest"]

    def test_transaction_malformed_json(self):
        with pytest.raises(InvalidJsonParameter):
            marshal("transactions", "estimateFee", {"transaction": "{not json"})
        with pytest.raises(InvalidJsonParameter):
            marshal("transactions", "estimateFee", {"transaction": "[1, 2]"})

    def test_paymaster_merged_into_transaction(self):
        tx = {"from": ADDRESS, "to": ADDRESS}
        params = marshal("paymasters", "estimateFee", {
            "transaction": tx,
            "paymasterAddress": PAYMASTER,
            "paymasterInput": "0x8c5a3445",
        })
        assert params == [{"from": ADDRESS, "to": ADDRESS, "paymaster": PAYMASTER, "paymasterInput": "0x8c5a3445"}]
        # Caller's object is left alone
        assert "paymaster" not in tx

    def test_paymaster_input_defaults(self):
        params = marshal("paymasters", "estimateFee", {"transaction": {}, "paymasterAddress": PAYMASTER})
        assert params == [{"paymaster": PAYMASTER, "paymasterInput": "0x"}]

    def test_no_paymaster(self):
        assert marshal("paymasters", "estimateFee", {"transaction": {"to": ADDRESS}}) == [{"to": ADDRESS}]

    def test_token_call_object(self):
        params = marshal("tokens", "callTokenContract", {"to": ADDRESS, "data": "0x70a08231", "blockNumber": "7"})
        assert params == [{"to": ADDRESS, "data": "0x70a08231"}, "0x7"]
        assert marshal("tokens", "callTokenContract", {"to": ADDRESS}) == [{"to": ADDRESS}, "latest"]

    def test_block_by_number_include_transactions(self):
        assert marshal("blocks", "getBlockByNumber", {"blockNumber": "latest"}) == ["latest", False]
        assert marshal("blocks", "getBlockByNumber", {"blockNumber": "1", "includeTransactions": "true"}) == ["0x1", True]
        with pytest.raises(MissingParameter):
            marshal("blocks", "getBlockByNumber", {})
        with pytest.raises(InvalidParameter):
            marshal("blocks", "getBlockByNumber", {"blockNumber": "1", "includeTransactions": "maybe"})

    def test_batch_number_quantity(self):
        assert marshal("blocks", "getL1BatchDetails", {"batchNumber": "0x10"}) == [16]
        assert marshal("proofs", "getL1BatchDetails", {"batchNumber": 16}) == [16]
        with pytest.raises(InvalidParameter):
            marshal("blocks", "getBlockDetails", {"blockNumber": "latest"})

    def test_confirmed_tokens_defaults(self):
        assert marshal("tokens", "getConfirmedTokens", {}) == [0, 100]
        assert marshal("tokens", "getConfirmedTokens", {"from": 10, "limit": "5"}) == [10, 5]

    def test_log_proof_index(self):
        tx_hash = "0x" + "ab" * 32
        assert marshal("proofs", "getL2ToL1LogProof", {"txHash": tx_hash}) == [tx_hash, 0]
        assert marshal("bridging", "getL2ToL1LogProof", {"txHash": tx_hash, "logIndex": 2}) == [tx_hash, 2]

    def test_msg_proof_optional_position_dropped(self):
        msg_hash = "0x" + "cd" * 32
        record = {"blockNumber": "100", "sender": ADDRESS, "msgHash": msg_hash}
        assert marshal("proofs", "getL2ToL1MsgProof", record) == [100, ADDRESS, msg_hash]
        record["l2LogPosition"] = 3
        assert marshal("bridging", "getL2ToL1MsgProof", record) == [100, ADDRESS, msg_hash, 3]

    def test_log_filter(self):
        params = marshal("logs", "getLogs", {
            "fromBlock": "100",
            "toBlock": "latest",
            "address": ADDRESS,
            "topics": '["0xddf252ad", null]',
        })
        assert params == [{
            "fromBlock": "0x64",
            "toBlock": "latest",
            "address": ADDRESS,
            "topics": ["0xddf252ad", None],
        }]
        assert marshal("logs", "newFilter", {}) == [{}]

    def test_log_filter_invalid_topics(self):
        with pytest.raises(InvalidJsonParameter):
            marshal("logs", "getLogs", {"topics": '{"a": 1}'})
        with pytest.raises(InvalidJsonParameter):
            marshal("logs", "getLogs", {"topics": "[0xddf"})

    def test_no_param_operations(self):
        for resource, operation in [("network", "getChainId"), ("blocks", "getBlockNumber"),
                                    ("bridging", "getMainContract")]:
            assert marshal(resource, operation, {"ignored": 1}) == []


class TestShaping:
    """Test result shaping."""

    def test_balance(self):
        shaped = shaping.balance({"address": ADDRESS, "blockNumber": "latest"}, "0x1bc16d674ec80000")
        assert shaped == {
            "address": ADDRESS,
            "blockNumber": "latest",
            "balance": "0x1bc16d674ec80000",
            "balanceWei": "2000000000000000000",
            "balanceEth": "2",
        }

    @pytest.mark.parametrize("wei,eth", [
        (0, "0"),
        (1, "0.000000000000000001"),
        (1500000000000000000, "1.5"),
        (10 ** 19, "10"),
        (123456789 * 10 ** 30, "123456789000000000000"),
    ])
    def test_wei_to_eth(self, wei, eth):
        assert shaping.wei_to_eth(wei) == eth

    def test_nonce(self):
        shaped = shaping.nonce({"address": ADDRESS, "blockNumber": "pending"}, "0x1f")
        assert shaped["nonce"] == "0x1f"
        assert shaped["nonceDecimal"] == "31"

    def test_all_balances_counts_keys(self):
        shaped = shaping.all_balances({"address": ADDRESS}, {"0x000": "0x1", "0x111": "0x2"})
        assert shaped["tokenCount"] == 2
        assert shaping.all_balances({"address": ADDRESS}, None)["tokenCount"] == 0
        assert shaping.all_balances({"address": ADDRESS}, 5)["tokenCount"] == 0

    def test_quantity(self):
        shape = shaping.quantity("chainId")
        assert shape({}, "0x144") == {"chainId": "0x144", "chainIdDecimal": "324"}
        assert shape({}, None) == {"chainId": None, "chainIdDecimal": None}
