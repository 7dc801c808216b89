"""Static dispatch table: (resource, operation) -> JSON-RPC method."""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from . import shaping
from .params import (
    ParamKind,
    ParamSpec,
    call_object,
    log_filter,
    positional,
    positional_present,
    with_paymaster,
)
from ..utils.errors import UnsupportedOperation

Assembler = Callable[[Dict[str, Any]], List[Any]]
Shaper = Callable[[Dict[str, Any], Any], Any]


@dataclass(frozen=True)
class OperationSpec:
    """One dispatch table entry."""

    resource: str
    operation: str
    method: str
    params: Tuple[ParamSpec, ...] = ()
    assemble: Assembler = positional
    shape: Shaper = shaping.identity
    description: str = field(default="", compare=False)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.resource, self.operation)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource": self.resource,
            "operation": self.operation,
            "method": self.method,
            "description": self.description,
            "params": [p.to_dict() for p in self.params],
        }


# Shared parameter declarations
ADDRESS = ParamSpec("address", ParamKind.ADDRESS, description="Account address (0x + 40 hex digits)")
BLOCK = ParamSpec(
    "blockNumber",
    ParamKind.BLOCK,
    required=False,
    default="latest",
    description='Block number (decimal or hex) or "latest", "earliest", "pending"',
)
BLOCK_REQUIRED = ParamSpec(
    "blockNumber",
    ParamKind.BLOCK,
    description='Block number (decimal or hex) or "latest", "earliest", "pending"',
)
SIGNED_TX = ParamSpec("signedTransaction", ParamKind.HEX_DATA, description="Signed transaction data in hex format")
TX_HASH = ParamSpec("transactionHash", ParamKind.HASH, description="Transaction hash")
TX_OBJECT = ParamSpec(
    "transaction",
    ParamKind.JSON_OBJECT,
    description="Transaction object with fields like from, to, data, value",
)
INCLUDE_TXS = ParamSpec(
    "includeTransactions",
    ParamKind.BOOLEAN,
    required=False,
    default=False,
    description="Return full transaction objects instead of hashes",
)
BATCH_NUMBER = ParamSpec("batchNumber", ParamKind.QUANTITY, description="L1 batch number (decimal or hex)")
TOKEN_ADDRESS = ParamSpec("tokenAddress", ParamKind.ADDRESS, description="Token contract address")
FILTER_ID = ParamSpec("filterId", ParamKind.HASH, description="Filter id returned by newFilter")
LOG_INDEX = ParamSpec(
    "logIndex",
    ParamKind.INTEGER,
    required=False,
    default=0,
    description="Index of the L2-to-L1 log in the transaction",
)
TX_HASH_FOR_PROOF = ParamSpec("txHash", ParamKind.HASH, description="Transaction hash containing the log")
MSG_PROOF_PARAMS = (
    ParamSpec("blockNumber", ParamKind.QUANTITY, description="L2 block number containing the message"),
    ParamSpec("sender", ParamKind.ADDRESS, description="Sender of the L2-to-L1 message"),
    ParamSpec("msgHash", ParamKind.HASH, description="Keccak256 hash of the message"),
    ParamSpec("l2LogPosition", ParamKind.INTEGER, required=False, description="Position of the log in the block"),
)
FILTER_PARAMS = (
    ParamSpec("fromBlock", ParamKind.BLOCK, required=False, description="First block of the range"),
    ParamSpec("toBlock", ParamKind.BLOCK, required=False, description="Last block of the range"),
    ParamSpec("address", ParamKind.ADDRESS, required=False, description="Emitting contract address"),
    ParamSpec("topics", ParamKind.JSON_ARRAY, required=False, description="Topic filter as a JSON array"),
    ParamSpec("blockHash", ParamKind.HASH, required=False, description="Restrict to a single block"),
)


OPERATIONS: Tuple[OperationSpec, ...] = (
    # accounts
    OperationSpec(
        "accounts", "getBalance", "eth_getBalance",
        (ADDRESS, BLOCK), shape=shaping.balance,
        description="Get the ETH balance of an account",
    ),
    OperationSpec(
        "accounts", "getAccountDetails", "zks_getAccount",
        (ADDRESS, BLOCK), shape=shaping.account_details,
        description="Get zkSync account details",
    ),
    OperationSpec(
        "accounts", "getTransactionCount", "eth_getTransactionCount",
        (ADDRESS, BLOCK), shape=shaping.nonce,
        description="Get the nonce of an account",
    ),
    OperationSpec(
        "accounts", "getAllAccountBalances", "zks_getAllAccountBalances",
        (ADDRESS,), shape=shaping.all_balances,
        description="Get all confirmed token balances of an account",
    ),
    # transactions
    OperationSpec(
        "transactions", "sendRawTransaction", "eth_sendRawTransaction",
        (SIGNED_TX,),
        description="Submit an already-signed transaction",
    ),
    OperationSpec(
        "transactions", "getTransactionByHash", "eth_getTransactionByHash",
        (TX_HASH,),
        description="Get a transaction by its hash",
    ),
    OperationSpec(
        "transactions", "getTransactionReceipt", "eth_getTransactionReceipt",
        (TX_HASH,),
        description="Get the receipt of a transaction",
    ),
    OperationSpec(
        "transactions", "estimateFee", "zks_estimateFee",
        (TX_OBJECT,),
        description="Estimate the fee of a transaction",
    ),
    OperationSpec(
        "transactions", "estimateGas", "eth_estimateGas",
        (TX_OBJECT,),
        description="Estimate the gas of a transaction",
    ),
    OperationSpec(
        "transactions", "estimateGasL1ToL2", "zks_estimateGasL1ToL2",
        (TX_OBJECT,),
        description="Estimate gas for an L1 to L2 transaction",
    ),
    OperationSpec(
        "transactions", "call", "eth_call",
        (TX_OBJECT, BLOCK),
        description="Execute a read-only contract call",
    ),
    # blocks
    OperationSpec(
        "blocks", "getBlockByNumber", "eth_getBlockByNumber",
        (BLOCK_REQUIRED, INCLUDE_TXS),
        description="Get a block by number",
    ),
    OperationSpec(
        "blocks", "getBlockByHash", "eth_getBlockByHash",
        (ParamSpec("blockHash", ParamKind.HASH, description="Block hash"), INCLUDE_TXS),
        description="Get a block by hash",
    ),
    OperationSpec(
        "blocks", "getBlockNumber", "eth_blockNumber",
        shape=shaping.quantity("blockNumber"),
        description="Get the latest L2 block number",
    ),
    OperationSpec(
        "blocks", "getL1BatchNumber", "zks_getL1BatchNumber",
        shape=shaping.quantity("l1BatchNumber"),
        description="Get the latest L1 batch number",
    ),
    OperationSpec(
        "blocks", "getL1BatchDetails", "zks_getL1BatchDetails",
        (BATCH_NUMBER,),
        description="Get details of an L1 batch",
    ),
    OperationSpec(
        "blocks", "getBlockDetails", "zks_getBlockDetails",
        (ParamSpec("blockNumber", ParamKind.QUANTITY, description="L2 block number (decimal or hex)"),),
        description="Get zkSync-specific details of an L2 block",
    ),
    # paymasters
    OperationSpec(
        "paymasters", "estimateFee", "zks_estimateFee",
        (
            TX_OBJECT,
            ParamSpec("paymasterAddress", ParamKind.ADDRESS, required=False,
                      description="Address of the paymaster contract"),
            ParamSpec("paymasterInput", ParamKind.HEX_DATA, required=False, default="0x",
                      description="Input data for the paymaster"),
        ),
        assemble=with_paymaster,
        description="Estimate the fee of a transaction sponsored by a paymaster",
    ),
    OperationSpec(
        "paymasters", "sendTransaction", "eth_sendRawTransaction",
        (SIGNED_TX,),
        description="Submit an already-signed paymaster transaction",
    ),
    OperationSpec(
        "paymasters", "getTokenPrice", "zks_getTokenPrice",
        (TOKEN_ADDRESS,),
        description="Get the USD price of a token",
    ),
    # proofs
    OperationSpec(
        "proofs", "getProof", "zks_getProof",
        (
            ADDRESS,
            ParamSpec("keys", ParamKind.KEY_LIST, description="Storage keys (comma-separated hex values)"),
            ParamSpec("l1BatchNumber", ParamKind.QUANTITY, description="L1 batch number"),
        ),
        description="Get Merkle proofs for storage keys of an account",
    ),
    OperationSpec(
        "proofs", "getL1BatchDetails", "zks_getL1BatchDetails",
        (BATCH_NUMBER,),
        description="Get details of an L1 batch",
    ),
    OperationSpec(
        "proofs", "getL2ToL1LogProof", "zks_getL2ToL1LogProof",
        (TX_HASH_FOR_PROOF, LOG_INDEX), assemble=positional_present,
        description="Get the proof of an L2 to L1 log",
    ),
    OperationSpec(
        "proofs", "getL2ToL1MsgProof", "zks_getL2ToL1MsgProof",
        MSG_PROOF_PARAMS, assemble=positional_present,
        description="Get the proof of an L2 to L1 message",
    ),
    # contracts
    OperationSpec(
        "contracts", "callFunction", "eth_call",
        (TX_OBJECT, BLOCK),
        description="Call a contract function without a transaction",
    ),
    OperationSpec(
        "contracts", "getDetails", "zks_getContractDetails",
        (ParamSpec("contractAddress", ParamKind.ADDRESS, description="Contract address"),),
        description="Get contract details",
    ),
    OperationSpec(
        "contracts", "getCode", "eth_getCode",
        (ParamSpec("address", ParamKind.ADDRESS, description="Contract address"), BLOCK),
        description="Get the deployed bytecode of a contract",
    ),
    OperationSpec(
        "contracts", "getStorageAt", "eth_getStorageAt",
        (
            ParamSpec("address", ParamKind.ADDRESS, description="Contract address"),
            ParamSpec("position", ParamKind.HASH, description="Storage slot (hex)"),
            BLOCK,
        ),
        description="Read a contract storage slot",
    ),
    OperationSpec(
        "contracts", "getBytecodeByHash", "zks_getBytecodeByHash",
        (ParamSpec("bytecodeHash", ParamKind.HASH, description="Bytecode hash"),),
        description="Get bytecode by its hash",
    ),
    # tokens
    OperationSpec(
        "tokens", "getAllAccountBalances", "zks_getAllAccountBalances",
        (ADDRESS,), shape=shaping.all_balances,
        description="Get all confirmed token balances of an account",
    ),
    OperationSpec(
        "tokens", "getTokenPrice", "zks_getTokenPrice",
        (TOKEN_ADDRESS,),
        description="Get the USD price of a token",
    ),
    OperationSpec(
        "tokens", "getConfirmedTokens", "zks_getConfirmedTokens",
        (
            ParamSpec("from", ParamKind.INTEGER, required=False, default=0, description="Offset for pagination"),
            ParamSpec("limit", ParamKind.INTEGER, required=False, default=100,
                      description="Maximum number of tokens to return"),
        ),
        description="List tokens confirmed on zkSync Era",
    ),
    OperationSpec(
        "tokens", "callTokenContract", "eth_call",
        (
            ParamSpec("to", ParamKind.ADDRESS, description="Token contract address"),
            ParamSpec("data", ParamKind.HEX_DATA, required=False, description="Encoded function call data"),
            BLOCK,
        ),
        assemble=call_object,
        description="Call a token contract function",
    ),
    # logs
    OperationSpec(
        "logs", "getLogs", "eth_getLogs",
        FILTER_PARAMS, assemble=log_filter,
        description="Get logs matching a filter",
    ),
    OperationSpec(
        "logs", "newFilter", "eth_newFilter",
        FILTER_PARAMS[:4], assemble=log_filter,
        description="Install a log filter",
    ),
    OperationSpec(
        "logs", "getFilterChanges", "eth_getFilterChanges",
        (FILTER_ID,),
        description="Poll a filter for new logs",
    ),
    OperationSpec(
        "logs", "uninstallFilter", "eth_uninstallFilter",
        (FILTER_ID,),
        description="Uninstall a filter",
    ),
    # network
    OperationSpec(
        "network", "getChainId", "eth_chainId",
        shape=shaping.quantity("chainId"),
        description="Get the chain id",
    ),
    OperationSpec(
        "network", "getNetworkVersion", "net_version",
        description="Get the network id",
    ),
    OperationSpec(
        "network", "getGasPrice", "eth_gasPrice",
        shape=shaping.quantity("gasPrice"),
        description="Get the current gas price in wei",
    ),
    # bridging
    OperationSpec(
        "bridging", "getMainContract", "zks_getMainContract",
        description="Get the address of the main zkSync contract on L1",
    ),
    OperationSpec(
        "bridging", "getBridgehubContract", "zks_getBridgehubContract",
        description="Get the address of the bridgehub contract",
    ),
    OperationSpec(
        "bridging", "getBaseTokenL1Address", "zks_getBaseTokenL1Address",
        description="Get the L1 address of the base token",
    ),
    OperationSpec(
        "bridging", "getL2ToL1LogProof", "zks_getL2ToL1LogProof",
        (TX_HASH_FOR_PROOF, LOG_INDEX), assemble=positional_present,
        description="Get the proof of an L2 to L1 log",
    ),
    OperationSpec(
        "bridging", "getL2ToL1MsgProof", "zks_getL2ToL1MsgProof",
        MSG_PROOF_PARAMS, assemble=positional_present,
        description="Get the proof of an L2 to L1 message",
    ),
)

OPERATION_TABLE: Dict[Tuple[str, str], OperationSpec] = {spec.key: spec for spec in OPERATIONS}


def get_operation(resource: str, operation: str) -> OperationSpec:
    """Look up a dispatch table entry.

    Raises:
        UnsupportedOperation: If the pair is not in the table
    """
    try:
        return OPERATION_TABLE[(resource, operation)]
    except KeyError:
        raise UnsupportedOperation(resource, operation) from None


def list_resources() -> List[str]:
    return list(dict.fromkeys(spec.resource for spec in OPERATIONS))


def list_operations() -> List[Dict[str, Any]]:
    """Serializable catalog of every supported operation."""
    return [spec.to_dict() for spec in OPERATIONS]
