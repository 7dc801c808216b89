"""Parameter declarations and coercion for dispatch table entries."""
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..utils.errors import (
    InvalidAddress,
    InvalidJsonParameter,
    InvalidParameter,
    MissingParameter,
)
from ..utils.validation import (
    format_block_number,
    parse_quantity,
    validate_address,
    validate_hex,
    validate_hex_data,
)


class ParamKind(str, Enum):
    ADDRESS = "address"
    BLOCK = "block"
    QUANTITY = "quantity"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING = "string"
    HASH = "hash"
    HEX_DATA = "hex_data"
    JSON_OBJECT = "json_object"
    JSON_ARRAY = "json_array"
    KEY_LIST = "key_list"


@dataclass(frozen=True)
class ParamSpec:
    """A named field drawn from the caller's record."""

    name: str
    kind: ParamKind
    required: bool = True
    default: Any = None
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.kind.value,
            "required": self.required,
            "default": self.default,
            "description": self.description,
        }


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _load_json(field: str, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError as e:
        raise InvalidJsonParameter(field, str(e)) from e


def coerce(spec: ParamSpec, value: Any) -> Any:
    """Validate and convert a single present value according to its kind."""
    kind = spec.kind

    if kind == ParamKind.ADDRESS:
        if not validate_address(value):
            raise InvalidAddress(value)
        return value

    if kind == ParamKind.BLOCK:
        return format_block_number(value)

    if kind in (ParamKind.QUANTITY, ParamKind.INTEGER):
        try:
            return parse_quantity(value)
        except ValueError as e:
            raise InvalidParameter(spec.name, value, "a non-negative integer") from e

    if kind == ParamKind.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise InvalidParameter(spec.name, value, "true or false")

    if kind == ParamKind.HASH:
        if not validate_hex(value):
            raise InvalidParameter(spec.name, value, "a 0x-prefixed hex string")
        return value

    if kind == ParamKind.HEX_DATA:
        if not validate_hex_data(value):
            raise InvalidParameter(spec.name, value, "0x-prefixed hex data")
        return value

    if kind == ParamKind.STRING:
        return str(value).strip()

    if kind == ParamKind.JSON_OBJECT:
        parsed = _load_json(spec.name, value)
        if not isinstance(parsed, dict):
            raise InvalidJsonParameter(spec.name, "expected a JSON object")
        # Copy so assemblers can inject fields without touching caller data
        return dict(parsed)

    if kind == ParamKind.JSON_ARRAY:
        parsed = _load_json(spec.name, value)
        if not isinstance(parsed, list):
            raise InvalidJsonParameter(spec.name, "expected a JSON array")
        return parsed

    if kind == ParamKind.KEY_LIST:
        if isinstance(value, (list, tuple)):
            keys = [str(key).strip() for key in value]
        elif isinstance(value, str):
            keys = [key.strip() for key in value.split(",")]
        else:
            raise InvalidParameter(spec.name, value, "a comma-separated list")
        keys = [key for key in keys if key]
        if not keys:
            raise MissingParameter(spec.name)
        return keys

    raise InvalidParameter(spec.name, value, f"a supported kind, got {kind}")


def extract_params(specs: Sequence[ParamSpec], record: Mapping[str, Any]) -> Dict[str, Any]:
    """Pull declared fields out of a record, in declared order.

    Missing optional fields take their declared default (which may be
    ``None``, meaning "leave it out").

    Raises:
        MissingParameter: If a required field is absent or empty
        InvalidInput: If a present field fails validation
    """
    values: Dict[str, Any] = {}
    for spec in specs:
        raw = record.get(spec.name)
        if _is_missing(raw):
            if spec.required:
                raise MissingParameter(spec.name)
            values[spec.name] = None if spec.default is None else coerce(spec, spec.default)
            continue
        values[spec.name] = coerce(spec, raw)
    return values


def positional(values: Dict[str, Any]) -> List[Any]:
    """Default assembler: every extracted value, in declared order."""
    return list(values.values())


def positional_present(values: Dict[str, Any]) -> List[Any]:
    """Positional params with trailing unset optionals dropped."""
    params = list(values.values())
    while params and params[-1] is None:
        params.pop()
    return params


def with_paymaster(values: Dict[str, Any]) -> List[Any]:
    """Merge optional paymaster address/input into the transaction object."""
    transaction = values["transaction"]
    paymaster: Optional[str] = values.get("paymasterAddress")
    if paymaster:
        transaction["paymaster"] = paymaster
        transaction["paymasterInput"] = values.get("paymasterInput") or "0x"
    return [transaction]


def call_object(values: Dict[str, Any]) -> List[Any]:
    """Build an eth_call object from separate ``to``/``data`` fields."""
    transaction: Dict[str, Any] = {"to": values["to"]}
    if values.get("data"):
        transaction["data"] = values["data"]
    return [transaction, values["blockNumber"]]


def log_filter(values: Dict[str, Any]) -> List[Any]:
    """Build a log filter object, leaving out unset criteria."""
    criteria = {
        "fromBlock": values.get("fromBlock"),
        "toBlock": values.get("toBlock"),
        "address": values.get("address"),
        "topics": values.get("topics"),
        "blockHash": values.get("blockHash"),
    }
    return [{key: value for key, value in criteria.items() if value is not None}]
