"""Result shaping functions applied after a successful call."""
from decimal import Decimal, localcontext
from typing import Any, Dict, Optional

WEI_PER_ETH = Decimal(10) ** 18


def hex_to_int(value: Any) -> Optional[int]:
    """Convert a 0x-hex quantity to int, or None if it is not one."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None
    try:
        return int(value, 16)
    except ValueError:
        return None


def hex_to_decimal_str(value: Any) -> Optional[str]:
    number = hex_to_int(value)
    return None if number is None else str(number)


def wei_to_eth(wei: int) -> str:
    """Exact decimal ether amount, without exponent notation."""
    with localcontext() as ctx:
        ctx.prec = 100
        eth = Decimal(wei) / WEI_PER_ETH
    return format(eth.normalize(), "f")


def identity(values: Dict[str, Any], result: Any) -> Any:
    return result


def balance(values: Dict[str, Any], result: Any) -> Dict[str, Any]:
    wei = hex_to_int(result)
    return {
        "address": values["address"],
        "blockNumber": values["blockNumber"],
        "balance": result,
        "balanceWei": None if wei is None else str(wei),
        "balanceEth": None if wei is None else wei_to_eth(wei),
    }


def nonce(values: Dict[str, Any], result: Any) -> Dict[str, Any]:
    return {
        "address": values["address"],
        "blockNumber": values["blockNumber"],
        "nonce": result,
        "nonceDecimal": hex_to_decimal_str(result),
    }


def account_details(values: Dict[str, Any], result: Any) -> Dict[str, Any]:
    return {
        "address": values["address"],
        "blockNumber": values["blockNumber"],
        "accountDetails": result,
    }


def all_balances(values: Dict[str, Any], result: Any) -> Dict[str, Any]:
    return {
        "address": values["address"],
        "balances": result,
        "tokenCount": len(result) if isinstance(result, dict) else 0,
    }


def quantity(field: str):
    """Shaper for a bare hex quantity result, adding its decimal form."""

    def shape(values: Dict[str, Any], result: Any) -> Dict[str, Any]:
        return {field: result, f"{field}Decimal": hex_to_decimal_str(result)}

    shape.__name__ = f"quantity_{field}"
    return shape
