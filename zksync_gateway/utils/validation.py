"""Input validation utilities."""
import re
from typing import Any

from .errors import InvalidBlockNumber

VALID_ADDRESS = re.compile(r"^0x[a-fA-F0-9]{40}$")
VALID_HEX = re.compile(r"^0x[a-fA-F0-9]+$")
VALID_HEX_DATA = re.compile(r"^0x[a-fA-F0-9]*$")
VALID_DECIMAL = re.compile(r"^[0-9]+$")

BLOCK_TAGS = {"latest", "earliest", "pending"}


def validate_address(value: Any) -> bool:
    """Validate a 20-byte 0x-prefixed account or contract address."""
    return isinstance(value, str) and bool(VALID_ADDRESS.match(value))


def validate_hex(value: Any) -> bool:
    """Validate a non-empty 0x-prefixed hex quantity or hash."""
    return isinstance(value, str) and bool(VALID_HEX.match(value))


def validate_hex_data(value: Any) -> bool:
    """Validate 0x-prefixed hex data, allowing the empty payload ``0x``."""
    return isinstance(value, str) and bool(VALID_HEX_DATA.match(value))


def format_block_number(value: Any) -> str:
    """Normalize a block reference to its canonical JSON-RPC form.

    Decimal strings and integers become ``0x``-prefixed hex. Hex strings and
    the tags ``latest``, ``earliest`` and ``pending`` pass through unchanged,
    so applying the function twice gives the same result as applying it once.
    """
    if isinstance(value, bool):
        raise InvalidBlockNumber(value)
    if isinstance(value, int):
        if value < 0:
            raise InvalidBlockNumber(value)
        return hex(value)
    if not isinstance(value, str):
        raise InvalidBlockNumber(value)

    block = value.strip()
    if block in BLOCK_TAGS or VALID_HEX.match(block):
        return block
    if VALID_DECIMAL.match(block):
        return hex(int(block, 10))
    raise InvalidBlockNumber(value)


def parse_quantity(value: Any) -> int:
    """Parse a decimal or 0x-hex quantity into an integer.

    Raises:
        ValueError: If the value is not a non-negative integer representation.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a quantity: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"negative quantity: {value}")
        return value
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if VALID_HEX.match(text):
            return int(text, 16)
        if VALID_DECIMAL.match(text):
            return int(text, 10)
    raise ValueError(f"not a quantity: {value!r}")
