"""
Call-data construction for handler calls.

Handlers are never called directly: the proxy receives `(handler, data)` and
delegate-calls the handler with `data`. These helpers build that `data` from a
function signature or an ABI entry.
"""
import re

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, to_bytes, to_checksum_address
from eth_utils.abi import collapse_if_tuple
from web3 import Web3

_ARRAY_SUFFIX = re.compile(r"^(.*)\[(\d*)\]$")


def split_types(types):
    """Splits `uint256,(address,bytes32[]),bool` on top-level commas."""
    parts = []
    depth = 0
    current = ""
    for char in types:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append(current.strip())
            current = ""
            continue
        current += char

    if depth != 0:
        raise ValueError(f"Unbalanced parentheses in `{types}`")
    if current.strip():
        parts.append(current.strip())
    return parts


def parse_signature(signature):
    """
    `swapExactETHForTokens(uint256,uint256,address[]):(uint256[])`
    -> ("swapExactETHForTokens", ["uint256", "uint256", "address[]"], ["uint256[]"])
    """
    match = re.fullmatch(r"\s*(\w+)\((.*?)\)\s*(?::\s*\((.*)\))?\s*", signature)
    if not match:
        raise ValueError(f"Invalid function signature `{signature}`")
    name, inputs, outputs = match.groups()
    return name, split_types(inputs), split_types(outputs or "")


def selector(signature):
    return function_signature_to_4byte_selector(signature)


def normalize_arg(abi_type, value):
    """Coerces test-friendly values into what eth-abi expects for `abi_type`."""
    array = _ARRAY_SUFFIX.match(abi_type)
    if array:
        return [normalize_arg(array.group(1), v) for v in value]

    if abi_type.startswith("("):
        component_types = split_types(abi_type[1:-1])
        if len(component_types) != len(value):
            raise ValueError(f"Expected {len(component_types)} values for `{abi_type}`, got {len(value)}")
        return tuple(normalize_arg(t, v) for t, v in zip(component_types, value))

    if abi_type == "address":
        return to_checksum_address(str(value.address) if hasattr(value, "address") else str(value))

    if abi_type.startswith("bytes") and isinstance(value, str):
        return to_bytes(hexstr=value)

    if abi_type.startswith(("uint", "int")) and isinstance(value, str):
        return int(value, 0)

    return value


def encode_args(types, args):
    if len(types) != len(args):
        raise ValueError(f"Expected {len(types)} arguments, got {len(args)}")
    return encode(types, [normalize_arg(t, a) for t, a in zip(types, args)])


def simple_encode(signature, *args):
    """
    Selector followed by the ABI-encoded arguments, the return part of the
    signature (after `:`) is accepted and ignored.
    """
    name, inputs, _outputs = parse_signature(signature)
    return selector(f"{name}({','.join(inputs)})") + encode_args(inputs, args)


def encode_function_call(abi_entry, args):
    """Call data for an ABI function entry, tuple components included."""
    types = [collapse_if_tuple(p) for p in abi_entry.get("inputs", [])]
    if len(types) != len(args):
        raise ValueError(f"Expected {len(types)} arguments, got {len(args)}")

    contract = Web3().eth.contract(abi=[abi_entry])
    data = contract.encode_abi(abi_entry["name"], args=[normalize_arg(t, a) for t, a in zip(types, args)])
    return to_bytes(hexstr=data)


def ascii_to_bytes32(text):
    raw = text.encode("ascii")
    if len(raw) > 32:
        raise ValueError(f"`{text}` does not fit in bytes32")
    return raw.ljust(32, b"\x00")


def decode_handler_return(data, types):
    return decode(types, data)
