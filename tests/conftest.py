"""Shared test fixtures for paste parser tests."""

from pathlib import Path

import pytest

from paste_parser.chain_mapping import ChainShortNameTable, load_chain_table
from paste_parser.networks import DEFAULT_DIRECTORY, NetworkDirectory

SAMPLE_DIR = Path(__file__).resolve().parent.parent / "sample_data"

SAFE = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"
# transfer(0x3333..., 1000 USDC)
DATA = "0xa9059cbb" + "0" * 24 + "3" * 40 + "0" * 56 + "3b9aca00"
SAFE_TX_HASH = "0x" + "a" * 64
DOMAIN_HASH = "0x" + "b" * 64
MESSAGE_HASH = "0x" + "c" * 64

# Selector cut short by an ellipsis; every other field is intact
TRUNCATED_SELECTOR_PASTE = (
    "to:0xABCDEF0000000000000000000000000000000001\n"
    "value:0\n"
    "data:0x a9059cbb...\n"
    "operation:0\n"
    "safeTxGas:0"
)

# (label, value lines) in Safe UI copy order; a value of None is a section header
SAMPLE_PARTS: tuple[tuple[str, str | None], ...] = (
    ("Safe address:", f"eth:{SAFE}"),
    ("Transaction data", None),
    ("to:", f"eth:{RECIPIENT}"),
    ("value:", "0"),
    ("data:", DATA),
    ("operation:", "0 (call)"),
    ("safeTxGas:", "0"),
    ("baseGas:", "0"),
    ("gasPrice:", "0"),
    ("gasToken:", "0x0000...0000"),
    ("refundReceiver:", "0x0000...0000"),
    ("nonce:", "7"),
    ("Transaction hashes", None),
    ("safeTxHash:", SAFE_TX_HASH),
    ("Domain hash:", DOMAIN_HASH),
    ("Message hash:", MESSAGE_HASH),
    ("Balance change", None),
)

# Label -> parsed field name
FIELD_FOR_LABEL = {
    "Safe address:": "safe_address",
    "to:": "to",
    "value:": "value",
    "data:": "data",
    "operation:": "operation",
    "safeTxGas:": "safe_tx_gas",
    "baseGas:": "base_gas",
    "gasPrice:": "gas_price",
    "gasToken:": "gas_token",
    "refundReceiver:": "refund_receiver",
    "nonce:": "nonce",
    "safeTxHash:": "safe_tx_hash",
    "Domain hash:": "domain_hash",
    "Message hash:": "message_hash",
}


def build_paste(parts=SAMPLE_PARTS, without: str | None = None) -> str:
    """Render *parts* as copied text, optionally dropping one label and its value."""
    lines: list[str] = []
    for label, value in parts:
        if label == without:
            continue
        lines.append(label)
        if value is not None:
            lines.append(value)
    return "\n".join(lines) + "\n"


@pytest.fixture
def sample_paste() -> str:
    return build_paste()


@pytest.fixture
def clean_sample_file() -> str:
    return (SAMPLE_DIR / "sample_paste_clean.txt").read_text(encoding="utf-8")


@pytest.fixture
def truncated_sample_file() -> str:
    return (SAMPLE_DIR / "sample_paste_truncated.txt").read_text(encoding="utf-8")


@pytest.fixture
def chain_table() -> ChainShortNameTable:
    return load_chain_table()


@pytest.fixture
def directory() -> NetworkDirectory:
    return DEFAULT_DIRECTORY
