#!/usr/bin/env python3
"""Generate deterministic sample Safe UI pastes for the demo.

Outputs:
  sample_data/sample_paste_clean.txt     : fully expanded transaction details
  sample_data/sample_paste_truncated.txt : data field collapsed behind "show more"

Run:
  python sample_data/generate_sample_paste.py
"""

from __future__ import annotations

import hashlib
from pathlib import Path

HERE = Path(__file__).resolve().parent


# ============================================================
# Data definitions: deterministic, hardcoded
# ============================================================

SHORT_NAME = "eth"
SAFE_ADDRESS = "0x8D4C3B2A1F0E9D8C7B6A5F4E3D2C1B0A9F8E7D6C"
RECIPIENT = "0x0Fe1d2C3b4A5968778695A4B3C2D1E0F1a2B3c4D"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"

# transfer(RECIPIENT, 1000 USDC)
TRANSFER_DATA = "0xa9059cbb" + "0" * 24 + RECIPIENT[2:].lower() + "0" * 56 + "3b9aca00"

NONCE = "42"


def _sample_hash(name: str) -> str:
    return "0x" + hashlib.sha256(f"sample-{name}".encode()).hexdigest()


def render_paste(data_block: str) -> str:
    lines = [
        "Transaction details",
        "Safe address:",
        f"{SHORT_NAME}:{SAFE_ADDRESS}",
        "Send 1000 USDC to",
        f"{SHORT_NAME}:{RECIPIENT}",
        "Transaction data",
        "to:",
        f"{SHORT_NAME}:{USDC}",
        "value:",
        "0",
        "data:",
        data_block,
        "operation:",
        "0 (call)",
        "safeTxGas:",
        "0",
        "baseGas:",
        "0",
        "gasPrice:",
        "0",
        "gasToken:",
        "0x0000...0000",
        "refundReceiver:",
        "0x0000...0000",
        "nonce:",
        NONCE,
        "Transaction hashes",
        "safeTxHash:",
        _sample_hash("safeTxHash"),
        "Domain hash:",
        _sample_hash("domainHash"),
        "Message hash:",
        _sample_hash("messageHash"),
        "Balance change",
        "-1000 USDC",
    ]
    return "\n".join(lines) + "\n"


def main() -> None:
    clean = render_paste(TRANSFER_DATA)
    truncated = render_paste(TRANSFER_DATA[:50] + "...\nShow more")

    (HERE / "sample_paste_clean.txt").write_text(clean, encoding="utf-8")
    (HERE / "sample_paste_truncated.txt").write_text(truncated, encoding="utf-8")
    print(f"Wrote {HERE / 'sample_paste_clean.txt'}")
    print(f"Wrote {HERE / 'sample_paste_truncated.txt'}")


if __name__ == "__main__":
    main()
