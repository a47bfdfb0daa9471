"""Paste and address normalizer.

Ensures text and address fields conform to the output contract:
- Line endings, typographic ellipses and non-breaking spaces normalized
- Elided zero address ``0x0000...0000`` expanded to the full zero address
- EIP-3770 ``shortname:`` prefixes dropped from address fields
- Bare 40-digit hex addresses prefixed with ``0x``
"""

from __future__ import annotations

import re

from opentelemetry import trace

tracer = trace.get_tracer("paste-parser")

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

ADDRESS_FIELDS = ("safe_address", "to", "gas_token", "refund_receiver")

ELIDED_ZERO_ADDRESS_RE = re.compile(r"^0x0+\.{3,}0+$")
_CHAIN_PREFIX_RE = re.compile(r"^[a-zA-Z0-9-]+:(?=0x)")
_BARE_ADDRESS_RE = re.compile(r"^[a-fA-F0-9]{40}$")


def normalize_paste_text(text: str) -> str:
    """Fold browser copy artefacts into the plain form the labels expect."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\u2026", "...")
    return text.replace("\u00a0", " ").replace("\u202f", " ")


def canonicalize_zero_address(value: str) -> str:
    if ELIDED_ZERO_ADDRESS_RE.match(value):
        return ZERO_ADDRESS
    return value


def strip_chain_prefix(value: str) -> str:
    """``eth:0xabc`` -> ``0xabc``."""
    return _CHAIN_PREFIX_RE.sub("", value, count=1)


def format_address(address: str) -> str:
    """Add the ``0x`` prefix to a bare 40-digit hex address."""
    if _BARE_ADDRESS_RE.match(address):
        return f"0x{address}"
    return address


def normalize_address(value: str) -> str:
    return format_address(canonicalize_zero_address(strip_chain_prefix(value)))


def normalize_fields(values: dict[str, str]) -> dict[str, str]:
    """Return a copy of *values* with every address field normalized."""
    with tracer.start_as_current_span("parser.normalize"):
        normalized = dict(values)
        for name in ADDRESS_FIELDS:
            if normalized.get(name):
                normalized[name] = normalize_address(normalized[name])
        return normalized
