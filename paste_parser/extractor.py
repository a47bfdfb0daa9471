"""Label-delimited field extraction.

Each field is located by its label and ends at the next field's label in
the Safe UI copy output, so a field's value never depends on whether other
fields were found.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from opentelemetry import trace

from paste_parser.normalizer import canonicalize_zero_address

tracer = trace.get_tracer("paste-parser")

_TOKEN_VALUE_RE = re.compile(r"value\s+uint256\s+(\d+)", re.IGNORECASE)
_LEADING_DIGITS_RE = re.compile(r"\d+")

TRANSACTION_DATA_ANCHOR = "Transaction data"


@dataclass(frozen=True)
class FieldLabel:
    """Where one field's value starts (``labels``) and ends (``next_label``)."""

    name: str
    labels: tuple[str, ...]
    next_label: str | None = None
    ignore_case: bool = False
    anchor: str | None = None


LABEL_CHAIN: tuple[FieldLabel, ...] = (
    FieldLabel("safe_address", ("from:", "safe:", "safe address:", "transaction from:"), "to:", ignore_case=True),
    FieldLabel("to", ("to:",), "value:", anchor=TRANSACTION_DATA_ANCHOR),
    FieldLabel("value", ("value:",), "data:"),
    FieldLabel("data", ("data:",), "operation:"),
    FieldLabel("operation", ("operation:",), "safeTxGas:"),
    FieldLabel("safe_tx_gas", ("safeTxGas:",), "baseGas:"),
    FieldLabel("base_gas", ("baseGas:",), "gasPrice:"),
    FieldLabel("gas_price", ("gasPrice:",), "gasToken:"),
    FieldLabel("gas_token", ("gasToken:",), "refundReceiver:"),
    FieldLabel("refund_receiver", ("refundReceiver:",), "nonce:"),
    FieldLabel("nonce", ("nonce:",), "Transaction hashes"),
    FieldLabel("safe_tx_hash", ("safeTxHash:",), "Domain hash:"),
    FieldLabel("domain_hash", ("Domain hash:",), "Message hash:"),
    FieldLabel("message_hash", ("Message hash:",), "Balance change"),
)

LABELS_BY_NAME = {fl.name: fl for fl in LABEL_CHAIN}


@dataclass(frozen=True)
class ExtractionResult:
    values: dict[str, str] = field(default_factory=dict)
    raw_data: str | None = None


def _find(text: str, needle: str, start: int = 0, ignore_case: bool = False) -> int:
    if not ignore_case:
        return text.find(needle, start)
    m = re.compile(re.escape(needle), re.IGNORECASE).search(text, start)
    return m.start() if m else -1


def extract_raw_value(
    text: str,
    label: str,
    next_label: str | None = None,
    *,
    ignore_case: bool = False,
) -> str | None:
    """Return the trimmed first line after *label*, before any cleaning."""
    label_index = _find(text, label, ignore_case=ignore_case)
    if label_index == -1:
        return None

    start = label_index + len(label)
    end = _find(text, next_label, start, ignore_case) if next_label else -1
    if end == -1:
        end = len(text)

    return text[start:end].strip().split("\n")[0].strip()


def _is_value_char(c: str) -> bool:
    return c.isascii() and c.isalnum()


def clean_value(raw: str) -> str | None:
    """Trim everything but ASCII letters and digits from both ends."""
    start, end = 0, len(raw)
    while start < end and not _is_value_char(raw[start]):
        start += 1
    while end > start and not _is_value_char(raw[end - 1]):
        end -= 1
    value = canonicalize_zero_address(raw[start:end])
    return value or None


def extract_field(
    text: str,
    label: str,
    next_label: str | None = None,
    *,
    ignore_case: bool = False,
) -> str | None:
    """Extract the value between *label* and *next_label* (or end of text)."""
    raw = extract_raw_value(text, label, next_label, ignore_case=ignore_case)
    if raw is None:
        return None
    return clean_value(raw)


def _extract_labelled(text: str, fl: FieldLabel) -> tuple[str | None, str | None]:
    """Return ``(raw, cleaned)`` for the first label of *fl* that yields a value.

    When no label yields a value, the first raw window seen is still
    returned so callers can inspect what was there.
    """
    first_raw: str | None = None
    for label in fl.labels:
        candidates = [text]
        if fl.anchor:
            anchor_index = text.find(fl.anchor)
            if anchor_index != -1:
                label_index = _find(text, label, anchor_index, fl.ignore_case)
                if label_index != -1:
                    candidates.insert(0, text[label_index:])

        for section in candidates:
            raw = extract_raw_value(section, label, fl.next_label, ignore_case=fl.ignore_case)
            if raw is None:
                continue
            if first_raw is None:
                first_raw = raw
            cleaned = clean_value(raw)
            if cleaned:
                return raw, cleaned
    return first_raw, None


def leading_digits(value: str) -> str | None:
    m = _LEADING_DIGITS_RE.match(value)
    return m.group(0) if m else None


def extract_fields(text: str, chain: tuple[FieldLabel, ...] = LABEL_CHAIN) -> ExtractionResult:
    """Run every label in *chain* over *text*."""
    with tracer.start_as_current_span("parser.extract_fields") as span:
        values: dict[str, str] = {}
        raw_data: str | None = None

        for fl in chain:
            raw, cleaned = _extract_labelled(text, fl)
            if fl.name == "data":
                raw_data = raw
            if cleaned is None:
                continue
            if fl.name == "operation":
                cleaned = leading_digits(cleaned)
                if cleaned is None:
                    continue
            values[fl.name] = cleaned

        # Token transfers show the decoded amount instead of a value: label
        if "value" not in values:
            m = _TOKEN_VALUE_RE.search(text)
            if m:
                values["value"] = m.group(1)

        span.set_attribute("extract.field_count", len(values))
        return ExtractionResult(values=values, raw_data=raw_data)
