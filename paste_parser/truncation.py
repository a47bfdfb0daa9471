"""Truncation detection for copied Safe transaction text.

The Safe UI hides long hex values behind a "show more" control; copying
the collapsed view yields a value that looks valid but is incomplete.
Each signature below is an independent predicate over the pasted text.
A match from any of them flags the watched field, so a paste is rejected
whenever there is reasonable doubt.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from opentelemetry import trace

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("paste-parser")

ELLIPSIS = "..."
DATA_WINDOW_FALLBACK = 200
MIN_SELECTOR_LENGTH = 10  # "0x" + 4-byte function selector

_SHOW_MORE_RE = re.compile(r"show\s+more", re.IGNORECASE)
_ELLIPSIS_RUN_RE = re.compile(r"\.{3,}")
_ZERO_ADDRESS_ELLIPSIS_RE = re.compile(r"0x0+\.{3,}0+")
_LONG_HEX_ELLIPSIS_RE = re.compile(r"0x[a-fA-F0-9]{30,}\.{3}")
_HEX_DOUBLE_DOT_RE = re.compile(r"0x[a-fA-F0-9]{10,}\.{2,}")


@dataclass(frozen=True)
class WatchedField:
    """A long hex field the source UI may collapse."""

    name: str
    label: str
    next_label: str | None = None


@dataclass(frozen=True)
class TruncationFinding:
    field: str
    code: str


DATA_FIELD = WatchedField("data", "data:", "operation:")
WATCHED_FIELDS: tuple[WatchedField, ...] = (DATA_FIELD,)


def _field_window(text: str, watched: WatchedField, fallback: int | None = None) -> str | None:
    """Text from the field label up to the next label (or *fallback* chars)."""
    start = text.find(watched.label)
    if start == -1:
        return None
    end = text.find(watched.next_label, start) if watched.next_label else -1
    if end == -1:
        end = start + fallback if fallback is not None else len(text)
    return text[start:end]


# ---- Signatures ----


def ellipsis_after_label(text: str, watched: WatchedField) -> bool:
    """``data: 0x1234abc...``"""
    return re.search(re.escape(watched.label) + r".*0x[a-fA-F0-9]+\.{3}", text) is not None


def long_hex_ellipsis(text: str, watched: WatchedField) -> bool:
    """``0x1234567890abcdef1234567890abcdef...`` anywhere."""
    return _LONG_HEX_ELLIPSIS_RE.search(text) is not None


def show_more_in_field(text: str, watched: WatchedField) -> bool:
    window = _field_window(text, watched)
    return window is not None and _SHOW_MORE_RE.search(window) is not None


def unterminated_hex(text: str, watched: WatchedField) -> bool:
    """A long hex run cut at a line break with an implausible length."""
    label = re.escape(watched.label)
    if not re.search(label + r".*0x[a-fA-F0-9]{20,}\s*\n", text):
        return False

    m = re.search(label + r".*?(0x[a-fA-F0-9]+).*", text)
    if not m:
        return False
    hex_run = m.group(1)
    # Byte-aligned hex has an even number of digits
    if len(hex_run) >= 18 and len(hex_run) % 2 == 1:
        return True
    return len(hex_run) < MIN_SELECTOR_LENGTH


def clipped_before_next_label(text: str, watched: WatchedField) -> bool:
    """``data: 0x1234abcoperation: 0``"""
    if not watched.next_label:
        return False
    pattern = re.escape(watched.label) + r"[^\n]*?0x[a-fA-F0-9]+" + re.escape(watched.next_label)
    return re.search(pattern, text, re.IGNORECASE) is not None


def stray_ellipsis(text: str, watched: WatchedField) -> bool:
    """Ellipses that are not part of an elided zero address."""
    ellipses = len(_ELLIPSIS_RUN_RE.findall(text))
    zero_address_ellipses = len(_ZERO_ADDRESS_ELLIPSIS_RE.findall(text))
    if ellipses <= zero_address_ellipses:
        return False

    window = _field_window(text, watched, fallback=DATA_WINDOW_FALLBACK)
    if window is None:
        return False
    return _SHOW_MORE_RE.search(text) is not None or ELLIPSIS in window


def hex_double_dot(text: str, watched: WatchedField) -> bool:
    return _HEX_DOUBLE_DOT_RE.search(text) is not None


Signature = Callable[[str, WatchedField], bool]

SIGNATURES: tuple[tuple[str, Signature], ...] = (
    ("ELLIPSIS_AFTER_LABEL", ellipsis_after_label),
    ("LONG_HEX_ELLIPSIS", long_hex_ellipsis),
    ("SHOW_MORE", show_more_in_field),
    ("UNTERMINATED_HEX", unterminated_hex),
    ("CLIPPED_BEFORE_NEXT_LABEL", clipped_before_next_label),
    ("STRAY_ELLIPSIS", stray_ellipsis),
    ("HEX_DOUBLE_DOT", hex_double_dot),
)


def check_extracted_value(raw: str | None, cleaned: str | None) -> list[str]:
    """Structural checks on a value that survived the text-level signatures."""
    codes: list[str] = []
    if raw and (ELLIPSIS in raw or _SHOW_MORE_RE.search(raw)):
        codes.append("RAW_VALUE_ELIDED")
    if cleaned and ELLIPSIS in cleaned:
        codes.append("VALUE_ELIDED")
    if cleaned and cleaned.startswith("0x") and len(cleaned) < MIN_SELECTOR_LENGTH:
        codes.append("VALUE_TOO_SHORT")
    return codes


def find_truncation(
    text: str,
    raw_data: str | None = None,
    data: str | None = None,
    watched_fields: tuple[WatchedField, ...] = WATCHED_FIELDS,
) -> list[TruncationFinding]:
    """Run every signature and return one finding per match."""
    findings: list[TruncationFinding] = []
    for watched in watched_fields:
        for code, signature in SIGNATURES:
            if signature(text, watched):
                findings.append(TruncationFinding(watched.name, code))

    for code in check_extracted_value(raw_data, data):
        findings.append(TruncationFinding(DATA_FIELD.name, code))
    return findings


def detect_truncation(
    text: str,
    raw_data: str | None = None,
    data: str | None = None,
) -> set[str]:
    """Return the names of fields that look truncated."""
    with tracer.start_as_current_span("parser.detect_truncation") as span:
        findings = find_truncation(text, raw_data, data)
        flagged = {f.field for f in findings}

        if findings:
            logger.info(
                "Truncation signatures matched: %s",
                ", ".join(f"{f.field}:{f.code}" for f in findings),
            )
        span.set_attribute("truncation.finding_count", len(findings))
        span.set_attribute("truncation.fields", sorted(flagged))
        return flagged
