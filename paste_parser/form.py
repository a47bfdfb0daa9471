"""Applying a parsed paste to the transaction form.

Policy:
- Blank input is rejected before parsing
- A parse with no recognizable field is an error
- Any truncated field withholds every transaction value (warning only);
  the outcome reports network identity and the truncated field names only
- Otherwise the form is reset to a baseline and the parsed fields written;
  missing essential fields are listed for manual completion
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from opentelemetry import trace

from paste_parser.chain_mapping import ChainShortNameTable
from paste_parser.models import (
    OutcomeKind,
    ParsedTransactionFields,
    PasteOutcome,
    TransactionForm,
)
from paste_parser.networks import NetworkDirectory
from paste_parser.normalizer import format_address
from paste_parser.parser import parse_safe_transaction_text

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("paste-parser")

# (parsed field, label shown to the user)
ESSENTIAL_FIELDS: tuple[tuple[str, str], ...] = (
    ("safe_address", "Safe Address"),
    ("to", "Recipient address"),
    ("value", "Transaction value"),
    ("data", "Transaction data"),
    ("network", "Network"),
    ("operation", "Operation type"),
    ("nonce", "Transaction nonce"),
)

# Parsed field -> form field, in the order they are written
FORM_FIELD_MAP: tuple[tuple[str, str], ...] = (
    ("safe_address", "address"),
    ("to", "to"),
    ("value", "value"),
    ("data", "data"),
    ("operation", "operation"),
    ("safe_tx_gas", "safe_tx_gas"),
    ("base_gas", "base_gas"),
    ("gas_price", "gas_price"),
    ("gas_token", "gas_token"),
    ("refund_receiver", "refund_receiver"),
    ("nonce", "nonce"),
)

_ADDRESS_FORM_FIELDS = frozenset({"address", "to"})

# Diagnostics that do not count as "transaction details found"
_DIAGNOSTIC_FIELDS = frozenset({"detected_short_name", "all_network_short_names"})

EXPAND_INSTRUCTIONS = [
    'In Safe UI, look for fields marked with "..." or "show more"',
    'Click on "show more" to expand the complete content',
    "Copy the transaction details again with fully expanded fields",
    "Paste the complete content here",
]


class FormWriter(Protocol):
    """The destination the parsed fields are written to."""

    def get_value(self, name: str) -> Any: ...

    def set_value(self, name: str, value: Any) -> None: ...

    def reset(self, values: dict[str, Any]) -> None: ...


class InMemoryForm:
    """FormWriter backed by a TransactionForm model."""

    def __init__(self, state: TransactionForm | None = None) -> None:
        self.state = state or TransactionForm()

    def get_value(self, name: str) -> Any:
        return getattr(self.state, name)

    def set_value(self, name: str, value: Any) -> None:
        self.state = self.state.model_copy(update={name: value})

    def reset(self, values: dict[str, Any]) -> None:
        self.state = TransactionForm(**values)


def has_transaction_details(parsed: ParsedTransactionFields) -> bool:
    return any(name not in _DIAGNOSTIC_FIELDS for name in parsed.present_fields())


def check_missing_fields(parsed: ParsedTransactionFields) -> list[str]:
    """Labels of essential fields that are absent ("0" counts as present)."""
    missing = []
    for parsed_name, label in ESSENTIAL_FIELDS:
        value = getattr(parsed, parsed_name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(label)
    return missing


def baseline_values(form: FormWriter) -> dict[str, Any]:
    """Cleared form values, keeping the selected method and Safe version."""
    return TransactionForm(
        method=form.get_value("method"),
        version=form.get_value("version") or "",
    ).model_dump()


def update_form_with_parsed_data(form: FormWriter, parsed: ParsedTransactionFields) -> None:
    """Write every present field of *parsed* into *form*."""
    for parsed_name, form_name in FORM_FIELD_MAP:
        value = getattr(parsed, parsed_name)
        if not value:
            continue
        if form_name in _ADDRESS_FORM_FIELDS:
            value = format_address(value)
        form.set_value(form_name, value)

    if parsed.network:
        form.set_value("network", parsed.network)
    if parsed.chain_id:
        form.set_value("chain_id", parsed.chain_id)


def _network_only(parsed: ParsedTransactionFields) -> ParsedTransactionFields:
    """Strip every transaction value, keeping what identifies the network."""
    return ParsedTransactionFields(
        network=parsed.network,
        chain_id=parsed.chain_id,
        detected_short_name=parsed.detected_short_name,
        all_network_short_names=parsed.all_network_short_names,
        truncated_fields=parsed.truncated_fields,
    )


def _truncated_outcome(parsed: ParsedTransactionFields) -> PasteOutcome:
    fields = sorted(parsed.truncated_fields)
    return PasteOutcome(
        kind=OutcomeKind.TRUNCATED_CONTENT,
        severity="warning",
        message=(
            f"Some fields appear to be truncated: {', '.join(fields)}. "
            'Please expand these fields in Safe UI by clicking "show more" before copying.'
        ),
        instructions=list(EXPAND_INSTRUCTIONS),
        fields=_network_only(parsed),
        truncated_fields=fields,
        network_unresolved=parsed.chain_id is None,
    )


def process_paste(
    text: str,
    form: FormWriter,
    table: ChainShortNameTable | None = None,
    directory: NetworkDirectory | None = None,
) -> PasteOutcome:
    """Parse *text* and, when it is safe to do so, apply it to *form*."""
    if not text.strip():
        return PasteOutcome(
            kind=OutcomeKind.EMPTY_INPUT,
            severity="error",
            message="Please paste transaction details first.",
        )

    parsed = parse_safe_transaction_text(text, table, directory)

    if not has_transaction_details(parsed):
        return PasteOutcome(
            kind=OutcomeKind.NO_RECOGNIZED_FIELDS,
            severity="error",
            message=(
                "Could not find any transaction details in the pasted text. "
                "Please make sure you're pasting the right content."
            ),
            fields=parsed,
            truncated_fields=sorted(parsed.truncated_fields),
            network_unresolved=parsed.chain_id is None,
        )

    if parsed.is_truncated:
        logger.warning("Withholding parsed values: truncated fields %s", sorted(parsed.truncated_fields))
        return _truncated_outcome(parsed)

    missing = check_missing_fields(parsed)

    with tracer.start_as_current_span("parser.apply_form") as span:
        form.reset(baseline_values(form))
        update_form_with_parsed_data(form, parsed)
        span.set_attribute("form.missing_count", len(missing))

    if missing:
        return PasteOutcome(
            kind=OutcomeKind.PARTIAL_FIELDS,
            severity="success",
            message="Form partially filled. Some fields couldn't be detected and may need manual input.",
            instructions=["Please complete these fields manually: " + ", ".join(missing)],
            fields=parsed,
            missing_fields=missing,
            network_unresolved=parsed.chain_id is None,
            applied=True,
        )

    return PasteOutcome(
        kind=OutcomeKind.SUCCESS,
        severity="success",
        message="The form has been filled with the parsed transaction details.",
        fields=parsed,
        network_unresolved=parsed.chain_id is None,
        applied=True,
    )
