"""Parse orchestrator: extraction, truncation checks and network resolution."""

from __future__ import annotations

import logging

from opentelemetry import trace

from paste_parser.chain_mapping import ChainShortNameTable, load_chain_table
from paste_parser.config import config
from paste_parser.extractor import extract_fields
from paste_parser.models import ParsedTransactionFields
from paste_parser.networks import DEFAULT_DIRECTORY, NetworkDirectory
from paste_parser.normalizer import normalize_fields, normalize_paste_text
from paste_parser.resolver import resolve_network
from paste_parser.truncation import ELLIPSIS, detect_truncation

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("paste-parser")


def parse_safe_transaction_text(
    text: str,
    table: ChainShortNameTable | None = None,
    directory: NetworkDirectory | None = None,
) -> ParsedTransactionFields:
    """Parse text copied from the Safe transaction details view.

    Fields that cannot be found are left as ``None``. Truncated fields are
    reported in ``truncated_fields``; callers must not apply transaction
    values from a parse that has any.
    """
    table = table if table is not None else load_chain_table()
    directory = directory if directory is not None else DEFAULT_DIRECTORY

    with tracer.start_as_current_span("parser.parse") as span:
        text = normalize_paste_text(text)
        span.set_attribute("paste.length", len(text))

        extraction = extract_fields(text)
        values = normalize_fields(extraction.values)

        truncated = detect_truncation(text, extraction.raw_data, values.get("data"))
        resolution = resolve_network(text, table, directory)

        parsed = ParsedTransactionFields(
            **values,
            **resolution.model_dump(),
            truncated_fields=truncated,
        )

        if config.debug_parse:
            logger.debug(
                "Parse diagnostics: fields=%s truncated=%s ellipsis=%s show_more=%s data_len=%s",
                sorted(values),
                sorted(truncated),
                ELLIPSIS in text,
                "show more" in text.lower(),
                len(parsed.data) if parsed.data else None,
            )

        span.set_attribute("parse.field_count", len(values))
        span.set_attribute("parse.truncated", parsed.is_truncated)
        return parsed
