"""Paste parser configuration: all values from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SHORTNAME_MAPPING = Path(__file__).resolve().parent / "data" / "chain_short_names.json"


@dataclass(frozen=True)
class ParserConfig:
    """Immutable configuration loaded once at startup."""

    api_key: str = field(default_factory=lambda: os.getenv("PARSER_API_KEY", "demo-api-key-change-me"))

    # EIP-3770 shortname table (shortname -> "eip155:<chainId>")
    shortname_mapping_path: str = field(
        default_factory=lambda: os.getenv("CHAIN_SHORTNAME_MAPPING_PATH", str(DEFAULT_SHORTNAME_MAPPING))
    )

    # Observability
    otel_endpoint: str = field(default_factory=lambda: os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", ""))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    debug_parse: bool = field(
        default_factory=lambda: os.getenv("PARSE_DEBUG", "false").strip().lower() in ("1", "true", "yes", "on")
    )


config = ParserConfig()
