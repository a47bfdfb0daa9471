"""Network resolution from EIP-3770 prefixed addresses (``eth:0x...``)."""

from __future__ import annotations

import logging
import re

from opentelemetry import trace

from paste_parser.chain_mapping import ChainShortNameTable
from paste_parser.extractor import LABEL_CHAIN
from paste_parser.models import NetworkResolution
from paste_parser.networks import NetworkDirectory

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("paste-parser")

_PREFIXED_ADDRESS_RE = re.compile(r"(?<![a-zA-Z0-9-])([a-zA-Z0-9][a-zA-Z0-9-]*):0x[a-fA-F0-9]{40}(?![a-fA-F0-9])")

# "to:0x..." and friends are field labels, not chain shortnames
_LABEL_WORDS = frozenset(
    label.rstrip(":").split()[-1].lower()
    for fl in LABEL_CHAIN
    for label in fl.labels
    if label.endswith(":")
)


def find_short_name(text: str) -> str | None:
    """Return the shortname of the first ``<shortname>:0x<40 hex>`` token."""
    for m in _PREFIXED_ADDRESS_RE.finditer(text):
        short_name = m.group(1)
        if short_name.lower() not in _LABEL_WORDS:
            return short_name
    return None


def resolve_network(
    text: str,
    table: ChainShortNameTable,
    directory: NetworkDirectory,
) -> NetworkResolution:
    """Resolve chain id, network and alternate shortnames from *text*."""
    with tracer.start_as_current_span("parser.resolve_network") as span:
        short_name = find_short_name(text)
        if short_name is None:
            return NetworkResolution()

        span.set_attribute("network.short_name", short_name)
        chain_id = table.chain_id_for(short_name)
        if chain_id is None:
            logger.info("Shortname %r is not mapped to an eip155 chain id", short_name)
            return NetworkResolution(detected_short_name=short_name)

        span.set_attribute("network.chain_id", chain_id)
        network = directory.by_chain_id(chain_id)
        if network is None:
            logger.info("Chain id %d is not a supported network", chain_id)

        return NetworkResolution(
            chain_id=chain_id,
            network=network.value if network else None,
            detected_short_name=short_name,
            all_network_short_names=table.short_names_for(chain_id),
        )
