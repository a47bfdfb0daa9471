"""EIP-3770 chain shortname table.

Maps a chain shortname (``eth``, ``gno``, ``arb1``...) to its
``eip155:<chainId>`` identifier, with a reverse index for listing every
shortname that shares a chain id. The mapping is read from a JSON file in
the format of https://chainid.network/shortNameMapping.json.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from paste_parser.config import config

logger = logging.getLogger(__name__)

EIP155_PREFIX = "eip155:"


class ChainMappingError(Exception):
    """The shortname table could not be loaded."""


def chain_id_from_eip3770(identifier: str) -> int | None:
    """Return the chain id of an ``eip155:<chainId>`` string, or ``None``."""
    if not identifier.startswith(EIP155_PREFIX):
        return None
    suffix = identifier.split(":")[1].strip()
    if not (suffix.isascii() and suffix.isdigit()):
        return None
    return int(suffix)


class ChainShortNameTable:
    """Read-only shortname -> ``eip155:<chainId>`` mapping."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = MappingProxyType(dict(mapping))
        reverse: dict[str, list[str]] = {}
        for short_name, identifier in self._mapping.items():
            reverse.setdefault(identifier, []).append(short_name)
        self._by_identifier = MappingProxyType({k: tuple(v) for k, v in reverse.items()})

    @classmethod
    def from_json(cls, path: str | Path) -> ChainShortNameTable:
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ChainMappingError(f"Cannot load chain shortname mapping from {path}: {e}") from e

        if not isinstance(raw, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
        ):
            raise ChainMappingError(f"Chain shortname mapping at {path} must be an object of strings")

        logger.info("Loaded %d chain shortnames from %s", len(raw), path)
        return cls(raw)

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __contains__(self, short_name: object) -> bool:
        return short_name in self._mapping

    def items(self):
        return self._mapping.items()

    def lookup(self, short_name: str) -> str | None:
        """Case-insensitive lookup with an exact-case fallback."""
        return self._mapping.get(short_name.lower()) or self._mapping.get(short_name)

    def chain_id_for(self, short_name: str) -> int | None:
        identifier = self.lookup(short_name)
        return chain_id_from_eip3770(identifier) if identifier else None

    def short_names_for(self, chain_id: int) -> list[str]:
        return list(self._by_identifier.get(f"{EIP155_PREFIX}{chain_id}", ()))


@lru_cache(maxsize=None)
def load_chain_table(path: str | None = None) -> ChainShortNameTable:
    """Load (once per path) the configured shortname table."""
    return ChainShortNameTable.from_json(path or config.shortname_mapping_path)
