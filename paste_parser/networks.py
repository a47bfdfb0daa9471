"""Directory of networks supported by the hash calculator."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from paste_parser.models import Network

NETWORKS: tuple[Network, ...] = (
    Network(value="arbitrum", label="Arbitrum", chain_id=42161, eip3770_prefix="arb1", logo="networks/arbitrum.ico"),
    Network(value="aurora", label="Aurora", chain_id=1313161554, eip3770_prefix="aurora", logo="networks/aurora.ico"),
    Network(value="avalanche", label="Avalanche", chain_id=43114, eip3770_prefix="avax", logo="networks/avalanche.ico"),
    Network(value="base", label="Base", chain_id=8453, eip3770_prefix="base", logo="networks/base.ico"),
    Network(value="base-sepolia", label="Base Sepolia", chain_id=84532, eip3770_prefix="basesep", logo="networks/base.ico"),
    Network(value="blast", label="Blast", chain_id=81457, eip3770_prefix="blast", logo="networks/blast.ico"),
    Network(value="bsc", label="BSC", chain_id=56, eip3770_prefix="bnb", logo="networks/bsc.ico"),
    Network(value="celo", label="Celo", chain_id=42220, eip3770_prefix="celo", logo="networks/celo.ico"),
    Network(value="ethereum", label="Ethereum", chain_id=1, eip3770_prefix="eth", logo="networks/ethereum.ico"),
    Network(value="gnosis", label="Gnosis Chain", chain_id=100, eip3770_prefix="gno", logo="networks/gnosis.ico"),
    Network(value="gnosis-chiado", label="Gnosis Chiado", chain_id=10200, eip3770_prefix="chiado", logo="networks/gnosis.ico"),
    Network(value="linea", label="Linea", chain_id=59144, eip3770_prefix="linea", logo="networks/linea.ico"),
    Network(value="mantle", label="Mantle", chain_id=5000, eip3770_prefix="mnt", logo="networks/mantle.ico"),
    Network(value="optimism", label="Optimism", chain_id=10, eip3770_prefix="oeth", logo="networks/optimism.ico"),
    Network(value="polygon", label="Polygon", chain_id=137, eip3770_prefix="matic", logo="networks/polygon.ico"),
    Network(value="polygon-zkevm", label="Polygon zkEVM", chain_id=1101, eip3770_prefix="zkevm", logo="networks/polygon.ico"),
    Network(value="scroll", label="Scroll", chain_id=534352, eip3770_prefix="scr", logo="networks/scroll.ico"),
    Network(value="sepolia", label="Sepolia", chain_id=11155111, eip3770_prefix="sep", logo="networks/ethereum.ico"),
    Network(value="worldchain", label="Worldchain", chain_id=480, eip3770_prefix="wc", logo="networks/worldchain.ico"),
    Network(value="xlayer", label="xLayer", chain_id=196, eip3770_prefix="xlayer", logo="networks/xlayer.ico"),
    Network(value="zksync", label="zkSync", chain_id=324, eip3770_prefix="zksync", logo="networks/zksync.ico"),
)


class NetworkDirectory:
    """Read-only lookup over a fixed list of networks."""

    def __init__(self, networks: Iterable[Network] = NETWORKS) -> None:
        self._networks = tuple(networks)
        self._by_chain_id = {n.chain_id: n for n in self._networks}
        self._by_value = {n.value: n for n in self._networks}

    def __iter__(self) -> Iterator[Network]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)

    def by_chain_id(self, chain_id: int) -> Network | None:
        return self._by_chain_id.get(chain_id)

    def by_value(self, value: str) -> Network | None:
        return self._by_value.get(value)


DEFAULT_DIRECTORY = NetworkDirectory()
