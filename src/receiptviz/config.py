"""
Visualisation Configuration

VizConfig holds the settings of one receipt visualisation: which chain the
anchor belongs to, which block explorer to link the TXID to, and where the
rendered image goes.
"""

from dataclasses import dataclass, replace
from pathlib import PurePath
from typing import Dict, Mapping, Optional
import os

from .tags import BITCOIN_TAG, BITCOIN_TESTNET_TAG


DEFAULT_CHAIN = 'bitcoin'
DEFAULT_FILENAME = 'chainpoint.png'

ENV_CHAIN = 'RECEIPTVIZ_CHAIN'
ENV_EXPLORER = 'RECEIPTVIZ_EXPLORER'

# Chain names mapped to the anchor descriptor type they use
CHAIN_TAGS: Dict[str, str] = {
    'bitcoin': BITCOIN_TAG,
    'btc': BITCOIN_TAG,
    'testnet': BITCOIN_TESTNET_TAG,
    'tbtc': BITCOIN_TESTNET_TAG,
}

# Explorers whose transaction pages live under /tx/; everything else uses /btc/tx/
_SHORT_TX_PATH = frozenset({'blockexplorer.com', 'smartbit.com.au'})

KNOWN_EXPLORERS = (
    'blockexplorer.com',
    'smartbit.com.au',
    'blockchain.com',
    'explorer.bitcoin.com',
)


def chain_tag_for(chain: str) -> str:
    """Anchor descriptor type for a chain name ('bitcoin' -> 'btc')."""
    chain = chain.strip().lower()
    return CHAIN_TAGS.get(chain, chain)


def explorer_url(explorer: str) -> str:
    """Base URL for TXID links, '' when no explorer is configured."""
    if not explorer:
        return ''
    uri = '/tx/' if explorer in _SHORT_TX_PATH else '/btc/tx/'
    return f'https://{explorer}{uri}'


@dataclass(frozen=True)
class VizConfig:
    """Settings for one visualisation."""

    chain: str = DEFAULT_CHAIN
    """Blockchain the receipt is anchored to, e.g. 'bitcoin'."""

    explorer: str = ''
    """Block explorer host used for TXID links, e.g. 'blockchain.com'."""

    filename: str = DEFAULT_FILENAME
    """Output image path; its extension selects the Graphviz format."""

    @property
    def chain_tag(self) -> str:
        return chain_tag_for(self.chain)

    @property
    def format(self) -> str:
        suffix = PurePath(self.filename).suffix
        return suffix[1:].lower() if suffix else 'png'

    @property
    def explorer_base(self) -> str:
        return explorer_url(self.explorer)

    def txid_link(self, txid: str) -> Optional[str]:
        base = self.explorer_base
        return f'{base}{txid}' if base else None

    def with_changes(self, **changes) -> 'VizConfig':
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'VizConfig':
        """Defaults taken from RECEIPTVIZ_CHAIN / RECEIPTVIZ_EXPLORER."""
        env = os.environ if environ is None else environ
        values = {
            'chain': env.get(ENV_CHAIN) or DEFAULT_CHAIN,
            'explorer': env.get(ENV_EXPLORER, ''),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
