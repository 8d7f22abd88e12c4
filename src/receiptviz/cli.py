"""
receiptviz: Command Line Front End

Usage:
    receiptviz txid      RECEIPT   [--chain CHAIN]
    receiptviz opreturn  RECEIPT   [--chain CHAIN]
    receiptviz anchor    RECEIPT   [--chain CHAIN]
    receiptviz dot       RECEIPT   [--chain CHAIN] [--explorer HOST]
    receiptviz render    RECEIPT   [--chain CHAIN] [--explorer HOST] [--output FILE] [--format FMT]

RECEIPT is a path to a JSON receipt, or '-' to read stdin.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .chainpoint import ChainpointViz
from .config import DEFAULT_FILENAME, KNOWN_EXPLORERS, VizConfig
from .errors import ReceiptError, RendererError
from .render import GraphvizRenderer

logger = logging.getLogger(__name__)


def read_receipt(path: str) -> bytes:
    """Raw receipt bytes; decoding errors surface as MalformedInput when parsed."""
    if path == '-':
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='receiptviz',
        description='Replay v3 Chainpoint receipts and extract their Bitcoin anchor'
    )

    parser.add_argument(
        'command',
        choices=['txid', 'opreturn', 'anchor', 'dot', 'render'],
        help='What to produce'
    )

    parser.add_argument(
        'receipt',
        help="Path to a JSON receipt, or '-' for stdin"
    )

    parser.add_argument(
        '--chain',
        default=None,
        help='Anchoring chain (default: $RECEIPTVIZ_CHAIN or bitcoin)'
    )

    parser.add_argument(
        '--explorer',
        default=None,
        help=f"Block explorer host for TXID links, e.g. {', '.join(KNOWN_EXPLORERS)}"
    )

    parser.add_argument(
        '--output', '-o',
        default=DEFAULT_FILENAME,
        help=f'Image file for the render command (default: {DEFAULT_FILENAME})'
    )

    parser.add_argument(
        '--format', '-T',
        dest='fmt',
        default=None,
        help='Graphviz output format (default: output file extension)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log every replay step'
    )

    return parser


def run(args: argparse.Namespace) -> int:
    config = VizConfig.from_env(chain=args.chain, explorer=args.explorer, filename=args.output)
    viz = ChainpointViz(read_receipt(args.receipt), config)

    if args.command == 'txid':
        print(viz.btc_txid())
    elif args.command == 'opreturn':
        print(viz.btc_op_return())
    elif args.command == 'anchor':
        print(json.dumps(viz.anchor_info().to_dict(), indent=2))
    elif args.command == 'dot':
        sys.stdout.write(viz.to_dot())
    elif args.command == 'render':
        output = GraphvizRenderer().render(viz.to_dot(), config.filename, args.fmt or config.format)
        print(output)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        return run(args)
    except (ReceiptError, RendererError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: cannot read receipt: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
