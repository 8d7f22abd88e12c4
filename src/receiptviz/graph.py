"""
Graphviz DOT Projection

Turns a FullTrace into a dot file:

    node0                       Start Hash
    node1 .. nodeN              outer trace (ending in OP_RETURN, TXID)
    nodeN+1 .. nodeM            inner (anchor branch) trace

Hash states are chained through their value ports (f1); the anchor nodes
hang off the inner double-hash node through their label ports (f0).
"""

from datetime import datetime
from typing import List, Optional

from .replay import LABEL_OP_RETURN, LABEL_TXID
from .types import FullTrace, TraceEntry


HIGHLIGHT_STYLE = ',style="filled", fillcolor="#000000", fontcolor="#FFFFFF"'


def _escape(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')


def _node(index: int, label: str, digest: str, highlight: bool, href: Optional[str] = None) -> str:
    attrs = HIGHLIGHT_STYLE if highlight else ''
    if href:
        attrs += f', href="{_escape(href)}"'
    return f'node{index} [ label="<f0>{_escape(label)}:|<f1>{_escape(digest)}" {attrs} ];'


def _edge(src: int, dst: int, port: str = 'f1') -> str:
    return f'"node{src}":{port} -> "node{dst}":{port};'


def to_dot(full: FullTrace, generated_at: Optional[datetime] = None) -> str:
    """Dot file text for a replayed receipt."""
    generated_at = generated_at or datetime.now()

    hash_states: List[TraceEntry] = [e for e in full.outer if e.label not in (LABEL_OP_RETURN, LABEL_TXID)]
    anchors: List[TraceEntry] = [e for e in full.outer if e.label in (LABEL_OP_RETURN, LABEL_TXID)]

    nodes = [_node(0, 'Start Hash', full.start.hex, True)]
    edges = []

    index = 0
    for entry in list(hash_states) + list(full.inner):
        index += 1
        nodes.append(_node(index, entry.label, entry.digest, entry.highlight, entry.href))
        edges.append(_edge(index - 1, index))

    # Anchor nodes follow the hash states, linked from the double-hash step
    source = len(hash_states) + full.anchor_index + 1
    for entry in anchors:
        index += 1
        nodes.append(_node(index, entry.label, entry.digest, entry.highlight, entry.href))
        edges.append(_edge(source, index, 'f0'))
        source = index

    lines = [
        'digraph G {',
        'labelloc="t";',
        f'label="A Visual Representation of a v{full.version} Chainpoint Proof"',
        f'// Generated on: {generated_at:%Y-%m-%d %H:%M:%S}',
        'node [shape="record"]',
    ]
    lines.extend(nodes)
    lines.extend(edges)
    lines.append('}')
    return '\n'.join(lines) + '\n'
