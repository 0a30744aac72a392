"""
Graph model shared by the parser, the layout engine and the renderer.

A NetworkData owns its nodes and links for one graph load. Links always
reference node objects of the same instance; anything that cannot be
resolved is dropped when the network is built.
"""

import math
from enum import Enum

from constants import DEFAULT_NODE_COLOR, DEFAULT_NODE_SIZE, group_colors


class NodeType(Enum):
    AUTHOR = 'author'
    PAPER = 'paper'

    @classmethod
    def parse(cls, value):
        """Map a raw type string to a NodeType, defaulting to author"""
        if isinstance(value, NodeType):
            return value
        if isinstance(value, str) and value.strip().lower() == 'paper':
            return cls.PAPER
        return cls.AUTHOR


class GraphMode(Enum):
    SOCIAL = 'SOCIAL'
    CITATION = 'CITATION'


class CitationScope(Enum):
    AUTHOR = 'AUTHOR'
    PAPER = 'PAPER'
    MIXED = 'MIXED'


def is_number(value):
    """True for finite int/float values (bools excluded)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


class GraphNode:
    """A node of the graph; positions are the only mutable part"""

    def __init__(self, node_id, label=None, full_label=None, group='unknown', val=DEFAULT_NODE_SIZE,
                 color=None, node_type=NodeType.AUTHOR, x=None, y=None, top_cited_paper_count=None):
        self.id = str(node_id)
        self.label = label if label else self.id
        self.full_label = full_label
        self.group = group or 'unknown'
        self.val = val
        self.color = color
        self.node_type = NodeType.parse(node_type)
        self.top_cited_paper_count = top_cited_paper_count

        # Position and velocity, written by the layout engine and by drags
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        # Pinned position while a drag holds the node
        self.fx = None
        self.fy = None

    @property
    def has_position(self):
        return is_number(self.x) and is_number(self.y)

    @property
    def display_label(self):
        return self.full_label or self.label

    def resolved_color(self, colors=None):
        """Explicit colour, then group colour, then neutral gray"""
        if self.color:
            return self.color
        if colors is None:
            colors = group_colors()
        return colors.get(self.group, DEFAULT_NODE_COLOR)

    def matches(self, term):
        """Case-insensitive substring match on the short or the full label"""
        term = (term or '').strip().lower()
        if not term:
            return False
        return term in (self.label or '').lower() or term in (self.full_label or '').lower()

    def copy(self):
        node = GraphNode(self.id, self.label, self.full_label, self.group, self.val, self.color,
                         self.node_type, self.x, self.y, self.top_cited_paper_count)
        return node

    def to_dict(self):
        data = {
            'id': self.id,
            'label': self.label,
            'group': self.group,
            'val': self.val,
            'color': self.color,
            'nodeType': self.node_type.value,
        }
        if self.full_label:
            data['fullLabel'] = self.full_label
        if self.top_cited_paper_count is not None:
            data['topCitedPaperCount'] = self.top_cited_paper_count
        if self.has_position:
            data['x'] = self.x
            data['y'] = self.y
        return data

    def __repr__(self):
        return f"GraphNode({self.id!r}, x={self.x}, y={self.y})"


class GraphLink:
    """A weighted edge between two resolved nodes"""

    def __init__(self, source, target, value=1.0):
        self.source = source
        self.target = target
        self.value = value

    @property
    def stroke_width(self):
        """Perceptually linear stroke width for the edge weight"""
        return math.sqrt(max(self.value, 0.0))

    def touches(self, node_id):
        return self.source.id == node_id or self.target.id == node_id

    def other(self, node_id):
        return self.target if self.source.id == node_id else self.source

    def __repr__(self):
        return f"GraphLink({self.source.id!r} -> {self.target.id!r}, {self.value})"


class NetworkData:
    """Ordered nodes plus links whose endpoints are always members of `nodes`"""

    def __init__(self, nodes=None, links=None, dropped_links=0):
        self.nodes = list(nodes or [])
        self.links = list(links or [])
        # Number of edges discarded because an endpoint was missing
        self.dropped_links = dropped_links
        self._index = {node.id: node for node in self.nodes}

    @classmethod
    def build(cls, nodes, raw_links):
        """Build a network from nodes and (source_id, target_id, value) triples.

        Links whose endpoints are not both present are silently excluded.
        """
        index = {}
        for node in nodes:
            index[node.id] = node
        links = []
        dropped = 0
        for source_id, target_id, value in raw_links:
            source = index.get(str(source_id)) if source_id is not None else None
            target = index.get(str(target_id)) if target_id is not None else None
            if source is None or target is None:
                dropped += 1
                continue
            links.append(GraphLink(source, target, value))
        return cls(list(index.values()), links, dropped)

    @classmethod
    def from_dict(cls, data):
        """Build a network from the JSON shape {nodes: [...], links: [...]}"""
        nodes = []
        for raw in data.get('nodes') or []:
            if 'id' not in raw:
                continue
            val = raw.get('val')
            nodes.append(GraphNode(
                raw['id'],
                label=raw.get('label'),
                full_label=raw.get('fullLabel'),
                group=raw.get('group') or 'unknown',
                val=val if is_number(val) else DEFAULT_NODE_SIZE,
                color=raw.get('color') or None,
                node_type=raw.get('nodeType'),
                x=raw.get('x'),
                y=raw.get('y'),
                top_cited_paper_count=raw.get('topCitedPaperCount'),
            ))
        raw_links = []
        for raw in data.get('links') or []:
            source = raw.get('source')
            target = raw.get('target')
            # Links may already be expanded node objects
            if isinstance(source, dict):
                source = source.get('id')
            if isinstance(target, dict):
                target = target.get('id')
            value = raw.get('value', 1)
            raw_links.append((source, target, value if is_number(value) else 1.0))
        return cls.build(nodes, raw_links)

    def to_dict(self):
        return {
            'nodes': [node.to_dict() for node in self.nodes],
            'links': [{'source': link.source.id, 'target': link.target.id, 'value': link.value}
                      for link in self.links],
        }

    def node(self, node_id):
        return self._index.get(node_id)

    def __contains__(self, node_id):
        return node_id in self._index

    def __len__(self):
        return len(self.nodes)

    @property
    def is_empty(self):
        return not self.nodes

    def subset(self, keep_ids):
        """New network restricted to `keep_ids`; links lose any filtered endpoint"""
        nodes = [node for node in self.nodes if node.id in keep_ids]
        links = [link for link in self.links
                 if link.source.id in keep_ids and link.target.id in keep_ids]
        return NetworkData(nodes, links, self.dropped_links)

    def copy(self):
        """Deep copy so view-time position writes never reach the source network"""
        nodes = [node.copy() for node in self.nodes]
        index = {node.id: node for node in nodes}
        links = [GraphLink(index[link.source.id], index[link.target.id], link.value)
                 for link in self.links]
        return NetworkData(nodes, links, self.dropped_links)

    def neighbors(self, node_id):
        """Ids of nodes sharing a link with `node_id`"""
        result = set()
        for link in self.links:
            if link.source.id == node_id:
                result.add(link.target.id)
            elif link.target.id == node_id:
                result.add(link.source.id)
        return result

    def degree_counts(self):
        counts = {node.id: 0 for node in self.nodes}
        for link in self.links:
            counts[link.source.id] += 1
            counts[link.target.id] += 1
        return counts

    def cluster_count(self):
        """Number of distinct known groups"""
        return len({node.group for node in self.nodes if node.group and node.group != 'unknown'})

    def is_consistent(self):
        """Every link endpoint is a node object of this network"""
        for link in self.links:
            if self._index.get(link.source.id) is not link.source:
                return False
            if self._index.get(link.target.id) is not link.target:
                return False
        return True
