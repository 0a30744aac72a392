"""
GEXF (Gephi graph exchange) reader.

Decodes a GEXF document into a NetworkData, taking the layout
(viz:position), colours (viz:color) and sizes (viz:size) from the file.
The document is fed to an incremental XML pull parser so node and edge
elements are released as soon as they have been read.
"""

import math
import re
import xml.etree.ElementTree as ET

from constants import DEFAULT_NODE_COLOR, DEFAULT_NODE_SIZE
from graph_model import GraphMode, GraphNode, NetworkData, NodeType

CHUNK_SIZE = 64 * 1024

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$')


class GexfError(Exception):
    """Base class for documents that cannot be turned into a graph"""


class ParseError(GexfError):
    """The document is not well-formed XML"""

    def __init__(self, message, position=None):
        self.position = position  # (line, column) reported by the XML parser
        self.diagnostic = message
        super().__init__(f"GEXF parse error: {message}")


class StructuralError(GexfError):
    """Well-formed XML without the expected graph element"""


class GexfAttributeKeys:
    """Which node attributes carry the cluster, the top-cited count and the node type.

    Each key may be an attribute id (``d1``) or the title declared for it
    in the document (``paper_count``).
    """

    def __init__(self, cluster='cluster', top_cited='d1', node_type='d3'):
        self.cluster = cluster
        self.top_cited = top_cited
        self.node_type = node_type


def rgb_to_hex(r, g, b):
    """Compose a hex colour, clamping each channel to [0, 255]"""
    channels = []
    for value in (r, g, b):
        channels.append(max(0, min(255, int(round(value)))))
    return '#' + ''.join(f"{c:02x}" for c in channels)


def normalize_hex(value):
    """Return '#rrggbb' for a 3 or 6 digit hex string, None when malformed"""
    if value is None:
        return None
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return '#' + digits


def _local_name(tag):
    """Strip the namespace (or prefix) from an element tag"""
    if '}' in tag:
        return tag.rsplit('}', 1)[1]
    return tag.rsplit(':', 1)[-1]


def _float(value):
    """Parse a finite float, None otherwise"""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _child(element, local_name):
    for child in element:
        if _local_name(child.tag) == local_name:
            return child
    return None


def _read_color(color_el):
    """Hex attribute first, then the r/g/b triple, then the neutral default"""
    if color_el is None:
        return DEFAULT_NODE_COLOR
    hex_value = normalize_hex(color_el.get('hex'))
    if hex_value:
        return hex_value
    rgb = [_float(color_el.get(key)) for key in ('r', 'g', 'b')]
    if all(channel is not None for channel in rgb):
        return rgb_to_hex(*rgb)
    return DEFAULT_NODE_COLOR


def _read_position(position_el):
    """A malformed or missing position hint places the node at the origin"""
    if position_el is None:
        return 0.0, 0.0
    x = _float(position_el.get('x'))
    y = _float(position_el.get('y'))
    if x is None or y is None:
        return 0.0, 0.0
    return x, y


def _read_size(size_el):
    if size_el is None:
        return DEFAULT_NODE_SIZE
    size = _float(size_el.get('value'))
    return DEFAULT_NODE_SIZE if size is None else size


class _GexfReader:
    """Collects nodes and edges from pull parser events"""

    def __init__(self, mode, keys):
        self.mode = mode
        self.keys = keys or GexfAttributeKeys()
        self.stack = []
        self.seen_graph = False
        self.attribute_class = None
        self.attribute_titles = {}  # title -> attribute id, for node attributes
        self.nodes = {}
        self.raw_links = []

    def _inside(self, *names):
        return all(name in self.stack for name in names)

    def start(self, element):
        name = _local_name(element.tag)
        if name == 'graph':
            self.seen_graph = True
        elif name == 'attributes':
            self.attribute_class = element.get('class', 'node')
        self.stack.append(name)

    def end(self, element):
        name = self.stack.pop()
        if not self._inside('graph'):
            return
        if name == 'attribute' and self.attribute_class == 'node':
            title = element.get('title')
            attr_id = element.get('id')
            if title and attr_id:
                self.attribute_titles[title] = attr_id
        elif name == 'node' and self.stack and self.stack[-1] == 'nodes':
            self._add_node(element)
            element.clear()
        elif name == 'edge' and self.stack and self.stack[-1] == 'edges':
            self._add_edge(element)
            element.clear()

    def _attribute_value(self, attvalues, key):
        if attvalues is None or not key:
            return None
        wanted = {key, self.attribute_titles.get(key, key)}
        for attvalue in attvalues:
            if _local_name(attvalue.tag) != 'attvalue':
                continue
            # GEXF 1.1 used `id`, later versions `for`
            owner = attvalue.get('for', attvalue.get('id'))
            if owner in wanted:
                return attvalue.get('value')
        return None

    def _node_type(self, attvalues):
        if self.mode != GraphMode.CITATION:
            return NodeType.AUTHOR
        raw = self._attribute_value(attvalues, self.keys.node_type)
        return NodeType.parse(raw)

    def _add_node(self, element):
        node_id = element.get('id') or ''
        label = element.get('label') or node_id
        attvalues = _child(element, 'attvalues')
        x, y = _read_position(_child(element, 'position'))

        cluster = self._attribute_value(attvalues, self.keys.cluster)
        group = f"Cluster {cluster}" if cluster not in (None, '') else 'unknown'

        top_cited = None
        raw_count = self._attribute_value(attvalues, self.keys.top_cited)
        if raw_count is not None:
            count = _float(raw_count)
            if count is not None:
                top_cited = int(count)

        self.nodes[node_id] = GraphNode(
            node_id,
            label=label,
            full_label=label,
            group=group,
            val=_read_size(_child(element, 'size')),
            color=_read_color(_child(element, 'color')),
            node_type=self._node_type(attvalues),
            x=x,
            y=y,
            top_cited_paper_count=top_cited,
        )

    def _add_edge(self, element):
        weight = _float(element.get('weight'))
        self.raw_links.append((element.get('source'), element.get('target'),
                               1.0 if weight is None else weight))

    def network(self):
        if not self.seen_graph:
            raise StructuralError("GEXF: missing graph")
        return NetworkData.build(list(self.nodes.values()), self.raw_links)


def _drain(parser, reader):
    for event, element in parser.read_events():
        if event == 'start':
            reader.start(element)
        else:
            reader.end(element)


def parse_gexf_chunks(chunks, mode=GraphMode.SOCIAL, keys=None):
    """Parse a GEXF document delivered as an iterable of str/bytes chunks.

    Raises:
        ParseError: the document is not well-formed XML
        StructuralError: there is no graph element
    """
    reader = _GexfReader(mode, keys)
    parser = ET.XMLPullParser(events=('start', 'end'))
    try:
        for chunk in chunks:
            parser.feed(chunk)
            _drain(parser, reader)
        parser.close()
        _drain(parser, reader)
    except ET.ParseError as e:
        raise ParseError(str(e), getattr(e, 'position', None)) from e
    return reader.network()


def parse_gexf(xml_text, mode=GraphMode.SOCIAL, keys=None):
    """Parse GEXF text (str or bytes) into a NetworkData.

    Args:
        xml_text: raw document content
        mode (GraphMode): SOCIAL treats every node as an author, CITATION
            reads the node type attribute
        keys (GexfAttributeKeys): attribute ids/titles to read
    """
    chunks = (xml_text[i:i + CHUNK_SIZE] for i in range(0, len(xml_text), CHUNK_SIZE))
    return parse_gexf_chunks(chunks, mode, keys)


def parse_gexf_file(path, mode=GraphMode.SOCIAL, keys=None):
    """Parse a GEXF file from disk without reading it into memory at once"""
    def chunks():
        with open(path, 'rb') as f:
            while True:
                data = f.read(CHUNK_SIZE)
                if not data:
                    break
                yield data
    return parse_gexf_chunks(chunks(), mode, keys)
