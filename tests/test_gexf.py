# test_gexf.py
# Tests for the GEXF reader: defaults, colour decoding, edge resolution, errors.

import pytest

from gexf import (GexfAttributeKeys, GexfError, ParseError, StructuralError, normalize_hex, parse_gexf,
                  parse_gexf_chunks, parse_gexf_file, rgb_to_hex)
from graph_model import GraphMode, NodeType


def test_three_nodes_and_dangling_edge_is_dropped(three_node_gexf):
    network = parse_gexf(three_node_gexf)
    assert [n.id for n in network.nodes] == ['A', 'B', 'C']
    assert len(network.links) == 1
    link = network.links[0]
    assert (link.source.id, link.target.id, link.value) == ('A', 'B', 2.0)
    assert network.dropped_links == 1
    assert network.is_consistent()


def test_hex_and_rgb_resolve_to_the_same_colour(three_node_gexf):
    network = parse_gexf(three_node_gexf)
    assert network.node('A').color == '#ff0000'
    assert network.node('B').color == '#ff0000'


def test_missing_fields_fall_back_to_defaults(three_node_gexf):
    node = parse_gexf(three_node_gexf).node('C')
    assert node.label == 'C'
    assert (node.x, node.y) == (0.0, 0.0)
    assert node.color == '#94a3b8'
    assert node.val == 5.0
    assert node.group == 'unknown'
    assert node.top_cited_paper_count is None


def test_attributes_and_visual_hints(three_node_gexf):
    node = parse_gexf(three_node_gexf).node('A')
    assert node.label == 'Alice'
    assert (node.x, node.y) == (10.0, 20.0)
    assert node.val == 8.0
    assert node.group == 'Cluster 3'
    assert node.top_cited_paper_count == 7


def test_social_mode_treats_every_node_as_author(three_node_gexf):
    network = parse_gexf(three_node_gexf, GraphMode.SOCIAL)
    assert all(n.node_type == NodeType.AUTHOR for n in network.nodes)


def test_citation_mode_reads_node_type(three_node_gexf):
    network = parse_gexf(three_node_gexf, GraphMode.CITATION)
    assert network.node('A').node_type == NodeType.PAPER
    assert network.node('B').node_type == NodeType.AUTHOR
    assert network.node('C').node_type == NodeType.AUTHOR


def test_attribute_key_may_be_a_title(three_node_gexf):
    keys = GexfAttributeKeys(top_cited='paper_count', node_type='node_type')
    network = parse_gexf(three_node_gexf, GraphMode.CITATION, keys)
    assert network.node('A').top_cited_paper_count == 7
    assert network.node('A').node_type == NodeType.PAPER


def test_malformed_position_places_node_at_origin():
    xml = """<gexf xmlns:viz="http://gexf.net/1.3/viz"><graph><nodes>
      <node id="n"><viz:position x="abc" y="3"/></node>
    </nodes></graph></gexf>"""
    node = parse_gexf(xml).node('n')
    assert (node.x, node.y) == (0.0, 0.0)


def test_malformed_hex_falls_back_to_rgb():
    xml = """<gexf xmlns:viz="http://gexf.net/1.2draft/viz"><graph><nodes>
      <node id="n"><viz:color hex="zzz" r="0" g="128" b="300"/></node>
    </nodes></graph></gexf>"""
    assert parse_gexf(xml).node('n').color == '#0080ff'


def test_missing_weight_defaults_to_one():
    xml = """<gexf><graph><nodes><node id="a"/><node id="b"/></nodes>
      <edges><edge source="a" target="b"/></edges></graph></gexf>"""
    assert parse_gexf(xml).links[0].value == 1.0


def test_not_well_formed_raises_parse_error():
    with pytest.raises(ParseError) as info:
        parse_gexf("<gexf><graph><nodes></graph></gexf>")
    assert isinstance(info.value, GexfError)
    assert info.value.diagnostic
    assert info.value.position is not None


def test_missing_graph_raises_structural_error():
    with pytest.raises(StructuralError):
        parse_gexf("<gexf><meta/></gexf>")


def test_chunk_boundaries_do_not_matter(three_node_gexf):
    data = three_node_gexf.encode('utf-8')
    chunks = [data[i:i + 7] for i in range(0, len(data), 7)]
    network = parse_gexf_chunks(chunks)
    assert [n.id for n in network.nodes] == ['A', 'B', 'C']
    assert len(network.links) == 1


def test_parse_file(tmp_path, three_node_gexf):
    path = tmp_path / 'graph.gexf'
    path.write_text(three_node_gexf, encoding='utf-8')
    network = parse_gexf_file(str(path))
    assert len(network.nodes) == 3


def test_rgb_channels_are_clamped():
    assert rgb_to_hex(255, 0, 0) == '#ff0000'
    assert rgb_to_hex(-10, 300, 127.6) == '#00ff80'


def test_normalize_hex():
    assert normalize_hex('#FF0000') == '#ff0000'
    assert normalize_hex('f00') == '#ff0000'
    assert normalize_hex('#12345') is None
    assert normalize_hex(None) is None
