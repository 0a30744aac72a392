# conftest.py
# Shared fixtures: GEXF documents, small networks and an offscreen QApplication.

import os
import sys
from pathlib import Path

import pytest

# Qt widgets need a platform even without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

sys.path.insert(0, str(Path(__file__).parent.parent))

from graph_model import GraphNode, NetworkData, NodeType  # noqa: E402

THREE_NODE_GEXF = """<?xml version="1.0" encoding="UTF-8"?>
<gexf xmlns="http://gexf.net/1.3" xmlns:viz="http://gexf.net/1.3/viz" version="1.3">
  <graph defaultedgetype="directed">
    <attributes class="node">
      <attribute id="cluster" title="cluster" type="integer"/>
      <attribute id="d1" title="paper_count" type="integer"/>
      <attribute id="d3" title="node_type" type="string"/>
    </attributes>
    <nodes>
      <node id="A" label="Alice">
        <attvalues>
          <attvalue for="cluster" value="3"/>
          <attvalue for="d1" value="7"/>
          <attvalue for="d3" value="paper"/>
        </attvalues>
        <viz:color hex="#ff0000"/>
        <viz:position x="10.0" y="20.0"/>
        <viz:size value="8"/>
      </node>
      <node id="B" label="Bob">
        <viz:color r="255" g="0" b="0"/>
        <viz:position x="-5" y="4"/>
      </node>
      <node id="C">
        <attvalues>
          <attvalue for="d3" value="author"/>
        </attvalues>
      </node>
    </nodes>
    <edges>
      <edge id="e0" source="A" target="B" weight="2"/>
      <edge id="e1" source="A" target="Z" weight="1"/>
    </edges>
  </graph>
</gexf>
"""


@pytest.fixture
def three_node_gexf():
    return THREE_NODE_GEXF


@pytest.fixture
def triangle():
    """Three positioned authors, fully connected"""
    nodes = [
        GraphNode('a', label='Ada', full_label='Ada Lovelace', group='G1', x=0.0, y=0.0),
        GraphNode('b', label='Bo', group='G1', x=100.0, y=0.0),
        GraphNode('c', label='Cy', group='G2', x=50.0, y=80.0),
    ]
    return NetworkData.build(nodes, [('a', 'b', 1.0), ('b', 'c', 4.0), ('a', 'c', 1.0)])


@pytest.fixture
def citation_network():
    """Two authors, three papers in two domains"""
    nodes = [
        GraphNode('auth-1', label='Author One', group='AUTHOR'),
        GraphNode('auth-2', label='Author Two', group='AUTHOR'),
        GraphNode('p-1', label='p-1', full_label='Smart Factories at Scale', group='MAN', val=2.0,
                  node_type=NodeType.PAPER),
        GraphNode('p-2', label='p-2', full_label='Telehealth Adoption', group='HLT', val=1.0,
                  node_type=NodeType.PAPER),
        GraphNode('p-3', label='p-3', full_label='Lean Principles Revisited', group='MAN', val=1.5,
                  node_type=NodeType.PAPER),
    ]
    links = [('auth-1', 'p-1', 2.0), ('auth-2', 'p-2', 2.0), ('auth-1', 'p-3', 2.0),
             ('p-1', 'p-2', 1.0), ('p-3', 'p-1', 1.0)]
    return NetworkData.build(nodes, links)


@pytest.fixture
def papers():
    return [
        {'id': 'p-1', 'title': 'Smart Factories at Scale', 'year': 2019, 'domainId': 'MAN',
         'subArea': 'Smart Factories', 'citations': 42, 'pageRank': 0.731},
        {'id': 'p-2', 'title': 'Telehealth Adoption', 'year': 2021, 'domainId': 'HLT',
         'subArea': 'Telehealth', 'citations': 0, 'pageRank': 0.2},
        {'id': 'p-3', 'title': 'Lean Principles Revisited', 'year': 2010, 'domainId': 'MAN',
         'subArea': 'Lean Principles', 'citations': 5, 'pageRank': 0.4},
    ]


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
