# test_datasource.py
# Tests for the GEXF -> JSON -> sample fallback chain and the bundled sample corpus.

import json

import pytest

from constants import COAUTHOR_GEXF, COAUTHOR_JSON, CITATION_PAPER_GEXF, DOMAINS_JSON, PAPERS_JSON
from datasource import DataSource, DataStore, network_key
from graph_model import CitationScope, GraphMode, NodeType
from sample_data import SampleCorpus


@pytest.fixture(scope="module")
def sample():
    return SampleCorpus()


def test_empty_directory_falls_back_to_sample(tmp_path):
    store = DataStore(str(tmp_path)).load()
    for key in ('social', 'citation_mixed', 'citation_paper', 'citation_author'):
        assert store.sources[key] == DataSource.SAMPLE
        assert store.networks[key].is_consistent()
    assert len(store.papers) == 200
    assert store.domains[0]['id'] == 'MAN'


def test_gexf_is_preferred(tmp_path, three_node_gexf):
    (tmp_path / COAUTHOR_GEXF).write_text(three_node_gexf, encoding='utf-8')
    (tmp_path / COAUTHOR_JSON).write_text(json.dumps({'nodes': [{'id': 'x'}], 'links': []}), encoding='utf-8')
    store = DataStore(str(tmp_path)).load()
    assert store.source_for(GraphMode.SOCIAL) == DataSource.GEXF
    assert [n.id for n in store.network_for(GraphMode.SOCIAL).nodes] == ['A', 'B', 'C']


def test_broken_gexf_falls_back_to_json(tmp_path):
    (tmp_path / COAUTHOR_GEXF).write_text("<gexf><graph>", encoding='utf-8')
    (tmp_path / COAUTHOR_JSON).write_text(json.dumps({
        'nodes': [{'id': 'x', 'label': 'X'}, {'id': 'y'}],
        'links': [{'source': 'x', 'target': 'y', 'value': 2}, {'source': 'x', 'target': 'gone'}],
    }), encoding='utf-8')
    store = DataStore(str(tmp_path))
    network = store.load_network('social')
    assert store.sources['social'] == DataSource.JSON
    assert len(network.links) == 1
    assert network.dropped_links == 1


def test_graph_without_root_and_bad_json_fall_back_to_sample(tmp_path):
    (tmp_path / COAUTHOR_GEXF).write_text("<gexf/>", encoding='utf-8')
    (tmp_path / COAUTHOR_JSON).write_text("{not json", encoding='utf-8')
    store = DataStore(str(tmp_path))
    store.load_network('social')
    assert store.sources['social'] == DataSource.SAMPLE
    assert not store.networks['social'].is_empty


def test_citation_gexf_reads_node_types(tmp_path, three_node_gexf):
    (tmp_path / CITATION_PAPER_GEXF).write_text(three_node_gexf, encoding='utf-8')
    store = DataStore(str(tmp_path))
    network = store.network_for(GraphMode.CITATION, CitationScope.PAPER)
    assert store.source_for(GraphMode.CITATION, CitationScope.PAPER) == DataSource.GEXF
    assert network.node('A').node_type == NodeType.PAPER


def test_records_are_read_from_json(tmp_path):
    (tmp_path / PAPERS_JSON).write_text(json.dumps([{'id': 'p-1', 'domainId': 'MAN'}]), encoding='utf-8')
    (tmp_path / DOMAINS_JSON).write_text(json.dumps({'not': 'a list'}), encoding='utf-8')
    store = DataStore(str(tmp_path)).load()
    assert store.papers_by_id == {'p-1': {'id': 'p-1', 'domainId': 'MAN'}}
    assert len(store.domains) == 6


def test_network_key():
    assert network_key(GraphMode.SOCIAL, CitationScope.PAPER) == 'social'
    assert network_key(GraphMode.CITATION, CitationScope.AUTHOR) == 'citation_author'
    assert network_key(GraphMode.CITATION, CitationScope.PAPER) == 'citation_paper'
    assert network_key(GraphMode.CITATION, CitationScope.MIXED) == 'citation_mixed'


def test_sample_is_deterministic(sample):
    again = SampleCorpus()
    assert [p['id'] for p in again.papers] == [p['id'] for p in sample.papers]
    assert len(again.citation_paper.links) == len(sample.citation_paper.links)


def test_sample_papers_sorted_by_influence(sample):
    ranks = [p['pageRank'] for p in sample.papers]
    assert ranks == sorted(ranks, reverse=True)


def test_sample_networks_shape(sample):
    assert all(n.node_type == NodeType.AUTHOR for n in sample.social.nodes)
    assert len(sample.citation_paper.nodes) == 50
    assert all(n.node_type == NodeType.PAPER for n in sample.citation_paper.nodes)
    kinds = {n.node_type for n in sample.citation_mixed.nodes}
    assert kinds == {NodeType.AUTHOR, NodeType.PAPER}
    for network in (sample.social, sample.citation_mixed, sample.citation_paper, sample.citation_author):
        assert network.is_consistent()
        assert network.dropped_links == 0
        # No positions, so the force layout runs
        assert not any(n.has_position for n in network.nodes)


def test_non_object_paper_entries_are_skipped(tmp_path):
    (tmp_path / PAPERS_JSON).write_text(json.dumps([{'id': 'p-1'}, 'p-2', 3, None]), encoding='utf-8')
    store = DataStore(str(tmp_path)).load()
    assert store.papers == [{'id': 'p-1'}]
    assert list(store.papers_by_id) == ['p-1']
