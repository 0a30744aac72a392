# test_summaries.py
# Tests for tooltip summaries and the scope carried by citation metrics.

from graph_model import GraphLink, GraphMode, GraphNode, NodeType
from summaries import (AuthorSummary, PaperSummary, ScopedMetric, build_summary, link_html, link_relationship,
                       summary_html)


def test_author_in_social_mode_has_scoped_top_cited_count():
    node = GraphNode('a', label='Ada', group='Cluster 2', top_cited_paper_count=3)
    summary = build_summary(node, GraphMode.SOCIAL)
    assert isinstance(summary, AuthorSummary)
    assert summary.top_cited.value == 3
    assert 'top 200 most-cited papers' in summary.top_cited.caption()
    assert 'top 200 most-cited papers' in summary_html(summary)


def test_author_in_citation_mode_has_no_top_cited_count():
    summary = build_summary(GraphNode('a'), GraphMode.CITATION)
    assert summary.top_cited is None


def test_zero_is_shown_as_out_of_scope_not_as_zero():
    metric = ScopedMetric(0, label='top-cited papers')
    assert metric.out_of_scope
    assert metric.display_value() == 'n/a'
    assert 'outside' in metric.caption()
    assert 'top 200' in metric.caption()


def test_paper_uses_record_fields(papers):
    node = GraphNode('p-1', label='p-1', full_label='Smart Factories at Scale', group='MAN',
                     node_type=NodeType.PAPER)
    summary = build_summary(node, GraphMode.CITATION, {p['id']: p for p in papers})
    assert isinstance(summary, PaperSummary)
    assert summary.title == 'Smart Factories at Scale'
    assert summary.domain == 'Manufacturing & Design'
    assert summary.sub_area == 'Smart Factories'
    assert summary.year == 2019
    assert summary.citations.value == 42
    assert summary.influence.display_value(3) == '0.731'
    assert not summary.citations.derived


def test_paper_without_record_derives_figures_from_size():
    node = GraphNode('p-9', group='SUS', val=2.0, node_type=NodeType.PAPER)
    summary = build_summary(node, GraphMode.CITATION, {})
    assert summary.citations.value == 246
    assert summary.citations.derived
    assert summary.influence.value == 2.0


def test_paper_in_social_mode_has_no_citation_figures(papers):
    node = GraphNode('p-1', node_type=NodeType.PAPER)
    summary = build_summary(node, GraphMode.SOCIAL, {p['id']: p for p in papers})
    assert summary.citations is None and summary.influence is None


def test_link_relationships():
    author = GraphNode('a', label='Ada')
    paper = GraphNode('p', label='P1', node_type=NodeType.PAPER)
    other = GraphNode('q', label='P2', node_type=NodeType.PAPER)
    assert link_relationship(GraphLink(author, paper), GraphMode.SOCIAL) == 'Co-Authorship'
    assert link_relationship(GraphLink(author, paper), GraphMode.CITATION) == 'Authored'
    assert link_relationship(GraphLink(paper, other), GraphMode.CITATION) == 'Cites'
    assert link_relationship(GraphLink(paper, author), GraphMode.CITATION) == 'Connected'
    assert 'Ada &rarr; P1' in link_html(GraphLink(author, paper), GraphMode.CITATION)


def test_html_is_escaped():
    summary = build_summary(GraphNode('x', label='<b>A & B</b>'), GraphMode.CITATION)
    assert '&lt;b&gt;A &amp; B&lt;/b&gt;' in summary_html(summary)
