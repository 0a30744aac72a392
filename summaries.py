"""
Tooltip and inspector content for nodes and links.

Citation-derived figures carry the subset they were computed over so the
qualifier cannot get lost on the way to the screen.
"""

import html

from constants import TOP_CITED_SCOPE, domain_name
from graph_model import GraphMode, NodeType

# Placeholder estimate used when no paper record is available
CITATIONS_PER_SIZE_UNIT = 123


class ScopedMetric:
    """A metric value plus the data subset it is valid for"""

    def __init__(self, value, scope=TOP_CITED_SCOPE, label='', derived=False):
        self.value = value
        self.scope = scope
        self.label = label
        self.derived = derived

    @property
    def out_of_scope(self):
        """Zero/absent here means 'outside the subset', not a real zero"""
        return self.value is None or self.value == 0

    def display_value(self, decimals=0):
        if self.out_of_scope:
            return 'n/a'
        if decimals:
            return f"{self.value:.{decimals}f}"
        return f"{int(round(self.value))}"

    def caption(self):
        """Label with its scope qualifier, always present"""
        if self.out_of_scope:
            return f"{self.label} (outside the {self.scope})"
        return f"{self.label} (within the {self.scope})"

    def __repr__(self):
        return f"ScopedMetric({self.value!r}, scope={self.scope!r})"


class AuthorSummary:
    kind = 'author'

    def __init__(self, title, group, top_cited=None):
        self.title = title
        self.group = group
        self.top_cited = top_cited  # ScopedMetric, co-authorship mode only


class PaperSummary:
    kind = 'paper'

    def __init__(self, title, group, domain=None, sub_area=None, year=None, citations=None, influence=None):
        self.title = title
        self.group = group
        self.domain = domain
        self.sub_area = sub_area
        self.year = year
        self.citations = citations  # ScopedMetric, citation mode only
        self.influence = influence  # ScopedMetric, citation mode only


def build_summary(node, graph_mode, papers=None, domains=None):
    """Build the tagged summary for a node under the given graph mode.

    Args:
        node (GraphNode): node being described
        graph_mode (GraphMode): SOCIAL or CITATION
        papers (dict): paper records keyed by id
        domains (list): domain records for display names
    """
    title = node.display_label
    if node.node_type == NodeType.AUTHOR:
        top_cited = None
        if graph_mode == GraphMode.SOCIAL:
            value = node.top_cited_paper_count
            if value is None:
                value = node.val
            top_cited = ScopedMetric(value, label='top-cited papers')
        return AuthorSummary(title, node.group or 'Author', top_cited)

    paper = (papers or {}).get(node.id)
    domain = None
    sub_area = None
    year = None
    if paper is not None:
        domain = domain_name(paper.get('domainId'), domains)
        sub_area = paper.get('subArea')
        year = paper.get('year')

    citations = influence = None
    if graph_mode == GraphMode.CITATION:
        if paper is not None:
            citations = ScopedMetric(paper.get('citations', 0), label='Citations')
            influence = ScopedMetric(paper.get('pageRank', 0), label='PageRank')
        elif node.val is not None:
            citations = ScopedMetric(node.val * CITATIONS_PER_SIZE_UNIT, label='Citations', derived=True)
            influence = ScopedMetric(node.val, label='PageRank', derived=True)
    return PaperSummary(title, node.group, domain, sub_area, year, citations, influence)


def link_relationship(link, graph_mode):
    """Name of the relationship a link stands for"""
    if graph_mode == GraphMode.SOCIAL:
        return 'Co-Authorship'
    source_type = link.source.node_type
    target_type = link.target.node_type
    if source_type == NodeType.AUTHOR and target_type == NodeType.PAPER:
        return 'Authored'
    if source_type == NodeType.PAPER and target_type == NodeType.PAPER:
        return 'Cites'
    return 'Connected'


def _metric_html(metric, decimals=0):
    return (f"<b style='font-family:monospace'>{metric.display_value(decimals)}</b> "
            f"<span title='{html.escape(metric.scope)}'>{html.escape(metric.caption())}</span>")


def summary_html(summary):
    """Rich-text tooltip body for a summary"""
    parts = [f"<b>{html.escape(summary.title)}</b>"]
    if summary.kind == 'author':
        parts.append(f"<span>A &middot; {html.escape(summary.group)}</span>")
        if summary.top_cited is not None:
            parts.append(_metric_html(summary.top_cited))
    else:
        if summary.group:
            parts.append(f"<span>{html.escape(summary.group)}</span>")
        if summary.domain:
            detail = summary.domain
            if summary.sub_area:
                detail += f" / {summary.sub_area}"
            if summary.year:
                detail += f" ({summary.year})"
            parts.append(f"<span>{html.escape(detail)}</span>")
        if summary.citations is not None:
            parts.append(_metric_html(summary.citations))
        if summary.influence is not None:
            parts.append(_metric_html(summary.influence, decimals=3))
    return '<br/>'.join(parts)


def link_html(link, graph_mode):
    return (f"<b>{html.escape(link_relationship(link, graph_mode))}</b><br/>"
            f"{html.escape(link.source.label)} &rarr; {html.escape(link.target.label)}")
