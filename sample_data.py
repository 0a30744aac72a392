"""
Bundled sample corpus used whenever the real data cannot be loaded.

Generated deterministically from a seed so every fallback shows the same graph.
"""

import random

from constants import AFFILIATION_COLORS, AUTHOR_NODE_COLOR, DOMAINS
from graph_model import GraphNode, NetworkData, NodeType

START_YEAR = 2002
END_YEAR = 2025
SAMPLE_SEED = 2025

TITLE_PREFIXES = ['Optimizing', 'A Study on', 'Analysis of', 'Integrated', 'Next-Gen', 'Review of', 'AI-Driven']


def generate_papers(rng, count=200):
    """Paper records sorted by influence (page rank, descending)"""
    papers = []
    affiliations = list(AFFILIATION_COLORS)
    for i in range(count):
        year = rng.randint(START_YEAR, END_YEAR)
        domain = rng.choice(DOMAINS)
        sub_area = rng.choice(domain['subAreas'])
        authors = []
        for idx in range(rng.randint(1, 4)):
            authors.append({
                'id': f"auth-{i}-{idx}",
                'name': f"Author {chr(65 + rng.randint(0, 25))}. Name",
                'affiliation': rng.choice(affiliations),
            })
        # Occasionally skewed high
        boost = 10 if rng.randint(0, 10) == 0 else 1
        papers.append({
            'id': f"p-{i}",
            'title': f"{rng.choice(TITLE_PREFIXES)} {sub_area} in {domain['name']} Contexts",
            'year': year,
            'authors': authors,
            'domainId': domain['id'],
            'subArea': sub_area,
            'citations': max(0, int((2026 - year) * rng.uniform(0, 5) * boost)),
            'pageRank': rng.uniform(0.001, 0.999),
            'llmConfidence': 'High' if rng.random() > 0.3 else 'Medium',
            'abstract': 'Lorem ipsum data analysis...',
        })
    papers.sort(key=lambda p: p['pageRank'], reverse=True)
    return papers


def _domain_color(domain_id, default):
    for domain in DOMAINS:
        if domain['id'] == domain_id:
            return domain['color']
    return default


def social_network(papers):
    """Authors of the top 50 papers, linked by co-authorship"""
    nodes = {}
    links = []
    for paper in papers[:50]:
        authors = paper['authors']
        for i, a1 in enumerate(authors):
            if a1['id'] not in nodes:
                nodes[a1['id']] = GraphNode(a1['id'], label=a1['name'], full_label=a1['name'],
                                            group=a1['affiliation'], val=1.0,
                                            color=AFFILIATION_COLORS.get(a1['affiliation'], '#64748b'))
            else:
                nodes[a1['id']].val += 0.5
            for a2 in authors[i + 1:]:
                if a2['id'] not in nodes:
                    nodes[a2['id']] = GraphNode(a2['id'], label=a2['name'], full_label=a2['name'],
                                                group=a2['affiliation'], val=1.0,
                                                color=AFFILIATION_COLORS.get(a2['affiliation'], '#64748b'))
                links.append((a1['id'], a2['id'], 1.0))
    return NetworkData.build(list(nodes.values()), links)


def mixed_citation_network(papers, rng):
    """Papers and their authors; authorship links plus simulated citations"""
    nodes = {}
    links = []
    for paper in papers[:30]:
        if paper['id'] not in nodes:
            nodes[paper['id']] = GraphNode(paper['id'], label=paper['id'], full_label=paper['title'],
                                           group=paper['domainId'], val=paper['pageRank'] * 15,
                                           color=_domain_color(paper['domainId'], '#000'),
                                           node_type=NodeType.PAPER)
        for author in paper['authors']:
            if author['id'] not in nodes:
                nodes[author['id']] = GraphNode(author['id'], label=author['name'],
                                                full_label=f"{author['name']} ({author['affiliation']})",
                                                group='AUTHOR', val=3.0, color=AUTHOR_NODE_COLOR)
            links.append((author['id'], paper['id'], 2.0))

    paper_nodes = [n for n in nodes.values() if n.node_type == NodeType.PAPER]
    for i, source in enumerate(paper_nodes):
        for j, target in enumerate(paper_nodes):
            if i != j and source.group == target.group and rng.random() > 0.85:
                links.append((source.id, target.id, 1.0))
    return NetworkData.build(list(nodes.values()), links)


def paper_citation_network(papers, rng):
    """Top 50 papers; citations mostly within a domain"""
    nodes = [GraphNode(p['id'], label=p['id'], full_label=p['title'], group=p['domainId'],
                       val=p['pageRank'] * 20, color=_domain_color(p['domainId'], '#999'),
                       node_type=NodeType.PAPER)
             for p in papers[:50]]
    links = []
    for i, source in enumerate(nodes):
        for j, target in enumerate(nodes):
            if i == j:
                continue
            if source.group == target.group and rng.random() > 0.88:
                links.append((source.id, target.id, 1.0))
            elif rng.random() > 0.98:
                links.append((source.id, target.id, 1.0))
    return NetworkData.build(nodes, links)


def author_citation_network(papers, rng):
    """Authors of the top 80 papers with random citation links"""
    authors = {}
    for paper in papers[:80]:
        for author in paper['authors']:
            if author['id'] not in authors:
                authors[author['id']] = GraphNode(author['id'], label=author['name'],
                                                  full_label=f"{author['name']} ({author['affiliation']})",
                                                  group=author['affiliation'], val=3.0,
                                                  color=AFFILIATION_COLORS.get(author['affiliation'], '#64748b'))
            else:
                authors[author['id']].val += 1
    nodes = list(authors.values())
    links = []
    for i, source in enumerate(nodes):
        for j, target in enumerate(nodes):
            if i != j and rng.random() > 0.97:
                links.append((source.id, target.id, 1.0))
    return NetworkData.build(nodes, links)


class SampleCorpus:
    """Papers plus the four sample networks"""

    def __init__(self, seed=SAMPLE_SEED):
        rng = random.Random(seed)
        self.papers = generate_papers(rng)
        self.domains = [dict(d) for d in DOMAINS]
        self.social = social_network(self.papers)
        self.citation_mixed = mixed_citation_network(self.papers, rng)
        self.citation_paper = paper_citation_network(self.papers, rng)
        self.citation_author = author_citation_network(self.papers, rng)
