"""
Shared configuration for the network cartography viewer.
Colours, research domains, layout tunables and data file names.
"""

# Research domains (id, display name, colour, sub-areas)
DOMAINS = [
    {'id': 'MAN', 'name': 'Manufacturing & Design', 'color': '#2563eb',
     'subAreas': ['Additive Mfg', 'Smart Factories', 'Lean Principles', 'CAD/CAM']},
    {'id': 'HLT', 'name': 'Healthcare Systems', 'color': '#dc2626',
     'subAreas': ['Patient Flow', 'Telehealth', 'Medical Decision Making', 'Public Health']},
    {'id': 'DAT', 'name': 'Data Science & AI', 'color': '#7c3aed',
     'subAreas': ['Machine Learning', 'Predictive Analytics', 'LLMs in IE', 'Optimization']},
    {'id': 'SUP', 'name': 'Supply Chain', 'color': '#d97706',
     'subAreas': ['Logistics', 'Resilience', 'Inventory Control', 'Blockchain']},
    {'id': 'SUS', 'name': 'Sustainability', 'color': '#0d9488',
     'subAreas': ['Circular Economy', 'Green Energy', 'Carbon Footprint', 'Waste Mgmt']},
    {'id': 'HFE', 'name': 'Human Factors', 'color': '#e11d48',
     'subAreas': ['Cognitive Ergo', 'Safety', 'Human-Robot Interaction', 'UX Design']},
]

AFFILIATION_COLORS = {
    'Univ. of Michigan': '#1e40af',
    'Georgia Tech': '#b45309',
    'Purdue Univ.': '#0f172a',
    'Virginia Tech': '#9f1239',
    'Texas A&M': '#581c87',
}

# Colour used when neither the node nor its group supplies one
DEFAULT_NODE_COLOR = '#94a3b8'
AUTHOR_NODE_COLOR = '#334155'
UNCLASSIFIED_DOMAIN = 'UNK'

# Size of a node when the source gives no size hint
DEFAULT_NODE_SIZE = 5.0

# Upstream citation data only covers this many papers
TOP_CITED_LIMIT = 200
TOP_CITED_SCOPE = f"top {TOP_CITED_LIMIT} most-cited papers"

# Graph area used for framing before the view has been laid out
DEFAULT_VIEW_WIDTH = 800
DEFAULT_VIEW_HEIGHT = 600

# Zoom limits applied to the whole drawing group
MIN_ZOOM = 0.1
MAX_ZOOM = 8.0

# Framing of an imported layout
FIT_PADDING = 80
FIT_MAX_SCALE = 1.2

# Force layout parameters per graph mode: (link distance, charge strength)
FORCE_PARAMS = {
    'SOCIAL': (40.0, -80.0),
    'CITATION': (80.0, -120.0),
}
COLLIDE_PADDING = 4.0

# Floating inspector windows
WINDOW_WIDTH = 300
WINDOW_FIRST_Z = 10

# Data files looked up in the data directory
COAUTHOR_GEXF = 'coauthorship_network_top200.gexf'
COAUTHOR_JSON = 'coauthorship_network_unified.json'
CITATION_AUTHOR_GEXF = 'citation_network_top200.gexf'
CITATION_AUTHOR_JSON = 'citation_network_author.json'
CITATION_PAPER_GEXF = 'citation_network_paper.gexf'
CITATION_PAPER_JSON = 'citation_network_paper.json'
CITATION_MIXED_JSON = 'citation_network_mixed.json'
PAPERS_JSON = 'papers.json'
DOMAINS_JSON = 'domains.json'


def domain_name(domain_id, domains=None):
    """Return the display name of a domain id"""
    for domain in domains or DOMAINS:
        if domain['id'] == domain_id:
            return domain['name']
    return 'Unclassified' if domain_id == UNCLASSIFIED_DOMAIN else domain_id


def group_colors(domains=None):
    """Colour lookup for group ids (domains and affiliations)"""
    colors = dict(AFFILIATION_COLORS)
    for domain in domains or DOMAINS:
        colors[domain['id']] = domain['color']
    return colors
