"""
Domain / sub-area filters applied to citation networks before layout.
"""

from graph_model import NodeType


class DomainFilter:
    """Keep papers whose group is this domain id"""
    kind = 'domain'

    def __init__(self, domain_id):
        self.value = domain_id
        self.domain_id = domain_id

    def matches(self, node, paper):
        return node.group == self.value

    def __eq__(self, other):
        return isinstance(other, DomainFilter) and other.value == self.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        return f"DomainFilter({self.value!r})"


class SubdomainFilter:
    """Keep papers of a sub-area; carries its parent domain for cascading removal"""
    kind = 'subdomain'

    def __init__(self, sub_area, domain_id):
        self.value = sub_area
        self.domain_id = domain_id

    def matches(self, node, paper):
        if paper is None:
            return False
        return paper.get('domainId') == self.domain_id and paper.get('subArea') == self.value

    def __eq__(self, other):
        return (isinstance(other, SubdomainFilter) and other.value == self.value
                and other.domain_id == self.domain_id)

    def __hash__(self):
        return hash((self.kind, self.value, self.domain_id))

    def __repr__(self):
        return f"SubdomainFilter({self.value!r}, {self.domain_id!r})"


class FilterSpec:
    """Ordered set of active domain and sub-area filters"""

    def __init__(self, filters=None):
        self.filters = []
        for f in filters or []:
            self.add(f)

    def __iter__(self):
        return iter(self.filters)

    def __len__(self):
        return len(self.filters)

    def __contains__(self, f):
        return f in self.filters

    def __bool__(self):
        return bool(self.filters)

    def add(self, f):
        if f not in self.filters:
            self.filters.append(f)

    def remove(self, f):
        """Remove a filter; removing a domain also removes every sub-area under it"""
        if f not in self.filters:
            return
        self.filters.remove(f)
        if isinstance(f, DomainFilter):
            self.filters = [other for other in self.filters
                            if not (isinstance(other, SubdomainFilter) and other.domain_id == f.value)]

    def toggle_domain(self, domain_id):
        f = DomainFilter(domain_id)
        if f in self.filters:
            self.remove(f)
        else:
            self.add(f)

    def toggle_subdomain(self, sub_area, domain_id):
        f = SubdomainFilter(sub_area, domain_id)
        if f in self.filters:
            self.remove(f)
        else:
            self.add(f)

    def is_domain_selected(self, domain_id):
        return DomainFilter(domain_id) in self.filters

    def is_subdomain_selected(self, sub_area, domain_id):
        return SubdomainFilter(sub_area, domain_id) in self.filters

    def clear(self):
        self.filters = []


def apply_filters(network, filter_spec, papers=None):
    """Subset a network with the active filters.

    Author nodes are always kept. A paper node is kept when it matches any
    filter. Links losing an endpoint are dropped so the result is still
    fully resolved.

    Args:
        network (NetworkData): source network, left untouched
        filter_spec (FilterSpec): active filters; empty keeps everything
        papers (list): paper records (dicts with id, domainId, subArea)
    """
    if not filter_spec:
        return network
    paper_index = {p.get('id'): p for p in papers or []}
    keep = set()
    for node in network.nodes:
        if node.node_type != NodeType.PAPER:
            keep.add(node.id)
            continue
        paper = paper_index.get(node.id)
        if any(f.matches(node, paper) for f in filter_spec):
            keep.add(node.id)
    return network.subset(keep)
