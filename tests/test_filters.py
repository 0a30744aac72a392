# test_filters.py
# Tests for domain / sub-area filters and the filtered subset.

from filters import DomainFilter, FilterSpec, SubdomainFilter, apply_filters


def test_removing_domain_cascades_to_its_sub_areas():
    spec = FilterSpec()
    spec.add(DomainFilter('MAN'))
    spec.add(SubdomainFilter('Smart Factories', 'MAN'))
    spec.add(SubdomainFilter('CAD/CAM', 'MAN'))
    spec.add(SubdomainFilter('Telehealth', 'HLT'))
    assert len(spec) == 4

    spec.remove(DomainFilter('MAN'))

    assert list(spec) == [SubdomainFilter('Telehealth', 'HLT')]


def test_removing_sub_area_keeps_domain():
    spec = FilterSpec([DomainFilter('MAN'), SubdomainFilter('CAD/CAM', 'MAN')])
    spec.remove(SubdomainFilter('CAD/CAM', 'MAN'))
    assert list(spec) == [DomainFilter('MAN')]


def test_toggles():
    spec = FilterSpec()
    spec.toggle_domain('SUS')
    spec.toggle_subdomain('Logistics', 'SUP')
    assert spec.is_domain_selected('SUS')
    assert spec.is_subdomain_selected('Logistics', 'SUP')
    spec.toggle_domain('SUS')
    assert not spec.is_domain_selected('SUS')
    spec.clear()
    assert not spec


def test_add_is_idempotent():
    spec = FilterSpec()
    spec.add(DomainFilter('MAN'))
    spec.add(DomainFilter('MAN'))
    assert len(spec) == 1


def test_no_filters_returns_network_unchanged(citation_network, papers):
    assert apply_filters(citation_network, FilterSpec(), papers) is citation_network


def test_domain_filter_keeps_authors_and_matching_papers(citation_network, papers):
    result = apply_filters(citation_network, FilterSpec([DomainFilter('MAN')]), papers)
    assert {n.id for n in result.nodes} == {'auth-1', 'auth-2', 'p-1', 'p-3'}
    assert result.is_consistent()
    # Links into the filtered-out paper are gone
    assert all('p-2' not in (l.source.id, l.target.id) for l in result.links)
    assert len(result.links) == 3


def test_sub_area_filter_uses_paper_records(citation_network, papers):
    result = apply_filters(citation_network, FilterSpec([SubdomainFilter('Telehealth', 'HLT')]), papers)
    assert {n.id for n in result.nodes} == {'auth-1', 'auth-2', 'p-2'}


def test_paper_without_record_never_matches_sub_area(citation_network):
    result = apply_filters(citation_network, FilterSpec([SubdomainFilter('Telehealth', 'HLT')]), [])
    assert {n.id for n in result.nodes} == {'auth-1', 'auth-2'}
    assert result.links == []


def test_any_filter_match_is_enough(citation_network, papers):
    spec = FilterSpec([DomainFilter('HLT'), SubdomainFilter('Lean Principles', 'MAN')])
    result = apply_filters(citation_network, spec, papers)
    assert {n.id for n in result.nodes if n.id.startswith('p-')} == {'p-2', 'p-3'}
