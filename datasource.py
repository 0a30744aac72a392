"""
Loads the networks and paper records from a data directory.

Every network is taken from the first source that works: the GEXF export
(layout and colours from Gephi), then the JSON export, then the bundled
sample. Whatever goes wrong with a file only moves on to the next source.
"""

import json
import os
from enum import Enum

from constants import (CITATION_AUTHOR_GEXF, CITATION_AUTHOR_JSON, CITATION_MIXED_JSON, CITATION_PAPER_GEXF,
                       CITATION_PAPER_JSON, COAUTHOR_GEXF, COAUTHOR_JSON, DOMAINS, DOMAINS_JSON, PAPERS_JSON)
from gexf import GexfError, parse_gexf_file
from graph_model import CitationScope, GraphMode, NetworkData
from sample_data import SampleCorpus

DEFAULT_DATA_DIR = 'data'


class DataSource(Enum):
    GEXF = 'GEXF'
    JSON = 'JSON'
    SAMPLE = 'Sample'


# network key -> (gexf file or None, parse mode, json file, sample attribute)
NETWORK_FILES = {
    'social': (COAUTHOR_GEXF, GraphMode.SOCIAL, COAUTHOR_JSON, 'social'),
    'citation_mixed': (None, GraphMode.CITATION, CITATION_MIXED_JSON, 'citation_mixed'),
    'citation_paper': (CITATION_PAPER_GEXF, GraphMode.CITATION, CITATION_PAPER_JSON, 'citation_paper'),
    'citation_author': (CITATION_AUTHOR_GEXF, GraphMode.CITATION, CITATION_AUTHOR_JSON, 'citation_author'),
}


def network_key(graph_mode, scope=None):
    """Which network backs a (mode, scope) combination"""
    if graph_mode == GraphMode.SOCIAL:
        return 'social'
    if scope == CitationScope.PAPER:
        return 'citation_paper'
    if scope == CitationScope.AUTHOR:
        return 'citation_author'
    return 'citation_mixed'


def read_json(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class DataStore:
    """Networks, papers and domains for one data directory"""

    def __init__(self, data_dir=DEFAULT_DATA_DIR, sample_seed=None):
        self.data_dir = data_dir
        self.sample_seed = sample_seed
        self.networks = {}
        self.sources = {}
        self.papers = []
        self.domains = [dict(d) for d in DOMAINS]
        self._sample = None

    @property
    def sample(self):
        """Bundled corpus, generated on first use"""
        if self._sample is None:
            if self.sample_seed is None:
                self._sample = SampleCorpus()
            else:
                self._sample = SampleCorpus(self.sample_seed)
        return self._sample

    @property
    def papers_by_id(self):
        return {p.get('id'): p for p in self.papers}

    def path(self, name):
        return os.path.join(self.data_dir, name)

    def load(self):
        """Load everything; never raises for missing or broken files"""
        print(f"[DEBUG] Loading data from '{os.path.abspath(self.data_dir)}'")
        if not os.path.isdir(self.data_dir):
            print(f"[WARN] Data directory '{self.data_dir}' not found, using sample data")
        self.papers = self._load_records(PAPERS_JSON, 'papers')
        self.domains = self._load_records(DOMAINS_JSON, 'domains')
        for key in NETWORK_FILES:
            self.load_network(key)
        return self

    def _load_records(self, name, attr):
        path = self.path(name)
        if os.path.exists(path):
            try:
                records = read_json(path)
                if isinstance(records, list):
                    kept = [r for r in records if isinstance(r, dict)]
                    if len(kept) < len(records):
                        print(f"[WARN] {name}: {len(records) - len(kept)} entries are not objects, skipped")
                    print(f"[DEBUG] {attr}: {len(kept)} records from {name}")
                    return kept
                print(f"[WARN] {name}: expected a list, using sample {attr}")
            except (OSError, ValueError) as e:
                print(f"[WARN] {name}: {e}; using sample {attr}")
        return list(getattr(self.sample, attr))

    def load_network(self, key):
        """Load one network, falling back GEXF -> JSON -> sample"""
        gexf_name, mode, json_name, sample_attr = NETWORK_FILES[key]
        network = None
        source = None

        if gexf_name and os.path.exists(self.path(gexf_name)):
            try:
                network = parse_gexf_file(self.path(gexf_name), mode)
                source = DataSource.GEXF
            except (GexfError, OSError) as e:
                print(f"[WARN] {key}: {gexf_name} unusable ({e}), trying JSON")

        if network is None and os.path.exists(self.path(json_name)):
            try:
                network = NetworkData.from_dict(read_json(self.path(json_name)))
                source = DataSource.JSON
            except (OSError, ValueError, AttributeError, TypeError) as e:
                print(f"[WARN] {key}: {json_name} unusable ({e}), using sample")
                network = None

        if network is None:
            network = getattr(self.sample, sample_attr)
            source = DataSource.SAMPLE

        print(f"[DEBUG] {key}: {len(network.nodes)} nodes, {len(network.links)} links from {source.value}")
        if network.dropped_links:
            print(f"[WARN] {key}: {network.dropped_links} edges dropped (endpoint not found)")
        self.networks[key] = network
        self.sources[key] = source
        return network

    def network_for(self, graph_mode, scope=None):
        key = network_key(graph_mode, scope)
        if key not in self.networks:
            self.load_network(key)
        return self.networks[key]

    def source_for(self, graph_mode, scope=None):
        key = network_key(graph_mode, scope)
        if key not in self.sources:
            self.load_network(key)
        return self.sources[key]
