"""
Version information for Network Cartography
"""

__version__ = "1.1.0"

# Version history
VERSION_HISTORY = """
Version 1.1.0 (2026-10-18)
==========================
Citation views and inspector windows.

New Features:
- Citation network with Authors / Papers / Mixed scopes
- Domain and sub-area filters for citation networks
- Floating inspector windows (drag by header, click to raise)
- Link tooltips naming the relationship (Co-Authorship, Authored, Cites)
- Scope banner and legend

Bug Fixes:
- Edges whose endpoints are missing are dropped instead of failing the load
- RGB colour channels are clamped before composing the hex colour

Version 1.0.0 (2026-09-30)
==========================
Initial release with the co-authorship network.

Features:
- GEXF import with Gephi layout, colours and sizes
- JSON and bundled sample data fallback
- Force-directed layout when the data carries no positions
- Zoom / pan with a home view framing the whole graph
- Search and hover highlighting
"""

def get_version():
    """Return the current version string"""
    return __version__

def print_version():
    """Print version information"""
    print(f"Network Cartography v{__version__}")
    print()
    print(VERSION_HISTORY)

if __name__ == "__main__":
    print_version()
