"""
Network Cartography - research community network viewer
Main entry point for the application.
"""

import argparse
import sys

from PyQt5.QtWidgets import QApplication

from community import CommunityWindow
from datasource import DEFAULT_DATA_DIR, DataStore
from version import get_version


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='cartography',
                                     description='Explore co-authorship and citation networks.')
    parser.add_argument('data_dir', nargs='?', default=DEFAULT_DATA_DIR,
                        help=f"directory holding the GEXF/JSON exports (default: ./{DEFAULT_DATA_DIR})")
    parser.add_argument('--version', action='version', version=f"%(prog)s {get_version()}")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    app = QApplication(sys.argv[:1])

    # Set application style
    app.setStyle("Fusion")

    store = DataStore(args.data_dir).load()

    # Create and show the main window
    window = CommunityWindow(store)

    # Run the application
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
