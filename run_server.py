#!/usr/bin/env python3
"""Run the bridge. Usage: python run_server.py. SERVER_MODE=http (default) or stdio; set HOST/PORT for http."""
import sys

from bridge_app.server import main

if __name__ == "__main__":
    sys.exit(main())
