#!/usr/bin/env python3
"""
Setting Scan Entrypoint

Runs the extractor from a source checkout without installing the package:

    python extract.py --root ~/src/elasticsearch/server/src/main/java --output settings.json
"""

import sys

from src.cli import main

if __name__ == "__main__":
    sys.exit(main())
