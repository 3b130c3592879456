#!/usr/bin/env python3
"""
Record generator CLI.

Usage:
    python -m pgrecgen <database_url> <schema> [output_dir] [options]

Examples:
    python -m pgrecgen postgresql://localhost/app public
    python -m pgrecgen postgresql://localhost/app public src/app/records
    python -m pgrecgen snapshot.yaml public out --no-char-length
"""

from __future__ import annotations

import sys

from pgrecgen.db_codegen.main import main

if __name__ == "__main__":
    sys.exit(main())
