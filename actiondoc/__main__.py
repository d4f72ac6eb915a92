#!/usr/bin/env python3
"""
Enable running actiondoc via: python -m actiondoc

Usage:
    python -m actiondoc generate --artifact-id user-admin -p user_admin.actions
"""

import sys

from actiondoc.cli import main

if __name__ == "__main__":
    sys.exit(main())
