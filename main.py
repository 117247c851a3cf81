#!/usr/bin/env python3
"""Release set entry point"""

import sys

if __name__ == "__main__":
    from release_set.cli import run

    sys.exit(run())
