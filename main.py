#!/usr/bin/env python
"""
Feie Callback Receiver - Standalone Entry Point

Run directly:
    python main.py

Or with environment variables:
    FEIE_USER=you@example.com FEIE_UKEY=... FEIE_PUBLIC_KEY=... FEIE_CALLBACK_PORT=5200 python main.py
"""

import os
import sys

# Ensure package is importable when running directly
if __name__ == '__main__':
    package_dir = os.path.dirname(os.path.abspath(__file__))
    if package_dir not in sys.path:
        sys.path.insert(0, package_dir)

from feie_print.app import main


if __name__ == '__main__':
    main()
