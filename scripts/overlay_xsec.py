#!/usr/bin/env python
"""
Overlay one cross-section category read from several sources.

Usage:
    python scripts/overlay_xsec.py -d nu_mu_O16 -c tot_cc -i v3.root,v3 -i v2.root,v2
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nuxsec.apps.xsec_overlay import main

if __name__ == '__main__':
    sys.exit(main())
