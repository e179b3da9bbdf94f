#!/usr/bin/env python
"""
Plot pre-calculated neutrino cross sections and compare with a reference set.

Runs the nuxsec-xsec-comp utility from a source checkout without installing
the package.

Usage:
    python scripts/compare_xsec.py -f xsec-v3.root,v3 -r xsec-v2.root,v2 -o v3_vs_v2.pdf
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nuxsec.apps.xsec_comp import main

if __name__ == '__main__':
    sys.exit(main())
