"""
Cross-Section Overlay Utility
=============================

Plots one cross-section category read from several sources on a single
figure, each curve styled by its position on the command line.

Usage:
    nuxsec-xsec-overlay -d nu_mu_O16 -c tot_cc -i v3.root,v3 -i v2.root,v2 [-o overlay.pdf]
"""

import argparse
import logging
import sys
from typing import List, Optional

from nuxsec.apps.xsec_comp import LOG_FORMAT, ArgumentParser, parse_source_arg
from nuxsec.curves.curve import INTERPOLATION_MODES
from nuxsec.visualization.overlay import plot_overlay

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='nuxsec-xsec-overlay',
        description="Overlay one cross-section category from several sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nuxsec-xsec-overlay -d nu_mu_O16 -c tot_cc -i v3.root,v3 -i v2.root,v2
  nuxsec-xsec-overlay -d nu_e_bar_H1 -c qel_cc_p -i a.parquet -i b.parquet -o qel.png
"""
    )
    parser.add_argument('-d', '--directory', required=True, help='Probe+target directory name')
    parser.add_argument('-c', '--category', required=True, help='Category name (e.g. tot_cc)')
    parser.add_argument(
        '-i', '--input', dest='inputs', action='append', required=True,
        metavar='XSEC_FILE[,LABEL]',
        help='Cross-section source, repeatable; label defaults to the file name',
    )
    parser.add_argument('-o', '--output', default='overlay.pdf', help='Output figure (default: %(default)s)')
    parser.add_argument('--interpolation', choices=INTERPOLATION_MODES, default='linear')
    parser.add_argument(
        '--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    sources = []
    for value in args.inputs:
        try:
            path, label = parse_source_arg(value, default_label='')
        except ValueError as e:
            parser.error(str(e))
        sources.append((path, label or path))

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    fig = plot_overlay(sources, args.directory, args.category, interpolation=args.interpolation)
    try:
        if len(fig.graphs) == 0:
            logger.error(f"No source holds {args.directory}/{args.category}")
            return 1
        fig.save(args.output)
    finally:
        fig.close()

    logger.info(f"[OK] {len(fig.graphs)} curves overlaid in {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
