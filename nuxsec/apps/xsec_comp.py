"""
Cross-Section Comparison Utility
================================

Plots the pre-calculated cross sections used as input for event generation
and optionally compares them against a reference set.

Usage:
    nuxsec-xsec-comp -f xsec_file[,label] [-r reference_xsec_file[,label]] [-o output]

Options:
    -f  Cross-section source (ROOT file with per-probe/target directories
        of TGraphs, or a parquet/CSV table). Optional label after a comma
        (default: 'current').
    -r  Reference cross-section source, same format. Optional label after
        a comma (default: 'reference'). Enables the ratio panes.
    -o  Output PDF (default: xsec.pdf)

Exit codes:
    0  report written
    1  missing/inaccessible source, malformed 'path,label' pair, bad option,
       or the current source could not be read
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple

from nuxsec.curves.curve import INTERPOLATION_MODES
from nuxsec.curves.trimming import TrimConfig
from nuxsec.data.sources import SourceOpenError, check_accessible
from nuxsec.data.store import DEFAULT_CURRENT_LABEL, DEFAULT_REFERENCE_LABEL, CurveStore
from nuxsec.visualization.comparison_report import ComparisonReportBuilder, ReportConfig

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = 'xsec.pdf'
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


@dataclass
class CompOptions:
    current_path: str
    current_label: str
    reference_path: Optional[str]
    reference_label: str
    output: str
    max_points_per_decade: int
    interpolation: str
    log_level: str

    @property
    def has_reference(self) -> bool:
        return self.reference_path is not None


def parse_source_arg(value: str, default_label: str) -> Tuple[str, str]:
    """
    Split a ``path[,label]`` argument.

    Args:
        value: Raw option value
        default_label: Label used when none is given

    Returns:
        (path, label)

    Raises:
        ValueError: If the value holds more than one comma or an empty part
    """
    parts = value.split(',')
    if len(parts) == 1:
        return value, default_label
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Expected 'path' or 'path,label', got '{value}'")
    return parts[0], parts[1]


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='nuxsec-xsec-comp',
        description="Plot pre-calculated neutrino cross sections and compare with a reference set",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plot all cross sections in a file
  nuxsec-xsec-comp -f xsec-v3.root

  # Compare two versions, with legend labels
  nuxsec-xsec-comp -f xsec-v3.root,v3 -r xsec-v2.root,v2 -o v3_vs_v2.pdf
"""
    )
    parser.add_argument(
        '-f', dest='current', required=True, metavar='XSEC_FILE[,LABEL]',
        help='Cross-section source (ROOT, parquet or CSV), optional label after a comma',
    )
    parser.add_argument(
        '-r', dest='reference', default=None, metavar='REF_XSEC_FILE[,LABEL]',
        help='Reference cross-section source, optional label after a comma',
    )
    parser.add_argument(
        '-o', dest='output', default=DEFAULT_OUTPUT,
        help=f'Output PDF (default: {DEFAULT_OUTPUT})',
    )
    parser.add_argument(
        '--max-points-per-decade', type=int, default=TrimConfig.max_points_per_decade,
        help='Reference markers kept per energy decade (default: %(default)s)',
    )
    parser.add_argument(
        '--interpolation', choices=INTERPOLATION_MODES, default='linear',
        help='Curve evaluation rule used for ratios (default: %(default)s)',
    )
    parser.add_argument(
        '--log-level', default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: %(default)s)',
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CompOptions:
    """Parse and validate command-line arguments; exits with status 1 on error."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        current_path, current_label = parse_source_arg(args.current, DEFAULT_CURRENT_LABEL)
        reference_path, reference_label = None, DEFAULT_REFERENCE_LABEL
        if args.reference is not None:
            reference_path, reference_label = parse_source_arg(
                args.reference, DEFAULT_REFERENCE_LABEL
            )
    except ValueError as e:
        parser.error(str(e))

    if not check_accessible(current_path):
        parser.error(f"cross-section source [{current_path}] is not accessible")
    if reference_path is not None and not check_accessible(reference_path):
        parser.error(f"reference cross-section source [{reference_path}] is not accessible")
    if reference_path is None:
        logger.info("No reference cross section file")

    if args.max_points_per_decade <= 0:
        parser.error("--max-points-per-decade must be positive")

    return CompOptions(
        current_path=current_path,
        current_label=current_label,
        reference_path=reference_path,
        reference_label=reference_label,
        output=args.output,
        max_points_per_decade=args.max_points_per_decade,
        interpolation=args.interpolation,
        log_level=args.log_level,
    )


def run(options: CompOptions, progress: bool = True) -> int:
    """Build the report described by ``options``; returns the exit status."""
    config = ReportConfig(
        trim=TrimConfig(max_points_per_decade=options.max_points_per_decade),
        progress=progress,
    )
    try:
        store = CurveStore(
            options.current_path,
            options.reference_path,
            current_label=options.current_label,
            reference_label=options.reference_label,
            interpolation=options.interpolation,
        )
    except SourceOpenError as e:
        logger.error(str(e))
        return 1

    with store:
        summary = ComparisonReportBuilder(store, config).build(options.output)

    logger.info(f"[OK] {summary.content_pages} cross-section pages written to {summary.output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    options = parse_args(argv)
    logging.basicConfig(level=getattr(logging, options.log_level), format=LOG_FORMAT)

    status = run(options)
    if status == 0:
        logger.info("Done!")
    return status


if __name__ == '__main__':
    sys.exit(main())
