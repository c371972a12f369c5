#!/usr/bin/env python3
"""
HTML Review Diff Tool
Main entry point for the application.
"""

import argparse
import logging
import sys

from diffcore.inline_diff import GRANULARITIES
from diffcore.nodes import Decision, summarize
from diffcore.resolver import decide_all, resolve, review_stats
from diffcore.tree_differ import diff_html
from reporting.report_builder import ReportBuilder
from utils.file_utils import read_file_content
from utils.sample_documents import SAMPLES

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare two HTML fragments block by block.")
    parser.add_argument('original', nargs='?', help="Original HTML file")
    parser.add_argument('modified', nargs='?', help="Modified HTML file")
    parser.add_argument('--sample', choices=sorted(SAMPLES), help="Use a bundled sample pair")
    parser.add_argument('--granularity', choices=sorted(GRANULARITIES), default='word')
    decision = parser.add_mutually_exclusive_group()
    decision.add_argument('--accept-all', action='store_true', help="Accept every change")
    decision.add_argument('--reject-all', action='store_true', help="Reject every change")
    parser.add_argument('--json', dest='json_path', help="Write a JSON report to this path")
    parser.add_argument('--html', dest='html_path', help="Write an HTML report to this path")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    """Main execution function."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.sample:
        sample = SAMPLES[args.sample]
        original, modified = sample.original, sample.modified
    elif args.original and args.modified:
        original = read_file_content(args.original)
        modified = read_file_content(args.modified)
    else:
        parser.error("either --sample or both ORIGINAL and MODIFIED are required")

    tree = diff_html(original, modified, granularity=args.granularity)
    if tree is None:
        print("Nothing to diff: a document has no content.")
        return 1

    decisions = {}
    if args.accept_all:
        decisions = decide_all(tree, Decision.ACCEPT)
    elif args.reject_all:
        decisions = decide_all(tree, Decision.REJECT)

    summary = summarize(tree)
    stats = review_stats(tree, decisions)
    print("HTML Review Diff")
    print("================")
    print(' '.join(f"{key}={summary[key]}" for key in ('unchanged', 'added', 'removed', 'changed', 'total')))
    print(f"changes: {stats['total']} (accepted {stats['accepted']}, "
          f"rejected {stats['rejected']}, undecided {stats['undecided']})")
    print()
    print(resolve(tree, decisions))

    if args.json_path or args.html_path:
        builder = ReportBuilder()
        if args.json_path:
            builder.generate_json_report(args.json_path, tree, decisions)
        if args.html_path:
            builder.generate_html_report(args.html_path, tree, decisions)
    return 0


if __name__ == "__main__":
    sys.exit(main())
