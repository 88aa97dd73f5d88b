"""CLI entry point for the dataset quality analysis engine."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dataquality.config import COLUMN_SAMPLE_SIZE, INFERENCE_SAMPLE_SIZE


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:] when None).

    Returns:
        Parsed namespace with data_file, output_dir, json, sample_size,
        inference_sample_size and verbose.
    """
    parser = argparse.ArgumentParser(
        description="Dataset quality analysis: infer column types, find missing, "
        "duplicate, outlier and malformed values, and score the dataset.",
    )
    parser.add_argument(
        "data_file",
        help="Path to the CSV, JSON or XLSX file to analyze.",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Write a Markdown report (report.md) into this directory.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full analysis, metrics and ranked issues as JSON.",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=COLUMN_SAMPLE_SIZE,
        help=f"Non-missing values per column used for type inference (default: {COLUMN_SAMPLE_SIZE}).",
    )
    parser.add_argument(
        "--inference-sample-size",
        type=int,
        default=INFERENCE_SAMPLE_SIZE,
        help=f"Upper bound on values examined by type inference (default: {INFERENCE_SAMPLE_SIZE}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def _print_summary(analysis, metrics, ranked, stream=None) -> None:
    stream = stream or sys.stdout
    print(
        f"Rows: {analysis.row_count} | Columns: {analysis.column_count}",
        file=stream,
    )
    print(
        f"Quality score: {metrics.composite_score}/100 ({metrics.score_level.value})",
        file=stream,
    )
    print(
        f"  completeness={metrics.completeness} consistency={metrics.consistency} "
        f"accuracy={metrics.accuracy}",
        file=stream,
    )
    print(metrics.summary, file=stream)
    for item in ranked:
        col = item.column
        print(
            f"  - {col.column_name} ({col.data_type.value}): {item.issue_count} issue type(s) "
            f"[missing={col.missing_count} duplicates={col.duplicate_count} "
            f"outliers={col.outliers_count} format={col.format_issues_count}]",
            file=stream,
        )


def main(argv: list[str] | None = None) -> None:
    """Load a data file, analyze it and report its quality.

    Args:
        argv: Optional argument list for testing; uses sys.argv when None.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Validate that the file exists early, before heavy imports.
    if not os.path.isfile(args.data_file):
        print(f"Error: file not found — {args.data_file}", file=sys.stderr)
        sys.exit(1)

    try:
        from dataquality.config import AnalysisConfig
        from dataquality.loader import load_dataset
        from dataquality.report_generator import generate_report
        from dataquality.tools.inspection import analyze_dataset
        from dataquality.tools.ranking import get_column_issues
        from dataquality.tools.scoring import calculate_quality_metrics

        config = AnalysisConfig(
            column_sample_size=args.sample_size,
            inference_sample_size=args.inference_sample_size,
        )

        # 1. Load the file into rows
        loaded = load_dataset(args.data_file)
        if loaded["error"]:
            print(f"Error: {loaded['error']}", file=sys.stderr)
            sys.exit(1)

        # 2. Analyze and score
        analysis = analyze_dataset(loaded["rows"], config)
        metrics = calculate_quality_metrics(analysis)
        ranked = get_column_issues(analysis)

        # 3. Report
        if args.json:
            payload = {
                "analysis": analysis.to_dict(),
                "metrics": metrics.to_dict(),
                "issues": [item.to_dict() for item in ranked],
            }
            print(json.dumps(payload, indent=2, default=str))
        else:
            _print_summary(analysis, metrics, ranked)

        if args.output_dir:
            file_name = os.path.basename(args.data_file)
            report_path = generate_report(analysis, metrics, args.output_dir, file_name)
            print(f"Report saved to: {report_path}", file=sys.stderr)

    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)
    except (ValueError, OSError) as exc:
        # MalformedRowError and invalid configuration are ValueErrors
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
