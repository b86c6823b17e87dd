import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from app.backend.process import (
    OUTPUT_SUFFIX,
    collect_source_paths,
    process_extract,
    process_rewrite,
    process_separate,
    write_json_output,
    write_outputs,
)
from emlkit.config import get_settings
from emlkit.ir import ExtractMode
from emlkit.logger import set_level
from emlkit.placeholders import parse_assignments
from emlkit.profile_loader import load_rewrite_plan


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract content from, separate, or rewrite headers of .eml files."
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Directory for output files and the JSON report.",
    )
    parser.add_argument(
        "--report-name",
        default=None,
        help="Report filename (default: report_<timestamp>.json).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Extract text, HTML, headers, source or parts.")
    extract.add_argument("inputs", nargs="+", help="Input files or directories.")
    extract.add_argument(
        "--mode",
        choices=[m.value for m in ExtractMode],
        default=ExtractMode.PLAIN_TEXT.value,
        help="What to extract (default: text).",
    )

    rewrite = sub.add_parser("rewrite", help="Rewrite headers with a profile.")
    rewrite.add_argument("inputs", nargs="+", help="Input files or directories.")
    rewrite.add_argument(
        "--profile",
        default=None,
        help="YAML rewrite profile (default: EMLKIT_DEFAULT_PROFILE or built-in plan).",
    )
    rewrite.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="TOKEN=VALUE",
        help="Resolve a placeholder token after rewriting; repeatable.",
    )

    separate = sub.add_parser("separate", help="Split into header / text / HTML and rebuild.")
    separate.add_argument("inputs", nargs="+", help="Input files or directories.")
    separate.add_argument("--no-header", action="store_true", help="Drop the header block.")
    separate.add_argument("--no-text", action="store_true", help="Drop the plain text part.")
    separate.add_argument("--no-html", action="store_true", help="Drop the HTML part.")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    set_level(logging.DEBUG if args.verbose else get_settings().LOG_LEVEL)

    file_paths = collect_source_paths(args.inputs)
    if not file_paths:
        print("[error] no valid input files found.")
        return 1

    if args.command == "extract":
        mode = ExtractMode(args.mode)
        results = process_extract(file_paths, mode)
        suffix = OUTPUT_SUFFIX[mode]
    elif args.command == "rewrite":
        plan = load_rewrite_plan(args.profile or get_settings().DEFAULT_PROFILE)
        values = parse_assignments(args.assignments)
        results = process_rewrite(file_paths, plan, values)
        suffix = ".eml"
    else:
        results = process_separate(
            file_paths,
            keep_header=not args.no_header,
            keep_plain_text=not args.no_text,
            keep_html=not args.no_html,
        )
        suffix = ".eml"

    written = write_outputs(results, args.output_dir, suffix=suffix)
    json_path = write_json_output(results, args.output_dir, output_filename=args.report_name)

    print("Report:", json_path)
    for path in written:
        print("Output:", path)
    for entry in results:
        if entry["status"] == "error":
            print(f"[error] {entry['filename']}: {entry['error']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
