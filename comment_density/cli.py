"""
comment_density/cli.py

Command-line entry point for the comment-density fixer.

Acts as the editor host for a single "fix function" command:
1. Load the C document and the cursor line
2. Resolve configuration (defaults < settings file < environment < flags)
3. Run CommentDensityAnalyzer on the function under the cursor
4. Show the report and, when comments are missing, write the edit batch
   back to the file atomically (or show it as a diff with --dry-run)
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from comment_density import CommentDensityAnalyzer, CommentDensityConfig, FixStatus
from comment_density.exceptions import InvalidConfigurationError, NoActiveContextError
from comment_density.utils import atomic_write, backup_file, read_document, unified_diff

console = Console()
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_IO_ERROR = 2


# --------- Logging ---------
def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    if quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


# --------- CLI Argument Parsing ---------
def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Raise the comment ratio of the C function under the cursor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report and fix the function containing line 42
  comment-density src/driver.c --line 42

  # Preview the inserted comments without touching the file
  comment-density src/driver.c --line 42 --dry-run

  # Stricter ratio, one tagged comment per missing line
  comment-density src/driver.c --line 42 --min-ratio 0.4 --insert-mode iterative
        """,
    )

    parser.add_argument("file", help="C source file to analyze")
    parser.add_argument(
        "-l", "--line", type=int, required=True,
        help="Cursor line, 1-based as shown in editors",
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--settings", default=None,
        help="JSON settings file (minCommentRatio, autoInsertCommentValue)",
    )
    config_group.add_argument(
        "--min-ratio", type=float, default=None,
        help="Minimum comment ratio in [0, 1) (default: 0.25)",
    )
    config_group.add_argument(
        "--comment-value", default=None,
        help="Placeholder comment text (max 60 characters)",
    )
    config_group.add_argument(
        "--policy", choices=["first_pass", "two_phase"], default=None,
        help="Line classification policy",
    )
    config_group.add_argument(
        "--insert-mode", choices=["single", "iterative"], default=None,
        help="One combined insertion or one tagged insertion per comment",
    )

    output_group = parser.add_argument_group("Output")
    output_group.add_argument("--dry-run", action="store_true", help="Do not modify the file")
    output_group.add_argument("--diff", action="store_true", help="Print the unified diff of the edit")
    output_group.add_argument("--json", action="store_true", help="Print the outcome as JSON")
    output_group.add_argument("--backup-dir", default=None, help="Copy the file here before writing")

    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    parser.add_argument("-D", "--debug", action="store_true", default=False)
    parser.add_argument("--quiet", action="store_true")

    return parser.parse_args(argv)


def build_config(args) -> CommentDensityConfig:
    """Resolve configuration: defaults < settings file < environment < flags."""
    if args.settings:
        base = CommentDensityConfig.from_settings_file(args.settings)
    else:
        base = CommentDensityConfig()
    config = CommentDensityConfig.from_env(base=base)
    config = config.merged(
        min_comment_ratio=args.min_ratio,
        auto_insert_comment_value=args.comment_value,
        classification_policy=args.policy,
        insertion_policy=args.insert_mode,
    )
    for warning in config.validate():
        logger.warning(f"Config: {warning}")
    return config


def print_outcome(outcome, file_path: str, dry_run: bool) -> None:
    if outcome.status == FixStatus.NO_CONTEXT:
        return
    if outcome.status == FixStatus.OUTSIDE_FUNCTION:
        console.print(f"[yellow]{escape(outcome.message)}[/yellow]")
        return
    if outcome.status.is_failure:
        console.print(f"[red]Error: {escape(outcome.message)}[/red]")
        return

    analysis = outcome.analysis
    console.print(
        f"[bold]{escape(analysis.function_name)}[/bold] "
        f"(lines {analysis.start_row + 1}-{analysis.end_row + 1})"
    )
    console.print(escape(outcome.message))

    if outcome.status == FixStatus.NOT_NEEDED:
        console.print(
            f"[green]✅ Comment ratio meets the minimum of "
            f"{analysis.min_comment_ratio * 100:.1f}%[/green]"
        )
    elif outcome.status == FixStatus.MALFORMED_BODY:
        console.print("[yellow]Could not find the function body; no comments inserted[/yellow]")
    elif dry_run:
        console.print(f"[cyan][Dry Run] Would insert {analysis.need_comment} comment line(s) into {escape(file_path)}[/cyan]")
    else:
        console.print(f"[green]Inserted {analysis.need_comment} comment line(s) into {escape(file_path)}[/green]")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.debug, args.quiet)

    try:
        config = build_config(args)
    except (InvalidConfigurationError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return EXIT_INVALID

    try:
        source = read_document(args.file)
    except NoActiveContextError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return EXIT_IO_ERROR

    analyzer = CommentDensityAnalyzer(config)
    outcome = analyzer.run(source, args.line - 1)

    if outcome.changed and not args.dry_run:
        try:
            if args.backup_dir:
                backup_file(args.file, args.backup_dir)
            atomic_write(args.file, outcome.new_text)
        except OSError as e:
            console.print(f"[red]Error: failed to write {escape(args.file)}: {escape(str(e))}[/red]")
            return EXIT_IO_ERROR

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
    elif not args.quiet:
        print_outcome(outcome, args.file, args.dry_run)

    if args.diff and outcome.changed:
        print(unified_diff(source, outcome.new_text, args.file), end="")

    if outcome.status.is_failure:
        return EXIT_INVALID
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
