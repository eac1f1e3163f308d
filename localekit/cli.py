#!/usr/bin/env python3
"""
localekit - localization resource file toolkit

Commands:
    scan      - Coverage report per culture against a base culture
    diff      - Compare the keys of two files
    check     - Validate files against rules
    generate  - Create or update target-culture skeleton files
    convert   - Convert a file or directory to another format
    formats   - List supported formats

Every command prints a JSON document to stdout. Errors are printed as JSON
to stderr with exit status 1.

Example workflow:
    1. localekit scan ./locales --base en
       → Returns: missing/orphan/empty keys and coverage per culture

    2. localekit generate tr --input ./locales --output ./locales
       → Returns: one result per generated file

    3. localekit check ./locales --base en --ci
       → Exit status 1 when violations are found
"""

import argparse
import json
import os
import sys
from typing import Any, Optional

from . import __version__
from .config import Config, load_config
from .format_handlers import FormatRegistry
from .services import (
    CheckOptions,
    CheckService,
    ConvertOptions,
    ConvertService,
    DiffService,
    GenerateOptions,
    GenerateService,
    ScanOptions,
    ScanService,
)


def _split_list(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _pick(value: Any, default: Any) -> Any:
    """Command line value if given, else the config default."""
    return default if value is None else value


def _write_output(path: Optional[str], result: dict) -> None:
    if not path:
        return
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
        f.write("\n")


def cmd_scan(args, config: Config) -> dict:
    """Report coverage for each culture."""
    options = ScanOptions(
        base_culture=_pick(args.base, config.base_culture),
        target_cultures=_split_list(args.targets),
        recursive=_pick(args.recursive, config.recursive),
        ignore_patterns=_split_list(args.ignore) or list(config.ignore),
        check_placeholders=args.check_placeholders,
        placeholder_pattern=config.placeholder_pattern,
    )
    report = ScanService().scan(args.path, options)

    result = {
        "status": "ok",
        **report.to_dict(),
        "summary": (
            f"Scanned {report.files_scanned} file(s); "
            + (", ".join(f"{r.culture}: {r.coverage}%" for r in report.results) or "no target cultures found")
        ),
    }
    _write_output(args.output, result)
    return result


def cmd_diff(args, config: Config) -> dict:
    """Compare two files."""
    report = DiffService().diff(
        args.first,
        args.second,
        check_placeholders=args.check_placeholders,
        placeholder_pattern=config.placeholder_pattern,
    )
    result = {
        "status": "ok",
        **report.to_dict(),
        "summary": (
            f"{len(report.only_in_first)} key(s) only in first, "
            f"{len(report.only_in_second)} only in second, "
            f"{len(report.empty_in_second)} empty in second"
        ),
    }
    _write_output(args.output, result)
    return result


def cmd_check(args, config: Config) -> dict:
    """Validate files; in CI mode any violation fails the command."""
    options = CheckOptions(
        rules=_split_list(args.rules) or list(config.rules),
        base_culture=_pick(args.base, None),
        recursive=_pick(args.recursive, config.recursive),
        placeholder_pattern=config.placeholder_pattern,
    )
    report = CheckService().check(args.path, options)

    failed = args.ci and report.has_violations
    result = {
        "status": "failed" if failed else "ok",
        **report.to_dict(),
        "summary": (
            f"{report.violation_count} violation(s): "
            f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
        ),
    }
    _write_output(args.output, result)
    return result


def cmd_generate(args, config: Config) -> dict:
    """Generate skeleton files for a target culture."""
    options = GenerateOptions(
        base_culture=_pick(args.base, config.base_culture),
        target_culture=args.target,
        placeholder_pattern=_pick(args.placeholder, config.missing_placeholder),
        use_empty_value=args.use_empty,
        overwrite_existing=args.overwrite,
        recursive=_pick(args.recursive, config.recursive),
    )
    output = args.output or (args.input if os.path.isdir(args.input) else os.path.dirname(args.input) or ".")
    results = GenerateService().generate(args.input, output, options)

    failures = [r for r in results if not r.success]
    return {
        "status": "failed" if failures else "ok",
        "results": [r.to_dict() for r in results],
        "summary": (
            f"{len(results) - len(failures)} file(s) generated for {args.target}, "
            f"{len(failures)} failed"
        ),
    }


def cmd_convert(args, config: Config) -> dict:
    """Convert a file or every supported file in a directory."""
    options = ConvertOptions(
        to_format=args.to_format,
        from_format=args.from_format,
        force=args.force,
        recursive=_pick(args.recursive, config.recursive),
        culture=args.culture,
    )
    service = ConvertService()
    if os.path.isdir(args.source):
        results = service.convert_directory(args.source, args.destination, options)
    else:
        results = [service.convert(args.source, args.destination, options)]

    failures = [r for r in results if not r.success]
    return {
        "status": "failed" if failures else "ok",
        "results": [r.to_dict() for r in results],
        "summary": f"{len(results) - len(failures)} file(s) converted, {len(failures)} failed",
    }


def cmd_formats(args, config: Config) -> dict:
    """List supported formats."""
    formats = FormatRegistry.default().list_formats()
    return {
        "status": "ok",
        "formats": formats,
        "summary": f"{len(formats)} formats supported: {', '.join(f['id'] for f in formats)}",
    }


COMMANDS = {
    "scan": cmd_scan,
    "diff": cmd_diff,
    "check": cmd_check,
    "generate": cmd_generate,
    "convert": cmd_convert,
    "formats": cmd_formats,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localekit",
        description="localekit - localization resource file toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Coverage of every culture against English
  localekit scan ./locales --base en

  # Compare two files, even across formats
  localekit diff app.en.json app.tr.yaml

  # Validate in CI (exit status 1 on any violation)
  localekit check ./locales --base en --rules no-empty-values,no-orphan-keys --ci

  # Create Turkish skeletons next to the English files
  localekit generate tr --input ./locales --from en

  # Convert RESX to JSON
  localekit convert Resources.en.resx app.en.json --to json

Configuration:
  Defaults are read from .localekit.yml in the working directory, or from
  the file given with --config.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Config file (default: .localekit.yml if present)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # scan command
    scan_parser = subparsers.add_parser("scan", help="Coverage report per culture")
    scan_parser.add_argument("path", help="File or directory to scan")
    scan_parser.add_argument("--base", "-b", help="Base culture (default: en)")
    scan_parser.add_argument("--targets", "-t", help="Comma-separated target cultures (default: all found)")
    scan_parser.add_argument("--recursive", action=argparse.BooleanOptionalAction, default=None,
                             help="Scan subdirectories (default: yes)")
    scan_parser.add_argument("--output", "-o", help="Also write the JSON report to this file")
    scan_parser.add_argument("--ignore", help="Comma-separated glob patterns to skip")
    scan_parser.add_argument("--check-placeholders", action=argparse.BooleanOptionalAction, default=True,
                             help="Compare placeholders with the base culture (default: yes)")

    # diff command
    diff_parser = subparsers.add_parser("diff", help="Compare two files")
    diff_parser.add_argument("first", help="Reference file")
    diff_parser.add_argument("second", help="File compared against the reference")
    diff_parser.add_argument("--output", "-o", help="Also write the JSON report to this file")
    diff_parser.add_argument("--check-placeholders", action=argparse.BooleanOptionalAction, default=True,
                             help="Compare placeholders of shared keys (default: yes)")

    # check command
    check_parser = subparsers.add_parser("check", help="Validate files against rules")
    check_parser.add_argument("path", help="File or directory to check")
    check_parser.add_argument("--rules", "-r", help="Comma-separated rules (default: all)")
    check_parser.add_argument("--base", "-b", help="Base culture; enables cross-file rules")
    check_parser.add_argument("--ci", action="store_true", help="Exit with status 1 on any violation")
    check_parser.add_argument("--output", "-o", help="Also write the JSON report to this file")
    check_parser.add_argument("--recursive", action=argparse.BooleanOptionalAction, default=None,
                              help="Check subdirectories (default: yes)")

    # generate command
    generate_parser = subparsers.add_parser("generate", help="Create target-culture skeleton files")
    generate_parser.add_argument("target", help="Target culture (e.g. tr, de-DE)")
    generate_parser.add_argument("--input", "-i", default=".", help="Base file or directory (default: .)")
    generate_parser.add_argument("--output", "-o", help="Output directory (default: next to the input)")
    generate_parser.add_argument("--from", dest="base", help="Base culture (default: en)")
    generate_parser.add_argument("--placeholder", "-p",
                                 help="Value for missing keys; {0} is the base value (default: '@@MISSING@@ {0}')")
    generate_parser.add_argument("--use-empty", action="store_true", help="Use empty values for missing keys")
    generate_parser.add_argument("--overwrite", action="store_true", help="Rebuild existing target files")
    generate_parser.add_argument("--recursive", action=argparse.BooleanOptionalAction, default=None,
                                 help="Process subdirectories (default: yes)")

    # convert command
    convert_parser = subparsers.add_parser("convert", help="Convert between formats")
    convert_parser.add_argument("source", help="Source file or directory")
    convert_parser.add_argument("destination", help="Destination file or directory")
    convert_parser.add_argument("--to", dest="to_format", required=True, help="Target format id or extension")
    convert_parser.add_argument("--from", dest="from_format", help="Source format (default: by extension)")
    convert_parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing destinations")
    convert_parser.add_argument("--culture", "-c", help="Culture written to the destination")
    convert_parser.add_argument("--recursive", action=argparse.BooleanOptionalAction, default=None,
                                help="Convert subdirectories (default: yes)")

    # formats command
    subparsers.add_parser("formats", help="List supported formats")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
        config.logging.apply(verbose=args.verbose)
        result = COMMANDS[args.command](args, config)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        return 1

    return 0 if result.get("status") == "ok" else 1


if __name__ == "__main__":
    sys.exit(main())
