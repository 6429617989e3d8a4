"""Command line front end: ``tscatalog``.

Subcommands:
    lint    Validate catalogs (exit 1 on errors)
    stats   Completion statistics
    lookup  Translate one string the way the application would
    merge   Update a catalog from a freshly extracted template
    pseudo  Generate a pseudo-localized catalog
    format  Rewrite a catalog in lupdate's layout

Exit status: 0 success, 1 findings or failed operation, 2 usage or I/O error.

Python 3.13+.
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tscatalog.analysis import compute_statistics
from tscatalog.constants import DEFAULT_LOCALE, DEFAULT_PSEUDO_EXPANSION
from tscatalog.diagnostics import (
    DiagnosticFormatter,
    OutputFormat,
    TSCatalogError,
    TSLookupError,
    TSSyntaxError,
)
from tscatalog.enums import LocationStyle
from tscatalog.runtime import TSTranslator
from tscatalog.syntax import Catalog, parse, serialize
from tscatalog.tools import PseudoConfig, merge_catalogs, pseudolocalize
from tscatalog.validation import ALL_CHECKS, ValidationConfig, validate_catalog

__all__ = ["main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


class _InputError(Exception):
    """A file named on the command line cannot be read."""


def setup_logging(verbose: bool) -> None:
    """Route library logging to stderr; DEBUG with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="tscatalog",
        description="Lint, inspect and maintain Qt Linguist .ts translation catalogs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s lint ts/de.ts --source-prefix
  %(prog)s stats ts/de.ts --json
  %(prog)s lookup ts/de.ts NetworkPage "NetworkPage --- Split Tunnel"
  %(prog)s merge ts/de.ts template.ts -o ts/de.ts
  %(prog)s pseudo template.ts --language en_XA -o ts/en_XA.ts
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    lint = commands.add_parser("lint", help="Validate catalogs")
    lint.add_argument("files", nargs="+", type=Path, metavar="FILE")
    lint.add_argument("--locale", help="Locale for numerus checks (default: catalog language)")
    lint.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Report format",
    )
    lint.add_argument(
        "--source-prefix", action="store_true", help="Check the 'Context --- text' convention"
    )
    lint.add_argument("--obsolete", action="store_true", help="Report obsolete entries")
    lint.add_argument(
        "--disable",
        action="append",
        default=[],
        choices=sorted(ALL_CHECKS),
        metavar="CODE",
        help="Disable a check (repeatable)",
    )
    lint.add_argument(
        "--warnings-as-errors", action="store_true", help="Exit 1 when warnings are reported"
    )

    stats = commands.add_parser("stats", help="Completion statistics")
    stats.add_argument("file", type=Path, metavar="FILE")
    stats.add_argument("--json", action="store_true", help="Machine-readable output")

    lookup = commands.add_parser("lookup", help="Translate one string")
    lookup.add_argument("file", type=Path, metavar="FILE")
    lookup.add_argument("context")
    lookup.add_argument("source")
    lookup.add_argument("--comment", default=None, help="Disambiguation comment")
    lookup.add_argument("-n", type=int, default=None, help="Count for numerus messages")
    lookup.add_argument(
        "--arg", action="append", default=[], dest="args", help="Value for %%1, %%2, ..."
    )

    merge = commands.add_parser("merge", help="Update a catalog from a template")
    merge.add_argument("existing", type=Path, metavar="EXISTING")
    merge.add_argument("template", type=Path, metavar="TEMPLATE")
    merge.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    merge.add_argument("--no-obsolete", action="store_true", help="Drop unmatched messages")
    merge.add_argument("--no-fuzzy", action="store_true", help="Disable fuzzy reuse")
    merge.add_argument(
        "--no-same-text", action="store_true", help="Disable the same-text heuristic"
    )

    pseudo = commands.add_parser("pseudo", help="Generate a pseudo-localized catalog")
    pseudo.add_argument("file", type=Path, metavar="FILE")
    pseudo.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    pseudo.add_argument("--language", help="Language of the generated catalog")
    pseudo.add_argument(
        "--expansion",
        type=float,
        default=DEFAULT_PSEUDO_EXPANSION,
        help="Padding ratio (default: %(default)s)",
    )
    pseudo.add_argument(
        "--strip-prefix", action="store_true", help="Drop 'Context --- ' source prefixes"
    )

    fmt = commands.add_parser("format", help="Rewrite a catalog in lupdate layout")
    fmt.add_argument("file", type=Path, metavar="FILE")
    fmt.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    fmt.add_argument(
        "--locations",
        choices=[style.value for style in LocationStyle],
        default=LocationStyle.ABSOLUTE.value,
        help="Location style (default: %(default)s)",
    )

    return parser


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        msg = f"Cannot read {path}: {e.strerror or e}"
        raise _InputError(msg) from e


def _load(path: Path) -> Catalog:
    return parse(_read(path))


def _write(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        msg = f"Cannot write {output}: {e.strerror or e}"
        raise _InputError(msg) from e


def _cmd_lint(args: argparse.Namespace) -> int:
    config = ValidationConfig(source_prefix=args.source_prefix, obsolete=args.obsolete)
    if args.disable:
        config = config.without(*args.disable)
    formatter = DiagnosticFormatter(output_format=OutputFormat(args.format))

    failed = False
    for path in args.files:
        result = validate_catalog(_read(path), locale=args.locale, config=config)
        report = formatter.format_validation_result(result, file_name=str(path))
        if report:
            print(report)
        if not result.is_valid or (args.warnings_as_errors and result.warning_count):
            failed = True
    return EXIT_FINDINGS if failed else EXIT_OK


def _cmd_stats(args: argparse.Namespace) -> int:
    stats = compute_statistics(_load(args.file))
    if args.json:
        print(json.dumps(stats.as_dict(), indent=2, ensure_ascii=False))
        return EXIT_OK

    width = max((len(c.name) for c in stats.contexts), default=7)
    for context in stats.contexts:
        print(
            f"{context.name:<{width}}  {context.finished:>5}/{context.total:<5} "
            f"{context.completion:>7.1%}"
        )
    print(
        f"{'Total':<{width}}  {stats.finished:>5}/{stats.total:<5} {stats.completion:>7.1%}"
        f"  ({stats.unfinished} unfinished, {stats.empty} empty, {stats.obsolete} obsolete,"
        f" {stats.source_words} source words)"
    )
    return EXIT_OK


def _cmd_lookup(args: argparse.Namespace) -> int:
    catalog = _load(args.file)
    translator = TSTranslator(catalog.language or DEFAULT_LOCALE)
    translator.add_catalog(catalog, source_path=str(args.file))
    text, errors = translator.translate(
        args.context, args.source, args.comment, n=args.n, args=args.args
    )
    print(text)
    for error in errors:
        print(f"{type(error).__name__}: {error}", file=sys.stderr)
    return EXIT_FINDINGS if any(isinstance(e, TSLookupError) for e in errors) else EXIT_OK


def _cmd_merge(args: argparse.Namespace) -> int:
    result = merge_catalogs(
        _load(args.existing),
        _load(args.template),
        keep_obsolete=not args.no_obsolete,
        fuzzy=not args.no_fuzzy,
        same_text=not args.no_same_text,
    )
    _write(serialize(result.catalog), args.output)
    print(result.summary(), file=sys.stderr)
    return EXIT_OK


def _cmd_pseudo(args: argparse.Namespace) -> int:
    config = PseudoConfig(expansion=args.expansion, strip_source_prefix=args.strip_prefix)
    catalog = pseudolocalize(_load(args.file), config=config, language=args.language)
    _write(serialize(catalog), args.output)
    return EXIT_OK


def _cmd_format(args: argparse.Namespace) -> int:
    catalog = _load(args.file)
    _write(serialize(catalog, location_style=LocationStyle(args.locations)), args.output)
    return EXIT_OK


_COMMANDS = {
    "lint": _cmd_lint,
    "stats": _cmd_stats,
    "lookup": _cmd_lookup,
    "merge": _cmd_merge,
    "pseudo": _cmd_pseudo,
    "format": _cmd_format,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Exit status
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return _COMMANDS[args.command](args)
    except _InputError as e:
        print(f"tscatalog: {e}", file=sys.stderr)
        return EXIT_USAGE
    except TSSyntaxError as e:
        print(f"tscatalog: {e}", file=sys.stderr)
        return EXIT_FINDINGS
    except (TSCatalogError, ValueError) as e:
        print(f"tscatalog: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
