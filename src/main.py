# src/main.py — v3
"""CLI entry point: analyze, extract, probe, show, list, similar commands.

Usage:
    caselens analyze <file> [--prompt FILE] [--save] [--output-dir DIR]
    caselens extract <file>
    caselens probe
    caselens show <case_id>
    caselens list
    caselens similar <tier> [--limit N]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from caselens.version import __version__

if TYPE_CHECKING:
    from caselens.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        from caselens.config.settings import Settings

        settings = Settings()
        _setup_logging(settings, args.verbose)
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="caselens",
        description=f"caselens v{__version__}: legal case document analyzer",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- analyze ---
    p_analyze = subparsers.add_parser(
        "analyze", help="Analyze a single case document",
    )
    p_analyze.add_argument("file", type=Path, help="Path to document (.pdf, .docx, .txt)")
    p_analyze.add_argument(
        "--prompt", type=Path, default=None,
        help="System prompt template (default: packaged prompt or PROMPT_FILE)",
    )
    p_analyze.add_argument(
        "--save", action="store_true",
        help="Persist the record and look up similar cases",
    )
    p_analyze.add_argument(
        "--output-dir", type=Path, default=None,
        help="Directory for saved records (default: RECORDS_ROOT)",
    )
    p_analyze.set_defaults(func=_cmd_analyze)

    # --- extract ---
    p_extract = subparsers.add_parser(
        "extract", help="Extract text only, without calling the model",
    )
    p_extract.add_argument("file", type=Path, help="Path to document")
    p_extract.set_defaults(func=_cmd_extract)

    # --- probe ---
    p_probe = subparsers.add_parser(
        "probe", help="Report availability of the OCR command-line tools",
    )
    p_probe.set_defaults(func=_cmd_probe)

    # --- show ---
    p_show = subparsers.add_parser(
        "show", help="Print a stored analysis record",
    )
    p_show.add_argument("case_id", help="Case ID (CASE-...)")
    p_show.set_defaults(func=_cmd_show)

    # --- list ---
    p_list = subparsers.add_parser(
        "list", help="List the case IDs of stored analyses",
    )
    p_list.set_defaults(func=_cmd_list)

    # --- similar ---
    p_similar = subparsers.add_parser(
        "similar", help="List sample case files for a court tier",
    )
    p_similar.add_argument("tier", type=int, choices=[1, 2, 3, 4], help="Court tier")
    p_similar.add_argument(
        "--limit", type=int, default=None,
        help="Maximum files to list (default: SIMILAR_CASES_LIMIT)",
    )
    p_similar.set_defaults(func=_cmd_similar)

    return parser


async def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Execute single-document analysis."""
    from caselens.api.facade import analyze_and_store, analyze_case
    from caselens.pipeline.prompt_loader import load_system_prompt

    file_path: Path = args.file
    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        return 1

    if args.output_dir is not None:
        settings = settings.model_copy(update={"records_root": args.output_dir})
    prompt = load_system_prompt(args.prompt) if args.prompt else None

    logger.info("Analyzing %s", file_path.name)
    if args.save:
        response = await analyze_and_store(file_path, settings, system_prompt=prompt)
        _print_json(response.to_dict())
        if response.record_path is not None:
            logger.info("Record written to %s", response.record_path)
    else:
        record = await analyze_case(file_path, settings, system_prompt=prompt)
        _print_json(record.to_dict())
    return 0


async def _cmd_extract(args: argparse.Namespace, settings: Settings) -> int:
    """Extract and print document text."""
    from caselens.cache.cache_factory import create_extraction_cache
    from caselens.extraction.document_extractor import DocumentTextExtractor

    extractor = DocumentTextExtractor(
        settings=settings,
        cache=create_extraction_cache(settings),
    )
    result = await extractor.extract(args.file)
    print(result.text)
    logger.info(
        "source=%s characters=%d cached=%s",
        result.source, result.character_count, result.from_cache,
    )
    return 0 if not result.is_error else 2


async def _cmd_probe(args: argparse.Namespace, settings: Settings) -> int:
    """Print OCR tool availability."""
    from caselens.extraction.tool_probe import CommandToolProbe

    availability = CommandToolProbe().check_availability()
    _print_json(availability.model_dump())
    return 0 if availability.available else 1


async def _cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    """Print a stored record with its similar cases."""
    from caselens.api.facade import CaseNotFoundError, load_case

    try:
        response = await load_case(args.case_id, settings)
    except CaseNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    _print_json(response.to_dict())
    return 0


async def _cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    """Print stored case IDs, one per line."""
    from caselens.api.facade import list_cases

    for case_id in await list_cases(settings):
        print(case_id)
    return 0


async def _cmd_similar(args: argparse.Namespace, settings: Settings) -> int:
    """List sample case files for a tier."""
    from caselens.corpus.similar_cases import find_similar_cases

    limit = args.limit if args.limit is not None else settings.similar_cases_limit
    for path in find_similar_cases(args.tier, limit, settings.case_files_root):
        print(path)
    return 0


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from caselens.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
