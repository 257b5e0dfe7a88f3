"""Run extraction + chunking for one or more files.

Usage:
  python run_ingest.py --file notes.txt --file archive.zip --max-tokens 512
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv

from chunking import ChunkingConfig
from extraction import ExtractionConfig
from ingestion import IngestionConfig, IngestionService, get_logger, setup_logging

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract and chunk uploaded documents.")
    parser.add_argument("--file", action="append", required=True, help="Path to an input file (repeatable)")
    parser.add_argument("--max-tokens", type=int, help="Maximum tokens per chunk")
    parser.add_argument("--model", help="Embedding model whose tokenizer measures chunks")
    parser.add_argument(
        "--archive-policy",
        choices=["all_or_nothing", "per_entry"],
        help="How unreadable archive entries are handled",
    )
    parser.add_argument("--owner", default="", help="Opaque owner key (tenant / session)")
    parser.add_argument("--out", help="Save chunking results below this directory")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv(Path(".env"))

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    config = IngestionConfig.from_env()
    chunking = config.chunking.model_dump()
    if args.max_tokens is not None:
        chunking["max_tokens_per_chunk"] = args.max_tokens
    if args.model:
        chunking["model_id"] = args.model
    config.chunking = ChunkingConfig(**chunking)
    if args.archive_policy:
        extraction = config.extraction.model_dump()
        extraction["archive_policy"] = args.archive_policy
        config.extraction = ExtractionConfig(**extraction)
    if args.out:
        config.data_dir = args.out
        config.save_results = True

    files: list[tuple[str, bytes]] = []
    for raw_path in args.file:
        path = Path(raw_path)
        if not path.is_file():
            raise SystemExit(f"File not found: {path}")
        files.append((path.name, path.read_bytes()))

    service = IngestionService(config)
    report = service.process_batch(files, owner_key=args.owner)
    logger.info(report.message)

    print(report.to_json())
    return 1 if report.has_failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
