"""
fieldembed: command line entry point.

Usage:
  python -m field_embedder page-count document.pdf
  python -m field_embedder apply document.pdf fields.json -o signed.pdf [--strict]

``fields.json`` holds a list of ``{"id", "type", "value", "x", "y",
"width", "height", "page"}`` objects. Image values may be ``data:`` URLs
or ``@path/to/image.png``.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from field_embedder.exceptions.errors import EmbeddingError
from field_embedder.logic.batch_embedder import embed_fields
from field_embedder.logic.field_embedder import get_page_count
from field_embedder.models.embed_config import EmbedConfig
from field_embedder.models.field_enums import FieldType, PagePolicy
from field_embedder.models.image_blob import ImageBlob

logger = logging.getLogger("field_embedder")

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fieldembed", description=__doc__.strip().split("\n\n")[0])
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for info, -vv for debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    pc = sub.add_parser("page-count", help="print the number of pages")
    pc.add_argument("pdf", type=Path)

    ap = sub.add_parser("apply", help="embed filled-in fields into a PDF")
    ap.add_argument("pdf", type=Path)
    ap.add_argument("fields", type=Path, help="JSON list of field objects")
    ap.add_argument("-o", "--output", type=Path, required=True)
    ap.add_argument("--strict", action="store_true",
                    help="fail fields on missing pages instead of using page 1")
    ap.add_argument("--language", help="date language (id, en, de, nl)")
    return parser


def _resolve_image_refs(fields: List[dict], base_dir: Path) -> List[dict]:
    """Replace ``@file`` image values with the file's bytes."""
    resolved = []
    for item in fields:
        item = dict(item)
        value = item.get("value")
        try:
            is_image = FieldType(item.get("type")).is_image
        except ValueError:
            is_image = False
        if is_image and isinstance(value, str) and value.startswith("@"):
            path = Path(value[1:])
            if not path.is_absolute():
                path = base_dir / path
            item["value"] = ImageBlob.from_bytes(path.read_bytes())
        resolved.append(item)
    return resolved


def _apply(args: argparse.Namespace) -> int:
    config = EmbedConfig.from_settings()
    if args.strict:
        config = config.with_overrides(page_policy=PagePolicy.STRICT)
    if args.language:
        config = config.with_overrides(date_language=args.language)

    fields: Any = json.loads(args.fields.read_text(encoding="utf-8"))
    if not isinstance(fields, list):
        logger.error("%s must contain a JSON list of fields", args.fields)
        return EXIT_FATAL
    fields = _resolve_image_refs(fields, args.fields.resolve().parent)

    result = embed_fields(args.pdf.read_bytes(), fields, config)
    args.output.write_bytes(result.pdf_bytes)

    print(f"embedded={result.embedded_count} skipped={len(result.skipped)} "
          f"failed={result.failed_count} -> {args.output}")
    for failure in result.failures:
        print(f"  {failure.field_id}: {failure.error}", file=sys.stderr)
    return EXIT_OK if result.ok else EXIT_PARTIAL


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)-8s %(name)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        if args.command == "page-count":
            print(get_page_count(args.pdf.read_bytes()))
            return EXIT_OK
        return _apply(args)
    except (EmbeddingError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
