# run_extract.py
import argparse
import asyncio
import json
import sys

import html2text

from core.config import settings
from core.exceptions import ExtractorException
from core.logging import setup_logging
from models.extraction import ExtractionResult
from services.extractor import ContentExtractor


def to_markdown(result: ExtractionResult) -> str:
    """Title as a heading followed by the content rendered with html2text."""
    handler = html2text.HTML2Text()
    handler.ignore_links = False
    handler.ignore_images = False
    handler.ignore_tables = False
    handler.body_width = 0

    parts = [f"# {result.title}", ""]
    if result.thumbnail_url:
        parts += [f"![thumbnail]({result.thumbnail_url})", ""]
    parts.append(handler.handle(result.content_html).strip())
    return "\n".join(parts) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract a blog post from a web page.")
    parser.add_argument("url", help="absolute http(s) URL of the page")
    parser.add_argument("--markdown", action="store_true", help="print Markdown instead of JSON")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="loguru log level")
    return parser


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    extractor = ContentExtractor()
    try:
        result = await extractor.extract(args.url)
    except ExtractorException as exc:
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        return 1

    if args.markdown:
        print(to_markdown(result), end="")
    else:
        print(json.dumps(result.to_response(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
