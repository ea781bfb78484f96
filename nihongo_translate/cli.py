from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from nihongo_translate.config import AppConfig, load_config, state_path
from nihongo_translate.engine import translate_async
from nihongo_translate.languages import SUPPORTED_LANGUAGES
from nihongo_translate.models import TranslationFailure, TranslationResult
from nihongo_translate.rate_limit import RateLimiter
from nihongo_translate.storage import JsonFileStorage


def _format_result(result: TranslationResult) -> str:
    if isinstance(result, TranslationFailure):
        return f"error[{result.kind.value}]: {result.message}"
    return result.translation


def _format_languages() -> str:
    return "\n".join(
        f"{language.code}\t{language.name}" for language in SUPPORTED_LANGUAGES
    )


def _build_rate_limiter(config: AppConfig) -> RateLimiter:
    return RateLimiter(
        storage=JsonFileStorage(state_path()),
        max_requests=config.rate_limit.max_requests,
        window_ms=config.rate_limit.window_ms,
    )


def _build_parser(config: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate text through the MyMemory API."
    )
    parser.add_argument("text", nargs="*", help="Text to translate")
    parser.add_argument(
        "-s", "--source", default=config.languages.source, help="Source language code"
    )
    parser.add_argument(
        "-t", "--target", default=config.languages.target, help="Target language code"
    )
    parser.add_argument(
        "--list-languages", action="store_true", help="Print supported languages"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    config = load_config()
    args = _build_parser(config).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.list_languages:
        print(_format_languages())
        return 0
    text = " ".join(args.text)
    if not text.strip():
        print("Nothing to translate: pass some text.", file=sys.stderr)
        return 1
    result = asyncio.run(
        translate_async(
            text,
            args.source,
            args.target,
            rate_limiter=_build_rate_limiter(config),
            config=config,
        )
    )
    if isinstance(result, TranslationFailure):
        print(_format_result(result), file=sys.stderr)
        return 1
    print(_format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
