#!/usr/bin/env python3
"""Smoke-test the configured AI providers against their live APIs.

Usage:
    python tooling/scripts/check_ai_providers.py --skip-speech

Registers every built-in provider from the environment's settings and runs
one cheap call per provider:
  * OpenAI: catalog analysis of a single sample product.
  * Gemini: hero banner copy for the same product.
  * ElevenLabs: voice listing, then a short speech sample with the first voice.

Exits non-zero when any selected check fails.
"""

# meta: script: ai-provider-check

from __future__ import annotations

import argparse
import asyncio
import sys
from decimal import Decimal
from pathlib import Path
from typing import Awaitable, Callable, Dict

from loguru import logger


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ThriftySouq AI provider checker")
    parser.add_argument(
        "--skip-conversational",
        action="store_true",
        help="Skip the OpenAI and Gemini checks.",
    )
    parser.add_argument(
        "--skip-tts",
        action="store_true",
        help="Skip the ElevenLabs checks.",
    )
    parser.add_argument(
        "--skip-speech",
        action="store_true",
        help="List voices but do not synthesize audio (saves character quota).",
    )
    parser.add_argument(
        "--text",
        default="Hello, this is a test.",
        help="Text to synthesize for the speech check.",
    )
    return parser.parse_args()


async def _check(name: str, probe: Callable[[], Awaitable[str]]) -> bool:
    try:
        detail = await probe()
    except Exception as exc:
        logger.error("Provider check failed", check=name, error=str(exc))
        return False
    logger.success("Provider check passed", check=name, detail=detail)
    return True


async def _run(args: argparse.Namespace) -> Dict[str, bool]:
    src_path = Path(__file__).resolve().parents[2] / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))

    from souq_api.core.settings import settings  # type: ignore import-position
    from souq_api.schemas.marketing import ProductSnapshot  # type: ignore import-position
    from souq_api.services.ai.bootstrap import build_provider_registry  # type: ignore import-position

    registry = build_provider_registry(settings)
    sample = ProductSnapshot(
        id=1,
        name="Test Product",
        brand="Test Brand",
        category="Watches",
        original_price=Decimal("200.00"),
        discounted_price=Decimal("100.00"),
        discount=50,
        stock=10,
    )
    results: Dict[str, bool] = {}

    if not args.skip_conversational:
        openai = registry.get_conversational_provider("openai")
        gemini = registry.get_conversational_provider("gemini")

        async def _openai_analysis() -> str:
            analysis = await openai.analyze_products([sample])
            return f"luxury score {analysis.luxury_score}"

        async def _gemini_banner() -> str:
            banner = await gemini.generate_hero_banner([sample])
            return f"{banner.main_title} {banner.highlight_title}"

        results["openai.analyze_products"] = await _check("openai.analyze_products", _openai_analysis)
        results["gemini.generate_hero_banner"] = await _check("gemini.generate_hero_banner", _gemini_banner)

    if not args.skip_tts:
        tts = registry.get_tts_provider("elevenlabs")
        voices = []

        async def _voices() -> str:
            voices.extend(await tts.get_voices())
            return f"{len(voices)} voices"

        results["elevenlabs.get_voices"] = await _check("elevenlabs.get_voices", _voices)

        if not args.skip_speech and voices:

            async def _speech() -> str:
                audio = await tts.generate_speech(args.text, voices[0]["id"])
                return f"{len(audio)} bytes"

            results["elevenlabs.generate_speech"] = await _check("elevenlabs.generate_speech", _speech)

    return results


def main() -> int:
    args = parse_args()
    results = asyncio.run(_run(args))
    failed = sorted(name for name, passed in results.items() if not passed)
    if failed:
        logger.error("AI provider verification failed", failed=failed)
        return 1
    logger.success("AI provider verification complete", checks=len(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
