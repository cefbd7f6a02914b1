# Path: scripts/describe_prompt.py
# Purpose: CLI tool to generate an image for one prompt and print its descriptors.
# Layer: scripts.
# Details: Demonstrates wiring settings, a generation backend, and the prompt descriptor together.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.generation.factory import BACKENDS
from core.search.pipeline import PromptRankingPipeline


def main() -> int:
    """Describe a single prompt from the command line."""

    parser = argparse.ArgumentParser(description="Generate an image for a prompt and print its visual descriptors")
    parser.add_argument("--prompt", type=str, required=True, help="Prompt to generate an image for")
    parser.add_argument("--backend", choices=sorted(BACKENDS), default=None, help="Generation backend to use")
    parser.add_argument("--save", type=Path, default=None, help="Optional path to save the generated image")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    if args.backend:
        settings = settings.model_copy(update={"backend": args.backend})
    configure_logging(settings.log_level)

    pipeline = PromptRankingPipeline.from_settings(settings)
    descriptor = pipeline.describe(args.prompt)
    print(descriptor.describe())

    image = descriptor.get_generated_image()
    if image is None:
        return 1
    if args.save is not None:
        image.save(args.save)
        print(f"Saved generated image to {args.save}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
