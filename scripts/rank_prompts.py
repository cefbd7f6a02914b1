# Path: scripts/rank_prompts.py
# Purpose: Simple CLI to rank candidate prompts by visual similarity to a query prompt.
# Layer: scripts.
# Details: Generates all images concurrently, then prints candidates nearest first.

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


def main() -> None:
    """Execute a prompt ranking from the command line."""

    parser = argparse.ArgumentParser(description="Rank prompts by the visual distance of their generated images")
    parser.add_argument("--query", type=str, required=True, help="Reference prompt")
    parser.add_argument("--candidate", action="append", default=[], help="Candidate prompt (repeatable)")
    parser.add_argument("--k", type=int, default=None, help="Number of results to return")
    parser.add_argument("--backend", choices=sorted(BACKENDS), default=None, help="Generation backend to use")
    parser.add_argument("--workers", type=int, default=None, help="Number of concurrent generations")
    args = parser.parse_args()

    if not args.candidate:
        parser.error("at least one --candidate is required")

    settings = AppSettings.from_env()
    updates = {}
    if args.backend:
        updates["backend"] = args.backend
    if args.workers:
        updates["max_workers"] = args.workers
    if updates:
        settings = settings.model_copy(update=updates)
    configure_logging(settings.log_level)

    pipeline = PromptRankingPipeline.from_settings(settings, progress=True)
    results = pipeline.rank(args.query, args.candidate, k=args.k)

    for position, result in enumerate(results, start=1):
        distance = f"{result.distance:.4f}" if result.comparable else "n/a"
        print(f"{position}. distance={distance} prompt={result.prompt}")


if __name__ == "__main__":
    main()
