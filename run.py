# run.py
from __future__ import annotations

import argparse
import logging

from tactician import Tactician
from tactician.config import DuelConfig
from tactician.models import LogEntry


def main() -> None:
    parser = argparse.ArgumentParser(description="Run an AI-vs-AI duel from a fighter catalog.")
    parser.add_argument("--catalog", default="data/catalogs/duel.json", help="Path to the fighter catalog JSON")
    parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic decisions and rolls")
    parser.add_argument("--p1", default=None, help="First fighter (default: first in catalog)")
    parser.add_argument("--p2", default=None, help="Second fighter (default: second in catalog)")
    parser.add_argument("--max-turns", type=int, default=DuelConfig.max_turns, help="Turn limit before a draw")
    parser.add_argument("--verbose", action="store_true", help="Debug logging and full decision traces")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    engine = Tactician(seed=args.seed)
    fighters = engine.load_catalog(args.catalog)

    names = list(fighters)
    p1 = args.p1 or names[0]
    p2 = args.p2 or (names[1] if len(names) > 1 else names[0])
    for n in (p1, p2):
        if n not in fighters:
            parser.error(f"unknown fighter {n!r} (catalog has: {', '.join(names)})")
    if p1 == p2:
        parser.error("pick two different fighters")

    def print_entry(e: LogEntry) -> None:
        if e.message:
            print(e.message, flush=True)

    result = engine.run_duel(fighters[p1], fighters[p2], max_turns=args.max_turns, on_entry=print_entry)

    if args.verbose:
        print("\nDecision traces:", flush=True)
        for t in result.traces:
            print(t.summary(), flush=True)


if __name__ == "__main__":
    main()
