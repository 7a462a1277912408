"""Scripted match against the in-memory host.

Usage:
    python examples/scripted_match.py                 # 200 ticks, summary only
    python examples/scripted_match.py --ticks 500 -v  # debug logging
    python examples/scripted_match.py --overlay       # print the diagnostic overlay
    python examples/scripted_match.py --per-tick      # print each tick's assignment
"""

from __future__ import annotations

import argparse
import logging
import sys

from strategizer import LocalHost, Strategizer, StrategizerSettings, UnitTypes
from strategizer.core.manager import ManagerKey


def create_host(workers: int, fields: int, minerals: int) -> LocalHost:
    """Standard opening: one command center, a worker line, a mineral line."""
    host = LocalHost(minerals=minerals)
    host.spawn(UnitTypes.TERRAN_COMMAND_CENTER, (0.0, 0.0))
    for i in range(workers):
        host.spawn(UnitTypes.TERRAN_SCV, (1.0 + i, 0.0))
    for i in range(fields):
        host.add_resource((8.0, float(i)))
    return host


def run(
    strategizer: Strategizer, host: LocalHost, ticks: int, overlay: bool, per_tick: bool
) -> None:
    for _ in range(ticks):
        strategizer.advance()
        if per_tick:
            managers = strategizer.snapshot()["managers"]
            sizes = " ".join(f"{name}={len(ids)}" for name, ids in managers.items())
            print(f"Tick {strategizer.tick}: {sizes}")
        if overlay:
            print(f"--- Frame {host.frame} ---")
            for _x, _y, text in host.overlay:
                print(f"  {text}")
        host.step()


def summarize(strategizer: Strategizer, host: LocalHost) -> None:
    counts: dict[str, int] = {}
    for unit in host.units():
        counts[unit.unit_type.name] = counts.get(unit.unit_type.name, 0) + 1

    print(f"\nAfter {strategizer.tick} ticks:")
    print(f"  minerals={host.minerals()} gathered={host.gathered_minerals()}")
    print(f"  supply={host.supply_used()}/{host.supply_total()}")
    for name, count in sorted(counts.items()):
        print(f"  {name}: {count}")
    for key in ManagerKey:
        print(f"  {strategizer.manager(key)!r}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="scripted-match",
        description="Run the strategizer against a scripted in-memory match",
    )
    parser.add_argument("--ticks", type=int, default=200, help="Ticks to run")
    parser.add_argument("--workers", type=int, default=4, help="Starting workers")
    parser.add_argument("--fields", type=int, default=8, help="Mineral fields")
    parser.add_argument("--minerals", type=int, default=50, help="Starting minerals")
    parser.add_argument("--per-tick", action="store_true", help="Print each tick's assignment")
    parser.add_argument("--overlay", action="store_true", help="Print the diagnostic overlay")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    host = create_host(args.workers, args.fields, args.minerals)
    settings = StrategizerSettings(draw_diagnostics=args.overlay)
    strategizer = Strategizer(host, settings, sink=host)

    strategizer.on_match_start()
    run(strategizer, host, args.ticks, args.overlay, args.per_tick)
    summarize(strategizer, host)
    strategizer.on_match_end()

    return 0


if __name__ == "__main__":
    sys.exit(main())
