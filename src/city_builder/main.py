"""
City Builder — Entry Point

Creates a city session, starts the tick clock, and runs the grid view.
With --headless N the view is skipped: N ticks run back to back and
the city report is printed.
"""

import argparse

from city_builder.config import GRID_SIZE, START_MONEY, RANDOM_SEED, ZONE_POLICY
from city_builder.engine.loop import CityEngine
from city_builder.tools.city_report import CityReport


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Grid-based city-building simulation")
    parser.add_argument("--size", type=int, default=GRID_SIZE, help="Tiles per side")
    parser.add_argument("--money", type=int, default=START_MONEY, help="Starting funds")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="Random seed")
    parser.add_argument("--zone-policy", default=ZONE_POLICY,
                        choices=["manual", "growth", "instant"],
                        help="How zoned lots fill in with buildings")
    parser.add_argument("--headless", type=int, metavar="TICKS", default=0,
                        help="Run TICKS ticks without a window and print a report")
    return parser.parse_args(argv)


def run_headless(engine: CityEngine, ticks: int) -> str:
    for _ in range(ticks):
        engine.tick()
    return CityReport(engine).dump_all()


def main(argv=None):
    args = parse_args(argv)

    print("=" * 50)
    print("  CITY BUILDER")
    print("=" * 50)
    print()

    engine = CityEngine(size=args.size, money=args.money, seed=args.seed,
                        zone_policy=args.zone_policy)

    if args.headless:
        print(run_headless(engine, args.headless))
        engine.shutdown()
        return

    from city_builder.gui.renderer import Renderer

    print("Controls: Click=Build, U=Upgrade hovered tile, SPACE=Pause, ESC=Quit")
    print()

    renderer = Renderer(engine)
    engine.start()
    try:
        renderer.run()
    except KeyboardInterrupt:
        print("\n[MAIN] Interrupted.")
    finally:
        engine.shutdown()
        print(CityReport(engine).dump_all())


if __name__ == "__main__":
    main()
