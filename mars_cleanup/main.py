# mars_cleanup/main.py
from __future__ import annotations
import argparse
import logging
import random
import sys

from .sim.config import SIM, AGENT, FIELD, HOST
from .sim.models import InvalidConfiguration, RunParameters
from .sim.world import generate_points
from .sim.route import nearest_neighbor_order, route_length
from .sim.engine import simulate_run
from .ui.app import run_live
from .ui.csv_writer import RunCsvLogger
from .ui.export import export_json


def planned_length(params: RunParameters) -> float:
    points = generate_points(params.point_count, params.seed)
    order = nearest_neighbor_order(points)
    return route_length(points, order, start=(AGENT.entry_x, AGENT.entry_y))


def _print_progress(m) -> None:
    print(f"\r  collected={m.collected_count:4d} dist={m.total_distance:9.1f} "
          f"t={m.elapsed_seconds:6.2f}s", end="", flush=True)


def run(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Mars cleanup: greedy collection route with live metrics")
    parser.add_argument("--points", type=int, default=SIM.point_count)
    parser.add_argument("--speed", type=float, default=SIM.speed_factor)
    parser.add_argument("--seed", type=int, default=SIM.seed, help="first seed (default: random)")
    parser.add_argument("--runs", type=int, default=1, help="consecutive runs, seed incremented per run")
    parser.add_argument("--csv", type=str, default=SIM.track_csv, help="append run rows here ('' to disable)")
    parser.add_argument("--export", action="store_true", help="write each run record as JSON")
    parser.add_argument("--export-dir", type=str, default=SIM.export_dir)
    parser.add_argument("--live", action="store_true", help=f"pace ticks in real time at {HOST.fps} fps")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    seed = args.seed
    if seed is None:
        seed = random.randint(0, SIM.random_seed_max)
        print(f"[INFO] random seed={seed} (pass --seed {seed} to replay)")

    csv_log = RunCsvLogger(args.csv) if args.csv else None

    for i in range(max(args.runs, 1)):
        try:
            params = RunParameters(point_count=args.points, speed_factor=args.speed, seed=seed + i)
        except InvalidConfiguration as e:
            print(f"[ERROR] {e}", file=sys.stderr)
            return 2

        try:
            if args.live:
                record = run_live(params, on_poll=_print_progress)
                print()
            else:
                record = simulate_run(params)
        except KeyboardInterrupt:
            print("\n[INFO] interrupted")
            return 130

        m = record.metrics
        planned = planned_length(params)
        print(
            f"[OK] seed={params.seed:5d} | N={params.point_count:3d} "
            f"collected={m.collected_count:3d} steps={m.tick_events:3d} "
            f"dist={m.total_distance:9.1f} planned={planned:9.1f} "
            f"energy={m.energy_estimate:.4f} time={m.elapsed_seconds:.2f}s"
        )
        if csv_log is not None:
            csv_log.append_run(record, route_length=planned,
                              notes=f"field={FIELD.width:.0f}x{FIELD.height:.0f}")
        if args.export:
            print(f"[OK] Wrote {export_json(record, args.export_dir)}")

    return 0


if __name__ == "__main__":
    sys.exit(run())
