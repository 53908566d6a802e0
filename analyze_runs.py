#!/usr/bin/env python3
"""
Analyze the runs CSV produced by RunCsvLogger.

Features:
  - --session latest|<id> filters to a single invocation's runs
  - Saves a timestamped summary CSV (mean metrics per point count) under --outdir
  - Per-run plot:
      (1) Total distance vs planned route length
      (2) Energy estimate
      (3) Wall time
  - Scaling plot: mean distance per run against point count
Usage examples:
  python analyze_runs.py --runs runs/runs.csv --outdir reports --tag demo --session latest
"""
import argparse
import os
import sys
import time
import pandas as pd

# Use non-interactive backend for headless operation
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

NUMERIC_COLS = ("point_count", "speed_factor", "seed", "collected", "total_distance",
                "steps", "time_s", "energy", "mean_leg", "route_length")


# ------------------------- utilities -------------------------
def ensure_dir(p: str) -> None:
    os.makedirs(p, exist_ok=True)

def timestamp(tag: str | None = None) -> str:
    t = time.strftime("%Y%m%d_%H%M%S")
    return f"{t}__{tag}" if tag else t


# ------------------------- loading ---------------------------
def load_runs(path: str) -> pd.DataFrame:
    if not (path and os.path.exists(path)):
        print(
            "\n[ERROR] Runs CSV not found.\n"
            f"  Expected: {path}\n"
            "Hints:\n"
            "  • Run `python -m mars_cleanup.main` at least once.\n"
            "  • Check that --csv was not disabled.\n",
            file=sys.stderr
        )
        sys.exit(1)
    df = pd.read_csv(path)
    for col in NUMERIC_COLS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def latest_session_id(df: pd.DataFrame) -> str | None:
    """Return the last session_id in file order (used by --session latest)."""
    if "session_id" not in df.columns or len(df) == 0:
        return None
    s = df["session_id"].dropna()
    return s.iloc[-1] if len(s) else None


def filter_session(df: pd.DataFrame, session: str) -> pd.DataFrame:
    if not session:
        return df
    if "session_id" not in df.columns:
        print("[WARN] --session provided but CSV has no session_id; ignoring.")
        return df
    sid = latest_session_id(df) if session == "latest" else session
    if not sid:
        print("[WARN] Could not resolve latest session_id; analyzing all data.")
        return df
    print(f"[OK] Filtering analysis to session_id={sid}")
    return df[df["session_id"] == sid].copy()


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Mean metrics per point count."""
    keep = [c for c in ("total_distance", "route_length", "steps", "time_s", "energy", "mean_leg")
            if c in df.columns]
    if "point_count" not in df.columns or not keep:
        return pd.DataFrame()
    g = df.groupby("point_count", as_index=False)[keep].mean()
    g["runs"] = df.groupby("point_count").size().values
    return g.sort_values("point_count")


# ------------------------- plotting --------------------------
def plot_runs(df: pd.DataFrame, outdir: str, tag: str | None) -> str:
    ensure_dir(outdir)
    fig, ax = plt.subplots(3, 1, figsize=(10, 11), sharex=True)
    x = range(1, len(df) + 1)

    ax[0].plot(x, df["total_distance"], marker="o", label="Distance traveled", color="black")
    if "route_length" in df.columns and df["route_length"].notna().any():
        ax[0].plot(x, df["route_length"], linestyle="--", label="Planned route")
    ax[0].set_ylabel("Distance")
    ax[0].legend(loc="best")
    ax[0].grid(alpha=0.25)

    ax[1].plot(x, df["energy"], marker="o", color="tab:orange", label="Energy estimate")
    ax[1].set_ylabel("Energy")
    ax[1].legend(loc="best")
    ax[1].grid(alpha=0.25)

    ax[2].plot(x, df["time_s"], marker="o", color="tab:purple", label="Wall time")
    ax[2].set_xlabel("Run")
    ax[2].set_ylabel("Seconds")
    ax[2].legend(loc="best")
    ax[2].grid(alpha=0.25)

    fig.tight_layout()
    png = os.path.join(outdir, f"runs_{timestamp(tag)}.png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png


def plot_scaling(summary: pd.DataFrame, outdir: str, tag: str | None) -> str | None:
    if len(summary) < 2:
        print("[INFO] Fewer than two point counts; skipping scaling plot.")
        return None
    ensure_dir(outdir)
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(summary["point_count"], summary["total_distance"], marker="o", label="Mean distance")
    ax.set_xlabel("Point count")
    ax.set_ylabel("Distance")
    ax.legend(loc="best")
    ax.grid(alpha=0.25)
    fig.tight_layout()
    png = os.path.join(outdir, f"scaling_{timestamp(tag)}.png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png


def export_csv(df: pd.DataFrame, outdir: str, base: str, tag: str | None) -> str:
    ensure_dir(outdir)
    path = os.path.join(outdir, f"{base}_{timestamp(tag)}.csv")
    df.to_csv(path, index=False)
    print(f"[OK] Wrote {path}")
    return path


# ------------------------- main ------------------------------
def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--runs", type=str, default="runs/runs.csv",
                    help="Path to the runs CSV written by the CLI")
    ap.add_argument("--outdir", type=str, default="reports",
                    help="Output directory for plots and exported CSVs")
    ap.add_argument("--tag", type=str, default="",
                    help="Optional label to append to filenames")
    ap.add_argument("--session", type=str, default="",
                    help="Session ID to analyze; use 'latest' to pick the most recent session automatically.")
    args = ap.parse_args(argv)

    df = filter_session(load_runs(args.runs), args.session)
    print(f"[INFO] Runs after filter: {len(df)}")
    if len(df) == 0:
        print("[WARN] Nothing to analyze.")
        return

    tag = args.tag or None
    summary = summarize(df)
    export_csv(summary, args.outdir, base="runs_summary", tag=tag)
    plot_runs(df, args.outdir, tag)
    plot_scaling(summary, args.outdir, tag)

    print(f"\nDone. Outputs are in: {args.outdir}")

if __name__ == "__main__":
    main()
