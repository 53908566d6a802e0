# mars_cleanup/sim/config.py
from dataclasses import dataclass

# ------------------------------------------------------------
# POINT FIELD / SPATIAL SETTINGS
# ------------------------------------------------------------
@dataclass(frozen=True)
class FieldConfig:
    width: float = 800.0
    height: float = 600.0   # host canvas height is capped at 600
    padding: float = 50.0

# ------------------------------------------------------------
# AGENT MOTION + COLLECTION
# ------------------------------------------------------------
@dataclass(frozen=True)
class AgentConfig:
    base_speed: float = 3.0     # units per tick at speed_factor 1.0
    trail_length: int = 30
    entry_x: float = 50.0       # top-left entry
    entry_y: float = 50.0
    # decay fields handed to the renderer
    spawn_alpha: float = 255.0
    spawn_scale: float = 1.0
    collect_alpha: float = 200.0
    collect_scale: float = 1.0

# ------------------------------------------------------------
# METRICS
# ------------------------------------------------------------
@dataclass(frozen=True)
class MetricsConfig:
    energy_factor: float = 0.0001   # energy units per distance unit

# ------------------------------------------------------------
# PARAMETER LIMITS (route heuristic is O(n^2))
# ------------------------------------------------------------
@dataclass(frozen=True)
class LimitsConfig:
    max_point_count: int = 500

# ------------------------------------------------------------
# HOST LOOP
# ------------------------------------------------------------
@dataclass(frozen=True)
class HostConfig:
    fps: int = 60
    poll_interval: float = 0.1     # seconds between metrics polls
    max_ticks: int = 1_000_000     # headless safety cap

# ------------------------------------------------------------
# CLI DEFAULTS
# ------------------------------------------------------------
@dataclass(frozen=False)
class SimConfig:
    point_count: int = 100
    speed_factor: float = 1.0
    seed: int | None = None        # None: draw a random seed per invocation
    random_seed_max: int = 9999
    track_csv: str | None = "runs/runs.csv"
    export_dir: str = "runs"

# ------------------------------------------------------------
# EXPORT SINGLETONS
# ------------------------------------------------------------
FIELD = FieldConfig()
AGENT = AgentConfig()
METRICS = MetricsConfig()
LIMITS = LimitsConfig()
HOST = HostConfig()
SIM = SimConfig()
