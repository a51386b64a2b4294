"""
Training settings constants for the session, the batch run (run_all.py) and the web API.
Edit this file to change the waypoint network, default route, aircraft performance and wind model.
"""

from typing import Dict, List, Tuple

# ---------------------------------------------------------------------------
# Chart
# ---------------------------------------------------------------------------

# Magnetic variation in degrees (8 W): true = magnetic - variation
MAGNETIC_VARIATION = 8

# Chart height in nautical miles; nm_to_pixels = chart height (px) / MAP_HEIGHT_NM
MAP_HEIGHT_NM = 155
CHART_WIDTH_PX = 800
CHART_HEIGHT_PX = 775

# ---------------------------------------------------------------------------
# Waypoint network
# ---------------------------------------------------------------------------

# id -> (name, full name, type, frequency, channel, lat, lon, operative, {to_id: (mc, distance_nm)})
# Types "VOR-DME" / "VORTAC" give bearing and distance; "FIX" gives bearing only.
NAVAIDS: Dict[str, Tuple] = {
    "KWA": ("GWANGJU", "Gwangju VOR-DME", "VOR-DME", "114.40", "91X", 35.1267, 126.8089, True,
            {"TGU": (72, 96.3), "CJU": (193, 104.7), "PSN": (98, 107.6), "SOT": (13, 118.4)}),
    "TGU": ("DAEGU", "Dalsung VORTAC", "VORTAC", "112.20", "59X", 35.8947, 128.6586, True,
            {"KPO": (86, 44.2), "PSN": (163, 45.8), "KWA": (254, 96.3), "KUZ": (283, 96.7), "SOT": (325, 107.8)}),
    "CJU": ("JEJU", "Jeju VORTAC", "VORTAC", "116.10", "108X", 33.3894, 126.63, True,
            {"KWA": (13, 104.7), "PSN": (55, 157.4)}),
    "PSN": ("BUSAN", "Busan VORTAC", "VORTAC", "114.00", "82X", 35.1796, 129.0756, True,
            {"KWA": (278, 107.6), "TGU": (342, 45.8), "CJU": (235, 157.4), "KPO": (32, 56.2)}),
    "KPO": ("POHANG", "Pohang VORTAC", "VORTAC", "112.50", "72X", 35.9775, 129.474, True,
            {"PSN": (213, 56.2), "TGU": (265, 44.2), "CUN": (313, 68.2), "PILIT": (2, 88.2)}),
    "KUZ": ("KUNSAN", "Kunsan VORTAC", "VORTAC", "112.80", "75X", 35.9104, 126.611, True,
            {"TGU": (100, 96.7)}),
    "KAE": ("GANGWON", "Gangwon VORTAC", "VORTAC", "115.60", "103X", 37.7006, 128.754, True,
            {"PILIT": (130, 30.0), "SEL": (268, 88.8)}),
    "SEL": ("ANYANG", "Anyang VORTAC", "VORTAC", "115.50", "98X", 37.4139, 126.929, True,
            {"KAE": (86, 88.8), "SOT": (173, 19.8), "CUN": (133, 81.8)}),
    "SOT": ("SONGTAN", "Songtan VORTAC", "VORTAC", "116.9", "116X", 37.094444, 127.031667, True,
            {"TGU": (143, 107.8), "KWA": (193, 118.4), "SEL": (353, 19.8)}),
    "CUN": ("YECHEON", "Yecheon VOR-DME", "VOR-DME", "114.8", "95X", 36.631944, 128.325278, True,
            {"KPO": (133, 68.2), "SEL": (313, 81.8)}),
    "PILIT": ("PILIT", "PILIT", "FIX", None, None, 37.442, 129.292, True,
              {"KPO": (182, 88.2), "KAE": (310, 30.0)}),
}

# ---------------------------------------------------------------------------
# Default training route
# ---------------------------------------------------------------------------

DEFAULT_ROUTE: List[str] = ["KWA", "TGU", "PSN", "KWA"]

# Published legs of the default route: (from, to, magnetic course, distance_nm)
DEFAULT_ROUTE_LEGS: List[Tuple[str, str, int, float]] = [
    ("KWA", "TGU", 72, 97),
    ("TGU", "PSN", 162, 45),
    ("PSN", "KWA", 277, 111),
]

# Stations simulated out of service on the default route. PSN is off deliberately
# and cannot be tuned in default mode; remove it to make PSN tunable.
DEFAULT_OPERATIVE_OVERRIDES: Dict[str, bool] = {"PSN": False}

# Custom routes: at most this many legs
MAX_CUSTOM_LEGS = 10

# ---------------------------------------------------------------------------
# Aircraft performance
# ---------------------------------------------------------------------------

AIRCRAFT_DEFAULT_TAS = 240        # knots
AIRCRAFT_TURN_RATE_DEGS = 3.0     # degrees per second (2 min for 360)
AIRCRAFT_ACCEL_TIME_S = 10.0      # seconds to complete a TAS change
AIRCRAFT_RESPONSE_DELAY_S = 5.0   # seconds before a heading/TAS command takes effect
AIRCRAFT_HISTORY_MAX = 3600       # position samples (1 per second, ~1 hour)
AIRCRAFT_HISTORY_INTERVAL_S = 1.0

# Spawn: distance band from the first waypoint (NM) and course/heading spread (+/- deg)
SPAWN_MIN_NM = 2.0
SPAWN_MAX_NM = 4.0
SPAWN_SPREAD_DEG = 30.0

# ---------------------------------------------------------------------------
# Wind model
# ---------------------------------------------------------------------------

WIND_SEED_DIR_SPREAD = 40.0        # actual direction = plan +/- this at start
WIND_SEED_SPD_SPREAD = 10.0        # actual speed = plan +/- this at start
WIND_FLUCTUATION_INTERVAL_S = 3.0
WIND_FLUCTUATION_DIR = 5           # integer degrees around base
WIND_FLUCTUATION_SPD = 5           # integer knots around base
WIND_MIN_SPD = 20
WIND_MAX_SPD = 70

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

MAX_TICK_S = 0.1

# ---------------------------------------------------------------------------
# Headless runs (run_all.py / validation)
# ---------------------------------------------------------------------------

PLAN_WIND_DIR = 270
PLAN_WIND_SPD = 30
AUTOPILOT_UPDATE_S = 10.0
AUTOPILOT_CAPTURE_NM = 2.0
AUTOPILOT_TICK_S = 0.1
AUTOPILOT_MAX_TIME_S = 4 * 3600.0
MONTE_CARLO_NUM_SEEDS = 10
MONTE_CARLO_SEED = 42
