# config.py
# Project-wide constants for the timetable planner.

import os
from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parent

# === Logging ===
LOG_PATH = Path(os.environ.get("TIMETABLE_LOG_PATH", PROJECT_ROOT / "timetable_run.log"))

# === Planner limits ===
MAX_COURSES = 10
MINUTES_PER_DAY = 24 * 60

# === CSV export ===
CSV_HEADER = ["Course ID", "Course Name", "Faculty", "Day", "Start", "End"]
EXCLUDED_HEADER = ["Excluded (Course ID - Course Name)", "Conflicts With"]
KEY_DELIMITER = ","

# === Graph view ===
# (chip colour, background colour) pairs, cycled by course index.
PALETTE = (
    ("#6C63FF", "#E9E7FF"),
    ("#FF6FA3", "#FFF0F6"),
    ("#00C2A8", "#E6FFFA"),
    ("#FFB86B", "#FFF7EB"),
    ("#8BD3FF", "#F0FBFF"),
)
CANVAS_SIZE = 400
NODE_RADIUS = 15
NODE_PADDING = 30
