"""Path configuration for the daily report exporter."""

import os
from datetime import datetime
from pathlib import Path

def ensure_dir(p: Path):
    """Ensure directory exists, handling conflicts by renaming existing files."""
    if p.exists() and not p.is_dir():
        backup = p.with_name(f"{p.name}.conflict.{datetime.now().strftime('%Y%m%d%H%M%S')}")
        p.rename(backup)
    p.mkdir(parents=True, exist_ok=True)

# Base directories
APP_DIR = Path(__file__).resolve().parents[2]
ASSETS = APP_DIR / "assets"

# Asset subdirectories
TEMPLATES_DIR = ASSETS / "templates"
LOGOS_DIR = ASSETS / "logos"
LOGS_DIR = ASSETS / "logs"

# Key files
TEMPLATE_XLSX = Path(os.getenv("DAILY_REPORT_TEMPLATE", TEMPLATES_DIR / "daily_report_template.xlsx"))

# Logos (both optional at render time)
LEFT_LOGO = Path(os.getenv("DAILY_REPORT_LEFT_LOGO", LOGOS_DIR / "cacpm_logo.png"))
RIGHT_LOGO = Path(os.getenv("DAILY_REPORT_RIGHT_LOGO", LOGOS_DIR / "koica_logo.png"))
