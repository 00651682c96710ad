"""Write the blank daily report template to the configured template path.

Usage: python scripts/build_template.py [output.xlsx]
"""

import logging
import sys
from pathlib import Path

from daily_report.config import setup_logging
from daily_report.config.paths import TEMPLATE_XLSX, ensure_dir
from daily_report.reports import build_blank_template


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    target = Path(argv[0]) if argv else TEMPLATE_XLSX
    setup_logging()
    ensure_dir(target.parent)
    build_blank_template().save(target)
    logging.getLogger(__name__).info(f"Template written to {target}")
    return target


if __name__ == "__main__":
    main()
