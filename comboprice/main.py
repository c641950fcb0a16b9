"""Entry point for the combo builder Textual app."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from comboprice.combo_app import ComboApp
from comboprice.config import debug_log_path
from comboprice.data import COMBO_DEFINITIONS, SAUCE_CATALOG, TOPPING_CATALOG

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(path: str | None = None) -> None:
    """Send debug logs to a file; the terminal belongs to the TUI."""
    log_path = Path(path or debug_log_path())
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("comboprice")
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application for one combo (first configured combo by default)."""
    args = sys.argv[1:] if argv is None else argv
    combo_id = args[0] if args else next(iter(COMBO_DEFINITIONS))
    if combo_id not in COMBO_DEFINITIONS:
        known = ", ".join(COMBO_DEFINITIONS)
        raise SystemExit(f"Unknown combo {combo_id!r}. Choose one of: {known}")

    configure_logging()
    logging.getLogger(__name__).info("starting combo=%s", combo_id)
    ComboApp(COMBO_DEFINITIONS[combo_id], TOPPING_CATALOG, SAUCE_CATALOG).run()


if __name__ == "__main__":
    main()
