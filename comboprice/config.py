"""Runtime configuration defaults for pricing, logging and printing."""

from __future__ import annotations

import os

# Caps applied when a step does not configure its own.
DEFAULT_TOPPING_LIMIT = 3
DEFAULT_SAUCE_LIMIT = 1
DEFAULT_MAX_DIPPING = 1
DEFAULT_HALF_PIZZA_MULTIPLIER = 0.5
# Individual pricing charges an extra half-side topping at this share of its price.
HALF_SIDE_PRICE_FACTOR = 0.5
CURRENCY_PLACES = 2

DEBUG_LOG_ENV = "COMBOPRICE_DEBUG_LOG"
DEBUG_LOG_PATH = "/tmp/comboprice-debug.log"

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_FONT_ENV = "COMBOPRICE_PRINTER_FONT_PATH"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70


def debug_log_path() -> str:
    """Return the debug log path, honouring the environment override."""
    return os.environ.get(DEBUG_LOG_ENV, "").strip() or DEBUG_LOG_PATH
