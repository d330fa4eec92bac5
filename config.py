"""
CalcStack Configuration Settings
"""
import os

# Application Settings
APP_NAME = "CalcStack Calculator"
VERSION = "1.0.0"

# Display Settings
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 560
DISPLAY_FONT = ("Consolas", 26, "bold")
HISTORY_FONT = ("Consolas", 12)
BUTTON_FONT = ("Segoe UI", 13)
LABEL_FONT = ("Segoe UI", 11)

# ── Palettes ──────────────────────────────────────────────────────────────────

LIGHT = {
    "bg":           "#DDE6ED",
    "display_bg":   "#C8D4DF",
    "display_fg":   "#1A2332",
    "history_fg":   "#6E8090",
    "btn_bg":       "#DDE6ED",
    "btn_fg":       "#2B3A4A",
    "operator_fg":  "#1E7A56",
    "function_fg":  "#2C5F8A",
    "memory_fg":    "#B07D1E",
    "equals_bg":    "#2E8B57",
    "equals_fg":    "#FFFFFF",
    "entry_bg":     "#E8EEF4",
    "entry_fg":     "#1A2332",
}

DARK = {
    "bg":           "#1E2530",
    "display_bg":   "#161C26",
    "display_fg":   "#9ADDB0",   # LCD green-on-dark
    "history_fg":   "#4E6070",
    "btn_bg":       "#1E2530",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "function_fg":  "#5E8FC8",
    "memory_fg":    "#D4A020",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "entry_bg":     "#283040",
    "entry_fg":     "#BDD0E0",
}


def get_theme(dark: bool) -> dict:
    """Return the active colour palette."""
    return DARK if dark else LIGHT


# Engine Settings
# Whether a full reset (C on an empty entry) also forgets stored variables
RESET_CLEARS_VARIABLES = False

# Database Settings
DB_PATH = os.path.join(os.path.dirname(__file__), "calcstack.db")

# GUI preferences
SETTINGS_FILE = "settings.json"
# How often the window re-reads a session the web API may have changed
GUI_REFRESH_MS = 500

# History Settings
MAX_HISTORY_ITEMS = 100

# Web API settings
WEB_HOST = '0.0.0.0'
WEB_PORT = 8888
