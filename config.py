"""
Runtime settings read from the environment.
Game tuning lives in models.constants; this module only covers deployment concerns.
"""
import os

# Save database location (DB_DIR is relative to the project root unless absolute)
DB_DIR = os.environ.get("TWDT_DB_DIR", "data")
DB_FILENAME = os.environ.get("TWDT_DB_FILENAME", "game.db")

# Narrative text service
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
NARRATIVE_MODEL = os.environ.get("TWDT_NARRATIVE_MODEL", "gemini-1.5-flash")
NARRATIVE_TIMEOUT = float(os.environ.get("TWDT_NARRATIVE_TIMEOUT", "8"))

# Flask
SECRET_KEY = os.environ.get("TWDT_SECRET_KEY", "twdt-dev")
