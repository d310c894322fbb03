"""
Run the Remissio CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    register      Create an account (and sign in)
    login         Sign in
    logout        Sign out
    whoami        Show the signed-in user
    onboard       Complete the first-run profile questions
    profile       Show your profile
    profile-edit  Change profile fields
    language      Set the interface language
    symptoms      Fill in the PUCAI questionnaire
    mood          Log your mood (1-5)
    meal          Log a meal
    dashboard     Latest score, today's meals, latest mood
    timeline      Day-by-day history and averages

Examples:
    python run_cli.py register --email me@example.com --name Alex
    python run_cli.py mood 4 --notes "good day"
    python run_cli.py timeline --days 14

Environment variables (all optional):
    REMISSIO_DB_PATH          SQLite file holding all local data (default: remissio.db)
    REMISSIO_STORAGE_BACKEND  "sqlite" or "memory" (default: sqlite)
    REMISSIO_LOG_LEVEL        Logging level (default: WARNING)
    REMISSIO_TIMELINE_DAYS    Default timeline window (default: 7)
    REMISSIO_LANGUAGE         Language shown when a profile has none (default: de)
"""

import sys
from pathlib import Path

# Ensure src/ is importable without installing the package
sys.path.insert(0, str(Path(__file__).parent / "src"))

from remissio.adapters.cli.main import app

if __name__ == "__main__":
    app()
