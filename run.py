"""Project root entry point: `python run.py bot` starts the Discord bot, `python run.py web` the HTTP API."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def _bootstrap_path() -> None:
    """Ensure the project root is importable when running from elsewhere."""
    project_root = Path(__file__).resolve().parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


def main():
    _bootstrap_path()
    mode = sys.argv[1] if len(sys.argv) > 1 else "bot"

    if mode == "bot":
        from src.bot.client import run_bot

        run_bot()
    elif mode == "web":
        from src.web import create_app

        app = create_app()
        app.run(host="0.0.0.0", port=int(os.environ.get("PORT", "5500")))
    else:
        raise SystemExit(f"Unknown mode '{mode}', expected 'bot' or 'web'")


if __name__ == "__main__":
    main()
