#!/usr/bin/env python3
"""
Pre-flight for the places API: env file, database and places table, model key.

  python backend/scripts/check_backend.py
"""
import sys
from pathlib import Path

from dotenv import load_dotenv

BACKEND_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BACKEND_DIR))
load_dotenv(BACKEND_DIR / ".env")

from local_places.config import settings  # noqa: E402


def check_env_file() -> tuple[bool, str]:
    env_file = BACKEND_DIR / ".env"
    if env_file.exists():
        return True, f"{env_file} found"
    return False, f"{env_file} not found; settings come from the environment only"


def check_places_table() -> tuple[bool, str]:
    from sqlalchemy import inspect
    from sqlalchemy.exc import SQLAlchemyError

    from local_places.db.session import engine

    try:
        tables = inspect(engine).get_table_names()
    except SQLAlchemyError as e:
        return False, f"cannot open {settings.database_url}: {e}"
    if "places" not in tables:
        return False, "places table missing (alembic upgrade head, or start with AUTO_CREATE_TABLES=true)"
    return True, f"places table present in {settings.database_url}"


def check_model_key() -> tuple[bool, str]:
    if not settings.gemini_api_key:
        return False, "GEMINI_API_KEY empty; /api/chat answers configuration_missing"
    return True, f"GEMINI_API_KEY set, model {settings.ai_model}"


CHECKS = (check_env_file, check_places_table, check_model_key)


def main() -> int:
    failed = 0
    for check in CHECKS:
        ok, detail = check()
        print(f"[{'ok' if ok else 'FAIL'}] {detail}")
        failed += not ok
    if failed:
        print(f"{failed} check(s) failed")
        return 1
    print("ready: uvicorn local_places.main:app --app-dir backend --port 8000")
    return 0


if __name__ == "__main__":
    sys.exit(main())
