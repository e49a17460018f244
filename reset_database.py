#!/usr/bin/env python3
"""
Recreate the Medical Center schema on a local SQLite database.

Every table is dropped and created again from the models, leaving an empty
database for manual testing. Other backends are refused; use Alembic there.

    DATABASE_URL=sqlite:///./medical_center.db python reset_database.py
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend", "src"))

from sqlalchemy import inspect

from core.config import DATABASE_URL
from core.database import Base, create_tables, drop_tables, engine


def missing_tables() -> list[str]:
    """Tables declared by the models but absent from the database."""
    present = set(inspect(engine).get_table_names())
    return sorted(name for name in Base.metadata.tables if name not in present)


def reset_database() -> int:
    print(f"🔄 Resetting {DATABASE_URL}")

    if not DATABASE_URL.startswith("sqlite"):
        print("❌ Refusing to reset a non-SQLite database; run Alembic migrations instead.")
        return 1

    try:
        drop_tables()
        create_tables()
        missing = missing_tables()
    finally:
        engine.dispose()

    if missing:
        print(f"⚠️  Tables not created: {', '.join(missing)}")
        return 1

    print(f"🎉 Recreated {len(Base.metadata.tables)} empty tables: {', '.join(sorted(Base.metadata.tables))}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] in ("--help", "-h"):
        print(__doc__)
        sys.exit(0)
    sys.exit(reset_database())
