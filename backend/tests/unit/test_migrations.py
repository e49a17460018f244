"""
Tests that the Alembic migrations build the same schema as the models.
"""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from core.database import Base


ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


@pytest.fixture
def alembic_config(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrations.db'}"
    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("sqlalchemy.url", db_url)
    cfg.attributes["configure_logger"] = False
    return cfg, db_url


class TestMigrations:
    """Run migrations from scratch against a scratch SQLite file."""

    def test_upgrade_creates_model_tables(self, alembic_config):
        cfg, db_url = alembic_config

        command.upgrade(cfg, "head")

        engine = create_engine(db_url)
        try:
            inspector = inspect(engine)
            tables = set(inspector.get_table_names()) - {"alembic_version"}
            assert tables == set(Base.metadata.tables)

            for table_name, table in Base.metadata.tables.items():
                migrated = {c["name"] for c in inspector.get_columns(table_name)}
                assert migrated == {c.name for c in table.columns}, table_name

            unique = inspector.get_unique_constraints("appointments")
            assert any(
                uc["name"] == "uq_doctor_appointment_slot"
                and uc["column_names"] == ["doctor_id", "appointment_date", "appointment_time"]
                for uc in unique
            )
            index_names = {ix["name"] for ix in inspector.get_indexes("appointments")}
            assert {"idx_patient", "idx_doctor_date"} <= index_names
        finally:
            engine.dispose()

    def test_downgrade_to_base(self, alembic_config):
        cfg, db_url = alembic_config

        command.upgrade(cfg, "head")
        command.downgrade(cfg, "base")

        engine = create_engine(db_url)
        try:
            assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
        finally:
            engine.dispose()
