"""Alembic environment renders the accounts schema from application settings."""

import io
import unittest
from pathlib import Path

from alembic import command
from alembic.config import Config

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


class TestOfflineMigration(unittest.TestCase):
    def setUp(self) -> None:
        self.sql = io.StringIO()
        # No ini file, so the app's logging configuration is left alone.
        self.config = Config(output_buffer=self.sql)
        self.config.set_main_option("script_location", str(ALEMBIC_DIR))

    def test_upgrade_creates_accounts(self) -> None:
        command.upgrade(self.config, "head", sql=True)
        rendered = self.sql.getvalue()
        self.assertIn("CREATE TABLE accounts", rendered)
        self.assertIn("CREATE UNIQUE INDEX ix_accounts_username ON accounts (username)", rendered)

    def test_downgrade_drops_accounts(self) -> None:
        command.downgrade(self.config, "20250301000000:base", sql=True)
        self.assertIn("DROP TABLE accounts", self.sql.getvalue())
