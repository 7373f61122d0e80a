"""Tests for the create_user CLI script."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from sqlalchemy.orm import sessionmaker

from user_management.core.database import build_engine
from user_management.models import Account, Base
from user_management.schemas.accounts import Role
from user_management.scripts import create_user


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.SessionTesting = sessionmaker(bind=self.engine, autoflush=False)
        patcher = patch.object(create_user, "SessionLocal", self.SessionTesting)
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self.engine.dispose()

    def run_main(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self.run_main("admin1", "admin-pass", "admin")
        self.assertEqual(code, 0)
        self.assertIn("Created user 'admin1' with role 'ADMIN'", out)
        db = self.SessionTesting()
        try:
            account = db.query(Account).filter_by(username="admin1").one()
            self.assertEqual(account.role, Role.ADMIN)
        finally:
            db.close()

    def test_duplicate_fails(self) -> None:
        self.run_main("alice", "secret1")
        code, _, err = self.run_main("alice", "secret1")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)

    def test_short_password_rejected(self) -> None:
        code, _, err = self.run_main("bob", "123")
        self.assertEqual(code, 1)
        self.assertIn("password", err)
