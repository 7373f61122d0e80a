"""Tests for user_management.services.accounts: authorization happens before the store is touched."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.orm import sessionmaker

from user_management.core.database import build_engine
from user_management.models import Account, Base
from user_management.schemas.accounts import RegisterRequest, Role
from user_management.services.access_control import Caller
from user_management.services.accounts import AccountService
from user_management.services.identity_store import IdentityStore
from user_management.services.outcomes import (
    ACCESS_DENIED_ADMIN_MESSAGE,
    ACCESS_DENIED_SELF_MESSAGE,
    Outcome,
    OutcomeCode,
)

ADMIN = Caller.of("admin1", [Role.ADMIN])
ALICE = Caller.of("alice", [Role.USER])
BOB = Caller.of("bob", [Role.USER])


class TestDenialShortCircuits(unittest.TestCase):
    """Denied operations return ACCESS_DENIED and never call the store."""

    def setUp(self) -> None:
        self.store = MagicMock(spec=IdentityStore)
        self.service = AccountService(self.store, request_id="req-1")

    def test_fetch_other_user(self) -> None:
        outcome = self.service.fetch(BOB, "alice")
        self.assertIs(outcome.kind, OutcomeCode.ACCESS_DENIED)
        self.assertEqual(outcome.message, ACCESS_DENIED_SELF_MESSAGE)
        self.store.fetch.assert_not_called()

    def test_list_as_user(self) -> None:
        outcome = self.service.list_all(ALICE)
        self.assertIs(outcome.kind, OutcomeCode.ACCESS_DENIED)
        self.assertEqual(outcome.message, ACCESS_DENIED_ADMIN_MESSAGE)
        self.store.list_all.assert_not_called()

    def test_remove_as_user(self) -> None:
        outcome = self.service.remove(ALICE, "alice")
        self.assertIs(outcome.kind, OutcomeCode.ACCESS_DENIED)
        self.store.remove.assert_not_called()

    def test_anonymous_fetch(self) -> None:
        outcome = self.service.fetch(Caller.anonymous(), "alice")
        self.assertIs(outcome.kind, OutcomeCode.ACCESS_DENIED)
        self.store.fetch.assert_not_called()

    def test_denial_logged(self) -> None:
        with self.assertLogs("user_management.services.accounts", level="INFO") as logs:
            self.service.remove(BOB, "alice")
        self.assertTrue(any("Access denied" in line for line in logs.output))


class TestAllowedForwards(unittest.TestCase):
    """Allowed operations return the store's outcome unchanged."""

    def setUp(self) -> None:
        self.store = MagicMock(spec=IdentityStore)
        self.service = AccountService(self.store)

    def test_register_anonymous(self) -> None:
        self.store.register.return_value = Outcome.already_exists()
        candidate = RegisterRequest(username="alice", password="secret1", role=Role.USER)
        outcome = self.service.register(Caller.anonymous(), candidate)
        self.assertIs(outcome.kind, OutcomeCode.ALREADY_EXISTS)
        self.store.register.assert_called_once_with(candidate)

    def test_fetch_self(self) -> None:
        self.store.fetch.return_value = Outcome.not_found()
        self.assertIs(self.service.fetch(ALICE, "alice").kind, OutcomeCode.NOT_FOUND)
        self.store.fetch.assert_called_once_with("alice")

    def test_admin_list_and_remove(self) -> None:
        self.store.list_all.return_value = Outcome.found_all([])
        self.store.remove.return_value = Outcome.removed()
        self.assertIs(self.service.list_all(ADMIN).kind, OutcomeCode.FOUND)
        self.assertIs(self.service.remove(ADMIN, "bob").kind, OutcomeCode.REMOVED)
        self.store.remove.assert_called_once_with("bob")


class TestScenarios(unittest.TestCase):
    """End-to-end scenarios over a real in-memory store."""

    def setUp(self) -> None:
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine, autoflush=False)()
        self.service = AccountService.with_session(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def _register_alice(self) -> Outcome:
        return self.service.register(
            Caller.anonymous(),
            RegisterRequest(username="alice", password="secret1", role=Role.USER),
        )

    def test_register_then_duplicate(self) -> None:
        created = self._register_alice()
        self.assertIs(created.kind, OutcomeCode.CREATED)
        self.assertEqual(created.account.username, "alice")
        self.assertEqual(created.account.role, Role.USER)

        duplicate = self._register_alice()
        self.assertIs(duplicate.kind, OutcomeCode.ALREADY_EXISTS)
        self.assertEqual(self.session.query(Account).count(), 1)

    def test_fetch_by_other_user_and_admin(self) -> None:
        self._register_alice()
        self.assertIs(self.service.fetch(BOB, "alice").kind, OutcomeCode.ACCESS_DENIED)
        found = self.service.fetch(ADMIN, "alice")
        self.assertIs(found.kind, OutcomeCode.FOUND)
        self.assertEqual(found.account.username, "alice")

    def test_denial_does_not_reveal_existence(self) -> None:
        self._register_alice()
        existing = self.service.fetch(BOB, "alice")
        missing = self.service.fetch(BOB, "ghost")
        self.assertEqual(existing, missing)

    def test_remove_flow(self) -> None:
        self._register_alice()
        self.assertIs(self.service.remove(ALICE, "alice").kind, OutcomeCode.ACCESS_DENIED)
        self.assertEqual(self.session.query(Account).count(), 1)
        self.assertIs(self.service.remove(ADMIN, "alice").kind, OutcomeCode.REMOVED)
        self.assertIs(self.service.fetch(ADMIN, "alice").kind, OutcomeCode.NOT_FOUND)

    def test_repeated_denial_never_mutates(self) -> None:
        self._register_alice()
        outcomes = {self.service.remove(BOB, "alice").code for _ in range(3)}
        self.assertEqual(outcomes, {OutcomeCode.ACCESS_DENIED.code})
        self.assertEqual(self.session.query(Account).count(), 1)
