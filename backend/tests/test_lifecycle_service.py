import unittest

from app.services.lifecycle_service import (
    USER_CREATED,
    USER_DELETED,
    dispatch_auth_event,
    on_user_created,
    on_user_deleted,
)
from fakes import FakeFirestore, catalog_docs


class TestOnUserCreated(unittest.TestCase):
    def setUp(self) -> None:
        self.db = FakeFirestore(catalog_docs())

    def test_seeds_two_entries_in_one_commit(self) -> None:
        self.assertTrue(on_user_created(self.db, "u1", seed_size=2, bookmark=7))

        entries = [self.db.docs[p] for p in self.db.paths("userdata/u1/watchlist/")]
        self.assertEqual(
            sorted(e["movie_id"] for e in entries),
            ["m1", "m2"],
        )
        self.assertTrue(all(e["bookmark"] == 7 for e in entries))
        self.assertEqual(self.db.commits, 1)

    def test_small_catalog_seeds_what_exists(self) -> None:
        db = FakeFirestore({"movies/only": {"title": "Solo"}})
        self.assertTrue(on_user_created(db, "u1", seed_size=2))
        self.assertEqual(len(db.paths("userdata/u1/watchlist/")), 1)

    def test_failure_is_logged_not_raised(self) -> None:
        self.db.fail_commit = True
        with self.assertLogs("app.services.lifecycle_service", level="ERROR"):
            self.assertFalse(on_user_created(self.db, "u1"))
        self.assertEqual(self.db.paths("userdata/"), [])


class TestOnUserDeleted(unittest.TestCase):
    def setUp(self) -> None:
        docs = catalog_docs()
        docs.update({
            "userdata/u1": {"created": True},
            "userdata/u1/watchlist/e1": {"bookmark": 1, "movie_id": "m1"},
            "userdata/u1/watchlist/e2": {"bookmark": 2, "movie_id": "m2"},
            "userdata/u2/watchlist/e3": {"bookmark": 3, "movie_id": "m3"},
        })
        self.db = FakeFirestore(docs)

    def test_purges_entries_and_root_record(self) -> None:
        self.assertTrue(on_user_deleted(self.db, "u1"))

        self.assertEqual(self.db.paths("userdata/u1"), [])
        self.assertIn("userdata/u2/watchlist/e3", self.db.docs)
        self.assertEqual(self.db.commits, 1)

    def test_failed_commit_deletes_nothing(self) -> None:
        self.db.fail_commit = True
        with self.assertLogs("app.services.lifecycle_service", level="ERROR"):
            self.assertFalse(on_user_deleted(self.db, "u1"))

        self.assertEqual(len(self.db.paths("userdata/u1")), 3)


class TestDispatchAuthEvent(unittest.TestCase):
    def setUp(self) -> None:
        self.db = FakeFirestore(catalog_docs())

    def test_routes_create_and_delete(self) -> None:
        self.assertTrue(dispatch_auth_event(self.db, USER_CREATED, {"uid": "u9"}))
        self.assertTrue(self.db.paths("userdata/u9/watchlist/"))

        self.assertTrue(dispatch_auth_event(self.db, USER_DELETED, {"uid": "u9"}))
        self.assertEqual(self.db.paths("userdata/u9"), [])

    def test_unknown_event_is_ignored(self) -> None:
        with self.assertLogs("app.services.lifecycle_service", level="WARNING"):
            self.assertFalse(dispatch_auth_event(self.db, "user.update", {"uid": "u9"}))
        self.assertEqual(self.db.commits, 0)

    def test_missing_uid_is_ignored(self) -> None:
        with self.assertLogs("app.services.lifecycle_service", level="ERROR"):
            self.assertFalse(dispatch_auth_event(self.db, USER_CREATED, {}))
