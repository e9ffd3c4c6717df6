"""
Users API - UserStore Unit Tests
=================================

What:  Tests for the in-memory user store (the resource-management core).
How:   Calls the store directly; no HTTP. Concurrency tests drive the store
       from a thread pool.

What we test:
    ✅ Monotonic, never-reused id allocation
    ✅ Required-field validation on create and partial update
    ✅ NotFoundError for get/update/delete on absent ids
    ✅ Snapshots returned by list_all() are isolated from later mutation
    ✅ No duplicate ids or torn state under concurrent callers
"""

import dataclasses
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from users_api.exceptions import NotFoundError, ValidationError
from users_api.models.user import User
from users_api.services.user_store import DEMO_USERS, UserStore, build_default_store


class TestUserStoreSeed:
    """Tests for store construction."""

    def test_empty_store_starts_at_one(self, empty_store):
        """First user in an empty store gets id 1."""
        assert empty_store.list_all() == []
        assert empty_store.create("Ann", "ann@example.com").id == 1

    def test_counter_starts_past_highest_seed(self):
        """Seed ids need not be contiguous; the counter follows the maximum."""
        store = UserStore(seed=[User(5, "A", "a@x.com"), User(2, "B", "b@x.com")])

        assert [u.id for u in store.list_all()] == [5, 2]
        assert store.create("C", "c@x.com").id == 6

    def test_duplicate_seed_ids_rejected(self):
        with pytest.raises(ValueError):
            UserStore(seed=[User(1, "A", "a@x.com"), User(1, "B", "b@x.com")])

    def test_non_positive_seed_id_rejected(self):
        with pytest.raises(ValueError):
            UserStore(seed=[User(0, "A", "a@x.com")])

    def test_build_default_store(self):
        """Default store carries the demo users unless seeding is disabled."""
        assert build_default_store().list_all() == list(DEMO_USERS)
        assert build_default_store(seed_demo_users=False).count() == 0


class TestUserStoreRead:
    """Tests for list_all, get_by_id, and count."""

    def test_list_all_in_insertion_order(self, seeded_store):
        seeded_store.create("Sam", "sam@x.com")

        assert [u.id for u in seeded_store.list_all()] == [1, 2, 3]

    def test_get_by_id_found(self, seeded_store):
        user = seeded_store.get_by_id(2)

        assert user == User(2, "Jane Smith", "jane.smith@example.com")

    def test_get_by_id_not_found(self, seeded_store):
        with pytest.raises(NotFoundError) as exc_info:
            seeded_store.get_by_id(99)

        assert exc_info.value.resource_id == 99
        assert "99" in exc_info.value.message

    def test_list_all_returns_new_list(self, seeded_store):
        """Mutating a returned list must not reach the store."""
        snapshot = seeded_store.list_all()
        snapshot.clear()

        assert seeded_store.count() == 2

    def test_snapshot_unaffected_by_later_update(self, seeded_store):
        """A snapshot keeps showing the values it was taken with."""
        snapshot = seeded_store.list_all()
        seeded_store.update(1, name="Johnny")
        seeded_store.delete(2)

        assert [u.name for u in snapshot] == ["John Doe", "Jane Smith"]

    def test_records_are_immutable(self, seeded_store):
        user = seeded_store.get_by_id(1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            user.name = "Mallory"


class TestUserStoreCreate:
    """Tests for create."""

    def test_create_assigns_next_id(self, seeded_store):
        user = seeded_store.create("Sam", "sam@x.com")

        assert user == User(3, "Sam", "sam@x.com")
        assert seeded_store.get_by_id(3) == user

    def test_ids_strictly_increasing(self, empty_store):
        ids = [empty_store.create(f"u{i}", f"u{i}@x.com").id for i in range(10)]

        assert ids == list(range(1, 11))

    def test_missing_name(self, seeded_store):
        """Empty name is rejected, names the field, and changes nothing."""
        with pytest.raises(ValidationError) as exc_info:
            seeded_store.create("", "a@b.com")

        assert exc_info.value.fields == ["name"]
        assert seeded_store.count() == 2
        # The failed call did not consume an id
        assert seeded_store.create("Ok", "ok@x.com").id == 3

    def test_missing_both_fields_reported_together(self, seeded_store):
        with pytest.raises(ValidationError) as exc_info:
            seeded_store.create(None, "")

        assert exc_info.value.fields == ["name", "email"]

    def test_whitespace_only_counts_as_missing(self, seeded_store):
        with pytest.raises(ValidationError) as exc_info:
            seeded_store.create("Sam", "   ")

        assert exc_info.value.fields == ["email"]

    def test_duplicate_email_allowed(self, seeded_store):
        user = seeded_store.create("Other John", "john.doe@example.com")

        assert user.id == 3


class TestUserStoreUpdate:
    """Tests for partial update."""

    def test_update_both_fields(self, seeded_store):
        user = seeded_store.update(1, name="J. Doe", email="jd@example.com")

        assert user == User(1, "J. Doe", "jd@example.com")
        assert seeded_store.get_by_id(1) == user

    def test_update_keeps_unspecified_field(self, seeded_store):
        user = seeded_store.update(1, email="new@example.com")

        assert user.name == "John Doe"
        assert user.email == "new@example.com"

    def test_update_with_nothing_is_noop(self, seeded_store):
        assert seeded_store.update(2) == seeded_store.get_by_id(2)

    def test_update_preserves_position(self, seeded_store):
        seeded_store.create("Sam", "sam@x.com")
        seeded_store.update(1, name="First")

        assert [u.id for u in seeded_store.list_all()] == [1, 2, 3]
        assert seeded_store.list_all()[0].name == "First"

    def test_update_not_found(self, seeded_store):
        with pytest.raises(NotFoundError):
            seeded_store.update(99, "X", "y@z.com")

    def test_update_not_found_wins_over_validation(self, seeded_store):
        with pytest.raises(NotFoundError):
            seeded_store.update(99, name="")

    def test_update_empty_field_rejected_without_change(self, seeded_store):
        """A supplied empty field fails the whole call; the other field is not applied."""
        with pytest.raises(ValidationError) as exc_info:
            seeded_store.update(1, name="Valid", email="")

        assert exc_info.value.fields == ["email"]
        assert seeded_store.get_by_id(1) == DEMO_USERS[0]


class TestUserStoreDelete:
    """Tests for delete and id retirement."""

    def test_delete_then_get_not_found(self, seeded_store):
        assert seeded_store.delete(1) is None

        with pytest.raises(NotFoundError):
            seeded_store.get_by_id(1)

    def test_delete_not_found(self, seeded_store):
        with pytest.raises(NotFoundError):
            seeded_store.delete(99)

    def test_delete_twice(self, seeded_store):
        seeded_store.delete(2)

        with pytest.raises(NotFoundError):
            seeded_store.delete(2)

    def test_deleted_id_never_reused(self, seeded_store):
        """Deleting the newest user must not let its id come back."""
        sam = seeded_store.create("Sam", "sam@x.com")
        seeded_store.delete(sam.id)

        assert seeded_store.create("Next", "next@x.com").id == sam.id + 1

    def test_delete_everything_then_create(self, seeded_store):
        seeded_store.delete(1)
        seeded_store.delete(2)

        assert seeded_store.create("Fresh", "fresh@x.com").id == 3

    def test_count_tracks_creates_minus_deletes(self, empty_store):
        for i in range(5):
            empty_store.create(f"u{i}", f"u{i}@x.com")
        empty_store.delete(2)
        empty_store.delete(4)
        with pytest.raises(NotFoundError):
            empty_store.delete(4)

        assert len(empty_store.list_all()) == empty_store.count() == 3


class TestUserStoreScenario:
    """End-to-end walk through the documented example."""

    def test_seed_create_delete_list(self, seeded_store):
        sam = seeded_store.create("Sam", "sam@x.com")
        assert sam.id == 3

        seeded_store.delete(1)

        with pytest.raises(NotFoundError):
            seeded_store.get_by_id(1)
        assert [u.id for u in seeded_store.list_all()] == [2, 3]


class TestUserStoreConcurrency:
    """Tests driving the store from many threads at once."""

    def test_concurrent_creates_get_distinct_contiguous_ids(self, seeded_store):
        """N parallel creates yield exactly the ids 3..N+2, no duplicates, no gaps."""
        n = 500

        def create(i):
            return seeded_store.create(f"user{i}", f"user{i}@x.com").id

        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(create, range(n)))

        assert len(set(ids)) == n
        assert sorted(ids) == list(range(3, n + 3))
        assert seeded_store.count() == n + 2

    def test_listing_order_matches_id_order_under_contention(self, empty_store):
        """Allocation and insertion are one step, so listing order equals id order."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: empty_store.create(f"u{i}", f"u{i}@x.com"), range(200)))

        ids = [u.id for u in empty_store.list_all()]
        assert ids == sorted(ids)

    def test_delete_racing_update(self, empty_store):
        """
        Delete and update on the same id resolve in some total order.

        Delete always succeeds (update never removes). Update either lands
        first or sees NotFoundError. Either way the user ends up gone.
        """
        users = [empty_store.create(f"u{i}", f"u{i}@x.com") for i in range(200)]
        update_outcomes = []
        lock = threading.Lock()

        def update(user_id):
            try:
                empty_store.update(user_id, name="renamed")
                outcome = "updated"
            except NotFoundError:
                outcome = "not_found"
            with lock:
                update_outcomes.append(outcome)

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = []
            for user in users:
                futures.append(pool.submit(update, user.id))
                futures.append(pool.submit(empty_store.delete, user.id))
            for future in futures:
                future.result()

        assert len(update_outcomes) == 200
        assert set(update_outcomes) <= {"updated", "not_found"}
        assert empty_store.list_all() == []
        for user in users:
            with pytest.raises(NotFoundError):
                empty_store.get_by_id(user.id)

    def test_snapshots_never_torn(self, seeded_store):
        """Every snapshot taken mid-churn is internally consistent."""
        stop = threading.Event()
        bad_snapshots = []

        def churn():
            while not stop.is_set():
                user = seeded_store.create("tmp", "tmp@x.com")
                seeded_store.update(user.id, name="tmp2")
                seeded_store.delete(user.id)

        def observe():
            for _ in range(500):
                snapshot = seeded_store.list_all()
                ids = [u.id for u in snapshot]
                if len(ids) != len(set(ids)) or ids[:2] != [1, 2]:
                    bad_snapshots.append(ids)

        writers = [threading.Thread(target=churn) for _ in range(4)]
        for t in writers:
            t.start()
        try:
            observe()
        finally:
            stop.set()
            for t in writers:
                t.join()

        assert bad_snapshots == []
        assert seeded_store.count() == 2
