from __future__ import annotations

import json
import logging
import threading
from datetime import timedelta

import pytest

from physiotrack.core.constants import SCHEMA_VERSION, STORE_KEY
from physiotrack.core.enums import Role, TreatmentType
from physiotrack.core.exceptions import PersistenceError, SchemaVersionError, ValidationError
from physiotrack.storage.kv import InMemoryStorage
from physiotrack.storage.local_store import LocalStore


class FailingStorage(InMemoryStorage):
    def __init__(self):
        super().__init__()
        self.fail = False

    def set_item(self, key, value):
        if self.fail:
            raise OSError("disk full")
        super().set_item(key, value)


def _stored(storage) -> dict:
    return json.loads(storage.get_item(STORE_KEY))


def test_first_use_seeds_and_persists_three_accounts(storage, store):
    doc = _stored(storage)

    assert doc["version"] == SCHEMA_VERSION
    assert [u["username"] for u in doc["users"]] == ["admin", "jane", "mark"]
    assert doc["sessions"] == []


def test_seed_credentials_are_not_stored_in_plaintext(storage, store):
    for user in _stored(storage)["users"]:
        assert user["passwordHash"] not in {"physio123", "password"}


def test_authenticate_is_case_insensitive_on_username(store):
    account = store.authenticate("ADMIN", "physio123")

    assert account is not None
    assert account.role == Role.ADMIN
    assert account.name == "Clinic Manager"


def test_authenticate_is_case_sensitive_on_credential(store):
    assert store.authenticate("admin", "PHYSIO123") is None
    assert store.authenticate("admin", "wrong") is None


def test_authenticate_unknown_user_returns_none(store):
    assert store.authenticate("nobody", "physio123") is None


def test_authenticated_account_carries_no_credential(store):
    account = store.authenticate("jane", "password")

    assert not hasattr(account, "password_hash")
    assert "passwordHash" not in account.to_dict()


def test_register_then_authenticate_round_trip(store):
    result = store.register("Sam Lee", "sam", "s3cret", Role.THERAPIST)
    account = store.authenticate("Sam", "s3cret")

    assert result.success
    assert result.message == "Account created successfully."
    assert account.name == "Sam Lee"
    assert account.role == Role.THERAPIST


def test_register_rejects_username_differing_only_in_case(store):
    result = store.register("Another Jane", "JaNe", "xyz1", Role.THERAPIST)

    assert not result.success
    assert result.message == "Username already taken."


def test_register_is_persisted_for_a_new_store_instance(storage, store):
    store.register("Sam Lee", "sam", "s3cret", Role.THERAPIST)

    reopened = LocalStore(storage)

    assert reopened.authenticate("sam", "s3cret") is not None


def test_list_therapists_in_storage_order_without_admins(store):
    store.register("Zed", "zed", "pass", Role.THERAPIST)
    store.register("Boss", "boss", "pass", Role.ADMIN)

    names = [t.username for t in store.list_therapists()]

    assert names == ["jane", "mark", "zed"]


def test_append_session_puts_newest_first_and_filters_by_owner(store, make_session):
    first = make_session(therapist_id="user-1")
    other = make_session(therapist_id="user-2", therapist_name="Mark Smith")
    latest = make_session(therapist_id="user-1")
    for s in (first, other, latest):
        store.append_session(s)

    mine = store.query_sessions("user-1", Role.THERAPIST)

    assert [s.id for s in mine] == [latest.id, first.id]
    assert other not in mine
    assert store.query_sessions("user-2", "therapist") == [other]


def test_admin_query_returns_every_session(store, make_session):
    a = make_session(therapist_id="user-1")
    b = make_session(therapist_id="user-2")
    store.append_session(a)
    store.append_session(b)

    assert [s.id for s in store.query_sessions("admin-1", Role.ADMIN)] == [b.id, a.id]
    assert len(store.query_sessions("anyone", "admin")) == 2


def test_append_session_rejects_invalid_duration(store, make_session):
    bad = make_session(treatment_type=TreatmentType.PHYSIOTHERAPY, duration_minutes=60)

    with pytest.raises(ValidationError):
        store.append_session(bad)
    assert store.query_sessions("admin-1", Role.ADMIN) == []


def test_append_session_requires_image_signature(store, make_session):
    from dataclasses import replace

    unsigned = replace(make_session(), signature_data_url="not-an-image")

    with pytest.raises(ValidationError):
        store.append_session(unsigned)


def test_sessions_survive_reload_with_order_and_fields(storage, store, make_session, fixed_now):
    older = make_session(timestamp=fixed_now - timedelta(days=1), notes="left knee")
    newer = make_session(treatment_type=TreatmentType.PHYSIOTHERAPY, duration_minutes=45)
    store.append_session(older)
    store.append_session(newer)

    reloaded = LocalStore(storage).query_sessions("user-1", Role.THERAPIST)

    assert reloaded == [newer, older]
    assert reloaded[1].notes == "left knee"


def test_version_mismatch_resets_to_seed_with_warning(caplog):
    storage = InMemoryStorage(
        {STORE_KEY: json.dumps({"version": 2, "users": [], "sessions": []})}
    )

    with caplog.at_level(logging.WARNING):
        store = LocalStore(storage)
        store.initialize()

    assert store.authenticate("admin", "physio123") is not None
    assert json.loads(storage.get_item(STORE_KEY))["version"] == SCHEMA_VERSION
    assert any("reseeding" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[]",
        json.dumps({"version": SCHEMA_VERSION}),
        json.dumps({"version": SCHEMA_VERSION, "users": [{"id": 1}], "sessions": []}),
    ],
)
def test_malformed_payload_is_treated_as_absent(payload):
    storage = InMemoryStorage({STORE_KEY: payload})
    store = LocalStore(storage)

    assert [t.username for t in store.list_therapists()] == ["jane", "mark"]
    assert _stored(storage)["sessions"] == []


def test_strict_schema_refuses_to_discard_other_version():
    original = json.dumps({"version": 99, "users": [], "sessions": []})
    storage = InMemoryStorage({STORE_KEY: original})

    with pytest.raises(SchemaVersionError):
        LocalStore(storage, strict_schema=True).initialize()
    assert storage.get_item(STORE_KEY) == original


def test_persistence_failure_raises_distinct_error_and_rolls_back(make_session):
    storage = FailingStorage()
    store = LocalStore(storage)
    store.initialize()
    storage.fail = True

    with pytest.raises(PersistenceError):
        store.append_session(make_session())
    with pytest.raises(PersistenceError):
        store.register("Sam", "sam", "pass", Role.THERAPIST)

    assert store.query_sessions("admin-1", Role.ADMIN) == []
    assert store.authenticate("sam", "pass") is None


def test_concurrent_registrations_keep_usernames_unique(store):
    spellings = ["sam", "SAM", "Sam", "sAm"]
    barrier = threading.Barrier(len(spellings))
    results = []

    def worker(username):
        barrier.wait()
        results.append(store.register("Sam Lee", username, "s3cret", Role.THERAPIST))

    threads = [threading.Thread(target=worker, args=(u,)) for u in spellings]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(r.success for r in results) == 1
    assert [t.username.lower() for t in store.list_therapists()].count("sam") == 1


def test_concurrent_appends_all_persist(storage, store, make_session):
    sessions = [make_session() for _ in range(8)]
    barrier = threading.Barrier(len(sessions))

    def worker(session):
        barrier.wait()
        store.append_session(session)

    threads = [threading.Thread(target=worker, args=(s,)) for s in sessions]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    reloaded = LocalStore(storage).query_sessions("admin-1", Role.ADMIN)
    assert {s.id for s in reloaded} == {s.id for s in sessions}


def test_get_account_returns_public_account_or_none(store):
    account = store.get_account("user-1")

    assert account.username == "jane"
    assert "passwordHash" not in account.to_dict()
    assert store.get_account("no-such-id") is None
