from __future__ import annotations

from datetime import timedelta

from physiotrack.core.enums import Role


def test_seed_login_register_and_scoped_queries(store, make_session, fixed_now):
    admin = store.authenticate("ADMIN", "physio123")
    assert admin is not None
    assert admin.role.value == "admin"

    assert store.authenticate("admin", "wrong") is None

    result = store.register("Sam", "jane", "x", "therapist")
    assert not result.success
    assert result.message == "Username already taken."

    s1 = make_session(therapist_id="user-1", timestamp=fixed_now - timedelta(hours=2))
    s2 = make_session(therapist_id="user-2", therapist_name="Mark Smith", timestamp=fixed_now - timedelta(hours=1))
    s3 = make_session(therapist_id="user-1", timestamp=fixed_now)
    for s in (s1, s2, s3):
        store.append_session(s)

    assert store.query_sessions("user-1", Role.THERAPIST) == [s3, s1]
    assert store.query_sessions("user-2", Role.THERAPIST) == [s2]
    assert store.query_sessions("admin-1", Role.ADMIN) == [s3, s2, s1]
