from ad_studio.infrastructure.session_store import SessionStore

from test_session import FakeClock, FakeTask


def test_known_session_is_returned():
    store = SessionStore()
    session, created = store.get_or_create(None)

    again, created_again = store.get_or_create(session.session_id)

    assert created is True
    assert created_again is False
    assert again is session


def test_unknown_cookie_gets_fresh_session():
    store = SessionStore()

    session, created = store.get_or_create("forged-or-expired")

    assert created is True
    assert session.session_id != "forged-or-expired"


def test_idle_sessions_expire_and_cancel_video():
    clock = FakeClock()
    store = SessionStore(idle_timeout=60, clock=clock)
    idle, _ = store.get_or_create(None)
    task = FakeTask()
    idle.video_task = task

    clock.now += 30
    active, _ = store.get_or_create(None)
    clock.now += 45

    assert store.get(idle.session_id) is None
    assert store.get(active.session_id) is active
    assert task.cancelled is True
    assert len(store) == 1


def test_access_keeps_session_alive():
    clock = FakeClock()
    store = SessionStore(idle_timeout=60, clock=clock)
    session, _ = store.get_or_create(None)

    for _ in range(5):
        clock.now += 50
        assert store.get(session.session_id) is session


def test_capacity_evicts_least_recently_used():
    store = SessionStore(max_sessions=3)
    first, _ = store.get_or_create(None)
    second, _ = store.get_or_create(None)
    third, _ = store.get_or_create(None)
    first_task = FakeTask()
    second.video_task = FakeTask()
    first.video_task = first_task

    store.get(first.session_id)
    store.get_or_create(None)

    assert len(store) == 3
    assert store.get(second.session_id) is None
    assert store.get(first.session_id) is first
    assert first_task.cancelled is False


def test_many_anonymous_visitors_stay_bounded():
    store = SessionStore(max_sessions=100)

    for _ in range(500):
        store.get_or_create(None)

    assert len(store) == 100
