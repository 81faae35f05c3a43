import json

from storefront.constants import SESSION_KEY
from storefront.state.session import SessionStore, full_name, read_stored_token


def test_sign_in_persists_session(session, storage):
    ok, err = session.sign_in("ada@example.com", "secret")

    assert ok and err == ""
    assert session.token == "tok-123"
    assert session.user.email == "ada@example.com"
    stored = json.loads(storage.get_item(SESSION_KEY))
    assert stored["token"] == "tok-123"
    assert stored["user"]["id"] == "u1"
    assert read_stored_token(storage) == "tok-123"


def test_sign_in_failure_leaves_state_alone(api, session, storage):
    api.fail_on.add("login")

    ok, err = session.sign_in("ada@example.com", "wrong")

    assert not ok
    assert err == "login failed"
    assert session.user is None
    assert storage.get_item(SESSION_KEY) is None


def test_sign_up_composes_full_name(api, session):
    ok, _ = session.sign_up("new@example.com", "pw", "Ada", "")
    assert ok
    assert api.calls[-1] == ("register", "new@example.com", "pw", "Ada")
    assert session.user.id == "u2"


def test_full_name():
    assert full_name("Ada", "Obi") == "Ada Obi"
    assert full_name(None, "Obi") == "Obi"
    assert full_name("", None) is None


def test_sign_out_is_idempotent(session, storage):
    session.sign_in("ada@example.com", "secret")

    assert session.sign_out() == (True, "")
    assert session.sign_out() == (True, "")
    assert session.user is None
    assert session.token is None
    assert storage.get_item(SESSION_KEY) is None


def test_restore_rehydrates_and_notifies(api, storage):
    storage.set_item(SESSION_KEY, json.dumps({"user": {"id": "u9", "email": "x@y.z"}, "token": "t9"}))
    seen = []
    store = SessionStore(api, storage)
    store.subscribe(seen.append)

    store.restore()

    assert store.loading is False
    assert store.token == "t9"
    assert [u.id for u in seen] == ["u9"]


def test_restore_with_corrupt_session_is_not_fatal(api, storage):
    storage.set_item(SESSION_KEY, "{not json")
    store = SessionStore(api, storage)

    store.restore()

    assert store.user is None
    assert read_stored_token(storage) is None


def test_admin_role_is_case_insensitive(api, session):
    api.user.role = "admin"
    session.sign_in("ada@example.com", "secret")
    assert session.is_admin
