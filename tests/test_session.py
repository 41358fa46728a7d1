"""登录、注册、登出与当前会话测试。"""
import tempfile
from pathlib import Path

import pytest

from pet_inventory.auth.models import AccountRole, AccountStatus
from pet_inventory.auth.session import SessionManager
from pet_inventory.errors import (
    AccountBlockedError,
    InvalidCredentialsError,
    MissingRequiredFieldError,
    UsernameTakenError,
)
from pet_inventory.store.record_store import RecordStore


def _block(store: RecordStore, username: str) -> None:
    accounts = store.load_accounts()
    store.save_accounts([
        a.model_copy(update={"status": AccountStatus.BLOCKED.value}) if a.username == username else a
        for a in accounts
    ])


def test_register_then_duplicate_username() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sessions = SessionManager(RecordStore(base_dir=Path(tmp)))
        alice = sessions.register("alice", "pw1")
        assert alice.role == AccountRole.USER
        assert alice.status == AccountStatus.ACTIVE
        with pytest.raises(UsernameTakenError):
            sessions.register("alice", "pw2")
        names = [a.username for a in sessions.list_accounts()]
        assert names == ["admin", "alice"]


def test_usernames_are_case_sensitive() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sessions = SessionManager(RecordStore(base_dir=Path(tmp)))
        sessions.register("alice", "pw")
        sessions.register("Alice", "pw")
        with pytest.raises(InvalidCredentialsError):
            sessions.authenticate("ALICE", "pw")
        assert sessions.authenticate("Alice", "pw").username == "Alice"


def test_register_requires_username_and_password() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sessions = SessionManager(RecordStore(base_dir=Path(tmp)))
        with pytest.raises(MissingRequiredFieldError):
            sessions.register("   ", "pw")
        with pytest.raises(MissingRequiredFieldError):
            sessions.register("bob", "")


def test_register_does_not_log_in() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sessions = SessionManager(RecordStore(base_dir=Path(tmp)))
        sessions.register("bob", "pw")
        assert sessions.current_session() is None


def test_register_stores_only_hash() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sessions = SessionManager(RecordStore(base_dir=Path(tmp)))
        sessions.register("carol", "sup3r-secret")
        raw = (Path(tmp) / "accounts.json").read_text(encoding="utf-8")
        assert "sup3r-secret" not in raw


def test_authenticate_sets_session() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = RecordStore(base_dir=Path(tmp))
        sessions = SessionManager(store)
        account = sessions.authenticate("admin", "123")
        assert account.role == AccountRole.ADMIN
        assert store.load_active_session_account_id() == account.id
        # 新进程恢复会话
        assert SessionManager(RecordStore(base_dir=Path(tmp))).current_session() == account


def test_authenticate_wrong_password_or_unknown_user() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sessions = SessionManager(RecordStore(base_dir=Path(tmp)))
        sessions.register("cat", "secret")
        with pytest.raises(InvalidCredentialsError):
            sessions.authenticate("cat", "wrong")
        with pytest.raises(InvalidCredentialsError):
            sessions.authenticate("dog", "secret")
        assert sessions.current_session() is None


def test_blocked_account_cannot_log_in() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = RecordStore(base_dir=Path(tmp))
        sessions = SessionManager(store)
        sessions.register("eve", "pw")
        _block(store, "eve")
        with pytest.raises(AccountBlockedError):
            sessions.authenticate("eve", "pw")
        assert sessions.current_session() is None


def test_blocked_account_with_wrong_password_is_invalid_credentials() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = RecordStore(base_dir=Path(tmp))
        sessions = SessionManager(store)
        sessions.register("eve", "pw")
        _block(store, "eve")
        with pytest.raises(InvalidCredentialsError):
            sessions.authenticate("eve", "nope")


def test_logout_is_idempotent() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        sessions = SessionManager(RecordStore(base_dir=Path(tmp)))
        sessions.logout()
        sessions.authenticate("admin", "123")
        sessions.logout()
        sessions.logout()
        assert sessions.current_session() is None


def test_current_session_for_deleted_account() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = RecordStore(base_dir=Path(tmp))
        sessions = SessionManager(store)
        frank = sessions.register("frank", "pw")
        sessions.authenticate("frank", "pw")
        store.save_accounts([a for a in store.load_accounts() if a.id != frank.id])
        assert sessions.current_session() is None


def test_open_session_ends_when_account_blocked() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = RecordStore(base_dir=Path(tmp))
        sessions = SessionManager(store)
        sessions.register("gina", "pw")
        sessions.authenticate("gina", "pw")
        assert sessions.current_session() is not None
        _block(store, "gina")
        assert sessions.current_session() is None
        assert store.load_active_session_account_id() is None
