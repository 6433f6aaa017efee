# This file implements the single shared password that gates the dashboard.
# It exists so first-run setup, login lockout, and session expiry follow one set of rules.
# Hashing is plain SHA-256; the gate keeps casual users out and makes no stronger claim.
# All state lives in the property store so it survives dashboard restarts.

from __future__ import annotations

import hashlib
import hmac
import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dayuse_pricing.storage.property_store import PropertyStore

LOGGER = logging.getLogger("security")

PASSWORD_HASH_KEY = "app_password_hash"
LOGIN_ATTEMPTS_KEY = "login_attempts"
SESSION_KEY = "session"


class PasswordPolicyError(ValueError):
    """Raised when a new or changed password does not satisfy the local policy."""


def hash_password(message: str) -> str:
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def verify_password(candidate: str, stored_hash: str | None) -> bool:
    if not stored_hash:
        return False
    return hmac.compare_digest(hash_password(candidate), stored_hash)


@dataclass(frozen=True)
class LockoutStatus:
    is_locked: bool
    remaining_seconds: int


@dataclass(frozen=True)
class LoginOutcome:
    success: bool
    is_locked: bool = False
    remaining_attempts: int = 0
    lockout_seconds: int = 0


class LoginAttemptTracker:
    def __init__(
        self,
        store: PropertyStore,
        *,
        max_attempts: int = 5,
        lockout_seconds: int = 30,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self.clock = clock

    def _state(self) -> dict[str, Any]:
        state = self.store.get_state(LOGIN_ATTEMPTS_KEY, None)
        if not isinstance(state, dict):
            return {"attempts": 0, "lockout_until": None}
        return state

    def record_failure(self) -> LoginOutcome:
        attempts = int(self._state().get("attempts", 0)) + 1
        lockout_until = None
        is_locked = attempts >= self.max_attempts
        if is_locked:
            lockout_until = self.clock() + self.lockout_seconds
            LOGGER.warning("login locked after %s failed attempts for %ss", attempts, self.lockout_seconds)

        self.store.set_state(LOGIN_ATTEMPTS_KEY, {"attempts": attempts, "lockout_until": lockout_until})
        return LoginOutcome(
            success=False,
            is_locked=is_locked,
            remaining_attempts=max(0, self.max_attempts - attempts),
            lockout_seconds=self.lockout_seconds if is_locked else 0,
        )

    def reset(self) -> None:
        self.store.delete_state(LOGIN_ATTEMPTS_KEY)

    def check_lockout(self) -> LockoutStatus:
        lockout_until = self._state().get("lockout_until")
        if not lockout_until:
            return LockoutStatus(is_locked=False, remaining_seconds=0)

        now = self.clock()
        if now >= float(lockout_until):
            self.reset()
            return LockoutStatus(is_locked=False, remaining_seconds=0)
        return LockoutStatus(is_locked=True, remaining_seconds=math.ceil(float(lockout_until) - now))


class SessionManager:
    def __init__(
        self,
        store: PropertyStore,
        *,
        duration_seconds: int = 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.duration_seconds = duration_seconds
        self.clock = clock

    def create(self, hotel_id: str | None = None) -> dict[str, Any]:
        now = self.clock()
        session = {"created_at": now, "expires_at": now + self.duration_seconds, "hotel_id": hotel_id}
        self.store.set_state(SESSION_KEY, session)
        return session

    def get(self) -> dict[str, Any] | None:
        session = self.store.get_state(SESSION_KEY, None)
        if not isinstance(session, dict) or "expires_at" not in session:
            return None
        if self.clock() >= float(session["expires_at"]):
            self.clear()
            return None
        return session

    def is_valid(self) -> bool:
        return self.get() is not None

    def refresh(self, hotel_id: str | None = None) -> None:
        session = self.get()
        if session is None:
            return
        session["expires_at"] = self.clock() + self.duration_seconds
        if hotel_id is not None:
            session["hotel_id"] = hotel_id
        self.store.set_state(SESSION_KEY, session)

    def clear(self) -> None:
        self.store.delete_state(SESSION_KEY)

    def remaining_seconds(self) -> int:
        session = self.get()
        if session is None:
            return 0
        return max(0, math.ceil(float(session["expires_at"]) - self.clock()))


class PasswordGate:
    def __init__(
        self,
        store: PropertyStore,
        *,
        min_length: int = 4,
        tracker: LoginAttemptTracker | None = None,
        sessions: SessionManager | None = None,
    ) -> None:
        self.store = store
        self.min_length = min_length
        self.tracker = tracker or LoginAttemptTracker(store)
        self.sessions = sessions or SessionManager(store)

    def is_password_set(self) -> bool:
        return self.store.get_state(PASSWORD_HASH_KEY, None) is not None

    def _validate_new_password(self, password: str, confirm: str) -> None:
        if len(password) < self.min_length:
            raise PasswordPolicyError(f"Password must be at least {self.min_length} characters")
        if password != confirm:
            raise PasswordPolicyError("Passwords do not match")

    def set_initial_password(self, password: str, confirm: str, *, hotel_id: str | None = None) -> None:
        if self.is_password_set():
            raise PasswordPolicyError("A password is already set; use change_password instead")
        self._validate_new_password(password, confirm)
        self.store.set_state(PASSWORD_HASH_KEY, hash_password(password))
        self.sessions.create(hotel_id)

    def change_password(self, current: str, new_password: str, confirm: str) -> None:
        if not current:
            raise PasswordPolicyError("Enter the current password")
        self._validate_new_password(new_password, confirm)
        if not verify_password(current, self.store.get_state(PASSWORD_HASH_KEY, None)):
            raise PasswordPolicyError("Current password is incorrect")
        self.store.set_state(PASSWORD_HASH_KEY, hash_password(new_password))
        LOGGER.info("shared password changed")

    def attempt_login(self, password: str, *, hotel_id: str | None = None) -> LoginOutcome:
        lockout = self.tracker.check_lockout()
        if lockout.is_locked:
            return LoginOutcome(success=False, is_locked=True, lockout_seconds=lockout.remaining_seconds)

        if verify_password(password, self.store.get_state(PASSWORD_HASH_KEY, None)):
            self.tracker.reset()
            self.sessions.create(hotel_id)
            return LoginOutcome(success=True, remaining_attempts=self.tracker.max_attempts)

        outcome = self.tracker.record_failure()
        LOGGER.info("login failed remaining_attempts=%s", outcome.remaining_attempts)
        return outcome

    def logout(self) -> None:
        self.sessions.clear()
