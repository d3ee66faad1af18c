"""
End-to-end tests for the AuthSystem facade.
"""

import asyncio
import json

import pytest

from LocalAuth.core.auth import AuthSystem, JsonFileKeyValueStore, MemoryKeyValueStore, Screen
from LocalAuth.test.conftest import LoginRecorder, ManualLoop, fill


def register(system, email="a@b.com", password="secret1", username="Ann"):
    system.show_register()
    fill(system, email=email, password=password, confirmPassword=password, username=username)
    return system.submit()


class TestLogin:
    """Tests for the login screen."""

    def test_register_then_login(self, auth_system, login_recorder):
        assert register(auth_system)
        auth_system.logout()

        fill(auth_system, email="a@b.com", password="secret1")
        assert auth_system.submit()

        assert auth_system.is_authenticated
        assert auth_system.current_user.username == "Ann"
        assert auth_system.current_user.profile_image is None
        assert len(login_recorder.users) == 2

    def test_wrong_password(self, auth_system):
        register(auth_system)
        auth_system.logout()

        fill(auth_system, email="a@b.com", password="wrong12")
        assert not auth_system.submit()
        assert auth_system.errors == {"password": "Incorrect password"}
        assert not auth_system.is_authenticated

    def test_unknown_email(self, auth_system, login_recorder):
        fill(auth_system, email="ghost@b.com", password="secret1")
        assert not auth_system.submit()
        assert auth_system.errors == {"email": "No user found with this email"}
        assert login_recorder.users == []

    def test_validation_runs_before_lookup(self, auth_system):
        fill(auth_system, email="ghost", password="123")
        assert not auth_system.submit()
        assert auth_system.errors == {
            "email": "Invalid email format",
            "password": "Password must be at least 6 characters",
        }

    def test_errors_are_replaced_each_pass(self, auth_system):
        auth_system.submit()
        assert set(auth_system.errors) == {"email", "password"}

        fill(auth_system, email="ghost@b.com", password="secret1")
        auth_system.submit()
        assert auth_system.errors == {"email": "No user found with this email"}


class TestRegister:
    """Tests for the register screen."""

    def test_register_authenticates(self, auth_system, login_recorder, memory_store):
        assert register(auth_system)
        assert auth_system.is_authenticated
        assert login_recorder.users == [auth_system.current_user]
        assert json.loads(memory_store.get("currentUser"))["username"] == "Ann"

    def test_register_errors(self, auth_system, memory_store):
        auth_system.show_register()
        fill(auth_system, email="a@b.com", password="secret1", confirmPassword="secret2")
        assert not auth_system.submit()
        assert auth_system.errors == {
            "confirmPassword": "Passwords do not match",
            "username": "Full name is required",
        }
        assert memory_store.get("users") is None

    def test_unwritable_store_reports_form_error(self, tmp_path):
        system = AuthSystem.create(store=JsonFileKeyValueStore(str(tmp_path)), loop=ManualLoop())
        assert not register(system)
        assert system.errors == {"form": "Could not save your changes. Please try again."}
        assert not system.is_authenticated


class TestFieldEdits:
    """Tests for error clearing on edit."""

    def test_edit_clears_only_that_field(self, auth_system):
        auth_system.submit()
        auth_system.change_field("email", "a@b.com")
        assert auth_system.errors == {"password": "Password is required"}

    def test_editing_reset_email_clears_all(self, auth_system):
        auth_system.submit()
        auth_system.change_field("resetEmail", "x")
        assert auth_system.errors == {}

    def test_unknown_field(self, auth_system):
        with pytest.raises(ValueError):
            auth_system.change_field("phone", "123")

    def test_toggle_password_visibility(self, auth_system):
        assert auth_system.toggle_password_visibility() is True
        assert auth_system.toggle_password_visibility() is False


class TestLogout:
    """Tests for logout."""

    def test_logout_resets_everything(self, auth_system, memory_store):
        register(auth_system)
        auth_system.change_field("resetEmail", "x@y.com")
        auth_system.toggle_password_visibility()

        auth_system.logout()

        assert memory_store.get("currentUser") is None
        assert auth_system.form.to_dict() == {
            "email": "",
            "password": "",
            "confirmPassword": "",
            "username": "",
            "resetEmail": "",
        }
        assert auth_system.errors == {}
        assert auth_system.screen is Screen.LOGIN
        assert not auth_system.show_password
        assert not auth_system.is_authenticated

    def test_logout_cancels_pending_reset(self, auth_system, manual_loop):
        auth_system.show_forgot_password()
        fill(auth_system, resetEmail="x@y.com")
        assert auth_system.submit()

        auth_system.logout()
        assert not auth_system.reset_sent
        assert manual_loop.pending == []


class TestForgotPassword:
    """Tests for the reset screen through the facade."""

    def test_reset_flow(self, auth_system, manual_loop, memory_store):
        auth_system.show_forgot_password()
        assert auth_system.focused_field == "resetEmail"

        fill(auth_system, resetEmail="x@y.com")
        assert auth_system.submit()
        assert auth_system.reset_sent
        assert memory_store.keys() == []

        manual_loop.advance(3.0)
        assert auth_system.screen is Screen.LOGIN
        assert not auth_system.reset_sent

    def test_reset_errors(self, auth_system):
        auth_system.show_forgot_password()
        assert not auth_system.submit()
        assert auth_system.errors == {"resetEmail": "Email is required"}

    def test_reset_without_event_loop(self):
        system = AuthSystem.create(store=MemoryKeyValueStore(), reset_delay=0.01)
        try:
            system.show_forgot_password()
            system.change_field("resetEmail", "x@y.com")

            assert system.submit()
            assert system.errors == {}
            assert system.reset_sent

            system.reset_flow.loop.run_until_complete(asyncio.sleep(0.05))
            assert system.screen is Screen.LOGIN
        finally:
            system.close()

    def test_close_cancels_timer(self, auth_system, manual_loop):
        auth_system.show_forgot_password()
        fill(auth_system, resetEmail="x@y.com")
        auth_system.submit()

        auth_system.close()
        manual_loop.advance(3.0)
        assert auth_system.screen is Screen.FORGOT_PASSWORD


class TestStartup:
    """Tests for session rehydration through AuthSystem.create."""

    def test_persisted_session_skips_login(self):
        store = MemoryKeyValueStore()
        first = AuthSystem.create(store=store, loop=ManualLoop())
        register(first)

        recorder = LoginRecorder()
        second = AuthSystem.create(store=store, on_login=recorder, loop=ManualLoop())
        assert second.is_authenticated
        assert second.current_user == first.current_user
        assert recorder.users == []

    def test_snapshot(self, auth_system):
        register(auth_system)
        snapshot = auth_system.snapshot()
        assert snapshot["screen"] == "register"
        assert snapshot["authenticated"] is True
        assert snapshot["currentUser"]["profileImage"] is None
        assert snapshot["errors"] == {}
