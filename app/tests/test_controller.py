import asyncio
import os
import sys
import threading
import unittest
from unittest.mock import MagicMock

# Add the parent directory to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from signin.error.exceptions import ApiRejection, ComponentException, TransportError
from signin.flow.constants import LOGIN, REGISTER, Stage, StatusKind
from signin.flow.controller import WorkflowController
from signin.flow.types import AuthResult
from tests.fakes import FakeAuthService, FakeOtpService


def make_controller(auth=None, otp=None, supports_registration=False, request_focus=None):
    return WorkflowController(
        auth_service=auth or FakeAuthService(),
        otp_service=otp or FakeOtpService(),
        supports_registration=supports_registration,
        request_focus=request_focus
    )


async def sign_in(controller, username="alice", password="secret"):
    controller.update_username(username)
    controller.update_password(password)
    return await controller.submit_credentials()


class TestCredentials(unittest.IsolatedAsyncioTestCase):
    def test_initial_state(self):
        controller = make_controller()
        self.assertIs(controller.stage, Stage.CREDENTIALS)
        self.assertIsNone(controller.identity)
        self.assertIsNone(controller.otp_widget)
        self.assertFalse(controller.is_submitting)

    async def test_empty_fields_never_reach_the_network(self):
        for username, password in (("", ""), ("alice", ""), ("", "secret")):
            auth = FakeAuthService()
            controller = make_controller(auth=auth)

            self.assertFalse(await sign_in(controller, username, password))

            self.assertEqual(auth.calls, [])
            self.assertIs(controller.stage, Stage.CREDENTIALS)
            self.assertIs(controller.status.kind, StatusKind.ERROR)
            self.assertEqual(controller.status.text, "Please provide both username and password.")
            self.assertFalse(controller.is_submitting)

    async def test_validation_failure_is_logged_with_field(self):
        controller = make_controller()
        with self.assertLogs("signin.error.handler", level="INFO") as log:
            await sign_in(controller, "alice", "")

        record = log.records[-1]
        self.assertEqual(record.levelname, "INFO")
        self.assertEqual(record.component, "credentials_form")
        self.assertEqual(record.error["type"], "validation")
        self.assertEqual(record.error["details"], {"field": "password"})

    async def test_successful_login_moves_to_otp(self):
        auth = FakeAuthService(result=AuthResult(message="ok", account_id="u123"))
        controller = make_controller(auth=auth)

        self.assertTrue(await sign_in(controller))

        self.assertEqual(auth.calls, [("alice", "secret", None)])
        self.assertIs(controller.stage, Stage.AWAITING_OTP)
        self.assertEqual(controller.identity.account_id, "u123")
        self.assertIs(controller.status.kind, StatusKind.INFO)
        self.assertEqual(controller.status.text, "ok")
        self.assertFalse(controller.is_submitting)
        self.assertEqual(controller.draft.username, "")
        self.assertEqual(controller.draft.password, "")

    async def test_otp_widget_receives_identity_and_empty_buffer(self):
        focus = MagicMock()
        controller = make_controller(request_focus=focus)
        await sign_in(controller)

        widget = controller.otp_widget
        self.assertIs(widget.identity, controller.identity)
        self.assertEqual(widget.slots, ("",) * 6)
        focus.assert_called_with(0)

    async def test_transport_failure_stays_on_credentials(self):
        auth = FakeAuthService(error=TransportError("connection refused", service="auth", action="login"))
        controller = make_controller(auth=auth)

        self.assertFalse(await sign_in(controller))

        self.assertIs(controller.stage, Stage.CREDENTIALS)
        self.assertTrue(controller.status.is_error)
        self.assertEqual(controller.status.text, "Network error. Could not connect to server.")
        self.assertFalse(controller.is_submitting)
        self.assertIsNone(controller.identity)
        # Draft is kept so the user can resubmit
        self.assertEqual(controller.draft.username, "alice")

    async def test_unexpected_exception_is_reported_as_network_error(self):
        auth = FakeAuthService(error=RuntimeError("boom"))
        controller = make_controller(auth=auth)
        await sign_in(controller)
        self.assertEqual(controller.status.text, "Network error. Could not connect to server.")
        self.assertFalse(controller.is_submitting)

    async def test_rejection_shows_endpoint_message(self):
        auth = FakeAuthService(error=ApiRejection("Invalid credentials", service="auth", action="login"))
        controller = make_controller(auth=auth)

        await sign_in(controller)

        self.assertIs(controller.stage, Stage.CREDENTIALS)
        self.assertEqual(controller.status.text, "Invalid credentials")

    async def test_rejection_without_message_uses_fallback(self):
        auth = FakeAuthService(error=ApiRejection("", service="auth", action="login"))
        controller = make_controller(auth=auth)
        await sign_in(controller)
        self.assertEqual(controller.status.text, "An error occurred.")

    async def test_success_without_account_id_stays_on_credentials(self):
        auth = FakeAuthService(result=AuthResult(message="ok", account_id=None))
        controller = make_controller(auth=auth)

        self.assertFalse(await sign_in(controller))

        self.assertIs(controller.stage, Stage.CREDENTIALS)
        self.assertIsNone(controller.identity)
        self.assertTrue(controller.status.is_error)

    async def test_second_submit_while_in_flight_is_ignored(self):
        release = threading.Event()
        auth = FakeAuthService(release=release)
        controller = make_controller(auth=auth)
        controller.update_username("alice")
        controller.update_password("secret")

        first = asyncio.create_task(controller.submit_credentials())
        await asyncio.sleep(0)
        self.assertTrue(controller.is_submitting)
        self.assertFalse(await controller.submit_credentials())

        release.set()
        self.assertTrue(await first)
        self.assertEqual(len(auth.calls), 1)

    async def test_response_after_reset_is_dropped(self):
        release = threading.Event()
        auth = FakeAuthService(release=release)
        controller = make_controller(auth=auth)
        controller.update_username("alice")
        controller.update_password("secret")

        pending = asyncio.create_task(controller.submit_credentials())
        await asyncio.sleep(0)
        controller.reset()
        self.assertTrue(controller.is_submitting)
        release.set()

        self.assertFalse(await pending)
        self.assertFalse(controller.is_submitting)
        self.assertIs(controller.stage, Stage.CREDENTIALS)
        self.assertIsNone(controller.identity)
        self.assertEqual(controller.status.text, "")

    async def test_resubmit_after_reset_waits_for_first_call(self):
        release = threading.Event()
        auth = FakeAuthService(release=release)
        controller = make_controller(auth=auth)
        controller.update_username("alice")
        controller.update_password("secret")

        pending = asyncio.create_task(controller.submit_credentials())
        await asyncio.sleep(0)
        controller.reset()

        self.assertFalse(await sign_in(controller, "bob", "hunter2"))
        release.set()
        self.assertFalse(await pending)
        self.assertEqual(auth.calls, [("alice", "secret", None)])

        # Draft survives the ignored submit, so the next one goes through
        self.assertTrue(await controller.submit_credentials())
        self.assertEqual(auth.calls[-1], ("bob", "hunter2", None))
        self.assertEqual(len(auth.calls), 2)

    async def test_submit_outside_credentials_is_ignored(self):
        auth = FakeAuthService()
        controller = make_controller(auth=auth)
        await sign_in(controller)
        self.assertFalse(await controller.submit_credentials())
        self.assertEqual(len(auth.calls), 1)

    async def test_field_updates_ignored_outside_credentials(self):
        controller = make_controller()
        await sign_in(controller)
        controller.update_username("mallory")
        self.assertEqual(controller.draft.username, "")


class TestRegistrationMode(unittest.IsolatedAsyncioTestCase):
    async def test_register_mode_is_sent_when_supported(self):
        auth = FakeAuthService()
        controller = make_controller(auth=auth, supports_registration=True)

        self.assertTrue(controller.set_mode(REGISTER))
        await sign_in(controller)

        self.assertEqual(auth.calls, [("alice", "secret", REGISTER)])

    async def test_login_mode_is_sent_when_supported(self):
        auth = FakeAuthService()
        controller = make_controller(auth=auth, supports_registration=True)
        await sign_in(controller)
        self.assertEqual(auth.calls, [("alice", "secret", LOGIN)])

    def test_mode_switch_unavailable_without_registration(self):
        controller = make_controller()
        self.assertFalse(controller.set_mode(REGISTER))
        self.assertEqual(controller.draft.mode, LOGIN)

    def test_toggle_mode_and_status_cleared(self):
        controller = make_controller(supports_registration=True)
        controller.status.kind = StatusKind.ERROR
        controller.status.text = "old"
        controller.toggle_mode()
        self.assertEqual(controller.draft.mode, REGISTER)
        self.assertEqual(controller.status.text, "")
        controller.toggle_mode()
        self.assertEqual(controller.draft.mode, LOGIN)

    def test_unknown_mode_raises(self):
        controller = make_controller(supports_registration=True)
        with self.assertRaises(ComponentException):
            controller.set_mode("admin")

    def test_password_visibility_toggle(self):
        controller = make_controller()
        controller.update_password("secret")
        self.assertEqual(controller.draft.masked_password(), "••••••")
        controller.toggle_password_visibility()
        self.assertEqual(controller.draft.masked_password(), "secret")


class TestOtpAndReset(unittest.IsolatedAsyncioTestCase):
    async def test_accepted_otp_completes_workflow(self):
        otp = FakeOtpService()
        controller = make_controller(otp=otp)
        await sign_in(controller)
        widget = controller.otp_widget
        for index, digit in enumerate("123456"):
            widget.change(index, digit)

        self.assertTrue(await widget.submit())

        self.assertEqual(otp.calls, [("u123", "123456")])
        self.assertIs(controller.stage, Stage.COMPLETED)
        self.assertIsNone(controller.otp_widget)
        self.assertFalse(widget.mounted)

    async def test_rejected_otp_stays_awaiting(self):
        otp = FakeOtpService(error=ApiRejection("Failed to save OTP", service="otp", action="save-otp"))
        controller = make_controller(otp=otp)
        await sign_in(controller)
        controller.otp_widget.type_text("123456")

        await controller.otp_widget.submit()

        self.assertIs(controller.stage, Stage.AWAITING_OTP)
        self.assertEqual(controller.otp_widget.status.text, "Failed to save OTP")

    def test_otp_confirmation_outside_awaiting_is_ignored(self):
        controller = make_controller()
        controller.handle_otp_confirmed()
        self.assertIs(controller.stage, Stage.CREDENTIALS)

    async def test_logout_from_otp_clears_everything(self):
        controller = make_controller()
        await sign_in(controller)
        widget = controller.otp_widget

        controller.reset()

        self.assertIs(controller.stage, Stage.CREDENTIALS)
        self.assertIsNone(controller.identity)
        self.assertIsNone(controller.otp_widget)
        self.assertFalse(widget.mounted)
        self.assertEqual(controller.status.text, "")

    async def test_done_from_completed_returns_to_credentials(self):
        controller = make_controller()
        await sign_in(controller)
        controller.otp_widget.type_text("123456")
        await controller.otp_widget.submit()

        controller.reset()

        self.assertIs(controller.stage, Stage.CREDENTIALS)

    async def test_reset_twice_equals_reset_once(self):
        for reach_stage in (Stage.CREDENTIALS, Stage.AWAITING_OTP, Stage.COMPLETED):
            controller = make_controller()
            controller.update_username("bob")
            if reach_stage is not Stage.CREDENTIALS:
                await sign_in(controller)
            if reach_stage is Stage.COMPLETED:
                controller.otp_widget.type_text("123456")
                await controller.otp_widget.submit()

            controller.reset()
            once = controller.snapshot()
            controller.reset()
            self.assertEqual(controller.snapshot(), once)
            self.assertEqual(once["stage"], "Credentials")
            self.assertEqual(once["draft"]["username"], "")
            self.assertIsNone(once["identity"])

    async def test_remount_after_logout_starts_with_empty_buffer(self):
        controller = make_controller()
        await sign_in(controller)
        controller.otp_widget.type_text("123")
        controller.reset()
        await sign_in(controller)
        self.assertEqual(controller.otp_widget.slots, ("",) * 6)

    async def test_snapshot_never_contains_password(self):
        controller = make_controller()
        controller.update_password("secret")
        self.assertNotIn("secret", repr(controller.snapshot()))


if __name__ == "__main__":
    unittest.main()
