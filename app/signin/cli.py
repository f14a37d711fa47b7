#!/usr/bin/env python3
"""Terminal sign-in client."""
import argparse
import asyncio
import getpass
import logging
import sys
from dataclasses import replace
from typing import Callable, Optional

from signin.api.auth import AuthService
from signin.api.otp import OtpService
from signin.config.settings import configure_logging, get_settings
from signin.error.exceptions import ConfigurationException
from signin.flow.constants import Stage
from signin.flow.controller import WorkflowController
from signin.screens import render

logger = logging.getLogger(__name__)

QUIT = ":quit"
LOGOUT = ":logout"
SWITCH_MODE = ":mode"
SHOW_PASSWORD = ":show"
OTP_BACKSPACE = "-"


async def ask(prompt: str, reader: Callable[[str], str] = input) -> str:
    """Read a line without blocking the event loop"""
    return await asyncio.to_thread(reader, prompt)


async def credentials_screen(controller: WorkflowController) -> bool:
    """Returns False when the user quits"""
    commands = [f"{SHOW_PASSWORD} toggles password visibility"]
    if controller.supports_registration:
        commands.append(f"{SWITCH_MODE} switches login/register")
    username = await ask(f"Username ({', '.join(commands)}): ")
    if username == QUIT:
        return False
    if username == SWITCH_MODE:
        controller.toggle_mode()
        return True
    if username == SHOW_PASSWORD:
        controller.toggle_password_visibility()
        return True
    controller.update_username(username)

    password = await ask("Password: ", getpass.getpass)
    controller.update_password(password)

    await controller.submit_credentials()
    return True


async def otp_screen(controller: WorkflowController) -> bool:
    """Returns False when the user quits"""
    widget = controller.otp_widget
    line = await ask(
        f"OTP (digits, '{OTP_BACKSPACE}' = backspace, empty line submits, {LOGOUT}): "
    )
    if line == QUIT:
        return False
    if line == LOGOUT:
        controller.reset()
        return True
    if not line:
        await widget.submit()
        return True

    for char in line:
        if char == OTP_BACKSPACE:
            widget.backspace()
        else:
            widget.type_text(char)
    return True


async def completed_screen(controller: WorkflowController) -> bool:
    """Returns False when the user quits"""
    line = await ask(f"Press Enter for Done ({QUIT} to exit): ")
    if line == QUIT:
        return False
    controller.reset()
    return True


async def run(controller: WorkflowController) -> None:
    """Drive the workflow until the user quits"""
    screens = {
        Stage.CREDENTIALS: credentials_screen,
        Stage.AWAITING_OTP: otp_screen,
        Stage.COMPLETED: completed_screen,
    }
    while True:
        print(f"\n{render(controller)}\n")
        if not await screens[controller.stage](controller):
            break


def main(argv: Optional[list] = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Staff sign-in client",
        epilog="""
Examples:
  # Against the local mock server (python -m mock_api.server)
  %(prog)s

  # Against another endpoint with the register switch enabled
  %(prog)s --api-url https://example.org/api --register
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--api-url",
        help="Base URL of the login and OTP endpoints (default: API_BASE_URL)"
    )
    parser.add_argument(
        "--register",
        action="store_true",
        help="Offer the login/register switch (default: SUPPORTS_REGISTRATION)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Transport timeout in seconds (default: API_TIMEOUT, none)"
    )
    args = parser.parse_args(argv)

    configure_logging()
    try:
        settings = get_settings()
    except ConfigurationException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    overrides = {}
    if args.api_url:
        overrides["api_base_url"] = args.api_url
    if args.register:
        overrides["supports_registration"] = True
    if args.timeout is not None:
        overrides["api_timeout"] = args.timeout
    settings = replace(settings, **overrides)
    logger.info(f"Using API at {settings.api_base_url}")

    controller = WorkflowController(
        auth_service=AuthService(settings),
        otp_service=OtpService(settings),
        supports_registration=settings.supports_registration
    )
    try:
        asyncio.run(run(controller))
    except (EOFError, KeyboardInterrupt):
        print("\nStopping...")


if __name__ == "__main__":
    main()
