"""Authentication commands."""

from typing import Optional

import typer
from rich.prompt import Prompt

from chomper.api.auth import AuthAPI
from chomper.api.client import APIClient
from chomper.config import get_config_manager
from chomper.services.auth_service import AuthService
from chomper.utils.errors import AuthError
from chomper.utils.task_cache import clear_list_order
from chomper.utils.ui.console import get_console
from chomper.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
)

from .decorators import command_wrapper

console = get_console()


def _ask_credentials(
    email: Optional[str], password: Optional[str], *, confirm: bool = False
) -> tuple[str, str]:
    """Prompt for whatever was not given on the command line."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)
        if confirm and password != Prompt.ask("Confirm password", password=True):
            raise AuthError("Passwords do not match")
    if not email or not password:
        raise AuthError("Email and password are required")
    return email, password


@command_wrapper(auth_required=False)
async def login(
    email: Optional[str] = typer.Option(None, "--email", help="Email address"),
    password: Optional[str] = typer.Option(None, "--password", help="Password"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Login to Chomper."""
    email, password = _ask_credentials(email, password)
    auth_service = AuthService(get_config_manager(profile))

    async with APIClient(profile) as client:
        with console.status("Logging in..."):
            user = await auth_service.sign_in(AuthAPI(client), email, password)

    format_success(f"Logged in as {user.email or user.id}")


@command_wrapper(auth_required=False)
async def signup(
    email: Optional[str] = typer.Option(None, "--email", help="Email address"),
    password: Optional[str] = typer.Option(None, "--password", help="Password"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Create a new Chomper account."""
    email, password = _ask_credentials(email, password, confirm=True)
    auth_service = AuthService(get_config_manager(profile))

    async with APIClient(profile) as client:
        with console.status("Creating account..."):
            user = await auth_service.sign_up(AuthAPI(client), email, password)

    if user is None:
        format_success(f"Account created for {email}")
        format_info("Check your email to confirm the address, then run: chomper login")
        return
    format_success(f"Account created. Logged in as {user.email or user.id}")


@command_wrapper(auth_required=False)
async def logout(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Logout from Chomper."""
    auth_service = AuthService(get_config_manager(profile))
    if not auth_service.is_authenticated():
        format_info("Not logged in")
        return

    async with APIClient(profile) as client:
        await auth_service.sign_out(AuthAPI(client))
    clear_list_order(profile)
    format_success("Logged out")


@command_wrapper
async def whoami(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format (pretty/json/yaml)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show current user information."""
    auth_service = AuthService(get_config_manager(profile))

    async with APIClient(profile) as client:
        user = await auth_service.fetch_user(AuthAPI(client))

    format_output(user.model_dump(mode="json"), output)
