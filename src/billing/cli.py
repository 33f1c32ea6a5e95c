"""
Command line entry point.

Run with:
    billing serve                       # API server
    billing migrate                     # Apply database migrations
    billing cleanup-tokens              # Delete expired refresh tokens
    billing create-superadmin --email admin@example.com --name Admin
"""

import argparse
import asyncio
import getpass
import sys

import uvicorn
from pydantic import ValidationError as SettingsValidationError

from src.billing.core.config import get_settings
from src.billing.core.db import dispose_engine, get_session, run_migrations_sync
from src.billing.core.exceptions import ConflictError
from src.billing.core.logging import get_logger, setup_logging
from src.billing.repositories import RefreshTokenRepository, TenantRepository, UserRepository
from src.billing.services import AuthService

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(prog="billing", description="Billing API")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: PORT setting)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    migrate = commands.add_parser("migrate", help="Apply database migrations")
    migrate.add_argument("--revision", default="head", help="Target revision (default: head)")

    commands.add_parser("cleanup-tokens", help="Delete expired refresh tokens")

    admin = commands.add_parser("create-superadmin", help="Create a platform administrator")
    admin.add_argument("--email", required=True)
    admin.add_argument("--name", required=True)
    admin.add_argument(
        "--password",
        default=None,
        help="Password (prompted for when omitted)",
    )

    return parser.parse_args(argv)


def _with_auth_service(session) -> AuthService:
    return AuthService(
        UserRepository(session),
        RefreshTokenRepository(session),
        TenantRepository(session),
        session,
    )


async def cleanup_tokens() -> int:
    """Delete expired refresh tokens for every user."""
    try:
        async with get_session() as session:
            return await _with_auth_service(session).cleanup_all_expired()
    finally:
        await dispose_engine()


async def create_superadmin(email: str, name: str, password: str) -> None:
    try:
        async with get_session() as session:
            user = await _with_auth_service(session).create_super_admin(email, password, name)
            print(f"Created platform administrator {user.email} ({user.id})")
    finally:
        await dispose_engine()


def _read_password() -> str:
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Confirm password: "):
        print("Passwords do not match", file=sys.stderr)
        sys.exit(1)
    return password


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        settings = get_settings()
    except SettingsValidationError as e:
        # Fail fast on missing or invalid configuration
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(debug=settings.debug)

    if args.command == "serve":
        uvicorn.run(
            "src.billing.main:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=args.reload,
        )
    elif args.command == "migrate":
        logger.info("Running migrations", revision=args.revision)
        run_migrations_sync(args.revision)
    elif args.command == "cleanup-tokens":
        count = asyncio.run(cleanup_tokens())
        print(f"Deleted {count} expired refresh token(s)")
    elif args.command == "create-superadmin":
        password = args.password or _read_password()
        if len(password) < MIN_PASSWORD_LENGTH:
            print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", file=sys.stderr)
            sys.exit(1)
        try:
            asyncio.run(create_superadmin(args.email, args.name, password))
        except ConflictError as e:
            print(e.message, file=sys.stderr)
            sys.exit(1)


def run() -> None:
    """Console script entry point."""
    main()


if __name__ == "__main__":
    run()
