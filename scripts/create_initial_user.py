"""Utility script to create an initial user in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from tourney_hub.application.use_cases.users.create_user import create_user
from tourney_hub.domain.entities import ROLE_ADMIN, ROLE_USER
from tourney_hub.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the Tourney Hub API.",
    )
    parser.add_argument(
        "--username",
        default="admin",
        help="Login name of the user (default: admin)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address of the user (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password for the user. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Grant the admin role, allowing the user to broadcast notifications.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("No valid password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            email=args.email,
            password=password,
            role=ROLE_ADMIN if args.admin else ROLE_USER,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error saving the user to the database: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
