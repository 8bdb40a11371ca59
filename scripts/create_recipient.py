"""Utility script to register a recipient and print an access token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notifyhub.application.use_cases.recipients import create_recipient
from notifyhub.infrastructure.database import SessionLocal, initialize_database
from notifyhub.infrastructure.security import create_recipient_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for recipient creation."""

    parser = argparse.ArgumentParser(
        description="Register a notification recipient for local development.",
    )
    parser.add_argument("--name", default="Administrator", help="Display name")
    parser.add_argument("--email", default="admin@example.com", help="Email address")
    parser.add_argument("--phone", default=None, help="Phone number in E.164 format")
    parser.add_argument(
        "--verified",
        action="store_true",
        help="Mark the email address and phone number as verified",
    )
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Allow the recipient to manage templates and notify others",
    )
    return parser.parse_args()


def main() -> None:
    """Create a recipient using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        recipient = create_recipient(
            session,
            name=args.name,
            email=args.email,
            phone=args.phone,
            email_verified=args.verified,
            phone_verified=args.verified,
            is_admin=args.admin,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the recipient: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the recipient: {exc}") from exc
    else:
        print(
            "Recipient created:\n"
            f"  ID: {recipient.id}\n"
            f"  Name: {recipient.name}\n"
            f"  Email: {recipient.email}\n"
            f"  Token: {create_recipient_token(recipient.id)}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
