"""Create a local test user with email/password auth.

Prints the user id and a bearer token for manual API testing.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sqlalchemy import select

from fitfeed.core.auth_jwt import create_access_token
from fitfeed.core.password import hash_password
from fitfeed.db.models import User
from fitfeed.db.session import get_session

# Default test user credentials (dev-only, never commit to prod)
DEFAULT_EMAIL = "test@example.com"
DEFAULT_PASSWORD = "password123"  # noqa: S105 fake, dev-only
DEFAULT_NAME = "Test User"


def create_test_user(email: str = DEFAULT_EMAIL, password: str = DEFAULT_PASSWORD, name: str = DEFAULT_NAME) -> str:
    """Create the user if the email is not registered yet.

    Returns:
        The user id (existing or new)
    """
    normalized_email = email.lower().strip()

    with get_session() as db:
        existing = db.execute(select(User).where(User.email == normalized_email)).scalar_one_or_none()
        if existing is not None:
            print(f"User already exists: {existing.id}")
            return existing.id

        user = User(email=normalized_email, password_hash=hash_password(password), name=name)
        db.add(user)
        db.flush()
        print(f"Created user {user.id} ({normalized_email})")
        return user.id


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a local test user")
    parser.add_argument("--email", default=DEFAULT_EMAIL)
    parser.add_argument("--password", default=DEFAULT_PASSWORD)
    parser.add_argument("--name", default=DEFAULT_NAME)
    args = parser.parse_args()

    user_id = create_test_user(email=args.email, password=args.password, name=args.name)
    print(f"Bearer token: {create_access_token(user_id, args.email.lower().strip())}")


if __name__ == "__main__":
    main()
