"""JSON-file document store with simulated accounts.

Credentials are stored in plain text. This is a local simulation and is NOT
secure.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote

from pydantic import ValidationError

from notesynth.errors import AuthError
from notesynth.models.bundle import UserBundle
from notesynth.utils.io import read_json, write_json
from notesynth.utils.progress import log_error, log_warning

USERS_FILE = "users.json"
CURRENT_USER_FILE = "current_user"
DATA_DIR = "data"
DEMO_OTP = "123456"


def default_data_dir() -> Path:
    return Path(os.environ.get("NOTESYNTH_HOME", Path.home() / ".notesynth"))


class DocumentStore:
    """Maps a user id (email) to a :class:`UserBundle` on disk."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root) if root is not None else default_data_dir()

    # --- accounts ---

    def _users(self) -> dict[str, str]:
        path = self.root / USERS_FILE
        if not path.exists():
            return {}
        try:
            users = read_json(path)
        except (OSError, ValueError) as e:
            log_warning(f"Could not read accounts ({e}); treating as empty")
            return {}
        return users if isinstance(users, dict) else {}

    def register(self, email: str, password: str) -> bool:
        """Create an account. Returns False if the email is taken."""
        if not email or not password:
            raise AuthError("Please fill in all fields.")
        users = self._users()
        if email in users:
            return False
        users[email] = password
        write_json(self.root / USERS_FILE, users)
        return True

    def login(self, email: str, password: str) -> bool:
        return bool(email) and self._users().get(email) == password

    @staticmethod
    def verify_otp(code: str) -> bool:
        return code.strip() == DEMO_OTP

    # --- current user ---

    def current_user(self) -> str | None:
        path = self.root / CURRENT_USER_FILE
        try:
            user = path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            log_warning(f"Could not read current user: {e}")
            return None
        return user or None

    def set_current_user(self, email: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / CURRENT_USER_FILE).write_text(email, encoding="utf-8")

    def clear_current_user(self) -> None:
        (self.root / CURRENT_USER_FILE).unlink(missing_ok=True)

    # --- bundles ---

    def bundle_path(self, user_id: str) -> Path:
        return self.root / DATA_DIR / f"{quote(user_id, safe='')}.json"

    def load(self, user_id: str) -> UserBundle:
        """Load a bundle; absent or unparseable data yields an empty bundle."""
        path = self.bundle_path(user_id)
        if not path.exists():
            return UserBundle()
        try:
            return UserBundle.model_validate(read_json(path))
        except (OSError, ValueError, ValidationError) as e:
            log_warning(f"Failed to load data for {user_id}: {e}")
            return UserBundle()

    def save(self, user_id: str, bundle: UserBundle) -> bool:
        """Persist a bundle. A failed write is logged and dropped."""
        try:
            write_json(self.bundle_path(user_id), bundle.model_dump(mode="json"))
        except (OSError, TypeError, ValueError) as e:
            log_error(f"Failed to save data for {user_id}: {e}")
            return False
        return True
