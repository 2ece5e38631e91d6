"""
Username/password storage backed by a JSON file of bcrypt hashes.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Dict, Union

import bcrypt

from cms.models import User
from cms.utils.validators import ValidationError, validate_credentials

logger = logging.getLogger(__name__)

# bcrypt only considers the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class CredentialError(Exception):
    """Base exception for credential storage errors."""
    pass


class DuplicateUser(CredentialError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"{username} is already taken.")


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


class CredentialStore:
    """Service for registering and verifying users."""

    def __init__(self, users_file: Union[str, Path], rounds: int = 12):
        self.users_file = Path(users_file)
        self.rounds = rounds
        self._lock = threading.Lock()

    def load(self) -> Dict[str, str]:
        """
        Read the username -> hash mapping.

        A missing, empty or unreadable file is treated as no users.
        """
        if not self.users_file.exists():
            return {}

        try:
            raw = self.users_file.read_text(encoding='utf-8')
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credentials file {self.users_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed credentials file {self.users_file}")
            return {}
        return data

    def save(self, users: Dict[str, str]) -> None:
        """Overwrite the credentials file with the full mapping."""
        self.users_file.parent.mkdir(parents=True, exist_ok=True)
        self.users_file.write_text(json.dumps(users, indent=2), encoding='utf-8')

    def verify(self, username: str, password: str) -> bool:
        """True iff the user exists and the password matches its hash."""
        username = (username or '').strip()
        password_hash = self.load().get(username)
        if not password_hash or not password:
            return False
        return verify_password(password, password_hash)

    def register(self, username: str, password: str) -> User:
        """
        Register a new user.

        Raises:
            BlankField if either value is blank
            ValidationError if the password is too long to hash
            DuplicateUser if the username is taken
        """
        username, password = validate_credentials(username, password)
        if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Passwords may be at most {MAX_PASSWORD_BYTES} bytes.")

        with self._lock:
            users = self.load()
            if username in users:
                raise DuplicateUser(username)
            user = User(username=username, password_hash=hash_password(password, self.rounds))
            users[username] = user.password_hash
            self.save(users)

        logger.info(f"Registered user {username}")
        return user
