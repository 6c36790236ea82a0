"""
User Session

Holds the current username explicitly, so components that persist data get
it passed in instead of reading process-wide state. The username is cached
in a small local YAML file between runs.
"""

import os
import re
import logging
from typing import Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')
DEFAULT_CACHE_PATH = '~/.filmmate/session.yaml'


def validate_username(username: str) -> Tuple[bool, str]:
    """
    Check a username against the naming rules.

    Args:
        username: Candidate username

    Returns:
        (is_valid, message) where message explains a failure

    Example:
        >>> validate_username('ab')
        (False, 'Username must be at least 3 characters long')
    """
    if not username:
        return False, 'Username is required'

    if len(username) < USERNAME_MIN_LENGTH:
        return False, f'Username must be at least {USERNAME_MIN_LENGTH} characters long'

    if len(username) > USERNAME_MAX_LENGTH:
        return False, f'Username must be no more than {USERNAME_MAX_LENGTH} characters long'

    if not USERNAME_PATTERN.match(username):
        return False, 'Username can only contain letters, numbers, hyphens, and underscores'

    return True, ''


class UserSession:
    """
    The current user of one client.

    Attributes:
        cache_path: Local file remembering the username between runs
        username: Current username, or None when nobody is signed in

    Example:
        >>> session = UserSession.from_config('config.yaml')
        >>> session.load()
        >>> session.set_username('ansel')
        >>> db.load_shot_logs(session.require_username())
    """

    def __init__(self, cache_path: str = DEFAULT_CACHE_PATH, username: Optional[str] = None):
        self.cache_path = os.path.expanduser(cache_path)
        self.username = username

    @classmethod
    def from_config(cls, config_path: str = 'config.yaml') -> 'UserSession':
        """Create UserSession from configuration file."""
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        cache_path = config.get('session', {}).get('cache_path', DEFAULT_CACHE_PATH)
        return cls(cache_path=cache_path)

    @property
    def is_signed_in(self) -> bool:
        return self.username is not None

    def require_username(self) -> str:
        """
        Get the current username.

        Raises:
            RuntimeError: If no user is signed in
        """
        if self.username is None:
            raise RuntimeError('No user is signed in. Set a username first.')
        return self.username

    def load(self) -> Optional[str]:
        """
        Restore the cached username, if any.

        A cached name that no longer passes validation is ignored.

        Returns:
            The restored username or None
        """
        if not os.path.exists(self.cache_path):
            return None

        with open(self.cache_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        username = data.get('username')
        if username is None:
            return None

        is_valid, message = validate_username(str(username))
        if not is_valid:
            logger.warning(f"Ignoring cached username '{username}': {message}")
            return None

        self.username = str(username)
        logger.info(f"Restored username from cache: {self.username}")
        return self.username

    def save(self):
        """Write the current username to the local cache."""
        directory = os.path.dirname(self.cache_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.cache_path, 'w') as f:
            yaml.safe_dump({'username': self.username}, f)

    def set_username(self, username: str, persist: bool = True):
        """
        Sign in as a username.

        Args:
            username: New username
            persist: Also write it to the local cache

        Raises:
            ValueError: If the username fails validation
        """
        username = username.strip()
        is_valid, message = validate_username(username)
        if not is_valid:
            raise ValueError(message)

        self.username = username
        if persist:
            self.save()

        logger.info(f"Signed in as {username}")

    def switch_user(self, username: str) -> Optional[str]:
        """
        Replace the current user.

        Returns:
            The previous username
        """
        previous = self.username
        self.set_username(username)
        logger.info(f"Switched user: {previous} -> {username}")
        return previous

    def clear(self):
        """Sign out and forget the cached username."""
        self.username = None
        if os.path.exists(self.cache_path):
            os.remove(self.cache_path)
        logger.info("Cleared cached username")

    def __repr__(self) -> str:
        return f"UserSession(username={self.username!r})"
