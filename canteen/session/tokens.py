"""
Session Token File

Remembers which orders this client placed, across restarts, as a small
JSON document:

    {"myOrderTokens": ["4821", "1307"]}

A missing, unreadable or malformed file counts as "no orders yet". Read
and write problems are logged, never raised: losing the list only means
the customer stops seeing old orders under "my orders".
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock, Timeout

from canteen.core.config import get_settings

logger = logging.getLogger(__name__)


class TokenFile:
    """JSON file holding the list of order tokens placed by this client."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        key: Optional[str] = None,
        lock_timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.path = Path(path or settings.session_file)
        self.key = key or settings.session_key
        self.lock_timeout = lock_timeout if lock_timeout is not None else settings.session_lock_timeout
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    def load(self) -> list[str]:
        """Read the stored tokens; any problem yields an empty list."""
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Could not read session file {self.path}: {e}")
            return []

        tokens = data.get(self.key) if isinstance(data, dict) else None
        if not isinstance(tokens, list) or not all(isinstance(t, str) for t in tokens):
            logger.error(f"Session file {self.path} has no valid '{self.key}' list")
            return []

        logger.debug(f"Loaded {len(tokens)} order tokens from {self.path}")
        return tokens

    def save(self, tokens: list[str]) -> bool:
        """
        Rewrite the file with ``tokens``.

        Returns:
            True if the file was written, False if the write failed
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with FileLock(str(self.lock_path), timeout=self.lock_timeout):
                self.path.write_text(
                    json.dumps({self.key: list(tokens)}),
                    encoding="utf-8",
                )
        except Timeout:
            logger.error(f"Timed out waiting for lock on {self.path}")
            return False
        except OSError as e:
            logger.error(f"Could not write session file {self.path}: {e}")
            return False

        logger.debug(f"Saved {len(tokens)} order tokens to {self.path}")
        return True
