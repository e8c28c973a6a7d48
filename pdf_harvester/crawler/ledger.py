"""
Append-only ledger of processed links.

One absolute link per line. Lines are only ever appended, so the file can be
inspected or edited by hand between runs.
"""

from typing import Set

from ..utils.log import get_logger
from ..utils.paths import is_valid_url, ensure_parent_dir


class Ledger:
    """
    Record of links that have already been processed.

    Membership is exact: a link is known only if it appears as a whole line.
    Storage errors are logged and never raised; a ledger that cannot be read
    behaves as an empty one.
    """

    def __init__(self, path: str):
        """
        Initialize the ledger.

        Args:
            path: Location of the ledger text file
        """
        self.path = path
        self.logger = get_logger("ledger")
        self._entries: Set[str] = set()
        self._loaded = False

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._entries)

    def __contains__(self, link: str) -> bool:
        return self.contains(link)

    def load(self) -> None:
        """
        Read the ledger file into memory.

        A missing or unreadable file leaves the ledger empty.
        """
        self._entries = set()
        self._loaded = True

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                for line in f:
                    entry = line.rstrip('\r\n')
                    if entry:
                        self._entries.add(entry)
        except FileNotFoundError:
            self.logger.debug(f"No ledger at {self.path}, starting empty")
            return
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Could not read ledger {self.path}: {e}")
            return

        self.logger.debug(f"Loaded {len(self._entries)} ledger entries from {self.path}")

    def contains(self, link: str) -> bool:
        """
        Check whether a link has been recorded.

        Args:
            link: Absolute link

        Returns:
            True if the link is a full line of the ledger
        """
        self._ensure_loaded()
        return link in self._entries

    def record(self, link: str) -> bool:
        """
        Append a link to the ledger, creating the file if needed.

        Args:
            link: Absolute link

        Returns:
            True if the link was written
        """
        self._ensure_loaded()

        if not is_valid_url(link):
            self.logger.warning(f"Not recording invalid link: {link}")
            return False

        try:
            ensure_parent_dir(self.path)
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(link + '\n')
        except OSError as e:
            self.logger.error(f"Could not write to ledger {self.path}: {e}")
            return False

        self._entries.add(link)
        return True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()
