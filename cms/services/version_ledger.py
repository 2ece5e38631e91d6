"""
Edit history for documents.

Before every edit the current content of a document is copied into the
history directory under a timestamp-suffixed name, and the copy is recorded
in a JSON ledger keyed by document name:

    {"about.md": [{"filename": "about_2024-3-7_09h05m02s.md", "author": "admin"}]}

Archive names have one-second resolution, so two archives of the same
document within one second share a filename and the later copy wins.
"""
import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Union

from cms.models import HistoryEntry
from cms.services.document_store import DocumentStore
from cms.utils.formatters import history_filename

logger = logging.getLogger(__name__)

Ledger = Dict[str, List[HistoryEntry]]


class LedgerError(Exception):
    """Base exception for history ledger errors."""
    pass


class HistoryNotFound(LedgerError):
    """Raised when an archived snapshot is not on disk."""

    def __init__(self, history_name: str):
        self.history_name = history_name
        super().__init__(f"{history_name} does not exist.")


class NotLinked(LedgerError):
    """Raised when a snapshot is not registered under the requested document."""

    def __init__(self, history_name: str, owner_name: str):
        self.history_name = history_name
        self.owner_name = owner_name
        super().__init__(f"{history_name} is not linked to {owner_name}.")


class VersionLedger:
    """Service for archiving document snapshots and tracking their authors."""

    def __init__(self, documents: DocumentStore, history_path: Union[str, Path],
                 ledger_file: Union[str, Path], clock: Callable[[], datetime] = datetime.now):
        """Initialize the ledger, creating the history directory if needed."""
        self.documents = documents
        self.history_path = Path(history_path)
        self.ledger_file = Path(ledger_file)
        self.clock = clock
        self._lock = threading.Lock()
        self.history_path.mkdir(parents=True, exist_ok=True)

    def load(self) -> Ledger:
        """
        Read the ledger file.

        A missing, empty or unreadable file is treated as an empty ledger.
        """
        if not self.ledger_file.exists():
            return {}

        try:
            raw = self.ledger_file.read_text(encoding='utf-8')
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable history ledger {self.ledger_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed history ledger {self.ledger_file}")
            return {}

        return {
            name: [HistoryEntry.from_dict(entry) for entry in entries]
            for name, entries in data.items()
        }

    def save(self, ledger: Ledger) -> None:
        """Overwrite the ledger file with the full mapping."""
        data = {
            name: [entry.to_dict() for entry in entries]
            for name, entries in ledger.items()
        }
        self.ledger_file.parent.mkdir(parents=True, exist_ok=True)
        self.ledger_file.write_text(json.dumps(data, indent=2), encoding='utf-8')

    def snapshot_path(self, history_name: str) -> Path:
        """
        Resolve an archive name to its path.

        Raises:
            HistoryNotFound if the name carries path components
        """
        if not history_name or Path(history_name).name != history_name or '\\' in history_name:
            raise HistoryNotFound(history_name)
        return self.history_path / history_name

    def list_for(self, name: str) -> List[HistoryEntry]:
        """History entries for a document, oldest first."""
        return self.load().get(name, [])

    def archive_before_edit(self, name: str, author: str) -> HistoryEntry:
        """
        Copy a document's current content into the history directory.

        Args:
            name: Document about to be edited
            author: Username making the edit

        Returns:
            The recorded HistoryEntry

        Raises:
            DocumentNotFound if the document does not exist
        """
        content = self.documents.read(name)
        entry = HistoryEntry(filename=history_filename(name, self.clock()), author=author)

        with self._lock:
            self.snapshot_path(entry.filename).write_bytes(content)
            ledger = self.load()
            ledger.setdefault(name, []).append(entry)
            self.save(ledger)

        logger.info(f"Archived {name} as {entry.filename} (author: {author})")
        return entry

    def delete_all_for(self, name: str) -> int:
        """
        Delete every snapshot of a document and drop its ledger entry.

        Returns:
            Number of history entries removed
        """
        with self._lock:
            ledger = self.load()
            entries = ledger.get(name, [])
            for entry in entries:
                self.snapshot_path(entry.filename).unlink(missing_ok=True)
            ledger.pop(name, None)
            self.save(ledger)

        if entries:
            logger.info(f"Purged {len(entries)} history entries for {name}")
        return len(entries)

    def find_entry(self, history_name: str, owner_name: str) -> HistoryEntry:
        """
        Look up a snapshot registered under a given document.

        Raises:
            HistoryNotFound if the snapshot is not on disk
            NotLinked if it exists but belongs to another document
        """
        if not self.snapshot_path(history_name).is_file():
            raise HistoryNotFound(history_name)

        for entry in self.list_for(owner_name):
            if entry.filename == history_name:
                return entry
        raise NotLinked(history_name, owner_name)

    def read_snapshot(self, history_name: str) -> bytes:
        """
        Read an archived snapshot's content.

        Raises:
            HistoryNotFound if the snapshot is not on disk
        """
        path = self.snapshot_path(history_name)
        if not path.is_file():
            raise HistoryNotFound(history_name)
        return path.read_bytes()
