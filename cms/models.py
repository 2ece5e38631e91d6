"""
Data models for the application.
"""
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any


@dataclass
class Document:
    """A named text or markdown file in the document directory."""
    name: str = ''
    content: bytes = b''

    @property
    def extension(self) -> str:
        """Extension including the leading dot ('.md', '.txt')."""
        return Path(self.name).suffix

    @property
    def text(self) -> str:
        """Content decoded as UTF-8, undecodable bytes replaced."""
        return self.content.decode('utf-8', errors='replace')


@dataclass
class HistoryEntry:
    """One archived snapshot of a document, recorded before an edit."""
    filename: str = ''
    author: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HistoryEntry':
        """Create from dictionary."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class User:
    """Registered user with a salted password hash."""
    username: str = ''
    password_hash: str = ''
