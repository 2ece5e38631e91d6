"""
File-backed document storage: list, read, render, create, write and delete.
"""
import logging
import os
from pathlib import Path
from typing import List, Optional, Set, Tuple, Union

import markdown

from cms.models import Document
from cms.utils.validators import validate_document_name

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = 'text/html; charset=utf-8'
TEXT_CONTENT_TYPE = 'text/plain; charset=utf-8'


class DocumentError(Exception):
    """Base exception for document storage errors."""
    pass


class DocumentNotFound(DocumentError):
    """Raised when a named document is not on disk."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} does not exist.")


class DocumentExists(DocumentError):
    """Raised when creating a document whose name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} already exists.")


class DocumentStore:
    """Service for documents kept as flat files in one directory."""

    def __init__(self, data_path: Union[str, Path], allowed_extensions: Set[str],
                 markdown_extensions: Optional[List[str]] = None):
        """Initialize the store, creating the directory if needed."""
        self.data_path = Path(data_path)
        self.allowed_extensions = set(allowed_extensions)
        self.markdown_extensions = list(markdown_extensions or [])
        self.data_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """
        Resolve a document name to its path.

        Raises:
            DocumentNotFound if the name carries path components
        """
        if not name or Path(name).name != name or '\\' in name:
            raise DocumentNotFound(name)
        return self.data_path / name

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except DocumentNotFound:
            return False

    def list(self) -> List[str]:
        """
        List document names in directory order.

        Directories and files without an extension are skipped.
        """
        with os.scandir(self.data_path) as entries:
            return [
                entry.name for entry in entries
                if entry.is_file() and Path(entry.name).suffix
            ]

    def read(self, name: str) -> bytes:
        """
        Read a document's raw content.

        Raises:
            DocumentNotFound if the document does not exist
        """
        path = self.path_for(name)
        if not path.is_file():
            raise DocumentNotFound(name)
        return path.read_bytes()

    def get(self, name: str) -> Document:
        """Load a document with its content."""
        return Document(name=name, content=self.read(name))

    def render(self, name: str) -> Tuple[Union[str, bytes], Optional[str]]:
        """
        Render a document for display.

        Returns:
            (body, content_type). Markdown becomes HTML, text is returned
            raw. Other extensions yield an empty body and no content type.

        Raises:
            DocumentNotFound if the document does not exist
        """
        document = self.get(name)

        if document.extension == '.md':
            html = markdown.markdown(document.text, extensions=self.markdown_extensions)
            return html, HTML_CONTENT_TYPE
        if document.extension == '.txt':
            return document.content, TEXT_CONTENT_TYPE

        logger.warning(f"No renderer for {name}")
        return b'', None

    def _validate_new_name(self, name: str) -> str:
        name = validate_document_name(name, self.allowed_extensions)
        if self.path_for(name).exists():
            raise DocumentExists(name)
        return name

    def create(self, name: str) -> str:
        """
        Create an empty document.

        Returns:
            The trimmed document name

        Raises:
            ValidationError (BlankName, BadExtension) or DocumentExists
        """
        name = self._validate_new_name(name)
        self.path_for(name).touch()
        logger.info(f"Created document {name}")
        return name

    def write(self, name: str, content: Union[str, bytes]) -> None:
        """Overwrite a document's content."""
        if isinstance(content, str):
            content = content.encode('utf-8')
        self.path_for(name).write_bytes(content)

    def delete(self, name: str) -> None:
        """Remove a document. Missing documents are ignored."""
        self.path_for(name).unlink(missing_ok=True)
        logger.info(f"Deleted document {name}")

    def duplicate(self, source_name: str, new_name: str, content: Union[str, bytes]) -> str:
        """
        Create a new document from caller-supplied content.

        Returns:
            The trimmed new name

        Raises:
            ValidationError (BlankName, BadExtension) or DocumentExists
        """
        new_name = self._validate_new_name(new_name)
        self.write(new_name, content)
        logger.info(f"Duplicated document {source_name} as {new_name}")
        return new_name
