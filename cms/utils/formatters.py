"""
Formatting utilities for display and history filenames.
"""
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

# <stem>_<Y>-<M>-<D>_<HH>h<MM>m<SS>s<ext>
HISTORY_SUFFIX_PATTERN = re.compile(
    r'_(\d{4})-(\d{1,2})-(\d{1,2})_(\d{2})h(\d{2})m(\d{2})s$'
)


def history_timestamp(moment: datetime) -> str:
    """
    Format a datetime as a history filename suffix.

    Month and day are not zero-padded, time fields are.

    Args:
        moment: Time of the archive

    Returns:
        Timestamp string (e.g., "2024-3-7_09h05m02s")
    """
    return (
        f"{moment.year}-{moment.month}-{moment.day}_"
        f"{moment:%H}h{moment:%M}m{moment:%S}s"
    )


def history_filename(document_name: str, moment: datetime) -> str:
    """
    Build the archive filename for a document snapshot.

    Args:
        document_name: Name of the document being archived
        moment: Time of the archive

    Returns:
        Archive filename (e.g., "about_2024-3-7_09h05m02s.md")
    """
    path = Path(document_name)
    return f"{path.stem}_{history_timestamp(moment)}{path.suffix}"


def parse_history_timestamp(filename: str) -> Optional[datetime]:
    """
    Recover the archive time from a history filename.

    Returns:
        datetime, or None if the filename carries no timestamp suffix
    """
    match = HISTORY_SUFFIX_PATTERN.search(Path(filename).stem)
    if not match:
        return None
    try:
        return datetime(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def format_timestamp(moment: Optional[datetime]) -> str:
    """Format a datetime for display, 'N/A' when missing."""
    if not moment:
        return 'N/A'
    return moment.strftime('%Y-%m-%d %H:%M:%S')


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable string.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"
