"""Unit tests for cms.utils.formatters."""

from datetime import datetime

from cms.utils.formatters import (
    format_file_size,
    format_timestamp,
    history_filename,
    history_timestamp,
    parse_history_timestamp,
)


def test_history_timestamp_pads_time_only():
    assert history_timestamp(datetime(2024, 3, 7, 9, 5, 2)) == '2024-3-7_09h05m02s'


def test_history_filename_keeps_extension():
    moment = datetime(2023, 11, 23, 14, 30, 0)
    assert history_filename('about.md', moment) == 'about_2023-11-23_14h30m00s.md'
    assert history_filename('my.notes.txt', moment) == 'my.notes_2023-11-23_14h30m00s.txt'


def test_parse_history_timestamp():
    assert parse_history_timestamp('about_2024-3-7_09h05m02s.md') == datetime(2024, 3, 7, 9, 5, 2)
    assert parse_history_timestamp('about.md') is None


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 3, 7, 9, 5, 2)) == '2024-03-07 09:05:02'
    assert format_timestamp(None) == 'N/A'


def test_format_file_size():
    assert format_file_size(512) == '512 B'
    assert format_file_size(1536) == '1.5 KB'
    assert format_file_size(5 * 1024 * 1024) == '5.0 MB'
