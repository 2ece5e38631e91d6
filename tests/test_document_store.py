"""Unit tests for cms.services.document_store."""

import pytest

from cms.services.document_store import (
    DocumentStore,
    DocumentExists,
    DocumentNotFound,
    HTML_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
)
from cms.utils.validators import BadExtension, BlankName, ValidationError


@pytest.fixture
def store(tmp_path):
    return DocumentStore(tmp_path / 'data', {'txt', 'md'})


class TestList:

    def test_lists_files_with_extensions(self, store):
        (store.data_path / 'about.txt').write_text('')
        (store.data_path / 'notes.md').write_text('')
        assert sorted(store.list()) == ['about.txt', 'notes.md']

    def test_skips_directories_and_extensionless_files(self, store):
        (store.data_path / 'about.txt').write_text('')
        (store.data_path / 'README').write_text('')
        (store.data_path / 'history').mkdir()
        (store.data_path / 'archive.d').mkdir()
        assert store.list() == ['about.txt']

    def test_empty_directory(self, store):
        assert store.list() == []


class TestReadAndRender:

    def test_read_returns_bytes(self, store):
        (store.data_path / 'about.txt').write_bytes(b'hello')
        assert store.read('about.txt') == b'hello'

    def test_read_missing_raises(self, store):
        with pytest.raises(DocumentNotFound) as exc:
            store.read('changes.txt')
        assert str(exc.value) == 'changes.txt does not exist.'

    def test_read_rejects_path_components(self, store):
        with pytest.raises(DocumentNotFound):
            store.read('../secret.txt')

    def test_render_markdown_as_html(self, store):
        (store.data_path / 'doc.md').write_text('# Heading')
        body, content_type = store.render('doc.md')
        assert '<h1>Heading</h1>' in body
        assert content_type == HTML_CONTENT_TYPE

    def test_render_text_raw(self, store):
        (store.data_path / 'doc.txt').write_text('# not a heading')
        body, content_type = store.render('doc.txt')
        assert body == b'# not a heading'
        assert content_type == TEXT_CONTENT_TYPE

    def test_render_unsupported_extension_is_empty(self, store):
        (store.data_path / 'data.csv').write_text('a,b')
        assert store.render('data.csv') == (b'', None)


class TestCreate:

    @pytest.mark.parametrize('name', ['', '   '])
    def test_blank_name(self, store, name):
        with pytest.raises(BlankName):
            store.create(name)

    @pytest.mark.parametrize('name', ['notes', 'notes.rb', 'notes.txt.bak'])
    def test_bad_extension(self, store, name):
        with pytest.raises(BadExtension):
            store.create(name)
        assert store.list() == []

    def test_existing_name(self, store):
        (store.data_path / 'about.txt').write_text('keep me')
        with pytest.raises(DocumentExists) as exc:
            store.create('about.txt')
        assert str(exc.value) == 'about.txt already exists.'
        assert store.read('about.txt') == b'keep me'

    def test_path_in_name(self, store):
        with pytest.raises(ValidationError):
            store.create('sub/notes.txt')

    def test_creates_empty_file_with_trimmed_name(self, store):
        assert store.create('  notes.md ') == 'notes.md'
        assert store.read('notes.md') == b''


class TestWriteDeleteDuplicate:

    def test_write_overwrites(self, store):
        (store.data_path / 'about.txt').write_text('old')
        store.write('about.txt', 'new')
        assert store.read('about.txt') == b'new'

    def test_delete_removes_file(self, store):
        (store.data_path / 'about.txt').write_text('')
        store.delete('about.txt')
        assert not store.exists('about.txt')

    def test_delete_missing_is_ignored(self, store):
        store.delete('missing.txt')

    def test_duplicate_writes_supplied_content(self, store):
        (store.data_path / 'about.txt').write_text('original')
        assert store.duplicate('about.txt', 'copy.txt', 'edited copy') == 'copy.txt'
        assert store.read('copy.txt') == b'edited copy'
        assert store.read('about.txt') == b'original'

    def test_duplicate_validates_like_create(self, store):
        (store.data_path / 'about.txt').write_text('original')
        with pytest.raises(DocumentExists):
            store.duplicate('about.txt', 'about.txt', 'x')
        with pytest.raises(BlankName):
            store.duplicate('about.txt', ' ', 'x')
        with pytest.raises(BadExtension):
            store.duplicate('about.txt', 'copy', 'x')
