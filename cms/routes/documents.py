"""
Document routes: create, edit, restore from history, duplicate and delete.
"""
from flask import Blueprint, current_app, g, render_template, request

from cms.routes.shared import login_required, redirect_home
from cms.services import get_document_store, get_version_ledger
from cms.services.document_store import DocumentError, DocumentExists, DocumentNotFound
from cms.services.version_ledger import LedgerError
from cms.utils.formatters import format_timestamp, parse_history_timestamp
from cms.utils.validators import ValidationError

bp = Blueprint('documents', __name__)


def _history_rows(filename):
    """History entries for a document, formatted for the edit page."""
    return [
        {
            'filename': entry.filename,
            'author': entry.author,
            'archived_at': format_timestamp(parse_history_timestamp(entry.filename)),
        }
        for entry in get_version_ledger().list_for(filename)
    ]


@bp.route('/file/new', methods=['GET'])
@login_required
def new_file_form():
    return render_template('new.html')


@bp.route('/file/new', methods=['POST'])
@login_required
def create_file():
    """
    Create an empty document.

    Expected form data:
        - filename: Name ending in an allowed extension
    """
    submitted = request.form.get('filename', '')
    try:
        filename = get_document_store().create(submitted)
    except (ValidationError, DocumentExists) as e:
        return render_template('new.html', error=str(e), filename=submitted), 422

    current_app.logger.info(f"{g.user} created {filename}")
    return redirect_home(f"{filename} was created.")


@bp.route('/<filename>/edit')
@login_required
def edit_file(filename):
    """Edit form preloaded with the current content and the history list."""
    try:
        document = get_document_store().get(filename)
    except DocumentNotFound as e:
        return redirect_home(str(e))

    return render_template(
        'edit.html',
        filename=filename,
        content=document.text,
        history=_history_rows(filename)
    )


@bp.route('/<history_file>/hist/<filename>/edit')
@login_required
def edit_from_history(history_file, filename):
    """
    Edit form preloaded with an archived snapshot.

    The snapshot must be registered under filename; saving the form goes
    through the normal update flow.
    """
    ledger = get_version_ledger()
    try:
        entry = ledger.find_entry(history_file, filename)
        content = ledger.read_snapshot(entry.filename)
    except LedgerError as e:
        return redirect_home(str(e))

    return render_template(
        'edit.html',
        filename=filename,
        content=content.decode('utf-8', errors='replace'),
        snapshot=entry,
        history=_history_rows(filename)
    )


@bp.route('/<filename>', methods=['POST'])
@login_required
def update_file(filename):
    """
    Archive the current content, then overwrite the document.

    Expected form data:
        - content: New document body
    """
    content = request.form.get('content', '')
    try:
        get_version_ledger().archive_before_edit(filename, g.user)
    except DocumentNotFound as e:
        return redirect_home(str(e))

    get_document_store().write(filename, content)
    current_app.logger.info(f"{g.user} updated {filename}")
    return redirect_home(f"{filename} has been updated.")


@bp.route('/<filename>/delete', methods=['POST'])
@login_required
def delete_file(filename):
    """Delete a document together with all of its history."""
    try:
        get_version_ledger().delete_all_for(filename)
        get_document_store().delete(filename)
    except (DocumentError, LedgerError) as e:
        return redirect_home(str(e))

    current_app.logger.info(f"{g.user} deleted {filename}")
    return redirect_home(f"{filename} was deleted.")


@bp.route('/<filename>/duplicate', methods=['GET'])
@login_required
def duplicate_form(filename):
    try:
        document = get_document_store().get(filename)
    except DocumentNotFound as e:
        return redirect_home(str(e))

    return render_template(
        'duplicate.html',
        source=filename,
        new_name=f"copy_of_{filename}",
        content=document.text
    )


@bp.route('/<filename>/duplicate', methods=['POST'])
@login_required
def duplicate_file(filename):
    """
    Create a new document from the submitted content.

    Expected form data:
        - new_name: Name for the copy
        - content: Body for the copy
    """
    documents = get_document_store()
    if not documents.exists(filename):
        return redirect_home(f"{filename} does not exist.")

    new_name = request.form.get('new_name', '')
    content = request.form.get('content', '')
    try:
        new_name = documents.duplicate(filename, new_name, content)
    except (ValidationError, DocumentExists) as e:
        return render_template(
            'duplicate.html',
            source=filename,
            new_name=new_name,
            content=content,
            error=str(e)
        ), 422

    current_app.logger.info(f"{g.user} duplicated {filename} as {new_name}")
    return redirect_home(f"{new_name} was created from {filename}.")
