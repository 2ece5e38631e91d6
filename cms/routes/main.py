"""
Main routes for listing and viewing documents.
"""
from flask import Blueprint, Response, current_app, render_template, send_from_directory

from cms.routes.shared import redirect_home
from cms.services import get_document_store
from cms.services.document_store import DocumentNotFound

bp = Blueprint('main', __name__)


@bp.route('/')
def index():
    """Document list."""
    documents = get_document_store()
    return render_template('index.html', files=documents.list())


@bp.route('/health')
def health_check():
    return {
        'status': 'healthy',
        'app': 'Flask CMS',
        'version': current_app.config.get('VERSION', '1.0.0')
    }, 200


@bp.route('/images/<filename>')
def uploaded_image(filename):
    """Serve an uploaded image."""
    return send_from_directory(current_app.config['IMAGE_FOLDER'], filename)


@bp.route('/<filename>')
def view_file(filename):
    """
    Render a document.

    Markdown is returned as HTML, text as text/plain. Missing documents
    redirect to the list with a flash message.
    """
    documents = get_document_store()
    try:
        body, content_type = documents.render(filename)
    except DocumentNotFound as e:
        return redirect_home(str(e))

    if content_type is None:
        return Response(body)
    return Response(body, content_type=content_type)
