"""
Image upload routes.
"""
import os
from pathlib import Path

from flask import Blueprint, current_app, g, render_template, request

from cms.routes.shared import login_required, redirect_home
from cms.utils.formatters import format_file_size
from cms.utils.validators import (
    ValidationError, base_filename, validate_file_size, validate_file_type
)

bp = Blueprint('images', __name__, url_prefix='/image')


@bp.route('/new', methods=['GET'])
@login_required
def upload_form():
    return render_template('upload_image.html')


@bp.route('/new', methods=['POST'])
@login_required
def upload_image():
    """
    Store an uploaded image under its base filename.

    Expected form data:
        - image: File object with an accepted image extension
    """
    allowed_extensions = current_app.config['ALLOWED_IMAGE_EXTENSIONS']
    max_size_mb = current_app.config['MAX_IMAGE_SIZE_MB']
    file = request.files.get('image')

    try:
        validate_file_type(file.filename if file else '', allowed_extensions)
        image_name = base_filename(file.filename)
        validate_file_type(image_name, allowed_extensions)

        if request.content_length:
            validate_file_size(request.content_length, max_size_mb)
    except ValidationError as e:
        return render_template('upload_image.html', error=str(e)), 422

    image_folder = Path(current_app.config['IMAGE_FOLDER'])
    image_folder.mkdir(parents=True, exist_ok=True)
    image_path = image_folder / image_name
    file.save(image_path)

    size_bytes = os.path.getsize(image_path)
    current_app.logger.info(
        f"{g.user} uploaded {image_name} ({format_file_size(size_bytes)})"
    )
    return redirect_home(f"{image_name} was uploaded.")
