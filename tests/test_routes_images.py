"""Route tests for image upload."""

import io

import pytest


def _upload(client, filename, content=b'\x89PNG\r\n'):
    return client.post(
        '/image/new',
        data={'image': (io.BytesIO(content), filename)},
        content_type='multipart/form-data'
    )


def test_form(signed_in):
    response = signed_in.get('/image/new')
    assert response.status_code == 200
    assert 'type="file"' in response.get_data(as_text=True)


@pytest.mark.parametrize('filename', ['photo.png', 'photo.jpg', 'photo.jpeg', 'photo.gif'])
def test_upload_stores_under_base_filename(signed_in, app, flashed, filename):
    response = _upload(signed_in, filename)

    assert response.status_code == 302
    assert flashed() == [f'{filename} was uploaded.']
    assert (app.config['IMAGE_FOLDER'] / filename).read_bytes() == b'\x89PNG\r\n'


@pytest.mark.parametrize('filename', ['my photo.png', 'фото.png'])
def test_upload_keeps_original_base_filename(signed_in, app, flashed, filename):
    response = _upload(signed_in, filename)

    assert response.status_code == 302
    assert flashed() == [f'{filename} was uploaded.']
    assert [p.name for p in app.config['IMAGE_FOLDER'].iterdir()] == [filename]


def test_upload_strips_directories(signed_in, app):
    response = _upload(signed_in, '../../photo.png')

    assert response.status_code == 302
    assert (app.config['IMAGE_FOLDER'] / 'photo.png').exists()


@pytest.mark.parametrize('filename', ['notes.txt', 'photo', 'photo.bmp'])
def test_rejects_other_types(signed_in, app, filename):
    response = _upload(signed_in, filename)

    assert response.status_code == 422
    assert 'is not an accepted image type' in response.get_data(as_text=True)
    assert list(app.config['IMAGE_FOLDER'].iterdir()) == []


def test_rejects_missing_file(signed_in, app):
    response = signed_in.post('/image/new', data={}, content_type='multipart/form-data')

    assert response.status_code == 422
    assert 'Please select an image to upload.' in response.get_data(as_text=True)
    assert list(app.config['IMAGE_FOLDER'].iterdir()) == []


def test_rejects_oversized_upload(signed_in, app):
    app.config['MAX_IMAGE_SIZE_MB'] = 0

    response = _upload(signed_in, 'photo.png')

    assert response.status_code == 422
    assert 'exceeds maximum allowed size' in response.get_data(as_text=True)
