"""
User routes: sign-in, sign-out and sign-up.
"""
from flask import Blueprint, current_app, render_template, request

from cms.routes.shared import redirect_home, sign_in, sign_out
from cms.services import get_credential_store
from cms.services.credential_store import DuplicateUser
from cms.utils.validators import ValidationError

bp = Blueprint('users', __name__, url_prefix='/users')


@bp.route('/signin', methods=['GET', 'POST'])
def signin():
    """
    Sign-in form and submit.

    Expected form data:
        - username
        - password
    """
    if request.method == 'GET':
        return render_template('signin.html')

    username = request.form.get('username', '').strip()
    password = request.form.get('password', '')

    if get_credential_store().verify(username, password):
        sign_in(username)
        current_app.logger.info(f"{username} signed in")
        return redirect_home('Welcome!')

    current_app.logger.warning(f"Failed sign-in for {username!r}")
    return render_template('signin.html', error='Invalid credentials', username=username)


@bp.route('/signout', methods=['POST'])
def signout():
    sign_out()
    return redirect_home('You have been signed out.')


@bp.route('/signup', methods=['GET', 'POST'])
def signup():
    """
    Registration form and submit.

    Expected form data:
        - username
        - password
    """
    if request.method == 'GET':
        return render_template('signup.html')

    username = request.form.get('username', '')
    password = request.form.get('password', '')
    try:
        user = get_credential_store().register(username, password)
    except (ValidationError, DuplicateUser) as e:
        return render_template('signup.html', error=str(e), username=username), 422

    return redirect_home(f"{user.username} was registered. You can now sign in.")
