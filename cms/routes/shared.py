"""
Shared request state and utilities for CMS routes.

The signed-in username travels in the session cookie under SESSION_USER_KEY
and is exposed to handlers as g.user for the duration of one request.
"""
import functools

from flask import flash, g, redirect, session, url_for

SESSION_USER_KEY = 'username'
SIGNIN_REQUIRED_MESSAGE = 'You must be signed in to do that.'


def load_signed_in_user():
    """Populate g.user from the session before each request."""
    g.user = session.get(SESSION_USER_KEY)


def sign_in(username: str):
    session[SESSION_USER_KEY] = username
    g.user = username


def sign_out():
    session.pop(SESSION_USER_KEY, None)
    g.user = None


def redirect_home(message: str = None):
    """Flash an optional message and redirect to the document list."""
    if message:
        flash(message)
    return redirect(url_for('main.index'))


def login_required(view):
    """Short-circuit to the document list when nobody is signed in."""
    @functools.wraps(view)
    def wrapped_view(*args, **kwargs):
        if g.get('user') is None:
            return redirect_home(SIGNIN_REQUIRED_MESSAGE)
        return view(*args, **kwargs)

    return wrapped_view
