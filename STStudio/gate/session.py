"""Session gate for the staff pages.

The shop has exactly one admin credential, configured through
``settings.STUDIO`` (username plus a Django password hash).  Logging in
marks the server-side session with ``SESSION_FLAG``; nothing about the
login is trusted from the client beyond the session cookie itself.
"""

from __future__ import annotations

import logging
from functools import wraps
from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth.hashers import check_password
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.crypto import constant_time_compare

from STStudio.errors import AuthenticationFailure

logger = logging.getLogger(__name__)

SESSION_FLAG = 'studio_admin'


def verify_credentials(username: str | None, password: str | None) -> bool:
    """Return True only when both the username and the password match.

    The password is always run through the hasher, even for a wrong
    username, so both failure cases take the same time.
    """
    config = settings.STUDIO
    user_ok = constant_time_compare(username or '', config.admin_username)
    password_ok = check_password(password or '', config.admin_password_hash)
    return user_ok and password_ok


def login(request, username: str | None, password: str | None) -> None:
    """Verify the credential and mark the session as authenticated.

    Raises ``AuthenticationFailure`` without saying which half was wrong.
    """
    if not verify_credentials(username, password):
        logger.warning("Failed admin login attempt for username %r", username)
        raise AuthenticationFailure()
    start_session(request)
    logger.info("Admin session started")


def start_session(request) -> None:
    # New session key on privilege change (session fixation).
    request.session.cycle_key()
    request.session[SESSION_FLAG] = True


def end_session(request) -> None:
    request.session.flush()


def is_authenticated(request) -> bool:
    session = getattr(request, 'session', None)
    if session is None:
        return False
    return bool(session.get(SESSION_FLAG))


def admin_required(view_func):
    """Redirect anonymous requests to the login page instead of running ``view_func``."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if is_authenticated(request):
            return view_func(request, *args, **kwargs)
        logger.info("Anonymous %s %s redirected to login", request.method, request.path)
        login_url = reverse('login')
        if request.method == 'GET':
            login_url = f"{login_url}?{urlencode({'next': request.get_full_path()})}"
        return redirect(login_url)

    return _wrapped
