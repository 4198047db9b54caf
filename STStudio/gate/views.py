from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from STStudio.errors import AuthenticationFailure
from .forms import LoginForm
from .session import end_session, is_authenticated, login


def _safe_next(request) -> str | None:
    target = request.POST.get('next') or request.GET.get('next')
    if target and url_has_allowed_host_and_scheme(
        target,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return target
    return None


@require_http_methods(["GET", "POST"])
def login_view(request):
    """Render the login form and start the admin session on a correct credential.

    A failed attempt re-renders the form with one undistinguished message;
    there is no redirect so the message is visible right away.
    """
    if request.method == 'GET' and is_authenticated(request):
        return redirect(_safe_next(request) or 'dashboard')

    if request.method == 'POST':
        form = LoginForm(request.POST)
        if form.is_valid():
            try:
                login(request, form.cleaned_data['username'], form.cleaned_data['password'])
            except AuthenticationFailure as exc:
                form.add_error(None, str(exc))
            else:
                return redirect(_safe_next(request) or 'dashboard')
    else:
        form = LoginForm()

    return render(request, 'registration/login.html', {
        'form': form,
        'next': _safe_next(request) or '',
    })


@require_http_methods(["GET", "POST"])  # Allow GET for shop tablets that follow plain links
def logout_view(request):
    """Invalidate the admin session and return to the login page."""
    end_session(request)
    return redirect('login')
