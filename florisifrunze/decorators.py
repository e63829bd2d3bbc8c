from functools import wraps

from flask import render_template, request
from flask_login import current_user

from florisifrunze import json_error, login_manager, wants_json


def admin_required(view):
    """Login plus admin role. JSON callers get 401/403, anonymous page visitors go to the login form."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        if not current_user.is_admin:
            if wants_json():
                return json_error('Admin access required', 403)
            return render_template("error.html", code=403,
                                   message="Acces interzis. Doar pentru administratori."), 403
        return view(*args, **kwargs)
    return wrapper


def json_body():
    """The request body as a dict, or None when it is missing or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None
