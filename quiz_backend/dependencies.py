from functools import wraps
from flask import current_app, g, request


def get_quiz_service():
    return current_app.extensions["quiz_service"]


def get_credential_service():
    return current_app.extensions["credential_service"]


def creator_required(f):
    """Require ``Authorization: Bearer <token>``; sets ``g.creator_id``."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer":
            token = ""
        g.creator_id = get_credential_service().verify(token.strip())
        return f(*args, **kwargs)
    return wrapper
