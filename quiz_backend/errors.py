import logging

from flask import jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class QuizError(Exception):
    """Base for every error surfaced to API callers as ``{"msg": ...}``."""

    status_code = 400
    msg = "Bad request"

    def __init__(self, msg: str = None):
        super().__init__(msg or self.msg)
        if msg:
            self.msg = msg


class ValidationError(QuizError):
    msg = "Invalid data"


class NotFound(QuizError):
    status_code = 404
    msg = "Quiz not found"


class Forbidden(QuizError):
    status_code = 403
    msg = "Not your quiz"


class InvalidState(QuizError):
    msg = "Quiz not live"


class TimeExpired(QuizError):
    msg = "Time over"


class AlreadyAttempted(QuizError):
    msg = "Already attempted"


class DuplicateEmail(QuizError):
    msg = "Email already exists"


class InvalidCredentials(QuizError):
    msg = "Invalid credentials"


class InvalidToken(QuizError):
    status_code = 401
    msg = "Invalid token"


class StoreError(QuizError):
    status_code = 500
    msg = "Internal server error"


def register_error_handlers(app):
    @app.errorhandler(QuizError)
    def handle_quiz_error(e):
        if e.status_code >= 500:
            logger.error("Request failed: %r", e)
        return jsonify({"msg": e.msg}), e.status_code

    @app.errorhandler(PydanticValidationError)
    def handle_bad_payload(e):
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "error": err["msg"]}
            for err in e.errors()
        ]
        return jsonify({"msg": ValidationError.msg, "errors": errors}), 400

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        # Let werkzeug's own HTTP errors (404 for unknown routes, 405...) through
        if isinstance(e, HTTPException):
            return jsonify({"msg": e.description}), e.code
        logger.error("Unhandled error: %s", e, exc_info=True)
        return jsonify({"msg": StoreError.msg}), 500
