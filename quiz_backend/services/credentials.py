import logging
from typing import Tuple

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from quiz_backend.errors import DuplicateEmail, InvalidCredentials, InvalidToken, StoreError, ValidationError
from quiz_backend.extensions import bcrypt
from quiz_backend.models import Creator
from quiz_backend.repositories import CreatorRepository

logger = logging.getLogger(__name__)


class CredentialService:
    """Creator accounts: bcrypt password hashes and JWT bearer tokens.

    Token calls need an active Flask app context (JWTManager settings).
    """

    def __init__(self, creators: CreatorRepository):
        self.creators = creators

    def register(self, name: str, email: str, password: str) -> Creator:
        if not name or not email or not password:
            raise ValidationError("Name, email and password are required")

        # The unique index on email still catches a concurrent registration
        if self.creators.find_by_email(email):
            raise DuplicateEmail()

        password_hash = bcrypt.generate_password_hash(password).decode("utf-8")
        creator = self.creators.insert(Creator(name=name, email=email, password_hash=password_hash))
        logger.info("Registered creator %s (%s)", creator.id, email)
        return creator

    def login(self, email: str, password: str) -> Tuple[str, Creator]:
        creator = self.creators.find_by_email(email) if email else None
        if not creator or not password:
            raise InvalidCredentials()

        try:
            ok = bcrypt.check_password_hash(creator.password_hash, password)
        except ValueError as e:
            logger.error("Stored password hash for %s is unreadable: %s", creator.id, e)
            raise StoreError() from e
        if not ok:
            raise InvalidCredentials()

        token = create_access_token(identity=creator.id)
        return token, creator

    def verify(self, token: str) -> str:
        """Return the creator id a token was issued to."""
        if not token:
            raise InvalidToken("No token")
        try:
            claims = decode_token(token)
        except (JWTExtendedException, PyJWTError) as e:
            logger.warning("Rejected token: %s", e)
            raise InvalidToken()
        creator_id = claims.get("sub")
        if not creator_id:
            raise InvalidToken()
        return creator_id
