import secrets
import string

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_code(length: int = CODE_LENGTH) -> str:
    """Random quiz join code, e.g. ``"K3Q9ZA"``."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
