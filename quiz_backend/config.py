import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


PORT = int(os.getenv("PORT", "5000"))
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "quiz_app")
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
TOKEN_EXPIRE_HOURS = int(os.getenv("TOKEN_EXPIRE_HOURS", "24"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def flask_config():
    """Settings handed to ``app.config`` by the app factory."""
    return {
        "MONGO_URI": MONGO_URI,
        "DB_NAME": DB_NAME,
        "JWT_SECRET_KEY": JWT_SECRET_KEY,
        "JWT_ACCESS_TOKEN_EXPIRES": timedelta(hours=TOKEN_EXPIRE_HOURS),
    }
