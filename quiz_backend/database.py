import logging
from pymongo import MongoClient, ASCENDING

from quiz_backend import config

logger = logging.getLogger(__name__)


CREATORS = "creators"
QUIZZES = "quizzes"
SUBMISSIONS = "submissions"


def get_db(mongo_uri: str = None, db_name: str = None):
    client = MongoClient(mongo_uri or config.MONGO_URI)
    db = client[db_name or config.DB_NAME]
    logger.info("Using MongoDB database '%s'", db.name)
    return db


def ensure_indexes(db):
    """Uniqueness the services rely on instead of check-then-insert alone."""
    db[CREATORS].create_index([("email", ASCENDING)], unique=True)
    db[QUIZZES].create_index([("code", ASCENDING)], unique=True)
    db[QUIZZES].create_index([("creatorId", ASCENDING)])
    db[SUBMISSIONS].create_index(
        [("quizCode", ASCENDING), ("rollNo", ASCENDING)], unique=True
    )
