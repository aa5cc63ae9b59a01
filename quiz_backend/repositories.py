import logging
from functools import wraps
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from quiz_backend.database import CREATORS, QUIZZES, SUBMISSIONS
from quiz_backend.errors import AlreadyAttempted, DuplicateEmail, StoreError
from quiz_backend.models import (
    QUIZ_CREATED,
    QUIZ_LIVE,
    Creator,
    LeaderboardEntry,
    Quiz,
    QuizSummary,
    Submission,
)

logger = logging.getLogger(__name__)


def store_call(f):
    """Turn driver failures into ``StoreError`` so no Mongo detail reaches callers."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except PyMongoError as e:
            logger.error("MongoDB call %s failed: %s", f.__qualname__, e)
            raise StoreError() from e
    return wrapper


class CreatorRepository:
    def __init__(self, db):
        self.collection = db[CREATORS]

    @store_call
    def find_by_email(self, email: str) -> Optional[Creator]:
        doc = self.collection.find_one({"email": email})
        if not doc:
            return None
        doc["id"] = str(doc.pop("_id"))
        return Creator.model_validate(doc)

    @store_call
    def insert(self, creator: Creator) -> Creator:
        doc = creator.to_document()
        doc.pop("id", None)
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateEmail()
        return creator.model_copy(update={"id": str(result.inserted_id)})


class QuizRepository:
    def __init__(self, db):
        self.collection = db[QUIZZES]

    @store_call
    def insert(self, quiz: Quiz) -> bool:
        """Store a new quiz; False means its code is already taken."""
        try:
            self.collection.insert_one(quiz.to_document())
        except DuplicateKeyError:
            return False
        return True

    @store_call
    def find_by_code(self, code: str) -> Optional[Quiz]:
        doc = self.collection.find_one({"code": code}, {"_id": 0})
        return Quiz.model_validate(doc) if doc else None

    @store_call
    def find_by_creator(self, creator_id: str) -> List[QuizSummary]:
        projection = {"_id": 0, "code": 1, "title": 1, "description": 1, "status": 1, "createdAt": 1}
        cursor = self.collection.find({"creatorId": creator_id}, projection).sort("createdAt", DESCENDING)
        return [QuizSummary.model_validate(doc) for doc in cursor]

    @store_call
    def mark_live(self, code: str, start_time, end_time) -> bool:
        # Only a quiz still in "created" can go live
        result = self.collection.update_one(
            {"code": code, "status": QUIZ_CREATED},
            {"$set": {"status": QUIZ_LIVE, "startTime": start_time, "endTime": end_time}},
        )
        return result.modified_count == 1

    @store_call
    def delete(self, code: str) -> bool:
        return self.collection.delete_one({"code": code}).deleted_count == 1


class SubmissionRepository:
    def __init__(self, db):
        self.collection = db[SUBMISSIONS]

    @store_call
    def exists(self, quiz_code: str, roll_no: str) -> bool:
        return self.collection.find_one({"quizCode": quiz_code, "rollNo": roll_no}, {"_id": 1}) is not None

    @store_call
    def insert(self, submission: Submission) -> Submission:
        try:
            self.collection.insert_one(submission.to_document())
        except DuplicateKeyError:
            raise AlreadyAttempted("Already submitted")
        return submission

    @store_call
    def leaderboard(self, quiz_code: str) -> List[LeaderboardEntry]:
        cursor = self.collection.find(
            {"quizCode": quiz_code},
            {"_id": 0, "name": 1, "rollNo": 1, "score": 1},
        ).sort([("score", DESCENDING), ("submittedAt", ASCENDING)])
        return [LeaderboardEntry.model_validate(doc) for doc in cursor]

    @store_call
    def scores(self, quiz_code: str) -> List[int]:
        return [doc["score"] for doc in self.collection.find({"quizCode": quiz_code}, {"_id": 0, "score": 1})]

    @store_call
    def delete_for_quiz(self, quiz_code: str) -> int:
        return self.collection.delete_many({"quizCode": quiz_code}).deleted_count
