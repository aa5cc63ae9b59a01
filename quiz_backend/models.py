from pydantic import BaseModel, ConfigDict, PlainSerializer, model_validator
from typing import Annotated, List, Optional
from datetime import datetime, timezone


QUIZ_CREATED = "created"
QUIZ_LIVE = "live"

ADMISSION_ENDED = "ended"
ADMISSION_ATTEMPTED = "attempted"
ADMISSION_ALLOWED = "allowed"


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def as_utc_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


# Stored naive (UTC); rendered with an explicit offset so clients don't read local time
UtcDatetime = Annotated[datetime, PlainSerializer(as_utc_iso, when_used="json")]


class Document(BaseModel):
    """Base for everything stored in or returned from MongoDB (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Question(Document):
    text: str
    options: List[str]
    correct_index: int

    @model_validator(mode="after")
    def check_correct_index(self):
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError("correctIndex must point at one of the options")
        return self


class ParticipantQuestion(Document):
    text: str
    options: List[str]


class Creator(Document):
    id: Optional[str] = None
    name: str
    email: str
    password_hash: str


class Quiz(Document):
    code: str
    title: str
    description: str = ""
    duration: int
    creator_id: Optional[str] = None
    status: str = QUIZ_CREATED
    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None
    questions: List[Question]
    created_at: UtcDatetime


class QuizSummary(Document):
    code: str
    title: str
    description: str = ""
    status: str
    created_at: UtcDatetime


class Submission(Document):
    quiz_code: str
    name: str = ""
    branch: str = ""
    roll_no: str
    answers: List[Optional[int]] = []
    score: int
    submitted_at: UtcDatetime


class LeaderboardEntry(Document):
    name: str = ""
    roll_no: str
    score: int


class AdmissionDecision(Document):
    status: str
    end_time: Optional[UtcDatetime] = None

    @property
    def allowed(self) -> bool:
        return self.status == ADMISSION_ALLOWED


class QuestionSheet(Document):
    end_time: Optional[UtcDatetime] = None
    questions: List[ParticipantQuestion]


class ScoreResult(BaseModel):
    score: int
    total: int


class ResultSummary(BaseModel):
    total: int = 0
    highest: int = 0
    average: float = 0


# Request payloads

class RegisterRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class QuizCreateRequest(BaseModel):
    title: Optional[str] = None
    description: str = ""
    duration: int = 0
    questions: List[Question] = []


class JoinRequest(Document):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    roll_no: Optional[str] = None


class SubmitRequest(Document):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    branch: str = ""
    roll_no: Optional[str] = None
    answers: List[Optional[int]] = []
