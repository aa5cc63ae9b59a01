import logging
from datetime import timedelta
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from quiz_backend.errors import (
    AlreadyAttempted,
    Forbidden,
    InvalidState,
    NotFound,
    StoreError,
    TimeExpired,
    ValidationError,
)
from quiz_backend.models import (
    ADMISSION_ALLOWED,
    ADMISSION_ATTEMPTED,
    ADMISSION_ENDED,
    QUIZ_CREATED,
    QUIZ_LIVE,
    AdmissionDecision,
    LeaderboardEntry,
    ParticipantQuestion,
    Question,
    QuestionSheet,
    Quiz,
    QuizSummary,
    ResultSummary,
    ScoreResult,
    Submission,
)
from quiz_backend.repositories import QuizRepository, SubmissionRepository
from quiz_backend.utils.clock import utcnow
from quiz_backend.utils.codes import generate_code

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 5


def score_answers(questions: List[Question], answers: List[Optional[int]]) -> int:
    """One point per question whose answer matches its correct index.

    Missing, null or out-of-range answers simply don't match.
    """
    score = 0
    for i, question in enumerate(questions):
        if i < len(answers) and answers[i] == question.correct_index:
            score += 1
    return score


class QuizService:
    """Quiz lifecycle, participant flow and results over the quiz/submission stores."""

    def __init__(self, quizzes: QuizRepository, submissions: SubmissionRepository, clock=utcnow):
        self.quizzes = quizzes
        self.submissions = submissions
        self.clock = clock

    # Creator side

    def create_quiz(self, creator_id, title, description, duration, questions) -> Quiz:
        if not title or not str(title).strip():
            raise ValidationError("Title is required")
        if not questions:
            raise ValidationError("At least one question is required")
        if not isinstance(duration, int) or isinstance(duration, bool) or duration <= 0:
            raise ValidationError("Duration must be a positive number of seconds")

        try:
            questions = [q if isinstance(q, Question) else Question.model_validate(q) for q in questions]
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid question: {e.errors()[0]['msg']}")

        for attempt in range(MAX_CODE_ATTEMPTS):
            quiz = Quiz(
                code=generate_code(),
                title=title,
                description=description or "",
                duration=duration,
                creator_id=creator_id,
                questions=questions,
                created_at=self.clock(),
            )
            if self.quizzes.insert(quiz):
                logger.info("Quiz %s created by %s with %d questions", quiz.code, creator_id, len(questions))
                return quiz
            logger.warning("Quiz code %s already taken (attempt %d)", quiz.code, attempt + 1)

        logger.error("Could not allocate a unique quiz code after %d attempts", MAX_CODE_ATTEMPTS)
        raise StoreError()

    def list_mine(self, creator_id) -> List[QuizSummary]:
        return self.quizzes.find_by_creator(creator_id)

    def get_quiz(self, code, requester_id) -> Quiz:
        quiz = self.quizzes.find_by_code(code)
        if not quiz:
            raise NotFound()
        if quiz.creator_id != requester_id:
            raise Forbidden("Access denied")
        return quiz

    def start_quiz(self, code, requester_id) -> Quiz:
        quiz = self.get_quiz(code, requester_id)
        if quiz.status == QUIZ_LIVE:
            raise InvalidState("Quiz already live")

        start_time = self.clock()
        end_time = start_time + timedelta(seconds=quiz.duration)
        if not self.quizzes.mark_live(code, start_time, end_time):
            # Someone else started it between our read and the update
            raise InvalidState("Quiz already live")

        logger.info("Quiz %s is live until %s", code, end_time.isoformat())
        return quiz.model_copy(update={"status": QUIZ_LIVE, "start_time": start_time, "end_time": end_time})

    def delete_quiz(self, code, requester_id) -> None:
        self.get_quiz(code, requester_id)
        self.quizzes.delete(code)
        removed = self.submissions.delete_for_quiz(code)
        logger.info("Quiz %s deleted along with %d submissions", code, removed)

    # Participant side

    def join_quiz(self, code, roll_no) -> AdmissionDecision:
        if not roll_no:
            raise ValidationError("Roll number is required")
        quiz = self.quizzes.find_by_code(code)
        if not quiz:
            raise NotFound()

        if quiz.status != QUIZ_LIVE:
            return AdmissionDecision(status=quiz.status)
        if self.clock() > quiz.end_time:
            return AdmissionDecision(status=ADMISSION_ENDED)
        if self.submissions.exists(code, roll_no):
            return AdmissionDecision(status=ADMISSION_ATTEMPTED)
        return AdmissionDecision(status=ADMISSION_ALLOWED, end_time=quiz.end_time)

    def get_questions_for_participant(self, code) -> QuestionSheet:
        quiz = self.quizzes.find_by_code(code)
        if not quiz or quiz.status != QUIZ_LIVE:
            raise InvalidState("Quiz not live")

        return QuestionSheet(
            end_time=quiz.end_time,
            questions=[ParticipantQuestion(text=q.text, options=list(q.options)) for q in quiz.questions],
        )

    def submit_answers(self, code, name, branch, roll_no, answers) -> ScoreResult:
        if not roll_no:
            raise ValidationError("Roll number is required")
        quiz = self.quizzes.find_by_code(code)
        if not quiz:
            raise NotFound()
        if quiz.status == QUIZ_CREATED:
            raise InvalidState("Quiz not live")
        if self.clock() > quiz.end_time:
            raise TimeExpired()
        if self.submissions.exists(code, roll_no):
            raise AlreadyAttempted("Already submitted")

        answers = list(answers or [])
        score = score_answers(quiz.questions, answers)
        self.submissions.insert(Submission(
            quiz_code=code,
            name=name or "",
            branch=branch or "",
            roll_no=roll_no,
            answers=answers,
            score=score,
            submitted_at=self.clock(),
        ))

        logger.info("Submission for quiz %s by %s: %d/%d", code, roll_no, score, len(quiz.questions))
        return ScoreResult(score=score, total=len(quiz.questions))

    # Results

    def leaderboard(self, code) -> List[LeaderboardEntry]:
        return self.submissions.leaderboard(code)

    def summary(self, code) -> ResultSummary:
        scores = self.submissions.scores(code)
        if not scores:
            return ResultSummary(total=0, highest=0, average=0)
        return ResultSummary(total=len(scores), highest=max(scores), average=sum(scores) / len(scores))
