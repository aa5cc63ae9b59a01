from flask import Blueprint, request, jsonify

from quiz_backend.dependencies import get_quiz_service
from quiz_backend.errors import AlreadyAttempted, TimeExpired
from quiz_backend.models import ADMISSION_ATTEMPTED, ADMISSION_ENDED, JoinRequest, SubmitRequest

router = Blueprint("quiz_participant", __name__, url_prefix="/api/quiz")


@router.route("/join/<string:code>", methods=["POST"])
def join_quiz(code):
    data = JoinRequest.model_validate(request.get_json(silent=True) or {})
    decision = get_quiz_service().join_quiz(code, data.roll_no)

    if decision.status == ADMISSION_ENDED:
        raise TimeExpired("Quiz ended")
    if decision.status == ADMISSION_ATTEMPTED:
        raise AlreadyAttempted()
    return jsonify(decision.model_dump(by_alias=True, mode="json", exclude_none=True))


@router.route("/questions/<string:code>", methods=["GET"])
def get_questions(code):
    sheet = get_quiz_service().get_questions_for_participant(code)
    return jsonify(sheet.to_json())


@router.route("/submit/<string:code>", methods=["POST"])
def submit_quiz(code):
    data = SubmitRequest.model_validate(request.get_json(silent=True) or {})
    result = get_quiz_service().submit_answers(code, data.name, data.branch, data.roll_no, data.answers)
    return jsonify(result.model_dump())
