from flask import Blueprint, request, jsonify, g

from quiz_backend.dependencies import creator_required, get_quiz_service
from quiz_backend.models import QuizCreateRequest

router = Blueprint("quiz_creator", __name__, url_prefix="/api/quiz")


@router.route("/create", methods=["POST"])
@creator_required
def create_quiz():
    data = QuizCreateRequest.model_validate(request.get_json(silent=True) or {})
    quiz = get_quiz_service().create_quiz(
        g.creator_id, data.title, data.description, data.duration, data.questions
    )
    return jsonify(quiz.to_json())


@router.route("/my", methods=["GET"])
@creator_required
def my_quizzes():
    quizzes = get_quiz_service().list_mine(g.creator_id)
    return jsonify([quiz.to_json() for quiz in quizzes])


@router.route("/<string:code>", methods=["GET"])
@creator_required
def get_quiz(code):
    quiz = get_quiz_service().get_quiz(code, g.creator_id)
    return jsonify(quiz.to_json())


@router.route("/start/<string:code>", methods=["POST"])
@creator_required
def start_quiz(code):
    get_quiz_service().start_quiz(code, g.creator_id)
    return jsonify({"msg": "Quiz started"})


@router.route("/delete/<string:code>", methods=["DELETE"])
@creator_required
def delete_quiz(code):
    get_quiz_service().delete_quiz(code, g.creator_id)
    return jsonify({"msg": "Quiz deleted"})
