from flask import Blueprint, jsonify

from quiz_backend.dependencies import get_quiz_service

router = Blueprint("quiz_results", __name__, url_prefix="/api/quiz")


@router.route("/leaderboard/<string:code>", methods=["GET"])
def leaderboard(code):
    entries = get_quiz_service().leaderboard(code)
    return jsonify([entry.to_json() for entry in entries])


@router.route("/summary/<string:code>", methods=["GET"])
def summary(code):
    return jsonify(get_quiz_service().summary(code).model_dump())
