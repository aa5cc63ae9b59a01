from flask import Blueprint, request, jsonify

from quiz_backend.dependencies import get_credential_service
from quiz_backend.models import LoginRequest, RegisterRequest

router = Blueprint("auth", __name__, url_prefix="/api/auth")


@router.route("/register", methods=["POST"])
def register():
    data = RegisterRequest.model_validate(request.get_json(silent=True) or {})
    get_credential_service().register(data.name, data.email, data.password)
    return jsonify({"msg": "Registered successfully"})


@router.route("/login", methods=["POST"])
def login():
    data = LoginRequest.model_validate(request.get_json(silent=True) or {})
    token, creator = get_credential_service().login(data.email, data.password)
    return jsonify({"token": token, "name": creator.name})
