import logging
from flask import Flask, jsonify

from quiz_backend import config
from quiz_backend.database import ensure_indexes, get_db
from quiz_backend.errors import register_error_handlers
from quiz_backend.extensions import init_extensions
from quiz_backend.repositories import CreatorRepository, QuizRepository, SubmissionRepository
from quiz_backend.routes.auth.auth import router as auth_router
from quiz_backend.routes.quiz.creator import router as quiz_creator_router
from quiz_backend.routes.quiz.participant import router as quiz_participant_router
from quiz_backend.routes.quiz.results import router as quiz_results_router
from quiz_backend.services.credentials import CredentialService
from quiz_backend.services.quiz_service import QuizService

logger = logging.getLogger(__name__)


def create_app(db=None, overrides=None):
    app = Flask(__name__)
    app.config.update(config.flask_config())
    if overrides:
        app.config.update(overrides)

    init_extensions(app)

    if db is None:
        db = get_db(app.config["MONGO_URI"], app.config["DB_NAME"])
    ensure_indexes(db)

    app.extensions["quiz_service"] = QuizService(QuizRepository(db), SubmissionRepository(db))
    app.extensions["credential_service"] = CredentialService(CreatorRepository(db))

    # Register blueprints
    app.register_blueprint(auth_router)
    app.register_blueprint(quiz_creator_router)
    app.register_blueprint(quiz_participant_router)
    app.register_blueprint(quiz_results_router)
    register_error_handlers(app)

    @app.route("/", methods=["GET"])
    def root():
        return jsonify({"msg": "Backend is running"})

    return app


def main():
    logging.basicConfig(level=config.LOG_LEVEL)
    app = create_app()
    logger.info("Server running on port %s", config.PORT)
    app.run(host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
