"""Flask extensions shared across blueprints, bound to an app by ``init_extensions``."""
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_cors import CORS

bcrypt = Bcrypt()
jwt = JWTManager()
cors = CORS()


def init_extensions(app):
    """Password hashing, bearer tokens and CORS for the quiz API."""
    cors.init_app(app, resources={r"/api/*": {"origins": "*"}, r"/": {"origins": "*"}})
    bcrypt.init_app(app)
    jwt.init_app(app)
