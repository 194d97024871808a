import os
import logging

from flask import Flask, jsonify

from common.errors import InvalidInput
from common.web import install_hooks, is_int, read_json_object, request_id
from user_service.store import User, UserStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("user_service")


def create_app(store=None):
    app = Flask(__name__)
    store = store if store is not None else UserStore()
    install_hooks(app, logger)

    @app.route("/users", methods=["POST"])
    def add_user():
        data = read_json_object()
        if data is None:
            raise InvalidInput("invalid request body")

        name = data.get("name", "")
        email = data.get("email", "")
        age = data.get("age", 0)
        if not isinstance(name, str) or not isinstance(email, str) or not is_int(age):
            raise InvalidInput("invalid request body")
        if not name or not email:
            raise InvalidInput("name and email are required")

        store.add_user(User(name=name, email=email, age=age))
        logger.info(f"[{request_id()}] registered user {email}")
        return "", 201

    @app.route("/users/<email>", methods=["GET"])
    def get_user(email):
        user = store.get_user(email)
        return jsonify(user.to_dict())

    return app


def main():
    port = int(os.getenv("PORT", "8081"))
    app = create_app()
    logger.info(f"user_service listening on port {port}")
    app.run(host="0.0.0.0", port=port, threaded=True)


if __name__ == "__main__":
    main()
