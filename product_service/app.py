import sys
import logging

from flask import Flask, jsonify

from common.errors import ConfigError, InternalLookupFailure, InvalidInput
from common.web import install_hooks, is_int, read_json_object, request_id
from product_service.config import Settings, load_settings
from product_service.store import InventoryStore, Product
from product_service.user_client import UserClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("product_service")


def create_app(settings=None, store=None, user_client=None):
    app = Flask(__name__)
    settings = settings if settings is not None else Settings()
    store = store if store is not None else InventoryStore()
    if user_client is None:
        user_client = UserClient(settings.user_service_url, timeout=settings.request_timeout)
    install_hooks(app, logger)

    @app.route("/products", methods=["POST"])
    def add_product():
        data = read_json_object()
        if data is None:
            raise InvalidInput("invalid request body")

        product_id = data.get("id", 0)
        quantity = data.get("quantity", 0)
        name = data.get("name", "")
        if not is_int(product_id) or not is_int(quantity) or not isinstance(name, str):
            raise InvalidInput("invalid request body")
        if not name or product_id <= 0 or quantity <= 0:
            raise InvalidInput("invalid product data")

        store.add_product(Product(id=product_id, name=name, quantity=quantity))
        return "", 201

    @app.route("/products/<int:product_id>", methods=["GET"])
    def get_product(product_id):
        return jsonify(store.get_product(product_id).to_dict())

    @app.route("/products/book", methods=["POST"])
    def book_product():
        data = read_json_object()
        if data is None:
            raise InvalidInput("invalid request body")

        product_id = data.get("product_id", 0)
        email = data.get("email", "")
        if not is_int(product_id) or not isinstance(email, str):
            raise InvalidInput("invalid request body")
        if not email:
            raise InvalidInput("email is required")

        store.book_product(product_id, email)
        logger.info(f"[{request_id()}] booking confirmed: product={product_id} email={email}")
        return "", 200

    @app.route("/users/<email>/bookings", methods=["GET"])
    def get_user_bookings(email):
        user = user_client.get_user(email)

        try:
            bookings = store.get_bookings(email)
        except Exception:
            logger.exception(f"[{request_id()}] booking lookup failed for {email}")
            raise InternalLookupFailure("failed to get bookings")

        return jsonify({
            "name": user["name"],
            "email": user["email"],
            "age": user["age"],
            "bookings": [b.to_dict() for b in bookings],
        })

    return app


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(f"error reading config file, {e}")
        sys.exit(1)

    app = create_app(settings)
    logger.info(f"product_service listening on port {settings.port}, "
                f"user service at {settings.user_service_url or '(unset)'}")
    app.run(host="0.0.0.0", port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
