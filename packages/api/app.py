"""Flask application setup for the AWS inventory proxy."""

import logging
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from packages.api.middleware import error_handler
from packages.config import load_config
from packages.inventory.errors import CredentialsError, UpstreamError

# Configure logging
logger = logging.getLogger("aws_inventory.api")

IMPLICIT_METHODS = {"HEAD", "OPTIONS"}


def create_app(config: dict[str, Any] | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Optional configuration dictionary, applied over the
            environment-derived defaults

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    # Default configuration
    app.config.update(load_config())

    # Apply custom configuration if provided
    if config:
        app.config.update(config)

    # Register middleware
    _register_middleware(app)

    # Register error handlers
    _register_error_handlers(app)

    # Register blueprints
    from packages.api.routes import inventory as inventory_routes

    app.register_blueprint(inventory_routes.bp)

    logger.info("Flask application created successfully")
    return app


def _register_middleware(app: Flask) -> None:
    """Register middleware functions."""

    # Request logging
    @app.before_request
    def log_request() -> None:
        logger.info(
            f"Request: {request.method} {request.path}",
            extra={"remote_addr": request.remote_addr},
        )

    # Werkzeug adds HEAD to every GET rule; only the declared methods are served
    @app.before_request
    def reject_implicit_methods() -> None:
        rule = request.url_rule
        if rule is not None and request.method in IMPLICIT_METHODS:
            raise MethodNotAllowed(valid_methods=sorted(rule.methods - IMPLICIT_METHODS))


def _register_error_handlers(app: Flask) -> None:
    """Register error handlers for consistent error responses."""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException) -> tuple[dict[str, Any], int]:
        """Handle HTTP exceptions, including 405 for wrong methods."""
        return error_handler.handle_http_error(e)

    @app.errorhandler(CredentialsError)
    def handle_credentials_exception(e: CredentialsError) -> tuple[dict[str, Any], int]:
        return error_handler.handle_credentials_error(e)

    @app.errorhandler(UpstreamError)
    def handle_upstream_exception(e: UpstreamError) -> tuple[dict[str, Any], int]:
        """Handle failed AWS calls without taking the server down."""
        return error_handler.handle_upstream_error(e)

    @app.errorhandler(Exception)
    def handle_generic_exception(e: Exception) -> tuple[dict[str, Any], int]:
        """Handle all other exceptions."""
        return error_handler.handle_generic_error(e)


def main() -> None:
    """Run the development server on HOST:PORT."""
    app = create_app()
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = app.config["HOST"]
    port = app.config["PORT"]
    display_host = "localhost" if host == "0.0.0.0" else host
    logger.info(f"Server running at http://{display_host}:{port}/")
    app.run(host=host, port=port)


if __name__ == "__main__":
    main()
