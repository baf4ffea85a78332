"""HabitFlow application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable, Optional

from flask import Flask, jsonify

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .services.dates import Clock
from .services.errors import NotAuthenticatedError, ValidationError

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "habitflow.blueprints.home"
    yield "habitflow.blueprints.auth"
    yield "habitflow.blueprints.habits"
    yield "habitflow.blueprints.goals"
    yield "habitflow.blueprints.insights"


def create_app(
    config_name: str | None = None,
    *,
    config: Optional[BaseConfig] = None,
    clock: Optional[Clock] = None,
) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HABITFLOW_CONFIG"] = config_obj
    app.json.ensure_ascii = False

    from .logging_config import setup_logging

    setup_logging(config_obj)

    # Imported lazily so model modules load only when an app is built
    from .extensions import init_store

    init_store(app, clock=clock)
    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return jsonify({"error": "validation_error", "errors": exc.errors}), 400

    @app.errorhandler(NotAuthenticatedError)
    def _not_authenticated(exc: NotAuthenticatedError):
        return jsonify({"error": "not_authenticated", "message": str(exc)}), 401


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
