from __future__ import annotations

from flask import Flask

from gammonbrain.domain.analyzers import AnalyzerRegistry
from gammonbrain.domain.robots import RobotAIService
from gammonbrain.infrastructure.config import AppConfig, load_config
from gammonbrain.infrastructure.gnubg import GnubgIntegration
from gammonbrain.infrastructure.plugins import load_analyzers_from_plugins_dir
from gammonbrain.interface.http.engine_routes import engine_bp
from gammonbrain.interface.http.robot_routes import robots_bp
from gammonbrain.interface.telemetry.logging import get_logger, setup_logging


def create_app(
    config: AppConfig | None = None,
    *,
    gnubg: GnubgIntegration | None = None,
) -> Flask:
    """Instantiate the Flask application and its per-process robot service."""
    cfg = config or load_config()

    setup_logging(cfg.additional.get("STRUCTLOG_LEVEL", "INFO"))
    logger = get_logger("gammonbrain.app")

    app = Flask(__name__)
    app.config.update(
        ENV=cfg.flask_env,
        DEFAULT_DIFFICULTY=cfg.default_difficulty,
        GNUBG_API_URL=cfg.gnubg_api_url,
        APP_CONFIG=cfg,
    )

    registry = AnalyzerRegistry()
    if cfg.plugins_dir is not None:
        registry.extend(load_analyzers_from_plugins_dir(cfg.plugins_dir))

    app.extensions["robot_ai_service"] = RobotAIService(registry)
    app.extensions["gnubg"] = gnubg or GnubgIntegration.from_config(cfg)

    app.register_blueprint(robots_bp, url_prefix="/api/v1/robots")
    app.register_blueprint(engine_bp)

    @app.get("/healthz")
    def healthcheck():
        return {"status": "ok"}, 200

    logger.info(
        "flask_app_initialized",
        env=cfg.flask_env,
        analyzers=registry.names(),
        plugins_dir=str(cfg.plugins_dir) if cfg.plugins_dir else None,
    )
    return app


__all__ = ["create_app"]
