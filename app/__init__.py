import logging

from flask import Flask, g, redirect, url_for
from app.config import Config
from app.extensions import db, migrate


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    app.logger.setLevel(level)
    logging.getLogger("app").setLevel(level)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)

    from app import models  # noqa

    from app.routes.auth_routes import auth_bp, dashboard_url_for
    from app.routes.super_admin_routes import super_admin_bp
    from app.routes.department_admin_routes import department_admin_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(super_admin_bp, url_prefix="/super-admin")
    app.register_blueprint(department_admin_bp, url_prefix="/department-admin")

    @app.route('/')
    def index():
        return redirect(dashboard_url_for(g.get("user")) or url_for('auth.login'))

    return app
