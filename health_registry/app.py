import os
import ssl
from flask import Flask
from flask_cors import CORS
import sqlalchemy as sa
from .config import Config
from .extensions import db, jwt, migrate
from .registry import registry
from .routes import auth_bp, registry_bp
from .commands import register_commands

def create_app(config_object=Config):
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(registry_bp)
    register_commands(app)

    if app.config.get("REGISTRY_AUTHORITY"):
        with app.app_context():
            bootstrap_authority(app)
    return app


def bootstrap_authority(app):
    """Store REGISTRY_AUTHORITY unless an authority is already persisted."""
    if not sa.inspect(db.engine).has_table("registry_settings"):
        app.logger.warning("Registry tables missing, skipping authority bootstrap. Run 'flask init-db' first.")
        return
    if registry.get_authority() is None:
        registry.set_authority(app.config["REGISTRY_AUTHORITY"])


if __name__ == "__main__":
    app = create_app()

    # TLS 1.3 only
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.minimum_version = ssl.TLSVersion.TLSv1_3
    context.maximum_version = ssl.TLSVersion.TLSv1_3

    cert_path = os.path.abspath(app.config["SSL_CERT_FILE"])
    key_path = os.path.abspath(app.config["SSL_KEY_FILE"])

    try:
        context.load_cert_chain(cert_path, key_path)
        app.logger.info("Starting health registry with HTTPS (TLS 1.3)")
        app.run(host='0.0.0.0', port=5000, ssl_context=context, debug=app.config["DEBUG"])
    except FileNotFoundError as e:
        app.logger.warning(f"SSL Certificate not found: {e}")
        app.logger.warning("Falling back to HTTP (insecure)")
        app.run(host='0.0.0.0', port=5000, debug=app.config["DEBUG"])
