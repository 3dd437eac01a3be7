import logging

import click
from flask import Flask, jsonify
from config.config import Config
from extensions import db, login_manager, migrate

# Route Imports
from routes.auth_routes import auth_bp
from routes.admin_routes import admin_bp
from routes.hod_routes import hod_bp
from routes.faculty_routes import faculty_bp
from routes.student_routes import student_bp

from models.user import User
from utils.seed_data import run_seed


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    app.logger.setLevel(level)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    # Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Authentication required"}), 401

    # Register Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(hod_bp)
    app.register_blueprint(faculty_bp)
    app.register_blueprint(student_bp)

    @app.cli.command("seed")
    def seed_command():
        """Create roles, default departments and the admin account."""
        credentials = run_seed()
        if credentials:
            username, password = credentials
            click.echo(f"Admin account created: {username} / {password}")
        else:
            click.echo("Seed complete, admin account already exists")

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=True)
