import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_mail import Mail
from flask_bcrypt import Bcrypt
from flask_socketio import SocketIO
from luggageshare.config import Config

# Initialize Flask extensions
db = SQLAlchemy()
login_manager = LoginManager()
mail = Mail()
bcrypt = Bcrypt()
socketio = SocketIO()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Socket handlers must be registered before socketio.init_app builds the server
    from luggageshare.chat import events  # noqa: F401

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)
    bcrypt.init_app(app)
    socketio.init_app(app)

    from luggageshare.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from luggageshare.main import bp as main_bp
    app.register_blueprint(main_bp)

    from luggageshare.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')

    from luggageshare.posts import bp as posts_bp
    app.register_blueprint(posts_bp, url_prefix='/posts')

    from luggageshare.requests import bp as requests_bp
    app.register_blueprint(requests_bp, url_prefix='/requests')

    from luggageshare.chat import bp as chat_bp
    app.register_blueprint(chat_bp)

    from luggageshare.cli import register_commands
    register_commands(app)

    configure_logging(app)

    with app.app_context():
        from luggageshare import models  # noqa: F401
        db.create_all()

    return app


def configure_logging(app):
    """Attach a handler to the app logger outside debug and testing runs."""
    if app.debug or app.testing:
        return

    if app.config['LOG_TO_STDOUT']:
        handler = logging.StreamHandler()
    else:
        if not os.path.exists('logs'):
            os.mkdir('logs')
        handler = RotatingFileHandler('logs/luggageshare.log', maxBytes=10240, backupCount=10)

    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
    level = app.config['LOG_LEVEL']
    handler.setLevel(level)

    # app.logger is the 'luggageshare' logger, parent of every module logger
    app.logger.addHandler(handler)
    app.logger.setLevel(level)

    app.logger.info('LuggageShare startup')
