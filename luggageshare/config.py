import os
from datetime import timedelta
from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, os.pardir, '.env'))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-me'

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, os.pardir, 'luggageshare.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JSON API, no HTML forms to carry a token
    WTF_CSRF_ENABLED = False
    SESSION_COOKIE_SAMESITE = 'Lax'

    MAIL_SERVER = os.environ.get('MAIL_SERVER') or 'localhost'
    MAIL_PORT = int(os.environ.get('MAIL_PORT') or 25)
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS') is not None
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER') or 'no-reply@luggageshare.local'

    VERIFICATION_CODE_TTL = timedelta(minutes=10)

    POSTS_PER_PAGE = 10
    REQUESTS_PER_PAGE = 10
    CONVERSATIONS_PER_PAGE = 20
    MESSAGES_PER_PAGE = 50
    MAX_PER_PAGE = 100

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_TO_STDOUT = os.environ.get('LOG_TO_STDOUT') is not None


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    MAIL_SUPPRESS_SEND = True
    BCRYPT_LOG_ROUNDS = 4
