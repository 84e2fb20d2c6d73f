from flask import Blueprint

bp = Blueprint('chat', __name__)

from luggageshare.chat import routes  # noqa: E402,F401
