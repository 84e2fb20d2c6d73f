from flask import Blueprint

bp = Blueprint('requests', __name__)

from luggageshare.requests import routes  # noqa: E402,F401
