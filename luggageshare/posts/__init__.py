from flask import Blueprint

bp = Blueprint('posts', __name__)

from luggageshare.posts import routes  # noqa: E402,F401
