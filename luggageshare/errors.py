from flask import jsonify
from werkzeug.exceptions import HTTPException, InternalServerError

from luggageshare import db, login_manager


class APIError(Exception):
    """Base error carrying the HTTP status and message shown to the caller."""

    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None, errors=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        self.errors = errors

    def to_dict(self):
        payload = {'message': self.message}
        if self.errors:
            payload['errors'] = self.errors
        return payload


class ValidationError(APIError):
    status_code = 400
    message = 'Invalid input'


class AuthenticationError(APIError):
    status_code = 401
    message = 'Authentication required'


class StateError(APIError):
    status_code = 400
    message = 'Invalid state for this operation'


class ForbiddenError(APIError):
    status_code = 403
    message = 'You are not allowed to perform this action'


class NotFoundError(APIError):
    status_code = 404
    message = 'Not found or access denied'


class ConflictError(APIError):
    status_code = 409
    message = 'Resource already exists'


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'message': 'Authentication required'}), 401


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(InternalServerError)
    def handle_internal_error(error):
        db.session.rollback()
        return jsonify({'message': 'Internal server error'}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code
