import logging
from datetime import datetime
from flask import jsonify
from flask_login import current_user, login_required, login_user, logout_user
from luggageshare import db
from luggageshare.auth import bp
from luggageshare.auth.email import issue_verification_code, send_verification_email
from luggageshare.auth.forms import (
    LoginForm, RegistrationForm, ResendVerificationForm, VerifyEmailForm,
)
from luggageshare.errors import AuthenticationError, ConflictError, NotFoundError, StateError, ValidationError
from luggageshare.models.user import User, VerificationToken

logger = logging.getLogger(__name__)


def _normalise_email(value):
    return value.strip().lower()


@bp.route('/register', methods=['POST'])
def register():
    form = RegistrationForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    email = _normalise_email(form.email.data)
    if User.query.filter_by(email=email).first():
        raise ConflictError('An account with this email already exists')

    user = User(name=form.name.data.strip(), last_name=form.last_name.data or None, email=email)
    user.set_password(form.password.data)
    db.session.add(user)
    db.session.commit()

    token = issue_verification_code(email)
    send_verification_email(user, token.token)
    logger.info('User %s registered', user.id)

    return jsonify({
        'message': 'Account created. Check your email for the verification code.',
        'user': user.to_dict(),
    }), 201


@bp.route('/verify-email', methods=['POST'])
def verify_email():
    form = VerifyEmailForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    email = _normalise_email(form.email.data)
    token = VerificationToken.query.filter_by(identifier=email, token=form.code.data).first()
    user = User.query.filter_by(email=email).first()
    if token is None or token.is_expired() or user is None:
        raise StateError('Invalid or expired verification code')

    user.email_verified_at = datetime.utcnow()
    db.session.delete(token)
    db.session.commit()
    logger.info('User %s verified their email', user.id)

    return jsonify({'message': 'Email verified successfully'})


@bp.route('/resend-verification', methods=['POST'])
def resend_verification():
    form = ResendVerificationForm()
    if not form.validate_on_submit():
        raise ValidationError('Invalid email address', errors=form.errors)

    user = User.query.filter_by(email=_normalise_email(form.email.data)).first()
    if user is None:
        raise NotFoundError('User not found')
    if user.is_verified:
        raise StateError('Email is already verified')

    token = issue_verification_code(user.email)
    send_verification_email(user, token.token)

    return jsonify({'message': 'Verification code sent successfully'})


@bp.route('/login', methods=['POST'])
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    user = User.query.filter_by(email=_normalise_email(form.email.data)).first()
    # Same answer whichever check fails
    if user is None or not user.is_verified or not user.check_password(form.password.data):
        raise AuthenticationError('Invalid credentials')

    login_user(user)
    return jsonify({'message': 'Logged in', 'user': user.to_dict()})


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out'})


@bp.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})
