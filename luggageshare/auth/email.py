import logging
import secrets
from datetime import datetime
from flask import current_app
from flask_mail import Message as MailMessage
from luggageshare import db, mail
from luggageshare.models.user import VerificationToken

logger = logging.getLogger(__name__)


def issue_verification_code(email):
    """Replace any pending codes for ``email`` with a fresh 6-digit one."""
    VerificationToken.query.filter_by(identifier=email).delete()
    code = f'{secrets.randbelow(900000) + 100000}'
    token = VerificationToken(
        identifier=email,
        token=code,
        expires=datetime.utcnow() + current_app.config['VERIFICATION_CODE_TTL'],
    )
    db.session.add(token)
    db.session.commit()
    return token


def send_verification_email(user, code):
    minutes = int(current_app.config['VERIFICATION_CODE_TTL'].total_seconds() // 60)
    msg = MailMessage(
        subject='Verify your LuggageShare account',
        recipients=[user.email],
        body=(f'Hi {user.name},\n\n'
              f'Your verification code is {code}. It expires in {minutes} minutes.\n'),
    )
    mail.send(msg)
    logger.info('Verification code sent to user %s', user.id)
