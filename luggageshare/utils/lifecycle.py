"""
Request lifecycle: creation of a request together with its conversation,
and the guarded status transitions that follow.

    PENDING  -> ACCEPTED | REJECTED | CANCELLED
    ACCEPTED -> COMPLETED | CANCELLED

Every successful transition appends one SYSTEM message to the request's
conversation in the same transaction as the status change.
"""
import logging
from datetime import datetime
from decimal import Decimal
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from luggageshare import db
from luggageshare.errors import ConflictError, ForbiddenError, NotFoundError, StateError, ValidationError
from luggageshare.models.post import SenderPost, TravellerPost
from luggageshare.models.request import Request, RequestStatus
from luggageshare.utils.messaging import append_system_message, create_conversation_for_request
from luggageshare.utils.posts import find_active_post

logger = logging.getLogger(__name__)

# target status -> (party allowed to apply it, refusal message, wrong-state message)
# A party of None means either side of the request may apply it.
TRANSITION_RULES = {
    RequestStatus.ACCEPTED: ('receiver', 'Only the request receiver can accept or reject',
                             'Can only accept or reject pending requests'),
    RequestStatus.REJECTED: ('receiver', 'Only the request receiver can accept or reject',
                             'Can only accept or reject pending requests'),
    RequestStatus.COMPLETED: (None, None, 'Only accepted requests can be completed'),
    RequestStatus.CANCELLED: ('sender', 'Only the request sender can cancel',
                              'Can only cancel pending or accepted requests'),
}

SYSTEM_MESSAGES = {
    RequestStatus.ACCEPTED: 'Request has been accepted',
    RequestStatus.REJECTED: 'Request has been rejected',
    RequestStatus.COMPLETED: 'Request has been completed',
    RequestStatus.CANCELLED: 'Request has been cancelled',
}


def format_amount(amount):
    """40.0 -> '40', 40.5 -> '40.5', 1e-07 -> '0.0000001'"""
    text = format(Decimal(repr(float(amount))), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def system_message_for(status, agreed_price=None):
    text = SYSTEM_MESSAGES[status]
    if status is RequestStatus.ACCEPTED and agreed_price:
        text += f' for ${format_amount(agreed_price)}'
    return text


def create_request(actor, sender_post_id, traveller_post_id, message=None, proposed_price=None):
    """Open a request from ``actor`` on the other party's post.

    ``actor`` must own one of the two posts. They are recorded as the
    request's sender and the owner of the other post as its receiver.
    """
    sender_post = find_active_post(SenderPost, sender_post_id)
    traveller_post = find_active_post(TravellerPost, traveller_post_id)
    if sender_post is None or traveller_post is None:
        raise NotFoundError('One or both posts not found or inactive')

    if sender_post.user_id == actor.id:
        counterparty_id = traveller_post.user_id
    elif traveller_post.user_id == actor.id:
        counterparty_id = sender_post.user_id
    else:
        raise ForbiddenError('You must own one of the posts to create a request')

    if counterparty_id == actor.id:
        raise ForbiddenError('You cannot send a request to yourself')

    existing = Request.query.filter_by(
        sender_post_id=sender_post.id,
        traveller_post_id=traveller_post.id,
        sender_id=actor.id,
        receiver_id=counterparty_id,
    ).first()
    if existing is not None:
        raise ConflictError('A request already exists between these posts')

    request_obj = Request(
        sender_post_id=sender_post.id,
        traveller_post_id=traveller_post.id,
        sender_id=actor.id,
        receiver_id=counterparty_id,
        message=message,
        proposed_price=proposed_price,
        status=RequestStatus.PENDING,
    )
    db.session.add(request_obj)
    create_conversation_for_request(request_obj)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('A request already exists between these posts')

    logger.info('Request %s opened by user %s to user %s',
                request_obj.id, actor.id, counterparty_id)
    return request_obj


def get_request_for_user(request_id, user):
    request_obj = Request.query.filter(
        Request.id == request_id,
        or_(Request.sender_id == user.id, Request.receiver_id == user.id),
    ).first()
    if request_obj is None:
        raise NotFoundError('Request not found or access denied')
    return request_obj


def check_transition(request_obj, actor, status):
    """Raise unless ``actor`` may move ``request_obj`` to ``status`` right now."""
    if status not in TRANSITION_RULES:
        raise ValidationError(errors={'status': [f'Cannot set status to {status.value}']})

    party, forbidden_message, state_message = TRANSITION_RULES[status]
    if party == 'receiver' and request_obj.receiver_id != actor.id:
        raise ForbiddenError(forbidden_message)
    if party == 'sender' and request_obj.sender_id != actor.id:
        raise ForbiddenError(forbidden_message)

    if not request_obj.can_transition_to(status):
        raise StateError(state_message)


def transition_request(request_id, actor, status, agreed_price=None):
    """Apply a lifecycle transition and record it in the conversation.

    Returns ``(request, system_message)``. The status write is conditional
    on the status read here, so two concurrent transitions cannot both win.
    """
    request_obj = get_request_for_user(request_id, actor)
    try:
        check_transition(request_obj, actor, status)
    except (ForbiddenError, StateError) as exc:
        logger.warning('User %s refused %s on request %s (%s): %s', actor.id,
                       status.value, request_obj.id, request_obj.status.value, exc.message)
        raise

    changes = {Request.status: status, Request.updated_at: datetime.utcnow()}
    if status is RequestStatus.ACCEPTED and agreed_price is not None:
        changes[Request.agreed_price] = agreed_price

    updated = Request.query.filter(
        Request.id == request_obj.id,
        Request.status == request_obj.status,
    ).update(changes, synchronize_session=False)
    if not updated:
        db.session.rollback()
        raise StateError('Request status changed, please reload and try again')

    previous = request_obj.status
    message = append_system_message(request_obj.conversation, actor,
                                    system_message_for(status, agreed_price))
    db.session.commit()

    logger.info('Request %s moved %s -> %s by user %s',
                request_obj.id, previous.value, status.value, actor.id)
    return request_obj, message


def requests_for_user_query(user, kind=None, status=None):
    """Requests the user is part of: ``sent``, ``received`` or both."""
    if kind == 'sent':
        query = Request.query.filter(Request.sender_id == user.id)
    elif kind == 'received':
        query = Request.query.filter(Request.receiver_id == user.id)
    else:
        query = Request.query.filter(or_(Request.sender_id == user.id,
                                         Request.receiver_id == user.id))
    if status is not None:
        query = query.filter(Request.status == status)
    return query.order_by(Request.created_at.desc(), Request.id.desc())
