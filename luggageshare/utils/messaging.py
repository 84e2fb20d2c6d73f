import logging
from datetime import datetime
from luggageshare import db, socketio
from luggageshare.errors import NotFoundError, ValidationError
from luggageshare.models.conversation import Conversation, Participant, Message, MessageType
from luggageshare.utils.pagination import paginate

logger = logging.getLogger(__name__)


def create_conversation_for_request(request_obj):
    """Add the request's conversation and its two participants to the session.

    The caller commits, so the request and its conversation land together.
    """
    conversation = Conversation(request=request_obj)
    db.session.add(conversation)
    for user_id in (request_obj.sender_id, request_obj.receiver_id):
        db.session.add(Participant(conversation=conversation, user_id=user_id))
    return conversation


def get_conversation_for_user(conversation_id, user):
    conversation = Conversation.query.join(Participant).filter(
        Conversation.id == conversation_id,
        Participant.user_id == user.id,
    ).first()
    if conversation is None:
        raise NotFoundError('Conversation not found or access denied')
    return conversation


def _append(conversation, author, content, message_type):
    message = Message(
        conversation=conversation,
        sender_id=author.id,
        content=content,
        message_type=message_type,
    )
    db.session.add(message)
    conversation.updated_at = datetime.utcnow()
    return message


def append_system_message(conversation, actor, content):
    """Queue a SYSTEM message attributed to ``actor``; the caller commits."""
    return _append(conversation, actor, content, MessageType.SYSTEM)


def post_message(conversation_id, author, content, message_type=MessageType.TEXT):
    content = (content or '').strip()
    if not content:
        raise ValidationError(errors={'content': ['Message content is required']})

    conversation = get_conversation_for_user(conversation_id, author)
    message = _append(conversation, author, content, message_type)
    db.session.commit()
    return message


def list_messages(conversation_id, user, page, per_page):
    """Page through a conversation oldest first, marking the other side's messages read."""
    conversation = get_conversation_for_user(conversation_id, user)

    Message.query.filter(
        Message.conversation_id == conversation.id,
        Message.sender_id != user.id,
        Message.is_read.is_(False),
    ).update({Message.is_read: True}, synchronize_session=False)
    db.session.commit()

    query = Message.query.filter_by(conversation_id=conversation.id).order_by(
        Message.created_at.asc(), Message.id.asc())
    return paginate(query, page, per_page)


def conversations_query(user):
    return Conversation.query.join(Participant).filter(
        Participant.user_id == user.id,
    ).order_by(Conversation.updated_at.desc(), Conversation.id.desc())


def conversation_summary(conversation, user):
    latest = conversation.latest_message()
    other = conversation.other_participant(user.id)
    request_obj = conversation.request
    return {
        'id': conversation.id,
        'request_id': conversation.request_id,
        'request': {
            'id': request_obj.id,
            'status': request_obj.status.value,
            'sender_id': request_obj.sender_id,
            'receiver_id': request_obj.receiver_id,
            'sender_post': request_obj.sender_post.to_summary_dict(),
            'traveller_post': request_obj.traveller_post.to_summary_dict(),
        },
        'other_participant': other.to_public_dict() if other else None,
        'latest_message': {
            'id': latest.id,
            'content': latest.content,
            'message_type': latest.message_type.value,
            'created_at': latest.created_at.isoformat(),
            'sender_id': latest.sender_id,
        } if latest else None,
        'unread_count': conversation.unread_count(user.id),
        'created_at': conversation.created_at.isoformat(),
        'updated_at': conversation.updated_at.isoformat(),
    }


def conversation_detail(conversation, user):
    data = conversation_summary(conversation, user)
    data['request'] = conversation.request.to_dict()
    data['participants'] = [p.user.to_public_dict() for p in conversation.participants]
    return data


def broadcast_message(message):
    """Push a stored message to everyone who joined the conversation's room."""
    socketio.emit('message', message.to_dict(), to=message.conversation.room)
