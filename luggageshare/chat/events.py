from flask_socketio import emit, join_room, leave_room
from flask_login import current_user
from luggageshare import db, socketio
from luggageshare.errors import APIError, ValidationError
from luggageshare.models.conversation import Conversation
from luggageshare.utils.messaging import get_conversation_for_user, post_message


def _payload(data):
    if not isinstance(data, dict):
        raise ValidationError('Event payload must be an object')
    return data


@socketio.on('connect')
def on_connect(auth=None):
    # Refuse anonymous sockets
    if not current_user.is_authenticated:
        return False


@socketio.on('join')
def on_join(data):
    if not current_user.is_authenticated:
        return

    try:
        conversation = get_conversation_for_user(_payload(data).get('conversation_id'), current_user)
    except APIError as exc:
        emit('error', exc.to_dict())
        return

    join_room(conversation.room)
    emit('joined', {'conversation_id': conversation.id})


@socketio.on('leave')
def on_leave(data):
    if not current_user.is_authenticated:
        return

    conversation_id = data.get('conversation_id') if isinstance(data, dict) else None
    if not conversation_id:
        return

    conversation = db.session.get(Conversation, conversation_id)
    if conversation is not None and conversation.has_participant(current_user.id):
        leave_room(conversation.room)


@socketio.on('message')
def handle_message(data):
    if not current_user.is_authenticated:
        return

    try:
        data = _payload(data)
        message = post_message(data.get('conversation_id'), current_user, data.get('content'))
    except APIError as exc:
        emit('error', exc.to_dict())
        return

    payload = message.to_dict()
    # Everyone else in the room gets the message, the author an acknowledgement
    emit('message', payload, to=message.conversation.room, include_self=False)
    emit('message_sent', {'id': message.id, 'created_at': payload['created_at']})
