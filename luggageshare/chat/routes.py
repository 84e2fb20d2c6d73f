from flask import jsonify, request
from flask_login import current_user, login_required
from luggageshare.chat import bp
from luggageshare.chat.forms import MessageForm
from luggageshare.errors import ValidationError
from luggageshare.models.conversation import MessageType
from luggageshare.utils.messaging import (
    broadcast_message, conversation_detail, conversation_summary, conversations_query,
    get_conversation_for_user, list_messages, post_message,
)
from luggageshare.utils.pagination import page_args, paginate, pagination_meta


@bp.route('/conversations')
@login_required
def conversations():
    page, limit = page_args('CONVERSATIONS_PER_PAGE')
    results = paginate(conversations_query(current_user), page, limit)
    return jsonify({
        'conversations': [conversation_summary(c, current_user) for c in results.items],
        'pagination': pagination_meta(results),
    })


@bp.route('/conversations/<int:conversation_id>')
@login_required
def conversation(conversation_id):
    conv = get_conversation_for_user(conversation_id, current_user)
    return jsonify({'conversation': conversation_detail(conv, current_user)})


@bp.route('/messages', methods=['POST'])
@login_required
def send_message():
    form = MessageForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    message = post_message(
        form.conversation_id.data,
        current_user,
        form.content.data,
        MessageType(form.message_type.data),
    )
    broadcast_message(message)

    return jsonify({
        'message': 'Message sent successfully!',
        'data': message.to_dict(),
    }), 201


@bp.route('/messages', methods=['GET'])
@login_required
def get_messages():
    conversation_id = request.args.get('conversation_id', type=int)
    if not conversation_id:
        raise ValidationError('Conversation ID is required')

    page, limit = page_args('MESSAGES_PER_PAGE')
    results = list_messages(conversation_id, current_user, page, limit)
    return jsonify({
        'messages': [m.to_dict() for m in results.items],
        'pagination': pagination_meta(results),
    })
