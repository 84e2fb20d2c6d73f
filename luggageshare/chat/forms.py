from wtforms import IntegerField, SelectField, TextAreaField
from wtforms.validators import DataRequired, Length
from luggageshare.forms import ApiForm
from luggageshare.models.conversation import MessageType


class MessageForm(ApiForm):
    conversation_id = IntegerField('Conversation', validators=[DataRequired(message='Conversation ID is required')])
    content = TextAreaField('Message', validators=[
        DataRequired(message='Message content is required'), Length(max=5000)])
    message_type = SelectField('Type', choices=[(t.value, t.value) for t in MessageType],
                               default=MessageType.TEXT.value)
