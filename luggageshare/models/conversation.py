import enum
from datetime import datetime
from luggageshare import db


class MessageType(enum.Enum):
    TEXT = 'TEXT'
    SYSTEM = 'SYSTEM'
    STATUS_UPDATE = 'STATUS_UPDATE'


class Conversation(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    request_id = db.Column(db.Integer, db.ForeignKey('request.id'), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    # Relationships
    request = db.relationship('Request', backref=db.backref('conversation', uselist=False))
    participants = db.relationship('Participant', backref='conversation', lazy='selectin')
    messages = db.relationship('Message', backref='conversation', lazy='dynamic',
                               order_by='Message.created_at')

    @property
    def room(self):
        """Socket.IO room the conversation's messages are pushed to."""
        return f'conversation_{self.id}'

    def has_participant(self, user_id):
        return any(p.user_id == user_id for p in self.participants)

    def other_participant(self, user_id):
        for participant in self.participants:
            if participant.user_id != user_id:
                return participant.user
        return None

    def latest_message(self):
        return self.messages.order_by(None).order_by(
            Message.created_at.desc(), Message.id.desc()).first()

    def unread_count(self, user_id):
        return self.messages.filter(
            Message.is_read.is_(False),
            Message.sender_id != user_id,
        ).count()

    def __repr__(self):
        return f'<Conversation {self.id}>'


class Participant(db.Model):
    __table_args__ = (
        db.UniqueConstraint('conversation_id', 'user_id', name='uq_participant_conversation_user'),
    )

    id = db.Column(db.Integer, primary_key=True)
    conversation_id = db.Column(db.Integer, db.ForeignKey('conversation.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    joined_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship('User', backref='participations')

    def __repr__(self):
        return f'<Participant {self.user_id} in {self.conversation_id}>'


class Message(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    conversation_id = db.Column(db.Integer, db.ForeignKey('conversation.id'), nullable=False, index=True)
    sender_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    message_type = db.Column(db.Enum(MessageType), default=MessageType.TEXT, nullable=False)
    is_read = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    sender = db.relationship('User', foreign_keys=[sender_id], backref='sent_messages')

    def to_dict(self):
        return {
            'id': self.id,
            'conversation_id': self.conversation_id,
            'sender_id': self.sender_id,
            'sender': {
                'id': self.sender.id,
                'name': self.sender.name,
                'last_name': self.sender.last_name,
                'image': self.sender.image,
            },
            'content': self.content,
            'message_type': self.message_type.value,
            'is_read': self.is_read,
            'created_at': self.created_at.isoformat(),
        }

    def __repr__(self):
        return f'<Message {self.id}>'
