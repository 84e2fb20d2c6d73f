import enum
from datetime import datetime
from luggageshare import db


class RequestStatus(enum.Enum):
    PENDING = 'PENDING'
    ACCEPTED = 'ACCEPTED'
    REJECTED = 'REJECTED'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'


# Allowed edges of the request lifecycle; statuses missing as keys are terminal
TRANSITIONS = {
    RequestStatus.PENDING: frozenset({
        RequestStatus.ACCEPTED, RequestStatus.REJECTED, RequestStatus.CANCELLED,
    }),
    RequestStatus.ACCEPTED: frozenset({
        RequestStatus.COMPLETED, RequestStatus.CANCELLED,
    }),
}


class Request(db.Model):
    """Negotiation between the owners of one sender post and one traveller post.

    ``sender`` is the user who opened the request, ``receiver`` the owner of
    the other post, who is asked to accept or reject it.
    """

    __table_args__ = (
        db.UniqueConstraint('sender_post_id', 'traveller_post_id', 'sender_id', 'receiver_id',
                            name='uq_request_posts_parties'),
    )

    id = db.Column(db.Integer, primary_key=True)
    sender_post_id = db.Column(db.Integer, db.ForeignKey('sender_post.id'), nullable=False)
    traveller_post_id = db.Column(db.Integer, db.ForeignKey('traveller_post.id'), nullable=False)
    sender_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    receiver_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    status = db.Column(db.Enum(RequestStatus), default=RequestStatus.PENDING, nullable=False)
    message = db.Column(db.Text)
    proposed_price = db.Column(db.Float)
    agreed_price = db.Column(db.Float)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    sender = db.relationship('User', foreign_keys=[sender_id], backref='sent_requests')
    receiver = db.relationship('User', foreign_keys=[receiver_id], backref='received_requests')

    def can_transition_to(self, status):
        return status in TRANSITIONS.get(self.status, frozenset())

    def to_dict(self):
        conversation = self.conversation
        return {
            'id': self.id,
            'sender_post_id': self.sender_post_id,
            'traveller_post_id': self.traveller_post_id,
            'sender_post': self.sender_post.to_dict(),
            'traveller_post': self.traveller_post.to_dict(),
            'sender_id': self.sender_id,
            'receiver_id': self.receiver_id,
            'sender': self.sender.to_public_dict(),
            'receiver': self.receiver.to_public_dict(),
            'status': self.status.value,
            'message': self.message,
            'proposed_price': self.proposed_price,
            'agreed_price': self.agreed_price,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'conversation': {
                'id': conversation.id,
                'updated_at': conversation.updated_at.isoformat(),
            } if conversation else None,
        }

    def __repr__(self):
        return f'<Request {self.id} {self.status.value}>'
