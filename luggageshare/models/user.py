from datetime import datetime
from luggageshare import db, login_manager, bcrypt
from flask_login import UserMixin


@login_manager.user_loader
def load_user(id):
    return db.session.get(User, int(id))


class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    last_name = db.Column(db.String(64))
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(128))
    image = db.Column(db.String(255))
    rating = db.Column(db.Float, default=0.0)
    total_trips = db.Column(db.Integer, default=0)
    completed_trips = db.Column(db.Integer, default=0)
    email_verified_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    traveller_posts = db.relationship('TravellerPost', backref='user', lazy='dynamic')
    sender_posts = db.relationship('SenderPost', backref='user', lazy='dynamic')

    @property
    def is_verified(self):
        return self.email_verified_at is not None

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        if not self.password_hash:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_public_dict(self):
        """Profile fields safe to show to other users."""
        return {
            'id': self.id,
            'name': self.name,
            'last_name': self.last_name,
            'image': self.image,
            'rating': self.rating,
            'total_trips': self.total_trips,
        }

    def to_dict(self):
        data = self.to_public_dict()
        data.update({
            'email': self.email,
            'completed_trips': self.completed_trips,
            'email_verified': self.is_verified,
            'created_at': self.created_at.isoformat(),
        })
        return data

    def __repr__(self):
        return f'<User {self.email}>'


class VerificationToken(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    identifier = db.Column(db.String(120), nullable=False, index=True)
    token = db.Column(db.String(6), nullable=False)
    expires = db.Column(db.DateTime, nullable=False)

    def is_expired(self, now=None):
        return (now or datetime.utcnow()) > self.expires

    def __repr__(self):
        return f'<VerificationToken {self.identifier}>'
