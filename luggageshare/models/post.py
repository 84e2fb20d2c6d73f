import enum
from datetime import datetime
from luggageshare import db


class PostStatus(enum.Enum):
    ACTIVE = 'ACTIVE'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'


class TravellerPost(db.Model):
    """Spare luggage capacity offered on a trip."""

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    departure_country = db.Column(db.String(64), nullable=False)
    departure_city = db.Column(db.String(128))
    departure_airport = db.Column(db.String(128))
    departure_date = db.Column(db.DateTime, nullable=False)
    arrival_country = db.Column(db.String(64), nullable=False)
    arrival_city = db.Column(db.String(128))
    arrival_airport = db.Column(db.String(128))
    arrival_date = db.Column(db.DateTime, nullable=False)
    available_weight = db.Column(db.Float, nullable=False)
    price_per_kg = db.Column(db.Float, nullable=False)
    special_notes = db.Column(db.Text)
    pickup_location = db.Column(db.String(255))
    delivery_location = db.Column(db.String(255))
    status = db.Column(db.Enum(PostStatus), default=PostStatus.ACTIVE, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    requests = db.relationship('Request', backref='traveller_post', lazy='dynamic')

    def to_summary_dict(self):
        return {
            'id': self.id,
            'departure_country': self.departure_country,
            'departure_city': self.departure_city,
            'arrival_country': self.arrival_country,
            'arrival_city': self.arrival_city,
            'departure_date': self.departure_date.isoformat(),
            'available_weight': self.available_weight,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'user': self.user.to_public_dict(),
            'departure_country': self.departure_country,
            'departure_city': self.departure_city,
            'departure_airport': self.departure_airport,
            'departure_date': self.departure_date.isoformat(),
            'arrival_country': self.arrival_country,
            'arrival_city': self.arrival_city,
            'arrival_airport': self.arrival_airport,
            'arrival_date': self.arrival_date.isoformat(),
            'available_weight': self.available_weight,
            'price_per_kg': self.price_per_kg,
            'special_notes': self.special_notes,
            'pickup_location': self.pickup_location,
            'delivery_location': self.delivery_location,
            'status': self.status.value,
            'request_count': self.requests.count(),
            'created_at': self.created_at.isoformat(),
        }

    def __repr__(self):
        return f'<TravellerPost {self.id}>'


class SenderPost(db.Model):
    """An item its owner wants carried to another city."""

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    origin_country = db.Column(db.String(64), nullable=False)
    origin_city = db.Column(db.String(128), nullable=False)
    origin_address = db.Column(db.String(255))
    destination_country = db.Column(db.String(64), nullable=False)
    destination_city = db.Column(db.String(128), nullable=False)
    destination_address = db.Column(db.String(255))
    item_category = db.Column(db.String(64), nullable=False)
    item_description = db.Column(db.Text, nullable=False)
    weight = db.Column(db.Float, nullable=False)
    max_price = db.Column(db.Float)
    special_notes = db.Column(db.Text)
    pickup_notes = db.Column(db.Text)
    delivery_notes = db.Column(db.Text)
    status = db.Column(db.Enum(PostStatus), default=PostStatus.ACTIVE, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    requests = db.relationship('Request', backref='sender_post', lazy='dynamic')

    def to_summary_dict(self):
        return {
            'id': self.id,
            'item_description': self.item_description,
            'origin_country': self.origin_country,
            'origin_city': self.origin_city,
            'destination_country': self.destination_country,
            'destination_city': self.destination_city,
            'weight': self.weight,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'user': self.user.to_public_dict(),
            'origin_country': self.origin_country,
            'origin_city': self.origin_city,
            'origin_address': self.origin_address,
            'destination_country': self.destination_country,
            'destination_city': self.destination_city,
            'destination_address': self.destination_address,
            'item_category': self.item_category,
            'item_description': self.item_description,
            'weight': self.weight,
            'max_price': self.max_price,
            'special_notes': self.special_notes,
            'pickup_notes': self.pickup_notes,
            'delivery_notes': self.delivery_notes,
            'status': self.status.value,
            'request_count': self.requests.count(),
            'created_at': self.created_at.isoformat(),
        }

    def __repr__(self):
        return f'<SenderPost {self.id}>'
