from datetime import datetime, timedelta
import click
from luggageshare import db
from luggageshare.models.post import PostStatus, SenderPost, TravellerPost
from luggageshare.models.user import User

DEMO_PASSWORD = 'password123'

DEMO_USERS = [
    dict(email='sarah.traveller@demo.com', name='Sarah', last_name='Johnson',
         rating=4.8, total_trips=15, completed_trips=14),
    dict(email='mike.sender@demo.com', name='Mike', last_name='Chen',
         rating=4.6, total_trips=8, completed_trips=7),
    dict(email='anna.globe@demo.com', name='Anna', last_name='Rodriguez',
         rating=4.9, total_trips=23, completed_trips=22),
]


def _upsert_user(fields):
    user = User.query.filter_by(email=fields['email']).first()
    if user is None:
        user = User(email_verified_at=datetime.utcnow(), **fields)
        user.set_password(DEMO_PASSWORD)
        db.session.add(user)
    return user


def seed_demo_data(now=None):
    """Create demo users and posts. Posts are only added for users that have none."""
    now = now or datetime.utcnow()
    sarah, mike, anna = [_upsert_user(fields) for fields in DEMO_USERS]
    db.session.flush()

    created = {'traveller_posts': 0, 'sender_posts': 0}

    if sarah.traveller_posts.count() == 0:
        db.session.add(TravellerPost(
            user_id=sarah.id, departure_country='Canada', departure_city='Toronto',
            departure_airport='YYZ', departure_date=now + timedelta(days=14),
            arrival_country='Iran', arrival_city='Tehran', arrival_airport='IKA',
            arrival_date=now + timedelta(days=15), available_weight=15.5, price_per_kg=8.5,
            special_notes='Happy to help with documents and small gifts. No electronics or fragile items please.',
            pickup_location='Downtown Toronto', delivery_location='Tehran Airport or city center',
            status=PostStatus.ACTIVE,
        ))
        created['traveller_posts'] += 1

    if anna.traveller_posts.count() == 0:
        db.session.add(TravellerPost(
            user_id=anna.id, departure_country='United States', departure_city='New York',
            departure_airport='JFK', departure_date=now + timedelta(days=21),
            arrival_country='France', arrival_city='Paris', arrival_airport='CDG',
            arrival_date=now + timedelta(days=22), available_weight=20.0, price_per_kg=12.0,
            special_notes='Business traveler with extra luggage space. Can handle clothing, books, and small electronics.',
            pickup_location='Manhattan area', delivery_location='Paris city center',
            status=PostStatus.ACTIVE,
        ))
        created['traveller_posts'] += 1

    if mike.sender_posts.count() == 0:
        db.session.add(SenderPost(
            user_id=mike.id, origin_country='Canada', origin_city='Vancouver',
            origin_address='Downtown Vancouver, BC', destination_country='Iran',
            destination_city='Isfahan', destination_address='City center area',
            item_category='Documents', item_description='Important legal documents and family photos',
            weight=2.5, max_price=50.0,
            special_notes='Time-sensitive documents that need to reach my family.',
            pickup_notes='Can meet anywhere in Vancouver downtown',
            delivery_notes='Recipient will pick up from traveler',
            status=PostStatus.ACTIVE,
        ))
        created['sender_posts'] += 1

    if anna.sender_posts.count() == 0:
        db.session.add(SenderPost(
            user_id=anna.id, origin_country='United States', origin_city='Los Angeles',
            origin_address='Beverly Hills area', destination_country='France',
            destination_city='Lyon', destination_address='City center',
            item_category='Electronics', item_description='New phone, sealed, as a gift for my daughter',
            weight=0.8, max_price=80.0,
            pickup_notes='Can meet at LAX or Beverly Hills',
            delivery_notes='Daughter can pick up from traveler in Lyon',
            status=PostStatus.ACTIVE,
        ))
        created['sender_posts'] += 1

    db.session.commit()
    return created


def register_commands(app):
    @app.cli.command('init-db')
    def init_db():
        """Create all database tables."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('seed-demo')
    def seed_demo():
        """Load demo users, trips and shipments."""
        created = seed_demo_data()
        click.echo(f"Demo data ready: {len(DEMO_USERS)} users, "
                   f"{created['traveller_posts']} traveller posts, "
                   f"{created['sender_posts']} sender posts created.")
