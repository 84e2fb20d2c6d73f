from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from luggageshare import create_app, db
from luggageshare.config import TestConfig
from luggageshare.models.post import PostStatus, SenderPost, TravellerPost
from luggageshare.models.user import User

PASSWORD = 'password123'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email, name='Test', verified=True):
        with app.app_context():
            user = User(name=name, email=email,
                        email_verified_at=datetime.utcnow() if verified else None)
            user.set_password(PASSWORD)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture
def login_as(app):
    """Return a fresh test client logged in as ``email``."""
    def _login(email):
        client = app.test_client()
        response = client.post('/auth/login', json={'email': email, 'password': PASSWORD})
        assert response.status_code == 200, response.get_json()
        return client
    return _login


@pytest.fixture
def make_traveller_post(app):
    def _make(user_id, status=PostStatus.ACTIVE, days_ahead=7, **fields):
        departure = datetime.utcnow() + timedelta(days=days_ahead)
        values = dict(
            departure_country='Canada', departure_city='Toronto',
            departure_date=departure, arrival_country='France', arrival_city='Paris',
            arrival_date=departure + timedelta(hours=9), available_weight=10.0,
            price_per_kg=5.0,
        )
        values.update(fields)
        with app.app_context():
            post = TravellerPost(user_id=user_id, status=status, **values)
            db.session.add(post)
            db.session.commit()
            return post.id
    return _make


@pytest.fixture
def make_sender_post(app):
    def _make(user_id, status=PostStatus.ACTIVE, **fields):
        values = dict(
            origin_country='Canada', origin_city='Toronto', destination_country='France',
            destination_city='Paris', item_category='Documents',
            item_description='Signed contract', weight=1.5, max_price=60.0,
        )
        values.update(fields)
        with app.app_context():
            post = SenderPost(user_id=user_id, status=status, **values)
            db.session.add(post)
            db.session.commit()
            return post.id
    return _make


@pytest.fixture
def market(make_user, login_as, make_sender_post, make_traveller_post):
    """A sender with an item, a traveller with a trip and a bystander, all logged in."""
    sender_id = make_user('mike@example.com', name='Mike')
    traveller_id = make_user('sarah@example.com', name='Sarah')
    outsider_id = make_user('olga@example.com', name='Olga')
    return SimpleNamespace(
        sender_id=sender_id,
        traveller_id=traveller_id,
        outsider_id=outsider_id,
        sender_post_id=make_sender_post(sender_id),
        traveller_post_id=make_traveller_post(traveller_id),
        sender=login_as('mike@example.com'),
        traveller=login_as('sarah@example.com'),
        outsider=login_as('olga@example.com'),
    )


@pytest.fixture
def open_request(market):
    """A PENDING request opened by the sender on the traveller's trip."""
    response = market.sender.post('/requests', json={
        'sender_post_id': market.sender_post_id,
        'traveller_post_id': market.traveller_post_id,
        'message': 'Could you take my documents?',
        'proposed_price': 35,
    })
    assert response.status_code == 201, response.get_json()
    body = response.get_json()
    market.request_id = body['request']['id']
    market.conversation_id = body['conversation_id']
    return market
