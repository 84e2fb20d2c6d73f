from luggageshare import db
from luggageshare.models.conversation import Conversation, Message, MessageType
from luggageshare.models.post import PostStatus
from luggageshare.models.request import Request


def patch(client, request_id, **body):
    return client.patch(f'/requests/{request_id}', json=body)


def system_messages(app, conversation_id):
    with app.app_context():
        return [m.content for m in Message.query.filter_by(
            conversation_id=conversation_id, message_type=MessageType.SYSTEM).order_by(Message.id)]


def test_sender_opens_request_with_conversation(app, open_request):
    m = open_request
    with app.app_context():
        request_obj = db.session.get(Request, m.request_id)
        assert request_obj.status.value == 'PENDING'
        assert (request_obj.sender_id, request_obj.receiver_id) == (m.sender_id, m.traveller_id)
        assert request_obj.proposed_price == 35
        conversation = Conversation.query.filter_by(request_id=m.request_id).one()
        assert conversation.id == m.conversation_id
        assert sorted(p.user_id for p in conversation.participants) == sorted([m.sender_id, m.traveller_id])


def test_traveller_can_offer_to_carry(app, market):
    response = market.traveller.post('/requests', json={
        'sender_post_id': market.sender_post_id,
        'traveller_post_id': market.traveller_post_id,
    })

    assert response.status_code == 201
    body = response.get_json()['request']
    # whoever opens the request is its sender, the other owner decides
    assert body['sender_id'] == market.traveller_id
    assert body['receiver_id'] == market.sender_id


def test_duplicate_request_conflicts(app, open_request):
    m = open_request
    response = m.sender.post('/requests', json={
        'sender_post_id': m.sender_post_id,
        'traveller_post_id': m.traveller_post_id,
    })
    assert response.status_code == 409
    with app.app_context():
        assert Request.query.count() == 1
        assert Conversation.query.count() == 1


def test_request_on_inactive_post_is_not_found(app, market, make_traveller_post):
    closed_trip = make_traveller_post(market.traveller_id, status=PostStatus.COMPLETED)

    response = market.sender.post('/requests', json={
        'sender_post_id': market.sender_post_id,
        'traveller_post_id': closed_trip,
    })

    assert response.status_code == 404
    with app.app_context():
        assert Request.query.count() == 0
        assert Conversation.query.count() == 0


def test_request_on_missing_post_is_not_found(market):
    response = market.sender.post('/requests', json={
        'sender_post_id': market.sender_post_id,
        'traveller_post_id': 4242,
    })
    assert response.status_code == 404


def test_request_by_non_owner_is_forbidden(app, market):
    response = market.outsider.post('/requests', json={
        'sender_post_id': market.sender_post_id,
        'traveller_post_id': market.traveller_post_id,
    })
    assert response.status_code == 403
    with app.app_context():
        assert Request.query.count() == 0


def test_request_between_own_posts_is_forbidden(market, make_traveller_post):
    own_trip = make_traveller_post(market.sender_id)
    response = market.sender.post('/requests', json={
        'sender_post_id': market.sender_post_id,
        'traveller_post_id': own_trip,
    })
    assert response.status_code == 403


def test_create_request_validation(market, client):
    assert client.post('/requests', json={}).status_code == 401

    response = market.sender.post('/requests', json={'traveller_post_id': market.traveller_post_id,
                                                      'sender_post_id': market.sender_post_id,
                                                      'proposed_price': -5})
    assert response.status_code == 400
    assert 'proposed_price' in response.get_json()['errors']

    response = market.sender.post('/requests', json={})
    assert response.status_code == 400
    assert set(response.get_json()['errors']) == {'sender_post_id', 'traveller_post_id'}


def test_accept_then_sender_cancels(app, open_request):
    m = open_request

    response = patch(m.traveller, m.request_id, status='ACCEPTED', agreed_price=40)
    assert response.status_code == 200
    body = response.get_json()['request']
    assert body['status'] == 'ACCEPTED'
    assert body['agreed_price'] == 40
    assert system_messages(app, m.conversation_id) == ['Request has been accepted for $40']

    response = patch(m.sender, m.request_id, status='CANCELLED')
    assert response.status_code == 200
    assert response.get_json()['request']['status'] == 'CANCELLED'
    assert system_messages(app, m.conversation_id) == [
        'Request has been accepted for $40',
        'Request has been cancelled',
    ]


def test_accept_without_price(app, open_request):
    m = open_request
    assert patch(m.traveller, m.request_id, status='ACCEPTED').status_code == 200
    assert system_messages(app, m.conversation_id) == ['Request has been accepted']


def test_accept_then_complete(app, open_request):
    m = open_request
    patch(m.traveller, m.request_id, status='ACCEPTED', agreed_price=42.5)

    response = patch(m.sender, m.request_id, status='COMPLETED')

    assert response.status_code == 200
    assert response.get_json()['request']['status'] == 'COMPLETED'
    assert system_messages(app, m.conversation_id)[-1] == 'Request has been completed'


def test_receiver_rejects(app, open_request):
    m = open_request
    response = patch(m.traveller, m.request_id, status='REJECTED')
    assert response.status_code == 200
    assert system_messages(app, m.conversation_id) == ['Request has been rejected']

    # terminal
    assert patch(m.traveller, m.request_id, status='ACCEPTED').status_code == 400
    assert patch(m.sender, m.request_id, status='CANCELLED').status_code == 400


def test_sender_cannot_accept_own_request(app, open_request):
    m = open_request
    response = patch(m.sender, m.request_id, status='ACCEPTED')
    assert response.status_code == 403
    assert response.get_json()['message'] == 'Only the request receiver can accept or reject'
    assert patch(m.sender, m.request_id, status='REJECTED').status_code == 403
    assert system_messages(app, m.conversation_id) == []


def test_receiver_cannot_cancel(open_request):
    m = open_request
    response = patch(m.traveller, m.request_id, status='CANCELLED')
    assert response.status_code == 403
    assert response.get_json()['message'] == 'Only the request sender can cancel'


def test_pending_request_cannot_be_completed(app, open_request):
    m = open_request
    response = patch(m.traveller, m.request_id, status='COMPLETED')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Only accepted requests can be completed'
    with app.app_context():
        assert db.session.get(Request, m.request_id).status.value == 'PENDING'


def test_accept_twice_is_rejected(app, open_request):
    m = open_request
    assert patch(m.traveller, m.request_id, status='ACCEPTED').status_code == 200
    response = patch(m.traveller, m.request_id, status='ACCEPTED')
    assert response.status_code == 400
    assert len(system_messages(app, m.conversation_id)) == 1


def test_cancelled_request_stays_cancelled(open_request):
    m = open_request
    assert patch(m.sender, m.request_id, status='CANCELLED').status_code == 200
    assert patch(m.traveller, m.request_id, status='ACCEPTED').status_code == 400
    assert patch(m.sender, m.request_id, status='COMPLETED').status_code == 400


def test_patch_rejects_unknown_status(open_request):
    m = open_request
    response = patch(m.traveller, m.request_id, status='PENDING')
    assert response.status_code == 400
    assert 'status' in response.get_json()['errors']
    assert patch(m.traveller, m.request_id, status='ACCEPTED', agreed_price=0).status_code == 400


def test_outsider_cannot_see_or_touch_request(open_request):
    m = open_request
    assert m.outsider.get(f'/requests/{m.request_id}').status_code == 404
    response = patch(m.outsider, m.request_id, status='ACCEPTED')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Request not found or access denied'


def test_request_detail_for_parties(open_request):
    m = open_request
    body = m.traveller.get(f'/requests/{m.request_id}').get_json()['request']
    assert body['conversation']['id'] == m.conversation_id
    assert body['sender']['id'] == m.sender_id
    assert body['sender_post']['id'] == m.sender_post_id
    assert body['traveller_post']['request_count'] == 1


def test_list_requests_by_direction_and_status(open_request, make_sender_post):
    m = open_request
    other_item = make_sender_post(m.sender_id)
    m.traveller.post('/requests', json={
        'sender_post_id': other_item,
        'traveller_post_id': m.traveller_post_id,
    })

    sent = m.sender.get('/requests?type=sent').get_json()
    assert [r['id'] for r in sent['requests']] == [m.request_id]

    received = m.sender.get('/requests?type=received').get_json()
    assert len(received['requests']) == 1
    assert received['requests'][0]['sender_id'] == m.traveller_id

    everything = m.sender.get('/requests').get_json()
    assert everything['pagination']['total_count'] == 2
    # newest first
    assert everything['requests'][1]['id'] == m.request_id

    patch(m.traveller, m.request_id, status='ACCEPTED')
    accepted = m.sender.get('/requests?status=accepted').get_json()
    assert [r['id'] for r in accepted['requests']] == [m.request_id]

    assert m.sender.get('/requests?status=bogus').status_code == 400
    assert m.outsider.get('/requests').get_json()['requests'] == []


def test_non_finite_prices_are_rejected(app, market):
    response = market.sender.post('/requests', json={
        'sender_post_id': market.sender_post_id,
        'traveller_post_id': market.traveller_post_id,
        'proposed_price': 'inf',
    })
    assert response.status_code == 400
    assert 'proposed_price' in response.get_json()['errors']
    with app.app_context():
        assert Request.query.count() == 0


def test_accept_with_non_finite_price_changes_nothing(app, open_request):
    m = open_request
    for price in ('nan', 'inf', 'lots'):
        response = patch(m.traveller, m.request_id, status='ACCEPTED', agreed_price=price)
        assert response.status_code == 400
        assert 'agreed_price' in response.get_json()['errors']

    with app.app_context():
        request_obj = db.session.get(Request, m.request_id)
        assert request_obj.status.value == 'PENDING'
        assert request_obj.agreed_price is None
    assert system_messages(app, m.conversation_id) == []


def test_tiny_agreed_price_is_written_out(app, open_request):
    m = open_request
    assert patch(m.traveller, m.request_id, status='ACCEPTED', agreed_price=0.0000001).status_code == 200
    assert system_messages(app, m.conversation_id) == ['Request has been accepted for $0.0000001']
