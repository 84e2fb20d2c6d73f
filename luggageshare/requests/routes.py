from flask import jsonify, request
from flask_login import current_user, login_required
from luggageshare.errors import ValidationError
from luggageshare.models.request import RequestStatus
from luggageshare.requests import bp
from luggageshare.requests.forms import CreateRequestForm, UpdateRequestForm
from luggageshare.utils.lifecycle import (
    create_request, get_request_for_user, requests_for_user_query, transition_request,
)
from luggageshare.utils.messaging import broadcast_message
from luggageshare.utils.pagination import page_args, paginate, pagination_meta


@bp.route('', methods=['POST'])
@login_required
def create():
    form = CreateRequestForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    request_obj = create_request(
        current_user,
        sender_post_id=form.sender_post_id.data,
        traveller_post_id=form.traveller_post_id.data,
        message=form.message.data or None,
        proposed_price=form.proposed_price.data,
    )
    return jsonify({
        'message': 'Request created successfully!',
        'request': request_obj.to_dict(),
        'conversation_id': request_obj.conversation.id,
    }), 201


@bp.route('', methods=['GET'])
@login_required
def list_requests():
    kind = request.args.get('type')
    status = request.args.get('status')
    if status:
        try:
            status = RequestStatus(status.upper())
        except ValueError:
            raise ValidationError(errors={'status': ['Unknown status']})

    page, limit = page_args('REQUESTS_PER_PAGE')
    results = paginate(requests_for_user_query(current_user, kind, status or None), page, limit)
    return jsonify({
        'requests': [r.to_dict() for r in results.items],
        'pagination': pagination_meta(results),
    })


@bp.route('/<int:request_id>', methods=['GET'])
@login_required
def detail(request_id):
    request_obj = get_request_for_user(request_id, current_user)
    return jsonify({'request': request_obj.to_dict()})


@bp.route('/<int:request_id>', methods=['PATCH'])
@login_required
def update(request_id):
    form = UpdateRequestForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    request_obj, system_message = transition_request(
        request_id,
        current_user,
        RequestStatus(form.status.data),
        agreed_price=form.agreed_price.data,
    )
    broadcast_message(system_message)

    return jsonify({
        'message': 'Request updated successfully!',
        'request': request_obj.to_dict(),
    })
