from datetime import datetime
from flask import jsonify, request
from flask_login import current_user, login_required
from luggageshare import db
from luggageshare.errors import NotFoundError, ValidationError
from luggageshare.models.post import SenderPost, TravellerPost
from luggageshare.posts import bp
from luggageshare.posts.forms import SenderPostForm, TravellerPostForm
from luggageshare.utils.pagination import page_args, paginate, pagination_meta
from luggageshare.utils.posts import (
    create_sender_post, create_traveller_post, sender_posts_query, traveller_posts_query,
)


def _date_arg(name):
    value = request.args.get(name)
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(errors={name: ['Not a valid date']})


def _listing(query):
    page, limit = page_args('POSTS_PER_PAGE')
    posts = paginate(query, page, limit)
    return jsonify({
        'posts': [post.to_dict() for post in posts.items],
        'pagination': pagination_meta(posts),
    })


@bp.route('/traveller', methods=['POST'])
@login_required
def create_traveller():
    form = TravellerPostForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    post = create_traveller_post(current_user, **form.post_fields())
    return jsonify({
        'message': 'Traveller post created successfully!',
        'post': post.to_dict(),
    }), 201


@bp.route('/traveller', methods=['GET'])
def list_traveller():
    query = traveller_posts_query(
        departure_country=request.args.get('departure_country'),
        arrival_country=request.args.get('arrival_country'),
        date_from=_date_arg('date_from'),
        date_to=_date_arg('date_to'),
        user_id=request.args.get('user_id', type=int),
        exclude_user=request.args.get('exclude_user', type=int),
    )
    return _listing(query)


@bp.route('/traveller/<int:post_id>')
def get_traveller(post_id):
    post = db.session.get(TravellerPost, post_id)
    if post is None:
        raise NotFoundError('Traveller post not found')
    return jsonify({'post': post.to_dict()})


@bp.route('/sender', methods=['POST'])
@login_required
def create_sender():
    form = SenderPostForm()
    if not form.validate_on_submit():
        raise ValidationError(errors=form.errors)

    post = create_sender_post(current_user, **form.post_fields())
    return jsonify({
        'message': 'Sender post created successfully!',
        'post': post.to_dict(),
    }), 201


@bp.route('/sender', methods=['GET'])
def list_sender():
    query = sender_posts_query(
        origin_country=request.args.get('origin_country'),
        destination_country=request.args.get('destination_country'),
        item_category=request.args.get('item_category'),
        min_weight=request.args.get('min_weight', type=float),
        max_weight=request.args.get('max_weight', type=float),
        min_price=request.args.get('min_price', type=float),
        max_price=request.args.get('max_price', type=float),
        user_id=request.args.get('user_id', type=int),
    )
    return _listing(query)


@bp.route('/sender/<int:post_id>')
def get_sender(post_id):
    post = db.session.get(SenderPost, post_id)
    if post is None:
        raise NotFoundError('Sender post not found')
    return jsonify({'post': post.to_dict()})
