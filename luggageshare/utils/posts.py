import logging
from datetime import datetime
from luggageshare import db
from luggageshare.models.post import PostStatus, TravellerPost, SenderPost

logger = logging.getLogger(__name__)


def create_traveller_post(owner, **fields):
    """Persist a new ACTIVE traveller post for ``owner``.

    Field validation (required values, positive numbers, date ordering) is
    done by ``TravellerPostForm`` before this is called.
    """
    post = TravellerPost(user_id=owner.id, status=PostStatus.ACTIVE, **fields)
    db.session.add(post)
    db.session.commit()
    logger.info('Traveller post %s created by user %s', post.id, owner.id)
    return post


def create_sender_post(owner, **fields):
    post = SenderPost(user_id=owner.id, status=PostStatus.ACTIVE, **fields)
    db.session.add(post)
    db.session.commit()
    logger.info('Sender post %s created by user %s', post.id, owner.id)
    return post


def find_active_post(model, post_id):
    return model.query.filter_by(id=post_id, status=PostStatus.ACTIVE).first()


def _contains(column, value):
    return column.ilike(f'%{value}%')


def traveller_posts_query(departure_country=None, arrival_country=None, date_from=None,
                          date_to=None, user_id=None, exclude_user=None, now=None):
    """
    Build the listing query for traveller posts.

    Without ``user_id`` only active trips departing in the future are
    returned. Filtering by owner surfaces all of that owner's posts, so
    people can see their past and closed trips.
    """
    query = TravellerPost.query

    if user_id:
        query = query.filter(TravellerPost.user_id == user_id)
    else:
        query = query.filter(
            TravellerPost.status == PostStatus.ACTIVE,
            TravellerPost.departure_date >= (now or datetime.utcnow()),
        )

    if exclude_user:
        query = query.filter(TravellerPost.user_id != exclude_user)
    if departure_country:
        query = query.filter(_contains(TravellerPost.departure_country, departure_country))
    if arrival_country:
        query = query.filter(_contains(TravellerPost.arrival_country, arrival_country))
    if date_from:
        query = query.filter(TravellerPost.departure_date >= date_from)
    if date_to:
        query = query.filter(TravellerPost.departure_date <= date_to)

    return query.order_by(TravellerPost.created_at.desc(), TravellerPost.id.desc())


def sender_posts_query(origin_country=None, destination_country=None, item_category=None,
                       min_weight=None, max_weight=None, min_price=None, max_price=None,
                       user_id=None):
    query = SenderPost.query

    if user_id:
        query = query.filter(SenderPost.user_id == user_id)
    else:
        query = query.filter(SenderPost.status == PostStatus.ACTIVE)

    if origin_country:
        query = query.filter(_contains(SenderPost.origin_country, origin_country))
    if destination_country:
        query = query.filter(_contains(SenderPost.destination_country, destination_country))
    if item_category:
        query = query.filter(_contains(SenderPost.item_category, item_category))
    if min_weight is not None:
        query = query.filter(SenderPost.weight >= min_weight)
    if max_weight is not None:
        query = query.filter(SenderPost.weight <= max_weight)
    # Price range applies to the sender's budget
    if min_price is not None:
        query = query.filter(SenderPost.max_price >= min_price)
    if max_price is not None:
        query = query.filter(SenderPost.max_price <= max_price)

    return query.order_by(SenderPost.created_at.desc(), SenderPost.id.desc())
