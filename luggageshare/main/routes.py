from datetime import datetime
from flask import jsonify
from luggageshare.main import bp
from luggageshare.models.post import PostStatus, SenderPost, TravellerPost
from luggageshare.models.request import Request, RequestStatus
from luggageshare.models.user import User


@bp.route('/')
def index():
    # Landing page statistics
    current_time = datetime.utcnow()
    return jsonify({
        'name': 'LuggageShare',
        'total_users': User.query.count(),
        'active_trips': TravellerPost.query.filter(
            TravellerPost.status == PostStatus.ACTIVE,
            TravellerPost.departure_date > current_time,
        ).count(),
        'active_shipments': SenderPost.query.filter_by(status=PostStatus.ACTIVE).count(),
        'completed_deliveries': Request.query.filter_by(status=RequestStatus.COMPLETED).count(),
    })


@bp.route('/health')
def health():
    return jsonify({'status': 'ok'})
