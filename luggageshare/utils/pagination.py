from flask import current_app, request


def page_args(per_page_key):
    """Read ``page`` and ``limit`` from the query string, clamped to sane bounds."""
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', current_app.config[per_page_key], type=int)
    page = max(page, 1)
    limit = min(max(limit, 1), current_app.config['MAX_PER_PAGE'])
    return page, limit


def paginate(query, page, per_page):
    return query.paginate(page=page, per_page=per_page, error_out=False)


def pagination_meta(pagination):
    return {
        'page': pagination.page,
        'limit': pagination.per_page,
        'total_count': pagination.total,
        'total_pages': pagination.pages,
        'has_next_page': pagination.has_next,
        'has_prev_page': pagination.has_prev,
    }
