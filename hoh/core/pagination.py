from django.core.paginator import Paginator
from rest_framework.response import Response

MAX_PAGE_SIZE = 100


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def paginate(request, queryset, serializer_class, default_limit=10, context=None, extra=None):
    """
    Paginate a queryset using ``page`` and ``limit`` query parameters.

    Returns a Response shaped as::

        {'results', 'count', 'next', 'previous', 'page', 'page_size', 'total_pages'}
    """
    page = _positive_int(request.query_params.get('page'), 1)
    limit = min(_positive_int(request.query_params.get('limit'), default_limit), MAX_PAGE_SIZE)

    paginator = Paginator(queryset, limit)
    page_obj = paginator.get_page(page)

    serializer = serializer_class(page_obj, many=True, context=context or {'request': request})
    data = {
        'results': serializer.data,
        'count': paginator.count,
        'next': page_obj.next_page_number() if page_obj.has_next() else None,
        'previous': page_obj.previous_page_number() if page_obj.has_previous() else None,
        'page': page_obj.number,
        'page_size': limit,
        'total_pages': paginator.num_pages,
    }
    if extra:
        data.update(extra)
    return Response(data)
