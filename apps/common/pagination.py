from django.conf import settings
from django.core.paginator import Paginator, Page
from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """Page-number pagination shared by all social endpoints."""
    page_size = settings.SOCIAL_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = settings.SOCIAL_MAX_PAGE_SIZE


def paginate(queryset, *, page: int = 1, page_size: int = None) -> Page:
    """
    Slice a queryset into a Django Page.

    Out-of-range page numbers return the last page instead of raising.
    """
    if page_size is None:
        page_size = settings.SOCIAL_PAGE_SIZE
    page_size = max(1, min(page_size, settings.SOCIAL_MAX_PAGE_SIZE))
    return Paginator(queryset, page_size).get_page(page)
