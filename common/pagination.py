from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """Default pagination with an adjustable page size via `limit`."""

    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100
