from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class AdminOrderPagination(PageNumberPagination):
    """Page numbers with the ``{orders, page, pages, total}`` envelope the back office reads."""

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response(
            {
                "orders": data,
                "page": self.page.number,
                "pages": self.page.paginator.num_pages,
                "total": self.page.paginator.count,
            }
        )
