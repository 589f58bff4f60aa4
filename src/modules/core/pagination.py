"""Page-number pagination used by every list endpoint."""

from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """Default pagination: ``?page=N&page_size=M`` (max 100 per page).

    The envelope carries ``total_pages`` and ``current_page`` next to the
    DRF defaults so clients can render pagers without extra arithmetic.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100

    def get_paginated_response(self, data) -> Response:
        return Response(
            {
                "count": self.page.paginator.count,
                "total_pages": self.page.paginator.num_pages,
                "current_page": self.page.number,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )

    def get_paginated_response_schema(self, schema):
        response_schema = super().get_paginated_response_schema(schema)
        response_schema["properties"]["total_pages"] = {"type": "integer", "example": 3}
        response_schema["properties"]["current_page"] = {"type": "integer", "example": 1}
        return response_schema


class PublicCarsPagination(StandardResultsSetPagination):
    page_size = 12


class AdminPagination(StandardResultsSetPagination):
    page_size = 10
