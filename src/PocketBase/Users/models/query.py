# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
List query parameters for user record listings.

Renders pagination, sort and filter options into the query string appended
to the records endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from ..core.errors import ValidationError
from ..core._error_codes import VALIDATION_NEGATIVE_PAGE


@dataclass(frozen=True)
class RecordQuery:
    """
    Pagination, sort and filter options for a list request.

    Only explicitly set options are rendered. ``0`` means "unset" for
    ``page``/``per_page`` and ``None`` means "unset" for ``sort``/``filter``;
    ``skip_total`` is rendered only when true. Values are not URL-encoded:
    callers must pre-encode sort or filter values containing reserved
    characters.

    :param page: 1-based page number, or 0 for the server default.
    :type page: int
    :param per_page: Page size, or 0 for the server default.
    :type per_page: int
    :param sort: Sort expression, e.g. ``"-created,username"``.
    :type sort: str or None
    :param filter: Filter expression, e.g. built with
        :class:`~PocketBase.Users.models.filter_builder.FilterBuilder`.
    :type filter: str or None
    :param skip_total: Ask the server to skip counting; totals come back as ``-1``.
    :type skip_total: bool

    Example::

        query = RecordQuery(page=2, per_page=50, sort="-created")
        query.to_query_string()
        # '?page=2&perPage=50&sort=-created'
    """

    page: int = 0
    per_page: int = 0
    sort: Optional[str] = None
    filter: Optional[str] = None
    skip_total: bool = False

    def __post_init__(self) -> None:
        if self.page < 0 or self.per_page < 0:
            raise ValidationError(
                "page and per_page must be positive (or 0 for the server default)",
                subcode=VALIDATION_NEGATIVE_PAGE,
                details={"page": self.page, "per_page": self.per_page},
            )

    def to_params(self) -> Dict[str, Union[int, str]]:
        """
        Return the explicitly set options keyed by their wire names, in render order.

        :return: Ordered mapping of query parameters.
        :rtype: dict[str, int | str]
        """
        params: Dict[str, Union[int, str]] = {}
        if self.page != 0:
            params["page"] = self.page
        if self.per_page != 0:
            params["perPage"] = self.per_page
        if self.sort is not None:
            params["sort"] = self.sort
        if self.filter is not None:
            params["filter"] = self.filter
        if self.skip_total:
            params["skipTotal"] = "true"
        return params

    def to_query_string(self) -> str:
        """
        Render the query string, including the leading ``?``.

        :return: ``"?page=1&perPage=20..."`` or ``""`` when nothing is set.
        :rtype: str
        """
        params = self.to_params()
        if not params:
            return ""
        return "?" + "&".join(f"{key}={value}" for key, value in params.items())


__all__ = ["RecordQuery"]
