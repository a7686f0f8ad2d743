"""Search and sort parameter helpers for the source image listing."""

import re
from collections.abc import Mapping

from rokka_client.core.models.errors import InvalidArgumentError
from rokka_client.core.utils.constants import (
    FIELD_NAME_MAX_LENGTH,
    FIELD_NAME_PATTERN,
    SORT_DIRECTION_ASC,
    SORT_DIRECTION_DESC,
)

_FIELD_NAME_RE = re.compile(FIELD_NAME_PATTERN)

SortDirection = bool | str


class SearchHelper:
    """Builds and validates the query parameters of the search endpoint.

    Field names are either one of the built-in image fields (``name``,
    ``created``, ...) or user metadata fields, optionally typed:
    ``user:<field>``, ``user:str:<field>``, ``user:date:<field>`` and so on.
    """

    @staticmethod
    def validate_field_name(field_name: str) -> bool:
        """Return True if the field name is usable for searching or sorting."""
        return (
            len(field_name) < FIELD_NAME_MAX_LENGTH
            and _FIELD_NAME_RE.fullmatch(field_name) is not None
        )

    @staticmethod
    def build_search_sort_parameter(sorts: Mapping[str, SortDirection] | None) -> str:
        """
        Build the ``sort`` query parameter.

        The direction is either ``"asc"``, ``"desc"`` or ``True`` (same as
        ``"asc"``). Ascending is the default on the server side, so only the
        descending direction is written out.

        Args:
            sorts: Ordered mapping of ``field -> direction``

        Returns:
            Comma separated sort expression, empty string when nothing to sort

        Raises:
            InvalidArgumentError: If a field name or direction is invalid

        Example:
            {"name": "asc", "created": "desc"} → "name,created desc"
        """
        if not sorts:
            return ""

        sorting: list[str] = []

        for field, direction in sorts.items():
            if not SearchHelper.validate_field_name(field):
                raise InvalidArgumentError(
                    message=f'Invalid field name "{field}" for sorting field',
                    details={"field": field},
                )

            # bool is checked first so that 1 or 1.0 are not accepted as True
            is_true = isinstance(direction, bool) and direction is True
            if not is_true and direction not in (SORT_DIRECTION_ASC, SORT_DIRECTION_DESC):
                raise InvalidArgumentError(
                    message=(
                        f'Wrong sorting direction "{direction}" for field "{field}". '
                        'Use either "desc", "asc"'
                    ),
                    details={"field": field, "direction": str(direction)},
                )

            if direction == SORT_DIRECTION_DESC:
                sorting.append(f"{field} {SORT_DIRECTION_DESC}")
            else:
                sorting.append(field)

        return ",".join(sorting)
