from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from flask.json.provider import DefaultJSONProvider


class ApiJSONProvider(DefaultJSONProvider):
    """ISO-8601 dates, DECIMAL columns as strings (as the MySQL driver hands them over)."""

    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, datetime):
            return o.isoformat(sep=" ")
        if isinstance(o, date):
            return o.isoformat()
        if isinstance(o, Decimal):
            return str(o)
        if isinstance(o, Enum):
            return o.value
        return DefaultJSONProvider.default(o)
