"""
The incoming requests, as far as the formatting is concerned.

Only the caller and the query directives are of interest here: the routing,
the content negotiation, and everything else is done by the enclosing server.
"""
import dataclasses
import urllib.parse
from typing import List, Mapping, Optional, Sequence

from kformat.structs import access, configuration

Query = Mapping[str, Sequence[str]]


@dataclasses.dataclass(frozen=True)
class Directives:
    """
    The formatting directives of a request, parsed from its query.
    """
    include: Sequence[str] = ()
    exclude: Sequence[str] = ()
    exclude_values: Sequence[str] = ()
    check_permissions: Sequence[str] = ()

    @property
    def projects(self) -> bool:
        return bool(self.include or self.exclude or self.exclude_values)

    @classmethod
    def from_query(
            cls,
            query: Query,
            settings: Optional[configuration.ProjectionSettings] = None,
    ) -> "Directives":
        settings = settings if settings is not None else configuration.ProjectionSettings()
        return cls(
            include=tuple(_values(query, settings.include_param)),
            exclude=tuple(_values(query, settings.exclude_param)),
            exclude_values=tuple(_values(query, settings.exclude_values_param)),
            check_permissions=tuple(_split(_first(query, settings.permissions_param))),
        )


@dataclasses.dataclass(frozen=True)
class APIRequest:
    """
    A request for which the objects are being formatted.

    The user is `None` if the request is not authenticated (or if the server
    does not provide the caller's information): then, no access checks
    are performed, and no links or permissions are added.
    """
    query: Query = dataclasses.field(default_factory=dict)
    user: Optional[access.UserInfo] = None

    def directives(
            self,
            settings: Optional[configuration.ProjectionSettings] = None,
    ) -> Directives:
        return Directives.from_query(self.query, settings)

    @classmethod
    def from_query_string(
            cls,
            query_string: str,
            *,
            user: Optional[access.UserInfo] = None,
    ) -> "APIRequest":
        query = urllib.parse.parse_qs(query_string.lstrip('?'), encoding='utf-8')
        return cls(query=query, user=user)


def _values(query: Query, key: str) -> List[str]:
    values = query.get(key, [])
    values = [values] if isinstance(values, str) else values
    return [value for value in values if value]


def _first(query: Query, key: str) -> str:
    values = _values(query, key)
    return values[0] if values else ''


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]
