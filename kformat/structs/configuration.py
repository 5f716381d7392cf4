"""
All configuration flags, options, settings to fine-tune the formatting.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

The settings are created once per server (or per CLI invocation) and
are only read while formatting; they are not modified per request.
"""
import dataclasses
from typing import Callable, Optional, Tuple

from kformat.structs import links, references

# A function to derive the scoping namespace for nested permission checks
# from the parent object's API id (e.g. "cluster-id/project-id").
NamespaceDeriver = Callable[[Optional[str]], str]


def join_id_parts(id: Optional[str]) -> str:
    """
    Derive a namespace from a composite id by joining its parts with hyphens.

    The parents of the nested resources are often namespaced singletons, e.g.
    projects in clusters: ``"c-m-123/p-456"``. Their nested resources live
    in a namespace named after both parts: ``"c-m-123-p-456"``.
    For non-composite ids, the id itself is the namespace.
    """
    return '-'.join(part for part in (id or '').split('/') if part)


@dataclasses.dataclass
class LinkingSettings:

    management_group: str = references.MANAGEMENT_GROUP
    """
    The platform's own API group, for which the shorthand links are built:
    ``/v1/{group}.{resource}/{namespace}/{name}`` instead of the regular ones.
    """

    blocked: str = links.BLOCKED
    """
    The marker of the links that are granted but prohibited by the schema.
    """

    managed: Tuple[links.ManagedLink, ...] = links.MANAGED_LINKS
    """
    The links that are guarded by the access checks: each with its API verb
    (for the grants) and its HTTP method (for the schema's prohibitions).
    All other links are left as they are.
    """


@dataclasses.dataclass
class PermissionsSettings:

    field: str = 'resourcePermissions'
    """
    The top-level field of the body to inject the aggregated permissions into.
    """

    verbs: Tuple[str, ...] = ('get', 'list', 'watch')
    """
    The verbs to check for every requested related resource type.
    """

    namespace_deriver: NamespaceDeriver = join_id_parts
    """
    How to derive the namespace of the related resources from the parent's id.
    """


@dataclasses.dataclass
class ProjectionSettings:
    """
    Names of the query parameters with the formatting directives.
    """
    include_param: str = 'include'
    exclude_param: str = 'exclude'
    exclude_values_param: str = 'excludeValues'
    permissions_param: str = 'checkPermissions'


@dataclasses.dataclass
class FormatterSettings:
    linking: LinkingSettings = dataclasses.field(default_factory=LinkingSettings)
    permissions: PermissionsSettings = dataclasses.field(default_factory=PermissionsSettings)
    projection: ProjectionSettings = dataclasses.field(default_factory=ProjectionSettings)
