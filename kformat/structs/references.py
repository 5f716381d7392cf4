import dataclasses
from typing import Iterator, List, NewType, Optional

# A specific really existing addressable namespace (at least, the one assumed to be so).
# Made as a NewType for stricter type-checking to avoid collisions with other strings.
NamespaceName = NewType('NamespaceName', str)

# A namespace reference usable in the links. Empty or `None` means a cluster-wide link.
Namespace = Optional[NamespaceName]

# The platform's own management API group; its resources have a shorthand link form.
MANAGEMENT_GROUP = 'management.cattle.io'


@dataclasses.dataclass(frozen=True)
class GroupResource:
    """
    A version-agnostic pair of an API group and a resource's plural name.

    It is what the access checks operate on: the grants are issued
    for all versions of a resource at once.
    """
    group: str
    resource: str

    def __str__(self) -> str:
        return f'{self.resource}.{self.group}' if self.group else self.resource


@dataclasses.dataclass(frozen=True, eq=False, repr=False)
class GVR:
    """
    A reference to a very specific custom or built-in resource type.

    It is used to form the links. Generally, the API only needs
    an API group, an API version, and a plural name of the resource.
    """

    group: str
    """
    The resource's API group; e.g. ``"management.cattle.io"``, ``"apps"``.
    For Core v1 API resources, an empty string: ``""``.
    """

    version: str
    """
    The resource's API version; e.g. ``"v1"``, ``"v1beta1"``, etc.
    """

    resource: str
    """
    The resource's plural name; e.g. ``"pods"``, ``"projects"``.
    It is used as an API endpoint, together with API group & version.
    """

    def __hash__(self) -> int:
        return hash((self.group, self.version, self.resource))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GVR):
            self_tuple = (self.group, self.version, self.resource)
            other_tuple = (other.group, other.version, other.resource)
            return self_tuple == other_tuple
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return f'{self.resource}.{self.version}.{self.group}'.strip('.')

    # Mostly for tests, to be unpacked as `group, version, resource = gvr`.
    def __iter__(self) -> Iterator[str]:
        return iter((self.group, self.version, self.resource))

    @property
    def group_resource(self) -> GroupResource:
        return GroupResource(group=self.group, resource=self.resource)


def self_link(
        gvr: GVR,
        *,
        namespace: Namespace = None,
        name: str,
        management_group: str = MANAGEMENT_GROUP,
) -> str:
    """
    Build the canonical link of a specific resource instance.

    There are three conventions, checked in this order:

    * Core v1 resources (with no group): ``/api/v1/namespaces/ns/pods/name``.
    * Resources of the management group: ``/v1/group.resource/ns/name``,
      always with ``v1`` regardless of the resource's actual version.
    * All other (custom) resources: ``/apis/group/version/namespaces/ns/resource/name``.

    If the namespace is empty, it is omitted together with its prefix.
    """
    parts: List[Optional[str]]
    if not gvr.group:
        parts = [
            '/api',
            gvr.version,
            'namespaces' if namespace else None,
            namespace or None,
            gvr.resource,
            name,
        ]
    elif gvr.group == management_group:
        parts = [
            '/v1',
            f'{gvr.group}.{gvr.resource}',
            namespace or None,
            name,
        ]
    else:
        parts = [
            '/apis',
            gvr.group,
            gvr.version,
            'namespaces' if namespace else None,
            namespace or None,
            gvr.resource,
            name,
        ]
    return '/'.join([part for part in parts if part])


def collection_link(
        gvr: GVR,
        *,
        namespace: Namespace = None,
) -> str:
    """
    Build the link of a resource list, optionally narrowed to a namespace.

    Unlike `self_link`, there are no shorthands for the management group:
    all non-core groups are addressed via the regular ``/apis`` prefix.
    """
    parts: List[Optional[str]] = [
        '/api' if not gvr.group else '/apis',
        gvr.group,
        gvr.version,
        'namespaces' if namespace else None,
        namespace or None,
        gvr.resource,
    ]
    return '/'.join([part for part in parts if part])
