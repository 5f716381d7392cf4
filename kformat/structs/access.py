"""
The callers and their resolved access grants.

Resolving the grants from the actual RBAC rules is out of scope here:
it is done by an external `AccessSetLookup`. Only a simple in-memory
lookup is provided for tests and for the command-line tool.
"""
import collections
import dataclasses
from typing import Any, DefaultDict, FrozenSet, Iterable, Mapping, Optional, Set, Tuple

from typing_extensions import Protocol

from kformat.structs import references

ALL = '*'
""" A wildcard for namespaces, names, groups, and resources in the grants. """


@dataclasses.dataclass(frozen=True)
class UserInfo:
    """ An authenticated caller, as established by the enclosing server. """
    name: str
    groups: FrozenSet[str] = frozenset()


@dataclasses.dataclass(frozen=True)
class Access:
    """
    A single grant's scope: a namespace and an optional resource name.

    An empty namespace is a cluster-scoped grant. A ``"*"`` in any of them
    grants the access to all namespaces or all names respectively.
    """
    namespace: str = ALL
    name: str = ALL

    def grants(self, namespace: str, name: Optional[str]) -> bool:
        namespace_ok = self.namespace == ALL or self.namespace == (namespace or '')
        name_ok = self.name == ALL or (name is not None and self.name == name)
        return namespace_ok and name_ok


class AccessSet:
    """
    A caller's resolved grants: verbs over group-resources in namespaces.

    The set is filled once (e.g. by the lookup) and is treated as immutable
    while the requests are being served: only reads happen after that.
    """

    def __init__(self) -> None:
        super().__init__()
        self._grants: DefaultDict[Tuple[str, references.GroupResource], Set[Access]]
        self._grants = collections.defaultdict(set)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}: {len(self._grants)} verb-resource pairs>'

    def add(
            self,
            verb: str,
            group_resource: references.GroupResource,
            access: Access,
    ) -> None:
        self._grants[verb, group_resource].add(access)

    def grants(
            self,
            verb: str,
            group_resource: references.GroupResource,
            namespace: str,
            name: Optional[str] = None,
    ) -> bool:
        candidates = [
            (verb, group_resource),
            (verb, references.GroupResource(group_resource.group, ALL)),
            (verb, references.GroupResource(ALL, group_resource.resource)),
            (verb, references.GroupResource(ALL, ALL)),
            (ALL, group_resource),
            (ALL, references.GroupResource(ALL, ALL)),
        ]
        return any(
            access.grants(namespace, name)
            for key in candidates if key in self._grants
            for access in self._grants[key]
        )

    @classmethod
    def from_rules(cls, rules: Iterable[Mapping[str, Any]]) -> "AccessSet":
        """
        Build the access set from simple declarative rules, e.g. from YAML.

        Each rule has ``verbs``, ``resources`` (as ``resource.group`` or just
        ``resource`` for the core group), and optional ``namespaces``
        and ``names``; all of them default to ``"*"``.
        """
        access_set = cls()
        for rule in rules:
            verbs = _strings(rule.get('verbs', [ALL]))
            resources = _strings(rule.get('resources', [ALL]))
            namespaces = _strings(rule.get('namespaces', [ALL]))
            names = _strings(rule.get('names', [ALL]))
            for verb in verbs:
                for resource in resources:
                    plural, _, group = resource.partition('.')
                    if plural == ALL and not group:
                        group = ALL
                    group_resource = references.GroupResource(group=group, resource=plural)
                    for namespace in namespaces:
                        for name in names:
                            access_set.add(verb, group_resource, Access(namespace, name))
        return access_set


class AccessSetLookup(Protocol):
    def access_for(self, user: UserInfo) -> Optional[AccessSet]: ...


class StaticAccessSetLookup:
    """ A lookup over the pre-resolved access sets of the known users. """

    def __init__(self, access_sets: Optional[Mapping[str, AccessSet]] = None) -> None:
        super().__init__()
        self._access_sets = dict(access_sets or {})

    def access_for(self, user: UserInfo) -> Optional[AccessSet]:
        return self._access_sets.get(user.name)


def _strings(value: Any) -> Iterable[str]:
    return [value] if isinstance(value, str) else [str(v) for v in value]
