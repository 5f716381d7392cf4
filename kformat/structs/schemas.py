"""
Resource-type metadata, as needed for formatting.

The schemas are stored and maintained elsewhere; here, they are only looked up
by their ids (or names), and read. No validation of the schemas is done.
"""
import dataclasses
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional

from kformat import errors
from kformat.structs import references


@dataclasses.dataclass(frozen=True)
class SchemaDescriptor:
    """
    A resource type as described by the API schemas.

    Any of the group/version/resource can be absent (``None``): e.g. for
    schemas of virtual types or of types that are not backed by the API.
    Schemas without a version or a resource cannot be linked directly.
    An absent group means the core group, unless filled from a parent type.
    """
    id: str
    group: Optional[str] = None
    version: Optional[str] = None
    resource: Optional[str] = None
    disallowed_methods: FrozenSet[str] = frozenset()

    def is_disallowed(self, method: str) -> bool:
        return method.upper() in {m.upper() for m in self.disallowed_methods}

    @property
    def gvr(self) -> references.GVR:
        """
        The resource type of the schema, if it is fully defined.

        An absent group is the core group (an empty string).
        """
        if not self.version or not self.resource:
            raise errors.MissingAttributeError(
                f"Schema {self.id!r} has no version/resource attributes.")
        return references.GVR(group=self.group or '', version=self.version, resource=self.resource)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchemaDescriptor":
        """
        Parse a schema from a dict, e.g. as loaded from a YAML/JSON file.

        The attributes are taken either from the top level of the dict,
        or from its ``attributes`` sub-dict, as the API schemas keep them.
        The disallowed methods are either a list, or a mapping of methods
        to booleans (only the truthy ones are taken).
        """
        attrs: Mapping[str, Any] = data.get('attributes', data)
        disallowed = attrs.get('disallowMethods', attrs.get('disallowed_methods', []))
        if isinstance(disallowed, Mapping):
            disallowed = [method for method, flag in disallowed.items() if flag]
        return cls(
            id=str(data['id']),
            group=attrs.get('group'),
            version=attrs.get('version'),
            resource=attrs.get('resource'),
            disallowed_methods=frozenset(str(method).upper() for method in disallowed),
        )


class SchemaCollection(Mapping[str, SchemaDescriptor]):
    """
    A read-only registry of schemas by their ids.

    The registry is filled before serving the requests, and is only read
    afterwards, so it is safe for concurrent reads without locking.
    """

    def __init__(self, schemas: Iterable[SchemaDescriptor] = ()) -> None:
        super().__init__()
        self._schemas: Dict[str, SchemaDescriptor] = {}
        for schema in schemas:
            self.add(schema)

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __getitem__(self, item: str) -> SchemaDescriptor:
        return self._schemas[item.lower()]

    def add(self, schema: SchemaDescriptor) -> None:
        key = schema.id.lower()
        if key in self._schemas:
            raise errors.DuplicateSchemaError(f"Schema {schema.id!r} is already registered.")
        self._schemas[key] = schema

    def lookup(self, name: str) -> Optional[SchemaDescriptor]:
        """ Find a schema by its id case-insensitively, as the API does. """
        return self._schemas.get(name.lower())
