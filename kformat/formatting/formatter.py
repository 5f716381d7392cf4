"""
The formatting of the outgoing objects: the orchestration of all the steps.

For every object, in this order:

1. The caller is identified; with no caller, the access-related steps are skipped.
2. The links are filtered by the caller's access (see `authorization`).
3. The permissions on the related resources are injected if requested
   (see `permissions`), only into the tree-convertible objects.
4. The fields are projected if requested (see `projection`),
   only for the tree-convertible objects.

None of the steps fail the formatting. Any expected failure (a schema without
a resource type, an object without an identity, an unknown resource, an
invalid field path) is logged and degrades to leaving the data as it is,
or to omitting it. The rest of the object and the sibling objects
in the list are formatted as usual.
"""
import dataclasses
import logging
from typing import Any, Iterable, List, Optional

from kformat import errors
from kformat.engines import loggers
from kformat.formatting import authorization, permissions, projection
from kformat.structs import access, bodies, configuration, links, requests, schemas

logger = logging.getLogger(__name__)

LinkSet = links.LinkSet


@dataclasses.dataclass
class RawResource:
    """
    An outgoing object wrapped together with its schema, API id, and links.
    """
    schema: Optional[schemas.SchemaDescriptor]
    object: Any
    id: Optional[str] = None
    links: LinkSet = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class Scope:
    """
    Everything resolved once per request and shared by all its objects.

    It is read-only: the objects of a list can be formatted independently
    (even concurrently) with the same scope.
    """
    user: Optional[access.UserInfo]
    access_set: Optional[access.AccessSet]
    directives: requests.Directives


class Formatter:
    """
    Formats the objects in the context of requests.

    The schema registry and the access lookup are the read-only references
    to the external collaborators; the formatter never modifies them.
    """

    def __init__(
            self,
            *,
            registry: schemas.SchemaCollection,
            lookup: access.AccessSetLookup,
            settings: Optional[configuration.FormatterSettings] = None,
    ) -> None:
        super().__init__()
        self.registry = registry
        self.lookup = lookup
        self.settings = settings if settings is not None else configuration.FormatterSettings()

    def scope(self, request: requests.APIRequest) -> Scope:
        """
        Resolve the caller's grants and the directives once per request.
        """
        user = request.user
        access_set = self.lookup.access_for(user) if user is not None else None
        directives = request.directives(self.settings.projection)
        return Scope(user=user, access_set=access_set, directives=directives)

    def format_resource(
            self,
            request: requests.APIRequest,
            resource: RawResource,
            *,
            scope: Optional[Scope] = None,
    ) -> RawResource:
        scope = scope if scope is not None else self.scope(request)
        adapter = bodies.adapt(resource.object)
        object_logger = loggers.ObjectLogger(adapter=adapter)

        if scope.user is None:
            object_logger.debug("Skipping the access checks: no caller in the request.")
        else:
            self._authorize(scope, resource, adapter, object_logger)
            if scope.directives.check_permissions:
                self._add_permissions(scope, resource, adapter, object_logger)

        if projection.project_object(scope.directives, adapter):
            object_logger.debug("Projected the fields as requested.")
        return resource

    def format_collection(
            self,
            request: requests.APIRequest,
            resources: Iterable[RawResource],
    ) -> List[RawResource]:
        scope = self.scope(request)
        return [self.format_resource(request, resource, scope=scope) for resource in resources]

    def _authorize(
            self,
            scope: Scope,
            resource: RawResource,
            adapter: bodies.ObjectAdapter,
            object_logger: loggers.ObjectLogger,
    ) -> None:
        try:
            if resource.schema is None:
                raise errors.MissingAttributeError("The object has no schema.")
            identity = adapter.identity
            if identity is None:
                raise errors.IdentityError("The object has no namespace/name accessors.")
            authorization.filter_links(
                resource.links,
                schema=resource.schema,
                access_set=scope.access_set,
                identity=identity,
                settings=self.settings.linking,
            )
        except errors.FormattingError as e:
            object_logger.debug(f"Skipping the links' authorization: {e}")

    def _add_permissions(
            self,
            scope: Scope,
            resource: RawResource,
            adapter: bodies.ObjectAdapter,
            object_logger: loggers.ObjectLogger,
    ) -> None:
        tree = adapter.tree
        if tree is None:
            object_logger.debug("Skipping the permissions: the object is not tree-convertible.")
            return
        if scope.access_set is None:
            object_logger.debug("Skipping the permissions: the caller's access is unknown.")
            return
        try:
            if resource.schema is None:
                raise errors.MissingAttributeError("The object has no schema.")
            result = permissions.aggregate(
                scope.directives.check_permissions,
                parent=resource.schema.gvr,
                parent_id=resource.id,
                registry=self.registry,
                access_set=scope.access_set,
                settings=self.settings.permissions,
                logger=object_logger,
            )
        except errors.FormattingError as e:
            object_logger.debug(f"Skipping the permissions: {e}")
        else:
            if result:
                tree[self.settings.permissions.field] = result
