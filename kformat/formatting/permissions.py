"""
Aggregation of the caller's permissions on the related resource types.

The clients can ask which related resources they may access in the context
of a parent object, e.g. which role bindings of a project they can list.
For every requested resource type, the result maps the granted verbs
to the collection links of that type in the parent's scoping namespace::

    {"projectRoleTemplateBindings": {"get": "/apis/.../namespaces/c-p/...", ...}}

The types with no granted verbs are not mentioned at all, the same as unknown
types. If nothing is granted, there is no result at all (not an empty one).
"""
import logging
from typing import Dict, Iterable, MutableMapping, Optional

from kformat.helpers import typedefs
from kformat.structs import access, configuration, references, schemas

logger = logging.getLogger(__name__)

ResourcePermissions = MutableMapping[str, MutableMapping[str, str]]


def resolve_gvr(
        schema: schemas.SchemaDescriptor,
        *,
        name: str,
        parent: references.GVR,
) -> references.GVR:
    """
    The resource type of a related schema, with the gaps filled from the parent.
    """
    return references.GVR(
        group=schema.group if schema.group is not None else parent.group,
        version=schema.version or parent.version,
        resource=schema.resource or name,
    )


def aggregate(
        names: Iterable[str],
        *,
        parent: references.GVR,
        parent_id: Optional[str],
        registry: schemas.SchemaCollection,
        access_set: access.AccessSet,
        settings: configuration.PermissionsSettings,
        logger: typedefs.Logger = logger,
) -> Optional[ResourcePermissions]:
    """
    Collect the granted verbs with their links for the requested resource types.
    """
    namespace = settings.namespace_deriver(parent_id)
    result: Dict[str, MutableMapping[str, str]] = {}
    for name in names:
        schema = registry.lookup(name)
        if schema is None:
            logger.debug(f"Skipping permissions for an unknown resource {name!r}.")
            continue

        gvr = resolve_gvr(schema, name=name, parent=parent)
        link = references.collection_link(gvr, namespace=references.NamespaceName(namespace))
        verbs = {
            verb: link
            for verb in settings.verbs
            if access_set.grants(verb, gvr.group_resource, namespace)
        }
        if verbs:
            result[name] = verbs
    return result or None
