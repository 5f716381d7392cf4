"""
Filtering of the objects' links by the caller's access grants.

The fundamental rule: only an explicitly present URL means "permitted".
An absent link means either "not permitted" or "not offered" -- both are safe.
The "blocked" marker is used only for the schema-level prohibitions
of the links that would otherwise be permitted; never for lack of access.

The pre-existing links for the modifying verbs (update, remove, patch)
are produced upstream and are only kept or removed here.
The blocked marker is set for them regardless of whether they were offered.
The view link is always computed here as the object's self-link.
"""
from typing import Dict, Mapping, Optional

from kformat.structs import access, bodies, configuration, links, references, schemas


def decide(
        *,
        schema: schemas.SchemaDescriptor,
        access_set: Optional[access.AccessSet],
        identity: bodies.Identity,
        settings: configuration.LinkingSettings,
) -> Dict[str, links.Decision]:
    """
    Decide on every managed link of an object, without modifying anything.

    Raises `MissingAttributeError` if the schema has no resource type.
    """
    gvr = schema.gvr
    decisions: Dict[str, links.Decision] = {}
    for managed in settings.managed:

        # With no known grants, the links are neither added nor removed.
        if access_set is None:
            decisions[managed.name] = links.KEEP
            continue

        granted = access_set.grants(managed.verb, gvr.group_resource,
                                    identity.namespace, identity.name)
        if not granted:
            decisions[managed.name] = links.OMIT
        elif schema.is_disallowed(managed.method):
            decisions[managed.name] = links.BLOCK
        elif managed.name == links.VIEW:
            url = references.self_link(gvr, namespace=references.NamespaceName(identity.namespace),
                                       name=identity.name,
                                       management_group=settings.management_group)
            decisions[managed.name] = links.expose(url)
        else:
            decisions[managed.name] = links.KEEP
    return decisions


def filter_links(
        existing: links.LinkSet,
        *,
        schema: schemas.SchemaDescriptor,
        access_set: Optional[access.AccessSet],
        identity: bodies.Identity,
        settings: configuration.LinkingSettings,
) -> Mapping[str, links.Decision]:
    """
    Filter the links of an object in place according to the caller's access.
    """
    decisions = decide(schema=schema, access_set=access_set, identity=identity, settings=settings)
    links.apply_decisions(existing, decisions, blocked=settings.blocked)
    return decisions
