"""
File-loading of the objects, schemas, and grants for the command-line tool.

All files are YAML (and so, JSON too, as its subset). Multiple files can be
specified, and every file can contain multiple documents; they are all
loaded in the order of appearance.

The schemas file is a list of schemas (or a stream of schema documents)::

    - id: pods
      group: ""
      version: v1
      resource: pods
      disallowMethods: [DELETE]

The access file maps the user names to their grants::

    alice:
      - verbs: [get, update]
        resources: [pods]
        namespaces: [default]
"""
import collections.abc
from typing import Any, Dict, Iterable, Iterator, List, Mapping

import yaml

from kformat import errors
from kformat.structs import access, schemas


class LoadingError(Exception):
    """ A file cannot be loaded: either absent, or malformed. """


def load_documents(paths: Iterable[str]) -> Iterator[Any]:
    for path in paths:
        try:
            with open(path, 'rt', encoding='utf-8') as f:
                for document in yaml.safe_load_all(f):
                    if document is not None:
                        yield document
        except (OSError, yaml.YAMLError) as e:
            raise LoadingError(f"Failed loading {path}: {e}") from e


def load_objects(paths: Iterable[str]) -> List[Dict[str, Any]]:
    objects: List[Dict[str, Any]] = []
    for document in load_documents(paths):
        items = document.get('items') if isinstance(document, Mapping) else None
        if isinstance(items, list):  # the lists as returned by the API
            objects.extend(items)
        elif isinstance(document, collections.abc.MutableMapping):
            objects.append(dict(document))
        else:
            raise LoadingError(f"An object must be a mapping, got {document!r}")
    return objects


def load_schemas(paths: Iterable[str]) -> schemas.SchemaCollection:
    registry = schemas.SchemaCollection()
    for document in load_documents(paths):
        for data in (document if isinstance(document, list) else [document]):
            if not isinstance(data, Mapping) or 'id' not in data:
                raise LoadingError(f"A schema must be a mapping with an id, got {data!r}")
            try:
                registry.add(schemas.SchemaDescriptor.from_dict(data))
            except errors.DuplicateSchemaError as e:
                raise LoadingError(str(e)) from e
    return registry


def load_access(paths: Iterable[str]) -> access.StaticAccessSetLookup:
    access_sets: Dict[str, access.AccessSet] = {}
    for document in load_documents(paths):
        if not isinstance(document, Mapping):
            raise LoadingError(f"The grants must be a mapping of users, got {document!r}")
        for user, rules in document.items():
            if not isinstance(rules, list) or not all(isinstance(r, Mapping) for r in rules):
                raise LoadingError(f"The grants of {user!r} must be a list of rules.")
            access_sets[str(user)] = access.AccessSet.from_rules(rules)
    return access.StaticAccessSetLookup(access_sets)
