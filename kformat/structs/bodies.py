"""
All the structures of the outgoing objects, and the adapters to access them.

The objects to be formatted come in different shapes:

* Plain dicts, as decoded from JSON: they are "tree-convertible", i.e. they
  can be projected and can get extra fields injected; they also always have
  an identity (namespace & name), even if these are empty strings.
* Pykube-ng objects: the same as dicts, via their underlying ``.obj`` dict.
* Kubernetes client models: statically typed classes; they have an identity
  via ``.metadata``, but cannot be projected or extended with extra fields.
* Anything else: opaque objects with neither a tree nor an identity.

Instead of checking for the types all over the formatting pipeline,
every object is wrapped into an adapter once (see `adapt`), and the pipeline
only asks the adapter for its capabilities. The no-op variant is the base
`ObjectAdapter` itself: it has no identity and no tree.
"""
import collections.abc
import dataclasses
from typing import Any, Mapping, MutableMapping, Optional, cast

from kformat.helpers import thirdparty
from kformat.structs import dicts, references


class Meta(dicts.MappingView[str, Any]):

    def __init__(self, __src: Mapping[str, Any]) -> None:
        super().__init__(__src, 'metadata')

    @property
    def uid(self) -> Optional[str]:
        return cast(Optional[str], self.get('uid'))

    @property
    def name(self) -> Optional[str]:
        return cast(Optional[str], self.get('name'))

    @property
    def namespace(self) -> references.Namespace:
        return cast(references.Namespace, self.get('namespace'))


class Body(dicts.MappingView[str, Any]):

    def __init__(self, __src: Mapping[str, Any]) -> None:
        super().__init__(__src)
        self._meta = Meta(__src)

    @property
    def metadata(self) -> Meta:
        return self._meta

    @property
    def meta(self) -> Meta:
        return self._meta


@dataclasses.dataclass(frozen=True)
class Identity:
    """
    The identifying part of an object: its namespace and name.

    Both are strings, possibly empty: e.g. for cluster-scoped objects,
    or for objects which are not stored anywhere yet.
    """
    namespace: str = ''
    name: str = ''


class ObjectAdapter:
    """
    A capability-based view of an object, as used in the formatting.

    This base class is also the no-op variant for the opaque objects:
    it has neither an identity nor a tree representation.
    """

    def __init__(self, obj: Any) -> None:
        super().__init__()
        self.obj = obj

    @property
    def identity(self) -> Optional[Identity]:
        return None

    @property
    def tree(self) -> Optional[MutableMapping[str, Any]]:
        return None

    def build_object_reference(self) -> Mapping[str, Any]:
        identity = self.identity
        if identity is None:
            return {}
        ref = dict(namespace=identity.namespace, name=identity.name)
        return {key: val for key, val in ref.items() if val}


class TreeAdapter(ObjectAdapter):
    """ Dict-based objects: both projectable and with an identity. """

    @property
    def identity(self) -> Optional[Identity]:
        tree = self.tree
        if tree is None:
            return None
        meta = Body(tree).meta
        return Identity(namespace=str(meta.namespace or ''), name=str(meta.name or ''))

    @property
    def tree(self) -> Optional[MutableMapping[str, Any]]:
        return cast(MutableMapping[str, Any], self.obj)

    def build_object_reference(self) -> Mapping[str, Any]:
        tree = self.tree if self.tree is not None else {}
        ref = dict(super().build_object_reference(),
                   uid=Body(tree).meta.uid,
                   apiVersion=tree.get('apiVersion'),
                   kind=tree.get('kind'))
        return {key: val for key, val in ref.items() if val}


class PykubeAdapter(TreeAdapter):
    """ Pykube-ng objects are served via their underlying dicts. """

    @property
    def tree(self) -> Optional[MutableMapping[str, Any]]:
        obj = getattr(self.obj, 'obj', None)
        return obj if isinstance(obj, collections.abc.MutableMapping) else None


class ModelAdapter(ObjectAdapter):
    """ Statically typed models: an identity via metadata, but no tree. """

    @property
    def identity(self) -> Optional[Identity]:
        meta = getattr(self.obj, 'metadata', None)
        if meta is None:
            return None
        namespace = getattr(meta, 'namespace', None)
        name = getattr(meta, 'name', None)
        return Identity(namespace=namespace or '', name=name or '')


def adapt(obj: Any) -> ObjectAdapter:
    """
    Wrap an object into an adapter according to its capabilities.
    """
    if isinstance(obj, ObjectAdapter):
        return obj
    elif isinstance(obj, collections.abc.MutableMapping):
        return TreeAdapter(obj)
    elif isinstance(obj, thirdparty.PykubeObject):
        return PykubeAdapter(obj)
    elif isinstance(obj, thirdparty.KubernetesModel):
        return ModelAdapter(obj)
    else:
        return ObjectAdapter(obj)


def replace_tree(
        tree: MutableMapping[str, Any],
        new: Mapping[str, Any],
) -> None:
    """ Replace the content of a tree in place, so that all holders see it. """
    if tree is not new:
        tree.clear()
        tree.update(new)
