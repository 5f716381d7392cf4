import pytest

from kformat.structs.bodies import Identity


@pytest.fixture()
def identity():
    return Identity(namespace='example-ns', name='example-pod')


@pytest.fixture()
def grant_exactly(grant, identity):
    """ Grant the verbs only for the specific object, as the real RBAC does for named rules. """
    def grant_fn(*verbs, group='', resource='pods'):
        for verb in verbs:
            grant(verb, group, resource, namespace=identity.namespace, name=identity.name)
    return grant_fn
