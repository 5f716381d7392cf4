import pytest

from kformat.structs.access import Access, AccessSet, StaticAccessSetLookup, UserInfo
from kformat.structs.configuration import FormatterSettings
from kformat.structs.references import GroupResource
from kformat.structs.schemas import SchemaCollection, SchemaDescriptor


@pytest.fixture()
def settings():
    return FormatterSettings()


@pytest.fixture()
def user():
    return UserInfo(name='test-user', groups=frozenset({'groups'}))


@pytest.fixture()
def access_set():
    """ An empty access set: nothing is granted unless added by the tests. """
    return AccessSet()


@pytest.fixture()
def lookup(user, access_set):
    return StaticAccessSetLookup({user.name: access_set})


@pytest.fixture()
def pods_schema():
    return SchemaDescriptor(id='pods', group='', version='v1', resource='pods')


@pytest.fixture()
def deployments_schema():
    return SchemaDescriptor(id='apps.deployments', group='apps', version='v1', resource='deployments')


@pytest.fixture()
def registry(pods_schema, deployments_schema):
    return SchemaCollection([pods_schema, deployments_schema])


@pytest.fixture()
def grant(access_set):
    """ Grant a verb on a resource to the test user, in a namespace with a name. """
    def grant_fn(verb, group, resource, *, namespace='*', name='*'):
        access_set.add(verb, GroupResource(group, resource), Access(namespace, name))
    return grant_fn


@pytest.fixture()
def pod():
    return {
        'apiVersion': 'v1',
        'kind': 'Pod',
        'metadata': {'name': 'example-pod', 'namespace': 'example-ns'},
        'spec': {'containers': [{'name': 'main', 'image': 'busybox'}]},
    }
