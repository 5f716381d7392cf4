import pytest

from kformat.errors import MissingAttributeError
from kformat.formatting.authorization import decide, filter_links
from kformat.structs.bodies import Identity
from kformat.structs.links import BLOCK, KEEP, OMIT, Verdict
from kformat.structs.schemas import SchemaDescriptor

POD_LINK = '../v1/namespaces/example-ns/pods/example-pod'
VIEW_LINK = '/api/v1/namespaces/example-ns/pods/example-pod'


def test_get_granted(settings, pods_schema, access_set, identity, grant_exactly):
    grant_exactly('get')
    links = {'default': 'defaultVal'}
    filter_links(links, schema=pods_schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal', 'view': VIEW_LINK}


def test_schema_without_a_group_is_in_the_core_group(settings, access_set, identity, grant_exactly):
    schema = SchemaDescriptor(id='pods', version='v1', resource='pods')
    grant_exactly('get')
    links = {'default': 'defaultVal', 'update': '/u'}
    filter_links(links, schema=schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal', 'view': VIEW_LINK}


def test_get_granted_but_disallowed(settings, access_set, identity, grant_exactly):
    schema = SchemaDescriptor(id='example', group='', version='v1', resource='pods',
                              disallowed_methods=frozenset({'GET'}))
    grant_exactly('get')
    links = {'default': 'defaultVal'}
    filter_links(links, schema=schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal', 'view': 'blocked'}


def test_no_access_set_keeps_everything(settings, pods_schema, identity):
    links = {'default': 'defaultVal', 'update': POD_LINK}
    decisions = filter_links(links, schema=pods_schema, access_set=None,
                             identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal', 'update': POD_LINK}
    assert set(decisions.values()) == {KEEP}


def test_no_gvr_in_schema(settings, access_set, identity):
    schema = SchemaDescriptor(id='example')
    links = {'default': 'defaultVal'}
    with pytest.raises(MissingAttributeError):
        filter_links(links, schema=schema, access_set=access_set,
                     identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal'}


def test_no_update_remove_permissions(settings, pods_schema, access_set, identity):
    links = {'default': 'defaultVal', 'update': POD_LINK, 'remove': POD_LINK}
    filter_links(links, schema=pods_schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal'}


@pytest.mark.parametrize('verbs, expected', [
    pytest.param(['update'], {'update': POD_LINK}, id='update-only'),
    pytest.param(['delete'], {'remove': POD_LINK}, id='remove-only'),
    pytest.param(['update', 'delete'], {'update': POD_LINK, 'remove': POD_LINK}, id='both'),
])
def test_update_remove_permissions(settings, pods_schema, access_set, identity, grant_exactly,
                                   verbs, expected):
    grant_exactly(*verbs)
    links = {'default': 'defaultVal', 'update': POD_LINK, 'remove': POD_LINK}
    filter_links(links, schema=pods_schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == dict({'default': 'defaultVal'}, **expected)


def test_update_remove_permissions_but_blocked(settings, access_set, identity, grant_exactly):
    schema = SchemaDescriptor(id='example', group='', version='v1', resource='pods',
                              disallowed_methods=frozenset({'PUT', 'DELETE'}))
    grant_exactly('update', 'delete')
    links = {'default': 'defaultVal', 'update': POD_LINK, 'remove': POD_LINK}
    filter_links(links, schema=schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal', 'update': 'blocked', 'remove': 'blocked'}


def test_granted_but_blocked_links_are_added_as_blocked(settings, access_set, identity, grant_exactly):
    schema = SchemaDescriptor(id='example', group='', version='v1', resource='pods',
                              disallowed_methods=frozenset({'PUT', 'DELETE'}))
    grant_exactly('update', 'delete')
    links = {'default': 'defaultVal'}
    filter_links(links, schema=schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal', 'update': 'blocked', 'remove': 'blocked'}


def test_patch_permissions(settings, deployments_schema, access_set, grant):
    identity = Identity(namespace='example-ns', name='example-deployment')
    grant('patch', 'apps', 'deployments', namespace='example-ns', name='example-deployment')
    links = {
        'default': 'defaultVal',
        'patch': '/v1/apps.deployments/example-ns/example-deployment',
        'view': '/apis/apps/v1/namespaces/example-ns/deployments/example-deployment',
    }
    filter_links(links, schema=deployments_schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {
        'default': 'defaultVal',
        'patch': '/v1/apps.deployments/example-ns/example-deployment',
    }


def test_patch_permissions_but_blocked(settings, access_set, grant):
    schema = SchemaDescriptor(id='apps.deployments', group='apps', version='v1',
                              resource='deployments', disallowed_methods=frozenset({'PATCH'}))
    identity = Identity(namespace='example-ns', name='example-deployment')
    grant('patch', 'apps', 'deployments', namespace='example-ns', name='example-deployment')
    links = {
        'default': 'defaultVal',
        'patch': '/v1/apps.deployments/example-ns/example-deployment',
        'view': '/apis/apps/v1/namespaces/example-ns/deployments/example-deployment',
    }
    filter_links(links, schema=schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'default': 'defaultVal', 'patch': 'blocked'}


def test_grants_for_other_objects_do_not_apply(settings, pods_schema, access_set, grant):
    grant('get', '', 'pods', namespace='example-ns', name='another-pod')
    grant('update', '', 'pods', namespace='another-ns', name='example-pod')
    identity = Identity(namespace='example-ns', name='example-pod')
    links = {'update': POD_LINK}
    filter_links(links, schema=pods_schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {}


def test_unmanaged_links_are_never_touched(settings, pods_schema, access_set, identity):
    links = {'self': '/self', 'default': 'defaultVal', 'custom': 'blocked'}
    filter_links(links, schema=pods_schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'self': '/self', 'default': 'defaultVal', 'custom': 'blocked'}


def test_management_group_view_links(settings, access_set, grant):
    schema = SchemaDescriptor(id='management.cattle.io.projects', group='management.cattle.io',
                              version='v3', resource='projects')
    grant('get', 'management.cattle.io', 'projects')
    identity = Identity(namespace='c-m-123', name='p-456')
    links = {}
    filter_links(links, schema=schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'view': '/v1/management.cattle.io.projects/c-m-123/p-456'}


def test_custom_blocked_marker(settings, access_set, identity, grant_exactly):
    schema = SchemaDescriptor(id='example', group='', version='v1', resource='pods',
                              disallowed_methods=frozenset({'GET'}))
    settings.linking.blocked = 'forbidden'
    grant_exactly('get')
    links = {}
    filter_links(links, schema=schema, access_set=access_set,
                 identity=identity, settings=settings.linking)
    assert links == {'view': 'forbidden'}


def test_decisions_of_all_managed_links(settings, access_set, identity, grant_exactly):
    schema = SchemaDescriptor(id='example', group='', version='v1', resource='pods',
                              disallowed_methods=frozenset({'DELETE'}))
    grant_exactly('get', 'delete')
    decisions = decide(schema=schema, access_set=access_set,
                       identity=identity, settings=settings.linking)
    assert decisions['view'].verdict is Verdict.EXPOSE
    assert decisions['view'].url == VIEW_LINK
    assert decisions['update'] == OMIT
    assert decisions['remove'] == BLOCK
    assert decisions['patch'] == OMIT
