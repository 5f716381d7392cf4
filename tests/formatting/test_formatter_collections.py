from kformat.formatting.formatter import Formatter, RawResource, Scope
from kformat.structs.requests import APIRequest, Directives
from kformat.structs.schemas import SchemaDescriptor


def test_scope_with_user(registry, lookup, user, access_set):
    formatter = Formatter(registry=registry, lookup=lookup)
    scope = formatter.scope(APIRequest(query={'include': ['kind']}, user=user))
    assert scope == Scope(user=user, access_set=access_set,
                          directives=Directives(include=('kind',)))


def test_scope_without_user(registry, lookup):
    formatter = Formatter(registry=registry, lookup=lookup)
    scope = formatter.scope(APIRequest())
    assert scope.user is None
    assert scope.access_set is None


def test_siblings_are_formatted_independently(registry, lookup, user, pods_schema, grant):
    grant('get', '', 'pods', namespace='ns1')
    formatter = Formatter(registry=registry, lookup=lookup)
    resources = [
        RawResource(schema=pods_schema, object={'metadata': {'namespace': 'ns1', 'name': 'pod1'}}),
        RawResource(schema=SchemaDescriptor(id='broken'), object={'metadata': {'name': 'x'}},
                    links={'update': '/url'}),
        RawResource(schema=pods_schema, object=object(), links={'update': '/url'}),
        RawResource(schema=pods_schema, object={'metadata': {'namespace': 'ns2', 'name': 'pod2'}},
                    links={'update': '/url'}),
    ]
    results = formatter.format_collection(APIRequest(user=user), resources)
    assert results == resources
    assert [r.links for r in results] == [
        {'view': '/api/v1/namespaces/ns1/pods/pod1'},
        {'update': '/url'},
        {'update': '/url'},
        {},
    ]


def test_format_resource_returns_the_same_resource(registry, lookup, pods_schema, pod):
    formatter = Formatter(registry=registry, lookup=lookup)
    resource = RawResource(schema=pods_schema, object=pod)
    result = formatter.format_resource(APIRequest(), resource)
    assert result is resource


def test_default_settings(registry, lookup):
    formatter = Formatter(registry=registry, lookup=lookup)
    assert formatter.settings.permissions.field == 'resourcePermissions'
