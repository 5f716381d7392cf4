import logging

import kformat

registry = kformat.SchemaCollection([
    kformat.SchemaDescriptor(id='projects', group='management.cattle.io', version='v3',
                             resource='projects', disallowed_methods=frozenset({'DELETE'})),
    kformat.SchemaDescriptor(id='projectRoleTemplateBindings', group='management.cattle.io',
                             version='v3', resource='projectroletemplatebindings'),
])

access_set = kformat.AccessSet.from_rules([
    {'verbs': ['get', 'update', 'delete'], 'resources': ['projects.management.cattle.io']},
    {'verbs': ['list', 'watch'], 'resources': ['projectroletemplatebindings.management.cattle.io'],
     'namespaces': ['c-m-123-p-456']},
])
lookup = kformat.StaticAccessSetLookup({'alice': access_set})

formatter = kformat.Formatter(registry=registry, lookup=lookup)


def main() -> None:
    kformat.configure(debug=True, log_format=kformat.LogFormat.PLAIN, log_prefix=True)

    request = kformat.APIRequest.from_query_string(
        'checkPermissions=projectRoleTemplateBindings,unknown&exclude=metadata.managedFields',
        user=kformat.UserInfo(name='alice'),
    )
    resource = kformat.RawResource(
        schema=registry.lookup('projects'),
        id='c-m-123/p-456',
        object={
            'apiVersion': 'management.cattle.io/v3',
            'kind': 'Project',
            'metadata': {'name': 'p-456', 'namespace': 'c-m-123', 'managedFields': []},
            'spec': {'displayName': 'Default'},
        },
        links={
            'update': '/v1/management.cattle.io.projects/c-m-123/p-456',
            'remove': '/v1/management.cattle.io.projects/c-m-123/p-456',
        },
    )
    formatter.format_resource(request, resource)

    logging.info(f"Links: {resource.links}")
    logging.info(f"Object: {resource.object}")


if __name__ == '__main__':
    main()
