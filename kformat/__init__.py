"""
The main kformat module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the package's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from kformat.engines.loggers import (
    configure,
    LogFormat,
)
from kformat.errors import (
    FormattingError,
    MissingAttributeError,
    IdentityError,
    DuplicateSchemaError,
)
from kformat.formatting.formatter import (
    Formatter,
    RawResource,
    Scope,
)
from kformat.formatting.projection import (
    include,
    exclude,
    exclude_values,
    project,
)
from kformat.helpers.typedefs import (
    Logger,
)
from kformat.helpers.versions import (
    version as __version__,
)
from kformat.structs.access import (
    ALL,
    Access,
    AccessSet,
    AccessSetLookup,
    StaticAccessSetLookup,
    UserInfo,
)
from kformat.structs.bodies import (
    Body,
    Meta,
    Identity,
    ObjectAdapter,
    adapt,
)
from kformat.structs.configuration import (
    FormatterSettings,
    LinkingSettings,
    PermissionsSettings,
    ProjectionSettings,
    join_id_parts,
)
from kformat.structs.dicts import (
    FieldPath,
    FieldSpec,
)
from kformat.structs.links import (
    BLOCKED,
    Decision,
    LinkSet,
    ManagedLink,
    Verdict,
)
from kformat.structs.references import (
    GVR,
    GroupResource,
    MANAGEMENT_GROUP,
    collection_link,
    self_link,
)
from kformat.structs.requests import (
    APIRequest,
    Directives,
)
from kformat.structs.schemas import (
    SchemaCollection,
    SchemaDescriptor,
)

__all__ = [
    'configure', 'LogFormat',
    'FormattingError', 'MissingAttributeError', 'IdentityError', 'DuplicateSchemaError',
    'Formatter', 'RawResource', 'Scope',
    'include', 'exclude', 'exclude_values', 'project',
    'Logger',
    'ALL', 'Access', 'AccessSet', 'AccessSetLookup', 'StaticAccessSetLookup', 'UserInfo',
    'Body', 'Meta', 'Identity', 'ObjectAdapter', 'adapt',
    'FormatterSettings', 'LinkingSettings', 'PermissionsSettings', 'ProjectionSettings',
    'join_id_parts',
    'FieldPath', 'FieldSpec',
    'BLOCKED', 'Decision', 'LinkSet', 'ManagedLink', 'Verdict',
    'GVR', 'GroupResource', 'MANAGEMENT_GROUP', 'collection_link', 'self_link',
    'APIRequest', 'Directives',
    'SchemaCollection', 'SchemaDescriptor',
]
