"""
Errors of the formatting internals.

None of them reach the callers of the formatter: the formatter catches them
and degrades to leaving the object as it is, or to omitting the data.
They exist to distinguish the expected degradations from the actual bugs,
which are not caught and are propagated as usual.
"""


class FormattingError(Exception):
    """ A base class for all expected failures in the formatting. """


class MissingAttributeError(FormattingError):
    """ A schema lacks the attributes needed for links or access checks. """


class IdentityError(FormattingError):
    """ An object exposes no namespace/name, so it cannot be authorized. """


class DuplicateSchemaError(FormattingError):
    """ A schema with the same id is registered twice. """
