"""
Logging of the formatted objects, and the setup of the log handlers.

Every object gets its own `ObjectLogger` while it is formatted. The logger
attaches the object's reference to each record as ``k8s_ref``. The formatters
render the reference either as a ``[namespace/name]`` prefix of the message
(text logs, by default) or as a separate JSON field (JSON logs).
"""
import copy
import enum
import logging
from typing import Any, Mapping, MutableMapping, Optional, Tuple, Type, Union

from pythonjsonlogger.core import RESERVED_ATTRS
from pythonjsonlogger.json import JsonFormatter

from kformat.helpers import typedefs
from kformat.structs import bodies

DEFAULT_JSON_REFKEY = 'object'
""" The JSON field with the object's reference, unless overridden. """

REF_ATTR = 'k8s_ref'

SEVERITIES: Tuple[Tuple[int, str], ...] = (
    (logging.DEBUG, 'debug'),
    (logging.INFO, 'info'),
    (logging.WARNING, 'warn'),
    (logging.ERROR, 'error'),
)


class LogFormat(enum.Enum):
    """ The predefined log formats, selectable from the command line. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s'
    JSON = enum.auto()


def severity_of(levelno: int) -> str:
    for threshold, severity in SEVERITIES:
        if levelno <= threshold:
            return severity
    return 'fatal'


def prefix_of(ref: Mapping[str, Any]) -> str:
    namespace = ref.get('namespace', '')
    name = ref.get('name', '')
    return f"[{namespace}/{name}]" if namespace else f"[{name}]"


class ObjectFormatter(logging.Formatter):
    """ A marker of our own formatters, to find our own handlers. """


class ObjectTextFormatter(ObjectFormatter):
    pass


class ObjectJsonFormatter(ObjectFormatter, JsonFormatter):
    """
    JSON records with the object's reference and the record's severity.

    The reference goes to its own field (``refkey``), not as a raw
    ``k8s_ref`` extra.
    """

    def __init__(self, *args: Any, refkey: Optional[str] = None, **kwargs: Any) -> None:
        kwargs['reserved_attrs'] = set(kwargs.get('reserved_attrs', RESERVED_ATTRS)) | {REF_ATTR}
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)
        self.refkey: str = refkey or DEFAULT_JSON_REFKEY

    def add_fields(
            self,
            log_record: MutableMapping[str, object],
            record: logging.LogRecord,
            message_dict: MutableMapping[str, object],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        ref = getattr(record, REF_ATTR, None)
        if ref is not None:
            log_record[self.refkey] = ref
        log_record.setdefault('severity', severity_of(record.levelno))


class ObjectPrefixingMixin(ObjectFormatter):
    def format(self, record: logging.LogRecord) -> str:
        ref = getattr(record, REF_ATTR, None)
        if ref is not None:
            record = copy.copy(record)
            record.msg = f"{prefix_of(ref)} {record.msg}"
        return super().format(record)


class ObjectPrefixingTextFormatter(ObjectPrefixingMixin, ObjectTextFormatter):
    pass


class ObjectPrefixingJsonFormatter(ObjectPrefixingMixin, ObjectJsonFormatter):
    pass


class ObjectLogger(typedefs.LoggerAdapter):
    """
    A per-object logger: the records carry the object's reference.

    The reference is taken once, on creation. The projection of the object
    later on does not change what is logged for it.
    """

    def __init__(self, *, adapter: bodies.ObjectAdapter) -> None:
        ref = dict(adapter.build_object_reference())
        super().__init__(logger, {REF_ATTR: ref})

    def process(
            self,
            msg: str,
            kwargs: MutableMapping[str, Any],
    ) -> Tuple[str, MutableMapping[str, Any]]:
        # The call's own extras are kept next to the object's reference.
        kwargs['extra'] = {**self.extra, **kwargs.get('extra', {})}
        return msg, kwargs


logger = logging.getLogger('kformat.objects')


def make_formatter(
        log_format: Union[LogFormat, str] = LogFormat.FULL,
        log_prefix: Optional[bool] = False,
        log_refkey: Optional[str] = None,
) -> ObjectFormatter:
    """
    Build a formatter for the format; prefixed text and unprefixed JSON by default.
    """
    if log_prefix is None:
        log_prefix = log_format is not LogFormat.JSON

    if log_format is LogFormat.JSON:
        json_cls: Type[ObjectJsonFormatter]
        json_cls = ObjectPrefixingJsonFormatter if log_prefix else ObjectJsonFormatter
        return json_cls(refkey=log_refkey)

    if isinstance(log_format, LogFormat):
        pattern = log_format.value
    elif isinstance(log_format, str):
        pattern = log_format
    else:
        raise ValueError(f"Unsupported log format: {log_format!r}")
    text_cls: Type[ObjectTextFormatter]
    text_cls = ObjectPrefixingTextFormatter if log_prefix else ObjectTextFormatter
    return text_cls(pattern)


def configure(
        debug: Optional[bool] = None,
        verbose: Optional[bool] = None,
        quiet: Optional[bool] = None,
        log_format: Union[LogFormat, str] = LogFormat.FULL,
        log_prefix: Optional[bool] = False,
        log_refkey: Optional[str] = None,
) -> None:
    """
    Add a stderr handler with our formatter to the root logger, and set its level.

    Debugging or verbosity win over quietness.
    """
    if debug or verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(make_formatter(log_format=log_format, log_prefix=log_prefix,
                                        log_refkey=log_refkey))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
