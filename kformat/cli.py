import functools
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import click
import yaml

from kformat.engines import loggers
from kformat.formatting import formatter
from kformat.helpers import loaders, versions
from kformat.structs import access, bodies, configuration, requests, schemas


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


class LinkParamType(click.ParamType):
    name = 'name=url'

    def convert(self, value: Any, param: Any, ctx: Any) -> Tuple[str, str]:
        if isinstance(value, tuple):
            return value
        name, sep, url = str(value).partition('=')
        if not sep or not name or not url:
            self.fail(f"Links must be specified as NAME=URL, got {value!r}.", param, ctx)
        return name, url


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @click.option('--log-refkey', type=str)
    @click.option('--log-prefix/--no-log-prefix', default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                log_prefix: Optional[bool] = False,
                log_refkey: Optional[str] = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey, log_prefix=log_prefix)
        return fn(*args, **kwargs)

    return wrapper


@click.version_option(version=versions.version or 'unknown', prog_name='kformat')
@click.group(name='kformat', context_settings=dict(
    auto_envvar_prefix='KFORMAT',
))
def main() -> None:
    pass


@main.command()
@logging_options
@click.option('-s', '--schemas', 'schema_paths', multiple=True, type=click.Path(dir_okay=False))
@click.option('-a', '--access', 'access_paths', multiple=True, type=click.Path(dir_okay=False))
@click.option('-u', '--user', type=str, default=None)
@click.option('-S', '--schema', 'schema_id', type=str, default=None)
@click.option('-i', '--id', 'object_id', type=str, default=None)
@click.option('-l', '--link', 'seed_links', type=LinkParamType(), multiple=True)
@click.option('--include', multiple=True)
@click.option('--exclude', multiple=True)
@click.option('--exclude-values', multiple=True)
@click.option('--check-permissions', type=str, default=None)
@click.option('--management-group', type=str, default=None)
@click.option('-o', '--output', type=click.Choice(['yaml', 'json']), default='yaml')
@click.argument('paths', nargs=-1, required=True, type=click.Path(dir_okay=False))
def render(
        paths: List[str],
        schema_paths: List[str],
        access_paths: List[str],
        user: Optional[str],
        schema_id: Optional[str],
        object_id: Optional[str],
        seed_links: List[Tuple[str, str]],
        include: List[str],
        exclude: List[str],
        exclude_values: List[str],
        check_permissions: Optional[str],
        management_group: Optional[str],
        output: str,
) -> None:
    """ Format the objects from files as they would be served to a user. """
    try:
        objects = loaders.load_objects(paths)
        registry = loaders.load_schemas(schema_paths) if schema_paths else schemas.SchemaCollection()
        lookup = loaders.load_access(access_paths) if access_paths else access.StaticAccessSetLookup()
    except loaders.LoadingError as e:
        raise click.UsageError(str(e))

    schema = registry.lookup(schema_id) if schema_id else None
    if schema_id and schema is None:
        raise click.UsageError(f"Schema {schema_id!r} is not found in the schemas.")

    settings = configuration.FormatterSettings()
    if management_group is not None:
        settings.linking.management_group = management_group

    query: Dict[str, List[str]] = {
        settings.projection.include_param: list(include),
        settings.projection.exclude_param: list(exclude),
        settings.projection.exclude_values_param: list(exclude_values),
        settings.projection.permissions_param: [check_permissions] if check_permissions else [],
    }
    request = requests.APIRequest(
        query=query,
        user=access.UserInfo(name=user) if user else None,
    )
    resources = [
        formatter.RawResource(
            schema=schema,
            object=obj,
            id=object_id if object_id is not None else _derive_id(obj),
            links=dict(seed_links),
        )
        for obj in objects
    ]

    fmt = formatter.Formatter(registry=registry, lookup=lookup, settings=settings)
    results = [
        dict(id=resource.id, links=resource.links, object=resource.object)
        for resource in fmt.format_collection(request, resources)
    ]
    if output == 'json':
        click.echo(json.dumps(results, indent=2))
    else:
        click.echo(yaml.safe_dump_all(results, sort_keys=False), nl=False)


def _derive_id(obj: Any) -> Optional[str]:
    identity = bodies.adapt(obj).identity
    if identity is None or not identity.name:
        return None
    return f'{identity.namespace}/{identity.name}' if identity.namespace else identity.name
