"""Command-line interface for rx-validate"""

import re
import sys
from typing import Optional, Tuple

import click
import structlog

from rx_validate.decoding import load_document
from rx_validate.logging_setup import configure_logging
from rx_validate.validation import (
    DecodeError,
    DuplicateTypeError,
    ReportBuilder,
    SchemaError,
    TypeRegistry,
    compile_schema,
    date_type,
    pattern_type,
    render_lines,
    validate,
)

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SCHEMA_ERROR = 2


def build_registry(date_types: Tuple[str, ...], pattern_types: Tuple[str, ...]) -> TypeRegistry:
    """Registry with the built-ins plus custom types given on the command line"""
    registry = TypeRegistry()
    try:
        for identifier in date_types:
            registry.register(identifier, date_type(identifier))
        for spec in pattern_types:
            identifier, sep, pattern = spec.partition("=")
            if not sep or not identifier or not pattern:
                raise click.BadParameter(f"expected IDENT=REGEX, got '{spec}'", param_hint="--pattern-type")
            registry.register(identifier, pattern_type(identifier, pattern))
    except DuplicateTypeError as exc:
        raise click.BadParameter(str(exc)) from exc
    except re.error as exc:
        raise click.BadParameter(f"invalid pattern: {exc}", param_hint="--pattern-type") from exc
    return registry


def _load_schema(schema_path: str, registry: TypeRegistry):
    try:
        document = load_document(schema_path)
        return compile_schema(document, registry)
    except (DecodeError, SchemaError) as exc:
        click.echo(f"Schema error: {exc}", err=True)
        logger.error("Schema rejected", schema=schema_path, error=str(exc))
        sys.exit(EXIT_SCHEMA_ERROR)


_custom_type_options = [
    click.option('--date-type', 'date_types', multiple=True, metavar='IDENT',
                 help='Register a custom YYYY-MM-DD date type'),
    click.option('--pattern-type', 'pattern_types', multiple=True, metavar='IDENT=REGEX',
                 help='Register a custom string type matching REGEX'),
]


def custom_type_options(func):
    for option in reversed(_custom_type_options):
        func = option(func)
    return func


@click.group()
@click.option('--log-level', default=None, help='Log level (default from RX_LOG_LEVEL)')
@click.option('--log-format', type=click.Choice(['console', 'json']), default=None, help='Log output format')
def cli(log_level: Optional[str], log_format: Optional[str]):
    """Validate JSON and YAML documents against Rx schemas"""
    configure_logging(level=log_level, log_format=log_format, force=True)


@cli.command()
@click.argument('schema', type=click.Path(dir_okay=False))
@click.argument('documents', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@custom_type_options
def check(schema: str, documents: Tuple[str, ...], output_format: str,
          date_types: Tuple[str, ...], pattern_types: Tuple[str, ...]):
    """Validate DOCUMENTS against SCHEMA"""
    registry = build_registry(date_types, pattern_types)
    compiled = _load_schema(schema, registry)

    report = ReportBuilder(schema)
    for source in documents:
        try:
            value = load_document(source)
        except DecodeError as exc:
            logger.error("Document could not be decoded", source=source, error=exc.detail)
            report.add_decode_error(source, exc.detail)
            if output_format == 'text':
                click.echo(f"{source}: could not decode: {exc.detail}")
            continue

        result = validate(compiled, value)
        report.add_result(source, result)
        logger.info("Validated document", source=source, valid=result.valid, failures=len(result))

        if output_format == 'text':
            if result.valid:
                click.echo(f"{source}: OK")
            else:
                click.echo(f"{source}: FAILED ({len(result)} failures)")
                for line in render_lines(result):
                    click.echo(f"  {line}")

    if output_format == 'json':
        click.echo(report.to_json())

    sys.exit(EXIT_OK if report.all_valid else EXIT_INVALID)


@cli.command('check-schema')
@click.argument('schema', type=click.Path(dir_okay=False))
@custom_type_options
def check_schema(schema: str, date_types: Tuple[str, ...], pattern_types: Tuple[str, ...]):
    """Compile SCHEMA and report structural problems"""
    registry = build_registry(date_types, pattern_types)
    compiled = _load_schema(schema, registry)
    click.echo(f"{schema}: OK ({compiled.type})")


@cli.command('types')
@custom_type_options
def list_types(date_types: Tuple[str, ...], pattern_types: Tuple[str, ...]):
    """List registered type identifiers"""
    registry = build_registry(date_types, pattern_types)
    for identifier in registry.identifiers():
        kind = "built-in" if registry.is_builtin(identifier) else "custom"
        click.echo(f"{identifier}\t{kind}")


if __name__ == '__main__':
    cli()
