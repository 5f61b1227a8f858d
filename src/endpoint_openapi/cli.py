"""CLI entry point for endpoint-openapi."""

import logging
from pathlib import Path

import click

from endpoint_openapi import security
from endpoint_openapi.converter.document import OpenApiBuilder, convert
from endpoint_openapi.errors import BuilderError, LoaderError
from endpoint_openapi.loader import load_target
from endpoint_openapi.writer import write_document

AUTH_SCHEMES = {
    "bearer": security.bearer,
    "basic": security.basic,
}


def _load(target: str, app_dir: Path):
    try:
        return load_target(target, app_dir=app_dir)
    except LoaderError as e:
        raise click.ClickException(str(e)) from e


def _build_document(loaded, title: str | None, version: str | None, description: str | None,
                    servers: tuple[str, ...], auth: str) -> dict:
    """Convert a loaded target; builders keep their own configuration."""
    if isinstance(loaded, OpenApiBuilder):
        try:
            return loaded.build()
        except BuilderError as e:
            raise click.ClickException(str(e)) from e

    info = None
    if title or version:
        info = {"title": title or "API", "version": version or "1.0.0", "description": description}
    return convert(
        loaded,
        info=info,
        servers=[{"url": url} for url in servers] or None,
        security_scheme=AUTH_SCHEMES[auth]() if auth in AUTH_SCHEMES else None,
    )


def _count_operations(document: dict) -> int:
    return sum(len(item) for item in document["paths"].values())


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """endpoint-openapi — generate OpenAPI 3.0 documents from endpoint definitions."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("target")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file (.json, .yaml or .yml).")
@click.option("--app-dir", default=".", type=click.Path(file_okay=False, path_type=Path), help="Directory added to the import path.")
@click.option("--title", default=None, envvar="ENDPOINT_OPENAPI_TITLE", help="API title for the info object.")
@click.option("--version", "api_version", default=None, envvar="ENDPOINT_OPENAPI_VERSION", help="API version for the info object.")
@click.option("--description", default=None, help="API description for the info object.")
@click.option("--server", "servers", multiple=True, help="Server URL, may be repeated.")
@click.option("--auth", default="none", type=click.Choice(["none", "bearer", "basic"]), help="Security scheme protecting every endpoint.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
def generate(target: str, output: Path, app_dir: Path, title: str | None, api_version: str | None,
             description: str | None, servers: tuple[str, ...], auth: str, fmt: str):
    """Generate an OpenAPI document from TARGET (module:attribute)."""
    click.echo(f"Loading {target}...")
    loaded = _load(target, app_dir)

    document = _build_document(loaded, title, api_version, description, servers, auth)
    fmt = write_document(document, output, fmt)

    click.echo(f"Found {len(document['paths'])} paths, {_count_operations(document)} operations.")
    click.echo(f"OpenAPI document ({fmt}) saved to {output}")


@main.command()
@click.argument("target")
@click.option("--app-dir", default=".", type=click.Path(file_okay=False, path_type=Path), help="Directory added to the import path.")
def inspect(target: str, app_dir: Path):
    """List the operations TARGET (module:attribute) would generate."""
    loaded = _load(target, app_dir)
    document = _build_document(loaded, None, None, None, (), "none")

    for path, path_item in document["paths"].items():
        for method, operation in path_item.items():
            tags = ", ".join(operation.get("tags") or [])
            click.echo(f"{method.upper()} {path} -> {operation['operationId']} [{tags}]")
