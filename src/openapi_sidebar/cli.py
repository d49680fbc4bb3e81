"""CLI entry point for openapi-sidebar."""

import logging
from pathlib import Path

import click

from openapi_sidebar.config import DEFAULT_CONFIG_FILE, SidebarConfig, load_config, merge_overrides
from openapi_sidebar.errors import SidebarError
from openapi_sidebar.generator.emit import clean as clean_output
from openapi_sidebar.generator.emit import emit
from openapi_sidebar.generator.pages import render_pages
from openapi_sidebar.generator.sidebar import compile_sidebar
from openapi_sidebar.generator.validator import (
    collect_doc_ids,
    find_broken_sidebar_references,
    load_sidebar,
    report_broken_references,
)
from openapi_sidebar.parser.openapi import parse_openapi


def _resolve_config(config_path: Path | None, **overrides) -> SidebarConfig:
    if config_path is None and Path(DEFAULT_CONFIG_FILE).is_file():
        config_path = Path(DEFAULT_CONFIG_FILE)
    return merge_overrides(load_config(config_path), **overrides)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """openapi-sidebar — compile an OpenAPI document into docs sidebar and pages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("spec_path", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", "output_dir", default=None, type=click.Path(file_okay=False, path_type=Path), help="Output directory for generated docs.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML config file.")
@click.option("--id-prefix", default=None, help="Prefix for generated doc ids.")
@click.option("--base-url", default=None, help="Base URL path the site is served under.")
@click.option("--category-link-source", default=None, type=click.Choice(["tag", "none"]), help="Link categories to their tag page.")
@click.option("--locale", default=None, help="Site locale.")
def build(
    spec_path: Path | None,
    output_dir: Path | None,
    config_path: Path | None,
    id_prefix: str | None,
    base_url: str | None,
    category_link_source: str | None,
    locale: str | None,
):
    """Generate sidebar and pages from an OpenAPI document."""
    try:
        config = _resolve_config(
            config_path,
            spec_path=spec_path,
            output_dir=output_dir,
            id_prefix=id_prefix,
            base_url=base_url,
            category_link_source=category_link_source,
            locale=locale,
        )
        if config.spec_path is None:
            raise click.UsageError("No OpenAPI document given (argument or 'spec_path' in config).")

        click.echo(f"Parsing {config.spec_path}...")
        document = parse_openapi(config.spec_path)
        click.echo(f"Found {len(document.operations)} operations.")

        tree = compile_sidebar(document, id_prefix=config.id_prefix, overview_id=config.overview_id)
        pages = render_pages(tree, document, base_url=config.base_url, route_base_path=config.route_base_path)
        result = emit(tree, pages, config.output_dir, category_link_source=config.category_link_source)
    except SidebarError as e:
        raise click.ClickException(str(e)) from e

    for doc_id in result.broken:
        click.echo(f"  Warning: broken reference {doc_id}", err=True)
    click.echo(f"Done! {len(tree.categories)} categories, {len(pages)} pages in {config.output_dir}")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--id-prefix", default="api", help="Prefix for generated doc ids.")
@click.option("--category-link-source", default="tag", type=click.Choice(["tag", "none"]), help="Link categories to their tag page.")
def sidebar(spec_path: Path, id_prefix: str, category_link_source: str):
    """Print the navigation JSON for an OpenAPI document."""
    try:
        tree = compile_sidebar(parse_openapi(spec_path), id_prefix=id_prefix)
    except SidebarError as e:
        raise click.ClickException(str(e)) from e
    click.echo(tree.to_json(category_link_source), nl=False)


@main.command()
@click.argument("output_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--id-prefix", default="api", help="Prefix the docs renderer puts in front of ids in this directory.")
def check(output_dir: Path, id_prefix: str):
    """Check a generated directory for sidebar entries without a document."""
    try:
        items = load_sidebar(output_dir / "sidebar.json")
    except SidebarError as e:
        raise click.ClickException(str(e)) from e

    broken = find_broken_sidebar_references(items, collect_doc_ids(output_dir, id_prefix))
    report_broken_references(broken)
    for doc_id in broken:
        click.echo(f"  Broken reference: {doc_id}")
    click.echo(f"{len(broken)} broken references.")


@main.command()
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
def clean(output_dir: Path):
    """Remove generated files from a docs directory."""
    removed = clean_output(output_dir)
    for path in removed:
        click.echo(f"  Removed {path}")
    click.echo(f"Removed {len(removed)} files from {output_dir}")
