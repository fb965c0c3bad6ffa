# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to extract one item, list a category and build the record file

import json
from pathlib import Path

import asyncclick as click
from rich.console import Console

from lorekeeper.config import get_config
from lorekeeper.core.service import ItemCatalogService
from lorekeeper.extraction import BaldurItemExtractor
from lorekeeper.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_page_context,
    with_pipeline_context,
)
from lorekeeper.utils.rich_tables import (
    create_item_table,
    create_logging_status_table,
    create_members_table,
    print_rich_table,
)
from lorekeeper.wiki import WikiClient

console = Console()


@click.command()
@click.argument("page_name")
@click.pass_context
async def item(ctx, page_name: str):
    """
    🗡️ Extract the item record of one wiki page.
    """
    json_output = ctx.obj["json_output"]
    with with_page_context(page_name) as logger:
        async with WikiClient(base_url=ctx.obj["base_url"]) as client:
            record = await BaldurItemExtractor(client).record(page_name)

        logger.info("Item extracted", title=record.title, type=record.type)

        if json_output:
            click.echo(json.dumps(record.to_index_dict(), ensure_ascii=False, indent=2))
        else:
            print_rich_table(console, create_item_table(record))


@click.command()
@click.argument("category")
@click.pass_context
async def members(ctx, category: str):
    """
    📚 List the content pages of a wiki category.
    """
    async with WikiClient(base_url=ctx.obj["base_url"]) as client:
        pages = await client.category_members(category)

    if ctx.obj["json_output"]:
        click.echo(json.dumps([page.model_dump() for page in pages], ensure_ascii=False, indent=2))
    else:
        print_rich_table(console, create_members_table(category, pages))


@click.command()
@click.argument("category")
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Record file to write")
@click.option("--concurrency", "-c", type=int, default=None, help="Pages extracted at the same time")
@click.pass_context
async def build(ctx, category: str, output: Path, concurrency: int | None):
    """
    🏗️ Build the search record file for every item of a category.
    """
    with with_pipeline_context("catalog_build", category=category) as logger:
        async with WikiClient(base_url=ctx.obj["base_url"]) as client:
            service = ItemCatalogService(BaldurItemExtractor(client), concurrency=concurrency)
            if ctx.obj["json_output"]:
                records = await service.build(category)
            else:
                with console.status(f"🪄 Extracting items of {category}..."):
                    records = await service.build(category)
            service.write(records, output)

        logger.info("Catalog written", output=str(output), record_count=len(records))
        if not ctx.obj["json_output"]:
            console.print(f"✅ Wrote [bold green]{len(records)}[/bold green] records to [blue]{output}[/blue]")


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else config.log_mode

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.option("--base-url", default=None, help="Wiki base URL (defaults to LOREKEEPER_BASE_URL)")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None, base_url: str | None):
    """
    📖 Lorekeeper - searchable item records from game wikis

    Reads item pages from a MediaWiki/Fandom wiki, caches the responses
    locally and extracts price, type, description and pictures.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json
    ctx.obj["base_url"] = base_url

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(item)
app.add_command(members)
app.add_command(build)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
