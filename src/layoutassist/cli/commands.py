"""
CLI commands for layoutassist.

Main entry point: `layoutassist complete layout.xml --offset 120`
"""

import json
import sys
from typing import Optional, Tuple

import click
from dotenv import load_dotenv

from layoutassist.cli import ui
from layoutassist.completion.provider import LayoutAttributeCompletionProvider
from layoutassist.config import Config
from layoutassist.dom.document import DOMDocument
from layoutassist.errors import InvalidRequestError, LayoutAssistError
from layoutassist.inflater.inflater import LayoutInflater
from layoutassist.lsp.protocol import CompletionParams, Position
from layoutassist.utils.logger import logger


def _build_config(
    widgets: Optional[str],
    platform_res: Optional[str],
    module_res: Tuple[str, ...],
    module_package: Optional[str],
    max_items: Optional[int],
    log_level: Optional[str],
) -> Config:
    """Environment config with command line overrides applied."""
    config = Config()
    if widgets:
        config.widgets_path = widgets
    if platform_res:
        config.platform_res = platform_res
    if module_res:
        config.module_res = list(module_res)
    if module_package:
        config.module_package = module_package
    if max_items is not None:
        config.max_items = max_items
    if log_level:
        config.log_level = log_level
        config.enable_logging = True
    return config


@click.group()
@click.option("--widgets", default=None, help="Path to the SDK widgets.txt")
@click.option("--platform-res", default=None, help="Framework resource table (JSON or attrs.xml)")
@click.option(
    "--module-res",
    multiple=True,
    help="App or library resource table (JSON or attrs.xml); repeatable",
)
@click.option("--module-package", default=None, help="Package owning module attrs.xml files")
@click.option("--max-items", default=None, type=int, help="Maximum completions to return (0 = all)")
@click.option("--log-level", default=None, help="Enable file logging at this level")
@click.pass_context
def main(
    ctx,
    widgets: Optional[str],
    platform_res: Optional[str],
    module_res: Tuple[str, ...],
    module_package: Optional[str],
    max_items: Optional[int],
    log_level: Optional[str],
):
    """
    layoutassist - Attribute completion for Android layout XML

    Usage:
        layoutassist complete res/layout/main.xml --line 12 --character 18
        layoutassist hierarchy res/layout/main.xml --res-dir res
        layoutassist serve                      # JSON-RPC over stdio
        layoutassist shell                      # type a layout with completion
    """
    load_dotenv()

    config = _build_config(widgets, platform_res, module_res, module_package, max_items, log_level)
    logger.configure(
        level=config.log_level,
        log_dir=config.log_dir,
        json_mode=config.json_logs,
        enable_logging=config.enable_logging,
    )
    ctx.obj = config


def _provider(config: Config) -> LayoutAttributeCompletionProvider:
    try:
        return LayoutAttributeCompletionProvider.from_config(config)
    except LayoutAssistError as e:
        ui.show_error(str(e))
        sys.exit(1)


@main.command()
@click.argument("layout", type=click.Path(exists=True, dir_okay=False))
@click.option("--offset", default=None, type=int, help="Character offset of the cursor")
@click.option("--line", default=None, type=int, help="0-indexed cursor line")
@click.option("--character", default=None, type=int, help="0-indexed cursor column")
@click.option("--json", "as_json", is_flag=True, help="Print the LSP completion list as JSON")
@click.pass_obj
def complete(
    config: Config,
    layout: str,
    offset: Optional[int],
    line: Optional[int],
    character: Optional[int],
    as_json: bool,
):
    """Complete the attribute name at a position in LAYOUT."""
    if offset is None and (line is None or character is None):
        raise click.UsageError("Give either --offset or both --line and --character")

    provider = _provider(config)
    document = DOMDocument.from_file(layout)
    position = Position(line=line, character=character) if offset is None else None

    try:
        result = provider.complete(CompletionParams(offset=offset, position=position), document)
    except InvalidRequestError as e:
        ui.show_error(str(e))
        sys.exit(2)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        ui.show_completions(result)


@main.command()
@click.argument("layout", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--res-dir",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="res directory used to resolve <include> layouts",
)
def hierarchy(layout: str, res_dir: Optional[str]):
    """Inflate LAYOUT and print its view hierarchy."""
    inflater = LayoutInflater.from_res_dir(res_dir) if res_dir else LayoutInflater()
    try:
        view = inflater.inflate(DOMDocument.from_file(layout))
    except LayoutAssistError as e:
        ui.show_error(str(e))
        sys.exit(1)
    ui.show_hierarchy(view.print_hierarchy())


@main.command()
@click.pass_obj
def serve(config: Config):
    """Serve completions as JSON-RPC over stdio."""
    from layoutassist.service import CompletionService

    try:
        service = CompletionService(config=config)
    except LayoutAssistError as e:
        click.echo(f"Failed to start: {e}", err=True)
        sys.exit(1)
    service.run()


@main.command()
@click.pass_obj
def shell(config: Config):
    """Type a layout with attribute completion, then show its hierarchy."""
    from prompt_toolkit import PromptSession

    from layoutassist.cli.attribute_completer import AttributeCompleter

    provider = _provider(config)
    session = PromptSession(
        completer=AttributeCompleter(provider),
        complete_while_typing=True,
        multiline=True,
    )
    ui.show_info("Type a layout; press Esc then Enter to finish.")

    try:
        text = session.prompt("layout> ")
    except (EOFError, KeyboardInterrupt):
        return

    if not text.strip():
        return
    ui.show_layout(text)
    try:
        view = LayoutInflater().inflate(DOMDocument.parse(text))
    except LayoutAssistError as e:
        ui.show_error(str(e))
        return
    ui.show_hierarchy(view.print_hierarchy())


if __name__ == "__main__":
    main()
