from __future__ import annotations

import logging
from pathlib import Path

import msgspec
import typer

from .catalog.registry import CATALOG_ENV, Catalog, CatalogError, load_catalog
from .config import ReportOptions
from .hunter import HUNTER_FILTERS
from .pipeline import DecodeResult, SaveSession
from .report import format_hunter, format_report, summarize
from .save import codec
from .save.codec import SaveError
from .save.document import parse_document

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


@app.callback()
def _main(verbose: bool = typer.Option(False, "--verbose", "-v", help="enable debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _check_save_path(path: Path, *, any_extension: bool) -> None:
    if not path.is_file():
        typer.echo(f"save file not found: {path}", err=True)
        raise typer.Exit(code=1)
    if not any_extension and path.suffix.lower() != codec.SAVE_SUFFIX:
        typer.echo(f"expected a {codec.SAVE_SUFFIX} save file, got {path.name}", err=True)
        raise typer.Exit(code=1)


def _load_catalog(directory: Path | None) -> Catalog:
    try:
        return load_catalog(directory)
    except CatalogError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _analyze(save: Path, catalog_dir: Path | None, any_extension: bool) -> DecodeResult:
    _check_save_path(save, any_extension=any_extension)
    logger.debug("analyzing %s", save)
    result = SaveSession(_load_catalog(catalog_dir)).load_path(save)
    if not result.ok:
        typer.echo(f"failed to process {save.name}: {result.error}", err=True)
        raise typer.Exit(code=1)
    return result


def _options(**kwargs) -> ReportOptions:
    try:
        return ReportOptions(**kwargs)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("report")
def cmd_report(
    save: Path = typer.Argument(..., help="save file (user1.dat .. user4.dat)"),
    act: int = typer.Option(0, "--act", min=0, max=3, help="only count entries from this act (0 = all)"),
    hide_found: bool = typer.Option(False, "--hide-found", help="list only entries not yet obtained"),
    json_out: bool = typer.Option(False, "--json", help="print the report as JSON"),
    catalog_dir: Path | None = typer.Option(None, "--catalog", envvar=CATALOG_ENV, help="catalog directory"),
    any_extension: bool = typer.Option(False, "--any-extension", help="accept files without the .dat suffix"),
) -> None:
    """Print collection progress for a save file."""
    options = _options(act=act, hide_found=hide_found, catalog_dir=catalog_dir)
    result = _analyze(save, options.catalog_dir, any_extension)
    summary = summarize(result, options)
    if json_out:
        typer.echo(msgspec.json.encode(summary).decode("utf-8"))
        return
    for line in format_report(summary):
        typer.echo(line)


@app.command("hunter")
def cmd_hunter(
    save: Path = typer.Argument(..., help="save file"),
    filter_mode: str = typer.Option("all", "--filter", help=f"one of: {', '.join(HUNTER_FILTERS)}"),
    catalog_dir: Path | None = typer.Option(None, "--catalog", envvar=CATALOG_ENV, help="catalog directory"),
    any_extension: bool = typer.Option(False, "--any-extension", help="accept files without the .dat suffix"),
) -> None:
    """Print Hunter's Journal kill counts."""
    options = _options(hunter_filter=filter_mode, catalog_dir=catalog_dir)
    result = _analyze(save, options.catalog_dir, any_extension)
    for line in format_hunter(summarize(result, options)):
        typer.echo(line)


@app.command("decode")
def cmd_decode(
    save: Path = typer.Argument(..., help="save file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="write JSON here instead of stdout"),
    any_extension: bool = typer.Option(False, "--any-extension", help="accept files without the .dat suffix"),
) -> None:
    """Decrypt a save file to indented JSON."""
    _check_save_path(save, any_extension=any_extension)
    try:
        text = codec.read_save(save)
        parse_document(text)
    except SaveError as exc:
        typer.echo(f"failed to decode {save.name}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    pretty = msgspec.json.format(text, indent=2)
    if output is None:
        typer.echo(pretty)
        return
    output.write_text(pretty, encoding="utf-8")
    typer.echo(f"wrote {output}")


@app.command("encode")
def cmd_encode(
    source: Path = typer.Argument(..., help="decoded save JSON"),
    output: Path = typer.Option(..., "--output", "-o", help="save file to write"),
) -> None:
    """Encrypt save JSON back into the game's save container."""
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"cannot read {source}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    try:
        parse_document(text)
    except SaveError as exc:
        typer.echo(f"{source.name} is not a save document: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    # The game reads compact JSON.
    codec.write_save(output, msgspec.json.format(text, indent=0))
    typer.echo(f"wrote {output}")


def main(argv: list[str] | None = None) -> None:
    app(prog_name="silkstat", args=argv)


if __name__ == "__main__":
    main()
