from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable

import typer
from rich.console import Console
from rich.table import Table

from ..adapters import get_codec
from ..config import AppConfig, dump_config, load_config
from ..export import export_all, export_zip
from ..logging import setup_logger
from ..session import ConverterSession
from ..utils import format_byte_size, iter_files

console = Console()

app = typer.Typer(help="Convert HEIC images to JPEG")


def _load_config(path: Path | None) -> AppConfig:
    config = load_config(path)
    setup_logger(config.runtime.log_level)
    return config


def _file_table(title: str, rows: Iterable[tuple[str, int]]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    for index, (name, size) in enumerate(rows):
        table.add_row(str(index), name, format_byte_size(size))
    return table


@app.command()
def convert(
    path: list[Path],
    out: Path | None = typer.Option(None, "--out", help="Directory for converted files"),
    zip_path: Path | None = typer.Option(None, "--zip", help="Also write every output into this archive"),
    codec: str | None = typer.Option(None, "--codec", help="Registered codec name"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    try:
        selected_codec = get_codec(codec or cfg.conversion.codec)
    except KeyError as exc:
        console.print(f"[red]Unknown codec[/red]: {exc}")
        raise typer.Exit(2) from exc
    session = ConverterSession(cfg, codec=selected_codec)
    session.select_files(iter_files(path))
    if not session.files:
        console.print(f"No {cfg.conversion.source_suffix} files found.")
        raise typer.Exit()

    console.print(_file_table(f"Selected Files ({len(session.files)})", ((f.name, f.byte_size) for f in session.files)))
    with console.status("Converting..."):
        result = asyncio.run(session.convert())
    if result is not None:
        summary = result.summary
        console.print(
            f"Processed {summary.total} files: {summary.successes} succeeded, {summary.failures} failed "
            f"({format_byte_size(summary.output_bytes)} written)."
        )

    try:
        if session.outputs:
            console.print(_file_table("Converted Files", ((a.name, a.byte_size) for a in session.outputs)))
            destination = out or cfg.runtime.output_dir
            written = export_all(session.outputs, destination)
            console.print(f"Wrote {len(written)} file(s) to {destination}")
            if zip_path is not None:
                console.print(f"Output archive: {export_zip(session.outputs, zip_path)}")
    finally:
        session.close()

    if session.error:
        console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(1)


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    console.print_json(dump_config(load_config(config)))


@app.command()
def size(size_bytes: int = typer.Argument(..., min=0)) -> None:
    console.print(format_byte_size(size_bytes))


if __name__ == "__main__":
    app()
