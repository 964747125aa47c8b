"""CLI entry point: all commands defined here."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from polaris_audit import __version__

app = typer.Typer(
    name="polaris",
    help="Accessibility audit and scoring for rendered document snapshots.",
    no_args_is_help=True,
)
console = Console()

_SEVERITY_STYLE = {
    "critical": "[red]X[/red]",
    "serious": "[red]![/red]",
    "moderate": "[yellow]![/yellow]",
    "minor": "[blue]i[/blue]",
}


def _or_na(value: int | None) -> str:
    return "n/a" if value is None else str(value)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"polaris {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Polaris: accessibility audit engine."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _run_audit(snapshot_path: Path, baseline: Optional[Path], config_path: Optional[Path],  # noqa: UP007
               mode: Optional[str]):  # type: ignore[no-untyped-def]  # noqa: UP007
    from polaris_audit.config import PolarisConfig
    from polaris_audit.engine import Auditor
    from polaris_audit.errors import InputError
    from polaris_audit.snapshot import DocumentSnapshot

    if not snapshot_path.is_file():
        console.print(f"[red]File not found:[/red] {snapshot_path}")
        raise typer.Exit(code=1)

    config = PolarisConfig.load(config_path)
    if mode is not None:
        if mode not in ("augment", "replace"):
            console.print(f"[red]Unknown mode:[/red] {mode} (use augment or replace)")
            raise typer.Exit(code=1)
        config.baseline.mode = mode  # type: ignore[assignment]

    baseline_data = None
    if baseline is not None:
        if not baseline.is_file():
            console.print(f"[red]Baseline file not found:[/red] {baseline}")
            raise typer.Exit(code=1)
        try:
            baseline_data = json.loads(baseline.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            console.print(f"[red]Baseline is not valid JSON:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    try:
        snapshot = DocumentSnapshot.load(snapshot_path)
        return config, Auditor(config).audit(snapshot, baseline_data)
    except InputError as exc:
        console.print(f"[red]Cannot audit snapshot:[/red] {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def check(
    snapshot: Path = typer.Argument(..., help="Path to the JSON document snapshot."),
    baseline: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--baseline", "-b", help="Pre-computed conformance-testing result (JSON).",
    ),
    mode: Optional[str] = typer.Option(  # noqa: UP007
        None, "--mode", help="How baseline defects combine: augment or replace.",
    ),
    config: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--config", "-c", help="Path to polaris.yaml.",
    ),
) -> None:
    """Audit a snapshot and print a summary."""
    _, result = _run_audit(snapshot, baseline, config, mode)

    analysis = result.detailed_analysis
    table = Table(title=f"Accessibility Audit: {snapshot.name}")
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    colour = "green" if result.score >= 90 else "yellow" if result.score >= 70 else "red"
    table.add_row("Score", f"[{colour}]{result.score}/100[/{colour}]")
    table.add_row("Conformance", result.conformance_level.value)
    table.add_row("Elements", str(result.summary.total_elements))
    images, headings = analysis.image_analysis, analysis.heading_structure
    forms, keyboard = analysis.form_analysis, analysis.keyboard_navigation
    table.add_row("Images", _or_na(images and images.total_images))
    table.add_row("Headings", _or_na(headings and len(headings.structure)))
    table.add_row("Forms", _or_na(forms and forms.total_forms))
    table.add_row("Focusable", _or_na(keyboard and keyboard.focusable_elements))
    if analysis.color_contrast is None:
        table.add_row("Contrast", "[yellow]n/a[/yellow]")
    else:
        failing = sum(1 for c in analysis.color_contrast if not c.passes_aa)
        table.add_row(
            "Contrast",
            "[green]OK[/green]" if not failing else f"[yellow]{failing} failing[/yellow]",
        )
    table.add_row("Defects", str(len(result.defects)))
    table.add_row("Incomplete", str(len(result.incomplete)))
    table.add_row("Sources", ", ".join(result.sources))

    console.print(table)

    if result.defects:
        console.print()
        for defect in result.defects:
            icon = _SEVERITY_STYLE.get(defect.severity.value, " ")
            where = ", ".join(defect.locators) or "page"
            console.print(f"  {icon} " + escape(f"[{defect.kind}] {defect.description} ({where})"))


@app.command()
def report(
    snapshot: Path = typer.Argument(..., help="Path to the JSON document snapshot."),
    output: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--output", "-o", help="Output path. Defaults to <name>_report.<ext>.",
    ),
    fmt: Optional[str] = typer.Option(  # noqa: UP007
        None, "--format", "-f", help="Report format: json or markdown.",
    ),
    baseline: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--baseline", "-b", help="Pre-computed conformance-testing result (JSON).",
    ),
    config: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--config", "-c", help="Path to polaris.yaml.",
    ),
) -> None:
    """Audit a snapshot and write a JSON or Markdown report."""
    from polaris_audit.reporter import write_json_report, write_markdown_report

    cfg, result = _run_audit(snapshot, baseline, config, None)
    report_format = (fmt or cfg.output.report_format).lower()
    if report_format not in ("json", "markdown"):
        console.print(f"[red]Unknown format:[/red] {report_format}")
        raise typer.Exit(code=1)

    suffix = ".json" if report_format == "json" else ".md"
    if output is None:
        output = snapshot.with_name(snapshot.stem + "_report" + suffix)

    if report_format == "json":
        write_json_report(result, output)
    else:
        write_markdown_report(result, output)

    console.print(
        f"[green]OK[/green] Score {result.score}/100 "
        f"(level {result.conformance_level.value}) -- report written to {output}"
    )


@app.command()
def contrast(
    foreground: str = typer.Argument(..., help="Text color, e.g. '#999999'."),
    background: str = typer.Argument(..., help="Background color, e.g. 'white'."),
    large: bool = typer.Option(False, "--large", help="Evaluate as large text (3:1 for AA)."),
) -> None:
    """Compute the WCAG contrast ratio between two colors."""
    from polaris_audit.errors import InvalidColorError
    from polaris_audit.inspectors.contrast import recommendation
    from polaris_audit.utils.contrast import contrast as compute_contrast

    try:
        res = compute_contrast(foreground, background, large_text=large)
    except InvalidColorError as exc:
        console.print(f"[red]Invalid color:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    def _verdict(ok: bool) -> str:
        return "[green]PASS[/green]" if ok else "[red]FAIL[/red]"

    console.print(f"Ratio: {res.ratio:.2f}:1")
    console.print(f"AA:  {_verdict(res.passes_aa)}")
    console.print(f"AAA: {_verdict(res.passes_aaa)}")
    console.print(f"[dim]{recommendation(res)}[/dim]")
