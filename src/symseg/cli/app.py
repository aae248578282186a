from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from symseg.features.alphabet import Alphabet
from symseg.features.entropy import entropy as shannon_entropy
from symseg.features.frequency import estimate_frequency
from symseg.ingest import load_sequence
from symseg.pipeline import PipelineConfig, SegmentationPipeline
from symseg.segmentation.splitter import divergence_at

console = Console()
app = typer.Typer(help="Recursive Jensen-Shannon segmentation of symbolic sequences")


def _resolve_sequence(sequence: Optional[str], file: Optional[Path]) -> str:
    if file is not None:
        return load_sequence(file)
    if sequence is None:
        raise typer.BadParameter("Provide a SEQUENCE argument or --file")
    return sequence


def _fail(exc: Exception) -> NoReturn:
    console.print(str(exc), style="red", markup=False)
    raise typer.Exit(code=1)


@app.command()
def entropy(
    sequence: Optional[str] = typer.Argument(None, help="Sequence text"),
    alphabet: str = typer.Option(..., "--alphabet", "-a", help="Alphabet symbols, e.g. ACGT"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, readable=True),
) -> None:
    """Shannon entropy of the whole sequence."""
    text = _resolve_sequence(sequence, file)
    try:
        value = shannon_entropy(estimate_frequency(Alphabet.from_symbols(alphabet), text))
    except ValueError as exc:
        _fail(exc)
    console.print(f"The entropy of the sequence: {value}")


@app.command()
def divergence(
    sequence: Optional[str] = typer.Argument(None, help="Sequence text"),
    position: int = typer.Option(..., "--position", "-p", help="Cut position"),
    alphabet: str = typer.Option(..., "--alphabet", "-a"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, readable=True),
) -> None:
    """Jensen-Shannon divergence of the two halves around a cut."""
    text = _resolve_sequence(sequence, file)
    try:
        value = divergence_at(text, Alphabet.from_symbols(alphabet), position)
    except ValueError as exc:
        _fail(exc)
    console.print(f"The Jensen-Shannon divergence of the subsequences: {value}")


@app.command()
def split(
    sequence: Optional[str] = typer.Argument(None, help="Sequence text"),
    alphabet: Optional[str] = typer.Option(None, "--alphabet", "-a"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, readable=True),
    config: Optional[Path] = typer.Option(
        None, exists=True, readable=True, help="Segmenter config yaml"
    ),
    out_dir: Optional[Path] = typer.Option(None, "--out", "-o", help="Output directory"),
    threshold: Optional[float] = typer.Option(None, min=0.0, max=1.0),
    min_length: Optional[int] = typer.Option(None, "--min-length", min=1),
) -> None:
    """Split the sequence at statistically significant divergence maxima."""
    text = _resolve_sequence(sequence, file)
    try:
        pipeline = SegmentationPipeline(
            config=PipelineConfig(
                alphabet=alphabet,
                config_path=config,
                significance_threshold=threshold,
                min_segment_length=min_length,
            )
        )
        result = pipeline.run(text, output_dir=out_dir)
    except ValueError as exc:
        _fail(exc)

    if len(result.segments) > 1:
        console.print("The split subsequences:", style="cyan")
        for subsequence in result.subsequences:
            console.print(subsequence, markup=False, highlight=False)
    else:
        console.print(
            "The sequence cannot be split because of the significance threshold.",
            style="yellow",
        )
    if result.subsequences_path:
        console.print(f"Subsequences written to {result.subsequences_path}")
    if result.manifest_path:
        console.print(f"Manifest written to {result.manifest_path}")


def run() -> None:
    app()
