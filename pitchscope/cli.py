"""Command-line interface for PitchScope.

Provides commands for:
- analyze: Run the analysis pipeline over every frame of an audio file
- note: Map a frequency to a note
- chord: Name the chord formed by a set of notes
- key: Detect the key of a weighted note histogram
- tune: Guitar tuner reading for a frequency
"""

import json
from collections import Counter
from dataclasses import asdict
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core import AnalysisConfig
from .core.logging_config import setup_logging

app = typer.Typer(
    name="pitchscope",
    help="Pitch, key and chord analysis of audio spectra",
    rich_markup_mode="markdown",
)
console = Console()


def _build_config(sensitivity: str) -> AnalysisConfig:
    try:
        return AnalysisConfig().with_sensitivity(sensitivity)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, MP3, ...)"),
    fft_size: int = typer.Option(
        4096, "--fft-size", help="FFT size (bins = fft_size / 2)"
    ),
    hop_length: int = typer.Option(
        2048, "--hop-length", help="Samples between analysis frames"
    ),
    sensitivity: str = typer.Option(
        "medium", "--sensitivity", "-s", help="Peak sensitivity: low/medium/high"
    ),
    max_rows: int = typer.Option(
        20, "--max-rows", help="Frames shown in the table (0 = all)"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose (debug) logging"
    ),
):
    """Analyze an audio file frame by frame: notes, key and summary chord.

    **Examples:**

        pitchscope analyze chord.wav

        pitchscope analyze song.flac --fft-size 8192 -s high --json
    """
    from .analysis import SpectrumFrames
    from .inference import ChordDetector
    from .pipeline import AnalysisSession

    setup_logging("DEBUG" if verbose else "WARNING")
    config = _build_config(sensitivity)

    try:
        frames = SpectrumFrames(fft_size=fft_size, hop_length=hop_length)
        sr, spectra = frames.iter_file(input_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    session = AnalysisSession(config)
    note_counts: Counter = Counter()
    rows = []
    instrument_ticks = 0

    for time, spectrum in spectra:
        result = session.process(spectrum, sr, fft_size)
        if result.is_instrument:
            instrument_ticks += 1
        for note in result.notes:
            note_counts[note.full_name] += 1
        if result.notes:
            rows.append((time, result))

    top_notes = [name for name, _ in note_counts.most_common(4)]
    chord = ChordDetector(config).detect(top_notes)
    key = session.last_key

    if json_output:
        output = {
            "file": str(input_file),
            "sample_rate": sr,
            "frames": session.ticks,
            "key": asdict(key) if key else None,
            "chord": asdict(chord),
            "note_counts": dict(note_counts),
            "instrument_frames": instrument_ticks,
            "timeline": [
                {"time": t, **r.to_dict()} for t, r in rows
            ],
        }
        print(json.dumps(output, indent=2))
        return

    console.print(f"[blue]Analyzed:[/blue] {input_file} ({session.ticks} frames at {sr} Hz)")

    table = Table(title="Detected Notes")
    table.add_column("Time", justify="right", style="cyan")
    table.add_column("Notes", style="green")
    table.add_column("Strongest", justify="right")
    table.add_column("Key")

    shown = rows if max_rows <= 0 else rows[:max_rows]
    for t, result in shown:
        strongest = result.frequencies[0].frequency if result.frequencies else 0.0
        table.add_row(
            f"{t:.2f}s",
            " ".join(n.full_name for n in result.notes),
            f"{strongest:.1f} Hz",
            result.key.name if result.key else "-",
        )
    console.print(table)
    if len(rows) > len(shown):
        console.print(f"  ... {len(rows) - len(shown)} more frames with notes")

    console.print("\n[bold]Summary:[/bold]")
    if key:
        console.print(f"  Key: [green]{key.name}[/green] (confidence {key.confidence:.2f})")
    else:
        console.print("  Key: [yellow]not enough notes[/yellow]")
    console.print(f"  Most frequent notes: {', '.join(top_notes) or '-'}")
    console.print(f"  Chord: {chord.name} (confidence {chord.confidence:.2f})")
    if session.ticks:
        console.print(f"  Instrument-like frames: {instrument_ticks}/{session.ticks}")


@app.command()
def note(
    frequency: float = typer.Argument(..., help="Frequency in Hz"),
):
    """Map a frequency to the nearest note."""
    from .inference import frequency_to_note

    result = frequency_to_note(frequency)
    if result is None:
        console.print(f"[yellow]No note within 50 cents of {frequency:.2f} Hz[/yellow]")
        raise typer.Exit(1)

    console.print(
        f"[green]{result.full_name}[/green] "
        f"({result.exact_frequency:.2f} Hz, {result.cents_deviation:+d} cents, "
        f"confidence {result.confidence:.2f})"
    )


@app.command()
def chord(
    notes: List[str] = typer.Argument(..., help="Notes as MIDI numbers or names (C4, F#3)"),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON"
    ),
):
    """Name the chord formed by a set of notes.

    **Examples:**

        pitchscope chord C4 E4 G4

        pitchscope chord 64 67 72
    """
    from .inference import detect_chord

    parsed = [int(n) if n.lstrip("-").isdigit() else n for n in notes]
    result = detect_chord(parsed)

    if json_output:
        print(json.dumps(asdict(result), indent=2))
        return

    if not result.is_chord:
        console.print(f"[yellow]No chord identified[/yellow]: {' '.join(result.notes)}")
        return

    console.print(f"[green]{result.name}[/green]")
    console.print(f"  Root: {result.root}  Type: {result.type}  Inversion: {result.inversion}")
    console.print(f"  Notes: {' '.join(result.notes)}  Confidence: {result.confidence:.2f}")


@app.command()
def key(
    notes: List[str] = typer.Argument(..., help="Pitch classes with optional weights (C=5 E=3 G)"),
):
    """Detect the key of a weighted set of pitch classes."""
    from .inference import KeyDetector

    histogram = {}
    for item in notes:
        name, _, weight = item.partition("=")
        try:
            histogram[name] = histogram.get(name, 0.0) + (float(weight) if weight else 1.0)
        except ValueError:
            console.print(f"[red]Error: Invalid weight in '{item}'[/red]")
            raise typer.Exit(1)

    result = KeyDetector().analyze_histogram(histogram)
    if result is None:
        console.print("[yellow]No key detected (need at least 3 distinct notes)[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]{result.name}[/green] (confidence {result.confidence:.2f})")
    console.print(f"  Scale: {' '.join(result.notes)}")


@app.command()
def tune(
    frequency: float = typer.Argument(..., help="Frequency in Hz"),
):
    """Compare a frequency with the open strings of a guitar."""
    from .inference import analyze_guitar_string

    reading = analyze_guitar_string(frequency)
    if reading is None:
        console.print(f"[yellow]{frequency:.2f} Hz is not near any guitar string[/yellow]")
        raise typer.Exit(1)

    status = "[green]in tune[/green]" if reading.in_tune else f"[yellow]{reading.tuning_direction}[/yellow]"
    console.print(
        f"{reading.string_name}: {reading.actual_frequency:.2f} Hz "
        f"(target {reading.target_frequency:.2f} Hz, {reading.cents_deviation:+d} cents) {status}"
    )


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
