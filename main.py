#!/usr/bin/env python3
"""
Editor AI Brain - Main Entry Point
Turns a wrap-shop video into a platform-ready Creatomate render job.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from dotenv import load_dotenv

# Load local env for API keys
load_dotenv(dotenv_path=Path(__file__).parent / ".env.local")

from editor_brain.creative_assembly.creative_assembler import generate_variants
from editor_brain.creative_assembly.creative_models import EditorMode, Platform
from editor_brain.pipeline import EditorBrainPipeline, PipelineResult
from editor_brain.render_translation.render_translator import export_creative_as_json
from editor_brain.utils.config import Config
from editor_brain.utils.logger import setup_logging
from editor_brain.utils.seed import make_rng

# Ensure UTF-8 console output on Windows to avoid emoji/encoding errors
try:
    sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    sys.stderr.reconfigure(encoding='utf-8', errors='replace')
except AttributeError:
    pass

console = Console()


def load_config(config_path: Optional[str]) -> Config:
    """Load the YAML config, or defaults when the default path is missing"""
    if config_path and Path(config_path).exists():
        return Config.load(config_path)
    if config_path and config_path != "configs/config.yaml":
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    console.print("[yellow]⚠[/yellow] No config file found, using defaults")
    return Config()


def print_result(result: PipelineResult):
    """Render a short summary of a pipeline run"""
    analysis = result.analysis
    creative = result.creative

    table = Table(title="🎬 Editor AI Brain", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Summary", analysis.summary or "-")
    table.add_row("Scenes", str(len(analysis.scenes)))
    table.add_row("Vehicle", analysis.detected_vehicle or "-")
    table.add_row("Wrap", analysis.wrap_color or "-")
    table.add_row("Energy", str(analysis.energy_level or "-"))
    table.add_row("Rating", f"{analysis.content_rating}/100" if analysis.content_rating is not None else "-")
    table.add_row("Format", creative.format)
    table.add_row("Hook", creative.hook)
    table.add_row("CTA", creative.cta)
    table.add_row("Hashtags", " ".join(creative.hashtags))
    table.add_row("Style", creative.template_style)
    table.add_row("Music", creative.music_suggestion or "-")
    console.print(table)

    for job, validation in zip(result.render_jobs, result.validation):
        status = "[green]✓[/green]" if validation.valid else "[red]✗[/red]"
        size = f"{job.timeline.width}x{job.timeline.height}"
        console.print(f"{status} {job.platform} {size} ({job.status})")
        for error in validation.errors:
            console.print(f"   [red]→[/red] {error}")

    for suggestion in analysis.suggestions:
        console.print(f"[cyan]💡[/cyan] {suggestion}")


async def run(args) -> int:
    config = load_config(args.config)
    setup_logging(config)

    transcript = None
    if args.transcript:
        transcript = Path(args.transcript).read_text(encoding='utf-8')

    rng = make_rng(args.seed) if args.seed is not None else None
    pipeline = EditorBrainPipeline(config)

    with console.status("[blue]Analyzing video...[/blue]"):
        result = await pipeline.run(
            args.url,
            transcript=transcript,
            duration=args.duration,
            mode=args.mode,
            platform=args.platform,
            target_duration=args.target_duration,
            platforms=args.targets,
            rng=rng,
        )

    print_result(result)

    if args.variants:
        options = pipeline.assembler_options(
            result.analysis, mode=args.mode, platform=args.platform, target_duration=args.target_duration,
        )
        for i, variant in enumerate(generate_variants(options, args.variants, rng=rng), start=1):
            console.print(f"\n[bold]Variant {i}[/bold] ({variant.template_style}, {variant.duration_target}s)")
            console.print(export_creative_as_json(variant))

    if args.output:
        result.save_to_file(args.output)
        console.print(f"[green]✓[/green] Result saved to {args.output}")

    return 0 if result.valid else 2


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Editor AI Brain - video to render job")
    parser.add_argument("--url", required=True, help="Playable URL of the source video")
    parser.add_argument("--transcript", type=str, help="Path to an existing transcript text file")
    parser.add_argument("--duration", type=float, help="Source duration in seconds")
    parser.add_argument("--mode", choices=[m.value for m in EditorMode], help="Editor mode")
    parser.add_argument("--platform", choices=[p.value for p in Platform], help="Primary platform")
    parser.add_argument("--targets", nargs="+", choices=[p.value for p in Platform],
                        help="Platforms to create render jobs for")
    parser.add_argument("--target-duration", type=float, help="Target cut length in seconds")
    parser.add_argument("--seed", type=str, help="Seed for repeatable copy selection")
    parser.add_argument("--variants", type=int, default=0, help="Also print N A/B variants")
    parser.add_argument("--config", type=str, default="configs/config.yaml",
                        help="Path to configuration file")
    parser.add_argument("--output", type=str, help="Write the full result to this JSON file")

    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        console.print("\n[yellow]⏹️[/yellow] Stopped by user")
    except Exception as e:
        console.print(f"[red]💥[/red] Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
