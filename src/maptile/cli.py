"""Command-line interface for maptile."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

from tqdm import tqdm

from .config import TileConfig
from .loader import load_features
from .render import render_tile
from .render_constants import DEFAULT_TILE_HEIGHT, DEFAULT_TILE_WIDTH


__all__ = ["cli", "main"]

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="maptile",
        description="Render map features from a GeoJSON file onto a single tile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  maptile features.geojson
  maptile features.geojson -o tile.png -W 1024 -H 1024
  maptile --batch tiles.txt --workers 8
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        type=str,
        help="GeoJSON file with the tile's features",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output image path (default: tiles/<input>_<timestamp>.png)",
    )
    parser.add_argument(
        "--width",
        "-W",
        type=int,
        default=DEFAULT_TILE_WIDTH,
        help=f"Tile width in pixels (default: {DEFAULT_TILE_WIDTH})",
    )
    parser.add_argument(
        "--height",
        "-H",
        type=int,
        default=DEFAULT_TILE_HEIGHT,
        help=f"Tile height in pixels (default: {DEFAULT_TILE_HEIGHT})",
    )
    parser.add_argument(
        "--batch",
        type=str,
        metavar="FILE",
        help="Render one tile per GeoJSON path listed in FILE (one path per line)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Number of parallel workers for batch processing (default: 4)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="store_true",
        help="Show version and exit",
    )

    return parser


def _parse_batch_file(batch_file: str) -> list[Path]:
    """Parse a batch file containing one GeoJSON path per line.

    Args:
        batch_file: Path to the batch file.

    Returns:
        List of input paths, relative entries resolved against the batch file.
    """
    inputs: list[Path] = []
    path = Path(batch_file).expanduser()

    with path.open("r", encoding="utf-8") as f:
        for raw_line in f:
            stripped = raw_line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            entry = Path(stripped).expanduser()
            if not entry.is_absolute():
                entry = path.parent / entry
            inputs.append(entry)

    return inputs


def _render_file(
    input_path: Path,
    output_path: Path | None,
    config: TileConfig,
    show_progress: bool = False,
) -> Path:
    """Render one GeoJSON file to an image and return the written path."""
    features = load_features(input_path)
    logger.info("Loaded %d features from %s", len(features), input_path)

    progress = tqdm(
        features,
        desc="Tessellating",
        unit="feature",
        disable=not show_progress,
    )
    image = render_tile(progress, config.width, config.height)

    if output_path is None:
        output_path = config.get_output_path(input_path.stem)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format=config.output_format.upper())
    logger.info("Tile saved as %s", output_path)
    return output_path


def _render_single(input_path: Path, config: TileConfig) -> tuple[str, bool, str]:
    """Render one batch entry.

    Returns:
        Tuple of (input_name, success, error_message).
    """
    try:
        _render_file(input_path, None, config)
        return (input_path.name, True, "")
    except Exception as e:
        return (input_path.name, False, str(e))


def _process_batch(parsed: argparse.Namespace, config: TileConfig) -> int:
    """Render every tile listed in the batch file.

    Every worker runs its own pipeline; no tile state is shared.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from concurrent.futures import ThreadPoolExecutor, as_completed

    path = Path(parsed.batch).expanduser()
    if not path.is_file():
        print(f"Error: Batch file '{parsed.batch}' not found.")
        return 1

    inputs = _parse_batch_file(parsed.batch)
    if not inputs:
        print("Error: No input files found in batch file.")
        return 1

    print("=" * 50)
    print("Batch Tile Renderer")
    print("=" * 50)
    print(f"Tiles: {len(inputs)}")
    print(f"Size: {config.width}x{config.height}")
    print(f"Workers: {parsed.workers}")
    print("=" * 50)

    success_count = 0
    failure_count = 0
    futures_to_input: dict[Any, Path] = {}

    with ThreadPoolExecutor(max_workers=parsed.workers) as executor:
        for input_path in inputs:
            future = executor.submit(_render_single, input_path, config)
            futures_to_input[future] = input_path

        for future in as_completed(futures_to_input):
            name, success, error = future.result()
            if success:
                print(f"  ✓ {name}")
                success_count += 1
            else:
                print(f"  ✗ {name}: {error}")
                failure_count += 1

    print("\n" + "=" * 50)
    print(f"Batch complete: {success_count} succeeded, {failure_count} failed")
    print("=" * 50)

    return 0 if failure_count == 0 else 1


def cli(args: list[str] | None = None) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if parsed.version:
        from . import __version__

        print(f"maptile {__version__}")
        return 0

    try:
        config = TileConfig(width=parsed.width, height=parsed.height)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if parsed.batch:
        return _process_batch(parsed, config)

    if not parsed.input:
        print("Error: an input GeoJSON file or --batch is required.\n")
        parser.print_help()
        return 1

    input_path = Path(parsed.input).expanduser()
    if not input_path.is_file():
        print(f"Error: Input file '{parsed.input}' not found.")
        return 1

    output_path = Path(parsed.output).expanduser() if parsed.output else None

    try:
        written = _render_file(
            input_path,
            output_path,
            config,
            show_progress=sys.stderr.isatty(),
        )
    except Exception as e:
        print(f"\n✗ Error: {e}")
        logger.debug("Render failed", exc_info=True)
        return 1

    print(f"✓ Tile written to {written}")
    return 0


def main() -> NoReturn:
    """Main entry point."""
    sys.exit(cli())


if __name__ == "__main__":
    main()
