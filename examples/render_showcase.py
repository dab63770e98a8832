#!/usr/bin/env python3
"""Render the showcase scene.

Builds the showcase scene (chrome, glass, textured and checkerboard spheres
over a reflective floor), traces it once and writes an sRGB PNG.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 640)
    --height HEIGHT     Image height in pixels (default: 480)
    --output OUTPUT     Output file path (default: showcase.png)
    --assets DIR        Directory holding metal.png, static.jpg and fire.jpg;
                        without it every textured surface uses the
                        checkerboard
    --max-depth DEPTH   Bounce limit (default: 35)
    --white-balance     Normalize an over-exposed frame before writing
    --quiet             Suppress progress output

Example:
    python -m examples.render_showcase --width 320 --height 240 --assets assets
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Image width in pixels (default: 640)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=480,
        help="Image height in pixels (default: 480)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.png",
        help="Output file path (default: showcase.png)",
    )
    parser.add_argument(
        "--assets",
        type=str,
        default=None,
        help="Texture directory (default: checkerboard everywhere)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=35,
        help="Bounce limit (default: 35)",
    )
    parser.add_argument(
        "--white-balance",
        action="store_true",
        help="Normalize an over-exposed frame before writing",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_showcase(
    width: int = 640,
    height: int = 480,
    output_path: str = "showcase.png",
    asset_dir: str | None = None,
    max_depth: int = 35,
    balance: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the showcase scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PNG).
        asset_dir: Optional texture directory.
        max_depth: Bounce limit.
        balance: Apply the white-balance post-pass.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from shadegraph.core.tracer import RenderSettings, render_frame
    from shadegraph.preview.export import save_png
    from shadegraph.scene.showcase import create_showcase_scene, load_showcase_textures

    textures = load_showcase_textures(asset_dir) if asset_dir else None

    if not quiet:
        print(f"Creating showcase scene ({width}x{height})...")
    scene = create_showcase_scene(width, height, textures)

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    frame = render_frame(scene, RenderSettings(max_depth=max_depth), callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(frame, output_file, balance=balance)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_showcase(
            width=args.width,
            height=args.height,
            output_path=args.output,
            asset_dir=args.assets,
            max_depth=args.max_depth,
            balance=args.white_balance,
            quiet=args.quiet,
        )
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
