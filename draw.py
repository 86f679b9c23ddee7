import re
import sys
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

import numpy as np
import PIL.Image

from termfractal import (
    UnknownFractalError,
    ViewportConfig,
    ViewportError,
    iter_escape_rows,
    lookup,
    names,
    rasterize_rows,
    viewport_to_grid_range,
)

VERBOSE = False


def log(message, *args, **kwargs):
    if VERBOSE:
        kwargs.setdefault("file", sys.stderr)
        print(message, *args, **kwargs)


@dataclass
class OutputConfig:
    image_path: Path | None
    image_format: str
    inside_rgb: tuple[int, int, int]
    outside_rgb: tuple[int, int, int]


def build_parser():
    parser = ArgumentParser(description="Render escape-time fractals as ANSI art in the terminal.")

    parser.add_argument('--fractal', type=str,
                        dest='fractal', help='name of the formula to render (see --list-fractals)',
                        metavar='FRACTAL', default='mandelbrot')

    parser.add_argument('--real-start', type=float,
                        dest='real_start', help='lowest real part of the viewport',
                        metavar='REAL_START', default=0.0)

    parser.add_argument('--real-end', type=float,
                        dest='real_end', help='highest real part of the viewport',
                        metavar='REAL_END', default=0.0)

    parser.add_argument('--complex-start', type=float,
                        dest='complex_start', help='lowest imaginary part of the viewport',
                        metavar='COMPLEX_START', default=0.0)

    parser.add_argument('--complex-end', type=float,
                        dest='complex_end', help='highest imaginary part of the viewport',
                        metavar='COMPLEX_END', default=0.0)

    parser.add_argument('--resolution', type=int,
                        dest='resolution', help='samples per unit length along each axis',
                        metavar='RESOLUTION', default=1)

    parser.add_argument('--supersample', action='store_true',
                        help='Encode two vertically stacked samples per character with half-block glyphs.')

    parser.add_argument('--debug', action='store_true',
                        help='Highlight empty cells (or every half-block cell with --supersample).')

    parser.add_argument('--image', dest='image', type=str,
                        help='Also write the escape mask to this image file.')

    parser.add_argument('--format', type=str,
                        dest='format', help='Pillow format for --image. Defaults to the file extension, else "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('--inside-color', type=str, default='#0000aa',
                        help='Hex color for bounded samples in --image output.')
    parser.add_argument('--outside-color', type=str, default='#000000',
                        help='Hex color for escaping samples in --image output.')

    parser.add_argument('--list-fractals', action='store_true',
                        help='Print the available fractal names and exit.')
    parser.add_argument('--no-timing', dest='timing', action='store_false',
                        help='Do not print the elapsed render time after the frame.')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print diagnostic messages to stderr.')

    return parser


_HEX_COLOR = re.compile(r'#?([0-9a-fA-F]{6})')


def _hex_rgb(hex_color):
    match = _HEX_COLOR.fullmatch(hex_color)
    if match is None:
        raise ValueError('colors must be in the form #RRGGBB.')
    digits = match.group(1)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    colors = {}
    for flag, value in (("--inside-color", opt.inside_color), ("--outside-color", opt.outside_color)):
        try:
            colors[flag] = _hex_rgb(value)
        except ValueError as exc:
            parser.error(f"{flag} '{value}': {exc}")

    image_path: Path | None = None
    image_format = (opt.format or "").lower().lstrip(".")
    if opt.image:
        image_path = Path(opt.image).expanduser()
        if image_path.exists() and image_path.is_dir():
            parser.error("--image must point to a file, not a directory.")
        if not image_format:
            image_format = image_path.suffix.lower().lstrip(".") or "png"
        if not image_path.suffix:
            image_path = image_path.with_suffix(f".{image_format}")
        image_path = image_path.resolve()
    elif opt.format:
        parser.error("--format is only valid together with --image.")

    return OutputConfig(
        image_path=image_path,
        image_format=image_format or "png",
        inside_rgb=colors["--inside-color"],
        outside_rgb=colors["--outside-color"],
    )


def save_mask_image(
    mask: np.ndarray,
    output_path: Path,
    inside_rgb: tuple[int, int, int],
    outside_rgb: tuple[int, int, int],
    image_format: str,
) -> None:
    """Write the escape mask as an RGB image, one pixel per sample."""

    rgb = np.empty(mask.shape + (3,), dtype=np.uint8)
    rgb[~mask] = inside_rgb
    rgb[mask] = outside_rgb
    output_path.parent.mkdir(parents=True, exist_ok=True)
    PIL.Image.fromarray(rgb).save(str(output_path), format=_pil_format_name(image_format))


def _collecting(rows, sink):
    # The image reuses the rows classified for the terminal frame.
    for escaped in rows:
        sink.append(escaped)
        yield escaped


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    if opt.list_fractals:
        for name in names():
            print(name)
        return 0

    try:
        fractal = lookup(opt.fractal)
    except UnknownFractalError as exc:
        parser.error(f"--fractal: {exc}")

    try:
        viewport = ViewportConfig(
            real_start=opt.real_start,
            real_end=opt.real_end,
            complex_start=opt.complex_start,
            complex_end=opt.complex_end,
            resolution=opt.resolution,
        )
    except ViewportError as exc:
        parser.error(str(exc))

    output_config = resolve_output_config(opt, parser)

    grid = viewport_to_grid_range(viewport)
    log("Rendering %s on columns %d..%d, rows %d..%d (resolution %d)" % (
        fractal.name, grid.col_start, grid.col_end, grid.row_start, grid.row_end, viewport.resolution))

    escape_rows = iter_escape_rows(viewport, fractal)
    classified = []
    if output_config.image_path is not None:
        escape_rows = _collecting(escape_rows, classified)

    start_time = perf_counter()
    lines = 0
    for line in rasterize_rows(escape_rows, supersample=opt.supersample, debug=opt.debug):
        print(line)
        lines += 1
    elapsed = perf_counter() - start_time

    if output_config.image_path is not None:
        mask = np.array(classified, dtype=bool)
        save_mask_image(
            mask,
            output_config.image_path,
            output_config.inside_rgb,
            output_config.outside_rgb,
            output_config.image_format,
        )
        log("Wrote %dx%d mask to %s" % (mask.shape[1], mask.shape[0], output_config.image_path))

    if opt.timing:
        print(f"rendered {lines}x{len(grid.columns)} cells in {elapsed:.3f}s")
    return 0


if __name__ == '__main__':
    sys.exit(main())
