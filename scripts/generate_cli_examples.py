from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

import PIL.Image

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = [
    "--real-start", "-2",
    "--real-end", "1",
    "--complex-start", "-1",
    "--complex-end", "1",
    "--resolution", "16",
    "--no-timing",
]


@dataclass
class Expected:
    path: Path
    image: bool = False


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    stdout: Path | None = None

    @property
    def directory(self) -> Path:
        return EXAMPLES_ROOT / self.name

    def full_args(self) -> list[str]:
        return [sys.executable, "draw.py", *self.args]


def _text_example(name: str, args: list[str], filename: str = "frame.txt") -> Example:
    target = EXAMPLES_ROOT / name / filename
    return Example(name=name, args=args, expected=[Expected(target)], stdout=target)


def _image_example(name: str, args: list[str], written: str, expected: str | None = None) -> Example:
    target = EXAMPLES_ROOT / name
    return Example(
        name=name,
        args=[*args, "--image", str(target / written)],
        expected=[Expected(target / (expected or written), image=True)],
    )


EXAMPLES: list[Example] = [
    _text_example("mandelbrot", [*BASE_ARGS, "--fractal", "mandelbrot"]),
    _text_example("mandelbrot-cubed", [*BASE_ARGS, "--fractal", "mandelbrot-cubed"]),
    _text_example(
        "julia",
        ["--fractal", "julia", "--real-start", "-3", "--real-end", "3",
         "--complex-start", "-1.5", "--complex-end", "1.5", "--resolution", "8", "--no-timing"],
    ),
    _text_example("bat", [*BASE_ARGS, "--fractal", "bat"]),
    _text_example("batstatic", [*BASE_ARGS, "--fractal", "batstatic"]),
    _text_example("spiral", [*BASE_ARGS, "--fractal", "spiral"]),
    _text_example("crab", [*BASE_ARGS, "--fractal", "crab"]),
    _text_example("supersample", [*BASE_ARGS, "--supersample"]),
    _text_example("debug", [*BASE_ARGS, "--debug"]),
    _text_example("supersample-debug", [*BASE_ARGS, "--supersample", "--debug"]),
    _image_example("image", BASE_ARGS, "mask.png"),
    _image_example(
        "inside-color",
        [*BASE_ARGS, "--inside-color", "#0a3ba0", "--outside-color", "#f0f0f0"],
        "mask.png",
    ),
    _image_example("format", [*BASE_ARGS, "--format", "bmp"], "mask", expected="mask.bmp"),
    _text_example("list-fractals", ["--list-fractals"], filename="names.txt"),
]


def _prepare(example: Example) -> None:
    # Each example owns its directory; outputs of earlier runs are removed.
    if example.directory.exists():
        shutil.rmtree(example.directory)
    example.directory.mkdir(parents=True)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")
        if expected.image:
            with PIL.Image.open(expected.path) as image:
                image.verify()
            continue
        text = expected.path.read_text(encoding="utf-8")
        if not text:
            raise RuntimeError(f"{expected.path} is empty")
        if not text.endswith("\n"):
            raise RuntimeError(f"{expected.path} does not end with a complete row")


def run_example(example: Example) -> None:
    _prepare(example)
    completed = subprocess.run(
        example.full_args(),
        check=True,
        capture_output=True,
        encoding="utf-8",
        env={**os.environ, "PYTHONIOENCODING": "utf-8"},
    )
    if example.stdout is not None:
        example.stdout.write_text(completed.stdout, encoding="utf-8")
    _verify(example)


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        run_example(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
