from __future__ import annotations

from pathlib import Path
from typing import Union

from loguru import logger


PathLike = Union[str, Path]


class WriteError(OSError):
    """A diagram could not be written to *path*."""

    def __init__(self, path: PathLike, cause: BaseException) -> None:
        super().__init__(f"cannot write diagram to {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


def insert_attribution(svg_text: str, attribution: str) -> str:
    """Return *svg_text* with *attribution* as its second line."""
    first, sep, rest = svg_text.partition("\n")
    if not sep:
        return f"{first}\n{attribution}\n"
    return f"{first}\n{attribution}\n{rest}"


def write_svg(svg_text: str, path: PathLike) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg_text, encoding="utf-8")
    except OSError as exc:
        raise WriteError(path, exc) from exc
    logger.debug("wrote {} bytes to {}", len(svg_text), path)
    return path
