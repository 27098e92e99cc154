"""
Output path mirroring.

destination = output_root / (file_path relative to input_root) + suffix
"""

from __future__ import annotations

from pathlib import Path

from .errors import InvalidInputError, PipelineIOError


def map_destination(
    input_root: str | Path,
    output_root: str | Path,
    file_path: str | Path,
    suffix: str = "",
) -> Path:
    """
    Return the mirrored destination of `file_path` under `output_root`.

    Pure: nothing is touched on disk.

    Raises:
        InvalidInputError: if `file_path` is not a descendant of `input_root`
    """

    input_root = Path(input_root)
    file_path = Path(file_path)

    try:
        relative = file_path.relative_to(input_root)
    except ValueError:
        raise InvalidInputError(
            f"{file_path} is not inside input folder {input_root}", file_path
        ) from None

    if not relative.parts:
        raise InvalidInputError(f"{file_path} is the input folder itself", file_path)

    destination = Path(output_root) / relative
    if suffix:
        destination = destination.with_name(destination.name + suffix)
    return destination


def ensure_parent_dirs(destination: str | Path) -> None:
    """
    Create any missing parent directories of `destination`.

    Existing directories are not an error.

    Raises:
        PipelineIOError: if a directory cannot be created
    """

    parent = Path(destination).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PipelineIOError(
            f"Failed to create output directories {parent}: {exc.strerror or exc}", parent
        ) from exc
