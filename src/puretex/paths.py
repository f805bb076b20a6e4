"""Output file naming"""
import os
from typing import Optional


def output_path_for(source: str, extension: str, output_dir: Optional[str] = None) -> str:
    """Desired output path: source stem with a new extension, in output_dir or beside source"""
    directory = output_dir if output_dir is not None else os.path.dirname(source)
    stem = os.path.splitext(os.path.basename(source))[0]
    return os.path.join(directory, stem + extension)


def resolve_output_path(desired: str, overwrite: bool = False) -> str:
    """
    Pick a free output path.

    Returns desired when it does not exist (or overwrite is set). Otherwise
    tries stem.1.ext, stem.2.ext, ... A numeric suffix already present in the
    stem ("face.1") is dropped first so repeated conversions stay at one level.
    """
    if overwrite or not os.path.exists(desired):
        return desired

    directory, name = os.path.split(desired)
    stem, ext = os.path.splitext(name)
    base, suffix = os.path.splitext(stem)
    if suffix[1:].isdigit():
        stem = base

    attempt = 1
    while True:
        candidate = os.path.join(directory, f"{stem}.{attempt}{ext}")
        if not os.path.exists(candidate):
            return candidate
        attempt += 1
