"""Per-file conversion between TEX containers and standard images"""
import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import (
    IOFailure,
    InvalidContainer,
    ResourceExhausted,
    TexError,
    UnsupportedImage,
)
from .image_codec import decode_image, encode_png
from .paths import output_path_for, resolve_output_path
from .tex import TEX
from .uv import SIDECAR_SUFFIX, format_sidecar, read_sidecar, sidecar_path

logger = logging.getLogger(__name__)

TEX_EXTENSION = '.tex'
IMAGE_EXTENSION = '.png'
_TEMP_SUFFIX = '.tmp'

CONVERTED = 'converted'
SKIPPED = 'skipped'
FAILED = 'failed'

# Not a TEX file / not an image: the input is skipped rather than failed
_SKIP_ERRORS = (InvalidContainer, UnsupportedImage)


@dataclass
class ConvertOptions:
    """Settings shared by every file in a batch"""
    output_dir: Optional[str] = None  # None writes next to each input
    overwrite: bool = False


@dataclass
class ConversionResult:
    """Outcome of converting one input file"""
    source: str
    status: str
    outputs: List[str] = field(default_factory=list)
    reason: str = ''

    @property
    def ok(self) -> bool:
        return self.status != FAILED


def is_tex_path(path: str) -> bool:
    return os.path.splitext(path)[1].lower() == TEX_EXTENSION


def convert_file(path: str, options: Optional[ConvertOptions] = None) -> ConversionResult:
    """
    Convert one file: .tex inputs to PNG, anything else to .tex.

    Errors are caught per file, logged with the path and reason, and returned
    as a skipped or failed result so a batch can carry on.
    """
    options = options or ConvertOptions()
    try:
        try:
            if is_tex_path(path):
                outputs = _tex_to_image(path, options)
            else:
                outputs = _image_to_tex(path, options)
        except MemoryError as e:
            raise ResourceExhausted(f"Out of memory while converting {path}") from e
    except _SKIP_ERRORS as e:
        logger.warning("Skipping %s: %s", path, e)
        return ConversionResult(path, SKIPPED, reason=str(e))
    except TexError as e:
        logger.error("[FAIL] Cannot convert %s: %s", path, e)
        return ConversionResult(path, FAILED, reason=str(e))

    logger.info("Converted %s -> %s", path, ", ".join(outputs))
    return ConversionResult(path, CONVERTED, outputs=outputs)


def _tex_to_image(path: str, options: ConvertOptions) -> List[str]:
    tex = _read_tex(path)
    logger.debug("Read %s: version %d, %s %dx%d", path, tex.header.version,
                 tex.format.name, tex.width, tex.height)

    # Build every artifact before touching the destination
    png = encode_png(tex.to_image())
    image_path = resolve_output_path(
        output_path_for(path, IMAGE_EXTENSION, options.output_dir), options.overwrite)

    artifacts = [(image_path, png)]
    if tex.uv_rects:
        artifacts.append((sidecar_path(image_path), format_sidecar(tex.uv_rects).encode("utf-8")))
    return _write_artifacts(artifacts)


def _image_to_tex(path: str, options: ConvertOptions) -> List[str]:
    image = decode_image(_read_bytes(path))
    try:
        rects = read_sidecar(path)
    except OSError as e:
        raise IOFailure(f"Cannot read {sidecar_path(path)}: {e}") from e

    data = TEX.from_image(image, uv_rects=rects).to_bytes()

    tex_path = resolve_output_path(
        output_path_for(path, TEX_EXTENSION, options.output_dir), options.overwrite)
    return _write_artifacts([(tex_path, data)])


def _read_tex(path: str) -> TEX:
    try:
        return TEX.from_file(path)
    except OSError as e:
        raise IOFailure(f"Cannot read {path}: {e}") from e


def _read_bytes(path: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise IOFailure(f"Cannot read {path}: {e}") from e


def _write_artifacts(artifacts: List[Tuple[str, bytes]]) -> List[str]:
    """
    Write fully built outputs.

    Every artifact is first written to a temporary sibling and only then moved
    over its destination, so an existing file survives a failed write. On any
    failure all temporaries and already placed outputs of this call are
    removed.
    """
    staged = []
    written = []
    out_path = ''
    try:
        for out_path, data in artifacts:
            directory = os.path.dirname(out_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            temp_path = out_path + _TEMP_SUFFIX
            staged.append(temp_path)
            with open(temp_path, 'wb') as f:
                f.write(data)

        for (out_path, _), temp_path in zip(artifacts, staged):
            os.replace(temp_path, out_path)
            written.append(out_path)
    except OSError as e:
        _discard(staged + written)
        raise IOFailure(f"Cannot write {out_path}: {e}") from e
    return written


def _discard(paths: List[str]) -> None:
    for path in paths:
        try:
            if os.path.isfile(path):
                os.remove(path)
        except OSError as e:
            logger.warning("Could not remove %s: %s", path, e)


def iter_input_files(paths: Iterable[str]) -> Iterator[str]:
    """Yield files from paths, walking directories recursively in sorted order"""
    for path in paths:
        if os.path.isfile(path):
            yield path
        elif os.path.isdir(path):
            for root, dirs, files in os.walk(path):
                dirs.sort()
                for name in sorted(files):
                    # Sidecars travel with their image
                    if name.endswith(SIDECAR_SUFFIX):
                        continue
                    yield os.path.join(root, name)
        else:
            logger.warning("%s is not a valid file nor directory (does it exist? can it be accessed?)", path)


def convert_paths(paths: Iterable[str], options: Optional[ConvertOptions] = None) -> List[ConversionResult]:
    """Convert every file under paths, one at a time"""
    options = options or ConvertOptions()
    # Collect inputs up front so outputs written during the batch are not picked up
    files = list(iter_input_files(paths))
    return [convert_file(path, options) for path in files]
