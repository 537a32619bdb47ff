"""Write a frame sequence to disk as an animated GIF using Pillow."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from .error_handling import EncodingError, error_context
from .io import atomic_write
from .sequence import FrameSequence

logger = logging.getLogger(__name__)


def _encodable_images(sequence: FrameSequence) -> list[Image.Image]:
    """One mode ``P`` image per frame.

    Pillow folds a frame that repeats its predecessor into the earlier one.
    The image palette therefore carries every color twice, and a repeated
    frame has its top-left pixel moved to the other copy of the same color.
    The frame looks unchanged but is written as its own GIF frame.
    """
    size = len(sequence.palette)
    if 2 * size > 256:
        raise EncodingError(f"Palette of {size} colors leaves no room for repeated frames")

    flat_palette = sequence.palette.flat() * 2
    images = []
    previous: np.ndarray | None = None

    for frame in sequence.frames:
        pixels = np.asarray(frame.pixels, dtype=np.uint8)
        if previous is not None and np.array_equal(pixels, previous):
            pixels = pixels.copy()
            pixels[0, 0] = (int(pixels[0, 0]) + size) % (2 * size)

        image = Image.frombytes("P", (frame.width, frame.height), np.ascontiguousarray(pixels).tobytes())
        image.putpalette(flat_palette)
        images.append(image)
        previous = pixels

    return images


def _written_frame_count(path: Path) -> int:
    with Image.open(path) as written:
        return written.n_frames


def write_gif(sequence: FrameSequence, path: Path, loop: int = 0) -> Path:
    """Encode ``sequence`` as an animated GIF at ``path``.

    Every frame of the sequence becomes one GIF frame, including frames
    identical to the one before. The file is written through a temporary
    file and only moved into place once its frame count has been read back,
    so a failed run never leaves a truncated GIF.

    Args:
        sequence: Frames, delays and palette to encode
        path: Output file
        loop: GIF loop count (0 = forever)

    Returns:
        The written path

    Raises:
        EncodingError: if the file cannot be written or holds the wrong number of frames
    """
    path = Path(path)
    images = _encodable_images(sequence)

    with error_context("write animated GIF", EncodingError, context={"path": str(path)}, logger=logger):
        with atomic_write(path, mode="wb") as handle:
            images[0].save(
                handle,
                format="GIF",
                save_all=True,
                append_images=images[1:],
                duration=list(sequence.delays),
                loop=loop,
                optimize=False,
            )
            handle.flush()

            written = _written_frame_count(Path(handle.name))
            if written != len(sequence):
                raise EncodingError(
                    f"GIF holds {written} frames, expected {len(sequence)}",
                    context={"path": str(path), "written": written, "expected": len(sequence)},
                )

    logger.info(f"Wrote {len(sequence)} frames to {path}")
    return path
