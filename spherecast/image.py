"""
Image output.

Converts the renderer's linear float buffer to 8-bit values with gamma-2
correction and writes it either as plain-text PPM or through Pillow.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import TextIO, Union

import numpy as np
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

# Upper clamp before scaling by 256, so no channel reaches 256
CHANNEL_CEILING = 0.999


def to_ldr(image: np.ndarray) -> np.ndarray:
    """Convert a linear float image to 8-bit with gamma-2 correction.

    Each channel becomes int(256 * clamp(sqrt(c), 0, 0.999)).

    Args:
        image: Linear image array (height, width, 3)

    Returns:
        LDR image as uint8 array of the same shape
    """
    corrected = np.sqrt(np.clip(image, 0.0, None))
    return (np.clip(corrected, 0.0, CHANNEL_CEILING) * 256).astype(np.uint8)


def write_ppm(image: np.ndarray, stream: TextIO) -> None:
    """Write an image as plain-text PPM (P3).

    Args:
        image: Linear float image or already-converted uint8 image
        stream: Text stream to write to
    """
    if image.dtype != np.uint8:
        image = to_ldr(image)

    height, width = image.shape[:2]
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        for r, g, b in row:
            stream.write(f"{r} {g} {b}\n")


def save_image(image: np.ndarray, filename: Union[str, Path]) -> None:
    """Save image to file.

    Args:
        image: Image array (linear float or uint8)
        filename: Output filename (extension determines format)
    """
    path = Path(filename)

    if path.suffix.lower() == '.ppm':
        with path.open('w') as f:
            write_ppm(image, f)
    else:
        if image.dtype != np.uint8:
            image = to_ldr(image)
        PILImage.fromarray(image).save(path)

    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
