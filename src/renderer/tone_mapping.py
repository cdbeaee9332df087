# renderer/tone_mapping.py
from pathlib import Path
from typing import TextIO, Union
import numpy as np
from PIL import Image

# Upper clamp before scaling, so that 1.0 lands on 255 rather than 256.
INTENSITY_MAX = 0.999

def linear_to_gamma(linear):
    """
    Gamma 2 transfer: square root of the positive part of each component.
    """
    return np.sqrt(np.maximum(linear, 0.0))

def to_rgb8(image) -> np.ndarray:
    """
    Convert a linear (height, width, 3) radiance image to 8-bit sRGB-ish pixels.
    """
    mapped = linear_to_gamma(np.asarray(image, dtype=np.float64))
    output = (255.999 * mapped.clip(0.0, INTENSITY_MAX)).astype("uint8")
    return output

def write_ppm(rgb8: np.ndarray, stream: TextIO) -> None:
    """
    Write an ASCII (P3) PPM: header, then one "R G B" line per pixel in row-major order.
    """
    height, width = rgb8.shape[:2]
    stream.write(f"P3\n{width} {height}\n255\n")
    for r, g, b in rgb8.reshape(-1, 3).tolist():
        stream.write(f"{r} {g} {b}\n")

def save_image(rgb8: np.ndarray, path: Union[str, Path]) -> Path:
    """
    Save pixels to path. .ppm is written as ASCII PPM, anything else through Pillow.
    """
    path = Path(path)
    if path.suffix.lower() == ".ppm":
        with path.open("w", encoding="ascii") as f:
            write_ppm(rgb8, f)
    else:
        Image.fromarray(np.ascontiguousarray(rgb8, dtype=np.uint8)).save(path)
    return path
