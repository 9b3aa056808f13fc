import os

import numpy as np
from PIL import Image, UnidentifiedImageError

def load_image(image_path: str) -> np.ndarray:
    """
    Load an image file as a float RGB array, with automatic format conversion.

    Args:
        image_path: Path to the image file

    Returns:
        (height, width, 3) float64 array with values in [0, 1]

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the file cannot be decoded as an image
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            # Convert to RGB if necessary
            if img.mode != 'RGB':
                img = img.convert('RGB')
            data = np.asarray(img, dtype=np.float64) / 255.0
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    if data.ndim != 3 or data.shape[0] == 0 or data.shape[1] == 0:
        raise ValueError(f"Texture {image_path} has no pixels")
    return data
