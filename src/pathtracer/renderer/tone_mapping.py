# renderer/tone_mapping.py
import numpy as np

def linear_to_gamma(linear: np.ndarray) -> np.ndarray:
    """
    Gamma 2 transform (square root) of a linear color buffer.
    Negative values map to 0.
    """
    return np.sqrt(np.maximum(linear, 0.0))

def to_rgb8(linear: np.ndarray, gamma_correct: bool = True) -> np.ndarray:
    """
    Convert a linear [0, 1] buffer to 8-bit RGB. Values are clamped to
    [0, 0.999] before scaling by 256 so 1.0 maps to 255.
    """
    mapped = linear_to_gamma(linear) if gamma_correct else linear
    return (np.clip(mapped, 0.0, 0.999) * 256).astype(np.uint8)
