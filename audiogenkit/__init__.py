"""Audio synthesis, effects, small learning models and audio tagging built on NumPy."""

__version__ = "0.1.0"

__all__ = [
    "bindgen",
    "distributed",
    "edge",
    "generative",
    "inference",
    "network",
    "operators",
    "packaging",
    "parallel",
    "semantic",
    "tones",
    "tuning",
]