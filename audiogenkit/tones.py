"""Sine tone synthesis in single precision."""

from __future__ import annotations

import numpy as np

_TWO_PI = np.float32(2.0 * np.pi)
_A4_FREQUENCY = np.float32(440.0)


def _validate(sample_rate: int, num_samples: int) -> None:
    if sample_rate <= 0:
        raise ValueError(f"sample rate must be positive, got {sample_rate}")
    if num_samples < 0:
        raise ValueError(f"number of samples must not be negative, got {num_samples}")


def _phase_step(sample_rate: int, frequency: float) -> np.float32:
    return np.float32(_TWO_PI * np.float32(frequency) / np.float32(sample_rate))


def generate_sine_chunked(sample_rate: int, num_samples: int, frequency: float) -> list[float]:
    """Sine wave computed over blocks of four samples, then the remainder."""
    _validate(sample_rate, num_samples)
    step = _phase_step(sample_rate, frequency)
    whole = num_samples - num_samples % 4
    blocks = np.arange(whole, dtype=np.float32).reshape(-1, 4)
    head = np.sin(blocks * step).ravel()
    tail = np.sin(np.arange(whole, num_samples, dtype=np.float32) * step)
    return np.concatenate([head, tail]).astype(np.float32).tolist()


def generate_sine(sample_rate: int, num_samples: int, frequency: float) -> list[float]:
    """Sine wave computed one sample at a time in index order."""
    _validate(sample_rate, num_samples)
    step = _phase_step(sample_rate, frequency)
    return np.sin(np.arange(num_samples, dtype=np.float32) * step).tolist()


def generate_a4_tone_array(sample_rate: int, num_samples: int) -> np.ndarray:
    """A 440 Hz tone as a float32 NumPy array."""
    _validate(sample_rate, num_samples)
    times = np.arange(num_samples, dtype=np.float32) / np.float32(sample_rate)
    return np.sin(np.float32(_TWO_PI * _A4_FREQUENCY) * times).astype(np.float32)


def generate_a4_tone(sample_rate: int, num_samples: int) -> list[float]:
    """A 440 Hz tone as a list of floats."""
    return generate_a4_tone_array(sample_rate, num_samples).tolist()


def demonstrate_fine_grained_control() -> None:
    """Print one second of a 440 Hz tone made by both sine generators."""
    sample_rate = 44100
    num_samples = 44100
    frequency = 440.0
    chunked = generate_sine_chunked(sample_rate, num_samples, frequency)
    standard = generate_sine(sample_rate, num_samples, frequency)
    print(f"SIMD samples: {chunked}")
    print(f"Standard samples: {standard}")


def analyze_memory_safety() -> None:
    """Print 1024 samples of an A4 tone made as a list and as an array."""
    sample_rate = 44100
    num_samples = 1024
    as_list = generate_a4_tone(sample_rate, num_samples)
    as_array = generate_a4_tone_array(sample_rate, num_samples)
    print(f"List samples: {as_list}")
    print(f"Array samples: {as_array.tolist()}")