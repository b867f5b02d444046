"""Loading saved generator networks and drawing audio samples from them."""

from __future__ import annotations

import threading
import zipfile

import numpy as np

from .network import MLP, load_mlp

NOISE_SIZE = 100


class AudioGenerationError(Exception):
    """Base class for failures while producing audio from a model."""


class ModelLoadError(AudioGenerationError):
    """The model file could not be read."""

    def __init__(self, reason: object):
        super().__init__(f"Failed to load model: {reason}")
        self.reason = reason


class InvalidInputError(AudioGenerationError):
    """A request parameter is out of range."""

    def __init__(self, message: str):
        super().__init__(f"Invalid input: {message}")
        self.message = message


class GenerationError(AudioGenerationError):
    """The model failed to produce output."""

    def __init__(self, reason: object):
        super().__init__(f"Failed to generate audio: {reason}")
        self.reason = reason


def load_model(model_path) -> MLP:
    """Read a network saved with :meth:`MLP.save`, raising :class:`ModelLoadError` on failure."""
    try:
        return load_mlp(model_path)
    except (OSError, ValueError, KeyError, EOFError, zipfile.BadZipFile) as exc:
        raise ModelLoadError(exc) from exc


def fit_length(samples, num_samples: int) -> list[float]:
    """Truncate ``samples`` to ``num_samples`` or pad it with zeros up to that length."""
    if num_samples < 0:
        raise InvalidInputError("Number of samples must not be negative")
    values = [float(value) for value in samples]
    if len(values) >= num_samples:
        return values[:num_samples]
    return values + [0.0] * (num_samples - len(values))


def _run_on_noise(model, rng: np.random.Generator) -> np.ndarray:
    noise = rng.random((1, NOISE_SIZE))
    try:
        output = model.forward(noise)
    except ValueError as exc:
        raise GenerationError(exc) from exc
    return np.asarray(output, dtype=np.float32).squeeze().ravel()


def generate_audio_samples(model, num_samples: int, rng: np.random.Generator | None = None) -> list[float]:
    """Feed uniform noise to ``model`` and return exactly ``num_samples`` samples."""
    if num_samples <= 0:
        raise InvalidInputError("Number of samples must be greater than zero")
    rng = rng if rng is not None else np.random.default_rng()
    return fit_length(_run_on_noise(model, rng), num_samples)


def generate_audio(model_path, num_samples: int) -> list[float]:
    """Load the model at ``model_path`` and generate ``num_samples`` samples from it."""
    model = load_model(model_path)
    return generate_audio_samples(model, num_samples)


def generate_audio_samples_optimized(model_path, num_samples: int) -> list[float]:
    """Generate from the model at ``model_path`` and halve the first ``num_samples`` outputs."""
    if num_samples < 0:
        raise InvalidInputError("Number of samples must not be negative")
    model = load_model(model_path)
    output = _run_on_noise(model, np.random.default_rng())
    if num_samples > output.size:
        raise GenerationError(f"model produced {output.size} samples, {num_samples} requested")
    return (output[:num_samples] * np.float32(0.5)).astype(np.float32).tolist()


class AudioGenerator:
    """A loaded generator network that can be shared between threads."""

    def __init__(self, model_path, rng: np.random.Generator | None = None):
        self.model = load_model(model_path)
        self._rng = rng if rng is not None else np.random.default_rng()
        self._lock = threading.Lock()

    def generate(self, num_samples: int) -> list[float]:
        """Feed noise through the model and fit the result to ``num_samples``."""
        if num_samples < 0:
            raise InvalidInputError("Number of samples must not be negative")
        with self._lock:
            output = _run_on_noise(self.model, self._rng)
        return fit_length(output, num_samples)

    def generate_from(self, inputs) -> list[float]:
        """Run ``inputs`` through the model and return the flattened output."""
        values = np.asarray(inputs, dtype=np.float32).astype(np.float64)
        with self._lock:
            try:
                output = self.model.forward(values)
            except ValueError as exc:
                raise GenerationError(exc) from exc
        return np.asarray(output, dtype=np.float32).ravel().tolist()