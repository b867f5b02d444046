"""Tagging audio files with semantic labels from principal-component features."""

from __future__ import annotations

import argparse
import sys
import zipfile

import numpy as np

TAGS = ("Emotional", "Uplifting", "Instrumental", "Classical")


def bytes_to_samples(data) -> np.ndarray:
    """Map each byte to a float32 sample in [0, 1]."""
    return np.frombuffer(bytes(data), dtype=np.uint8).astype(np.float32) / np.float32(255.0)


def _as_rows(values) -> np.ndarray:
    matrix = np.asarray(values, dtype=np.float64)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2:
        raise ValueError(f"expected 1-D or 2-D data, got {matrix.ndim}-D")
    return matrix


class SemanticAnalyzer:
    """PCA feature extraction followed by a k-nearest-neighbour tag classifier.

    ``model_path`` names an ``.npz`` file holding reference ``features`` and
    ``labels`` (indices into :data:`TAGS`) to train the classifier with.
    """

    def __init__(self, model_path=None, n_components: int = 1, k: int = 5):
        if n_components <= 0:
            raise ValueError(f"number of components must be positive, got {n_components}")
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")
        self.model_path = model_path
        self.n_components = n_components
        self.k = k
        self._features: np.ndarray | None = None
        self._labels: np.ndarray | None = None
        if model_path is not None:
            self._load_reference(model_path)

    def _load_reference(self, path) -> None:
        try:
            with np.load(path, allow_pickle=False) as archive:
                features = archive["features"]
                labels = archive["labels"]
        except KeyError as exc:
            raise ValueError(f"model file lacks {exc}") from exc
        except (zipfile.BadZipFile, EOFError) as exc:
            raise ValueError(f"model file is not readable: {exc}") from exc
        self.fit(features, labels)

    def load_audio_file(self, audio_file) -> np.ndarray:
        with open(audio_file, "rb") as handle:
            return bytes_to_samples(handle.read())

    def extract_audio_features(self, audio_data) -> np.ndarray:
        """Project the samples, one per row, onto their principal components."""
        matrix = _as_rows(audio_data)
        if matrix.shape[0] == 0:
            raise ValueError("audio data must not be empty")
        centered = matrix - matrix.mean(axis=0)
        _, _, vt = np.linalg.svd(centered, full_matrices=False)
        components = vt[: min(self.n_components, vt.shape[0])].copy()
        for row in components:
            if row[np.argmax(np.abs(row))] < 0:
                row *= -1.0
        return centered @ components.T

    def fit(self, features, labels) -> SemanticAnalyzer:
        """Store reference feature rows and their tag indices."""
        matrix = _as_rows(features)
        indices = np.asarray(labels)
        if indices.ndim != 1 or indices.size != matrix.shape[0]:
            raise ValueError("there must be one label per feature row")
        if indices.size == 0:
            raise ValueError("reference data must not be empty")
        if not np.issubdtype(indices.dtype, np.integer):
            raise ValueError("labels must be integers")
        if np.any((indices < 0) | (indices >= len(TAGS))):
            raise ValueError(f"labels must lie in 0..{len(TAGS) - 1}")
        self._features = matrix
        self._labels = indices.astype(np.intp)
        return self

    def generate_semantic_tags(self, audio_features) -> list[str]:
        """Tag each feature row with the majority tag of its nearest references."""
        if self._features is None or self._labels is None:
            raise RuntimeError("the classifier has not been trained")
        rows = _as_rows(audio_features)
        if rows.shape[1] != self._features.shape[1]:
            raise ValueError(
                f"expected {self._features.shape[1]} features per row, got {rows.shape[1]}"
            )
        k = min(self.k, self._features.shape[0])
        tags = []
        for row in rows:
            distances = np.sum((self._features - row) ** 2, axis=1)
            nearest = np.argsort(distances, kind="stable")[:k]
            votes = np.bincount(self._labels[nearest], minlength=len(TAGS))
            tags.append(TAGS[int(np.argmax(votes))])
        return tags

    def analyze_audio(self, audio_file) -> list[str]:
        audio_data = self.load_audio_file(audio_file)
        features = self.extract_audio_features(audio_data)
        return self.generate_semantic_tags(features)


def _read_line() -> str:
    return sys.stdin.readline().strip()


def main(argv=None) -> int:
    """Ask for a model and an audio file on standard input and print the tags."""
    argparse.ArgumentParser(description="Tag an audio file with semantic labels.").parse_args(argv)
    print("Please enter the path to the LLM model:")
    model_path = _read_line()
    print(f"Loading model from path: {model_path}")
    try:
        analyzer = SemanticAnalyzer(model_path)
        print("Please enter the path to the audio file:")
        audio_file = _read_line()
        tags = analyzer.analyze_audio(audio_file)
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("Semantic tags for the audio file:")
    for tag in tags:
        print(f"- {tag}")

    print("Would you like to perform any additional analysis or actions? (y/n)")
    if _read_line().lower() == "y":
        print("Performing additional analysis or actions...")
        print("Additional analysis or actions completed.")

    print("Thank you for using the Audio Semantic Analyzer!")
    return 0


if __name__ == "__main__":
    sys.exit(main())