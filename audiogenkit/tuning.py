"""Autoencoding model training and random hyperparameter search."""

from __future__ import annotations

import math

import numpy as np

from .network import MLP, Adam, mse_loss


class AudioGenerationModel:
    """Two-layer network with a ReLU hidden layer."""

    def __init__(self, input_size: int, hidden_size: int, output_size: int, rng: np.random.Generator | None = None):
        self.input_size = input_size
        self.hidden_size = hidden_size
        self.output_size = output_size
        self.network = MLP([input_size, hidden_size, output_size], hidden_activation="relu", rng=rng)

    def forward(self, inputs) -> np.ndarray:
        return self.network.forward(inputs)


def train_model(model: AudioGenerationModel, data, epochs: int, batch_size: int, learning_rate: float) -> float:
    """Train the model to reproduce ``data``; return the mean of the per-epoch losses.

    The whole of ``data`` is one row, so only ``batch_size == 1`` yields batches;
    epochs without batches report NaN.
    """
    if batch_size <= 0:
        raise ValueError(f"batch size must be positive, got {batch_size}")
    values = np.asarray(data, dtype=np.float64).ravel()
    if values.size == 0:
        raise ValueError("training data must not be empty")
    dataset = values.reshape(1, values.size)
    optimizer = Adam(model.network.parameters(), learning_rate)
    num_batches = dataset.shape[0] // batch_size

    loss_sum = 0.0
    for epoch in range(epochs):
        epoch_loss = 0.0
        for offset in range(0, num_batches * batch_size, batch_size):
            batch = dataset[offset:offset + batch_size]
            loss, grad = mse_loss(model.forward(batch), batch)
            optimizer.zero_grad()
            model.network.backward(grad)
            optimizer.step()
            epoch_loss += loss
        avg_loss = epoch_loss / num_batches if num_batches else math.nan
        loss_sum += avg_loss
        print(f"Epoch {epoch + 1}: Loss = {avg_loss:.4f}")

    return loss_sum / epochs if epochs > 0 else math.nan


def random_search_optimization(
    input_size: int,
    output_size: int,
    data,
    num_trials: int,
    epochs: int,
    batch_size: int,
    rng: np.random.Generator | None = None,
) -> tuple[int, float]:
    """Try random hidden sizes (32..256) and learning rates (1e-5..1e-1); return the best pair."""
    rng = rng if rng is not None else np.random.default_rng()
    best_hidden_size = 0
    best_learning_rate = 0.0
    best_loss = math.inf

    for _ in range(num_trials):
        hidden_size = int(rng.integers(32, 257))
        learning_rate = 10.0 ** -rng.uniform(1.0, 5.0)
        model = AudioGenerationModel(input_size, hidden_size, output_size, rng=rng)
        loss = train_model(model, data, epochs, batch_size, learning_rate)
        if loss < best_loss:
            best_hidden_size = hidden_size
            best_learning_rate = learning_rate
            best_loss = loss

    return best_hidden_size, best_learning_rate