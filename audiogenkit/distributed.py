"""Data-parallel training of the audio generation model across ranked workers."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from .network import Adam, mse_loss
from .tuning import AudioGenerationModel

Reducer = Callable[[float], float]


def shard_data(data, rank: int, world_size: int) -> np.ndarray:
    """The contiguous slice of ``data`` for ``rank``; the last rank takes the remainder."""
    if world_size <= 0:
        raise ValueError(f"world size must be positive, got {world_size}")
    if not 0 <= rank < world_size:
        raise ValueError(f"rank {rank} is outside 0..{world_size - 1}")
    values = np.asarray(data, dtype=np.float64).ravel()
    chunk_size = values.size // world_size
    start = rank * chunk_size
    end = values.size if rank == world_size - 1 else (rank + 1) * chunk_size
    return values[start:end].copy()


def distributed_train(
    rank: int,
    world_size: int,
    model: AudioGenerationModel,
    data,
    epochs: int,
    batch_size: int,
    learning_rate: float,
    reduce: Reducer | None = None,
) -> list[float]:
    """Train on this rank's shard and return the all-reduced average loss per epoch.

    ``reduce`` sums a float across all ranks; it may be omitted only when
    ``world_size`` is 1. Each sample is a one-feature row, and the loss of an
    epoch's last batch is the one reduced; an epoch without batches reports NaN.
    """
    if batch_size <= 0:
        raise ValueError(f"batch size must be positive, got {batch_size}")
    local_data = shard_data(data, rank, world_size)
    if reduce is None:
        if world_size != 1:
            raise ValueError("a reduce function is required when world size is greater than 1")
        reduce = float

    rng = np.random.default_rng()
    optimizer = Adam(model.network.parameters(), learning_rate)
    num_batches = local_data.size // batch_size

    history = []
    for epoch in range(epochs):
        perm = rng.permutation(local_data.size)
        last_loss = math.nan
        for offset in range(0, num_batches * batch_size, batch_size):
            batch = local_data[perm[offset:offset + batch_size]].reshape(batch_size, 1)
            loss, grad = mse_loss(model.forward(batch), batch)
            optimizer.zero_grad()
            model.network.backward(grad)
            optimizer.step()
            last_loss = loss

        avg_loss = float(reduce(last_loss)) / world_size
        history.append(avg_loss)
        if rank == 0:
            print(f"Epoch [{epoch + 1}/{epochs}], Loss: {avg_loss:.4f}")
    return history


def init_distributed_training(
    rank: int,
    world_size: int,
    input_size: int,
    hidden_size: int,
    output_size: int,
    data,
    epochs: int,
    batch_size: int,
    learning_rate: float,
) -> list[float]:
    """Build a fresh model and train it on this rank's shard."""
    model = AudioGenerationModel(input_size, hidden_size, output_size)
    return distributed_train(rank, world_size, model, data, epochs, batch_size, learning_rate)