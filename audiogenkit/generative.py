"""GAN and VAE models for audio frames, trained with the NumPy network toolkit."""

from __future__ import annotations

import math

import numpy as np

from .network import MLP, Adam, Linear, binary_cross_entropy, mse_loss


def _linear_parameters(linear: Linear) -> list[tuple[np.ndarray, np.ndarray]]:
    return [(linear.weight, linear.grad_weight), (linear.bias, linear.grad_bias)]


class Generator:
    """Maps latent vectors to frames in (-1, 1) through a ReLU hidden layer and tanh."""

    def __init__(self, latent_size: int, hidden_size: int, output_size: int, rng: np.random.Generator | None = None):
        self.latent_size = latent_size
        self.network = MLP(
            [latent_size, hidden_size, output_size],
            hidden_activation="relu",
            output_activation="tanh",
            rng=rng,
        )

    def forward(self, inputs) -> np.ndarray:
        return self.network.forward(inputs)


class Discriminator:
    """Scores frames with the probability that they are real."""

    def __init__(self, input_size: int, hidden_size: int, rng: np.random.Generator | None = None):
        self.network = MLP(
            [input_size, hidden_size, 1],
            hidden_activation="relu",
            output_activation="sigmoid",
            rng=rng,
        )

    def forward(self, inputs) -> np.ndarray:
        return self.network.forward(inputs)


class Encoder:
    """Maps frames to a sampled latent vector, its mean and its log-variance."""

    def __init__(self, input_size: int, hidden_size: int, latent_size: int, rng: np.random.Generator | None = None):
        rng = rng if rng is not None else np.random.default_rng()
        self.hidden = MLP([input_size, hidden_size], hidden_activation=None, output_activation="relu", rng=rng)
        self.mu = Linear(hidden_size, latent_size, rng)
        self.log_var = Linear(hidden_size, latent_size, rng)
        self._eps: np.ndarray | None = None
        self._std: np.ndarray | None = None

    def forward(self, inputs, rng: np.random.Generator | None = None) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(z, mu, log_var)`` with ``z = mu + eps * exp(log_var / 2)``."""
        rng = rng if rng is not None else np.random.default_rng()
        hidden = self.hidden.forward(inputs)
        mu = self.mu.forward(hidden)
        log_var = self.log_var.forward(hidden)
        std = np.sqrt(np.exp(log_var))
        eps = rng.standard_normal(std.shape)
        self._eps = eps
        self._std = std
        return mu + eps * std, mu, log_var

    def _backward(self, grad_z: np.ndarray, grad_mu: np.ndarray, grad_log_var: np.ndarray) -> np.ndarray:
        if self._eps is None or self._std is None:
            raise RuntimeError("backward called before forward")
        total_mu = grad_z + grad_mu
        total_log_var = grad_z * self._eps * self._std * 0.5 + grad_log_var
        grad_hidden = self.mu.backward(total_mu) + self.log_var.backward(total_log_var)
        return self.hidden.backward(grad_hidden)

    def _parameters(self) -> list[tuple[np.ndarray, np.ndarray]]:
        return self.hidden.parameters() + _linear_parameters(self.mu) + _linear_parameters(self.log_var)


class Decoder:
    """Maps latent vectors back to frames through a ReLU hidden layer."""

    def __init__(self, latent_size: int, hidden_size: int, output_size: int, rng: np.random.Generator | None = None):
        self.network = MLP([latent_size, hidden_size, output_size], hidden_activation="relu", rng=rng)

    def forward(self, inputs) -> np.ndarray:
        return self.network.forward(inputs)


def _dataset(data, batch_size: int) -> tuple[np.ndarray, int]:
    if batch_size <= 0:
        raise ValueError(f"batch size must be positive, got {batch_size}")
    values = np.asarray(data, dtype=np.float64).ravel()
    if values.size == 0:
        raise ValueError("training data must not be empty")
    dataset = values.reshape(1, values.size)
    return dataset, dataset.shape[0] // batch_size


def train_gan(
    generator: Generator,
    discriminator: Discriminator,
    data,
    epochs: int,
    batch_size: int,
    latent_size: int,
    learning_rate: float,
    rng: np.random.Generator | None = None,
) -> list[tuple[float, float]]:
    """Train adversarially on ``data`` (one row); return (generator, discriminator) loss per epoch.

    Epochs without a whole batch report NaN losses.
    """
    rng = rng if rng is not None else np.random.default_rng()
    dataset, num_batches = _dataset(data, batch_size)
    generator_optimizer = Adam(generator.network.parameters(), learning_rate)
    discriminator_optimizer = Adam(discriminator.network.parameters(), learning_rate)
    real_labels = np.ones((batch_size, 1))
    fake_labels = np.zeros((batch_size, 1))

    history = []
    for epoch in range(epochs):
        epoch_loss_g = 0.0
        epoch_loss_d = 0.0
        for offset in range(0, num_batches * batch_size, batch_size):
            real_batch = dataset[offset:offset + batch_size]
            fake_batch = generator.forward(rng.standard_normal((batch_size, latent_size)))

            discriminator_optimizer.zero_grad()
            real_loss, grad = binary_cross_entropy(discriminator.forward(real_batch), real_labels)
            discriminator.network.backward(grad)
            fake_loss, grad = binary_cross_entropy(discriminator.forward(fake_batch), fake_labels)
            discriminator.network.backward(grad)
            discriminator_optimizer.step()
            epoch_loss_d += real_loss + fake_loss

            fake_batch = generator.forward(rng.standard_normal((batch_size, latent_size)))
            g_loss, grad = binary_cross_entropy(discriminator.forward(fake_batch), real_labels)
            generator_optimizer.zero_grad()
            generator.network.backward(discriminator.network.backward(grad))
            generator_optimizer.step()
            epoch_loss_g += g_loss

        avg_loss_g = epoch_loss_g / num_batches if num_batches else math.nan
        avg_loss_d = epoch_loss_d / num_batches if num_batches else math.nan
        history.append((avg_loss_g, avg_loss_d))
        print(
            f"Epoch [{epoch + 1}/{epochs}], Generator Loss: {avg_loss_g:.4f}, "
            f"Discriminator Loss: {avg_loss_d:.4f}"
        )
    return history


def train_vae(
    encoder: Encoder,
    decoder: Decoder,
    data,
    epochs: int,
    batch_size: int,
    learning_rate: float,
    rng: np.random.Generator | None = None,
) -> list[float]:
    """Train the autoencoder on ``data`` (one row); return reconstruction + KL loss per epoch.

    Epochs without a whole batch report NaN.
    """
    rng = rng if rng is not None else np.random.default_rng()
    dataset, num_batches = _dataset(data, batch_size)
    encoder_optimizer = Adam(encoder._parameters(), learning_rate)
    decoder_optimizer = Adam(decoder.network.parameters(), learning_rate)

    history = []
    for epoch in range(epochs):
        epoch_loss = 0.0
        for offset in range(0, num_batches * batch_size, batch_size):
            batch = dataset[offset:offset + batch_size]
            z, mu, log_var = encoder.forward(batch, rng)
            reconstruction = decoder.forward(z)

            reconstruction_loss, grad_reconstruction = mse_loss(reconstruction, batch)
            count = mu.size
            kl_divergence = float(-0.5 * np.mean(1.0 + log_var - mu**2 - np.exp(log_var)))
            grad_mu = mu / count
            grad_log_var = 0.5 * (np.exp(log_var) - 1.0) / count

            encoder_optimizer.zero_grad()
            decoder_optimizer.zero_grad()
            grad_z = decoder.network.backward(grad_reconstruction)
            encoder._backward(grad_z, grad_mu, grad_log_var)
            encoder_optimizer.step()
            decoder_optimizer.step()

            epoch_loss += reconstruction_loss + kl_divergence

        avg_loss = epoch_loss / num_batches if num_batches else math.nan
        history.append(avg_loss)
        print(f"Epoch [{epoch + 1}/{epochs}], Loss: {avg_loss:.4f}")
    return history