"""Small dense networks in NumPy with hand-written gradients and Adam."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

import numpy as np

Parameter = tuple[np.ndarray, np.ndarray]


class Linear:
    """Fully connected layer computing ``x @ W.T + b``."""

    def __init__(self, in_features: int, out_features: int, rng: np.random.Generator | None = None):
        if in_features <= 0 or out_features <= 0:
            raise ValueError("layer sizes must be positive")
        rng = rng if rng is not None else np.random.default_rng()
        bound = 1.0 / np.sqrt(in_features)
        self.weight = rng.uniform(-bound, bound, (out_features, in_features))
        self.bias = rng.uniform(-bound, bound, out_features)
        self.grad_weight = np.zeros_like(self.weight)
        self.grad_bias = np.zeros_like(self.bias)
        self._inputs: np.ndarray | None = None

    @property
    def in_features(self) -> int:
        return self.weight.shape[1]

    @property
    def out_features(self) -> int:
        return self.weight.shape[0]

    def forward(self, inputs) -> np.ndarray:
        x = np.asarray(inputs, dtype=np.float64)
        if x.ndim == 0 or x.shape[-1] != self.in_features:
            raise ValueError(f"expected inputs with {self.in_features} features, got shape {x.shape}")
        self._inputs = x
        return x @ self.weight.T + self.bias

    def backward(self, grad_output) -> np.ndarray:
        """Accumulate parameter gradients and return the gradient of the inputs."""
        if self._inputs is None:
            raise RuntimeError("backward called before forward")
        grad = np.asarray(grad_output, dtype=np.float64)
        flat_grad = grad.reshape(-1, self.out_features)
        flat_inputs = self._inputs.reshape(-1, self.in_features)
        self.grad_weight += flat_grad.T @ flat_inputs
        self.grad_bias += flat_grad.sum(axis=0)
        return grad @ self.weight

    def _parameters(self) -> list[Parameter]:
        return [(self.weight, self.grad_weight), (self.bias, self.grad_bias)]


class _ReLU:
    def forward(self, x: np.ndarray) -> np.ndarray:
        self._mask = x > 0
        return np.where(self._mask, x, 0.0)

    def backward(self, grad: np.ndarray) -> np.ndarray:
        return grad * self._mask


class _Tanh:
    def forward(self, x: np.ndarray) -> np.ndarray:
        self._out = np.tanh(x)
        return self._out

    def backward(self, grad: np.ndarray) -> np.ndarray:
        return grad * (1.0 - self._out**2)


class _Sigmoid:
    def forward(self, x: np.ndarray) -> np.ndarray:
        self._out = np.exp(-np.logaddexp(0.0, -x))
        return self._out

    def backward(self, grad: np.ndarray) -> np.ndarray:
        return grad * self._out * (1.0 - self._out)


_ACTIVATIONS = {"relu": _ReLU, "tanh": _Tanh, "sigmoid": _Sigmoid}


class MLP:
    """Stack of linear layers with an activation between them and an optional one at the end."""

    def __init__(
        self,
        sizes: Sequence[int],
        hidden_activation: str | None = "relu",
        output_activation: str | None = None,
        rng: np.random.Generator | None = None,
    ):
        sizes = [int(size) for size in sizes]
        if len(sizes) < 2:
            raise ValueError("an MLP needs at least an input and an output size")
        for name in (hidden_activation, output_activation):
            if name is not None and name not in _ACTIVATIONS:
                raise ValueError(f"unknown activation {name!r}")
        rng = rng if rng is not None else np.random.default_rng()
        self.sizes = sizes
        self.hidden_activation = hidden_activation
        self.output_activation = output_activation
        self.linears = [Linear(a, b, rng) for a, b in zip(sizes, sizes[1:])]
        self._layers: list = []
        last = len(self.linears) - 1
        for index, linear in enumerate(self.linears):
            self._layers.append(linear)
            activation = output_activation if index == last else hidden_activation
            if activation is not None:
                self._layers.append(_ACTIVATIONS[activation]())

    def forward(self, inputs) -> np.ndarray:
        output = np.asarray(inputs, dtype=np.float64)
        for layer in self._layers:
            output = layer.forward(output)
        return output

    def backward(self, grad_output) -> np.ndarray:
        """Backpropagate through the last forward pass; returns the input gradient."""
        grad = np.asarray(grad_output, dtype=np.float64)
        for layer in reversed(self._layers):
            grad = layer.backward(grad)
        return grad

    def parameters(self) -> list[Parameter]:
        """(value, gradient) array pairs, both updated in place."""
        return [param for linear in self.linears for param in linear._parameters()]

    def save(self, path) -> None:
        config = {
            "sizes": self.sizes,
            "hidden_activation": self.hidden_activation,
            "output_activation": self.output_activation,
        }
        arrays = {}
        for index, linear in enumerate(self.linears):
            arrays[f"weight_{index}"] = linear.weight
            arrays[f"bias_{index}"] = linear.bias
        with open(path, "wb") as handle:
            np.savez(handle, config=np.array(json.dumps(config)), **arrays)


def load_mlp(path) -> MLP:
    """Read a network written by :meth:`MLP.save`."""
    with np.load(path, allow_pickle=False) as archive:
        config = json.loads(str(archive["config"]))
        model = MLP(config["sizes"], config["hidden_activation"], config["output_activation"])
        for index, linear in enumerate(model.linears):
            weight = archive[f"weight_{index}"]
            bias = archive[f"bias_{index}"]
            if weight.shape != linear.weight.shape or bias.shape != linear.bias.shape:
                raise ValueError(f"parameter shapes of layer {index} do not match the configuration")
            linear.weight[...] = weight
            linear.bias[...] = bias
    return model


class Adam:
    """Adam optimiser over (value, gradient) pairs."""

    def __init__(
        self,
        parameters: Iterable[Parameter],
        learning_rate: float,
        betas: tuple[float, float] = (0.9, 0.999),
        eps: float = 1e-8,
    ):
        if learning_rate < 0:
            raise ValueError(f"learning rate must not be negative, got {learning_rate}")
        self.learning_rate = learning_rate
        self.betas = betas
        self.eps = eps
        self._params = list(parameters)
        self._first = [np.zeros_like(value) for value, _ in self._params]
        self._second = [np.zeros_like(value) for value, _ in self._params]
        self._steps = 0

    def zero_grad(self) -> None:
        for _, grad in self._params:
            grad.fill(0.0)

    def step(self) -> None:
        self._steps += 1
        beta1, beta2 = self.betas
        correction1 = 1.0 - beta1**self._steps
        correction2 = 1.0 - beta2**self._steps
        for (value, grad), first, second in zip(self._params, self._first, self._second):
            first *= beta1
            first += (1.0 - beta1) * grad
            second *= beta2
            second += (1.0 - beta2) * grad * grad
            denom = np.sqrt(second / correction2) + self.eps
            value -= self.learning_rate * (first / correction1) / denom


def _paired(prediction, target) -> tuple[np.ndarray, np.ndarray]:
    p = np.asarray(prediction, dtype=np.float64)
    t = np.asarray(target, dtype=np.float64)
    if p.shape != t.shape:
        raise ValueError(f"shape mismatch: {p.shape} vs {t.shape}")
    if p.size == 0:
        raise ValueError("loss of an empty array is undefined")
    return p, t


def mse_loss(prediction, target) -> tuple[float, np.ndarray]:
    """Mean squared error and its gradient with respect to ``prediction``."""
    p, t = _paired(prediction, target)
    diff = p - t
    return float(np.mean(diff**2)), 2.0 * diff / p.size


def binary_cross_entropy(prediction, target) -> tuple[float, np.ndarray]:
    """Mean binary cross-entropy (logs clamped at -100) and its gradient."""
    p, t = _paired(prediction, target)
    if np.any((p < 0.0) | (p > 1.0)):
        raise ValueError("predictions must lie between 0 and 1")
    with np.errstate(divide="ignore"):
        log_p = np.maximum(np.log(p), -100.0)
        log_q = np.maximum(np.log1p(-p), -100.0)
    loss = -np.mean(t * log_p + (1.0 - t) * log_q)
    grad = (p - t) / np.maximum(p * (1.0 - p), 1e-12) / p.size
    return float(loss), grad