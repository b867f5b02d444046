# audiogenkit

A compact toolkit for generating and shaping audio signals in plain Python and
NumPy. It covers:

- **Tones**: sine wave generation (`audiogenkit.tones`): `generate_sine`,
  `generate_sine_chunked`, and an A4 (440 Hz) reference tone as a list
  (`generate_a4_tone`) or a float32 NumPy array (`generate_a4_tone_array`).
- **Effects**: `FadeInOperator` and `ReverbOperator` in
  `audiogenkit.operators`, working on 2-D arrays of shape
  `(channels, samples)`. The reverb result is longer than its input by the
  reverb tail.
- **Learning**: a small multilayer perceptron (`MLP`, `Linear`) with an `Adam`
  optimiser, `mse_loss` and `binary_cross_entropy` (`audiogenkit.network`);
  networks are saved with `MLP.save` and read back with `load_mlp`.
  Random-search hyperparameter tuning (`audiogenkit.tuning`), GAN and VAE
  training (`audiogenkit.generative`) and data-sharded training with a
  caller-supplied reduce function (`audiogenkit.distributed`).
- **Inference**: loading saved networks and generating fixed-length sample
  sequences (`audiogenkit.inference`), multi-threaded generation over many
  inputs (`audiogenkit.parallel`), 8-bit weight quantisation
  (`audiogenkit.edge`), and copying a model and an executable into a
  distribution directory with a requirements file (`audiogenkit.packaging`).
- **Tools**: turning a simple `key = value` module description into source
  stubs (`audiogenkit.bindgen`) and tagging audio files with labels such as
  "Emotional" or "Classical" by PCA features and a k-nearest-neighbour
  classifier (`audiogenkit.semantic`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Quick start

```python
from audiogenkit.tones import generate_sine, generate_a4_tone_array

# One second of a 440 Hz sine at 44.1 kHz.
samples = generate_sine(44100, 44100, 440.0)

# The same A4 tone as a NumPy array.
tone = generate_a4_tone_array(44100, 1024)
```

Applying effects to a single channel:

```python
from audiogenkit.operators import FadeInOperator, ReverbOperator

faded = FadeInOperator(0.25).forward([samples])
wet = ReverbOperator(0.1).forward([samples])
```

Generating stub code from a module description file:

```python
from audiogenkit.bindgen import generate_bindings_from_file

print(generate_bindings_from_file("module.txt"))
```

Model-based generation reports problems through a small exception hierarchy in
`audiogenkit.inference`: `AudioGenerationError` is the base class, with
`ModelLoadError`, `InvalidInputError` and `GenerationError` beneath it.
Models are `.npz` files written by `MLP.save`; generation feeds 100 uniform
noise values to the network.

```python
from audiogenkit.inference import AudioGenerationError, generate_audio

try:
    samples = generate_audio("model.npz", 0)
except AudioGenerationError as exc:
    print(exc)
```

## Command-line tool

Tag an audio file with semantic labels:

```
audiogenkit-semantic
```

The command asks on standard input for a model path and an audio file. The
model is an `.npz` file holding reference `features` and integer `labels`
(indices into the tag list); each byte of the audio file is read as one
sample. It prints one tag per sample row and asks whether to continue.

## What the package does not do

- It does not capture from or play to audio devices; all processing works on
  arrays and files you pass in.
- It has no spectrum display, no speech transcription or translation, and no
  binaural or spatial rendering.
- Its networks are small dense NumPy models; it does not load models from
  other machine-learning frameworks and does not run on a GPU.