"""Generating module binding source from simple key=value definitions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


@dataclass
class ModuleDefinition:
    """A module name and its single-value parameters, in definition order."""

    name: str = ""
    parameters: dict[str, list[float]] = field(default_factory=dict)


def _to_single(text: str) -> float:
    value = float(text)
    with np.errstate(over="ignore"):
        return float(np.float32(value))


def parse_module_text(text: str) -> ModuleDefinition:
    """Parse ``key=value`` lines; ``name`` sets the module name, other keys hold floats.

    Lines without exactly one ``=`` are ignored; a bad number raises :class:`ValueError`.
    """
    definition = ModuleDefinition()
    for line in text.splitlines():
        parts = line.split("=")
        if len(parts) != 2:
            continue
        key, value = (part.strip() for part in parts)
        if key == "name":
            definition.name = value
        else:
            definition.parameters[key] = [_to_single(value)]
    return definition


def parse_module_definition(file_path) -> ModuleDefinition:
    """Read and parse a module definition file."""
    with open(file_path, encoding="utf-8") as handle:
        return parse_module_text(handle.read())


def _format_value(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return np.format_float_positional(np.float32(value), unique=True, trim="0")


def _format_values(values: list[float]) -> str:
    return "[" + ", ".join(_format_value(value) for value in values) + "]"


def generate_bindings(module_def: ModuleDefinition) -> str:
    """Produce the struct and impl source for ``module_def``."""
    name = module_def.name
    lines = [f"struct {name} {{"]
    lines += [f"    {param}: Tensor," for param in module_def.parameters]
    lines += ["}", "", f"impl {name} {{", "    fn new() -> Self {", f"        {name} {{"]
    lines += [
        f"            {param}: Tensor::of_slice(&{_format_values(values)}),"
        for param, values in module_def.parameters.items()
    ]
    lines += [
        "        }",
        "    }",
        "",
        "    fn forward(&self, input: &Tensor) -> Tensor {",
        "        // Implement the forward pass computation",
        "        // Use self.{parameter_name} to access module parameters",
        "        todo!()",
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def generate_bindings_from_file(file_path) -> str:
    """Parse the definition at ``file_path`` and generate its bindings.

    Read and parse failures are raised as :class:`OSError`.
    """
    try:
        module_def = parse_module_definition(file_path)
    except (OSError, ValueError) as exc:
        raise OSError(f"Failed to parse module definition: {exc}") from exc
    return generate_bindings(module_def)