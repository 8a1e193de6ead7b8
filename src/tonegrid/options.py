"""Validated render settings shared by every pipeline stage."""

from dataclasses import dataclass
from enum import Enum


class InvalidOptionsError(ValueError):
    """Raised when a RenderOptions record cannot be built."""


class RampMode(str, Enum):
    ASCII = "ASCII"
    UNICODE = "UNICODE"
    DOTS = "DOTS"
    RECTANGLES = "RECTANGLES"
    BARS = "BARS"
    LOADING = "LOADING"

    @classmethod
    def parse(cls, value) -> "RampMode":
        """Accept a RampMode or its name in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise InvalidOptionsError(
                f"unknown ramp mode: {value!r} (expected one of {known})"
            ) from None


@dataclass(frozen=True)
class RenderOptions:
    cell_size: int = 10
    cell_aspect: float = 2.3
    directional_render: bool = False
    edge_threshold: float = 0.6  # literal cutoff on normalized magnitude
    reverse_polarity: bool = False
    high_contrast: bool = False
    ramp_mode: RampMode = RampMode.ASCII

    def __post_init__(self):
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, "ramp_mode", RampMode.parse(self.ramp_mode))

        if isinstance(self.cell_size, bool) or not isinstance(self.cell_size, int):
            raise InvalidOptionsError(f"cell_size must be an int: {self.cell_size!r}")
        if self.cell_size <= 0:
            raise InvalidOptionsError(f"cell_size must be positive: {self.cell_size}")

        try:
            aspect = float(self.cell_aspect)
            threshold = float(self.edge_threshold)
        except (TypeError, ValueError) as exc:
            raise InvalidOptionsError(str(exc)) from exc
        # NaN fails both comparisons below
        if not aspect > 0:
            raise InvalidOptionsError(f"cell_aspect must be positive: {self.cell_aspect}")
        if not 0.0 <= threshold <= 1.0:
            raise InvalidOptionsError(
                f"edge_threshold must be within [0, 1]: {self.edge_threshold}"
            )
        object.__setattr__(self, "cell_aspect", aspect)
        object.__setattr__(self, "edge_threshold", threshold)
