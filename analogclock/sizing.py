# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Clock diameter handling.

A diameter is either a fixed pixel size (400, "400", "400px"), a CSS-style
relative length ("50vh", "80%") resolved against the host container, or
"auto" (fit the container).
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

MIN_SIZE = 100
MAX_SIZE = 2000
DEFAULT_SIZE = 220

_FIXED_RE = re.compile(r"^(\d+)(px)?$")
_CSS_LENGTH_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(px|%|[dsl]?v(?:h|w|min|max))$")


class DiameterKind(Enum):
    """How the clock diameter is determined."""
    FIXED = "fixed"
    CSS = "css"
    AUTO = "auto"


@dataclass(frozen=True)
class DiameterSpec:
    """Parsed diameter setting."""
    kind: DiameterKind
    pixels: Optional[int] = None
    css_length: Optional[str] = None


def clamp_size(value: float) -> int:
    """Clamp a diameter to the supported range."""
    return int(max(MIN_SIZE, min(value, MAX_SIZE)))


def parse_diameter(value) -> DiameterSpec:
    """
    Parse a diameter setting.

    Args:
        value: int/float pixels, "400" / "400px", a CSS length, "auto" or None.

    Returns:
        DiameterSpec. Fixed sizes are already clamped to [100, 2000].

    Raises:
        ValueError: If the value has an unsupported type.
    """
    if value is None:
        return DiameterSpec(DiameterKind.AUTO)
    if isinstance(value, bool):
        raise ValueError(f"Invalid diameter: {value!r}")
    if isinstance(value, (int, float)):
        return DiameterSpec(DiameterKind.FIXED, pixels=clamp_size(value))
    if isinstance(value, str):
        text = value.strip()
        if not text or text.lower() == "auto":
            return DiameterSpec(DiameterKind.AUTO)
        match = _FIXED_RE.match(text)
        if match:
            return DiameterSpec(DiameterKind.FIXED, pixels=clamp_size(int(match.group(1))))
        return DiameterSpec(DiameterKind.CSS, css_length=text)
    raise ValueError(f"Invalid diameter: {value!r}")


def resolve_css_length(
    length: str,
    container: Tuple[float, float],
    viewport: Tuple[float, float]
) -> Optional[float]:
    """
    Resolve a CSS-style length to pixels.

    Args:
        length: Length such as "80%", "50vh", "40dvh", "30vmin", "300px".
        container: (width, height) of the host container; % is of its width.
        viewport: (width, height) of the viewport.

    Returns:
        Pixels, or None when the expression is not supported (var(), calc()).
    """
    match = _CSS_LENGTH_RE.match(length.strip().lower())
    if not match:
        return None

    amount = float(match.group(1))
    unit = match.group(2)
    vw, vh = viewport

    if unit == "px":
        return amount
    if unit == "%":
        return container[0] * amount / 100

    # Dynamic/small/large viewport units behave like plain ones here
    unit = unit.lstrip("dsl")
    if unit == "vw":
        return vw * amount / 100
    if unit == "vh":
        return vh * amount / 100
    if unit == "vmin":
        return min(vw, vh) * amount / 100
    return max(vw, vh) * amount / 100


class SizingController:
    """
    Computes the clock diameter and reports changes.

    Fixed diameters are computed once. Auto and CSS diameters are recomputed
    on every container resize; the callback only fires when the size changes.
    """

    def __init__(
        self,
        diameter=None,
        on_size: Optional[Callable[[int], None]] = None,
        viewport: Optional[Callable[[], Tuple[int, int]]] = None
    ):
        """
        Initialize the sizing controller.

        Args:
            diameter: Raw diameter setting (see parse_diameter).
            on_size: Called with the new size in pixels when it changes.
            viewport: Returns the (width, height) of the viewport.
        """
        try:
            self.spec = parse_diameter(diameter)
        except ValueError as e:
            logger.warning(f"{e}, fitting container instead")
            self.spec = DiameterSpec(DiameterKind.AUTO)

        self._on_size = on_size
        self._viewport = viewport
        self.size: Optional[int] = None

        if self.spec.kind == DiameterKind.FIXED:
            self.size = self.spec.pixels
            logger.info(f"Using fixed clock diameter: {self.size}px")

    @property
    def is_fixed(self) -> bool:
        return self.spec.kind == DiameterKind.FIXED

    def _viewport_size(self) -> Tuple[int, int]:
        if self._viewport is None:
            return (0, 0)
        try:
            return self._viewport()
        except Exception as e:
            logger.debug(f"Could not get viewport size: {e}")
            return (0, 0)

    def compute(self, width: Optional[float] = None, height: Optional[float] = None) -> int:
        """
        Compute the target diameter for a container box.

        Args:
            width: Container width (0/None if unknown).
            height: Container height (0/None if unknown).

        Returns:
            Diameter in pixels.
        """
        if self.spec.kind == DiameterKind.FIXED:
            return self.spec.pixels

        w = width or 0
        h = height or 0

        if self.spec.kind == DiameterKind.CSS:
            resolved = resolve_css_length(self.spec.css_length, (w, h), self._viewport_size())
            if resolved:
                w = h = resolved

        if w > 0 and h > 0:
            base = min(w, h)
        else:
            base = w or h
        if base <= 0:
            vw, vh = self._viewport_size()
            base = min(vw, vh) if vw > 0 and vh > 0 else (vw or vh)
        if base <= 0:
            return DEFAULT_SIZE
        return clamp_size(base)

    def update(self, width: Optional[float] = None, height: Optional[float] = None) -> int:
        """
        Handle a container resize notification.

        Returns:
            Current diameter. The on_size callback fires only if it changed.
        """
        if self.is_fixed and self.size is not None:
            return self.size

        target = self.compute(width, height)
        if target == self.size:
            return target

        logger.debug(f"Clock diameter changed: {self.size} -> {target}")
        self.size = target
        if self._on_size is not None:
            self._on_size(target)
        return target

    def close(self) -> None:
        """Stop reporting size changes."""
        self._on_size = None
        self._viewport = None
