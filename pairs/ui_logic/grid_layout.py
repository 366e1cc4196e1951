"""
Responsive grid mathematics for the card board.

Map a viewport size and device class to card size, spacing and grid origin,
convert grid cells to pixel centres and back, and pick the rendering
resolution for a device. No UI framework dependencies and no game state:
every function here is pure.
"""
from dataclasses import dataclass
from enum import Enum
import math
import re
from typing import Dict, Optional, Tuple

# Card textures are drawn at this reference size before scaling.
TEXTURE_SIZE = 100.0
# Front art is inset inside the card frame.
FRONT_ART_RATIO = 0.62
# Desktop displays gain nothing from rendering above this ratio.
DESKTOP_MAX_PIXEL_RATIO = 3.0

_MOBILE_AGENT = re.compile(r"android|webos|iphone|ipad|ipod|blackberry|iemobile|opera mini", re.IGNORECASE)
_MOBILE_PLATFORM = re.compile(r"android|iphone|ipad|ipod|mobile", re.IGNORECASE)


class DeviceClass(Enum):
    """Broad device families with their own design baseline."""
    DESKTOP = "desktop"
    COMPACT = "compact"  # phones and other touch-first devices


@dataclass(frozen=True, slots=True)
class LayoutProfile:
    """Design baseline for one device class."""
    base_width: float
    base_height: float
    padding: float
    base_card_size: float
    card_multiplier: float
    spacing: float
    row_gap: float

    @property
    def card_size(self) -> float:
        """Card size at scale factor 1.0."""
        return self.base_card_size * self.card_multiplier


PROFILES: Dict[DeviceClass, LayoutProfile] = {
    DeviceClass.DESKTOP: LayoutProfile(
        base_width=800, base_height=800, padding=0.9,
        base_card_size=80, card_multiplier=0.5, spacing=100, row_gap=50,
    ),
    DeviceClass.COMPACT: LayoutProfile(
        base_width=400, base_height=700, padding=0.88,
        base_card_size=90, card_multiplier=0.28, spacing=65, row_gap=40,
    ),
}


@dataclass(frozen=True, slots=True)
class CardLayout:
    """Card geometry for one viewport.

    ``origin_x``/``origin_y`` is the centre of the top-left card. Rows are
    further apart than columns by ``row_gap``.
    """
    card_size: float
    spacing: float
    row_gap: float
    origin_x: float
    origin_y: float
    card_back_scale: float
    card_front_scale: float
    scale_factor: float

    @property
    def column_pitch(self) -> float:
        """Distance between the centres of horizontally adjacent cards."""
        return self.card_size + self.spacing

    @property
    def row_pitch(self) -> float:
        """Distance between the centres of vertically adjacent cards."""
        return self.card_size + self.spacing + self.row_gap

    def card_center(self, row: int, col: int) -> Tuple[float, float]:
        return (self.origin_x + col * self.column_pitch, self.origin_y + row * self.row_pitch)

    def card_at_point(self, x: float, y: float, rows: int, cols: int) -> Optional[Tuple[int, int]]:
        """
        Find the card under a pointer position.

        Args:
            x: X coordinate (pixel)
            y: Y coordinate (pixel)
            rows: Number of grid rows
            cols: Number of grid columns

        Returns:
            (row, col) of the card hit, None for gaps and points off the grid
        """
        col = round((x - self.origin_x) / self.column_pitch)
        row = round((y - self.origin_y) / self.row_pitch)
        if not (0 <= row < rows and 0 <= col < cols):
            return None

        center_x, center_y = self.card_center(row, col)
        half = self.card_size / 2
        if abs(x - center_x) > half or abs(y - center_y) > half:
            return None
        return (row, col)


def compute_layout(
    viewport_width: float,
    viewport_height: float,
    rows: int,
    cols: int,
    device_class: DeviceClass,
) -> CardLayout:
    """
    Compute card geometry that fits and centres the grid in a viewport.

    The scale factor is the smaller of the two viewport/baseline ratios
    times the profile's padding coefficient; card size, spacing and row gap
    all scale linearly with it.

    Args:
        viewport_width: Available width in pixels
        viewport_height: Available height in pixels
        rows: Number of grid rows
        cols: Number of grid columns
        device_class: Selects the design baseline

    Returns:
        CardLayout for the viewport
    """
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError(f"viewport must be positive, got {viewport_width}x{viewport_height}")
    if rows <= 0 or cols <= 0:
        raise ValueError("rows/cols must be positive")

    profile = PROFILES[device_class]
    scale = min(viewport_width / profile.base_width, viewport_height / profile.base_height) * profile.padding

    card_size = profile.card_size * scale
    spacing = profile.spacing * scale
    row_gap = profile.row_gap * scale

    grid_span_x = (cols - 1) * (card_size + spacing)
    grid_span_y = (rows - 1) * (card_size + spacing + row_gap)

    back_scale = card_size / TEXTURE_SIZE
    return CardLayout(
        card_size=card_size,
        spacing=spacing,
        row_gap=row_gap,
        origin_x=viewport_width / 2 - grid_span_x / 2,
        origin_y=viewport_height / 2 - grid_span_y / 2,
        card_back_scale=back_scale,
        card_front_scale=back_scale * FRONT_ART_RATIO,
        scale_factor=scale,
    )


def detect_device_class(
    user_agent: str = "",
    has_touch: bool = False,
    coarse_pointer: bool = False,
    platform: str = "",
) -> DeviceClass:
    """
    Classify a device from the signals a browser or windowing host exposes.

    Screen size is deliberately not a signal: high-density phones report
    large logical dimensions.
    """
    if user_agent and _MOBILE_AGENT.search(user_agent):
        return DeviceClass.COMPACT
    if has_touch and coarse_pointer:
        return DeviceClass.COMPACT
    if platform and _MOBILE_PLATFORM.search(platform):
        return DeviceClass.COMPACT
    return DeviceClass.DESKTOP


def effective_resolution(raw_pixel_ratio: Optional[float], device_class: DeviceClass) -> float:
    """Rendering resolution for a device pixel ratio.

    Compact devices render at their native ratio; desktops are capped.
    """
    if not raw_pixel_ratio or raw_pixel_ratio <= 0 or math.isnan(raw_pixel_ratio):
        ratio = 1.0
    else:
        ratio = float(raw_pixel_ratio)
    if device_class is DeviceClass.DESKTOP:
        return min(ratio, DESKTOP_MAX_PIXEL_RATIO)
    return ratio
