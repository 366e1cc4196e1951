"""
UI logic package - portable across rendering surfaces.

Responsive grid layout, hit-testing, device classification and rendering
resolution. No UI framework dependencies.
"""
from .grid_layout import (
    CardLayout,
    DeviceClass,
    LayoutProfile,
    PROFILES,
    compute_layout,
    detect_device_class,
    effective_resolution,
)

__all__ = [
    'CardLayout',
    'DeviceClass',
    'LayoutProfile',
    'PROFILES',
    'compute_layout',
    'detect_device_class',
    'effective_resolution',
]
