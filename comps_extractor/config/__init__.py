"""Configuration management."""
from .settings import *
from .layout_profile_loader import (
    LayoutProfile,
    LayoutProfileLoader,
    default_layout_profile,
    get_layout_profile_loader,
)

__all__ = [
    'LayoutProfile',
    'LayoutProfileLoader',
    'default_layout_profile',
    'get_layout_profile_loader',
]
