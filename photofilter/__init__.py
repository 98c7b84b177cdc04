"""Photo filter engine and the editor state it drives."""

from .core.config import Settings, get_settings
from .core.services.filter_service import FilterService, create_filter_service
from .core.state import (
    ApplyFilter,
    ApplyModification,
    BrightnessAdjustment,
    CapturePhoto,
    ContrastAdjustment,
    EditorReducer,
    EditorState,
    LoadImage,
    SwitchPhoto,
    reduce,
)
from .engine.image_processing import (
    FilterDispatcher,
    FilterKind,
    FilterProcessingConfig,
    ModificationKind,
    PixelBuffer,
    ToneParams,
)

__version__ = "1.0.0"

__all__ = [
    "ApplyFilter",
    "ApplyModification",
    "BrightnessAdjustment",
    "CapturePhoto",
    "ContrastAdjustment",
    "EditorReducer",
    "EditorState",
    "FilterDispatcher",
    "FilterKind",
    "FilterProcessingConfig",
    "FilterService",
    "LoadImage",
    "ModificationKind",
    "PixelBuffer",
    "Settings",
    "SwitchPhoto",
    "ToneParams",
    "create_filter_service",
    "get_settings",
    "reduce",
]
