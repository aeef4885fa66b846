from .moon_icon import DEFAULT_SIZE, build_icon, icon_id, terminator_geometry

__all__ = [
    "DEFAULT_SIZE",
    "build_icon",
    "icon_id",
    "terminator_geometry",
]
