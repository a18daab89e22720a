"""Operating modes."""

from enum import Enum


class Mode(str, Enum):
    """Operating profile. The value is the label shown to the user."""

    UNIVERSAL = "Universal Solver"
    MAGIC = "Magic Build"
    ARCHITECT = "App Architect"
    VIDEO = "Video Studio"
    IMAGE = "Image Studio"
    THREE_D = "3D Generator"
    EDITOR = "Media Editor"
    CONVERTER = "File Converter"
    SECURITY = "Security Guard"
    IMPACT = "Global Impact"
    EDUCATOR = "Educator"
    TUTOR = "Language Tutor"
    LIFE = "Fix My Life"
    BUSINESS = "Business Opt."
    CODE = "Code Forge"
    HEALTH = "Health Lens"
    ACCESSIBILITY = "Accessible"

    @property
    def label(self) -> str:
        return self.value


DEFAULT_MODE = Mode.UNIVERSAL
