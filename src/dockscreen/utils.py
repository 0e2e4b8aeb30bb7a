"""Shared utilities for dockscreen."""

from pydantic import BaseModel, Field

# Named color table mapping lower-case color names to RGB tuples (0-255 range)
NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "air force blue": (93, 138, 168),
    "alice blue": (240, 248, 255),
    "alizarin crimson": (227, 38, 54),
    "almond": (239, 222, 205),
    "amaranth": (229, 43, 80),
    "amber": (255, 191, 0),
    "american rose": (255, 3, 62),
    "amethyst": (153, 102, 204),
    "android green": (164, 198, 57),
    "anti-flash white": (242, 243, 244),
    "antique brass": (205, 149, 117),
    "antique fuchsia": (145, 92, 131),
    "antique white": (250, 235, 215),
    "ao": (0, 128, 0),
    "apple green": (141, 182, 0),
    "apricot": (251, 206, 177),
    "aqua": (0, 255, 255),
    "aquamarine": (127, 255, 212),
    "army green": (75, 83, 32),
    "arylide yellow": (233, 214, 107),
    "ash grey": (178, 190, 181),
    "asparagus": (135, 169, 107),
    "atomic tangerine": (255, 153, 102),
    "auburn": (165, 42, 42),
    "aureolin": (253, 238, 0),
    "aurometalsaurus": (110, 127, 128),
    "awesome": (255, 32, 82),
    "azure": (0, 127, 255),
    "azure mist/web": (240, 255, 255),
    "black": (0, 0, 0),
    "blue": (0, 0, 255),
    "canary yellow": (255, 239, 0),
    "chocolate": (210, 105, 30),
    "cornflower blue": (100, 149, 237),
    "cyan": (0, 255, 255),
    "fuchsia": (255, 0, 255),
    "gold": (255, 215, 0),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "green": (0, 255, 0),
    "lime": (128, 255, 0),
    "magenta": (255, 0, 255),
    "maroon": (128, 0, 0),
    "navy blue": (0, 0, 128),
    "olive": (128, 128, 0),
    "orange": (255, 128, 0),
    "pink": (255, 64, 128),
    "purple": (128, 0, 128),
    "red": (255, 0, 0),
    "silver": (192, 192, 192),
    "teal": (0, 128, 128),
    "transparent": (0, 0, 0),
    "violet": (128, 0, 255),
    "white": (255, 255, 255),
    "yellow": (255, 255, 0),
}


class RGBAColor(BaseModel):
    """RGBA color with 0-255 channels, parsed from the DSL color notations.

    Supported notations:
    - Channel list: "255;128;0" or "255;128;0;200" (alpha defaults to 255)
    - Hex: "#FF8000" or "#FF8000C8"
    - Named: "cornflower blue", "Red", ... (case-insensitive)
    """

    r: int = Field(ge=0, le=255, description="Red channel (0-255)")
    g: int = Field(ge=0, le=255, description="Green channel (0-255)")
    b: int = Field(ge=0, le=255, description="Blue channel (0-255)")
    a: int = Field(default=255, ge=0, le=255, description="Alpha channel (0-255)")

    model_config = {"frozen": True}

    @classmethod
    def from_string(cls, color: str) -> "RGBAColor":
        """Parse a color from channel list, hex or named notation.

        Args:
            color: Raw color string from a field table

        Returns:
            RGBAColor instance

        Raises:
            ValueError: If the string matches no notation or a channel is out of range
        """
        text = color.strip()
        lowered = text.lower()

        if ";" in text:
            parts = [p.strip() for p in text.split(";")]
            if len(parts) not in (3, 4):
                raise ValueError(f"Color [{color}] must have 3 or 4 channels")
            channels = [int(p) for p in parts]
            for value in channels:
                if not 0 <= value <= 255:
                    raise ValueError(f"Color [{color}] channel {value} outside 0-255")
            return cls(r=channels[0], g=channels[1], b=channels[2], a=channels[3] if len(channels) == 4 else 255)

        if lowered.startswith("#"):
            digits = lowered[1:]
            if len(digits) not in (6, 8):
                raise ValueError(f"Invalid hex color format: {color}")
            r = int(digits[0:2], 16)
            g = int(digits[2:4], 16)
            b = int(digits[4:6], 16)
            a = int(digits[6:8], 16) if len(digits) == 8 else 255
            return cls(r=r, g=g, b=b, a=a)

        if lowered in NAMED_COLORS:
            r, g, b = NAMED_COLORS[lowered]
            return cls(r=r, g=g, b=b, a=0 if lowered == "transparent" else 255)

        raise ValueError(f"Color [{color}] unknown")

    def to_unit(self) -> tuple[float, float, float, float]:
        """Convert to the 0.0-1.0 float range most renderers expect.

        Returns:
            Tuple of (r, g, b, a) floats
        """
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)

    def to_hex(self) -> str:
        """Format as #rrggbb (alpha omitted when opaque)."""
        if self.a == 255:
            return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"
