"""
Recording Render Bridge.

Reference implementation that creates nothing on screen. It hands out
string handles and integer entity ids and records every request, which makes
it useful for tests, headless layout checks and the debug inspector.
"""

from typing import Any

from ..bridge import RenderBridge, SpriteSpec, TextSpec


class RecordingBridge(RenderBridge):
    """
    In-memory bridge:
    - textures become "texture:<path>" handles, fonts "font:<path>"
    - every spawned sprite/text gets the next integer entity id
    - sounds and visual swaps are appended to lists
    """

    def __init__(self):
        self.textures: list[str] = []
        self.fonts: list[str] = []
        self.sprites: dict[int, SpriteSpec] = {}
        self.texts: dict[int, TextSpec] = {}
        self.sounds: list[str] = []
        self.visuals: dict[int, Any] = {}
        self._next_entity = 0

    def load_texture(self, path: str) -> str:
        self.textures.append(path)
        return f"texture:{path}"

    def load_font(self, path: str) -> str:
        self.fonts.append(path)
        return f"font:{path}"

    def spawn_sprite(self, spec: SpriteSpec) -> int:
        entity = self._allocate()
        self.sprites[entity] = spec
        self.visuals[entity] = spec.texture
        return entity

    def spawn_text(self, spec: TextSpec) -> int:
        entity = self._allocate()
        self.texts[entity] = spec
        return entity

    def play_sound(self, path: str) -> None:
        self.sounds.append(path)

    def apply_visual(self, entity: Any, handle: Any) -> None:
        self.visuals[entity] = handle

    def sprite_named(self, name: str) -> SpriteSpec:
        """First sprite spawned for a control name."""
        for spec in self.sprites.values():
            if spec.name == name:
                return spec
        raise KeyError(name)

    def text_named(self, name: str) -> TextSpec:
        """First text node spawned for a control name."""
        for spec in self.texts.values():
            if spec.name == name:
                return spec
        raise KeyError(name)

    def _allocate(self) -> int:
        self._next_entity += 1
        return self._next_entity
