"""System that turns characters into sprite render commands."""

from __future__ import annotations

import math
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from midgarts.character.types import (
    DIRECTION_TABLE,
    ActionIndex,
    ActionPlayMode,
    AttachmentType,
)
from midgarts.component import (
    CharacterAttachmentComponentConfig,
    SpriteSource,
    new_character_attachment_component,
)
from midgarts.entity import Character
from midgarts.fileformat.act import ActionFrameLayer
from midgarts.fileformat.spr import SpriteFile
from midgarts.graphic.rgba import UniqueRGBA

SPRITE_SCALE_FACTOR = 1.0
FIXED_CAMERA_DIRECTION = 6
ONE_PIXEL_SIZE = 1.0 / 35.0
MIN_FRAME_TIME_MS = 100
DORIDORI_FRAME_COUNT = 3

Offset = tuple[float, float]


@dataclass
class SpriteRenderCommand:
    """One sprite to be drawn by the low-level renderer."""

    scale: tuple[float, float]
    size: tuple[float, float]
    position: tuple[float, float, float]
    offset: tuple[float, float]
    rotation_radians: float
    texture: Any
    flip_vertically: bool


class CachedTextureProvider:
    """Creates textures from images, once per image id.

    ``factory`` builds the texture; by default the image itself is used.
    """

    def __init__(self, factory: Callable[[UniqueRGBA], Any] | None = None) -> None:
        self._factory = factory or (lambda rgba: rgba)
        self._cache: dict[uuid.UUID, Any] = {}

    def texture_from_rgba(self, rgba: UniqueRGBA) -> Any:
        """Return the texture of ``rgba``, creating it on first use."""
        if rgba.id not in self._cache:
            if rgba.stride != rgba.width * 4:
                raise ValueError("unsupported stride")
            self._cache[rgba.id] = self._factory(rgba)
        return self._cache[rgba.id]

    def __len__(self) -> int:
        return len(self._cache)


class CharacterRenderSystem:
    """Collects the sprite render commands of every tracked character."""

    def __init__(
        self,
        grf_file: SpriteSource,
        texture_provider: CachedTextureProvider,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.grf_file = grf_file
        self.texture_provider = texture_provider
        self.clock = clock
        self.characters: dict[int, Character] = {}
        self.render_commands: list[SpriteRenderCommand] = []

    def add(self, character: Character) -> None:
        """Load the character's attachments, shield included, and start tracking it."""
        character.attachments = new_character_attachment_component(
            self.grf_file,
            CharacterAttachmentComponentConfig(
                gender=character.gender,
                job_sprite_id=character.job_sprite_id,
                head_index=character.head_index,
                enable_shield=character.has_shield,
                shield_sprite_name=character.shield_sprite_name,
            ),
        )
        self.characters[character.id] = character

    def remove(self, entity_id: int) -> None:
        """Stop tracking the character with the given id."""
        self.characters.pop(entity_id, None)

    def update(self, dt: float) -> None:
        """Rebuild the render commands for the current frame."""
        self.render_commands.clear()
        for char in self.characters.values():
            self._render_character(dt, char)

    def _render_character(self, dt: float, char: Character) -> None:
        info = char.render_info
        direction = int(info.direction) + DIRECTION_TABLE[FIXED_CAMERA_DIRECTION] % 8
        behind = 1 < direction < 6
        render_shield = char.has_shield and info.action_index == ActionIndex.STAND_BY

        offset: Offset = (0.0, 0.0)
        if info.action_index not in (ActionIndex.DEAD, ActionIndex.SITTING):
            offset = self._render_attachment(dt, char, AttachmentType.SHADOW, offset)
        if behind and render_shield:
            offset = self._render_attachment(dt, char, AttachmentType.SHIELD, offset)
        offset = self._render_attachment(dt, char, AttachmentType.BODY, offset)
        offset = self._render_attachment(dt, char, AttachmentType.HEAD, offset)
        if not behind and render_shield:
            self._render_attachment(dt, char, AttachmentType.SHIELD, offset)

    def _render_attachment(
        self, dt: float, char: Character, elem: AttachmentType, offset: Offset
    ) -> Offset:
        """Emit commands for one attachment and return the offset for the next."""
        if char.attachments is None:
            return offset
        pair = char.attachments.files.get(elem)
        if pair is None or not pair.act.actions:
            return offset

        info = char.render_info
        actions = pair.act.actions
        turn = (int(info.direction) + DIRECTION_TABLE[FIXED_CAMERA_DIRECTION]) % 8
        action = actions[(int(info.action_index) + turn) % len(actions)]
        frame_count = len(action.frames)
        if frame_count == 0:
            return offset

        frame_time = int(action.delay * (1.0 / info.fps_multiplier))
        if info.forced_duration:
            frame_time = int(info.forced_duration * 1000) // frame_count
        frame_time = max(frame_time, MIN_FRAME_TIME_MS)

        elapsed = int((self.clock() - info.animation_started_at) * 1000) - int(dt)
        real_index = int(elapsed / frame_time)

        frame_index = 0
        if char.state_component.play_mode == ActionPlayMode.REPEAT:
            frame_index = real_index % frame_count
        # The "doridori" head-shake animation is not played.
        if frame_count == DORIDORI_FRAME_COUNT:
            frame_index = 0

        frame = action.frames[frame_index]
        if not frame.layers:
            return (0.0, 0.0)

        position: Offset = (0.0, 0.0)
        if frame.positions and elem not in (AttachmentType.BODY, AttachmentType.SHIELD):
            anchor_x, anchor_y = frame.positions[0]
            position = (offset[0] - anchor_x, offset[1] - anchor_y)

        for layer in frame.layers:
            if layer.sprite_frame_index >= 0:
                self._render_layer(char, layer, pair.spr, position)

        if frame.positions:
            anchor_x, anchor_y = frame.positions[0]
            offset = (float(anchor_x), float(anchor_y))

        info.animation_delay = action.duration_milliseconds / 1000.0
        return offset

    def _render_layer(
        self, char: Character, layer: ActionFrameLayer, sprite: SpriteFile, offset: Offset
    ) -> None:
        index = layer.sprite_frame_index
        image = sprite.image_at(index)
        if image is None:
            return
        texture = self.texture_provider.texture_from_rgba(image)

        frame = sprite.frames[index]
        width = frame.width * layer.scale[0] * SPRITE_SCALE_FACTOR * ONE_PIXEL_SIZE
        height = frame.height * layer.scale[1] * SPRITE_SCALE_FACTOR * ONE_PIXEL_SIZE
        rotation = layer.angle * (math.pi / 180)

        x, y, z = (float(v) for v in char.position)
        self.render_commands.append(
            SpriteRenderCommand(
                scale=layer.scale,
                size=(width, height),
                position=(x, y, z),
                offset=(
                    (layer.position[0] + offset[0]) * ONE_PIXEL_SIZE,
                    (layer.position[1] + offset[1]) * ONE_PIXEL_SIZE,
                ),
                rotation_radians=rotation,
                texture=texture,
                flip_vertically=layer.mirrored,
            )
        )