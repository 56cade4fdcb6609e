"""System that picks each character's action and animation timing from its state."""

from __future__ import annotations

import time
from collections.abc import Callable

from midgarts.character.types import StateType, get_action_index
from midgarts.component import (
    CharacterAttachmentComponentConfig,
    SpriteSource,
    new_character_attachment_component,
)
from midgarts.entity import Character


class CharacterActionSystem:
    """Keeps characters' action index, start time and playback speed up to date."""

    def __init__(
        self, grf_file: SpriteSource, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.grf_file = grf_file
        self.clock = clock
        self.characters: dict[int, Character] = {}

    def add(self, character: Character) -> None:
        """Load the character's attachments and start tracking it."""
        character.attachments = new_character_attachment_component(
            self.grf_file,
            CharacterAttachmentComponentConfig(
                gender=character.gender,
                job_sprite_id=character.job_sprite_id,
                head_index=character.head_index,
            ),
        )
        self.characters[character.id] = character

    def update(self, dt: float) -> None:
        """Advance every tracked character's animation state."""
        for char in self.characters.values():
            now = self.clock()
            info = char.render_info
            state = char.state_component

            stop_previous = now > info.animation_ends_at
            if state.previous_state != StateType.WALKING:
                stop_previous = True

            info.action_index = get_action_index(state.state)

            changed = state.state != state.previous_state and state.state != StateType.IDLE
            idle_restart = state.state == StateType.IDLE and stop_previous
            if changed or idle_restart:
                info.animation_started_at = now
                info.forced_duration = 0.0
                info.fps_multiplier = (
                    char.movement_speed if state.state == StateType.WALKING else 1.0
                )
            info.animation_ends_at = now + info.animation_delay

    def remove(self, entity_id: int) -> None:
        """Stop tracking the character with the given id."""
        self.characters.pop(entity_id, None)