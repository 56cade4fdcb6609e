"""Characters: the entities the systems animate and draw."""

from __future__ import annotations

import itertools

from midgarts.character.types import Gender, JobSpriteId, StateType
from midgarts.component import (
    CharacterAttachmentComponent,
    CharacterSpriteRenderInfoComponent,
    CharacterStateComponent,
)
from midgarts.graphic.transform import ORIGIN, Transform

_ids = itertools.count(1)


class Character(Transform):
    """A character placed in the world, with its components and appearance."""

    def __init__(self, gender: Gender, job_sprite_id: JobSpriteId, head_index: int) -> None:
        super().__init__(position=ORIGIN)
        self.id = next(_ids)
        self.attachments: CharacterAttachmentComponent | None = None
        self.state_component = CharacterStateComponent()
        self.render_info = CharacterSpriteRenderInfoComponent()
        self.gender = Gender(gender)
        self.job_sprite_id = JobSpriteId(job_sprite_id)
        self.head_index = head_index
        self.is_mounted = True
        self.movement_speed = 1.25
        self.has_shield = False
        self.shield_sprite_name = ""

    @property
    def state(self) -> StateType:
        """The character's current state."""
        return self.state_component.state

    @property
    def previous_state(self) -> StateType:
        """The state the character was in before the current one."""
        return self.state_component.previous_state

    def set_state(self, state: StateType | str) -> None:
        """Enter a new state, remembering the current one as previous."""
        self.state_component.previous_state = self.state_component.state
        self.state_component.state = StateType(state)

    def __repr__(self) -> str:
        return (
            f"Character(id={self.id}, gender={self.gender!s}, "
            f"job={self.job_sprite_id!s}, state={self.state!s})"
        )