"""Components that hold a character's sprite files, animation timing and state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Protocol

from midgarts.bytesutil import decode_windows1252
from midgarts.character.jobsprite import job_sprite_name
from midgarts.character.types import (
    ActionIndex,
    ActionPlayMode,
    AttachmentType,
    Direction,
    Gender,
    JobSpriteId,
    StateType,
)
from midgarts.fileformat.grf.archive import ActionSpriteFilePair

DEFAULT_SHIELD_SPRITE_NAME = "°¡µå"
SHADOW_FILE_PATH = "data/sprite/shadow"
HEAD_FOLDER = "data/sprite/ÀÎ°£Á·/¸Ó¸®Åë"
SHIELD_FOLDER = "data/sprite/¹æÆÐ"

_HUMAN_FOLDER = bytes((0xC0, 0xCE, 0xB0, 0xA3, 0xC1, 0xB7))
_BODY_FOLDER = bytes((0xB8, 0xF6, 0xC5, 0xEB))

_FIRST_ANIMATION_LENGTH = 0.1


class AttachmentLoadError(Exception):
    """Raised when the sprite files of a character attachment cannot be loaded."""


class SpriteSource(Protocol):
    """Anything that can supply an action file and its sprite file by path."""

    def get_action_and_sprite_files(self, name: str) -> ActionSpriteFilePair: ...


@dataclass
class CharacterAttachmentComponentConfig:
    """What to load for a character's attachments."""

    gender: Gender
    job_sprite_id: JobSpriteId
    head_index: int
    enable_shield: bool = False
    shield_sprite_name: str = ""


@dataclass
class CharacterAttachmentComponent:
    """Sprite files of a character's attachments (shadow, body, head, shield)."""

    files: dict[AttachmentType, ActionSpriteFilePair] = field(default_factory=dict)


@dataclass
class CharacterSpriteRenderInfoComponent:
    """Animation timing of a character; times are clock readings in seconds."""

    action_index: ActionIndex = ActionIndex.IDLE
    animation_delay: float = 0.0
    animation_started_at: float = field(default_factory=time.monotonic)
    animation_ends_at: float | None = None
    direction: Direction = Direction.SOUTH
    forced_duration: float = 0.0
    fps_multiplier: float = 1.0
    is_standing_by: bool = False

    def __post_init__(self) -> None:
        if self.animation_ends_at is None:
            self.animation_ends_at = self.animation_started_at + _FIRST_ANIMATION_LENGTH


@dataclass
class CharacterStateComponent:
    """A character's play mode together with its current and previous state."""

    play_mode: ActionPlayMode = ActionPlayMode.REPEAT
    previous_state: StateType = StateType.STAND_BY
    state: StateType = StateType.STAND_BY


def _gender_path(gender: Gender) -> str:
    return "¿©" if gender == Gender.FEMALE else "³²"


def _load(
    grf_file: SpriteSource, path: str, what: str, config: CharacterAttachmentComponentConfig
) -> ActionSpriteFilePair:
    try:
        return grf_file.get_action_and_sprite_files(path)
    except (LookupError, ValueError, OSError) as exc:
        raise AttachmentLoadError(
            f"could not load {what} act and spr files "
            f"({Gender(config.gender)}, {JobSpriteId(config.job_sprite_id)}): {exc}"
        ) from exc


def new_character_attachment_component(
    grf_file: SpriteSource, config: CharacterAttachmentComponentConfig
) -> CharacterAttachmentComponent:
    """Load the shadow, body, head and, if enabled, shield sprites of a character."""
    job_name = job_sprite_name(config.job_sprite_id)
    gender = _gender_path(config.gender)
    folder_a = decode_windows1252(_HUMAN_FOLDER)
    folder_b = decode_windows1252(_BODY_FOLDER)

    component = CharacterAttachmentComponent()
    files = component.files

    files[AttachmentType.SHADOW] = _load(grf_file, SHADOW_FILE_PATH, "shadow", config)

    body_path = f"data/sprite/{folder_a}/{folder_b}/{gender}/{job_name}_{gender}"
    files[AttachmentType.BODY] = _load(grf_file, body_path, "body", config)

    head_path = f"{HEAD_FOLDER}/{gender}/{config.head_index}_{gender}"
    files[AttachmentType.HEAD] = _load(grf_file, head_path, "head", config)

    if config.enable_shield:
        shield_name = config.shield_sprite_name or DEFAULT_SHIELD_SPRITE_NAME
        shield_path = f"{SHIELD_FOLDER}/{job_name}/{job_name}_{gender}_{shield_name}"
        files[AttachmentType.SHIELD] = _load(grf_file, shield_path, "shield", config)

    return component