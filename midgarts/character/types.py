"""Enumerations describing characters: jobs, states, actions and sprite layers."""

from __future__ import annotations

import enum


class ActionIndex(enum.IntEnum):
    """Index of the first action of an animation group in an .act file."""

    IDLE = 0
    WALKING = 8
    SITTING = 16
    PICKING_ITEM = 24
    STAND_BY = 32
    ATTACKING1 = 40
    RECEIVING_DAMAGE = 48
    FREEZE1 = 56
    DEAD = 65
    FREEZE2 = 72
    ATTACKING2 = 80
    ATTACKING3 = 88
    CASTING_SPELL = 96


class ActionPlayMode(enum.IntEnum):
    """How the frames of an action are played back."""

    REPEAT = 0
    PLAY_THEN_HOLD = 1
    ONCE = 2
    REVERSE = 3
    FIX_FRAME = 4


class Direction(enum.IntEnum):
    """The eight directions a character can face."""

    SOUTH = 0
    SOUTH_WEST = 1
    WEST = 2
    NORTH_WEST = 3
    NORTH = 4
    NORTH_EAST = 5
    EAST = 6
    SOUTH_EAST = 7


DIRECTION_TABLE: tuple[int, ...] = (6, 5, 4, 3, 2, 1, 0, 7)


class JobId(enum.IntEnum):
    """Character jobs."""

    CRUSADER = 0
    SWORDSMAN = 1
    ARCHER = 2
    RANGER = 3
    ASSASSIN = 4
    ROGUE = 5
    KNIGHT = 6
    WIZARD = 7
    SAGE = 8
    ALCHEMIST = 9
    BLACKSMITH = 10
    PRIEST = 11
    MONK = 12
    GUNSLINGER = 13

    def __str__(self) -> str:
        return self.name.capitalize()


class JobSpriteId(enum.IntEnum):
    """Identifiers of the body sprites used for each job."""

    NOVICE = 0
    SWORDSMAN = 1
    MAGICIAN = 2
    ARCHER = 3
    ALCOLYTE = 4
    MERCHANT = 5
    THIEF = 6
    KNIGHT = 7
    PRIEST = 8
    WIZARD = 9
    BLACKSMITH = 10
    HUNTER = 11
    ASSASSIN = 12
    KNIGHT2 = 13
    CRUSADER = 14
    MONK = 15
    SAGE = 16
    ROGUE = 17
    ALCHEMIST = 18
    BARD = 19
    DANCER = 20
    CRUSADER2 = 21
    KNIGHT_H = 4008
    MONK_H = 4016

    def __str__(self) -> str:
        return _JOB_SPRITE_LABELS[self]


_JOB_SPRITE_LABELS = {
    JobSpriteId.NOVICE: "Novice",
    JobSpriteId.SWORDSMAN: "Swordsman",
    JobSpriteId.MAGICIAN: "Magician",
    JobSpriteId.ARCHER: "Archer",
    JobSpriteId.ALCOLYTE: "Alcolyte",
    JobSpriteId.MERCHANT: "Merchant",
    JobSpriteId.THIEF: "Thief",
    JobSpriteId.KNIGHT: "Knight",
    JobSpriteId.PRIEST: "Priest",
    JobSpriteId.WIZARD: "Wizard",
    JobSpriteId.BLACKSMITH: "Blacksmith",
    JobSpriteId.HUNTER: "Hunter",
    JobSpriteId.ASSASSIN: "Assassin",
    JobSpriteId.KNIGHT2: "Knight2",
    JobSpriteId.CRUSADER: "Crusader",
    JobSpriteId.MONK: "Monk",
    JobSpriteId.SAGE: "Sage",
    JobSpriteId.ROGUE: "Rogue",
    JobSpriteId.ALCHEMIST: "Alchemist",
    JobSpriteId.BARD: "Bard",
    JobSpriteId.DANCER: "Dancer",
    JobSpriteId.CRUSADER2: "Crusader2",
    JobSpriteId.KNIGHT_H: "KnightH",
    JobSpriteId.MONK_H: "MonkH",
}


class StateType(str, enum.Enum):
    """What a character is currently doing."""

    IDLE = "Idle"
    WALKING = "Walking"
    ATTACKING = "Attacking"
    STAND_BY = "StandBy"

    def __str__(self) -> str:
        return self.value


class AttachmentType(enum.IntEnum):
    """Sprite layers that make up a character, in drawing slots."""

    SHADOW = 0
    BODY = 1
    HEAD = 2
    SHIELD = 3

    def __str__(self) -> str:
        return "Attachment" + self.name.capitalize()


NUM_ATTACHMENTS = len(AttachmentType)


class Gender(enum.IntEnum):
    """Character gender."""

    MALE = 0
    FEMALE = 1

    def __str__(self) -> str:
        return "m" if self is Gender.MALE else "f"


_ACTION_BY_STATE = {
    StateType.ATTACKING: ActionIndex.ATTACKING3,
    StateType.WALKING: ActionIndex.WALKING,
    StateType.IDLE: ActionIndex.IDLE,
    StateType.STAND_BY: ActionIndex.STAND_BY,
}

_STATE_BY_ACTION = {
    ActionIndex.IDLE: StateType.IDLE,
    ActionIndex.WALKING: StateType.WALKING,
    ActionIndex.STAND_BY: StateType.STAND_BY,
}


def get_action_index(state: StateType | str) -> ActionIndex:
    """Return the action group played for a character state."""
    try:
        return _ACTION_BY_STATE[StateType(state)]
    except (ValueError, KeyError):
        raise ValueError(f"state type '{state}' not supported") from None


def get_state_type(index: ActionIndex | int) -> StateType:
    """Return the character state that an action group stands for."""
    try:
        return _STATE_BY_ACTION[ActionIndex(index)]
    except (ValueError, KeyError):
        raise ValueError(f"action index '{index}' not supported") from None


def get_job_sprite_id(job_id: JobId | int, is_mounted: bool) -> JobSpriteId:
    """Return the body sprite for a job, taking a mount into account."""
    try:
        job = JobId(job_id)
    except ValueError:
        raise ValueError(f"jobid '{job_id}' not supported") from None

    if job is JobId.KNIGHT:
        return JobSpriteId.KNIGHT2 if is_mounted else JobSpriteId.KNIGHT
    if job is JobId.CRUSADER:
        return JobSpriteId.CRUSADER2 if is_mounted else JobSpriteId.CRUSADER

    simple = {
        JobId.ARCHER: JobSpriteId.ARCHER,
        JobId.MONK: JobSpriteId.MONK,
        JobId.ASSASSIN: JobSpriteId.ASSASSIN,
        JobId.SWORDSMAN: JobSpriteId.SWORDSMAN,
        JobId.ALCHEMIST: JobSpriteId.ALCHEMIST,
    }
    if job not in simple:
        raise ValueError(f"jobid '{job}' not supported")
    return simple[job]


def all_job_sprite_ids() -> list[JobSpriteId]:
    """Return the job sprites available for characters."""
    return [
        JobSpriteId.NOVICE,
        JobSpriteId.SWORDSMAN,
        JobSpriteId.MAGICIAN,
        JobSpriteId.ARCHER,
        JobSpriteId.ALCOLYTE,
        JobSpriteId.MERCHANT,
        JobSpriteId.THIEF,
        JobSpriteId.KNIGHT,
        JobSpriteId.PRIEST,
        JobSpriteId.WIZARD,
        JobSpriteId.BLACKSMITH,
        JobSpriteId.HUNTER,
        JobSpriteId.ASSASSIN,
        JobSpriteId.KNIGHT2,
        JobSpriteId.CRUSADER,
        JobSpriteId.MONK,
        JobSpriteId.SAGE,
        JobSpriteId.ROGUE,
        JobSpriteId.ALCHEMIST,
        JobSpriteId.CRUSADER2,
        JobSpriteId.KNIGHT_H,
        JobSpriteId.MONK_H,
    ]


def attachments() -> list[AttachmentType]:
    """Return every attachment type in slot order."""
    return [
        AttachmentType.SHADOW,
        AttachmentType.BODY,
        AttachmentType.HEAD,
        AttachmentType.SHIELD,
    ]