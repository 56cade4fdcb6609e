"""Sprite folder names of the character jobs and body sprite paths."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from midgarts.bytesutil import decode_windows1252
from midgarts.character.types import Gender, JobSpriteId

MALE_FILE_PATH_FORMAT = "data/sprite/%s/%s/³²/%s_³²"
FEMALE_FILE_PATH_FORMAT = "data/sprite/%s/%s/¿©/%s_¿©"

_ENCODED_NAMES: dict[JobSpriteId, bytes] = {
    JobSpriteId.NOVICE: b"\xC3\xCA\xBA\xB8\xC0\xDA",
    JobSpriteId.SWORDSMAN: b"\xB0\xCB\xBB\xE7",
    JobSpriteId.MAGICIAN: b"\xB8\xB6\xB9\xDD\xBB\xC7",
    JobSpriteId.ARCHER: b"\xB1\xC3\xBC\xF6",
    JobSpriteId.ALCOLYTE: b"\xBC\xBA\xC1\xF7\xC0\xDA",
    JobSpriteId.MERCHANT: b"\xBB\xF3\xC0\xCE",
    JobSpriteId.THIEF: b"\xB5\xB5\xB5\xCF",
    JobSpriteId.MONK: b"\xB8\xF9\xC5\xA9",
    JobSpriteId.KNIGHT: b"\xB1\xE2\xBB\xE7",
    JobSpriteId.KNIGHT2: b"\xC6\xE4\xC4\xDA\xC6\xE4\xC4\xDA\x5F\xB1\xE2\xBB\xE7",
    JobSpriteId.PRIEST: b"\xC7\xC1\xB8\xAE\xBD\xBA\xC6\xAE",
    JobSpriteId.WIZARD: b"\xC0\xA7\xC0\xFA\xB5\xE5",
    JobSpriteId.BLACKSMITH: b"\xC1\xA6\xC3\xB6\xB0\xF8",
    JobSpriteId.HUNTER: b"\xC7\xE5\xC5\xCD",
    JobSpriteId.CRUSADER: b"\xC5\xA9\xB7\xE7\xBC\xBC\xC0\xCC\xB4\xF5",
    JobSpriteId.CRUSADER2: b"\xBD\xC5\xC6\xE4\xC4\xDA\xC5\xA9\xB7\xE7\xBC\xBC\xC0\xCC\xB4\xF5",
    JobSpriteId.SAGE: b"\xBC\xBC\xC0\xCC\xC1\xF6",
    JobSpriteId.ROGUE: b"\xB7\xCE\xB1\xD7",
    JobSpriteId.ALCHEMIST: b"\xBF\xAC\xB1\xDD\xBC\xFA\xBB\xE7",
    JobSpriteId.ASSASSIN: b"\xBE\xEE\xBC\xBC\xBD\xC5",
    JobSpriteId.BARD: b"\xB9\xD9\xB5\xE5",
    JobSpriteId.DANCER: b"\xB9\xAB\xC8\xF1",
    JobSpriteId.MONK_H: b"\xC3\xA8\xC7\xC7\xBF\xC2",
}

JOB_SPRITE_NAMES: Mapping[JobSpriteId, str] = MappingProxyType(
    {job: decode_windows1252(raw) for job, raw in _ENCODED_NAMES.items()}
)


def job_sprite_name(job_sprite_id: JobSpriteId | int) -> str:
    """Return the sprite folder and file name used for a job sprite."""
    try:
        return JOB_SPRITE_NAMES[JobSpriteId(job_sprite_id)]
    except (ValueError, KeyError):
        raise ValueError(f"unsupported jobSpriteID: {job_sprite_id}") from None


def body_file_path(gender: Gender | int, folder_a: str, folder_b: str, job_name: str) -> str:
    """Return the archive path (without extension) of a body sprite."""
    template = MALE_FILE_PATH_FORMAT if gender == Gender.MALE else FEMALE_FILE_PATH_FORMAT
    return template % (folder_a, folder_b, job_name)