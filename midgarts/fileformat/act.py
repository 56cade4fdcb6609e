"""Reader for action (.act) files, which describe sprite animations."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from midgarts.bytesutil import decode_windows1252, skip_bytes

HEADER_SIGNATURE = b"AC"
ACTION_DEFAULT_DELAY = 100

_SOUND_NAME_SIZE = 40
_FRAME_PADDING = 32
_MIN_FRAME_SIZE = _FRAME_PADDING + 4
_MIN_LAYER_SIZE = 16
_DELAY_SCALE = 25.0


@dataclass
class ActionFrameLayer:
    """One sprite drawn as part of an animation frame."""

    index: int
    position: tuple[int, int]
    sprite_frame_index: int
    mirrored: bool
    scale: tuple[float, float]
    color: tuple[int, int, int, int]
    angle: int = 0
    sprite_type: int = 0
    width: int = 0
    height: int = 0


@dataclass
class ActionFrame:
    """One animation frame: its layers, sound and anchor positions.

    ``positions`` always holds one slot per frame of the owning action;
    slots not given by the file stay at ``(0, 0)``.
    """

    layers: list[ActionFrameLayer]
    sound: int
    positions: list[tuple[int, int]]


@dataclass
class Action:
    """An animation: a sequence of frames and the delay between them."""

    frames: list[ActionFrame]
    delay: int = ACTION_DEFAULT_DELAY
    duration_milliseconds: int = 0


@dataclass
class ActionFile:
    """A parsed .act file."""

    signature: str
    version: float
    actions: list[Action] = field(default_factory=list)
    sounds: list[str] = field(default_factory=list)

    @property
    def action_count(self) -> int:
        return len(self.actions)


def _version(major: int, minor: int) -> float:
    return round(minor + major / 10, 1)


def _remaining(stream: io.BytesIO) -> int:
    with stream.getbuffer() as buf:
        return len(buf) - stream.tell()


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    raw = stream.read(size)
    if len(raw) < size:
        raise ValueError("truncated act data")
    return raw


def _unpack(stream: BinaryIO, fmt: str) -> tuple:
    return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))


def _read_layers(stream: io.BytesIO, version: float) -> list[ActionFrameLayer]:
    (layer_count,) = _unpack(stream, "<I")
    if layer_count * _MIN_LAYER_SIZE > _remaining(stream):
        raise ValueError("truncated act layer table")

    layers = []
    for index in range(layer_count):
        x, y, sprite_frame_index, mirrored = _unpack(stream, "<iiii")
        color = (255, 255, 255, 255)
        scale = (0.0, 0.0)
        angle = sprite_type = width = height = 0

        if version >= 2.0:
            color = _unpack(stream, "<BBBB")
            (scale_x,) = _unpack(stream, "<f")
            scale_y = scale_x if version <= 2.3 else _unpack(stream, "<f")[0]
            scale = (scale_x, scale_y)
            angle, sprite_type = _unpack(stream, "<ii")
            if version >= 2.5:
                width, height = _unpack(stream, "<ii")

        layers.append(
            ActionFrameLayer(
                index=index,
                position=(x, y),
                sprite_frame_index=sprite_frame_index,
                mirrored=mirrored != 0,
                scale=scale,
                color=color,
                angle=angle,
                sprite_type=sprite_type,
                width=width,
                height=height,
            )
        )
    return layers


def _read_frames(stream: io.BytesIO, version: float) -> list[ActionFrame]:
    (frame_count,) = _unpack(stream, "<I")
    if frame_count * _MIN_FRAME_SIZE > _remaining(stream) + _FRAME_PADDING:
        raise ValueError("truncated act frame table")

    frames = []
    for _ in range(frame_count):
        skip_bytes(stream, _FRAME_PADDING)
        layers = _read_layers(stream, version)
        sound = _unpack(stream, "<i")[0] if version >= 2.0 else -1

        positions = [(0, 0)] * frame_count
        if version >= 2.3:
            (position_count,) = _unpack(stream, "<i")
            if position_count > frame_count:
                raise ValueError(
                    f"frame declares {position_count} positions but action has {frame_count} frames"
                )
            for i in range(position_count):
                skip_bytes(stream, 4)
                positions[i] = _unpack(stream, "<ii")
                skip_bytes(stream, 4)

        frames.append(ActionFrame(layers=layers, sound=sound, positions=positions))
    return frames


def _read_sounds(stream: io.BytesIO) -> list[str]:
    (count,) = _unpack(stream, "<i")
    if count < 0 or count * _SOUND_NAME_SIZE > _remaining(stream):
        raise ValueError(f"invalid sound count {count}")
    return [
        decode_windows1252(_read_exact(stream, _SOUND_NAME_SIZE).split(b"\x00", 1)[0])
        for _ in range(count)
    ]


def _delay_from(raw_delay: float) -> int:
    try:
        scaled = struct.unpack("<f", struct.pack("<f", raw_delay * _DELAY_SCALE))[0]
        delay = int(scaled)
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"invalid action delay {raw_delay}") from exc
    if delay < 0:
        raise ValueError(f"invalid action delay {raw_delay}")
    return delay


def load(data: bytes) -> ActionFile:
    """Parse the contents of an .act file."""
    stream = io.BytesIO(data)
    signature = stream.read(2)
    if signature != HEADER_SIGNATURE:
        raise ValueError(f"invalid signature: {signature!r}")

    major, minor, action_count = _unpack(stream, "<BBH")
    version = _version(major, minor)
    skip_bytes(stream, 10)

    actions = [Action(frames=_read_frames(stream, version)) for _ in range(action_count)]
    sounds = _read_sounds(stream) if version > 2.1 else []

    for action in actions:
        # Files that carry no delay table leave every delay at zero.
        raw = stream.read(4)
        raw_delay = struct.unpack("<f", raw)[0] if len(raw) == 4 else 0.0
        action.delay = _delay_from(raw_delay)
        action.duration_milliseconds = action.delay * len(action.frames)

    return ActionFile(
        signature=signature.decode("ascii"),
        version=version,
        actions=actions,
        sounds=sounds,
    )