import numpy as np

from midgarts.character.types import Direction, Gender, JobSpriteId, StateType
from midgarts.entity import Character


def test_new_character_defaults():
    char = Character(Gender.MALE, JobSpriteId.KNIGHT, 22)
    assert char.is_mounted is True
    assert char.movement_speed == 1.25
    assert char.has_shield is False
    assert char.state == StateType.STAND_BY
    assert char.previous_state == StateType.STAND_BY
    assert char.attachments is None
    assert char.render_info.direction == Direction.SOUTH
    assert np.array_equal(char.position, np.zeros(3))
    assert char.head_index == 22
    assert char.job_sprite_id is JobSpriteId.KNIGHT


def test_ids_are_unique():
    chars = [Character(Gender.FEMALE, JobSpriteId.SAGE, 4) for _ in range(5)]
    assert len({c.id for c in chars}) == 5


def test_set_state_keeps_previous():
    char = Character(Gender.MALE, JobSpriteId.MONK, 15)
    char.set_state(StateType.WALKING)
    assert char.state == StateType.WALKING
    assert char.previous_state == StateType.STAND_BY
    char.set_state("Idle")
    assert char.state == StateType.IDLE
    assert char.previous_state == StateType.WALKING


def test_position_can_be_moved():
    char = Character(Gender.MALE, JobSpriteId.BARD, 19)
    char.position = (4, 44, 0)
    assert char.position.tolist() == [4.0, 44.0, 0.0]