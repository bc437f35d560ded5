"""Tests for the impact particle pool."""

import random

import pytest

from volley.particles import ParticlePool
from volley.types import Vec2
from volley import court

IMPACT = Vec2(300, court.GROUND_LEVEL)


def test_spawn_impact_burst():
    pool = ParticlePool(random.Random(1))
    handles = pool.spawn(IMPACT, court.IMPACT_PARTICLES)

    assert len(handles) == court.IMPACT_PARTICLES
    assert len(pool) == court.IMPACT_PARTICLES
    for p in pool.active():
        assert p.pos == IMPACT
        assert p.pos is not IMPACT
        assert p.vel.y < 0, "Dust should be thrown upward"
        assert p.life == 1.0 and p.alpha == 1.0
        assert p.color == court.GROUND_COLOR


def test_spawn_speed_within_range():
    pool = ParticlePool(random.Random(2))
    pool.spawn(IMPACT, 50)
    for p in pool.active():
        speed = p.vel.magnitude()
        assert court.PARTICLE_MIN_SPEED - 1e-9 <= speed <= court.PARTICLE_MAX_SPEED + 1e-9


def test_overflow_drops_extra_requests():
    pool = ParticlePool(random.Random(3))
    pool.spawn(IMPACT, 90)
    handles = pool.spawn(IMPACT, court.IMPACT_PARTICLES)

    assert len(handles) == court.MAX_PARTICLES - 90
    assert len(pool) == court.MAX_PARTICLES


def test_request_larger_than_capacity():
    pool = ParticlePool(random.Random(4))
    assert len(pool.spawn(IMPACT, 150)) == court.MAX_PARTICLES
    assert pool.spawn(IMPACT, 1) == []


def test_particles_expire():
    """Life drops 0.02 per frame, so everything is gone within 60 frames."""
    pool = ParticlePool(random.Random(5))
    pool.spawn(Vec2(300, 200), court.IMPACT_PARTICLES)
    for _ in range(60):
        pool.update()
    assert len(pool) == 0


def test_update_applies_gravity_then_moves():
    pool = ParticlePool(random.Random(6))
    (handle,) = pool.spawn(Vec2(300, 200), 1)
    p = pool.get(handle)
    vx, vy = p.vel.x, p.vel.y

    pool.update()

    assert p.vel.y == pytest.approx(vy + court.PARTICLE_GRAVITY)
    assert p.pos.x == pytest.approx(300 + vx)
    assert p.pos.y == pytest.approx(200 + vy + court.PARTICLE_GRAVITY)
    assert p.alpha == p.life == 1.0 - court.PARTICLE_LIFE_DECAY


def test_particle_below_ground_margin_dies():
    pool = ParticlePool(random.Random(7))
    (handle,) = pool.spawn(IMPACT, 1)
    p = pool.get(handle)
    p.pos.y = court.GROUND_LEVEL + court.PARTICLE_GROUND_MARGIN + 1
    p.vel.y = 0.0
    pool.update()
    assert not p.active


def test_released_slot_is_reused():
    pool = ParticlePool(random.Random(8))
    first = pool.spawn(IMPACT, 3)
    pool.release(first[1])
    assert len(pool) == 2
    assert pool.spawn(IMPACT, 1) == [first[1]]


def test_clear():
    pool = ParticlePool(random.Random(9))
    pool.spawn(IMPACT, 20)
    pool.clear()
    assert len(pool) == 0


def test_same_seed_same_dust():
    a = ParticlePool(random.Random(42))
    b = ParticlePool(random.Random(42))
    a.spawn(IMPACT, court.IMPACT_PARTICLES)
    b.spawn(IMPACT, court.IMPACT_PARTICLES)
    for _ in range(10):
        a.update()
        b.update()
    assert [p.pos for p in a.active()] == [p.pos for p in b.active()]
