import itertools
import random

import pytest

from raider.config import GameConfig
from raider.entities import ARCHETYPES, LARGE, MEDIUM, SMALL, Bullet, Enemy
from raider.session import GameSession, SessionState, SessionStateError

from conftest import ScriptedRandom


def player_bullet(x, y):
    return Bullet(x=x, y=y, width=10, height=2, speed=7, color="#88ffff")


def enemy_bullet(x, y):
    return Bullet(x=x, y=y, width=8, height=2, speed=5, color="#ff8888")


def record(session, event):
    seen = []
    session.subscribe(event, seen.append)
    return seen


# ----------------------------
# Player movement and firing
# ----------------------------

@pytest.mark.parametrize("up,down,left,right", list(itertools.product([False, True], repeat=4)))
def test_player_stays_in_left_half(session, up, down, left, right):
    keys = session.controls
    keys.up, keys.down, keys.left, keys.right = up, down, left, right

    for _ in range(100):
        session.tick(10)
        p = session.player
        assert 10 <= p.x <= 160
        assert 10 <= p.y <= 230


def test_player_reaches_corners(session):
    session.controls.up = session.controls.left = True
    for _ in range(60):
        session.tick(10)
    assert (session.player.x, session.player.y) == (10, 10)

    session.controls.release_all()
    session.controls.down = session.controls.right = True
    for _ in range(100):
        session.tick(10)
    assert (session.player.x, session.player.y) == (160, 230)


def test_fire_respects_cooldown(session):
    session.controls.fire = True

    shot_times = []
    for now in range(10, 1001, 10):
        session.tick(now)
        if session.events["shots"]:
            shot_times.append(now)

    assert shot_times == [10, 270, 530, 790]


def test_bullet_leaves_from_leading_edge(session):
    session.controls.fire = True
    session.tick(10)

    assert len(session.bullets) == 1
    b = session.bullets[0]
    # spawned at x=64 and advanced once in the same tick
    assert b.x == 40 + 24 + 7
    assert b.y == 120 + 5


# ----------------------------
# Bullets
# ----------------------------

def test_bullet_removed_past_right_edge(session):
    session.bullets.append(player_bullet(319, 50))
    session.tick(10)
    assert session.bullets == []


def test_bullet_on_right_edge_survives(session):
    session.bullets.append(player_bullet(313, 50))
    session.tick(10)
    assert [b.x for b in session.bullets] == [320]


def test_enemy_bullet_damages_player(session):
    health = record(session, "health")
    session.enemy_bullets.append(enemy_bullet(45, 124))

    session.tick(10)

    assert session.player.health == 90
    assert session.enemy_bullets == []
    assert session.events["damage"] == 10
    assert health == [90]
    assert session.state is SessionState.RUNNING


def test_enemy_bullet_removed_past_left_edge(session):
    session.enemy_bullets.append(enemy_bullet(3, 50))
    session.tick(10)
    assert session.enemy_bullets == []
    assert session.player.health == 100


# ----------------------------
# Enemies
# ----------------------------

def test_small_enemy_destroyed_by_one_bullet(session):
    score = record(session, "score")
    session.enemies.append(Enemy.from_archetype(SMALL, 100, 100))
    session.bullets.append(player_bullet(95, 103))

    session.tick(10)

    assert session.enemies == []
    assert session.bullets == []
    assert session.score == 10
    assert score == [10]
    assert session.events["kills"] == 1
    assert session.events["hits"] == 1


def test_bullet_takes_exactly_one_health(session):
    session.enemies.append(Enemy.from_archetype(LARGE, 100, 100))
    session.bullets.append(player_bullet(95, 110))
    session.bullets.append(player_bullet(95, 50))  # misses

    session.tick(10)

    assert len(session.enemies) == 1
    assert session.enemies[0].health == 3
    assert [b.y for b in session.bullets] == [50]
    assert session.score == 0


def test_every_overlapping_bullet_hits_in_one_tick(session):
    session.enemies.append(Enemy.from_archetype(MEDIUM, 100, 100))
    session.bullets.append(player_bullet(95, 103))
    session.bullets.append(player_bullet(100, 106))

    session.tick(10)

    assert session.enemies == []
    assert session.bullets == []
    assert session.score == 20


def test_medium_enemy_survives_single_hit(session):
    session.enemies.append(Enemy.from_archetype(MEDIUM, 100, 100))
    session.bullets.append(player_bullet(95, 103))

    session.tick(10)

    assert [e.health for e in session.enemies] == [1]
    assert session.bullets == []
    assert session.score == 0


def test_enemy_killed_by_bullet_does_not_ram_player(session):
    session.enemies.append(Enemy.from_archetype(SMALL, 48, 121))
    session.bullets.append(player_bullet(38, 124))

    session.tick(10)

    assert session.enemies == []
    assert session.score == 10
    assert session.player.health == 100


def test_enemy_ramming_player(session):
    session.enemies.append(Enemy.from_archetype(LARGE, 50, 115))

    session.tick(10)

    assert session.player.health == 80
    assert session.enemies == []
    assert session.score == 0
    assert session.events["damage"] == 20


def test_lethal_ram_ends_session_once(session):
    game_over = record(session, "game_over")
    states = record(session, "state")
    session.player.health = 10
    session.enemies.append(Enemy.from_archetype(LARGE, 50, 115))

    session.tick(10)

    assert session.player.health == -10
    assert session.state is SessionState.OVER
    assert game_over == [0]
    assert states == [SessionState.OVER]


def test_second_lethal_hit_same_tick_notifies_once(session):
    game_over = record(session, "game_over")
    health = record(session, "health")
    session.player.health = 10
    session.enemies.append(Enemy.from_archetype(LARGE, 50, 115))
    session.enemies.append(Enemy.from_archetype(LARGE, 52, 112))

    session.tick(10)

    assert health == [-10, -30]
    assert game_over == [0]
    assert session.enemies == []


def test_enemy_removed_past_left_edge(session):
    session.enemies.append(Enemy.from_archetype(SMALL, -15, 50))
    session.enemies.append(Enemy.from_archetype(SMALL, -10, 80))

    session.tick(10)

    assert [e.x for e in session.enemies] == [-13]
    assert session.score == 0
    assert session.player.health == 100


def test_enemy_fires_from_leading_edge(session, rng):
    session.enemies.append(Enemy.from_archetype(SMALL, 200, 50))
    rng.values = [0.001]

    session.tick(10)

    assert len(session.enemy_bullets) == 1
    b = session.enemy_bullets[0]
    assert (b.x, b.y, b.width, b.height, b.speed) == (197, 54, 8, 2, 5)

    session.tick(20)
    assert session.enemy_bullets[0].x == 192


def test_enemy_holds_fire_above_chance(session, rng):
    session.enemies.append(Enemy.from_archetype(LARGE, 200, 50))
    rng.values = [0.008]
    session.tick(10)
    assert session.enemy_bullets == []


# ----------------------------
# Spawning
# ----------------------------

def test_at_most_one_spawn_per_interval(session, rng):
    rng.choices = [0, 1, 2] * 3
    session.controls.up = True  # keep clear of the spawn lane

    spawn_times = []
    calls = rng.randrange_calls
    for now in range(16, 10001, 16):
        session.tick(now)
        if rng.randrange_calls != calls:
            calls = rng.randrange_calls
            spawn_times.append(now)
            newest = session.enemies[-1]
            assert newest.archetype in ARCHETYPES
            assert newest.x == 320 - newest.speed

    assert spawn_times == [1504, 3008, 4512, 6016, 7520, 9024]
    assert all(b - a > 1500 for a, b in zip(spawn_times, spawn_times[1:]))


# ----------------------------
# Stars
# ----------------------------

def test_star_wraps_to_right_edge():
    rng = ScriptedRandom()
    s = GameSession(GameConfig(num_stars=1), rng=rng)
    s.start()
    s.stars[0].x = 1
    # spawn y, fire roll, then the star's new y
    rng.values = [0.5, 0.5, 0.25]

    s.tick(0)

    assert s.stars[0].x == 320
    assert s.stars[0].y == 60


# ----------------------------
# Lifecycle
# ----------------------------

def test_idle_session_ignores_ticks(config, rng):
    s = GameSession(config, rng=rng)
    assert s.state is SessionState.IDLE
    assert s.tick(0) is False
    assert s.enemies == []


def test_start_twice_is_rejected(session):
    with pytest.raises(SessionStateError):
        session.start()


def test_restart_needs_game_over(session):
    with pytest.raises(SessionStateError):
        session.restart()


def test_finished_session_ignores_ticks(session):
    session.player.health = 10
    session.enemies.append(Enemy.from_archetype(LARGE, 50, 115))
    session.tick(10)
    session.bullets.append(player_bullet(100, 50))

    assert session.tick(20) is False
    assert session.bullets[0].x == 100


def test_restart_resets_session(rng):
    s = GameSession(GameConfig(), rng=rng)
    s.start()
    s.tick(0)
    s.score = 50
    s.player.health = 10
    s.player.x = 100
    s.bullets.append(player_bullet(100, 50))
    s.enemy_bullets.append(enemy_bullet(200, 50))
    s.enemies.append(Enemy.from_archetype(LARGE, 100, 115))
    s.tick(10)
    assert s.state is SessionState.OVER

    s.restart()

    assert s.state is SessionState.RUNNING
    assert s.score == 0
    assert s.player.health == 100
    assert (s.player.x, s.player.y) == (40, 120)
    assert s.bullets == [] and s.enemy_bullets == [] and s.enemies == []
    assert len(s.stars) == 30


def test_unknown_event_rejected(session):
    with pytest.raises(KeyError):
        session.subscribe("explosion", print)


# ----------------------------
# Random play
# ----------------------------

def test_random_play_keeps_invariants():
    session = GameSession(GameConfig(), rng=random.Random(7))
    inputs = random.Random(11)
    game_overs = record(session, "game_over")
    session.start()

    sessions = 1
    last_health = session.player.health
    rows = {(a.width, a.height, a.speed, a.points, a.fire_chance) for a in ARCHETYPES}

    for i in range(5000):
        keys = session.controls
        keys.up, keys.down, keys.left, keys.right, keys.fire = (
            inputs.random() < 0.5 for _ in range(5)
        )
        session.tick(i * 16.0)

        p = session.player
        assert 10 <= p.x <= 160 and 10 <= p.y <= 230
        assert p.health <= last_health
        last_health = p.health

        for e in session.enemies:
            assert (e.width, e.height, e.speed, e.points, e.fire_chance) in rows
            assert 0 < e.health <= e.archetype.health

        if session.state is SessionState.OVER:
            assert p.health <= 0
            session.restart()
            sessions += 1
            last_health = session.player.health

    assert len(game_overs) == sessions - 1
