"""Tests for world_level – record resolution, platform generation, world geometry."""

from __future__ import annotations

import pygame
import pytest

from world_level import (
    GeneratedPlatforms,
    GenerationParams,
    LiteralPlatforms,
    Obstacle,
    Platform,
    SpawnPoint,
    Theme,
    WorldLevel,
    generate_platforms,
    resolve_record,
)


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

class TestPlatform:
    def test_edges(self):
        p = Platform(10, 20, 30, 40)
        assert (p.left, p.right, p.top, p.bottom) == (10, 40, 20, 60)

    def test_from_dict_short_keys(self):
        assert Platform.from_dict({"x": 1, "y": 2, "w": 3, "h": 4}) == Platform(1, 2, 3, 4)

    def test_from_dict_long_keys(self):
        assert Platform.from_dict({"x": 1, "y": 2, "width": 3, "height": 4}) == Platform(1, 2, 3, 4)

    def test_frozen(self):
        p = Platform(0, 0, 10, 10)
        with pytest.raises(AttributeError):
            p.x = 5  # type: ignore[misc]

    def test_negative_size_accepted(self):
        p = Platform(0, 0, -10, 5)
        assert p.right == -10

    def test_rect(self):
        assert Platform(5, 6, 7, 8).rect == pygame.Rect(5, 6, 7, 8)

    def test_draw_fills_rect(self):
        surface = pygame.Surface((50, 50))
        surface.fill((0, 0, 0))
        Platform(10, 10, 20, 5).draw(surface, (255, 0, 0))
        assert surface.get_at((15, 12))[:3] == (255, 0, 0)
        assert surface.get_at((5, 5))[:3] == (0, 0, 0)


# ---------------------------------------------------------------------------
# resolve_record – defaults
# ---------------------------------------------------------------------------

class TestResolveDefaults:
    def test_empty_record(self):
        rec = resolve_record({})
        assert rec.name == "Level"
        assert rec.gravity == 0.65
        assert rec.jump_velocity == -11.0
        assert rec.start == SpawnPoint(80, 180, 26)
        assert rec.goal == SpawnPoint(0, 0, 20)
        assert rec.source == LiteralPlatforms(())

    def test_missing_theme_gives_default_triple(self):
        rec = resolve_record({"name": "X"})
        assert rec.theme == Theme("#F0F0F0", "#C8C8C8", "#1478FF")

    def test_partial_theme_merged_field_by_field(self):
        rec = resolve_record({"theme": {"bg": "#000000"}})
        assert rec.theme == Theme("#000000", "#C8C8C8", "#1478FF")

    def test_theme_long_keys(self):
        rec = resolve_record({"theme": {"background": "#111111", "platform": "#222222", "actor": "#333333"}})
        assert rec.theme == Theme("#111111", "#222222", "#333333")

    def test_partial_start(self):
        rec = resolve_record({"start": {"x": 10}})
        assert rec.start == SpawnPoint(10, 180, 26)

    def test_start_radius_alias(self):
        rec = resolve_record({"start": {"x": 1, "y": 2, "r": 30}})
        assert rec.start.radius == 30

    def test_zero_gravity_kept(self):
        assert resolve_record({"gravity": 0}).gravity == 0

    def test_jump_velocity_aliases(self):
        assert resolve_record({"jumpV": -9}).jump_velocity == -9
        assert resolve_record({"jumpVelocity": -8}).jump_velocity == -8

    def test_empty_name_falls_back(self):
        assert resolve_record({"name": ""}).name == "Level"


# ---------------------------------------------------------------------------
# resolve_record – goal and platform source
# ---------------------------------------------------------------------------

class TestResolveGoalAndSource:
    def test_goal_object(self):
        rec = resolve_record({"goal": {"x": 5, "y": 6, "radius": 7}})
        assert rec.goal == SpawnPoint(5, 6, 7)

    def test_goal_flat_keys(self):
        rec = resolve_record({"goalX": 5, "goalY": 6, "goalRadius": 7})
        assert rec.goal == SpawnPoint(5, 6, 7)

    def test_goal_flat_keys_partial(self):
        rec = resolve_record({"goalX": 300})
        assert rec.goal == SpawnPoint(300, 0, 20)

    def test_literal_platforms(self):
        rec = resolve_record({"platforms": [{"x": 0, "y": 1, "w": 2, "h": 3}]})
        assert rec.source == LiteralPlatforms((Platform(0, 1, 2, 3),))

    def test_generated_wins_over_literal(self):
        rec = resolve_record({
            "levelType": "generated",
            "generationParams": {"groundY": 100, "groundWidth": 200},
            "platforms": [{"x": 0, "y": 1, "w": 2, "h": 3}],
        })
        assert isinstance(rec.source, GeneratedPlatforms)
        assert rec.source.params.ground_y == 100

    def test_params_without_generated_type_use_literal(self):
        rec = resolve_record({
            "generationParams": {"groundY": 100, "groundWidth": 200},
            "platforms": [{"x": 0, "y": 1, "w": 2, "h": 3}],
        })
        assert isinstance(rec.source, LiteralPlatforms)

    def test_empty_generation_params_still_generate(self):
        rec = resolve_record({"levelType": "generated", "generationParams": {},
                              "platforms": [{"x": 0, "y": 1, "w": 2, "h": 3}]})
        assert rec.source == GeneratedPlatforms(GenerationParams())
        assert WorldLevel.from_resolved(rec).platforms == (Platform(0, 0, 0, 36),)

    def test_generated_type_without_params_uses_literal(self):
        rec = resolve_record({"levelType": "generated", "platforms": [{"x": 0, "y": 1, "w": 2, "h": 3}]})
        assert rec.source == LiteralPlatforms((Platform(0, 1, 2, 3),))


# ---------------------------------------------------------------------------
# generate_platforms
# ---------------------------------------------------------------------------

class TestGeneratePlatforms:
    def test_ground_only(self):
        params = GenerationParams(ground_y=400, ground_width=900)
        assert generate_platforms(params) == [Platform(0, 400, 900, 36)]

    def test_stairs(self):
        params = GenerationParams(
            ground_y=400, ground_width=900,
            stair_count=3, stair_start=100, stair_width=50, gap_width=10, stair_height=40,
        )
        stairs = generate_platforms(params)[1:]
        assert [p.x for p in stairs] == [100, 160, 220]
        assert [p.y for p in stairs] == [360, 320, 280]
        assert all((p.w, p.h) == (50, 12) for p in stairs)

    def test_floating_obstacle(self):
        params = GenerationParams(
            ground_y=400, ground_width=900,
            obstacles=(Obstacle("floating", count=4, start_x=0, spacing=80, offset_y=200),),
        )
        floats = generate_platforms(params)[1:]
        assert [p.x for p in floats] == [0, 80, 160, 240]
        assert all(p.y == 200 for p in floats)
        assert all((p.w, p.h) == (50, 12) for p in floats)

    def test_diagonal_obstacle(self):
        params = GenerationParams(
            obstacles=(Obstacle("diagonal", count=3, start_x=10, spacing=70, offset_y=300),),
        )
        diag = generate_platforms(params)[1:]
        assert [(p.x, p.y) for p in diag] == [(10, 300), (80, 260), (150, 220)]
        assert all((p.w, p.h) == (60, 12) for p in diag)

    def test_unknown_obstacle_type_ignored(self):
        params = GenerationParams(
            ground_y=400, ground_width=900,
            obstacles=(Obstacle("spiky", count=5, start_x=0, spacing=10, offset_y=100),),
        )
        assert generate_platforms(params) == [Platform(0, 400, 900, 36)]

    def test_order_ground_stairs_obstacles(self):
        params = GenerationParams(
            ground_y=400, ground_width=900,
            stair_count=1, stair_start=100, stair_width=50, stair_height=40,
            obstacles=(
                Obstacle("diagonal", count=1, start_x=500, spacing=0, offset_y=100),
                Obstacle("floating", count=1, start_x=700, spacing=0, offset_y=150),
            ),
        )
        out = generate_platforms(params)
        assert out == [
            Platform(0, 400, 900, 36),
            Platform(100, 360, 50, 12),
            Platform(500, 100, 60, 12),
            Platform(700, 150, 50, 12),
        ]

    def test_deterministic(self):
        raw = {
            "groundY": 460, "groundWidth": 900, "stairCount": 4, "stairStart": 100,
            "stairWidth": 60, "stairHeight": 30, "gapWidth": 20,
            "obstacles": [{"type": "floating", "count": 2, "startX": 50, "spacing": 60, "offsetY": 200}],
        }
        a = generate_platforms(GenerationParams.from_dict(raw))
        b = generate_platforms(GenerationParams.from_dict(dict(raw)))
        assert a == b

    def test_params_from_dict(self):
        params = GenerationParams.from_dict({
            "groundY": 1, "groundWidth": 2, "stairCount": 3, "stairStart": 4,
            "stairWidth": 5, "stairHeight": 6, "gapWidth": 7,
            "obstacles": [{"type": "floating", "count": 8, "startX": 9, "spacing": 10, "offsetY": 11}],
        })
        assert params == GenerationParams(1, 2, 3, 4, 5, 6, 7, (Obstacle("floating", 8, 9, 10, 11),))


# ---------------------------------------------------------------------------
# WorldLevel
# ---------------------------------------------------------------------------

class TestWorldLevel:
    def test_infer_defaults_without_platforms(self):
        world = WorldLevel.from_record({})
        assert world.platforms == ()
        assert world.infer_width(900) == 900
        assert world.infer_height(560) == 560

    def test_infer_from_platforms(self):
        world = WorldLevel.from_record({"platforms": [
            {"x": 0, "y": 300, "w": 640, "h": 36},
            {"x": 600, "y": 100, "w": 100, "h": 12},
        ]})
        assert world.infer_width(900) == 700
        assert world.infer_height(560) == 336

    def test_generated_world(self):
        world = WorldLevel.from_record({
            "levelType": "generated",
            "generationParams": {"groundY": 400, "groundWidth": 800, "stairCount": 2,
                                 "stairStart": 100, "stairWidth": 50, "stairHeight": 40, "gapWidth": 10},
        })
        assert len(world.platforms) == 3
        assert world.infer_width() == 800
        assert world.infer_height() == 436

    def test_fields_copied_from_record(self):
        world = WorldLevel.from_record({"name": "Hill", "gravity": 1.0, "jumpV": -9,
                                        "goal": {"x": 10, "y": 20, "r": 5}})
        assert world.name == "Hill"
        assert world.gravity == 1.0
        assert world.jump_velocity == -9
        assert world.goal == SpawnPoint(10, 20, 5)

    def test_check_accepts_bundled_style_level(self):
        WorldLevel.from_record({"gravity": 0.6, "jumpV": -11, "theme": {"bg": "#EAF6FF"},
                                "platforms": [{"x": 0, "y": 400, "w": 900, "h": 36}]}).check()

    def test_check_rejects_non_numeric_field(self):
        world = WorldLevel.from_record({"platforms": [{"x": "left", "y": 0, "w": 10, "h": 10}]})
        with pytest.raises(TypeError):
            world.check()

    def test_check_rejects_unknown_colour(self):
        with pytest.raises(ValueError):
            WorldLevel.from_record({"theme": {"platform": "blurple-ish"}}).check()

    def test_name_coerced_to_text(self):
        assert WorldLevel.from_record({"name": 7}).name == "7"

    def test_immutable(self):
        world = WorldLevel.from_record({})
        with pytest.raises(AttributeError):
            world.name = "Other"  # type: ignore[misc]

    def test_draw_uses_theme_background(self):
        surface = pygame.Surface((100, 100))
        world = WorldLevel.from_record({"theme": {"bg": "#102030"}, "goal": {"x": 90, "y": 90, "r": 5}})
        world.draw(surface)
        assert surface.get_at((10, 10))[:3] == (0x10, 0x20, 0x30)
