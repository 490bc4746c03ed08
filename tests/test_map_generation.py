"""Tests for the generation process: milestones, backpressure, disconnect, cancel."""

import sys
import os
import threading
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.config import GenerationConfig
from delve.core.errors import GenerationCancelled, InsufficientSpaceError
from delve.core.progress import StepProgress
from delve.engine.map_generation import (
    GENERATION_STEPS,
    MapGeneration,
    MapGenerator,
    ProgressGauge,
    generate_level,
)

CONFIG = GenerationConfig(map_width=60, map_height=30, room_count=5, max_room_size=8)


def _collect(into: list):
    def consumer(channel):
        for progress in channel:
            into.append(progress)
    return consumer


# ---------------------------------------------------------------------------
# MapGenerator
# ---------------------------------------------------------------------------

class TestMapGenerator:
    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            MapGenerator(GenerationConfig(room_count=1))

    def test_seed_fallbacks(self):
        assert MapGenerator(CONFIG, "explicit").seed == "explicit"
        seeded = GenerationConfig(seed="from-config", map_width=60, map_height=30, room_count=5)
        assert MapGenerator(seeded).seed == "from-config"
        assert MapGenerator(CONFIG).seed != MapGenerator(CONFIG).seed

    def test_generate_without_reporter(self):
        m = MapGenerator(CONFIG, "plain").generate()
        assert m.seed == "plain"
        assert len(m.rooms) == CONFIG.room_count

    def test_insufficient_space(self):
        cramped = GenerationConfig(map_width=10, map_height=10, room_count=10, max_room_size=3)
        with pytest.raises(InsufficientSpaceError):
            generate_level(cramped, seed="tight")


# ---------------------------------------------------------------------------
# MapGeneration with a consumer
# ---------------------------------------------------------------------------

class TestMapGeneration:
    def test_milestones_strictly_increasing(self):
        seen: list[StepProgress] = []
        m = generate_level(CONFIG, seed="milestones", consumer=_collect(seen))
        assert m is not None
        assert [p.current_step for p in seen] == list(range(1, len(GENERATION_STEPS) + 1))
        assert [p.step_name for p in seen] == list(GENERATION_STEPS)
        assert sum(p.is_done() for p in seen) == 1
        assert seen[-1].is_done()

    def test_slow_consumer_gets_every_message(self):
        seen: list[StepProgress] = []

        def slow(channel):
            for progress in channel:
                time.sleep(0.02)
                seen.append(progress)

        generate_level(CONFIG, seed="slow", consumer=slow)
        assert len(seen) == len(GENERATION_STEPS)

    def test_consumer_leaving_early_still_returns_map(self):
        def impatient(channel):
            channel.receive()

        m = generate_level(CONFIG, seed="impatient", consumer=impatient)
        assert len(m.rooms) == CONFIG.room_count
        assert m.fingerprint() == generate_level(CONFIG, seed="impatient").fingerprint()

    def test_progress_does_not_change_result(self):
        with_consumer = generate_level(CONFIG, seed="same", consumer=_collect([]))
        without = generate_level(CONFIG, seed="same")
        assert with_consumer.fingerprint() == without.fingerprint()

    def test_cancel_before_start(self):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(GenerationCancelled):
            generate_level(CONFIG, seed="cancel", cancel=cancel)

    def test_cancel_from_consumer(self):
        cancel = threading.Event()

        def canceller(channel):
            for progress in channel:
                if progress.current_step == 1:
                    cancel.set()

        with pytest.raises(GenerationCancelled):
            generate_level(CONFIG, seed="cancel", consumer=canceller, cancel=cancel)

    def test_generation_reused_for_same_seed(self):
        generation = MapGeneration(MapGenerator(CONFIG, "reuse"))
        assert generation.generator.seed == "reuse"
        assert generation.generate_level().fingerprint() == generation.generate_level().fingerprint()


# ---------------------------------------------------------------------------
# ProgressGauge
# ---------------------------------------------------------------------------

class TestProgressGauge:
    def test_render(self):
        gauge = ProgressGauge()
        assert gauge.render(StepProgress("X", 3, 6)) == "[##########..........]  50% X"
        assert gauge.render(StepProgress("Done", 6, 6)) == "[" + "#" * 20 + "] 100% Done"

    def test_confirms_after_done(self):
        confirmed = []
        gauge = ProgressGauge(confirm=lambda: confirmed.append(True))
        generate_level(CONFIG, seed="gauge", consumer=gauge)
        assert confirmed == [True]
        assert len(gauge.seen) == len(GENERATION_STEPS)

    def test_no_confirm_without_done(self):
        confirmed = []
        cancel = threading.Event()
        cancel.set()
        gauge = ProgressGauge(confirm=lambda: confirmed.append(True))
        with pytest.raises(GenerationCancelled):
            generate_level(CONFIG, seed="gauge", consumer=gauge, cancel=cancel)
        assert confirmed == []
