"""死亡判定ビヘイビアのテスト"""

import numpy as np
import pytest
from imagesketcher.behaviors import BoundsDeath, DistanceDeath, LifetimeDeath, jittered
from imagesketcher.entities.particle import Particle
from imagesketcher.sketcher import Sketcher


def _sketcher(particle_count=0, size=100):
    sketcher = Sketcher(np.zeros((size, size, 3), dtype=np.uint8),
                        behaviors=[], particle_count=particle_count, seed=0)
    sketcher.setup()
    return sketcher


class TestLifetimeDeath:
    def test_dies_on_max_life_call(self):
        """max_life=5 なら5回目の適用で死亡"""
        sketcher = _sketcher()
        death = LifetimeDeath(5)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0))

        for i in range(4):
            death.apply_to_particle(p)
            assert p.is_alive, f"died too early at call {i + 1}"
        death.apply_to_particle(p)
        assert not p.is_alive

    def test_entries_removed_on_death(self):
        sketcher = _sketcher()
        death = LifetimeDeath(2)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0))
        death.apply_to_particle(p)
        assert death.tracked_count() == 1
        assert death.total_for(p) == 1

        death.apply_to_particle(p)
        assert death.tracked_count() == 0
        assert death.total_for(p) is None

    def test_limit_function_evaluated_once_per_particle(self):
        """上限関数は初めて観測したときに一度だけ呼ばれる"""
        sketcher = _sketcher()
        calls = []

        def limit(particle):
            calls.append(particle)
            return 3

        death = LifetimeDeath(limit)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0))
        q = Particle(sketcher, (20.0, 20.0), (0, 0, 0))
        for _ in range(3):
            death.apply_to_particle(p)
            death.apply_to_particle(q)

        assert calls == [p, q]
        assert not p.is_alive
        assert not q.is_alive

    def test_purge_when_table_grows(self):
        """テーブルが PURGE_FACTOR × particle_count を超えたら死亡済みを掃除"""
        sketcher = _sketcher(particle_count=2)
        death = LifetimeDeath(100)
        particles = [Particle(sketcher, (10.0, 10.0), (0, 0, 0)) for _ in range(5)]
        for p in particles:
            death.apply_to_particle(p)
        for p in particles[1:]:
            p.kill()

        death.update(sketcher)
        assert death.tracked_count() == 1
        assert death.total_for(particles[0]) == 1

    def test_no_purge_below_threshold(self):
        sketcher = _sketcher(particle_count=2)
        death = LifetimeDeath(100)
        particles = [Particle(sketcher, (10.0, 10.0), (0, 0, 0)) for _ in range(4)]
        for p in particles:
            death.apply_to_particle(p)
            p.kill()

        death.update(sketcher)
        assert death.tracked_count() == 4

    @pytest.mark.parametrize("max_life, error", [
        (0, ValueError),
        (-1, ValueError),
        ("100", TypeError),
        (None, TypeError),
        (float('inf'), ValueError),
    ])
    def test_invalid_limit(self, max_life, error):
        with pytest.raises(error):
            LifetimeDeath(max_life)

    @pytest.mark.parametrize("returned, error", [
        (None, TypeError),
        ("10", TypeError),
        (0, ValueError),
        (-3.0, ValueError),
        (float('nan'), ValueError),
    ])
    def test_limit_function_result_is_validated(self, returned, error):
        """上限関数が正の数を返さなければ、比較の前に分かりやすいエラーにする"""
        sketcher = _sketcher()
        death = LifetimeDeath(lambda particle: returned)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0))
        with pytest.raises(error, match="max_life function must return a positive number"):
            death.apply_to_particle(p)
        assert death.tracked_count() == 0
        assert p.is_alive

    def test_distance_limit_function_result_is_validated(self):
        sketcher = _sketcher()
        death = DistanceDeath(lambda particle: None)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0), velocity=(1.0, 0.0))
        with pytest.raises(TypeError, match="max_distance"):
            death.apply_to_particle(p)

    def test_type_error_message(self):
        with pytest.raises(TypeError, match="must either be a number or a function"):
            LifetimeDeath("forever")


class TestDistanceDeath:
    def test_accumulates_speed(self):
        """毎回 |velocity| を加算し、max_distance に達したら死亡"""
        sketcher = _sketcher()
        death = DistanceDeath(10.0)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0), velocity=(3.0, 4.0))

        death.apply_to_particle(p)
        assert p.is_alive
        assert death.total_for(p) == 5.0

        death.apply_to_particle(p)
        assert not p.is_alive

    def test_stationary_particle_never_dies(self):
        sketcher = _sketcher()
        death = DistanceDeath(1.0)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0), velocity=(0.0, 0.0))
        for _ in range(100):
            death.apply_to_particle(p)
        assert p.is_alive


class TestBoundsDeath:
    @pytest.mark.parametrize("position, alive", [
        ((0.0, 0.0), True),
        ((99.9, 99.9), True),
        ((50.0, 50.0), True),
        ((-1.0, 5.0), False),
        ((5.0, -0.1), False),
        ((100.0, 50.0), False),
        ((50.0, 100.0), False),
    ])
    def test_kill_outside_buffer(self, position, alive):
        sketcher = _sketcher()
        p = Particle(sketcher, position, (0, 0, 0))
        BoundsDeath().apply_to_particle(p)
        assert p.is_alive is alive, f"position {position}: alive={p.is_alive}"

    def test_uses_current_buffer_size(self):
        """画像差し替え後もスケッチャーの寸法で判定する"""
        sketcher = Sketcher(np.zeros((100, 100, 3), dtype=np.uint8), width=40, height=30,
                            behaviors=[], particle_count=0)
        sketcher.setup()
        p = Particle(sketcher, (45.0, 10.0), (0, 0, 0))
        BoundsDeath().apply_to_particle(p)
        assert not p.is_alive


class TestJittered:
    def test_values_within_range(self):
        sketcher = _sketcher()
        generate = jittered(100, 0.25)
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0))
        values = [generate(p) for _ in range(200)]
        assert min(values) >= 75.0
        assert max(values) < 125.0

    def test_zero_jitter_is_constant(self):
        sketcher = _sketcher()
        p = Particle(sketcher, (10.0, 10.0), (0, 0, 0))
        assert jittered(100, 0.0)(p) == 100.0

    def test_invalid_jitter(self):
        with pytest.raises(ValueError):
            jittered(100, 1.5)
