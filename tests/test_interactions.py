"""
中子与网格相互作用的单元测试
"""

import numpy as np
import pytest

from reactor_simulation.core.data_classes import FuelState, ParticleKind, ReactorParameters
from reactor_simulation.core.grid import ReactorGrid
from reactor_simulation.core.interactions import moderate, resolve_interactions, rod_absorbs
from reactor_simulation.core.particles import ParticlePool


def make_core(seed=0, **overrides):
    """All-uranium core with an empty neutron pool."""
    overrides.setdefault("initial_spent_fraction", 0.0)
    overrides.setdefault("initial_xenon_fraction", 0.0)
    params = ReactorParameters(**overrides)
    rng = np.random.default_rng(seed)
    grid = ReactorGrid(params, rng)
    pool = ParticlePool(params, grid.extent, rng)
    return grid, pool, rng


def place(pool, col, row, kind, direction=(1.0, 0.0)):
    """Put a neutron at the centre of cell (col, row)."""
    size = pool.params.cell_size
    return pool.spawn(((col + 0.5) * size, (row + 0.5) * size), kind, direction=np.array(direction))


def resolve(grid, pool, rng, rod_position=0, speed_multiplier=1.0):
    return resolve_interactions(grid, pool, list(pool), rod_position, speed_multiplier, rng)


class TestModeration:
    """测试慢化"""

    def test_fast_becomes_thermal(self):
        """测试快中子在慢化剂中变为热中子"""
        grid, pool, rng = make_core()
        direction = np.array([0.6, -0.8])
        neutron = place(pool, 0, 5, ParticleKind.FAST, direction=direction)

        tally = resolve(grid, pool, rng)

        assert neutron.kind == ParticleKind.THERMAL
        assert neutron.speed == pytest.approx(1.0)
        np.testing.assert_allclose(neutron.velocity / neutron.speed, direction)
        assert tally.moderations == 1
        assert len(pool) == 1

    def test_thermal_unchanged(self):
        """测试热中子不受慢化剂影响"""
        grid, pool, rng = make_core()
        neutron = place(pool, 6, 2, ParticleKind.THERMAL)
        before = neutron.velocity.copy()

        tally = resolve(grid, pool, rng)

        np.testing.assert_array_equal(neutron.velocity, before)
        assert tally.moderations == 0

    def test_moderator_not_heated(self):
        """测试慢化剂单元不被加热"""
        grid, pool, rng = make_core()
        place(pool, 0, 5, ParticleKind.FAST)
        resolve(grid, pool, rng)
        assert grid.temperature[0, 5] == 20.0
        assert grid.boil[0, 5] == 0.0

    def test_moderate_helper(self):
        """测试慢化函数返回值"""
        grid, pool, rng = make_core()
        neutron = place(pool, 1, 1, ParticleKind.FAST)
        assert moderate(neutron, 1.0)
        assert not moderate(neutron, 1.0)


class TestRodAbsorption:
    """测试控制棒吸收"""

    @pytest.mark.parametrize("row", range(20))
    def test_full_insertion_absorbs_every_row(self, row):
        """测试完全插入时所有行都吸收"""
        grid, pool, rng = make_core()
        place(pool, 3, row, ParticleKind.FAST)
        tally = resolve(grid, pool, rng, rod_position=100)
        assert len(pool) == 0
        assert tally.rod_absorptions == 1

    @pytest.mark.parametrize("row", range(20))
    def test_withdrawn_rod_is_transparent(self, row):
        """测试完全抽出时不吸收"""
        grid, pool, rng = make_core()
        place(pool, 9, row, ParticleKind.THERMAL)
        tally = resolve(grid, pool, rng, rod_position=0)
        assert len(pool) == 1
        assert tally.rod_absorptions == 0

    @pytest.mark.parametrize("row, absorbed", [(0, True), (9, True), (10, False), (19, False)])
    def test_partial_insertion(self, row, absorbed):
        """测试半插入时只有上半部分吸收"""
        grid, pool, rng = make_core()
        place(pool, 15, row, ParticleKind.FAST)
        resolve(grid, pool, rng, rod_position=50)
        assert (len(pool) == 0) == absorbed

    def test_rod_not_heated(self):
        """测试控制棒单元不被加热"""
        grid, pool, rng = make_core()
        place(pool, 3, 15, ParticleKind.FAST)
        resolve(grid, pool, rng, rod_position=0)
        assert grid.temperature[3, 15] == 20.0
        assert grid.boil[3, 15] == 0.0

    def test_rod_absorbs_helper(self):
        """测试吸收判断函数"""
        assert rod_absorbs(3, 3.2)
        assert not rod_absorbs(4, 3.2)


class TestFuelHeating:
    """测试燃料通道加热"""

    @pytest.mark.parametrize("kind", [ParticleKind.FAST, ParticleKind.THERMAL])
    def test_heating_any_kind(self, kind):
        """测试任意类型中子都会加热燃料单元"""
        grid, pool, rng = make_core(fission_probability=0.0)
        place(pool, 1, 4, kind)
        resolve(grid, pool, rng)
        assert grid.boil[1, 4] == pytest.approx(30.0)
        assert grid.temperature[1, 4] == pytest.approx(22.0)

    def test_heating_scales_with_speed(self):
        """测试加热随速度倍率变化"""
        grid, pool, rng = make_core()
        place(pool, 2, 4, ParticleKind.FAST)
        resolve(grid, pool, rng, speed_multiplier=2.0)
        assert grid.boil[2, 4] == pytest.approx(60.0)
        assert grid.temperature[2, 4] == pytest.approx(24.0)

    def test_boil_capped(self):
        """测试沸腾强度上限"""
        grid, pool, rng = make_core()
        for _ in range(5):
            place(pool, 2, 4, ParticleKind.FAST)
        resolve(grid, pool, rng)
        assert grid.boil[2, 4] == 100.0
        assert grid.temperature[2, 4] == pytest.approx(30.0)


class TestFission:
    """测试裂变"""

    def test_fission_yields_two_fast_neutrons(self):
        """测试一次裂变消耗一个中子并产生两个快中子"""
        grid, pool, rng = make_core(fission_probability=1.0)
        incident = place(pool, 1, 5, ParticleKind.THERMAL)
        site = incident.position.copy()

        tally = resolve(grid, pool, rng)

        neutrons = list(pool)
        assert tally.fissions == 1
        assert len(neutrons) == 2
        assert all(n is not incident for n in neutrons)
        for n in neutrons:
            assert n.kind == ParticleKind.FAST
            assert n.speed == pytest.approx(2.0)
            np.testing.assert_allclose(n.position, site)

    def test_fission_spends_fuel_and_heats(self):
        """测试裂变消耗燃料并加热"""
        grid, pool, rng = make_core(fission_probability=1.0)
        place(pool, 1, 5, ParticleKind.THERMAL)

        tally = resolve(grid, pool, rng)

        assert grid.fuel_state_at(1, 5) == FuelState.SPENT
        assert tally.fuel_consumed == 1
        # +2 from the passing neutron, +50 from the fission
        assert grid.temperature[1, 5] == pytest.approx(72.0)

    def test_hot_fuel_resilience(self):
        """测试高温燃料使用降低的消耗概率"""
        grid, pool, rng = make_core(fission_probability=1.0, hot_consumption_probability=0.0)
        grid.temperature[4, 7] = 600.0
        place(pool, 4, 7, ParticleKind.THERMAL)

        tally = resolve(grid, pool, rng)

        assert tally.fissions == 1
        assert tally.fuel_consumed == 0
        assert grid.fuel_state_at(4, 7) == FuelState.URANIUM
        assert len(pool) == 2

    def test_cool_fuel_uses_normal_consumption(self):
        """测试低温燃料使用正常消耗概率"""
        grid, pool, rng = make_core(fission_probability=1.0, hot_consumption_probability=0.0)
        grid.temperature[4, 7] = 400.0
        place(pool, 4, 7, ParticleKind.THERMAL)
        resolve(grid, pool, rng)
        assert grid.fuel_state_at(4, 7) == FuelState.SPENT

    def test_fast_neutron_cannot_split(self):
        """测试快中子不能引起裂变"""
        grid, pool, rng = make_core(fission_probability=1.0)
        place(pool, 1, 5, ParticleKind.FAST)
        tally = resolve(grid, pool, rng)
        assert tally.fissions == 0
        assert len(pool) == 1
        assert grid.fuel_state_at(1, 5) == FuelState.URANIUM

    def test_failed_trial_keeps_neutron(self):
        """测试裂变未发生时中子保留"""
        grid, pool, rng = make_core(fission_probability=0.0)
        place(pool, 1, 5, ParticleKind.THERMAL)
        tally = resolve(grid, pool, rng)
        assert tally.fissions == 0
        assert len(pool) == 1

    def test_fission_conservation(self):
        """测试多次裂变的中子守恒"""
        grid, pool, rng = make_core(fission_probability=1.0)
        cells = [(1, 0), (2, 3), (4, 8), (5, 12), (7, 19)]
        for col, row in cells:
            place(pool, col, row, ParticleKind.THERMAL)

        tally = resolve(grid, pool, rng)

        assert tally.fissions == len(cells)
        assert len(pool) == 2 * len(cells)
        assert all(n.kind == ParticleKind.FAST for n in pool)

    def test_fission_rate(self):
        """测试裂变概率约为0.2"""
        grid, pool, rng = make_core(seed=7, consumption_probability=0.0, hot_consumption_probability=0.0)
        trials = 2000
        for _ in range(trials):
            place(pool, 1, 1, ParticleKind.THERMAL)
        tally = resolve(grid, pool, rng)
        assert tally.fissions / trials == pytest.approx(0.2, abs=0.03)


class TestXenon:
    """测试氙中毒"""

    def test_xenon_absorbs_and_burns_off(self):
        """测试氙吸收热中子后变为乏燃料"""
        grid, pool, rng = make_core(xenon_absorption_probability=1.0)
        grid.set_fuel_state(2, 2, FuelState.XENON)
        place(pool, 2, 2, ParticleKind.THERMAL)

        tally = resolve(grid, pool, rng)

        assert len(pool) == 0
        assert tally.xenon_absorptions == 1
        assert tally.fissions == 0
        assert grid.fuel_state_at(2, 2) == FuelState.SPENT

    def test_xenon_miss(self):
        """测试氙未吸收时中子保留"""
        grid, pool, rng = make_core(xenon_absorption_probability=0.0)
        grid.set_fuel_state(2, 2, FuelState.XENON)
        place(pool, 2, 2, ParticleKind.THERMAL)
        resolve(grid, pool, rng)
        assert len(pool) == 1
        assert grid.fuel_state_at(2, 2) == FuelState.XENON


class TestSpentAndOutside:
    """测试乏燃料和网格外中子"""

    def test_spent_fuel_transparent(self):
        """测试乏燃料对热中子透明"""
        grid, pool, rng = make_core(fission_probability=1.0, xenon_absorption_probability=1.0)
        grid.set_fuel_state(5, 5, FuelState.SPENT)
        place(pool, 5, 5, ParticleKind.THERMAL)
        tally = resolve(grid, pool, rng)
        assert len(pool) == 1
        assert tally.fissions == tally.xenon_absorptions == 0
        assert grid.fuel_state_at(5, 5) == FuelState.SPENT
        assert grid.boil[5, 5] == pytest.approx(30.0)

    def test_outside_grid_skipped(self):
        """测试网格外中子跳过碰撞"""
        grid, pool, rng = make_core(fission_probability=1.0)
        neutron = pool.spawn((-1.0, 50.0), ParticleKind.THERMAL, direction=np.array([1.0, 0.0]))
        tally = resolve(grid, pool, rng, rod_position=100)
        assert tally.out_of_grid == 1
        assert list(pool) == [neutron]
        assert np.all(grid.boil == 0.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
