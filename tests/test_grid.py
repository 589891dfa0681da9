"""
网格与燃料状态机的单元测试
"""

import numpy as np
import pytest

from reactor_simulation.core.constants import NO_FUEL
from reactor_simulation.core.data_classes import CellKind, FuelState, ReactorParameters
from reactor_simulation.core.grid import ReactorGrid, column_kind


def make_grid(seed=0, **overrides):
    return ReactorGrid(ReactorParameters(**overrides), np.random.default_rng(seed))


class TestColumnPattern:
    """测试列模式"""

    @pytest.mark.parametrize("col, expected", [
        (0, CellKind.MODERATOR),
        (1, CellKind.FUEL),
        (2, CellKind.FUEL),
        (3, CellKind.ROD),
        (4, CellKind.FUEL),
        (5, CellKind.FUEL),
        (6, CellKind.MODERATOR),
        (9, CellKind.ROD),
        (30, CellKind.MODERATOR),
    ])
    def test_column_kind(self, col, expected):
        """测试每列的单元类型"""
        assert column_kind(col) == expected

    def test_grid_dimensions(self):
        """测试网格尺寸"""
        grid = make_grid()
        assert grid.shape == (31, 20)
        assert grid.cell_count == 620
        assert grid.extent == (930, 600)

    def test_kind_constant_along_column(self):
        """测试同一列所有单元类型相同"""
        grid = make_grid()
        for col in range(grid.cols):
            assert np.all(grid.kinds[col] == column_kind(col))

    def test_cell_counts(self):
        """测试各类型单元数量"""
        grid = make_grid()
        assert np.count_nonzero(grid.kinds == CellKind.MODERATOR) == 6 * 20
        assert np.count_nonzero(grid.kinds == CellKind.ROD) == 5 * 20
        assert np.count_nonzero(grid.kinds == CellKind.FUEL) == 20 * 20


class TestInitialState:
    """测试初始状态"""

    def test_fuel_only_on_fuel_cells(self):
        """测试只有燃料单元有燃料状态"""
        grid = make_grid()
        assert np.all(grid.fuel[~grid.fuel_mask] == NO_FUEL)
        assert np.all(grid.fuel[grid.fuel_mask] != NO_FUEL)
        assert grid.cell(0, 0).fuel_state is None
        assert grid.cell(3, 7).fuel_state is None
        assert grid.cell(1, 0).fuel_state is not None
        grid.check_invariants()

    def test_all_uranium_without_initial_poison(self):
        """测试无初始乏燃料和氙时全部为铀"""
        grid = make_grid(initial_spent_fraction=0.0, initial_xenon_fraction=0.0)
        inventory = grid.fuel_inventory()
        assert inventory[FuelState.URANIUM] == 400
        assert inventory[FuelState.SPENT] == 0
        assert inventory[FuelState.XENON] == 0

    def test_default_composition_is_mostly_uranium(self):
        """测试默认燃料组成"""
        grid = make_grid(seed=42)
        inventory = grid.fuel_inventory()
        assert sum(inventory.values()) == 400
        assert inventory[FuelState.URANIUM] > inventory[FuelState.SPENT] > 0
        assert inventory[FuelState.XENON] > 0

    def test_initial_temperature_and_boil(self):
        """测试初始温度为基准温度"""
        grid = make_grid()
        assert np.all(grid.temperature == 20.0)
        assert np.all(grid.boil == 0.0)


class TestGeometry:
    """测试坐标映射"""

    @pytest.mark.parametrize("x, y, expected", [
        (0.0, 0.0, (0, 0)),
        (15.0, 15.0, (0, 0)),
        (30.0, 59.9, (1, 1)),
        (929.9, 599.9, (30, 19)),
    ])
    def test_locate_inside(self, x, y, expected):
        """测试网格内的定位"""
        assert make_grid().locate(x, y) == expected

    @pytest.mark.parametrize("x, y", [
        (-0.1, 10.0),
        (10.0, -0.1),
        (930.0, 10.0),
        (10.0, 600.0),
    ])
    def test_locate_outside(self, x, y):
        """测试网格外返回 None"""
        assert make_grid().locate(x, y) is None

    @pytest.mark.parametrize("rod_position, depth", [(0, 0.0), (50, 10.0), (100, 20.0)])
    def test_rod_depth(self, rod_position, depth):
        """测试控制棒插入深度"""
        assert make_grid().rod_depth(rod_position) == pytest.approx(depth)


class TestThermalStep:
    """测试热弛豫与沸腾衰减"""

    def test_cooling(self):
        """测试冷却速率"""
        grid = make_grid()
        grid.temperature[5, 5] = 100.0
        grid.step(1.0)
        assert grid.temperature[5, 5] == pytest.approx(99.5)
        grid.step(2.0)
        assert grid.temperature[5, 5] == pytest.approx(98.5)

    def test_cooling_clamped_at_baseline(self):
        """测试温度不低于基准温度"""
        grid = make_grid()
        grid.temperature[1, 1] = 20.3
        grid.step(1.0)
        assert grid.temperature[1, 1] == 20.0

    def test_temperature_never_below_baseline(self):
        """测试无中子时温度始终不低于基准"""
        grid = make_grid()
        grid.temperature[:, :] = np.linspace(20, 400, 620).reshape(31, 20)
        for _ in range(1000):
            grid.step(3.7)
            assert np.all(grid.temperature >= 20.0)
        assert np.all(grid.temperature == 20.0)

    def test_boil_decay_ignores_speed(self):
        """测试沸腾衰减与速度倍率无关"""
        grid = make_grid()
        grid.boil[1, 1] = 50.0
        grid.step(3.0)
        assert grid.boil[1, 1] == pytest.approx(45.0)

    def test_boil_monotonic_decay(self):
        """测试无中子时沸腾强度单调递减"""
        grid = make_grid()
        grid.boil[2, 4] = 100.0
        previous = 100.0
        for _ in range(50):
            grid.step(1.0)
            assert grid.boil[2, 4] <= previous
            assert grid.boil[2, 4] == pytest.approx(previous * 0.9)
            previous = grid.boil[2, 4]

    def test_step_returns_total_heat(self):
        """测试返回总温度"""
        grid = make_grid()
        grid.temperature[4, 4] = 120.0
        total = grid.step(1.0)
        assert total == pytest.approx(20.0 * 619 + 119.5)


class TestFuelTransitions:
    """测试燃料状态转换"""

    def test_spent_regenerates_to_uranium(self):
        """测试乏燃料转换为铀"""
        grid = make_grid(initial_spent_fraction=1.0, initial_xenon_fraction=0.0,
                         spent_transition_probability=1.0, spent_to_uranium_fraction=1.0)
        grid.step(1.0)
        assert grid.fuel_inventory()[FuelState.URANIUM] == 400

    def test_spent_poisons_to_xenon(self):
        """测试乏燃料转换为氙"""
        grid = make_grid(initial_spent_fraction=1.0, initial_xenon_fraction=0.0,
                         spent_transition_probability=1.0, spent_to_uranium_fraction=0.0,
                         xenon_decay_probability=0.0)
        grid.step(1.0)
        assert grid.fuel_inventory()[FuelState.XENON] == 400

    def test_each_cell_transitions_once_per_step(self):
        """测试每个单元每步最多转换一次"""
        grid = make_grid(initial_spent_fraction=0.5, initial_xenon_fraction=0.5,
                         spent_transition_probability=1.0, spent_to_uranium_fraction=0.0,
                         xenon_decay_probability=1.0)
        spent_before = grid.fuel == FuelState.SPENT
        xenon_before = grid.fuel == FuelState.XENON
        grid.step(1.0)
        assert np.all(grid.fuel[spent_before] == FuelState.XENON)
        assert np.all(grid.fuel[xenon_before] == FuelState.SPENT)

    def test_uranium_has_no_spontaneous_transition(self):
        """测试铀不会自发转换"""
        grid = make_grid(initial_spent_fraction=0.0, initial_xenon_fraction=0.0,
                         spent_transition_probability=1.0, xenon_decay_probability=1.0)
        for _ in range(20):
            grid.step(5.0)
        assert grid.fuel_inventory()[FuelState.URANIUM] == 400

    def test_transitions_do_not_touch_other_cells(self):
        """测试慢化剂和控制棒单元不受影响"""
        grid = make_grid(initial_spent_fraction=1.0, spent_transition_probability=1.0)
        grid.step(1.0)
        assert np.all(grid.fuel[~grid.fuel_mask] == NO_FUEL)
        grid.check_invariants()

    def test_spent_rate_scales_with_speed(self):
        """测试乏燃料转换概率随速度倍率变化"""
        triggered = 0
        trials = 0
        for seed in range(10):
            grid = make_grid(seed=seed, initial_spent_fraction=1.0, initial_xenon_fraction=0.0,
                             spent_transition_probability=0.05)
            grid.step(2.0)
            triggered += 400 - grid.fuel_inventory()[FuelState.SPENT]
            trials += 400
        assert triggered / trials == pytest.approx(0.10, abs=0.02)

    def test_spent_split_uranium_xenon(self):
        """测试乏燃料转换为铀和氙的比例约为0.7比0.3"""
        uranium = 0
        for seed in range(5):
            grid = make_grid(seed=seed, initial_spent_fraction=1.0, initial_xenon_fraction=0.0,
                             spent_transition_probability=1.0)
            grid.step(1.0)
            inventory = grid.fuel_inventory()
            assert inventory[FuelState.SPENT] == 0
            assert inventory[FuelState.URANIUM] + inventory[FuelState.XENON] == 400
            uranium += inventory[FuelState.URANIUM]
        assert uranium / 2000 == pytest.approx(0.7, abs=0.04)

    def test_xenon_rate_scales_with_speed(self):
        """测试氙衰变概率随速度倍率变化"""
        decayed = 0
        trials = 0
        for seed in range(10):
            grid = make_grid(seed=seed, initial_spent_fraction=0.0, initial_xenon_fraction=1.0,
                             xenon_decay_probability=0.05)
            grid.step(2.0)
            decayed += grid.fuel_inventory()[FuelState.SPENT]
            trials += 400
        assert decayed / trials == pytest.approx(0.10, abs=0.02)

    def test_zero_rates_freeze_composition(self):
        """测试概率为零时燃料不变"""
        grid = make_grid(spent_transition_probability=0.0, xenon_decay_probability=0.0)
        before = grid.fuel.copy()
        for _ in range(100):
            grid.step(1.0)
        np.testing.assert_array_equal(grid.fuel, before)


class TestMutators:
    """测试网格修改操作"""

    def test_set_fuel_state_rejects_non_fuel(self):
        """测试非燃料单元不能设置燃料状态"""
        grid = make_grid()
        with pytest.raises(AssertionError):
            grid.set_fuel_state(0, 0, FuelState.SPENT)

    def test_agitate_caps_boil(self):
        """测试沸腾强度上限"""
        grid = make_grid()
        grid.boil[1, 1] = 90.0
        grid.agitate(1, 1, 1.0)
        assert grid.boil[1, 1] == 100.0
        assert grid.temperature[1, 1] == pytest.approx(22.0)

    def test_cell_view(self):
        """测试单元视图"""
        grid = make_grid(initial_spent_fraction=0.0, initial_xenon_fraction=0.0)
        grid.temperature[2, 3] = 55.0
        cell = grid.cell(2, 3)
        assert cell.position == (2, 3)
        assert cell.kind == CellKind.FUEL
        assert cell.fuel_state == FuelState.URANIUM
        assert cell.temperature == 55.0
        assert len(grid.cells()) == 620


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
