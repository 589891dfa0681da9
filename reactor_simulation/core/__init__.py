"""
反应堆模拟核心模块

该子包包含模拟的核心功能模块：
- constants: 固定常数和调试标志
- data_classes: 数据结构定义（Cell, Neutron, ReactorSnapshot, TickRecord）
- grid: 网格与燃料状态机
- sampling: 抽样方法
- kinematics: 速度计算
- particles: 中子集合与运动
- interactions: 中子与网格的相互作用
- statistics: 自发裂变源与统计量
- scram: 紧急停堆控制器
- simulation: 模拟主逻辑
- io_utils: 输入输出工具
"""

# 常数
from .constants import (
    DEBUG,
    NO_FUEL,
    ROD_POSITION_MIN,
    ROD_POSITION_MAX,
)

# 数据类
from .data_classes import (
    CellKind,
    FuelState,
    ParticleKind,
    ScramStatus,
    ReactorParameters,
    Neutron,
    ReactorState,
    InteractionTally,
    Cell,
    ParticleSnapshot,
    ReactorSnapshot,
    TickRecord,
)

# 网格
from .grid import (
    column_kind,
    ReactorGrid,
)

# 抽样
from .sampling import (
    sample_isotropic_direction,
    sample_position_in_extent,
    sample_initial_fuel_states,
)

# 运动学
from .kinematics import (
    velocity_from_direction,
    rescale_speed,
    reflect_at_walls,
)

# 中子
from .particles import ParticlePool

# 相互作用
from .interactions import (
    moderate,
    rod_absorbs,
    fission,
    resolve_interactions,
)

# 统计
from .statistics import (
    inject_spontaneous_neutron,
    power_percent,
    StatisticsAggregator,
)

# 停堆
from .scram import (
    RodControl,
    ScramController,
)

# 模拟
from .simulation import (
    ReactorSimulation,
    run_simulation,
)

# IO工具
from .io_utils import (
    export_history_to_csv,
    load_history_from_csv,
    export_core_snapshot_to_csv,
)

__all__ = [
    # 常数
    'DEBUG',
    'NO_FUEL',
    'ROD_POSITION_MIN',
    'ROD_POSITION_MAX',
    # 数据类
    'CellKind',
    'FuelState',
    'ParticleKind',
    'ScramStatus',
    'ReactorParameters',
    'Neutron',
    'ReactorState',
    'InteractionTally',
    'Cell',
    'ParticleSnapshot',
    'ReactorSnapshot',
    'TickRecord',
    # 网格
    'column_kind',
    'ReactorGrid',
    # 抽样
    'sample_isotropic_direction',
    'sample_position_in_extent',
    'sample_initial_fuel_states',
    # 运动学
    'velocity_from_direction',
    'rescale_speed',
    'reflect_at_walls',
    # 中子
    'ParticlePool',
    # 相互作用
    'moderate',
    'rod_absorbs',
    'fission',
    'resolve_interactions',
    # 统计
    'inject_spontaneous_neutron',
    'power_percent',
    'StatisticsAggregator',
    # 停堆
    'RodControl',
    'ScramController',
    # 模拟
    'ReactorSimulation',
    'run_simulation',
    # IO
    'export_history_to_csv',
    'load_history_from_csv',
    'export_core_snapshot_to_csv',
]
