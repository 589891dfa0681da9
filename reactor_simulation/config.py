"""
Configuration settings for the reactor core simulation.

This module contains all configurable parameters of the core model.
Users can modify these values to customize the simulation without changing the core code.

The values become the field defaults of
:class:`~reactor_simulation.core.data_classes.ReactorParameters` when the
package is imported. Editing this file changes the defaults of every later
run; assigning ``config.X`` at runtime does not. Override values for a single
run through ``ReactorParameters`` instead:

    from reactor_simulation import ReactorParameters, ReactorSimulation
    params = ReactorParameters(fission_probability=0.3)
    simulation = ReactorSimulation(params, seed=0)
"""

from __future__ import annotations

# =============================================================================
# Output Paths (输出路径)
# =============================================================================

# Output directories (用户工作目录)
DATA_OUTPUT_DIR = "Data"
FIGURES_OUTPUT_DIR = "Figures"

# Output file names
HISTORY_DATA_CSV = "reactor_history.csv"
CORE_SNAPSHOT_CSV = "core_snapshot.csv"
HISTORY_FIGURE_BASE = "reactor_history"
CORE_MAP_FIGURE_BASE = "core_map"

# =============================================================================
# Grid Topology
# =============================================================================

# 5 * 6 + 1 columns so the pattern starts and ends on a moderator
GRID_COLS = 31
GRID_ROWS = 20

# Cell edge length in simulation units (screen pixels)
CELL_SIZE = 30

# Repeating column pattern: Mod, Fuel, Fuel, Rod, Fuel, Fuel, Mod...
COLUMN_PATTERN_PERIOD = 6
MODERATOR_COLUMN_OFFSET = 0
ROD_COLUMN_OFFSET = 3

# Initial fuel composition (fractions of fuel cells)
INITIAL_SPENT_FRACTION = 0.10
INITIAL_XENON_FRACTION = 0.05

# =============================================================================
# Neutron Parameters
# =============================================================================

MAX_PARTICLES = 500

# Speeds in simulation units per tick
NEUTRON_SPEED_FAST = 2.0
NEUTRON_SPEED_THERMAL = 1.0

NEUTRON_LIFE = 200.0
LIFE_DECAY_PER_TICK = 0.5

# Spontaneous fission source (probability per tick)
SPONTANEOUS_FISSION_PROBABILITY = 0.1

# =============================================================================
# Fuel State Machine
# =============================================================================

SPENT_TRANSITION_PROBABILITY = 0.001
SPENT_TO_URANIUM_FRACTION = 0.7  # remaining 0.3 become xenon
XENON_DECAY_PROBABILITY = 0.0005

# =============================================================================
# Thermal Model
# =============================================================================

# Cooled variant: cells relax towards 20 degrees
BASELINE_TEMPERATURE = 20.0
COOLING_RATE = 0.5

BOIL_DECAY_FACTOR = 0.9  # not scaled by the speed multiplier
BOIL_GAIN = 30.0
BOIL_MAX = 100.0
NEUTRON_HEATING = 2.0

FISSION_HEAT = 50.0

# Hot uranium is less likely to be consumed by a fission
RESILIENCE_TEMPERATURE = 500.0
HOT_CONSUMPTION_PROBABILITY = 0.33
CONSUMPTION_PROBABILITY = 1.0

# =============================================================================
# Interaction Probabilities
# =============================================================================

FISSION_PROBABILITY = 0.2
FISSION_NEUTRON_YIELD = 2
FISSION_POWER_YIELD = 10.0
XENON_ABSORPTION_PROBABILITY = 0.5

# =============================================================================
# Reactor Statistics
# =============================================================================

POWER_PER_NEUTRON = 6.5
POWER_SMOOTHING = 0.1
TEMPERATURE_SMOOTHING = 0.05
RADIATION_BACKGROUND = 15.0
RADIATION_PER_POWER = 0.5

# 100% reference for the power percentage readout (MW)
RATED_POWER_MW = 3200.0

# Initial readings
INITIAL_POWER = 0.0
INITIAL_TEMPERATURE = 300.0
INITIAL_RADIATION = 15.0
INITIAL_ROD_POSITION = 100  # % inserted

# =============================================================================
# Scram (AZ-5) Controller
# =============================================================================

SCRAM_STEP_INTERVAL_MS = 50.0
SCRAM_STEP_SIZE = 1
SHUTDOWN_HOLD_MS = 2000.0

# When False, manual rod input is ignored while a scram is in progress
MANUAL_INPUT_CANCELS_SCRAM = True

# =============================================================================
# Run Driver
# =============================================================================

# Nominal frame clock (~60 Hz)
FRAME_PERIOD_MS = 1000.0 / 60.0

DEFAULT_N_TICKS = 3600
DEFAULT_SPEED_MULTIPLIER = 1.0

# =============================================================================
# Visualization Settings
# =============================================================================

PLOT_DPI = 300
QUICK_PLOT_DPI = 150

HISTORY_FIGSIZE = (14, 10)
CORE_MAP_FIGSIZE = (14, 6)

URANIUM_COLOR = "#00cc00"
SPENT_COLOR = "#cccccc"
XENON_COLOR = "#222222"
MODERATOR_COLOR = "#ffffff"
ROD_COLOR = "#444444"
