"""
Fixed model constants and debug configuration.
"""

# Debug flag
DEBUG = False

# Fuel array marker for moderator and rod cells
NO_FUEL = -1

# Percentage scale of the control rod position
ROD_POSITION_MIN = 0
ROD_POSITION_MAX = 100
