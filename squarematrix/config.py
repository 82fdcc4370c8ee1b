# squarematrix/config.py
"""
Centralized configuration for the squarematrix library.
This module provides a single source of truth for all configurable parameters.
"""

import numpy as np

# Element storage
DTYPE = np.int32  # Fixed-width integers; arithmetic wraps like numpy arrays do

# Random fills draw uniformly from [RANDOM_LOW, RANDOM_HIGH] (both inclusive)
RANDOM_LOW = 0
RANDOM_HIGH = 9

# Seed for the process-wide generator, None means OS entropy
RANDOM_SEED = None

# Rendering
CELL_WIDTH = 3  # Each element is right-aligned in a field this wide
