"""
Configuration constants for the path search demos.

Instance data (graphs, grids, queries) lives in YAML files; the values here
are the defaults the command line falls back to.
"""

import os
from pathlib import Path

# =============================================================================
# Instance Files
# =============================================================================

PROJECT_ROOT = Path(__file__).parent

# Instance loaded when --config is not given
DEFAULT_INSTANCE_PATH = PROJECT_ROOT / "problem_instance.yaml"

# =============================================================================
# Path Carving
# =============================================================================

# Edge length of the lattice used when carving on a generated grid
DEFAULT_GRID_WIDTH = 100

# Number of random goal pairs routed by --carve without a count
DEFAULT_CARVE_PATHS = 400

# Frontier pops allowed per carved path before giving up on it
DEFAULT_CARVE_MAX_ITERATIONS = 8000

# =============================================================================
# Rendering
# =============================================================================

# Upper bound on endpoints a SegmentBuffer will index (32-bit index space)
MAX_SEGMENT_VERTICES = 2**32

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
