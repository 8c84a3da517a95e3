"""
Default layout parameters.

Option defaults are used by the models in `models.py`; the force
simulation constants are read by `force.py` and `circular.py`.
"""

# Default layout options
DEFAULT_NODE_SPACING = 100
DEFAULT_LAYER_SPACING = 150
DEFAULT_EDGE_SPACING = 20
DEFAULT_NODE_WIDTH = 250
DEFAULT_NODE_HEIGHT = 150

# Force-directed simulation
FORCE_ITERATIONS = 100
INITIAL_TEMPERATURE = 100.0
COOLING_FACTOR = 0.95
REPULSION_STRENGTH = 5000.0
ATTRACTION_STRENGTH = 0.01
MIN_DISTANCE = 1.0

# Circle placement
MIN_CIRCLE_RADIUS = 200.0
RADIUS_PER_TABLE = 50.0
