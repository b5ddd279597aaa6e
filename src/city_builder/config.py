"""
City Builder — Global Configuration
"""

# --- City ---
GRID_SIZE: int = 20                 # Tiles per side of the square grid
START_MONEY: int = 10000
ZONE_COST: int = 50                 # Price of designating one tile

# --- Simulation ---
TICK_INTERVAL: float = 2.0          # Wall-clock seconds between ticks
RANDOM_SEED: int = 753
ZONE_POLICY: str = "growth"         # manual | growth | instant
ZONE_GROWTH_CHANCE: float = 0.1     # Per zoned tile, per tick (scaled by job growth)

# --- Economy ---
NEARBY_SHOP_RADIUS: int = 2         # Square box scanned around residential tiles

# --- Market ---
MARKET_INITIAL_TIME: int = 100      # Ticks before the first market evaluation
MARKET_MIN_DURATION: int = 50       # Inclusive
MARKET_MAX_DURATION: int = 200      # Exclusive

# --- Random Events ---
EVENT_TRIGGER_CHANCE: float = 0.02  # Per tick once the city is developed
EVENT_MIN_POPULATION: int = 100     # Population must exceed this

# --- Happiness & Environment ---
BASE_HAPPINESS: float = 50.0
BASE_ENVIRONMENT: float = 50.0
HAPPINESS_DRIFT: float = 0.2        # Fraction of the gap to target closed per tick
HAPPY_THRESHOLD: float = 90.0       # "Happy Citizens" streak threshold

# --- Display ---
TILE_SIZE: int = 32
SIDEBAR_WIDTH: int = 240
INFO_BAR_HEIGHT: int = 32
FPS: int = 30

# --- Notifications ---
EVENT_HISTORY_CAP: int = 200        # Max notifications retained in bus history

# --- Logging ---
LOG_DIR: str = "logs"
LOG_TO_FILE: bool = True
