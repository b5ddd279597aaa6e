"""
Errors — Rejection reasons for player actions.

None of these are fatal. The strict helpers (tile_at, try_place,
check_upgrade, parse_tool) raise them; the public transactions catch them
and hand back the state untouched.
"""


class CityError(Exception):
    """Base class for rejected city actions."""


class OutOfBounds(CityError):
    def __init__(self, x: int, y: int, size: int) -> None:
        super().__init__(f"({x}, {y}) is outside the {size}x{size} grid")
        self.x = x
        self.y = y
        self.size = size


class InsufficientFunds(CityError):
    def __init__(self, cost: int, money: int) -> None:
        super().__init__(f"Costs {cost} but only {money} available")
        self.cost = cost
        self.money = money


class InvalidUpgradeRequirement(CityError):
    """An upgrade's level, adjacency or population requirement is unmet."""


class UnknownTool(CityError, ValueError):
    def __init__(self, tool: str) -> None:
        super().__init__(f"Unknown tool: {tool!r}")
        self.tool = tool
