"""
Renderer — 2D grid view and toolbar
====================================
Draws the city and forwards input to the engine:
  - Tiles in their building color, zoned lots tinted
  - Info bar: funds, population, happiness, environment, market
  - Sidebar: one button per tool with its current price
  - Toast line for the latest notification (events, achievements)

Left-click a tile applies the selected tool. U buys the first available
upgrade on the hovered tile. SPACE pauses the clock, ESC quits.
"""

import pygame
from ..config import TILE_SIZE, SIDEBAR_WIDTH, INFO_BAR_HEIGHT, FPS
from ..core.events import EventType
from ..engine.market import describe_market
from ..engine.placement import BULLDOZE, tool_cost
from ..world.buildings import BUILDINGS, ZONE_COLORS, BuildingType, ZoneType

TOOLS = (
    [BULLDOZE]
    + [f"zone_{z.value}" for z in ZoneType if z is not ZoneType.NONE]
    + [b.value for b in BuildingType if b is not BuildingType.EMPTY]
)

COLORS = {
    "ui_bg": (30, 30, 36),
    "ui_border": (90, 90, 100),
    "ui_text": (230, 230, 230),
    "ui_text_dim": (150, 150, 160),
    "ui_text_accent": (250, 210, 90),
    "ui_selected": (70, 110, 180),
    "ui_disabled": (70, 70, 75),
    "grid_line": (60, 90, 60),
}

BUTTON_HEIGHT = 24


def tile_at_pixel(grid, mx, my):
    """Grid coordinates under a window pixel, or None off the map."""
    if my < INFO_BAR_HEIGHT:
        return None
    x, y = mx // TILE_SIZE, (my - INFO_BAR_HEIGHT) // TILE_SIZE
    if not grid.in_bounds(x, y):
        return None
    return x, y


class Renderer:
    def __init__(self, engine):
        pygame.init()
        self.engine = engine
        self.grid_px = engine.state.grid.size * TILE_SIZE
        self.width = self.grid_px + SIDEBAR_WIDTH
        self.height = INFO_BAR_HEIGHT + max(self.grid_px, len(TOOLS) * BUTTON_HEIGHT + 40)
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("City Builder")
        self.clock = pygame.time.Clock()

        # Fonts
        self.font_body = pygame.font.SysFont("Arial", 14)
        self.font_small = pygame.font.SysFont("Arial", 11)

        self.hovered_tile = None
        self.toast = ""
        self.toast_timer = 0.0

        for etype in (EventType.ACHIEVEMENT_UNLOCKED, EventType.RANDOM_EVENT_STARTED,
                      EventType.RANDOM_EVENT_ENDED, EventType.MARKET_CHANGED):
            engine.event_bus.subscribe(etype.value, self._on_notification)

    def run(self):
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            self.toast_timer = max(0.0, self.toast_timer - dt)

            mx, my = pygame.mouse.get_pos()
            self.hovered_tile = self._tile_under(mx, my)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        self.engine.paused = not self.engine.paused
                    elif event.key == pygame.K_u and self.hovered_tile:
                        self._buy_upgrade(*self.hovered_tile)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)

            self._draw_frame()
            pygame.display.flip()

        pygame.quit()

    # ================================================================
    # INPUT
    # ================================================================

    def _tile_under(self, mx, my):
        return tile_at_pixel(self.engine.state.grid, mx, my)

    def _handle_click(self, pos):
        tile = self._tile_under(*pos)
        if tile:
            self.engine.place(*tile)
            return
        index = (pos[1] - INFO_BAR_HEIGHT - 30) // BUTTON_HEIGHT
        if pos[0] >= self.grid_px and 0 <= index < len(TOOLS):
            self.engine.select_tool(TOOLS[index])

    def _buy_upgrade(self, x, y):
        options = self.engine.available_upgrades(x, y)
        if options and self.engine.upgrade(x, y, options[0].name):
            self._show_toast(f"Upgraded with {options[0].name}")

    def _on_notification(self, event):
        data = event.data
        if event.event_type == EventType.ACHIEVEMENT_UNLOCKED.value:
            self._show_toast(f"Achievement unlocked: {data['name']}")
        elif event.event_type == EventType.RANDOM_EVENT_STARTED.value:
            self._show_toast(data["title"])
        elif event.event_type == EventType.RANDOM_EVENT_ENDED.value:
            self._show_toast(f"{data['title']} is over")
        elif event.event_type == EventType.MARKET_CHANGED.value:
            self._show_toast(f"Market: {data['to']}")

    def _show_toast(self, text, seconds=4.0):
        self.toast = text
        self.toast_timer = seconds

    # ================================================================
    # DRAWING
    # ================================================================

    def _draw_frame(self):
        self.screen.fill(COLORS["ui_bg"])
        with self.engine.lock:
            state = self.engine.state
        self._render_grid(state)
        self._draw_info_bar(state)
        self._draw_sidebar(state)

    def _render_grid(self, state):
        for tile in state.grid.tiles():
            rect = pygame.Rect(tile.x * TILE_SIZE, INFO_BAR_HEIGHT + tile.y * TILE_SIZE,
                               TILE_SIZE, TILE_SIZE)
            if tile.is_empty and tile.zone is not ZoneType.NONE:
                color = ZONE_COLORS[tile.zone]
            else:
                color = BUILDINGS[tile.building].color
            pygame.draw.rect(self.screen, color, rect)
            pygame.draw.rect(self.screen, COLORS["grid_line"], rect, 1)
            if tile.level > 1:
                lvl = self.font_small.render(str(tile.level), True, COLORS["ui_text"])
                self.screen.blit(lvl, (rect.x + 3, rect.y + 2))

        if self.hovered_tile:
            hx, hy = self.hovered_tile
            rect = pygame.Rect(hx * TILE_SIZE, INFO_BAR_HEIGHT + hy * TILE_SIZE,
                               TILE_SIZE, TILE_SIZE)
            pygame.draw.rect(self.screen, COLORS["ui_text_accent"], rect, 2)

    def _draw_info_bar(self, state):
        s = state.stats
        paused = "  [PAUSED]" if self.engine.paused else ""
        text = (f"${s.money:,} ({s.income:+})   Pop {s.population:,}   Jobs {s.jobs:,}   "
                f"Happy {s.happiness:.0f}   Env {s.environment:.0f}   "
                f"{describe_market(state.market)}{paused}")
        self.screen.blit(self.font_body.render(text, True, COLORS["ui_text"]), (8, 8))
        pygame.draw.line(self.screen, COLORS["ui_border"],
                         (0, INFO_BAR_HEIGHT - 1), (self.width, INFO_BAR_HEIGHT - 1), 1)

    def _draw_sidebar(self, state):
        x0 = self.grid_px + 8
        y0 = INFO_BAR_HEIGHT + 8
        header = self.font_body.render(f"Tick {state.tick}", True, COLORS["ui_text_accent"])
        self.screen.blit(header, (x0, y0))

        for i, tool in enumerate(TOOLS):
            y = INFO_BAR_HEIGHT + 30 + i * BUTTON_HEIGHT
            cost = tool_cost(state, tool)
            rect = pygame.Rect(self.grid_px + 4, y, SIDEBAR_WIDTH - 8, BUTTON_HEIGHT - 2)
            if tool == state.selected_tool:
                bg = COLORS["ui_selected"]
            elif cost > state.stats.money:
                bg = COLORS["ui_disabled"]
            else:
                bg = COLORS["ui_bg"]
            pygame.draw.rect(self.screen, bg, rect)
            pygame.draw.rect(self.screen, COLORS["ui_border"], rect, 1)
            label = tool.replace("_", " ").title()
            price = "Refund 50%" if tool == BULLDOZE else f"${cost:,}"
            self.screen.blit(self.font_small.render(f"{label}  {price}", True, COLORS["ui_text"]),
                             (rect.x + 6, rect.y + 5))

        if self.toast_timer > 0:
            toast = self.font_body.render(self.toast, True, COLORS["ui_text_accent"])
            self.screen.blit(toast, (x0, self.height - 24))

        if self.hovered_tile and state.grid.in_bounds(*self.hovered_tile):
            tile = state.grid.tile_at(*self.hovered_tile)
            info = f"({tile.x}, {tile.y}) {BUILDINGS[tile.building].label} L{tile.level}"
            self.screen.blit(self.font_small.render(info, True, COLORS["ui_text_dim"]),
                             (x0, self.height - 44))
