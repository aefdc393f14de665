"""
bounce Arena
Interactive demo of the bounce engine: drop or aim balls, break shapes, survive the waves.
"""

import logging
import math
import sys

import pygame

from bounce import GameConfig, Turn
from bounce import events as ev
from bounce_game import build_game
from bounce_game.game import MIN_AIM_DISTANCE

# --- Configuration ---
WIDTH, HEIGHT = 800, 600
FPS = 60
TITLE = "bounce Arena"

# Colors
BG_COLOR = (15, 23, 42)
HUD_COLOR = (200, 200, 220)
AIM_COLOR = (252, 211, 77)
WELL_COLOR = (59, 130, 246)
ARMOR_COLOR = (163, 230, 53)
FLASH_COLOR = (255, 255, 255)
HEALTH_BG = (40, 40, 60)
HEALTH_FG = (74, 222, 128)
ESCAPE_COLOR = (248, 113, 113)

logger = logging.getLogger("arena")


def polygon_points(cx: float, cy: float, radius: float, sides: int, rotation: float):
    step = math.tau / sides
    return [
        (cx + math.cos(rotation + (i + 0.5) * step) * radius,
         cy + math.sin(rotation + (i + 0.5) * step) * radius)
        for i in range(sides)
    ]


def draw_wells(screen, view) -> None:
    for well in view.wells:
        center = (int(well.x), int(well.y))
        pygame.draw.circle(screen, WELL_COLOR, center, int(well.radius), 1)
        tip = (well.x + math.cos(well.rotation) * well.radius,
               well.y + math.sin(well.rotation) * well.radius)
        pygame.draw.line(screen, WELL_COLOR, center, tip, 1)


def draw_enemies(screen, view) -> None:
    for enemy in view.enemies:
        cx = enemy.x + enemy.width / 2
        cy = enemy.y + enemy.height / 2
        fill = FLASH_COLOR if enemy.flashing else pygame.Color(enemy.color)
        if enemy.sides == 4:
            rect = pygame.Rect(int(enemy.x), int(enemy.y), int(enemy.width), int(enemy.height))
            pygame.draw.rect(screen, fill, rect)
            pygame.draw.rect(screen, pygame.Color(enemy.outline_color), rect, 2)
        else:
            points = polygon_points(cx, cy, enemy.width / 2, enemy.sides, enemy.rotation)
            pygame.draw.polygon(screen, fill, points)
            pygame.draw.polygon(screen, pygame.Color(enemy.outline_color), points, 2)

        # Health bar
        ratio = enemy.health / enemy.max_health if enemy.max_health else 0.0
        bar = pygame.Rect(int(enemy.x), int(enemy.y) - 6, int(enemy.width), 3)
        pygame.draw.rect(screen, HEALTH_BG, bar)
        pygame.draw.rect(screen, HEALTH_FG, (bar.x, bar.y, int(bar.w * ratio), bar.h))
        if enemy.armor:
            armor_ratio = enemy.armor / enemy.max_armor
            pygame.draw.rect(
                screen, ARMOR_COLOR, (bar.x, bar.y - 4, int(bar.w * armor_ratio), 2)
            )


def draw_balls(screen, view) -> None:
    for ball in view.balls:
        color = pygame.Color(ball.color)
        for i, (tx, ty) in enumerate(ball.trail):
            r = max(1, int(ball.radius * (i + 1) / (len(ball.trail) + 1) * 0.5))
            pygame.draw.circle(screen, color, (int(tx), int(ty)), r, 1)
        pygame.draw.circle(screen, color, (int(ball.x), int(ball.y)), int(ball.radius))


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    # --- Game setup ---
    game = build_game(GameConfig(width=WIDTH, height=HEIGHT, fps=FPS))
    logger.info("seed %d", game.engine.seed)

    escape_flash = [0]

    def on_escape(name, payload):
        escape_flash[0] = FPS

    game.subscribe(ev.ENEMY_ESCAPED, on_escape)

    # --- State ---
    paused = False
    running = True
    drag_start = None

    while running:
        pg_clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_e:
                    game.end_turn()
                elif event.key == pygame.K_c:
                    game.cancel_volley()
                    game.clear_balls()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                drag_start = (float(event.pos[0]), float(event.pos[1]))
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and drag_start:
                end = (float(event.pos[0]), float(event.pos[1]))
                if math.dist(drag_start, end) < MIN_AIM_DISTANCE:
                    game.create_ball(end[0])
                else:
                    game.fire_volley(drag_start, end)
                drag_start = None

        # --- Update ---
        if not paused:
            game.step()
            if escape_flash[0] > 0:
                escape_flash[0] -= 1

        # --- Draw ---
        screen.fill(BG_COLOR)
        view = game.view()
        draw_wells(screen, view)
        draw_enemies(screen, view)
        draw_balls(screen, view)

        if drag_start is not None:
            pygame.draw.line(screen, AIM_COLOR, drag_start, pygame.mouse.get_pos(), 2)
        if escape_flash[0] > 0:
            pygame.draw.rect(screen, ESCAPE_COLOR, (0, 0, WIDTH, HEIGHT), 4)

        # --- HUD ---
        turn = view.turn
        whose = "PLAYER" if turn.current_turn is Turn.PLAYER else "ENEMY"
        pause_str = "  [PAUSED]" if paused else ""
        hud_lines = [
            f"Wave {view.wave}   Score: {view.score}   Combo: x{view.combo_multiplier:.2f}"
            f"   Escaped: {game.world.escaped_count}",
            f"Turn: {whose}   Balls: {turn.balls_dropped}/{turn.max_balls}"
            f" (+{turn.pending_bonus})   In play: {turn.ball_count}{pause_str}",
            "Click=Drop  Drag=Volley  E=End turn  C=Clear  Space=Pause  Esc=Quit",
        ]
        for i, line in enumerate(hud_lines):
            surf = font.render(line, True, HUD_COLOR)
            screen.blit(surf, (10, 8 + i * 20))

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
