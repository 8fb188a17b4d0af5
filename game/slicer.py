# game/slicer.py
import math
import time
from collections import deque
from dataclasses import dataclass

import numpy as np
import pygame

from config import (
    WIN_W, WIN_H, GAME_FPS, GRAVITY, TARGET_RADIUS, SPAWN_INTERVAL_SEC,
    MIN_SLICE_SPEED, MAX_MISSES, BLADE_TRAIL_LEN, MINI_SCALE,
    SELECTED_HAND, SHOW_SKELETON, SHOW_POINTS, SHOW_BOUNDING_BOX,
    MIN_PART_CONFIDENCE, RIGHT_TRAIL_COLOR,
)
from pose.dispatcher import PoseDragger
from pose.render import draw_tick, draw_skeleton, draw_bounding_box, draw_mini
from pose.session import DragSession
from pose.tracker import GestureTracker
from pose.types import BOTH, HANDS, SIDES, VALUE_UPDATE, PoseState
from pose.utils import point_segment_dist, calc_distance
from pose.worker import PoseWorker, MODEL_COMPLEXITIES


@dataclass
class Target:
    x: float
    y: float
    vx: float
    vy: float
    radius: float = TARGET_RADIUS
    sliced: bool = False


class SlicerGame:
    """从屏幕底部抛出目标，拖动（手腕或鼠标）划过目标即切开"""

    def __init__(self, width: int = WIN_W, height: int = WIN_H, rng=None):
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self.reset()

    def reset(self):
        self.targets = []
        self.blade = deque(maxlen=BLADE_TRAIL_LEN)
        self.score = 0
        self.misses = 0
        self.alive = True
        self.paused = False
        self.spawn_acc = 0.0

    def spawn(self) -> Target:
        r = TARGET_RADIUS
        t = Target(
            x=float(self.rng.uniform(r, self.width - r)),
            y=float(self.height + r),
            vx=float(self.rng.uniform(-60, 60)),
            vy=-float(self.rng.uniform(560, 720)),
        )
        self.targets.append(t)
        return t

    def on_value_update(self, dx, dy, x, y, extra=None, side=""):
        """value-update handler：返回本次切到的目标数"""
        if not self.alive or self.paused:
            return 0

        prev = self.blade[-1] if self.blade else None
        self.blade.append((x, y))
        if prev is None or math.hypot(dx, dy) < MIN_SLICE_SPEED:
            return 0

        hits = 0
        for t in self.targets:
            if not t.sliced and point_segment_dist((t.x, t.y), prev, (x, y)) <= t.radius:
                t.sliced = True
                hits += 1
        self.score += hits
        return hits

    def clear_blade(self):
        self.blade.clear()

    def update(self, dt: float):
        if not self.alive or self.paused:
            return

        self.spawn_acc += dt
        while self.spawn_acc >= SPAWN_INTERVAL_SEC:
            self.spawn_acc -= SPAWN_INTERVAL_SEC
            self.spawn()

        kept = []
        for t in self.targets:
            if t.sliced:
                continue
            t.vy += GRAVITY * dt
            t.x += t.vx * dt
            t.y += t.vy * dt
            if t.vy > 0 and t.y - t.radius > self.height:
                self.misses += 1
                continue
            kept.append(t)
        self.targets = kept

        if self.misses >= MAX_MISSES:
            self.alive = False


def install_pose_dragger(dragger: PoseDragger, game: SlicerGame):
    dragger.on_value_update(game.on_value_update)


def draggers_for(session: DragSession, hand: str):
    if hand == BOTH:
        return [session.dragger.side(s) for s in SIDES]
    return [session.dragger.side(hand)]


def run_game():
    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("PoseDrag Slicer - MediaPipe Pose")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("Consolas", 18)

    state = PoseState()
    worker = PoseWorker(state)
    worker.start()
    print("[Main] PoseWorker started:", worker.is_alive())

    game = SlicerGame()
    session = DragSession(GestureTracker(selected_hand=SELECTED_HAND))
    for dragger in draggers_for(session, SELECTED_HAND):
        install_pose_dragger(dragger, game)

    overlay = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
    show_skeleton, show_points, show_box = SHOW_SKELETON, SHOW_POINTS, SHOW_BOUNDING_BOX

    def clear_canvas():
        session.clear()
        game.clear_blade()
        overlay.fill((0, 0, 0, 0))

    # Start screen
    start = True
    while start:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                worker.stop()
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_RETURN:
                    start = False
                if event.key == pygame.K_ESCAPE:
                    worker.stop()
                    return

        with worker.lock:
            s_label = state.label

        screen.fill((15, 15, 18))
        t1 = font.render("PoseDrag Slicer", True, (220, 220, 220))
        t2 = font.render("ENTER to start | ESC to quit", True, (200, 200, 200))
        t3 = font.render("Move your wrist to swipe | C=Clear H=Hand M=Model K/P/B=Overlay", True, (180, 180, 180))
        t4 = font.render(f"Status: {s_label}", True, (150, 150, 150))
        screen.blit(t1, (20, 40))
        screen.blit(t2, (20, 70))
        screen.blit(t3, (20, 100))
        screen.blit(t4, (20, 130))
        pygame.display.flip()
        clock.tick(30)

    # Game loop
    swipe_info = ""
    last_time = time.time()
    mini_origin = (WIN_W - int(WIN_W * MINI_SCALE) - 8, WIN_H - int(WIN_H * MINI_SCALE) - 8)
    mini_rect = pygame.Rect(mini_origin[0], mini_origin[1], int(WIN_W * MINI_SCALE), int(WIN_H * MINI_SCALE))

    while True:
        now = time.time()
        dt = now - last_time
        last_time = now

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                worker.stop()
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    worker.stop()
                    return
                if event.key == pygame.K_SPACE:
                    game.paused = not game.paused
                if event.key == pygame.K_r:
                    game.reset()
                    clear_canvas()
                if event.key == pygame.K_c:
                    clear_canvas()
                if event.key == pygame.K_h:
                    hand = HANDS[(HANDS.index(session.tracker.selected_hand) + 1) % len(HANDS)]
                    session.tracker.set_hand(hand)
                    for side in SIDES:
                        session.dragger.side(side).off(VALUE_UPDATE)
                    for dragger in draggers_for(session, hand):
                        install_pose_dragger(dragger, game)
                    print("[Main] Selected hand:", hand)
                if event.key == pygame.K_m:
                    with worker.lock:
                        cur = state.model_complexity
                    worker.request_model_complexity(MODEL_COMPLEXITIES[(cur + 1) % len(MODEL_COMPLEXITIES)])
                if event.key == pygame.K_k:
                    show_skeleton = not show_skeleton
                if event.key == pygame.K_p:
                    show_points = not show_points
                if event.key == pygame.K_b:
                    show_box = not show_box
            # mouse fallback
            if event.type == pygame.MOUSEMOTION and event.buttons[0]:
                dx, dy = event.rel
                game.on_value_update(dx, dy, event.pos[0], event.pos[1], None, "mouse")

        # Consume the newest pose: one tick per new frame
        with worker.lock:
            frame_id = state.frame_id
            pose = state.pose
            p_label = state.label
            p_cam = state.cam_info
            p_fps = state.fps
            p_model = state.model_complexity

        if session.is_new_frame(frame_id):
            if show_points:
                result = session.tick(pose)
                draw_tick(overlay, result)
                for ev, (_, last, current) in zip(result.events, result.segments):
                    swipe_info = f"{ev.side}: x={ev.x:.0f}, y={ev.y:.0f}, distance={calc_distance(last, current):.1f}"
            if show_skeleton and session.is_confident(pose):
                draw_skeleton(overlay, pose.keypoints)

        game.update(dt)

        # Render
        screen.fill((12, 12, 14))
        for t in game.targets:
            pygame.draw.circle(screen, (255, 170, 60), (int(t.x), int(t.y)), int(t.radius))
        if len(game.blade) >= 2:
            pygame.draw.lines(screen, RIGHT_TRAIL_COLOR, False, [(int(x), int(y)) for x, y in game.blade], 3)

        screen.blit(overlay, (0, 0))

        pygame.draw.rect(screen, (30, 30, 36), mini_rect)
        if session.is_confident(pose):
            draw_mini(screen, pose.keypoints, mini_origin, MIN_PART_CONFIDENCE)
            if show_box:
                draw_bounding_box(screen, pose.keypoints)

        hud1 = font.render(f"Score: {game.score}  Miss: {game.misses}/{MAX_MISSES}", True, (230, 230, 230))
        hud2 = font.render(f"Pose: {p_label} | Hand: {session.tracker.selected_hand} | Events: {session.event_count}", True, (200, 200, 200))
        hud3 = font.render(f"FPS: {clock.get_fps():.0f} | Model FPS: {p_fps:.0f} | Complexity: {p_model}", True, (180, 180, 180))
        hud4 = font.render(f"{p_cam}  {swipe_info}", True, (120, 120, 120))
        screen.blit(hud1, (8, 6))
        screen.blit(hud2, (8, 28))
        screen.blit(hud3, (8, 50))
        screen.blit(hud4, (8, 72))

        if game.paused:
            msg = font.render("PAUSED (SPACE to toggle)", True, (255, 255, 120))
            screen.blit(msg, (8, 96))
        if not game.alive:
            msg = font.render("GAME OVER (R to restart)", True, (255, 160, 160))
            screen.blit(msg, (8, 118))

        pygame.display.flip()
        clock.tick(GAME_FPS)
