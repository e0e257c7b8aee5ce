"""
Ping Pong - pygame front end for the flat court and the table court

Features:
- 1P vs CPU or 2P on one keyboard
- Difficulty selector (Easy/Medium/Hard) affecting CPU speed
- Mouse or keyboard paddle control, Space/click to serve
- Pause (P), Restart after game over (R) and Quit (Esc)
- Sound placeholders (optional) - works without sound files

How to run:
1. pip install -e .
2. ping-pong --variant table
"""

import argparse
import logging
import sys
from pathlib import Path

import pygame

from .match import Cue, Phase, Side
from .session import MoveTo, Nudge, Pause, Reset, Session, Start
from .settings import DIFFICULTY, FLAT_BG, MODES, TABLE_BG, TABLE_ORANGE, VARIANTS, WHITE, rules_for

logger = logging.getLogger(__name__)

FPS = 60
GRAY = (40, 40, 40)
SHADOW = (0, 0, 0)
SOUND_DIR = Path(__file__).parent / "sounds"

# held keys -> (side, direction)
NUDGE_KEYS = {
    pygame.K_LEFT: (Side.PLAYER, -1),
    pygame.K_a: (Side.PLAYER, -1),
    pygame.K_RIGHT: (Side.PLAYER, 1),
    pygame.K_d: (Side.PLAYER, 1),
    pygame.K_j: (Side.OPPONENT, -1),
    pygame.K_l: (Side.OPPONENT, 1),
}


# ----------------------------
# Input adapter
# ----------------------------
def translate_event(e):
    """Turn one pygame event into input events for the session."""
    if e.type == pygame.MOUSEMOTION:
        return [MoveTo(float(e.pos[0]))]
    if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
        return [Start()]
    if e.type == pygame.KEYDOWN:
        if e.key in (pygame.K_SPACE, pygame.K_RETURN):
            return [Start()]
        if e.key == pygame.K_r:
            return [Reset()]
        if e.key == pygame.K_p:
            return [Pause()]
    return []


def held_nudges(pressed, mode="1P"):
    events = []
    for key, (side, direction) in NUDGE_KEYS.items():
        if side is Side.OPPONENT and mode != "2P":
            continue
        if pressed[key]:
            events.append(Nudge(direction, side))
    return events


# ----------------------------
# Sound placeholders
# ----------------------------
class CuePlayer:
    """Plays ``<cue>.wav`` from ``sound_dir`` for each cue, if the file is there."""

    def __init__(self, sound_dir=SOUND_DIR):
        self.sounds = {}
        if not sound_dir.is_dir():
            logger.info("no sound directory at %s, playing silently", sound_dir)
            return
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("audio unavailable: %s", exc)
            return
        for cue in Cue:
            path = sound_dir / f"{cue.value}.wav"
            if path.exists():
                self.sounds[cue] = pygame.mixer.Sound(str(path))

    def play(self, cues):
        for cue in cues:
            logger.debug("cue %s", cue.value)
            sound = self.sounds.get(cue)
            if sound is not None:
                sound.play()


# ----------------------------
# Game class with loop
# ----------------------------
class Game:
    def __init__(self, variant="flat", mode="1P", difficulty="Medium"):
        rules = rules_for(variant, difficulty=difficulty)
        self.session = Session(rules, mode=mode)

        pygame.init()
        pygame.display.set_caption("Ping Pong - Python")
        self.screen = pygame.display.set_mode(rules.canvas)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 36)
        self.bigfont = pygame.font.SysFont(None, 64)
        self.cues = CuePlayer()
        self.running = True

    # ----------------------------
    # Draw
    # ----------------------------
    def draw_court(self, snap):
        f = snap["field"]
        rect = pygame.Rect(int(f["left"]), int(f["top"]), int(f["width"]), int(f["height"]))
        if snap["variant"] == "table":
            self.screen.fill(TABLE_BG)
            pygame.draw.rect(self.screen, TABLE_ORANGE, rect)
            pygame.draw.line(self.screen, WHITE, rect.midleft, rect.midright, 3)
        else:
            self.screen.fill(FLAT_BG)
            for y in range(rect.top, rect.bottom, 35):
                pygame.draw.line(self.screen, GRAY, (rect.centerx, y), (rect.centerx, y + 20), 3)

    def draw_paddle(self, paddle):
        if paddle.shape == "circle":
            pygame.draw.circle(self.screen, paddle.color, (int(paddle.x), int(paddle.y)), int(paddle.radius))
        else:
            pygame.draw.rect(self.screen, paddle.color, paddle.rect())

    def draw_ball(self, ball):
        visual_y = ball.pos.y - ball.z
        if ball.z > 0:
            pygame.draw.circle(self.screen, SHADOW, (int(ball.pos.x), int(ball.pos.y)), ball.radius)
        pygame.draw.circle(self.screen, ball.color, (int(ball.pos.x), int(visual_y)), ball.radius)

    def draw_hud(self, snap):
        w, h = self.screen.get_size()
        sl = self.bigfont.render(str(snap["scores"]["player"]), True, WHITE)
        sr = self.bigfont.render(str(snap["scores"]["opponent"]), True, WHITE)
        self.screen.blit(sl, (w // 4 - sl.get_width() // 2, h - 70))
        self.screen.blit(sr, (3 * w // 4 - sr.get_width() // 2, 18))

        message = None
        if snap["phase"] == Phase.WAITING.value:
            message = "Press SPACE or click to serve"
        elif snap["phase"] == Phase.GAME_OVER.value:
            message = "YOU WIN! - R to restart" if snap["winner"] == "player" else "CPU WINS! - R to restart"
        elif snap["paused"]:
            message = "PAUSED"
        if message:
            m = self.font.render(message, True, WHITE)
            self.screen.blit(m, (w // 2 - m.get_width() // 2, h // 2 - m.get_height() // 2))

    def draw(self):
        snap = self.session.snapshot()
        self.draw_court(snap)
        self.draw_paddle(self.session.opponent)
        self.draw_ball(self.session.ball)
        self.draw_paddle(self.session.player)
        self.draw_hud(snap)

    # ----------------------------
    # Main loop
    # ----------------------------
    def run(self):
        while self.running:
            self.clock.tick(FPS)
            events = []
            for e in pygame.event.get():
                if e.type == pygame.QUIT or (e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE):
                    self.running = False
                events.extend(translate_event(e))
            events.extend(held_nudges(pygame.key.get_pressed(), self.session.mode))

            frame = self.session.update(events)
            self.cues.play(frame.cues)
            if frame.score:
                logger.info("score %d-%d", frame.score.player, frame.score.opponent)

            self.draw()
            pygame.display.flip()

        pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(prog="ping-pong", description="Ping pong against the CPU or a friend.")
    parser.add_argument("--variant", choices=VARIANTS, default="flat")
    parser.add_argument("--mode", choices=MODES, default="1P")
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTY), default="Medium")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    Game(args.variant, args.mode, args.difficulty).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
