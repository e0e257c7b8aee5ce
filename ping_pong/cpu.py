import math

from .entities import Paddle

IDLE = "idle"
TRACKING = "tracking"


# ----------------------------
# CPU AI
# ----------------------------
class CPU:
    def __init__(self, paddle: Paddle, rules):
        self.paddle = paddle
        self.field = rules.field
        self.speed = rules.cpu_speed
        self.lead = rules.cpu_lead
        self.gain = rules.cpu_gain
        self.dead_zone = rules.cpu_dead_zone
        self.ease = rules.idle_ease
        self.state = IDLE

    def target(self, ball):
        # lead the ball a little along its sideways drift
        return ball.pos.x + ball.vel.x * self.lead

    def update(self, ball, in_play=True):
        if not in_play:
            # drift back to the middle between points
            self.state = IDLE
            home = self.field.center.x
            self.paddle.shift((home - self.paddle.center_x) * self.ease, self.field)
            return

        self.state = TRACKING
        diff = self.target(ball) - self.paddle.center_x
        if abs(diff) > self.dead_zone:
            step = min(self.speed, abs(diff) * self.gain)
            self.paddle.shift(math.copysign(step, diff), self.field)
