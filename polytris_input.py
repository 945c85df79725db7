"""Keyboard -> game commands: one-shot keys plus DAS/ARR for held keys"""
from typing import List, Optional
import pygame
from polytris_config import CONFIG

# fire once per physical press; held-key repeats are not re-posted
KEYMAP = {
    pygame.K_UP: "rotate",
    pygame.K_SPACE: "hard_drop",
    pygame.K_r: "reset",
}

class ShiftRepeat:
    def __init__(self):
        self.dir=0; self.held_ms=0; self.last=0; self.initial=False
    def update(self, dt, neg, pos):
        nd=(-1 if neg else 0)+(1 if pos else 0)
        if nd!=self.dir:
            self.dir=nd; self.held_ms=0; self.last=0; self.initial=False
        if self.dir==0: return 0
        self.held_ms+=dt
        if not self.initial:
            self.initial=True; return self.dir
        if self.held_ms < CONFIG["DAS_MS"]: return 0
        arr=CONFIG["ARR_MS"]
        if arr==0: return self.dir
        self.last+=dt
        if self.last>=arr:
            self.last=0; return self.dir
        return 0

class HeldKeys:
    """Left/right shift and soft drop, stepped from polled key state."""
    def __init__(self):
        self.shift=ShiftRepeat()
        self.drop=ShiftRepeat()
    def update(self, dt, left, right, down) -> List[str]:
        cmds=[]
        step=self.shift.update(dt, left, right)
        if step: cmds.append("move_left" if step<0 else "move_right")
        if self.drop.update(dt, False, down): cmds.append("soft_drop")
        return cmds
    def poll(self, dt) -> List[str]:
        keys=pygame.key.get_pressed()
        return self.update(dt, keys[pygame.K_LEFT], keys[pygame.K_RIGHT], keys[pygame.K_DOWN])

def command_for(event) -> Optional[str]:
    if event.type != pygame.KEYDOWN:
        return None
    return KEYMAP.get(event.key)
