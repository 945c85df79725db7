import pygame

class LevelUpBanner:
    """Translucent "LEVEL n" strip across the board while the game says so."""
    def __init__(self, font, width):
        self.font=font
        self.width=width
        self._level=None
        self._text=None

    def draw(self, screen, game, board_x, board_y, board_h):
        if not game.level_up_visible(): return
        if game.level!=self._level:
            self._level=game.level
            self._text=self.font.render(f"LEVEL {game.level}",True,(255,245,200))
        h=self._text.get_height()+24
        s=pygame.Surface((self.width,h),pygame.SRCALPHA); s.fill((20,25,40,200))
        y=board_y+(board_h-h)//2
        screen.blit(s,(board_x,y))
        rect=self._text.get_rect(center=(board_x+self.width//2,y+h//2))
        screen.blit(self._text,rect)
