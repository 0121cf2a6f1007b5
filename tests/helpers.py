import pygame


def mouse_down(x, y, button=pygame.BUTTON_LEFT):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(x, y), button=button)


def mouse_up(x, y, button=pygame.BUTTON_LEFT):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(x, y), button=button)


def mouse_move(x, y, buttons=(0, 0, 0)):
    return pygame.event.Event(pygame.MOUSEMOTION, pos=(x, y), rel=(0, 0), buttons=buttons)


def drag(surface, start_x, end_x, y=10):
    """Performs one press-move-release drag on a surface."""
    surface.dispatch(mouse_down(start_x, y))
    surface.dispatch(mouse_move(end_x, y, buttons=(1, 0, 0)))
    surface.dispatch(mouse_up(end_x, y))
