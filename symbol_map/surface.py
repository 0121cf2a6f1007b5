# symbol_map/surface.py

"""
================================================================================
RETAINED SCENE GRAPH
================================================================================
Pygame draws in immediate mode, but the chart needs marks that outlive a
frame: each mark stays bound to one datum, keeps its classes and hover
handlers, and is repositioned in place while dragging. This module provides
that retained layer.

Data Contract:
---------------
- Scene: a registry of named ChartSurfaces (the chart looks surfaces up by id).
- ChartSurface:
    - group(name): get-or-create an ordered MarkGroup.
    - on(event, handler): registers "mousedown" / "mouseup" / "mousemove"
      handlers receiving the pointer position in surface coordinates.
    - dispatch(event): routes a pygame mouse event to the surface and marks.
    - paint(): rasterizes all marks onto the surface canvas.
- Marks (PathMark, SymbolMark): datum, classes, attributes, and
  "mouseover" / "mouseout" handlers receiving the mark.
- Side Effects: Attribute and class changes flag the owning surface dirty.
- Invariants: Groups paint in creation order and marks in insertion order, so
  later marks are on top and win hit tests.
================================================================================
"""
from typing import Callable, Dict, Iterator, List, Optional

import pygame

from . import config as DEFAULTS
from .projection import PathShape

MOUSE_EVENTS = ("mousedown", "mouseup", "mousemove")
HOVER_EVENTS = ("mouseover", "mouseout")


def resolve_style(classes, style_sheet: dict) -> dict:
    """Merges the style sheet entries for a set of classes, in style sheet order."""
    style = {}
    for name, entry in style_sheet.items():
        if name in classes:
            style.update(entry)
    return style


class Mark:
    """A visual primitive bound to one datum."""

    def __init__(self, datum=None):
        self.datum = datum
        self.classes = set()
        self.group: Optional["MarkGroup"] = None
        self._handlers: Dict[str, Callable] = {}

    def _touch(self):
        if self.group is not None and self.group.surface is not None:
            self.group.surface.dirty = True

    def attr(self, **attributes) -> "Mark":
        """Sets drawing attributes by name. Returns the mark for chaining."""
        for name, value in attributes.items():
            setattr(self, name, value)
        self._touch()
        return self

    def classed(self, name: str, enabled: bool) -> "Mark":
        if enabled:
            self.classes.add(name)
        else:
            self.classes.discard(name)
        self._touch()
        return self

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def on(self, event_name: str, handler: Optional[Callable]) -> "Mark":
        """Registers (or with None, removes) a hover handler. A new handler replaces the old one."""
        if event_name not in HOVER_EVENTS:
            raise ValueError(f"Unknown mark event '{event_name}'")
        if handler is None:
            self._handlers.pop(event_name, None)
        else:
            self._handlers[event_name] = handler
        return self

    def handler(self, event_name: str) -> Optional[Callable]:
        return self._handlers.get(event_name)

    def fire(self, event_name: str):
        handler = self._handlers.get(event_name)
        if handler is not None:
            handler(self)

    def contains(self, x: float, y: float) -> bool:
        return False

    def paint(self, canvas: pygame.Surface, style: dict, background):
        raise NotImplementedError


class PathMark(Mark):
    """A polygon/line outline, e.g. the landmass."""

    def __init__(self, datum=None):
        super().__init__(datum)
        self.shape = PathShape()

    def paint(self, canvas: pygame.Surface, style: dict, background):
        fill = style.get("fill")
        stroke = style.get("stroke")
        stroke_width = style.get("stroke_width", 1)

        for exterior, holes in self.shape.polygons:
            if len(exterior) < 3:
                continue
            if fill is not None:
                pygame.draw.polygon(canvas, fill, exterior.tolist())
                for hole in holes:
                    if len(hole) >= 3:
                        pygame.draw.polygon(canvas, background, hole.tolist())
            if stroke is not None and stroke_width > 0:
                for ring in [exterior, *holes]:
                    if len(ring) >= 2:
                        pygame.draw.lines(canvas, stroke, True, ring.tolist(), stroke_width)

        if stroke is not None and stroke_width > 0:
            for line in self.shape.lines:
                pygame.draw.lines(canvas, stroke, False, line.tolist(), stroke_width)


class SymbolMark(Mark):
    """A circle positioned at (cx, cy) with radius r."""

    def __init__(self, datum=None):
        super().__init__(datum)
        self.cx = 0.0
        self.cy = 0.0
        self.r = 0.0
        self.fill = (0, 0, 0)

    def contains(self, x: float, y: float) -> bool:
        return self.r > 0 and (x - self.cx) ** 2 + (y - self.cy) ** 2 <= self.r ** 2

    def paint(self, canvas: pygame.Surface, style: dict, background):
        radius = int(round(self.r))
        if radius <= 0:
            return
        stroke = style.get("stroke")
        stroke_width = style.get("stroke_width", 1)
        alpha = int(round(255 * style.get("opacity", 1.0)))

        # Each symbol is drawn on its own small layer so overlapping
        # translucent circles blend with what is already on the canvas.
        size = 2 * (radius + stroke_width) + 1
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        center = (size // 2, size // 2)
        pygame.draw.circle(layer, (*self.fill, alpha), center, radius)
        if stroke is not None and stroke_width > 0:
            pygame.draw.circle(layer, (*stroke, alpha), center, radius, stroke_width)
        canvas.blit(layer, (int(round(self.cx)) - center[0], int(round(self.cy)) - center[1]))


class MarkGroup:
    """An ordered collection of marks, the equivalent of an SVG <g>."""

    def __init__(self, name: str, surface: Optional["ChartSurface"] = None):
        self.name = name
        self.surface = surface
        self.marks: List[Mark] = []

    def __len__(self) -> int:
        return len(self.marks)

    def __iter__(self) -> Iterator[Mark]:
        return iter(self.marks)

    def append(self, mark: Mark) -> Mark:
        mark.group = self
        self.marks.append(mark)
        mark._touch()
        return mark

    def truncate(self, size: int):
        """Removes the marks past the first `size`."""
        for mark in self.marks[size:]:
            mark.group = None
        del self.marks[size:]
        if self.surface is not None:
            self.surface.dirty = True


class ChartSurface:
    """
    A rectangular rendering surface inside the window. Owns its canvas, its
    mark groups and the pointer handlers registered on it.
    """

    def __init__(self, surface_id: str, rect, style_sheet: Optional[dict] = None,
                 background=DEFAULTS.BACKGROUND_COLOR):
        self.surface_id = surface_id
        self.rect = pygame.Rect(rect)
        self.style_sheet = style_sheet if style_sheet is not None else DEFAULTS.STYLE_SHEET
        self.background = background
        self.canvas = pygame.Surface(self.rect.size)
        self.groups: Dict[str, MarkGroup] = {}
        self._handlers: Dict[str, Callable] = {}
        self._hovered: Optional[Mark] = None
        self.dirty = True

    # --- Geometry ---
    def get_bounding_rect(self) -> pygame.Rect:
        """The surface's current position and size in window pixels."""
        return self.rect.copy()

    def resize(self, rect):
        self.rect = pygame.Rect(rect)
        self.canvas = pygame.Surface(self.rect.size)
        self.dirty = True

    # --- Structure ---
    def group(self, name: str) -> MarkGroup:
        if name not in self.groups:
            self.groups[name] = MarkGroup(name, self)
        return self.groups[name]

    def marks(self) -> Iterator[Mark]:
        for group in self.groups.values():
            yield from group.marks

    def hovered(self) -> Optional[Mark]:
        return self._hovered

    # --- Events ---
    def on(self, event_name: str, handler: Optional[Callable]) -> "ChartSurface":
        """Registers (or with None, removes) a pointer handler. A new handler replaces the old one."""
        if event_name not in MOUSE_EVENTS:
            raise ValueError(f"Unknown surface event '{event_name}'")
        if handler is None:
            self._handlers.pop(event_name, None)
        else:
            self._handlers[event_name] = handler
        return self

    def handler(self, event_name: str) -> Optional[Callable]:
        return self._handlers.get(event_name)

    def hit_test(self, x: float, y: float) -> Optional[Mark]:
        """Returns the topmost mark containing the point, if any."""
        for group in reversed(list(self.groups.values())):
            for mark in reversed(group.marks):
                if mark.contains(x, y):
                    return mark
        return None

    def _set_hovered(self, mark: Optional[Mark]):
        if mark is self._hovered:
            return
        previous, self._hovered = self._hovered, mark
        if previous is not None and previous.group is not None:
            previous.fire("mouseout")
        if mark is not None:
            mark.fire("mouseover")

    def _fire(self, event_name: str, position):
        handler = self._handlers.get(event_name)
        if handler is not None:
            handler(position)

    def dispatch(self, event: pygame.event.Event) -> bool:
        """
        Routes a pygame mouse event. Events outside the surface are ignored,
        except that leaving the surface ends any hover and a left-button
        release still reaches the "mouseup" handler. Returns True if the
        event landed on the surface.
        """
        if event.type not in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
            return False

        local = (event.pos[0] - self.rect.x, event.pos[1] - self.rect.y)
        if not self.rect.collidepoint(event.pos):
            if event.type == pygame.MOUSEMOTION:
                self._set_hovered(None)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == pygame.BUTTON_LEFT:
                # A release anywhere ends a drag that started on the surface.
                self._fire("mouseup", local)
            return False

        if event.type == pygame.MOUSEMOTION:
            self._set_hovered(self.hit_test(*local))
            self._fire("mousemove", local)
        elif event.button == pygame.BUTTON_LEFT:
            self._fire("mousedown" if event.type == pygame.MOUSEBUTTONDOWN else "mouseup", local)
        return True

    # --- Rendering ---
    def paint(self) -> pygame.Surface:
        """Rasterizes every mark onto the canvas and clears the dirty flag."""
        self.canvas.fill(self.background)
        for group in self.groups.values():
            for mark in group.marks:
                mark.paint(self.canvas, resolve_style(mark.classes, self.style_sheet), self.background)
        self.dirty = False
        return self.canvas

    def blit_to(self, screen: pygame.Surface):
        """Blits the canvas onto the window, repainting first only if a mark changed."""
        if self.dirty:
            self.paint()
        screen.blit(self.canvas, self.rect.topleft)


class Scene:
    """Registry of the chart surfaces in a window, looked up by id."""

    def __init__(self):
        self._surfaces: Dict[str, ChartSurface] = {}

    def add(self, surface: ChartSurface) -> ChartSurface:
        self._surfaces[surface.surface_id] = surface
        return surface

    def get(self, surface_id: str) -> Optional[ChartSurface]:
        return self._surfaces.get(surface_id)

    def __contains__(self, surface_id: str) -> bool:
        return surface_id in self._surfaces

    def __iter__(self) -> Iterator[ChartSurface]:
        return iter(self._surfaces.values())
