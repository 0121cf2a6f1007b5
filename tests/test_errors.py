import logging

import pygame
import pytest

from symbol_map.errors import ErrorBanner, process_error


class _Response(Exception):
    status_text = "Not Found"


def test_no_error_is_not_reported():
    reported = []
    assert process_error(None, reported.append) is False
    assert reported == []


def test_error_is_reported_and_logged(caplog):
    reported = []
    with caplog.at_level(logging.WARNING, logger="symbol_map.errors"):
        assert process_error(FileNotFoundError("quakes.csv"), reported.append) is True
    assert reported == ["Error: quakes.csv"]
    assert "Error: quakes.csv" in caplog.text


def test_status_text_is_preferred():
    reported = []
    process_error(_Response("404"), reported.append)
    assert reported == ["Error: Not Found"]


def test_reporter_is_optional():
    assert process_error(ValueError("bad")) is True


@pytest.fixture
def banner():
    return ErrorBanner(pygame.font.Font(None, 20))


def test_banner_stacks_newest_first(banner):
    banner("Error: one")
    banner("Error: two")
    assert banner.messages == ["Error: two", "Error: one"]
    assert banner.visible


def test_banner_dismissed_by_escape(banner):
    banner("Error: one")
    event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)
    assert banner.handle_event(event) is True
    assert not banner.visible
    assert banner.handle_event(event) is False


def test_banner_dismissed_by_click_on_it(banner):
    banner("Error: one")
    screen = pygame.Surface((400, 300))
    banner.draw(screen)

    outside = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 250), button=1)
    assert banner.handle_event(outside) is False
    assert banner.visible

    inside = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 5), button=1)
    assert banner.handle_event(inside) is True
    assert not banner.visible


def test_banner_draws_a_bar_across_the_top(banner):
    banner("Error: something failed")
    screen = pygame.Surface((400, 300))
    screen.fill((255, 255, 255))
    banner.draw(screen)
    assert screen.get_at((1, 1))[:3] == (255, 235, 235)
