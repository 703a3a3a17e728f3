from collections import defaultdict

import pygame

from chase.input_handler import InputHandler


def stub_input(monkeypatch, events, pressed=()):
    keys = defaultdict(bool, {k: True for k in pressed})
    monkeypatch.setattr(pygame.event, "get", lambda: list(events))
    monkeypatch.setattr(pygame.key, "get_pressed", lambda: keys)


def test_direction_from_keys(monkeypatch):
    stub_input(monkeypatch, [], pressed=[pygame.K_w])
    handler = InputHandler()
    handler.process_events()
    assert handler.get_direction() == (0, 1)
    assert not handler.should_quit()


def test_opposing_keys_cancel(monkeypatch):
    stub_input(monkeypatch, [], pressed=[pygame.K_LEFT, pygame.K_d])
    handler = InputHandler()
    handler.process_events()
    assert handler.get_direction() == (0, 0)


def test_no_keys_before_processing():
    assert InputHandler().get_direction() == (0, 0)


def test_backslash_toggles_noclip_and_x_quits(monkeypatch):
    events = [
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_BACKSLASH),
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_x),
    ]
    stub_input(monkeypatch, events)
    handler = InputHandler()
    handler.process_events()
    assert handler.toggle_noclip_pressed()
    assert handler.should_quit()
    # Actions only last for one frame
    stub_input(monkeypatch, [])
    handler.process_events()
    assert not handler.toggle_noclip_pressed()
    assert not handler.should_quit()
