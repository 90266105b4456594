"""The players as the client sees them, and first-person camera control."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from sandboxington.keys import Key, Mouse
from sandboxington.position import UP, PlayerPosition

WALK_SPEED = 8.1
SPRINT_SPEED = 32.4


class InputWindow(Protocol):
    """What the camera controller needs from a window."""

    width: int
    height: int

    def key_pressed(self, key: int) -> bool: ...

    def key_released(self, key: int) -> bool: ...

    def mouse_pressed(self, button: int) -> bool: ...

    def mouse_released(self, button: int) -> bool: ...

    def show_cursor(self, show: bool) -> None: ...

    def set_cursor_position(self, x: float, y: float) -> None: ...

    def cursor_position(self) -> tuple[float, float]: ...


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def _rotate(v: np.ndarray, angle: float, axis: np.ndarray) -> np.ndarray:
    """Rotate ``v`` by ``angle`` radians about ``axis`` (right-handed)."""
    k = _normalize(np.asarray(axis, dtype=np.float64))
    v = np.asarray(v, dtype=np.float64)
    c, s = math.cos(angle), math.sin(angle)
    return v * c + np.cross(k, v) * s + k * np.dot(k, v) * (1.0 - c)


def _angle(a: np.ndarray, b: np.ndarray) -> float:
    return math.acos(float(np.clip(np.dot(a, b), -1.0, 1.0)))


@dataclass(eq=False)
class RemotePlayer:
    """Another player in the world."""

    name: str = ""
    position: PlayerPosition = field(default_factory=PlayerPosition)


@dataclass
class CameraInput:
    """State of the mouse-look controller."""

    first_click: bool = True
    speed: float = WALK_SPEED
    sensitivity: float = 100.0


@dataclass(eq=False)
class LocalPlayer:
    """The player controlled on this client."""

    id: int = 0
    position: PlayerPosition = field(default_factory=PlayerPosition)
    controller: CameraInput = field(default_factory=CameraInput)

    def input(self, window: InputWindow) -> None:
        """Read keys and mouse to set velocity and orientation."""
        width, height = window.width, window.height
        orientation = self.position.orientation.astype(np.float64)
        up = UP.astype(np.float64)
        right = _normalize(np.cross(orientation, up))

        direction = np.zeros(3)
        if window.key_pressed(Key.W):
            direction += orientation
        if window.key_pressed(Key.A):
            direction -= right
        if window.key_pressed(Key.S):
            direction -= orientation
        if window.key_pressed(Key.D):
            direction += right
        if window.key_pressed(Key.SPACE):
            direction += up
        if window.key_pressed(Key.LEFT_SHIFT):
            direction -= up

        if not direction.any():
            self.position.velocity = np.zeros(3, dtype=np.float32)
        else:
            self.position.velocity = (_normalize(direction) * self.controller.speed).astype(np.float32)

        if window.key_pressed(Key.LEFT_CONTROL):
            self.controller.speed = SPRINT_SPEED
        elif window.key_released(Key.LEFT_CONTROL):
            self.controller.speed = WALK_SPEED

        if window.mouse_pressed(Mouse.LEFT):
            window.show_cursor(False)
            if self.controller.first_click:
                window.set_cursor_position(width // 2, height // 2)
                self.controller.first_click = False

            mouse_x, mouse_y = window.cursor_position()
            rot_x = self.controller.sensitivity * (mouse_y - height // 2) / height
            rot_y = self.controller.sensitivity * (mouse_x - width // 2) / width

            tilted = _rotate(orientation, math.radians(-rot_x), right)
            if abs(_angle(tilted, up) - math.pi / 2) <= math.radians(85.0):
                orientation = tilted
            orientation = _rotate(orientation, math.radians(-rot_y), up)
            self.position.orientation = orientation.astype(np.float32)

            window.set_cursor_position(width / 2.0, height / 2.0)
        elif window.mouse_released(Mouse.LEFT):
            window.show_cursor(True)
            self.controller.first_click = True

    def update(self) -> None:
        self.position.update()

    def camera(self, projection: np.ndarray) -> np.ndarray:
        """The combined projection and view matrix."""
        return np.asarray(projection, dtype=np.float32) @ self.position.view()