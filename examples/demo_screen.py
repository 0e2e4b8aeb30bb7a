#!/usr/bin/env python3
"""
Demo script for dockscreen.

This script demonstrates:
- Loading a screen description from an assets directory
- Spawning it through a render bridge (the recording bridge stands in for an engine)
- Registering click and state callbacks
- Feeding a scripted pointer path through the interaction system
"""

import logging

from dockscreen import RecordingBridge, Screen, ScreenConfig, Vec2
from dockscreen.logging_config import get_logger, set_module_level, setup_logging

# Set up rich logging to see what's happening
setup_logging(level=logging.INFO)

logger = get_logger(__name__)

# Enable debug logging for interaction to see every transition
set_module_level("dockscreen.interaction", logging.DEBUG)

FRAME_SECONDS = 1 / 60


def main():
    config = ScreenConfig(assets_dir="examples/assets")
    bridge = RecordingBridge()

    screen = Screen.from_file("screen1.ui", bridge=bridge, config=config)
    result = screen.spawn()

    for name, top_left in result.positions.items():
        logger.info(f"{name:<12} top-left ({top_left.x:g}, {top_left.y:g})")

    screen.on_click("play", lambda name: logger.info(f"[{name}] clicked, starting game"))
    screen.on_click("close", lambda name: logger.info(f"[{name}] clicked, closing menu"))
    screen.on_global(lambda change: logger.info(f"{change.widget}: {change.previous.value} -> {change.current.value}"))

    play = screen.resolve("play")
    play_center = Vec2(x=play.x + 100, y=play.y - 30)

    # Hover the play button, click it, wander off and wait out the cooldown
    path = [
        (Vec2(x=-500, y=0), False),
        (play_center, False),
        (play_center, True),
        (Vec2(x=-500, y=0), False),
    ]
    for pointer, pressed in path:
        screen.tick(pointer, just_pressed=pressed, elapsed_seconds=FRAME_SECONDS)
    for _ in range(40):
        screen.tick(Vec2(x=-500, y=0), elapsed_seconds=FRAME_SECONDS)

    # Enable the options button from game code
    screen.set_disabled("options", False)

    logger.info(f"Sounds played: {bridge.sounds}")
    for name, snapshot in screen.get_all_states().items():
        logger.info(f"{name:<12} {snapshot.state.value}")


if __name__ == "__main__":
    main()
