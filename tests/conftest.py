"""
Shared fixtures for dockscreen tests.

Provides sample screen descriptions, parsed control sets and a recording
render bridge.
"""

import pytest

from dockscreen.bridges.recording import RecordingBridge
from dockscreen.config import ScreenConfig
from dockscreen.parser import parse_text

# ── Sample screen descriptions ──────────────────────────────────────────

SAMPLE_MENU = """\
// main menu
--global_settings--
font_name: FiraSans-Bold.ttf
font_size: 28
color: white
--end--

--picture_box--
name: panel
size: 600;400
texture_name: textures/panel.png
dock_with: screen.center_middle <-> this.center_middle
--end--

--label--
name: title
size: 560;40
text_string: Main Menu   // caption
dock_with: panel.top_middle <-> this.top_middle
offset: 0;-20
--end--

--button--
name: play
size: 200;60
texture_name_normal: textures/button.png
texture_name_hover: textures/button_hover.png
texture_name_active: textures/button_active.png
on_click_sound: sounds/click.ogg
text_string: Play
dock_with: panel.bottom_middle <-> this.bottom_middle
offset: 0;30
--end--

--button--
name: quit
size: 100;100
texture_name_normal: textures/quit.png
initial_state: disabled
dock_with: screen.top_right <-> this.top_right
--end--
"""

SAMPLE_ROW = """\
--picture_box--
name: a
size: 100;50
dock_with: screen.top_left <-> this.top_left
--end--

--picture_box--
name: b
size: 40;40
dock_with: a.top_right <-> this.top_left
offset: 10;0
--end--
"""


@pytest.fixture
def menu_controls():
    return parse_text(SAMPLE_MENU)


@pytest.fixture
def row_controls():
    return parse_text(SAMPLE_ROW)


@pytest.fixture
def bridge():
    return RecordingBridge()


@pytest.fixture
def config():
    return ScreenConfig(screen_width=1920, screen_height=1080)
