from __future__ import annotations

import re

# WebDriver key codes from the Unicode private use area.
KEY_CODES: dict[str, str] = {
    "Null": "\ue000",
    "Cancel": "\ue001",
    "Help": "\ue002",
    "Backspace": "\ue003",
    "Tab": "\ue004",
    "Clear": "\ue005",
    "Return": "\ue006",
    "Enter": "\ue007",
    "Shift": "\ue008",
    "Control": "\ue009",
    "Alt": "\ue00a",
    "Pause": "\ue00b",
    "Escape": "\ue00c",
    "Space": "\ue00d",
    "PageUp": "\ue00e",
    "PageDown": "\ue00f",
    "End": "\ue010",
    "Home": "\ue011",
    "Left": "\ue012",
    "Up": "\ue013",
    "Right": "\ue014",
    "Down": "\ue015",
    "Insert": "\ue016",
    "Delete": "\ue017",
    "Semicolon": "\ue018",
    "Equals": "\ue019",
    "F1": "\ue031",
    "F2": "\ue032",
    "F3": "\ue033",
    "F4": "\ue034",
    "F5": "\ue035",
    "F6": "\ue036",
    "F7": "\ue037",
    "F8": "\ue038",
    "F9": "\ue039",
    "F10": "\ue03a",
    "F11": "\ue03b",
    "F12": "\ue03c",
    "Command": "\ue03d",
    "Meta": "\ue03d",
}

_TOKEN = re.compile(r"_([A-Z][A-Za-z0-9]*)_")


def replace_key_strokes_with_codes(text: str) -> str:
    """Replace ``_Name_`` tokens (``_Enter_``, ``_Tab_``...) with key codes."""

    def substitute(match: re.Match[str]) -> str:
        return KEY_CODES.get(match.group(1), match.group(0))

    return _TOKEN.sub(substitute, text)
