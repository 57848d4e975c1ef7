"""Shared fixtures data for the adapter and facade suites.

Each sample document encodes the same small configuration so tests can assert
the same paths against every format.
"""

from __future__ import annotations

from pathlib import Path

XML_SAMPLE = (
    "<?xml version='1.0' encoding='utf-8'?>\n"
    "<config>\n"
    "  <general>\n"
    "    <interval>30</interval>\n"
    "    <empty/>\n"
    "  </general>\n"
    "  <tick type=\"origin\">5</tick>\n"
    "</config>\n"
)

INI_SAMPLE = "[config]\nmaster = true\n\n[general]\ninterval = 30\n"

JSON_SAMPLE = '{"config": {"master": "true"}, "general": {"interval": 30, "ports": [80, 443]}}'

TOML_SAMPLE = '[config]\nmaster = "true"\n\n[general]\ninterval = 30\nports = [80, 443]\n'

YAML_SAMPLE = "config:\n  master: 'true'\ngeneral:\n  interval: 30\n  ports:\n    - 80\n    - 443\n"

GARBAGE_SAMPLE = "this is not a configuration file\n"


def write(directory: Path, name: str, content: str) -> Path:
    """Write *content* to ``directory/name`` and return the path."""

    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
