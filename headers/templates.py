"""Header bodies installed into the IDE's FILEHEADER macro."""
from __future__ import annotations

import logging
from typing import Dict, Optional

LOGGER = logging.getLogger("xcheader.templates")

DEFAULT_TEMPLATE = "corporate"

_TEMPLATES: Dict[str, str] = {
    "corporate": (
        "//\n"
        "// ___PRODUCTNAME___\n"
        "//\n"
        "// Copyright © ___YEAR___ ___ORGANIZATIONNAME___. All rights reserved.\n"
        "//\n"
        "// Unauthorized copying of this file, via any medium is strictly prohibited.\n"
        "// Proprietary and confidential.\n"
        "//\n"
        "// @author ___FULLUSERNAME___\n"
        "//"
    ),
    "opensource": (
        "//\n"
        "// ___FILENAME___\n"
        "// ___PRODUCTNAME___\n"
        "//\n"
        "// Created by ___FULLUSERNAME___ on ___DATE___.\n"
        "// Licensed under MIT License\n"
        "//"
    ),
    "minimal": (
        "//\n"
        "// ___FILENAME___\n"
        "// Created by ___FULLUSERNAME___ on ___DATE___.\n"
        "//"
    ),
}

TEMPLATE_DESCRIPTIONS: Dict[str, str] = {
    "corporate": "Corporate (default) - Full copyright and proprietary notice",
    "opensource": "Open Source - MIT license friendly",
    "minimal": "Minimal - Simple header with creator and date",
    "custom": "Custom - Load from config file",
}

TEMPLATE_IDS = tuple(TEMPLATE_DESCRIPTIONS)


def get_header_template(template_id: str, *, custom_header: Optional[str] = None) -> str:
    """Return the header text for *template_id*.

    ``custom`` uses the ``header`` entry of the settings file and falls back to
    the corporate body when none is configured, as does any unknown id.
    """
    if template_id == "custom":
        if custom_header:
            return custom_header.rstrip("\n")
        LOGGER.warning("No custom header configured; using %s template", DEFAULT_TEMPLATE)
        return _TEMPLATES[DEFAULT_TEMPLATE]
    body = _TEMPLATES.get(template_id)
    if body is None:
        LOGGER.warning("Unknown template %r; using %s template", template_id, DEFAULT_TEMPLATE)
        return _TEMPLATES[DEFAULT_TEMPLATE]
    return body


__all__ = ["DEFAULT_TEMPLATE", "TEMPLATE_DESCRIPTIONS", "TEMPLATE_IDS", "get_header_template"]
