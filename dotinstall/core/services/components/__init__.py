"""
Component catalog.

Order matters: it is the install order of every profile and the order
of the custom selection menu.
"""

from __future__ import annotations

from dotinstall.core.errors import SelectionError
from dotinstall.core.models.component import Component
from dotinstall.core.services.components import (
    cli_tools,
    devbox,
    elixir_erlang,
    fabric,
    git_config,
    lazygit,
    neovim,
    shell,
    stow,
    system_base,
)

CATALOG: dict[str, Component] = {
    c.key: c
    for c in (
        system_base.COMPONENT,
        shell.COMPONENT,
        cli_tools.COMPONENT,
        git_config.COMPONENT,
        neovim.COMPONENT,
        lazygit.COMPONENT,
        devbox.COMPONENT,
        elixir_erlang.COMPONENT,
        fabric.COMPONENT,
        stow.COMPONENT,
    )
}


def get_component(key: str) -> Component:
    try:
        return CATALOG[key]
    except KeyError:
        raise SelectionError(
            f"Unknown component: {key}. Available: {', '.join(CATALOG)}"
        ) from None


__all__ = ["CATALOG", "get_component"]
