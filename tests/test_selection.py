"""
Tests for interactive selection — gum and plain-terminal prompters.
"""

import pytest
from click.testing import CliRunner

from dotinstall.core.config.loader import InstallerSettings
from dotinstall.core.errors import SelectionError
from dotinstall.core.services.components import CATALOG
from dotinstall.core.services.selection import (
    PROFILE_MENU,
    ClickPrompter,
    GumPrompter,
    component_label,
    select_prompter,
)


class FakeGum:
    def __init__(self, code: int = 0, out: str = ""):
        self.code = code
        self.out = out
        self.calls: list[list[str]] = []

    def __call__(self, args):
        self.calls.append(list(args))
        return self.code, self.out


# ── gum ─────────────────────────────────────────────────────────


class TestGumPrompter:
    def test_choose_profile(self):
        gum = FakeGum(out=PROFILE_MENU[1][1] + "\n")
        assert GumPrompter(run=gum).choose_profile() == "full"
        assert gum.calls[0][0] == "choose"
        assert gum.calls[0][1:] == [label for _, label in PROFILE_MENU]

    def test_choose_profile_cancelled(self):
        with pytest.raises(SelectionError):
            GumPrompter(run=FakeGum(code=130)).choose_profile()

    def test_choose_profile_garbage(self):
        with pytest.raises(SelectionError, match="Invalid selection"):
            GumPrompter(run=FakeGum(out="Something else\n")).choose_profile()

    def test_choose_components(self):
        out = f"{component_label('neovim')}\n{component_label('shell')}\n"
        gum = FakeGum(out=out)
        chosen = GumPrompter(run=gum).choose_components(["shell", "neovim", "fabric"])
        assert chosen == ["shell", "neovim"]
        assert "--no-limit" in gum.calls[0]

    def test_choose_components_escape(self):
        gum = FakeGum(code=1, out="")
        assert GumPrompter(run=gum).choose_components(["shell"]) == []

    def test_confirm(self):
        assert GumPrompter(run=FakeGum(code=0)).confirm("Start installation?")
        assert not GumPrompter(run=FakeGum(code=1)).confirm("Start installation?")

    def test_confirm_default_no(self):
        gum = FakeGum()
        GumPrompter(run=gum).confirm("Overwrite?", default=False)
        assert gum.calls[0] == ["confirm", "Overwrite?", "--default=false"]


# ── click ───────────────────────────────────────────────────────


class TestClickPrompter:
    def test_choose_profile(self):
        with CliRunner().isolation(input="3\n"):
            assert ClickPrompter().choose_profile() == "custom"

    def test_choose_components(self):
        with CliRunner().isolation(input="y\nn\ny\n"):
            chosen = ClickPrompter().choose_components(["shell", "neovim", "fabric"])
        assert chosen == ["shell", "fabric"]

    def test_confirm(self):
        with CliRunner().isolation(input="n\n"):
            assert ClickPrompter().confirm("Sync dotfiles now?") is False
        with CliRunner().isolation(input="\n"):
            assert ClickPrompter().confirm("Sync dotfiles now?") is True


# ── Selection of the front end ──────────────────────────────────


class TestSelectPrompter:
    def test_auto_with_gum(self):
        assert isinstance(select_prompter(which=lambda name: "/usr/bin/gum"), GumPrompter)

    def test_auto_without_gum(self):
        assert isinstance(select_prompter(which=lambda name: None), ClickPrompter)

    def test_forced_off(self):
        settings = InstallerSettings(use_gum=False)
        prompter = select_prompter(settings, which=lambda name: "/usr/bin/gum")
        assert isinstance(prompter, ClickPrompter)

    def test_forced_on(self):
        settings = InstallerSettings(use_gum=True)
        assert isinstance(select_prompter(settings, which=lambda name: None), GumPrompter)


class TestComponentLabel:
    def test_known(self):
        assert component_label("shell") == CATALOG["shell"].description

    def test_unknown(self):
        assert component_label("emacs") == "emacs"
