"""
Tests for idempotency checks and post-install validations.
"""

import pytest

from dotinstall.core.errors import ValidationError
from dotinstall.core.services.validation import (
    extract_version,
    is_component_installed,
    parse_version,
    skip_if_installed,
    validate_any_command,
    validate_command,
    validate_directory,
    validate_executable,
    validate_file,
    validate_git_config,
    validate_shell,
    validate_symlink,
    version_ge,
)

# ── Idempotency ─────────────────────────────────────────────────


class TestIsComponentInstalled:
    def test_binary_on_path(self, probe):
        assert not is_component_installed(probe, "zsh")
        probe.add_binary("zsh")
        assert is_component_installed(probe, "zsh")

    def test_neovim_aliases(self, probe):
        probe.add_binary("nvim")
        assert is_component_installed(probe, "neovim")
        assert is_component_installed(probe, "nvim")

    def test_bat_accepts_batcat(self, probe):
        assert not is_component_installed(probe, "bat")
        probe.add_binary("batcat")
        assert is_component_installed(probe, "bat")

    def test_zinit_directory(self, probe, home):
        assert not is_component_installed(probe, "zinit")
        (home / ".local" / "share" / "zinit").mkdir(parents=True)
        assert is_component_installed(probe, "zinit")

    def test_fabric_in_go_bin(self, probe):
        assert not is_component_installed(probe, "fabric")
        probe.add_file("~/go/bin/fabric", executable=True)
        assert is_component_installed(probe, "fabric")

    def test_unknown_key_falls_back_to_binary(self, probe):
        assert not is_component_installed(probe, "ripgrep")
        probe.add_binary("ripgrep")
        assert is_component_installed(probe, "ripgrep")

    def test_skip_if_installed(self, ctx, probe):
        assert skip_if_installed(ctx, "fzf") is False
        probe.add_binary("fzf")
        assert skip_if_installed(ctx, "fzf", "fzf") is True


# ── Versions ────────────────────────────────────────────────────


class TestVersions:
    def test_parse(self):
        assert parse_version("0.44.1") == (0, 44, 1)
        assert parse_version("v2.43") == (2, 43)

    def test_compare(self):
        assert version_ge("0.44.1", "0.40")
        assert version_ge("2", "2.0.0")
        assert version_ge("1.10", "1.9")
        assert not version_ge("1.9", "1.10")
        assert not version_ge("0.9.5", "0.10")

    def test_extract_from_banner(self):
        assert extract_version("git version 2.43.0") == "2.43.0"
        assert extract_version("NVIM v0.10.2") == "0.10.2"
        assert extract_version("zsh 5.9 (x86_64-ubuntu-linux-gnu)") == "5.9"
        assert extract_version("no digits here") is None
        assert extract_version("") is None


# ── Validations ─────────────────────────────────────────────────


class TestValidateCommand:
    def test_present(self, ctx, probe):
        probe.add_binary("git")
        validate_command(ctx, "git")

    def test_missing_with_message(self, ctx):
        with pytest.raises(ValidationError) as exc:
            validate_command(ctx, "git", "Git is not installed")
        assert str(exc.value) == "Git is not installed"
        assert not exc.value.recoverable

    def test_missing_default_message(self, ctx):
        with pytest.raises(ValidationError, match="Command 'stow' not found"):
            validate_command(ctx, "stow")

    def test_min_version_satisfied(self, ctx, probe):
        probe.add_binary("nvim", version="v0.10.2")
        validate_command(ctx, "nvim", min_version="0.9")

    def test_min_version_too_old(self, ctx, probe):
        probe.add_binary("nvim", version="v0.9.5")
        with pytest.raises(ValidationError, match="less than required 0.10"):
            validate_command(ctx, "nvim", min_version="0.10")

    def test_unknown_version_only_warns(self, ctx, probe):
        probe.add_binary("devbox")
        probe.versions["devbox"] = "devbox (dev build)"
        validate_command(ctx, "devbox", min_version="0.10")

    def test_any_command(self, ctx, probe):
        probe.add_binary("batcat")
        assert validate_any_command(ctx, "bat", "batcat") == "batcat"
        with pytest.raises(ValidationError):
            validate_any_command(ctx, "exa", "eza")


class TestValidatePaths:
    def test_file(self, ctx, probe):
        probe.add_file("/etc/apt/sources.list.d/gierens.list")
        validate_file(ctx, "/etc/apt/sources.list.d/gierens.list")
        with pytest.raises(ValidationError, match="Nix flake configuration not found"):
            validate_file(ctx, "~/.devbox-flakes/elixir/flake.nix",
                          "Nix flake configuration not found")

    def test_directory(self, ctx, home):
        (home / ".config" / "nvim").mkdir(parents=True)
        validate_directory(ctx, "~/.config/nvim")
        with pytest.raises(ValidationError):
            validate_directory(ctx, "/opt/nvim-linux-x86_64")

    def test_symlink_to_expected_target(self, ctx, probe):
        probe.add_link("/usr/local/bin/nvim", "/opt/nvim-linux-x86_64/bin/nvim")
        validate_symlink(ctx, "/usr/local/bin/nvim", "/opt/nvim-linux-x86_64/bin/nvim")

    def test_symlink_wrong_target(self, ctx, probe):
        probe.add_link("/usr/local/bin/nvim", "/opt/nvim-old/bin/nvim")
        with pytest.raises(ValidationError, match="points to"):
            validate_symlink(ctx, "/usr/local/bin/nvim", "/opt/nvim-linux-x86_64/bin/nvim")

    def test_symlink_missing(self, ctx):
        with pytest.raises(ValidationError, match="Symlink not found"):
            validate_symlink(ctx, "/usr/local/bin/nvim")

    def test_executable(self, ctx, probe):
        probe.add_file("/usr/local/bin/lazygit", executable=True)
        probe.add_file("/usr/local/bin/notes")
        validate_executable(ctx, "/usr/local/bin/lazygit")
        with pytest.raises(ValidationError, match="not executable"):
            validate_executable(ctx, "/usr/local/bin/notes")
        with pytest.raises(ValidationError, match="File not found"):
            validate_executable(ctx, "/usr/local/bin/missing")


class TestValidateGitConfig:
    def test_set(self, ctx, probe):
        probe.git["user.name"] = "Jane Doe"
        validate_git_config(ctx, "user.name")
        validate_git_config(ctx, "user.name", "Jane Doe")

    def test_unset(self, ctx):
        with pytest.raises(ValidationError, match="is not set"):
            validate_git_config(ctx, "user.email")

    def test_mismatch(self, ctx, probe):
        probe.git["init.defaultBranch"] = "master"
        with pytest.raises(ValidationError, match="expected 'main'"):
            validate_git_config(ctx, "init.defaultBranch", "main")


class TestValidateShell:
    def test_other_shell_warns(self, ctx, probe):
        probe.login_shell = "/bin/bash"
        assert validate_shell(ctx, "zsh") is False

    def test_expected_shell(self, ctx, probe):
        probe.login_shell = "/usr/bin/zsh"
        assert validate_shell(ctx, "zsh") is True
