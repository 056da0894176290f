from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .lib.archive import tarball_url as github_tarball_url

DEFAULT_GITHUB_USER = "ilhaniskurt"
DEFAULT_GITHUB_REPO = "dotfiles"
DEFAULT_USER_NAME = "İlhan Yavuz İskurt"
DEFAULT_USER_EMAIL = "85507446+ilhaniskurt@users.noreply.github.com"


def _expand(value: str, home: Path) -> Path:
    if value == "~" or value.startswith("~/"):
        return home / value[2:]
    return Path(os.path.expandvars(value))


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def github_user(self) -> str:
        return str(self._section("repository").get("user") or DEFAULT_GITHUB_USER)

    @property
    def github_repo(self) -> str:
        return str(self._section("repository").get("name") or DEFAULT_GITHUB_REPO)

    @property
    def branch(self) -> str:
        return str(self._section("repository").get("branch") or "main")

    @property
    def tarball_url(self) -> str:
        url = self._section("repository").get("tarball_url")
        if url:
            return str(url)
        return github_tarball_url(self.github_user, self.github_repo, self.branch)

    @property
    def user_name(self) -> str:
        # An explicit empty string disables setting the identity.
        value = self._section("identity").get("name", DEFAULT_USER_NAME)
        return str(value or "")

    @property
    def user_email(self) -> str:
        value = self._section("identity").get("email", DEFAULT_USER_EMAIL)
        return str(value or "")

    @property
    def home_dir(self) -> Path:
        value = self._section("paths").get("home")
        return Path(os.path.expanduser(str(value))) if value else Path.home()

    def _home_path(self, key: str, default: str) -> Path:
        return _expand(str(self._section("paths").get(key) or default), self.home_dir)

    @property
    def dotfiles_dir(self) -> Path:
        return self._home_path("dotfiles", f"~/.local/opt/{self.github_repo}")

    @property
    def download_dir(self) -> Path:
        return self._home_path("download", "/tmp")

    @property
    def ssh_key_path(self) -> Path:
        return self._home_path("ssh_key", "~/.ssh/id_ed25519")

    @property
    def ssh_config_path(self) -> Path:
        return self._home_path("ssh_config", "~/.ssh/config")

    # Paths inside the extracted dotfiles repository.

    @property
    def link_file(self) -> Path:
        return self.dotfiles_dir / str(self._section("dotfiles").get("links") or "opt/files")

    @property
    def brewfile(self) -> Path:
        return self.dotfiles_dir / str(self._section("dotfiles").get("brewfile") or "opt/Brewfile")

    @property
    def extensions_file(self) -> Path:
        rel = self._section("dotfiles").get("vscode_extensions") or "configs/.vscode_extensions.txt"
        return self.dotfiles_dir / str(rel)


def load_bootstrap_config(path: Optional[str]) -> BootstrapConfig:
    if path is None:
        return BootstrapConfig()

    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("bootstrap config must be YAML")

    import yaml

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    return BootstrapConfig(raw=raw)
