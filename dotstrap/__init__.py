"""dotstrap: bootstrap a macOS machine from a dotfiles repository.

Core design goals:
- One explicit config, passed to every step
- Best-effort steps: failures become warnings in the run report
- Idempotent dotfile linking
- Centralized logging
"""

__version__ = "0.1.0"

__all__ = []
