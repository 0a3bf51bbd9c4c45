"""Pre-commit hook management."""

from rtrim.hooks.installer import HookState, hook_state, install_hook, uninstall_hook

__all__ = ["HookState", "hook_state", "install_hook", "uninstall_hook"]
