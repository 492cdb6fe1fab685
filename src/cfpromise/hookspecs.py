"""Pluggy hook namespace and promise module hook specifications."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from cfpromise.module import PromiseModule
    from cfpromise.protocol import Request
    from cfpromise.results import Result

CFPROMISE_HOOK_NAMESPACE = "cfpromise"
hookspec = pluggy.HookspecMarker(CFPROMISE_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(CFPROMISE_HOOK_NAMESPACE)


class PromiseHookSpecs:
    """Hook contract for promise module extensions."""

    @hookspec(firstresult=True)
    def handle_operation(self, request: Request, module: PromiseModule) -> Result | None:
        """Answer an operation outside the built-in set."""

    @hookspec
    def on_error(self, stage: str, error: Exception, request: Request | None) -> None:
        """Observe failures raised while handling one request."""


def create_plugin_manager(plugins: tuple[object, ...] = ()) -> pluggy.PluginManager:
    """Build a plugin manager with the given plugins registered in order."""

    manager = pluggy.PluginManager(CFPROMISE_HOOK_NAMESPACE)
    manager.add_hookspecs(PromiseHookSpecs)
    for plugin in plugins:
        manager.register(plugin)
    return manager
