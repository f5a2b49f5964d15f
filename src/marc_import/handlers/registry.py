"""
Static handler registry.

Handlers register themselves by name with the ``@handler`` decorator when
their module is imported. Mapping rules refer to these names, and the
mapping table checks them at load time, so an unknown handler never
surfaces in the middle of a conversion.

Handler signature:

    fn(epdata, fieldname, value, options) -> value | None

``options`` is a HandlerOptions (indicators, filter set, DispatchContext,
config, provenance label). A handler may write fields other than its
nominal output directly on ``epdata``; a returned value is stored by the
walker according to the output field's merge policy.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from marc_import.core.exceptions import ConfigurationError

Handler = Callable[..., Any]

HANDLERS: Dict[str, Handler] = {}


def handler(name: str) -> Callable[[Handler], Handler]:
    def register(fn: Handler) -> Handler:
        if name in HANDLERS and HANDLERS[name] is not fn:
            raise ConfigurationError(f"Handler '{name}' registered twice")
        HANDLERS[name] = fn
        return fn

    return register


def get_handler(name: str) -> Handler:
    try:
        return HANDLERS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown handler '{name}'") from None


def handler_names() -> List[str]:
    return sorted(HANDLERS)
