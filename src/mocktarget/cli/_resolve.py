"""App import resolution for ``"module:attribute"`` strings.

Shared by ``mocktarget run`` and ``mocktarget routes``.
"""

import importlib

from mocktarget.app import App


def resolve_app(import_string: str) -> App:
    """Resolve an import string to an App instance.

    Accepts ``"module:attribute"``; a bare module name means its ``app``
    attribute. A callable that is not already an App is treated as a
    factory and called with no arguments, which is how the default
    ``mocktarget.endpoints:create_app`` is loaded.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the factory fails or the result is not an App.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a mocktarget.App instance"
        raise TypeError(msg)

    return obj
