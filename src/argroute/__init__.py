"""argroute — HTTP-router ergonomics for command-line arguments.

Nested command groups, middleware, and typed per-request context
objects, matched against argv with "most specific pattern wins".

Basic usage::

    import sys

    from argroute import NoMatchingCommand, Router

    router = Router()
    router.register("version", "Show version", lambda req: print("1.0"))
    router.register("users <id>", "Show a user", lambda req: print(req.params["id"]))

    try:
        router.dispatch(sys.argv[1:])
    except NoMatchingCommand:
        router.print_help()

Nested routes with typed context::

    from argroute import Builder, ContextBuilder, with_child_context, with_context

    def routes(b: Builder) -> None:
        app = with_context(b, resolve_app)

        def comp(b: ContextBuilder[App]) -> None:
            c = with_child_context(b, resolve_component)
            c.handle("image build", "Build images", build_images)

        app.route("comp <component>", comp)

    router.build(routes)
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ArgrouteError",
    "Builder",
    "CommandLogConfig",
    "CommandLogMiddleware",
    "ConfigurationError",
    "ContextBuilder",
    "Middleware",
    "Next",
    "NoMatchingCommand",
    "Params",
    "ParentChild",
    "Request",
    "Route",
    "Router",
    "RouterConfig",
    "context_handler",
    "get_request",
    "with_child_context",
    "with_context",
    "with_parent_child_context",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import argroute`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from argroute.routing.router import Router

        return Router

    if name == "Route":
        from argroute.routing.route import Route

        return Route

    if name == "RouterConfig":
        from argroute.config import RouterConfig

        return RouterConfig

    if name in ("Request", "Params"):
        from argroute import request as _req

        return getattr(_req, name)

    if name == "Builder":
        from argroute.builder import Builder

        return Builder

    if name in (
        "ContextBuilder",
        "ParentChild",
        "context_handler",
        "with_child_context",
        "with_context",
        "with_parent_child_context",
    ):
        from argroute import typed as _typed

        return getattr(_typed, name)

    if name in ("Middleware", "Next"):
        from argroute.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("CommandLogConfig", "CommandLogMiddleware"):
        from argroute.middleware import builtin as _builtin

        return getattr(_builtin, name)

    if name == "get_request":
        from argroute.context import get_request

        return get_request

    if name in ("ArgrouteError", "ConfigurationError", "NoMatchingCommand"):
        from argroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
