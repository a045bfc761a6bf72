"""Hello World — a small argroute CLI.

Demonstrates literal and parameter routes, "most specific wins" ranking,
nested groups, middleware, layered typed contexts, and the help listing.

Run:
    python app.py greet alice
    python app.py comp api info
    python app.py comp api image build --push
"""

import sys
from dataclasses import dataclass
from typing import Any

from argroute import (
    Builder,
    CommandLogMiddleware,
    ContextBuilder,
    Next,
    NoMatchingCommand,
    Request,
    Router,
    with_child_context,
    with_context,
)

router = Router()


@dataclass
class Workspace:
    components: dict[str, str]


@dataclass
class Component:
    name: str
    image: str


def resolve_workspace(request: Request) -> Workspace:
    return Workspace(components={"api": "api:1.2", "web": "web:0.9"})


def resolve_component(workspace: Workspace, request: Request) -> Component:
    name = request.params["component"]
    try:
        return Component(name=name, image=workspace.components[name])
    except KeyError:
        raise LookupError(f"unknown component {name!r}") from None


def dry_run(request: Request, next: Next) -> Any:
    if "--dry-run" in request.extra:
        print(f"would run: {' '.join(request.args)}")
        return 0
    return next(request)


def version(request: Request) -> int:
    print("hello 0.1.0")
    return 0


def greet(request: Request) -> int:
    print(f"Hello, {request.params['name']}!")
    return 0


def greet_world(request: Request) -> int:
    print("Hello, World!")
    return 0


def component_info(request: Request, component: Component) -> int:
    print(f"{component.name}: {component.image}")
    return 0


def build_image(request: Request, component: Component) -> int:
    push = " and pushing" if "--push" in request.extra else ""
    print(f"building {component.image}{push}")
    return 0


def routes(b: Builder) -> None:
    b = b.with_middleware(CommandLogMiddleware())
    b.handle("1 version", "Show version", version)
    b.handle("2 greet <name>", "Greet someone", greet)
    b.handle("2 greet world", "Greet everyone", greet_world)

    workspace = with_context(b, resolve_workspace)

    def comp(b: ContextBuilder[Workspace]) -> None:
        c = with_child_context(b, resolve_component)
        c.handle("info", "Show component info", component_info)
        c.with_middleware(dry_run).handle("image build", "Build the component image", build_image)

    workspace.route("3 comp <component>", comp)


router.build(routes)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        return router.dispatch(argv)
    except NoMatchingCommand as exc:
        print(f"Error: {exc}", file=sys.stderr)
        router.print_help(sys.stderr)
        return 2
    except LookupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
