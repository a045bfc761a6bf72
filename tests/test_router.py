"""Tests for argroute.routing.router — registration, ranking, dispatch."""

import contextvars
import logging
import threading

import pytest

from argroute.config import RouterConfig
from argroute.context import get_request
from argroute.errors import ConfigurationError, NoMatchingCommand
from argroute.request import Request
from argroute.routing.router import Router


class _Recorder:
    """Handler that records the requests it receives."""

    def __init__(self, name: str = "handler") -> None:
        self.name = name
        self.requests: list[Request] = []

    def __call__(self, request: Request) -> str:
        self.requests.append(request)
        return self.name

    @property
    def called(self) -> bool:
        return bool(self.requests)

    @property
    def last(self) -> Request:
        return self.requests[-1]


class TestRegister:
    def test_returns_route(self) -> None:
        r = Router()
        h = _Recorder()
        route = r.register("comp <component> info", "Component info", h)
        assert route.pattern == "comp <component> info"
        assert route.description == "Component info"
        assert route.handler is h

    def test_routes_in_registration_order(self) -> None:
        r = Router()
        r.register("b", "", _Recorder())
        r.register("a", "", _Recorder())
        assert [route.pattern for route in r.routes] == ["b", "a"]
        assert len(r) == 2

    def test_empty_router(self) -> None:
        r = Router()
        assert len(r) == 0
        assert r.routes == ()

    def test_duplicates_allowed(self) -> None:
        r = Router()
        r.register("cmd", "First", _Recorder())
        r.register("cmd", "Second", _Recorder())
        assert len(r) == 2

    def test_rejects_too_many_segments(self) -> None:
        r = Router()
        with pytest.raises(ConfigurationError, match="33 segments"):
            r.register(" ".join(["x"] * 33), "", _Recorder())
        assert len(r) == 0

    def test_accepts_max_segments(self) -> None:
        r = Router()
        r.register(" ".join(["x"] * 32), "", _Recorder())
        assert len(r) == 1

    def test_sort_hints_do_not_count_as_segments(self) -> None:
        r = Router(RouterConfig(max_segments=2))
        r.register("1 a 2 b", "", _Recorder())
        assert len(r) == 1

    def test_configured_ceiling(self) -> None:
        r = Router(RouterConfig(max_segments=40))
        r.register(" ".join(["x"] * 40), "", _Recorder())
        with pytest.raises(ConfigurationError):
            r.register(" ".join(["x"] * 41), "", _Recorder())

    def test_logs_registration(self, caplog: pytest.LogCaptureFixture) -> None:
        r = Router()
        with caplog.at_level(logging.DEBUG, logger="argroute.router"):
            r.register("version", "", _Recorder())
        assert "registered 'version'" in caplog.text


class TestDispatchBasics:
    def test_literal_match(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("version", "Show version", h)

        r.dispatch(["version"])

        assert h.called
        assert h.last.args == ("version",)
        assert h.last.params == {}
        assert h.last.extra == ()

    def test_params_and_extra(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("comp <component> image build", "Build images", h)

        r.dispatch(["comp", "cv-server", "image", "build", "--tag", "latest", "--push"])

        assert h.last.params == {"component": "cv-server"}
        assert h.last.extra == ("--tag", "latest", "--push")

    def test_extra_keeps_order_and_content(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("run", "", h)

        r.dispatch(["run", "b", "a", "", "b"])

        assert h.last.extra == ("b", "a", "", "b")

    def test_returns_handler_result(self) -> None:
        r = Router()
        r.register("version", "", lambda request: 7)
        assert r.dispatch(["version"]) == 7

    def test_accepts_tuple_argv(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("a <b>", "", h)
        r.dispatch(("a", "x"))
        assert h.last.args == ("a", "x")

    def test_handler_error_propagates_unchanged(self) -> None:
        r = Router()
        boom = RuntimeError("boom")

        def fail(request: Request) -> None:
            raise boom

        r.register("fail", "", fail)

        with pytest.raises(RuntimeError) as exc_info:
            r.dispatch(["fail"])
        assert exc_info.value is boom


class TestNoMatch:
    def test_no_routes(self) -> None:
        with pytest.raises(NoMatchingCommand):
            Router().dispatch(["anything"])

    def test_nothing_matches(self) -> None:
        r = Router()
        r.register("foo bar", "Foo bar", _Recorder())

        with pytest.raises(NoMatchingCommand, match="no matching command") as exc_info:
            r.dispatch(["nope"])
        assert exc_info.value.argv == ("nope",)

    def test_mismatch_on_one_route_does_not_stop_others(self) -> None:
        r = Router()
        miss = _Recorder("miss")
        hit = _Recorder("hit")
        r.register("a b", "", miss)
        r.register("a c", "", hit)

        assert r.dispatch(["a", "c"]) == "hit"
        assert not miss.called

    def test_too_short_argv(self) -> None:
        r = Router()
        r.register("comp <component> info", "", _Recorder())
        with pytest.raises(NoMatchingCommand):
            r.dispatch(["comp", "x"])

    def test_empty_argv(self) -> None:
        r = Router()
        r.register("version", "", _Recorder())
        with pytest.raises(NoMatchingCommand):
            r.dispatch([])


class TestRanking:
    def test_literal_beats_param(self) -> None:
        r = Router()
        by_id = _Recorder("by_id")
        me = _Recorder("me")
        r.register("users <id>", "", by_id)
        r.register("users me", "", me)

        assert r.dispatch(["users", "me"]) == "me"
        assert r.dispatch(["users", "42"]) == "by_id"
        assert by_id.last.params == {"id": "42"}

    def test_literal_beats_param_regardless_of_order(self) -> None:
        r = Router()
        r.register("users me", "", _Recorder("me"))
        r.register("users <id>", "", _Recorder("by_id"))
        assert r.dispatch(["users", "me"]) == "me"

    def test_longer_pattern_wins(self) -> None:
        r = Router()
        short = _Recorder("short")
        long = _Recorder("long")
        r.register("docker image <name>", "", short)
        r.register("docker image <name> build", "", long)

        assert r.dispatch(["docker", "image", "alpine", "build"]) == "long"
        assert long.last.params == {"name": "alpine"}
        assert long.last.extra == ()

    def test_shorter_pattern_when_longer_misses(self) -> None:
        r = Router()
        short = _Recorder("short")
        r.register("docker image <name>", "", short)
        r.register("docker image <name> build", "", _Recorder("long"))

        assert r.dispatch(["docker", "image", "alpine", "push"]) == "short"
        assert short.last.extra == ("push",)

    def test_longer_param_pattern_beats_shorter_literal(self) -> None:
        r = Router()
        r.register("deploy", "", _Recorder("literal"))
        r.register("<verb> <target>", "", _Recorder("params"))
        assert r.dispatch(["deploy", "prod"]) == "params"

    def test_earliest_position_decides(self) -> None:
        r = Router()
        r.register("<x> b c", "", _Recorder("late-literals"))
        r.register("a <y> <z>", "", _Recorder("early-literal"))
        assert r.dispatch(["a", "b", "c"]) == "early-literal"

    def test_identical_patterns_first_registered_wins(self) -> None:
        r = Router()
        first = _Recorder("first")
        second = _Recorder("second")
        r.register("cmd", "First", first)
        r.register("cmd", "Second", second)

        assert r.dispatch(["cmd"]) == "first"
        assert not second.called

    def test_catch_all_loses_to_anything(self) -> None:
        r = Router()
        fallback = _Recorder("fallback")
        r.register("", "Fallback", fallback)
        r.register("<anything>", "", _Recorder("param"))

        assert r.dispatch(["x"]) == "param"
        assert r.dispatch([]) == "fallback"
        assert fallback.last.extra == ()

    def test_match_exposes_winner(self) -> None:
        r = Router()
        r.register("users <id>", "", _Recorder())
        me = r.register("users me", "", _Recorder())

        found = r.match(["users", "me", "--json"])
        assert found.route is me
        assert found.params == {}
        assert found.extra == ("--json",)
        assert found.rank == 0b1010


class TestRequestContext:
    def test_default_context_when_none(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("cmd", "", h)

        r.dispatch(["cmd"])

        assert isinstance(h.last.context, contextvars.Context)

    def test_default_context_sees_caller_values(self) -> None:
        var: contextvars.ContextVar[str] = contextvars.ContextVar("tenant")
        token = var.set("acme")
        try:
            r = Router()
            h = _Recorder()
            r.register("cmd", "", h)
            r.dispatch(["cmd"])
            assert h.last.context.get(var) == "acme"
        finally:
            var.reset(token)

    def test_default_context_is_fresh_per_dispatch(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("cmd", "", h)
        r.dispatch(["cmd"])
        r.dispatch(["cmd"])
        assert h.requests[0].context is not h.requests[1].context

    def test_caller_context_passed_through(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("cmd", "", h)
        cancel = threading.Event()

        r.dispatch(["cmd"], context=cancel)

        assert h.last.context is cancel

    def test_get_request_inside_handler(self) -> None:
        r = Router()
        seen: list[Request] = []
        r.register("users <id>", "", lambda request: seen.append(get_request()))

        r.dispatch(["users", "7"])

        assert seen[0].params == {"id": "7"}

    def test_get_request_reset_after_dispatch(self) -> None:
        r = Router()
        r.register("cmd", "", _Recorder())
        r.dispatch(["cmd"])
        with pytest.raises(LookupError):
            get_request()

    def test_get_request_reset_after_error(self) -> None:
        r = Router()

        def fail(request: Request) -> None:
            raise ValueError("nope")

        r.register("fail", "", fail)
        with pytest.raises(ValueError):
            r.dispatch(["fail"])
        with pytest.raises(LookupError):
            get_request()


class TestConcurrentDispatch:
    def test_threads_see_their_own_params(self) -> None:
        r = Router()
        results: dict[str, str] = {}
        lock = threading.Lock()

        def show(request: Request) -> None:
            with lock:
                results[request.extra[0]] = request.params["id"]

        r.register("users <id>", "", show)

        threads = [
            threading.Thread(target=r.dispatch, args=(["users", str(i), f"t{i}"],))
            for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {f"t{i}": str(i) for i in range(20)}


class TestNumericLiterals:
    def test_non_ascii_digit_segment_must_match(self) -> None:
        r = Router()
        h = _Recorder()
        r.register("set １", "", h)

        assert [s.value for s in r.routes[0].segments] == ["set", "１"]
        with pytest.raises(NoMatchingCommand):
            r.dispatch(["set"])
        r.dispatch(["set", "１"])
        assert h.last.extra == ()
