"""Router tests."""

import re

import pytest
from roadquery_core.errors import CompilerAssumptionViolated
from roadquery_core.querystring.codecs import BracketCodec
from roadquery_core.routing.mixin import QuerystringRouter, QuerystringRoutes
from roadquery_core.routing.router import Router
from roadquery_core.utils.config import Config


class TestRouter:
    """Test host router."""

    def test_match(self):
        """Test matching a fragment."""
        router = Router()
        router.add("page/:id", name="page")

        match = router.match("page/9")
        assert match.route.name == "page"
        assert match.params == ["9"]

    def test_match_normalizes_fragment(self):
        """Test leading '#' and '/' are stripped."""
        router = Router()
        router.add("page/:id")
        assert router.match("#/page/9 ").params == ["9"]

    def test_keep_leading_slash(self):
        """Test leading slash kept when configured."""
        router = Router(strip_leading_slash=False)
        router.add("/page/:id")
        assert router.match("/page/9").params == ["9"]

    def test_host_ignores_querystring(self):
        """Test plain router treats '?' as part of the segment."""
        router = Router()
        router.add("page/:id")
        assert router.match("page/9?x=1").params == ["9?x=1"]

    def test_no_match(self):
        """Test unmatched fragment."""
        router = Router()
        router.add("page/:id")
        assert router.match("user/9") is None
        assert router.dispatch("user/9") is None

    def test_priority(self):
        """Test higher priority routes are tried first."""
        router = Router()
        router.add("page/*rest", name="catch-all")
        router.add("page/:id", name="page", priority=10)
        assert router.match("page/9").route.name == "page"

    def test_dispatch_decorator(self):
        """Test decorated handlers receive parameters."""
        router = Router()

        @router.route("user/:name/*path")
        def handler(name, path):
            return f"{name}:{path}"

        assert router.dispatch("user/ann/a/b") == "ann:a/b"

    def test_remove(self):
        """Test removing a route by name."""
        router = Router()
        router.add("page/:id", name="page")
        assert router.remove("page") is True
        assert router.remove("page") is False
        assert router.get_routes() == []


class TestQuerystringRouter:
    """Test querystring-aware router."""

    def test_dispatch_passes_querystring_map(self):
        """Test handler receives decoded querystring last."""
        router = QuerystringRouter()
        seen = []
        router.add("page/:id", handler=lambda *params: seen.append(params))

        router.dispatch("#page/9?show=true")
        assert seen == [("9", {"show": "true"})]

    def test_dispatch_without_querystring(self):
        """Test querystring slot is None when absent."""
        router = QuerystringRouter()
        router.add("page/:id", handler=lambda *params: params)
        assert router.dispatch("page/9") == ("9", None)

    def test_root_route_with_querystring(self):
        """Test zero-token route still takes a querystring."""
        router = QuerystringRouter()
        router.add("", handler=lambda query: query)
        assert router.dispatch("#?tab=2") == {"tab": "2"}

    def test_routes_use_compiled_pattern(self):
        """Test registered routes carry the querystring group."""
        router = QuerystringRouter()
        router.add("page/:id")
        assert router.get_routes()[0].regex.pattern.endswith(r"(\?.*)?$")
        assert router.compile("page/:id").regex is router.get_routes()[0].regex

    def test_to_fragment_round_trip(self):
        """Test built fragments dispatch back to their params."""
        router = QuerystringRouter()
        router.add("page/:id", handler=lambda *params: params)

        fragment = router.to_fragment("page/:id", {"id": 9, "tags": ["a", "b"]})
        assert fragment == "page/9?tags%5B%5D=a&tags%5B%5D=b"
        assert router.dispatch(fragment) == ("9", {"tags": ["a", "b"]})

    def test_single_item_list_round_trip(self):
        """Test a one-element list survives the default codec."""
        router = QuerystringRouter()
        router.add("page/:id", handler=lambda *params: params)

        fragment = router.to_fragment("page/:id", {"id": 1, "tags": ["a"]})
        assert router.dispatch(fragment) == ("1", {"tags": ["a"]})

    def test_explicit_entry_points(self):
        """Test named and positional builders."""
        router = QuerystringRouter()
        assert router.from_params("page/:id", {"id": 1, "x": 2}) == "page/1?x=2"
        assert router.from_values("page/:a/:b", 1, query={"x": 2}) == "page/1/?x=2"

    def test_codec_from_config(self):
        """Test codec selection through config."""
        router = QuerystringRouter(Config(codec="delimited", array_delimiter=","))
        assert router.to_querystring({"t": ["a", "b"]}) == "t=a%2Cb"
        assert router.from_querystring("t=a,b") == {"t": ["a", "b"]}

    def test_injected_codec(self):
        """Test an explicit codec wins over config."""
        router = QuerystringRouter(codec=BracketCodec())
        assert router.to_querystring({"t": ["a"]}) == "t%5B%5D=a"

    def test_diagnostic_sink(self):
        """Test malformed querystrings reach the sink."""
        calls = []
        router = QuerystringRouter(on_error=lambda qs, e: calls.append(qs))
        router.add("page/:id", handler=lambda *params: params)

        assert router.dispatch("page/9?a=%") == ("9", {})
        assert calls == ["a=%"]

    def test_mixin_on_incompatible_host(self):
        """Test a host with other shapes fails loudly."""

        class GreedyRouter(Router):
            def route_to_regex(self, template):
                return re.compile("^" + template.replace(":id", "(.+)") + "$")

        class GreedyQuerystringRouter(QuerystringRoutes, GreedyRouter):
            pass

        router = GreedyQuerystringRouter()
        with pytest.raises(CompilerAssumptionViolated):
            router.add("page/:id")
