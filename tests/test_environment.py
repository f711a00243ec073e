"""Tests for the Environment: loaders, template cache and partials."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from motif import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
)
from motif.environment.exceptions import ErrorCode
from motif.environment.loaders import Loader

from .conftest import assert_contains


class TestLoaders:
    """DictLoader, FileSystemLoader and ChoiceLoader."""

    def test_dict_loader(self) -> None:
        loader = DictLoader({"a.hbs": "A"})
        assert loader.get_source("a.hbs") == ("A", None)
        assert loader.list_templates() == ["a.hbs"]
        assert isinstance(loader, Loader)

    def test_dict_loader_suggestion(self) -> None:
        loader = DictLoader({"page.hbs": "", "card.hbs": ""})
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'page.hbs'"):
            loader.get_source("pgae.hbs")

    def test_dict_loader_lists_available(self) -> None:
        loader = DictLoader({"page.hbs": ""})
        with pytest.raises(TemplateNotFoundError, match="Available: page.hbs"):
            loader.get_source("zzz")

    def test_filesystem_suffixes(self, tmp_path: Path) -> None:
        (tmp_path / "cards").mkdir()
        (tmp_path / "cards" / "summary.hbs").write_text("<b>{{title}}</b>")
        (tmp_path / "layout.html").write_text("<main></main>")
        loader = FileSystemLoader(tmp_path)

        source, filename = loader.get_source("cards/summary")
        assert source == "<b>{{title}}</b>"
        assert filename == str(tmp_path / "cards" / "summary.hbs")
        assert loader.get_source("layout")[0] == "<main></main>"
        assert loader.get_source("layout.html")[0] == "<main></main>"
        assert loader.list_templates() == ["cards/summary.hbs", "layout.html"]

    def test_filesystem_search_order(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom"
        default = tmp_path / "default"
        custom.mkdir()
        default.mkdir()
        (custom / "nav.hbs").write_text("custom")
        (default / "nav.hbs").write_text("default")
        (default / "footer.hbs").write_text("footer")
        loader = FileSystemLoader([custom, str(default)])
        assert loader.get_source("nav")[0] == "custom"
        assert loader.get_source("footer")[0] == "footer"

    def test_filesystem_missing(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateNotFoundError) as exc_info:
            FileSystemLoader(tmp_path).get_source("nope")
        assert exc_info.value.code is ErrorCode.TEMPLATE_NOT_FOUND

    def test_choice_loader(self) -> None:
        loader = ChoiceLoader(
            [DictLoader({"nav": "override"}), DictLoader({"nav": "base", "footer": "f"})]
        )
        assert loader.get_source("nav")[0] == "override"
        assert loader.get_source("footer")[0] == "f"
        assert loader.list_templates() == ["footer", "nav"]
        with pytest.raises(TemplateNotFoundError, match="any of 2 loaders"):
            loader.get_source("missing")


class TestTemplates:
    def test_render_by_name(self, env_with_loader: Environment) -> None:
        result = env_with_loader.render(
            "page.hbs", {"title": "Team", "items": [{"name": "Ada"}, {"name": "Bob"}]}
        )
        assert result == "<main><h1>Team</h1><li>Ada</li><li>Bob</li></main>"

    def test_component_page(self, env_with_loader: Environment) -> None:
        result = env_with_loader.render("card.hbs", title="Revenue", body="<p>")
        assert_contains(result, '<div data-slot="card"', ">Revenue</div>", ">&lt;p&gt;</div>")

    def test_no_loader(self, env: Environment) -> None:
        with pytest.raises(TemplateNotFoundError, match="no loader"):
            env.get_template("page.hbs")

    def test_template_metadata(self, tmp_path: Path) -> None:
        (tmp_path / "hello.hbs").write_text("Hi {{name}}")
        env = Environment(loader=FileSystemLoader(tmp_path))
        template = env.get_template("hello")
        assert template.name == "hello"
        assert template.filename == str(tmp_path / "hello.hbs")
        assert template.source == "Hi {{name}}"
        assert repr(template) == "<Template hello>"

    def test_syntax_error_names_template(self) -> None:
        env = Environment(loader=DictLoader({"bad.hbs": "{{#if x}}"}))
        with pytest.raises(TemplateSyntaxError, match="bad.hbs"):
            env.get_template("bad.hbs")


class TestCache:
    """Compiled template cache."""

    def test_get_template_is_cached(self, env_with_loader: Environment) -> None:
        first = env_with_loader.get_template("header")
        assert env_with_loader.get_template("header") is first
        assert env_with_loader.cache_info() == {"hits": 1, "misses": 1, "size": 1, "max_size": 400}

    def test_from_string_not_cached(self, env: Environment) -> None:
        env.from_string("{{x}}")
        assert env.cache_info()["size"] == 0

    def test_eviction(self) -> None:
        env = Environment(loader=DictLoader({"a": "A", "b": "B"}), cache_size=1)
        a = env.get_template("a")
        env.get_template("b")
        assert env.cache_info()["size"] == 1
        assert env.get_template("a") is not a

    def test_cache_disabled(self) -> None:
        env = Environment(loader=DictLoader({"a": "A"}), cache_size=0)
        assert env.get_template("a") is not env.get_template("a")

    def test_clear_cache(self, env_with_loader: Environment) -> None:
        env_with_loader.get_template("header")
        env_with_loader.clear_cache()
        assert env_with_loader.cache_info() == {"hits": 0, "misses": 0, "size": 0, "max_size": 400}

    def test_cache_miss_logged(self, env_with_loader: Environment, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="motif.environment.core"):
            env_with_loader.get_template("row")
        assert any("row" in record.getMessage() for record in caplog.records)


class TestPartials:
    """{{> partial}} resolution and rendering."""

    def test_in_memory_partials(self) -> None:
        env = Environment(partials={"greet": "Hello {{name}}"})
        assert env.from_string("{{> greet}}!").render(name="Ada") == "Hello Ada!"

    def test_partial_context_argument(self) -> None:
        env = Environment(partials={"greet": "Hello {{name}}"})
        template = env.from_string("{{> greet user}}")
        assert template.render(name="outer", user={"name": "inner"}) == "Hello inner"

    def test_partial_hash_arguments(self) -> None:
        env = Environment(partials={"greet": "{{greeting}} {{name}}"})
        template = env.from_string('{{> greet greeting="Hi"}}')
        assert template.render(name="Ada") == "Hi Ada"

    def test_partial_parent_context(self) -> None:
        env = Environment(partials={"row": "{{name}}/{{../title}}"})
        template = env.from_string("{{#each items}}{{> row}};{{/each}}")
        assert template.render(title="T", items=[{"name": "a"}]) == "a/T;"

    def test_dynamic_partial_name(self) -> None:
        env = Environment(partials={"admin": "A", "guest": "G"})
        template = env.from_string("{{> (lookup . 'role')}}")
        assert template.render(role="guest") == "G"

    def test_partials_checked_before_loader(self) -> None:
        env = Environment(loader=DictLoader({"nav": "loader"}), partials={"nav": "memory"})
        assert env.from_string("{{> nav}}").render() == "memory"

    def test_register_partial_replaces(self) -> None:
        env = Environment(partials={"nav": "old"})
        template = env.from_string("{{> nav}}")
        assert template.render() == "old"
        env.register_partial("nav", "new")
        assert template.render() == "new"

    def test_missing_partial(self, env_with_loader: Environment) -> None:
        template = env_with_loader.from_string("{{> sidebar}}")
        with pytest.raises(TemplateNotFoundError, match="Partial 'sidebar' could not be found"):
            template.render()

    def test_recursive_partial_depth_guard(self) -> None:
        env = Environment(partials={"loop": "x{{> loop}}"})
        with pytest.raises(TemplateRuntimeError) as exc_info:
            env.from_string("{{> loop}}").render()
        error = exc_info.value
        assert error.code is ErrorCode.PARTIAL_DEPTH
        assert "Maximum partial depth exceeded (50)" in str(error)

    def test_recursive_partial_with_base_case(self) -> None:
        env = Environment(
            partials={
                "tree": "{{name}}{{#if children}}({{#each children}}{{> tree}}{{/each}}){{/if}}",
            }
        )
        tree = {"name": "a", "children": [{"name": "b", "children": [{"name": "c"}]}]}
        assert env.from_string("{{> tree}}").render(tree) == "a(b(c))"

    def test_error_in_partial_names_partial(self) -> None:
        env = Environment(partials={"row": "\n{{explode 1}}"})
        with pytest.raises(TemplateRuntimeError) as exc_info:
            env.from_string("{{> row}}", name="page.hbs").render()
        assert exc_info.value.template_name == "row"
        assert exc_info.value.lineno == 2


class TestEnvironmentConfig:
    def test_defaults(self, env: Environment) -> None:
        assert env.autoescape is True
        assert env.strict is False
        assert env.cache_size == 400
        assert env.loader is None
        assert env.helpers.frozen

    def test_repr(self, env_with_loader: Environment) -> None:
        assert repr(env_with_loader) == "<Environment loader=DictLoader helpers=24 strict=False>"
