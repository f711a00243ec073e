"""Pytest configuration and fixtures for Motif tests."""

import re

import pytest

from motif import DictLoader, Environment, create_registry

_CLASS_RE = re.compile(r'class="([^"]*)"')


@pytest.fixture
def env():
    """Create a Motif Environment with the default helper registry."""
    return Environment()


@pytest.fixture
def strict_env():
    """Create a Motif Environment that raises on undefined variables."""
    return Environment(strict=True)


@pytest.fixture
def registry():
    """Create an open registry with every component and logic helper bound."""
    return create_registry(freeze=False)


@pytest.fixture
def env_with_loader():
    """Create a Motif Environment with DictLoader pages and partials."""
    loader = DictLoader(
        {
            "page.hbs": "<main>{{> header}}{{#each items}}{{> row}}{{/each}}</main>",
            "header": "<h1>{{title}}</h1>",
            "row": "<li>{{name}}</li>",
            "card.hbs": (
                "{{#card}}{{#cardHeader}}{{cardTitle children=title}}{{/cardHeader}}"
                "{{#cardContent}}{{body}}{{/cardContent}}{{/card}}"
            ),
        }
    )
    return Environment(loader=loader)


def class_tokens(html: str) -> list[str]:
    """Split the first ``class`` attribute in ``html`` into its classes.

    Args:
        html: Rendered component markup.
    """
    match = _CLASS_RE.search(html)
    assert match is not None, f"No class attribute in {html!r}"
    return match.group(1).split()


def assert_contains(template_result: str, *expected_parts: str) -> None:
    """Assert template result contains all expected parts.

    Args:
        template_result: The actual template rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in template_result, (
            f"Template output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {template_result!r}"
        )
