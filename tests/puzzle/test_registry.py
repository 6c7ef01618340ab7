"""Unit tests for /src/puzzle/registry.py"""

import random

import pytest

from src.puzzle.registry import TemplateRegistry
from src.puzzle.template import Template


def make(name: str, reference_image: str) -> Template:
    return Template.from_lists(name, reference_image, [(0, 0)])


@pytest.fixture
def registry() -> TemplateRegistry:
    return TemplateRegistry(
        [
            make("Bobcat", "card_bobcat"),
            make("Cat", "card_cat"),
            make("Heron", "card_heron_v2"),
        ]
    )


def test_resolve_by_reference_image_first(registry: TemplateRegistry) -> None:
    """The artwork wins over a card id pointing somewhere else."""
    template = registry.resolve("heron", reference_image="card_cat")
    assert template is not None
    assert template.name == "Cat"


def test_resolve_by_exact_name_before_substring(registry: TemplateRegistry) -> None:
    """'cat' is contained in 'Bobcat' (listed first), but the exact match is preferred."""
    template = registry.resolve("  CAT ")
    assert template is not None
    assert template.name == "Cat"


def test_resolve_by_exact_reference_image_name(registry: TemplateRegistry) -> None:
    template = registry.resolve("card_bobcat")
    assert template is not None
    assert template.name == "Bobcat"


def test_resolve_by_substring(registry: TemplateRegistry) -> None:
    template = registry.resolve("heron_v")
    assert template is not None
    assert template.name == "Heron"


def test_unknown_reference_image_falls_back_to_card_id(registry: TemplateRegistry) -> None:
    template = registry.resolve("heron", reference_image="card_missing")
    assert template is not None
    assert template.name == "Heron"


@pytest.mark.parametrize("card_id", ["", "   ", "zebra"])
def test_resolve_nothing(registry: TemplateRegistry, card_id: str) -> None:
    assert registry.resolve(card_id) is None


def test_choose_random_draws_from_catalogue(registry: TemplateRegistry) -> None:
    rng = random.Random(7)
    drawn = {registry.choose_random(rng) for _ in range(50)}
    assert drawn <= set(registry.templates)
    assert len(drawn) > 1


def test_choose_random_on_empty_catalogue() -> None:
    assert TemplateRegistry().choose_random() is None


def test_add() -> None:
    registry = TemplateRegistry()
    registry.add(make("Owl", "card_owl"))
    assert len(registry) == 1
