"""Catalogue of the templates available in a run. Used to resolve a drawn card to its template."""

import random
from typing import Iterable, Optional

from src.puzzle.template import Template


def _clean(text: str) -> str:
    return text.strip().lower()


class TemplateRegistry:
    def __init__(self, templates: Optional[Iterable[Template]] = None) -> None:
        self.templates: list[Template] = list(templates or [])

    def __len__(self) -> int:
        return len(self.templates)

    def add(self, template: Template) -> None:
        self.templates.append(template)

    def resolve(self, card_id: str, reference_image: Optional[str] = None) -> Optional[Template]:
        """
        Find the template for a drawn card
        ----
        Tried in order, first hit wins:
        1. exact reference image
        2. card id equal to the template name or reference image (trimmed, case-insensitive)
        3. card id contained in the template name or reference image
        """
        if reference_image:
            by_image = next(
                (t for t in self.templates if t.reference_image == reference_image),
                None,
            )
            if by_image is not None:
                return by_image

        wanted = _clean(card_id or "")
        if not wanted:
            return None

        by_id = next(
            (
                t
                for t in self.templates
                if wanted in (_clean(t.name), _clean(t.reference_image))
            ),
            None,
        )
        if by_id is not None:
            return by_id

        return next(
            (
                t
                for t in self.templates
                if wanted in t.name.lower() or wanted in t.reference_image.lower()
            ),
            None,
        )

    def choose_random(self, rng: Optional[random.Random] = None) -> Optional[Template]:
        """Random draw, None for an empty catalogue."""
        if not self.templates:
            return None
        return (rng or random).choice(self.templates)
