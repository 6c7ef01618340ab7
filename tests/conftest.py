"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import FaceRequirement
from src.db.schema import Base
from src.puzzle.cell import Cell
from src.puzzle.snapshot import PlacedTile, PlacementSnapshot
from src.puzzle.template import MatchRules, Template

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

SQUARE = [(0, 0), (1, 0), (0, 1), (1, 1)]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def square_template() -> Template:
    """2x2 block, every tile unrotated and front side up. Global rotation allowed (authoring default)."""
    return Template.from_lists("square", "card_square", SQUARE)


@pytest.fixture
def l_template() -> Template:
    """
    Asymmetric L-shape, so every global rotation gives a different layout:

        A .
        B C

    A: rot 0 / front, B: rot 90 / FACE_A, C: rot 180 / FACE_B
    """
    return Template.from_lists(
        "heron",
        "card_heron_1",
        positions=[(0, 0), (0, 1), (1, 1)],
        rotations=[0, 90, 180],
        faces=[FaceRequirement.NONE, FaceRequirement.FACE_A, FaceRequirement.FACE_B],
        rules=MatchRules(allow_global_rotation=True),
    )


TileSpec = tuple[int, int, int, FaceRequirement]


@pytest.fixture
def make_snapshot() -> Callable[..., PlacementSnapshot]:
    """Call the inner function with (x, y, rotation, face) tuples to get a snapshot"""

    def _create_snapshot(*tiles: TileSpec) -> PlacementSnapshot:
        return PlacementSnapshot.from_tiles(
            PlacedTile(Cell(x, y), rotation, face) for x, y, rotation, face in tiles
        )

    return _create_snapshot
