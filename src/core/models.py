"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field

# Type aliases to make TemplateModel easier to read
CellRecord = dict[str, int | str]  # {"x": 0, "y": 1, "rotation": 90, "face": "none"}
FlagName = str


@dataclass
class TemplateModel:
    """Transport-safe representation of an authored template used between API, Service, DB, and domain layers."""

    name: str
    reference_image: str
    cells: list[CellRecord]
    rules: dict[FlagName, bool] = field(default_factory=dict)
