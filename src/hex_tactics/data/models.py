"""Data models for the ship visual catalog."""

import logging

from pydantic import BaseModel, model_validator

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class ShipVisual(BaseModel):
    """How a ship is drawn. Values are keys into the renderer's asset set."""

    icon: str
    wireframe: str
    color_class: str


class ShipModelVisuals(BaseModel):
    """Visuals of a ship model, per role."""

    default_role: str
    roles: dict[str, ShipVisual]

    @model_validator(mode="after")
    def _chk_default_role(self) -> "ShipModelVisuals":
        """Ensure the default role is defined."""
        if self.default_role not in self.roles:
            raise ValueError(
                f"Default role {self.default_role!r} missing from {list(self.roles)}"
            )
        return self

    def for_role(self, role: str | None = None) -> ShipVisual:
        """Visual for a role, falling back to the default role."""
        if role is not None and role in self.roles:
            return self.roles[role]
        return self.roles[self.default_role]


class ShipCatalog(BaseModel):
    """Ship visuals by ship model.

    The `Unknown` entry is mandatory; it is what unlisted models look like.
    """

    models: dict[str, ShipModelVisuals]

    @model_validator(mode="after")
    def _chk_unknown(self) -> "ShipCatalog":
        """Ensure the fallback entry exists."""
        if UNKNOWN not in self.models:
            raise ValueError(f"Catalog requires an {UNKNOWN!r} entry.")
        return self

    @property
    def ship_models(self) -> list[str]:
        """Known ship models, without the fallback."""
        return sorted(k for k in self.models if k != UNKNOWN)

    def get_by_model(self, ship_model: str) -> ShipModelVisuals:
        """Get visuals for a ship model."""
        if ship_model not in self.models:
            raise ValueError(f"No visuals exist for ship model: {ship_model}")
        return self.models[ship_model]

    def __getitem__(self, ship_model: str) -> ShipModelVisuals:
        """Get visuals by ship model (dict style)."""
        try:
            return self.get_by_model(ship_model)
        except ValueError as ve:
            raise KeyError(ship_model) from ve

    def lookup(self, ship_model: str, role: str | None = None) -> ShipVisual:
        """Visual for a ship, using the `Unknown` entry for unlisted models."""
        visuals = self.models.get(ship_model)
        if visuals is None:
            logger.debug(f"No visuals for ship model {ship_model!r}, using {UNKNOWN}")
            visuals = self.models[UNKNOWN]
        return visuals.for_role(role)
