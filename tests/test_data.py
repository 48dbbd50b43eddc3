"""Tests for bundled data and loaders."""

import logging

import pytest
from pydantic import ValidationError

from hex_tactics.data import load_sector, load_sectors, sectors_path, ship_catalog
from hex_tactics.data.models import ShipCatalog, ShipModelVisuals, ShipVisual


class TestShipCatalog:
    """Visual lookups with an explicit fallback entry."""

    def test_known_models(self):
        assert ship_catalog.ship_models == [
            "Federation",
            "Independent",
            "Klingon",
            "Pirate",
            "Romulan",
        ]

    def test_lookup_role(self):
        visual = ship_catalog.lookup("Klingon", "Escort")
        assert visual.icon == "KlingonEscortIcon"
        assert visual.color_class == "text-red-400"

    def test_lookup_default_role(self):
        assert ship_catalog.lookup("Federation").icon == "FederationExplorerIcon"
        assert ship_catalog.lookup("Romulan", "Freighter").icon == "RomulanCruiserIcon"

    def test_lookup_unknown_model(self):
        visual = ship_catalog.lookup("Borg", "Cube")
        assert visual.icon == "UnknownShipIcon"

    def test_strict_lookups(self):
        assert ship_catalog["Pirate"].default_role == "Escort"
        with pytest.raises(ValueError):
            ship_catalog.get_by_model("Borg")
        with pytest.raises(KeyError):
            ship_catalog["Borg"]

    def test_unknown_entry_required(self):
        visual = ShipVisual(icon="i", wireframe="w", color_class="c")
        with pytest.raises(ValidationError):
            ShipCatalog(
                models={"X": ShipModelVisuals(default_role="A", roles={"A": visual})}
            )

    def test_default_role_required(self):
        visual = ShipVisual(icon="i", wireframe="w", color_class="c")
        with pytest.raises(ValidationError):
            ShipModelVisuals(default_role="B", roles={"A": visual})


class TestSectorLoading:
    def test_load_bundled(self):
        sectors = load_sectors()
        assert "skirmish" in sectors
        assert len(sectors["skirmish"].entities) == 7

    def test_load_single(self):
        sector = load_sector(sectors_path / "skirmish.yaml")
        assert sector.width == 11

    def test_bad_files_skipped(self, tmp_path, caplog):
        (tmp_path / "good.yaml").write_text("width: 5\nheight: 5\n")
        (tmp_path / "bad.yaml").write_text(
            "entities:\n  - {type: ship, id: a, ship_model: X, position: [20, 9]}\n"
        )
        with caplog.at_level(logging.WARNING, logger="hex_tactics.data"):
            sectors = load_sectors(tmp_path)
        assert list(sectors) == ["good"]
        assert "bad.yaml" in caplog.text
