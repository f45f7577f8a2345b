"""Shared test fixtures"""
import pytest
from datetime import datetime

from core.flour_catalog import InMemoryFlourCatalog
from core.models import FlourSpec, FormulationRequest


@pytest.fixture
def bake_time():
    """Saturday 19:00 bake"""
    return datetime(2026, 10, 24, 19, 0)


@pytest.fixture
def neapolitan_request(bake_time):
    """4 x 250 g Neapolitan balls, 65% hydration, fresh yeast, 24 h cold fermentation"""
    return FormulationRequest(
        style="neapolitan",
        ball_count=4,
        ball_weight=250.0,
        hydration=65.0,
        salt=2.8,
        leavening_agent="fresh",
        fermentation_method="cold",
        total_fermentation_hours=24,
        room_temperature=22.0,
        fridge_temperature=4.0,
        bake_time=bake_time,
    )


@pytest.fixture
def flour_specs():
    """Three catalog flours with different strengths"""
    return [
        FlourSpec(flour_id="caputo-pizzeria", name="Caputo Pizzeria", brand="Caputo", flour_type="00",
                  protein=12.5, strength=260, extensibility=0.55,
                  hydration_min=55, hydration_max=62),
        FlourSpec(flour_id="caputo-nuvola", name="Caputo Nuvola Super", brand="Caputo", flour_type="00",
                  protein=13.5, strength=340, extensibility=0.6,
                  hydration_min=65, hydration_max=80),
        FlourSpec(flour_id="manitoba", name="Manitoba", protein=14.5, strength=380),
    ]


@pytest.fixture
def flour_catalog(flour_specs):
    """In-memory flour catalog holding the sample flours"""
    return InMemoryFlourCatalog(flour_specs)
