"""Pytest configuration and shared fixtures for the test suite."""

import pytest

from slicksheet.data.models import ContactInfo, Section, SheetData, Stat, StyleHints
from slicksheet.template.engine import TemplateEngine
from slicksheet.template.validation import TemplateValidator


@pytest.fixture
def engine() -> TemplateEngine:
    """Template engine with default configuration."""
    return TemplateEngine()


@pytest.fixture
def validator() -> TemplateValidator:
    """Template validator with default configuration."""
    return TemplateValidator()


@pytest.fixture
def product_data() -> SheetData:
    """Fully populated product sheet data.

    Returns:
        SheetData with every field set
    """
    return SheetData(
        title="Amazing Product",
        subtitle="The Best Solution",
        body="This product will change your life.",
        sections=[
            Section.text("Overview", "Content here"),
            Section.bulleted("Highlights", ["A", "B"]),
        ],
        metadata={"tagline": "Ship faster"},
        features=["Fast performance", "Easy to use"],
        stats=[Stat(value="50%", label="Growth"), Stat(value="100", label="Users")],
        contact=ContactInfo(email="sales@example.com", phone="555-0100"),
        style=StyleHints(primary_color="#e94560", font_family="Inter"),
        images={"logo": "img_abc123.png"},
    )
