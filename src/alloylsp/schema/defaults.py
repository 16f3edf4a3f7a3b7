"""Default schema registry built from the bundled catalog."""

from __future__ import annotations

from alloylsp.schema.catalog.blocks import BLOCK_ITEMS
from alloylsp.schema.catalog.components import COMPONENT_ITEMS
from alloylsp.schema.registry import SchemaRegistry


def build_default_registry() -> SchemaRegistry:
    """Build the registry for the bundled Alloy components and blocks."""
    return SchemaRegistry(blocks=BLOCK_ITEMS, top_level=COMPONENT_ITEMS)
