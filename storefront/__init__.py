"""Buyflex storefront backend: catalog engine, shop view, storefront services and FlexBot."""
