"""Fixture constants shared by ``scripts/gen_fixtures.py`` and the GIS tests.

Kept outside ``tests/`` so the generator script never imports test code.
"""
