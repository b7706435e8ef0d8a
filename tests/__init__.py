"""
Day-count image server test suite

Structure:
- unit/: resolver, glyph metrics, compositor, logging
- integration/: HTTP surface through FastAPI's TestClient
- conftest.py: shared fixtures (synthetic source PNG, bundled font)
"""
