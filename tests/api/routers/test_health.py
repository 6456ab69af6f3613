"""
Tests for the health router.
"""

import pytest

pytestmark = pytest.mark.unit


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
