"""Shared fixtures: Flask app and test client built with the testing config."""
import pytest

from rent_application.app import create_app


@pytest.fixture
def app():
    app = create_app('testing')
    return app


@pytest.fixture
def client(app):
    return app.test_client()
