from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from retirement_calc.app import create_app
from retirement_calc.config import Settings
from retirement_calc.core.profile import Profile


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Settings())
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def profile() -> Profile:
    return Settings().default_profile()
