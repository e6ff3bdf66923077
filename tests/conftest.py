import pytest

from investcalc.derived import reset
from investcalc.models import InvestmentInputs, Jurisdiction, PropertyType


@pytest.fixture
def default_session():
    """Fresh session as the app starts it: Richmond VIC house, $850k."""
    return reset()


@pytest.fixture
def apartment_inputs() -> InvestmentInputs:
    return InvestmentInputs(
        property_type=PropertyType.APARTMENT,
        jurisdiction=Jurisdiction.NSW,
        suburb="Parramatta",
        postcode="2150",
        price=500_000,
        weekly_rent=520,
    )
