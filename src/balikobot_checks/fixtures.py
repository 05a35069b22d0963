"""Canned and randomized package records for ADD endpoint tests."""

import random
from typing import Any, Dict, Optional


_BASE_PACKAGE: Dict[str, Any] = {
    "eid": "5914356836",
    "service_type": "DR",
    "rec_name": "Test Testovací",
    "rec_country": "CZ",
    "rec_firm": "",
    "rec_phone": "+420777976117",
    "rec_email": "lukas@balikobot.cz",
    "rec_street": "Revoluční 16",
    "rec_city": "Praha",
    "rec_zip": "11000",
    "price": 1000,
    "cod_price": "100.00",
    "cod_currency": "CZK",
    "ins_currency": "",
    "weight": 1.2,
    "order_number": 1,
    "vs": 20157595,
    "real_order_id": "BB1234",
    "length": 123.5,
    "height": 128.5,
    "width": 179.9,
    "services": "1+S",
    "return_full_errors": 1,
    "reference": "XCD2345",
}

RANDOM_NAMES = ("Jan Novak", "Petra Svoboda", "Tomáš Dvořák", "Anna Krásná")
RANDOM_CITIES = ("Praha", "Brno", "Ostrava", "Plzeň")


def create_test_package(**overrides: Any) -> Dict[str, Any]:
    """Basic CZ package; a None override marks the field as unset."""
    package = dict(_BASE_PACKAGE)
    package.update(overrides)
    return package


def create_random_package(rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """Package with random recipient, price, COD and eid."""
    rng = rng or random.Random()
    return create_test_package(
        rec_name=rng.choice(RANDOM_NAMES),
        rec_city=rng.choice(RANDOM_CITIES),
        price=rng.randrange(1000, 11000),
        cod_price=rng.randrange(500, 5500) if rng.random() > 0.5 else None,
        eid=f"RAND{rng.randrange(999999)}",
    )


TEST_PACKAGES: Dict[str, Dict[str, Any]] = {
    "BASIC_CZ": create_test_package(),
    "COD_PACKAGE": create_test_package(
        cod_price="1500.00",
        cod_currency="CZK",
        eid="COD123456",
    ),
    "NO_COD": create_test_package(
        cod_price=None,
        cod_currency=None,
        eid="NOCOD123",
    ),
    "INSURED": create_test_package(
        price=10000,
        ins_currency="CZK",
        eid="INS123456",
    ),
    "HEAVY_PACKAGE": create_test_package(
        weight=5.0,
        length=300,
        height=200,
        width=250,
        price=8000,
        eid="HEAVY123",
    ),
    "EXPRESS_PACKAGE": create_test_package(
        service_type="RR",
        services="1+2+S",
        eid="EXP123456",
    ),
}


def get_test_package(name: str) -> Dict[str, Any]:
    """Fresh copy of a preset; raises KeyError listing valid names."""
    try:
        return dict(TEST_PACKAGES[name])
    except KeyError:
        raise KeyError(
            f"Unknown test package '{name}'. Available: {', '.join(sorted(TEST_PACKAGES))}"
        ) from None
