import pytest

from laundryms.pricing import SERVICE_PRICES, calculate_total, format_money, price_of


@pytest.mark.parametrize(
    "service, rate",
    [("Wash & Fold", 50), ("Ironing & Pressing", 30), ("Dry Cleaning", 150)],
)
def test_total_is_quantity_times_rate(service, rate):
    for quantity in (1, 2, 7, 40):
        assert calculate_total(service, quantity) == quantity * rate


def test_fractional_kilograms():
    assert calculate_total("Wash & Fold", 2.5) == 125


def test_zero_or_missing_inputs_total_zero():
    assert calculate_total("Dry Cleaning", 0) == 0
    assert calculate_total("", 3) == 0
    assert calculate_total(None, 3) == 0


def test_unknown_service_totals_zero():
    assert price_of("Steam Press") == 0
    assert calculate_total("Steam Press", 4) == 0


def test_negative_quantity_rejected():
    with pytest.raises(ValueError):
        calculate_total("Wash & Fold", -1)


def test_only_three_services_offered():
    assert set(SERVICE_PRICES) == {"Wash & Fold", "Ironing & Pressing", "Dry Cleaning"}


def test_format_money():
    assert format_money(1500) == "₱1,500"
    assert format_money(12.5, "$") == "$12.50"
