import pytest

from utilities.phone_utils import is_valid_phone, mask_phone


@pytest.mark.parametrize("phone", ["254712345678", "254100000000", "254999999999"])
def test_valid_international_numbers(phone):
    assert is_valid_phone(phone, "254") is True


@pytest.mark.parametrize(
    "phone",
    [
        "0712345678",
        "+254712345678",
        "25471234567",
        "2547123456789",
        "255712345678",
        "254 712345678",
        "254712345a78",
        "254712345678\n",
        "",
        None,
        254712345678,
    ],
)
def test_invalid_numbers_are_rejected(phone):
    assert is_valid_phone(phone, "254") is False


def test_country_code_is_configurable():
    assert is_valid_phone("233550748724", "233") is True
    assert is_valid_phone("254712345678", "233") is False


def test_mask_keeps_first_six_and_last_three():
    assert mask_phone("254712345678") == "254712***678"


@pytest.mark.parametrize("phone", ["2547123456", "25471234567", "254712345678901"])
def test_mask_property_for_long_numbers(phone):
    masked = mask_phone(phone)
    assert masked[:6] == phone[:6]
    assert masked[-3:] == phone[-3:]
    assert masked[6:-3] == "***"
    assert len(masked) == 12


@pytest.mark.parametrize("phone", ["123456789", "2547", "", None])
def test_mask_returns_short_input_unchanged(phone):
    assert mask_phone(phone) == phone
