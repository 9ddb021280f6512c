import re

from utilities.uniqueidgenerator import UniqueIdGenerator


def test_payment_reference_format(monkeypatch):
    monkeypatch.setattr(UniqueIdGenerator, "current_millis", staticmethod(lambda: 1700000000123))

    reference = UniqueIdGenerator.generate_payment_reference("NYOTA")

    assert re.fullmatch(r"NYOTA1700000000123\d{4}", reference)


def test_payment_reference_uses_prefix():
    assert UniqueIdGenerator.generate_payment_reference("ABC").startswith("ABC")


def test_probe_reference_format():
    assert re.fullmatch(r"TEST\d{13}", UniqueIdGenerator.generate_probe_reference())
