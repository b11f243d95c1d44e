"""Baseline tests ensuring the package layout loads correctly."""

import pyretrofile


def test_package_exports() -> None:
    for name in ("bus", "errors", "loader", "system", "utils", "writer"):
        assert hasattr(pyretrofile, name), f"missing submodule: {name}"


def test_bus_exports() -> None:
    from pyretrofile import bus

    for name in ("AddressSpace", "Range", "Region"):
        assert hasattr(bus, name), f"bus missing symbol: {name}"


def test_result_codes_are_distinct() -> None:
    from pyretrofile.errors import ConversionError, Result

    codes = {cls.result for cls in ConversionError.__subclasses__()}
    assert len(codes) == len(ConversionError.__subclasses__())
    assert Result.OK == 0
    assert Result.USAGE_SHOWN not in codes
