"""Tests for coordinate-keyed address resolution."""

import pytest

from properties.addresses import AddressResolver, coordinate_text, placeholder_geocoding


class TestCoordinateText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (33.5731, "33.5731"),
            (33.5, "33.5"),
            (-7.0, "-7"),
            (0, "0"),
            (-7.5898, "-7.5898"),
            (-0.0, "0"),
        ],
    )
    def test_shortest_decimal_text(self, value, expected):
        assert coordinate_text(value) == expected

    @pytest.mark.parametrize(("value", "expected"), [(1e-05, "0.00001"), (-2.5e-07, "-0.00000025")])
    def test_small_values_are_plain_decimals(self, value, expected):
        assert coordinate_text(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (33.573112345678901, "33.57311235"),
            (-7.589812344, "-7.58981234"),
            (12.000000001, "12"),
        ],
    )
    def test_rounded_to_column_scale(self, value, expected):
        assert coordinate_text(value) == expected


class TestPlaceholderGeocoding:
    def test_uses_coordinates_when_no_address(self):
        geocoding = placeholder_geocoding(33.5, -7.25)

        assert geocoding["formattedAddress"] == "33.5, -7.25"
        assert geocoding["placeId"] == ""
        assert geocoding["components"] == {}

    def test_prefers_full_address(self):
        geocoding = placeholder_geocoding(33.5, -7.25, "12 Rue Atlas, Casablanca")

        assert geocoding["address"] == "12 Rue Atlas, Casablanca"
        assert geocoding["formattedAddress"] == "12 Rue Atlas, Casablanca"


class TestAddressResolver:
    @pytest.mark.asyncio
    async def test_same_coordinates_resolve_to_same_id(self, address_store):
        resolver = AddressResolver(address_store)

        first = await resolver.resolve(33.5731, -7.5898)
        second = await resolver.resolve(33.5731, -7.5898)

        assert first == second
        assert len(address_store.rows) == 1

    @pytest.mark.asyncio
    async def test_distinct_coordinates_create_distinct_rows(self, address_store):
        resolver = AddressResolver(address_store)

        first = await resolver.resolve(33.5731, -7.5898)
        second = await resolver.resolve(34.0209, -6.8416)

        assert first != second
        assert set(address_store.rows) == {("33.5731", "-7.5898"), ("34.0209", "-6.8416")}

    @pytest.mark.asyncio
    async def test_new_address_stores_placeholder(self, address_store):
        resolver = AddressResolver(address_store)

        await resolver.resolve(31.6295, -7.9811, "Derb Sidi Bouloukat, Marrakech")

        row = address_store.rows[("31.6295", "-7.9811")]
        assert row["geocoding"]["formattedAddress"] == "Derb Sidi Bouloukat, Marrakech"

    @pytest.mark.asyncio
    async def test_store_errors_propagate(self, address_store):
        address_store.fail = True
        resolver = AddressResolver(address_store)

        with pytest.raises(RuntimeError, match="address lookup failed"):
            await resolver.resolve(33.5, -7.5)

    @pytest.mark.asyncio
    async def test_high_precision_coordinates_reuse_stored_row(self, address_store):
        resolver = AddressResolver(address_store)

        first = await resolver.resolve(33.573112345678901, -7.589812344123)
        second = await resolver.resolve(33.5731123456789, -7.5898123441)

        assert first == second
        assert list(address_store.rows) == [("33.57311235", "-7.58981234")]

    @pytest.mark.asyncio
    async def test_placeholder_address_never_uses_exponents(self, address_store):
        resolver = AddressResolver(address_store)

        await resolver.resolve(1e-05, -2.5e-07)

        row = address_store.rows[("0.00001", "-0.00000025")]
        assert row["geocoding"]["formattedAddress"] == "0.00001, -0.00000025"
