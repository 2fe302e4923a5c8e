import unittest

from datagen import regions
from datagen.regions import Region, UnknownRegionError


class RegionFormattingTests(unittest.TestCase):
    def test_usa_address_format(self) -> None:
        address = regions.format_address(Region.USA, "Main St", "Springfield", "IL", "62704")
        self.assertEqual(address, "Main St, Springfield, IL 62704")

    def test_germany_address_has_no_commas_or_postcode(self) -> None:
        address = regions.format_address("Germany", "Hauptstr. 5", "Berlin", "Berlin", "10115")
        self.assertEqual(address, "Hauptstr. 5 Berlin Berlin")

    def test_poland_address_format(self) -> None:
        address = regions.format_address(Region.POLAND, "ul. Długa 3", "Gdańsk", "pomorskie", "80-827")
        self.assertEqual(address, "ul. Długa 3, Gdańsk, pomorskie 80-827")

    def test_phone_formats(self) -> None:
        groups = ["123", "456", "7890"]
        self.assertEqual(regions.format_phone(Region.USA, groups), "(+1) 123-456-7890")
        self.assertEqual(regions.format_phone(Region.GERMANY, groups), "+49-123-456-7890")
        self.assertEqual(regions.format_phone(Region.POLAND, groups), "+48-123-456-7890")

    def test_phone_requires_three_groups(self) -> None:
        with self.assertRaises(ValueError):
            regions.format_phone(Region.USA, ["123", "456"])


class RegionTableTests(unittest.TestCase):
    def test_alphabets_include_diacritics(self) -> None:
        self.assertEqual(regions.alphabet_for(Region.USA), "abcdefghijklmnopqrstuvwxyz")
        self.assertTrue(set("äöüß") <= set(regions.alphabet_for(Region.GERMANY)))
        self.assertTrue(set("ąćęłńóśźż") <= set(regions.alphabet_for(Region.POLAND)))
        self.assertEqual(len(regions.alphabet_for(Region.GERMANY)), 30)
        self.assertEqual(len(regions.alphabet_for(Region.POLAND)), 35)

    def test_locales(self) -> None:
        self.assertEqual(regions.profile_for(Region.USA).locale, "en_US")
        self.assertEqual(regions.profile_for(Region.GERMANY).locale, "de_DE")
        self.assertEqual(regions.profile_for(Region.POLAND).locale, "pl_PL")

    def test_resolve_region_is_case_insensitive(self) -> None:
        self.assertIs(regions.resolve_region("usa"), Region.USA)
        self.assertIs(regions.resolve_region(" germany "), Region.GERMANY)
        self.assertIs(regions.resolve_region("POLAND"), Region.POLAND)
        self.assertIs(regions.resolve_region(Region.POLAND), Region.POLAND)

    def test_unknown_region_is_rejected(self) -> None:
        for value in ("France", "", None, 3):
            with self.assertRaises(UnknownRegionError) as ctx:
                regions.resolve_region(value)
            self.assertIn("USA", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
