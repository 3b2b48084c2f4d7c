import unittest

from fakes import mod, version

from modwatch.models import Category, CategoryPolicy, TargetEnvironment
from modwatch.services.compatibility import CompatibilityFilter
from modwatch.services.update_resolver import UpdateResolver

TARGET = TargetEnvironment(game_version="1.20.1", loader="fabric")


class TestUpdateResolver(unittest.TestCase):
    def setUp(self):
        self.resolver = UpdateResolver()

    def test_picks_smallest_compatible_upgrade(self):
        candidates = [version("2.0.0"), version("1.0.2"), version("1.0.1"), version("0.9.0")]
        result = self.resolver.resolve(mod("a", "1.0.0"), candidates, TARGET)
        self.assertTrue(result.has_update)
        self.assertEqual(result.target_version, "1.0.1")
        self.assertEqual(result.target_version_id, "id-1.0.1")

    def test_skips_incompatible_candidate(self):
        candidates = [
            version("1.0.1", loaders=["forge"]),
            version("1.0.2", game_versions=["1.19.4"]),
            version("1.0.3"),
        ]
        result = self.resolver.resolve(mod("a", "1.0.0"), candidates, TARGET)
        self.assertEqual(result.target_version, "1.0.3")

    def test_only_incompatible_upgrades(self):
        candidates = [version("1.0.0"), version("2.0.0", loaders=["neoforge"])]
        result = self.resolver.resolve(mod("a", "1.0.0"), candidates, TARGET)
        self.assertFalse(result.has_update)
        self.assertFalse(result.error)
        self.assertIsNone(result.target_version_id)
        self.assertEqual(result.target_version, "1.0.0")
        self.assertEqual(result.release_date, "")

    def test_no_candidates_keeps_raw_version(self):
        result = self.resolver.resolve(mod("a", "1.20.1-1.0.0"), [], TARGET)
        self.assertFalse(result.has_update)
        self.assertEqual(result.current_version, "1.20.1-1.0.0")
        self.assertEqual(result.target_version, "1.20.1-1.0.0")

    def test_no_candidates_unknown_version(self):
        result = self.resolver.resolve(mod("a", ""), [], TARGET)
        self.assertEqual(result.current_version, "?")
        self.assertEqual(result.target_version, "?")

    def test_unknown_current_version_treated_as_zero(self):
        result = self.resolver.resolve(mod("a", ""), [version("0.1.0")], TARGET)
        self.assertTrue(result.has_update)
        self.assertEqual(result.current_version, "0.0.0")

    def test_display_versions_are_formatted(self):
        candidates = [version("1.20.1-6.1.0", date_published="2024-05-01")]
        result = self.resolver.resolve(mod("a", "1.20.1-6.0.9"), candidates, TARGET)
        self.assertEqual(result.current_version, "6.0.9")
        self.assertEqual(result.target_version, "6.1.0")
        self.assertEqual(result.release_date, "2024-05-01")

    def test_pre_release_upgrade(self):
        candidates = [version("1.0.0"), version("1.0.0-beta")]
        result = self.resolver.resolve(mod("a", "1.0.0-alpha"), candidates, TARGET)
        self.assertEqual(result.target_version_id, "id-1.0.0-beta")

    def test_equal_versions_keep_original_order(self):
        candidates = [
            version("1.1.0", version_id="first"),
            version("v1.1.0", version_id="second"),
        ]
        result = self.resolver.resolve(mod("a", "1.0.0"), candidates, TARGET)
        self.assertEqual(result.target_version_id, "first")

    def test_carries_changelog_and_category(self):
        candidates = [
            version(
                "1.1.0",
                changelog="fixes",
                client_support="required",
                server_support="required",
            )
        ]
        result = self.resolver.resolve(mod("a", "1.0.0"), candidates, TARGET)
        self.assertEqual(result.changelog, "fixes")
        self.assertEqual(result.new_category, Category.SERVER_ONLY)

        strict = UpdateResolver(CompatibilityFilter(CategoryPolicy.STRICT))
        result = strict.resolve(mod("a", "1.0.0"), candidates, TARGET)
        self.assertEqual(result.new_category, Category.BOTH)


if __name__ == "__main__":
    unittest.main()
