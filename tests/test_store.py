import json
import os
import tempfile
import unittest

from fakes import mod

from modwatch.exceptions import StoreError
from modwatch.models import Category, InstalledMod, ServerConfig, SupportLevel
from modwatch.store import (
    JsonConfigRepository,
    JsonModRepository,
    MemoryModRepository,
)


class TestJsonStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = os.path.join(self._tmp.name, "data")

    def tearDown(self):
        self._tmp.cleanup()

    def read_json(self, name):
        with open(os.path.join(self.data_dir, name), encoding="utf-8") as f:
            return json.load(f)

    async def test_missing_files_are_initialised(self):
        self.assertEqual(await JsonModRepository(self.data_dir).load(), [])
        config = await JsonConfigRepository(self.data_dir).load()

        self.assertEqual(config.loader, "fabric")
        self.assertTrue(config.show_server_only_mods)
        self.assertEqual(self.read_json("mods.json"), [])
        self.assertEqual(self.read_json("config.json")["minecraftVersion"], "")

    async def test_reads_existing_catalog(self):
        os.makedirs(self.data_dir)
        with open(os.path.join(self.data_dir, "mods.json"), "w", encoding="utf-8") as f:
            json.dump(
                [
                    {
                        "id": "AANobbMI",
                        "slug": "sodium",
                        "name": "Sodium",
                        "versionId": "v2",
                        "filename": "sodium.jar",
                        "environment": {"client": "required", "server": "unsupported"},
                        "category": "client-only",
                        "installedAt": "2024-01-01T00:00:00.000Z",
                        "versionNumber": "mc1.20.1-0.5.3",
                    }
                ],
                f,
            )

        mods = await JsonModRepository(self.data_dir).load()

        self.assertEqual(len(mods), 1)
        sodium = mods[0]
        self.assertEqual(sodium.version_number, "mc1.20.1-0.5.3")
        self.assertEqual(sodium.category, Category.CLIENT_ONLY)
        self.assertEqual(sodium.environment.server, SupportLevel.UNSUPPORTED)

    async def test_save_and_reload(self):
        repo = JsonModRepository(self.data_dir)
        original = mod("lithium", "0.11.2")
        await repo.save([original])

        self.assertEqual(await repo.load(), [original])
        saved = self.read_json("mods.json")[0]
        self.assertEqual(saved["versionNumber"], "0.11.2")
        self.assertEqual(saved["category"], "both")

    async def test_corrupt_file_is_reset(self):
        os.makedirs(self.data_dir)
        with open(os.path.join(self.data_dir, "mods.json"), "w", encoding="utf-8") as f:
            f.write("{not json")

        self.assertEqual(await JsonModRepository(self.data_dir).load(), [])
        self.assertEqual(self.read_json("mods.json"), [])

    async def test_invalid_records_raise(self):
        os.makedirs(self.data_dir)
        with open(os.path.join(self.data_dir, "mods.json"), "w", encoding="utf-8") as f:
            json.dump([{"name": "no id"}], f)

        with self.assertRaises(StoreError):
            await JsonModRepository(self.data_dir).load()

    async def test_wrong_top_level_type_raises(self):
        os.makedirs(self.data_dir)
        with open(os.path.join(self.data_dir, "mods.json"), "w", encoding="utf-8") as f:
            json.dump({"mods": []}, f)

        with self.assertRaises(StoreError):
            await JsonModRepository(self.data_dir).load()

    async def test_config_round_trip(self):
        repo = JsonConfigRepository(self.data_dir)
        await repo.save(
            ServerConfig(path="/srv/mc", minecraft_version="1.20.1", loader="quilt")
        )

        config = await repo.load()
        self.assertEqual(config.target().game_version, "1.20.1")
        self.assertEqual(config.target().loader, "quilt")
        self.assertEqual(self.read_json("config.json")["path"], "/srv/mc")

    async def test_unwritable_data_dir(self):
        blocker = os.path.join(self._tmp.name, "file")
        with open(blocker, "w") as f:
            f.write("")

        with self.assertRaises(StoreError):
            await JsonModRepository(os.path.join(blocker, "data")).load()


class TestModRepositoryHelpers(unittest.IsolatedAsyncioTestCase):
    async def test_add_replaces_existing(self):
        repo = MemoryModRepository([mod("a", "1.0.0"), mod("b")])
        await repo.add(mod("a", "2.0.0"))
        await repo.add(mod("c"))

        mods = await repo.load()
        self.assertEqual([m.id for m in mods], ["a", "b", "c"])
        self.assertEqual(mods[0].version_number, "2.0.0")

    async def test_remove_and_get(self):
        repo = MemoryModRepository([mod("a"), mod("b")])
        self.assertTrue(await repo.remove("a"))
        self.assertFalse(await repo.remove("missing"))
        self.assertIsNone(await repo.get("a"))
        self.assertEqual((await repo.get("b")).id, "b")

    async def test_categorized(self):
        server_mod = InstalledMod(id="s", name="S", category=Category.SERVER_ONLY)
        repo = MemoryModRepository([mod("a"), server_mod])

        groups = await repo.categorized()

        self.assertEqual([m.id for m in groups[Category.BOTH]], ["a"])
        self.assertEqual([m.id for m in groups[Category.SERVER_ONLY]], ["s"])
        self.assertEqual(groups[Category.CLIENT_ONLY], [])


if __name__ == "__main__":
    unittest.main()
