"""Tests for saving and loading the startup configuration."""

import json
import tempfile
import unittest
from pathlib import Path

from pnf_router_cli.configuration import (
    Configuration,
    CryptoMapEntry,
    DynamicMapEntry,
    IpsecLifetime,
)
from pnf_router_cli.persistence import from_dict, load_config, save_config, to_dict


class TestPersistence(unittest.TestCase):
    """Test the JSON snapshot."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "nested" / "startup-config.json"

    def _populated(self):
        return Configuration(
            hostname="Edge",
            startup_config="hostname Edge\n",
            last_written="2024-02-29 12:00:00",
            enable_password="cisco",
            encrypted_password="abc123",
            password_encryption=True,
            domain_name="example.net",
            tunnel_mode="ipsec ipv4",
            transform_sets=["transform-set", "TS1"],
            crypto_keys={"Edge.example.net": "key"},
            certificates={"web": "cert"},
            crypto_dynamic_maps={"DYN": DynamicMapEntry(name="DYN", seq_num=10)},
            crypto_maps={"CM": CryptoMapEntry(name="CM", seq_num=20)},
            crypto_local_addresses={"CM": "g0/0"},
            crypto_engine_accelerator=1,
            crypto_transform_sets={"TS1": ["esp-aes", "esp-sha-hmac"]},
            crypto_ipsec_lifetime=IpsecLifetime(seconds=3600),
        )

    def test_round_trip(self):
        config = self._populated()
        save_config(config, self.path)
        self.assertEqual(load_config(self.path), config)

    def test_save_creates_parent_and_pretty_prints(self):
        save_config(Configuration(), self.path)
        text = self.path.read_text(encoding="utf-8")
        self.assertTrue(text.startswith("{\n  "))
        self.assertEqual(json.loads(text)["hostname"], "Router")

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config(self.path), Configuration())

    def test_invalid_json_gives_defaults(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("pnf_router_cli.persistence", level="WARNING"):
            self.assertEqual(load_config(self.path), Configuration())

    def test_non_object_gives_defaults(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2, 3]", encoding="utf-8")
        self.assertEqual(load_config(self.path), Configuration())

    def test_wrong_nested_type_gives_defaults(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"crypto_maps": {"CM": 5}}), encoding="utf-8")
        self.assertEqual(load_config(self.path), Configuration())

    def test_missing_keys_take_defaults(self):
        config = from_dict({"hostname": "Core"})
        self.assertEqual(config.hostname, "Core")
        self.assertEqual(config.crypto_keys, {})
        self.assertIsNone(config.crypto_ipsec_lifetime.seconds)
        self.assertFalse(config.password_encryption)

    def test_to_dict_nests_dataclasses(self):
        data = to_dict(self._populated())
        self.assertEqual(data["crypto_maps"]["CM"], {"name": "CM", "seq_num": 20, "interface_id": None})
        self.assertEqual(data["crypto_ipsec_lifetime"], {"seconds": 3600, "kilobytes": None})


if __name__ == "__main__":
    unittest.main()
