import os
import tempfile
import unittest

# Ensure local imports work when running this file directly.
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
if THIS_DIR not in os.sys.path:
    os.sys.path.insert(0, THIS_DIR)

from config import DEFAULT_CONFIG, load_config, validate_config
from managers.file_manager import SessionStore
from managers.integration_manager import IntegrationRecord, IntegrationStore


def _record(name="spotify", status="ACTIVE", access_token="at", refresh_token="rt", **extra):
    return {"name": name, "status": status, "access_token": access_token, "refresh_token": refresh_token, **extra}


class TestSessionStore(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.session = SessionStore(path=os.path.join(self._td.name, "data", "session.json"))

    def tearDown(self):
        self._td.cleanup()

    def test_get_set_and_remove_item(self):
        self.assertIsNone(self.session.get_item("jwt"))
        self.session.set_item("jwt", "JWT abc")
        self.assertEqual(self.session.get_item("jwt"), "JWT abc")

        # a second instance over the same file sees the same data
        self.assertEqual(SessionStore(path=self.session.path).get_item("jwt"), "JWT abc")

        self.session.set_item("jwt", None)
        self.assertIsNone(self.session.get_item("jwt"))

    def test_plugin_uuid_is_generated_once(self):
        first = self.session.get_plugin_uuid()
        self.assertTrue(first)
        self.assertEqual(self.session.get_plugin_uuid(), first)

    def test_new_auth_callback_state_is_persisted_and_fresh(self):
        a = self.session.new_auth_callback_state()
        self.assertEqual(self.session.get_auth_callback_state(), a)
        b = self.session.new_auth_callback_state()
        self.assertNotEqual(a, b)
        self.assertEqual(self.session.get_auth_callback_state(), b)

    def test_corrupt_file_reads_as_empty(self):
        os.makedirs(os.path.dirname(self.session.path), exist_ok=True)
        with open(self.session.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertEqual(self.session.get_integrations(), [])
        self.assertIsNone(self.session.get_item("jwt"))


class TestIntegrationStore(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.session = SessionStore(path=os.path.join(self._td.name, "session.json"))
        self.store = IntegrationStore(self.session)

    def tearDown(self):
        self._td.cleanup()

    def test_last_active_spotify_record_wins(self):
        self.session.set_integrations([
            _record(access_token="A"),
            _record(name="Spotify", status="active", access_token="B"),
            _record(status="inactive", access_token="C"),
            _record(name="slack", access_token="S"),
        ])

        active = self.store.get_active_spotify_integration()
        self.assertIsNotNone(active)
        assert active is not None
        self.assertEqual(active.access_token, "B")

    def test_no_active_spotify_record(self):
        self.session.set_integrations([
            _record(status="revoked", access_token="A"),
            _record(name="slack", access_token="S"),
        ])
        self.assertIsNone(self.store.get_active_spotify_integration())
        self.assertEqual(len(self.store.list_integrations()), 2)

    def test_clear_spotify_keeps_other_providers(self):
        self.session.set_integrations([_record(), _record(name="slack"), _record(status="inactive")])
        self.store.clear_spotify_integrations()

        remaining = self.store.list_integrations()
        self.assertEqual([r.provider for r in remaining], ["slack"])

    def test_replace_from_remote_keeps_only_usable_spotify_records(self):
        self.session.set_integrations([_record(access_token="old"), _record(name="slack")])

        user = {
            "id": 7,
            "integrations": [
                _record(access_token="new"),
                _record(status="inactive", access_token="x"),
                _record(access_token=""),
                _record(name="slack", access_token="remote-slack"),
            ],
        }
        records = self.store.replace_integrations_from_remote(user)

        self.assertEqual([r.access_token for r in records], ["new"])
        stored = self.store.list_integrations()
        self.assertEqual([(r.provider, r.access_token) for r in stored], [("slack", "at"), ("spotify", "new")])
        self.assertEqual(self.store.get_active_spotify_integration().access_token, "new")

    def test_replace_from_remote_without_integrations_clears_spotify(self):
        self.session.set_integrations([_record()])
        self.assertEqual(self.store.replace_integrations_from_remote({"id": 1}), [])
        self.assertIsNone(self.store.get_active_spotify_integration())

    def test_record_dict_shape(self):
        record = IntegrationRecord.from_dict({"name": "spotify", "status": "Active", "access_token": "", "authId": "u1"})
        self.assertIsNone(record.access_token)
        self.assertFalse(record.has_credentials())
        self.assertTrue(record.is_active())
        self.assertEqual(record.auth_id, "u1")
        self.assertEqual(record.to_dict()["name"], "spotify")


class TestConfig(unittest.TestCase):
    def test_defaults_are_valid(self):
        is_valid, errors = validate_config(dict(DEFAULT_CONFIG))
        self.assertTrue(is_valid, errors)

    def test_invalid_values_are_reported(self):
        cfg = dict(DEFAULT_CONFIG, log_level="LOUD", refresh_delay_seconds=True, request_timeout=500)
        is_valid, errors = validate_config(cfg)
        self.assertFalse(is_valid)
        self.assertEqual(len(errors), 3)

    def test_missing_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            cfg = load_config(os.path.join(td, "missing.json"))
        self.assertEqual(cfg["api_endpoint"], DEFAULT_CONFIG["api_endpoint"])
        self.assertEqual(cfg["session_file"], DEFAULT_CONFIG["session_file"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
