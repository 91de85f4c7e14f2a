import unittest

from university_registry.envelope import Envelope, NO_RESULTS, SUCCESS, UNAUTHORIZED, validate_envelope


class TestEnvelope(unittest.TestCase):
    def test_from_records_and_validate(self):
        records = [
            {"name": "Tech Institute", "account_id": "a.test"},
            {"name": "Tech Institute", "account_id": "b.test"},
        ]
        env = Envelope.from_records("get_universities_by_name", records, args={"name": "Tech Institute"})
        d = env.to_dict()
        self.assertEqual(d["status"], SUCCESS)
        self.assertEqual(d["metadata"]["args"], {"name": "Tech Institute"})
        self.assertIn("handled_at", d["metadata"])
        self.assertTrue(validate_envelope(d))

    def test_empty_records_mean_no_results(self):
        env = Envelope.from_records("get_all_universities")
        self.assertEqual(env.status, NO_RESULTS)
        self.assertTrue(env.ok)

    def test_failure_round_trips_through_json(self):
        env = Envelope.failure("add_university", UNAUTHORIZED, "Permission denied", caller="user")
        back = Envelope.from_json(env.to_json())
        self.assertEqual(back.status, UNAUTHORIZED)
        self.assertEqual(back.error, "Permission denied")
        self.assertFalse(back.ok)

    def test_validate_rejects_malformed(self):
        self.assertFalse(validate_envelope({"metadata": {}}))
        self.assertFalse(validate_envelope({"metadata": {}, "records": "nope"}))


if __name__ == "__main__":
    unittest.main()
