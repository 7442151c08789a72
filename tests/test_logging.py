import json
import logging
import unittest

from app.core.logging import JsonFormatter


class JsonFormatterTest(unittest.TestCase):
    def test_record_carries_service_fields(self):
        formatter = JsonFormatter("Pharmacy Management API", "local")
        record = logging.LogRecord(
            "app.services.sale_service", logging.INFO, __file__, 1, "Recorded sale %s", (7,), None
        )

        payload = json.loads(formatter.format(record))

        self.assertEqual(payload["service"], "Pharmacy Management API")
        self.assertEqual(payload["environment"], "local")
        self.assertEqual(payload["logger"], "app.services.sale_service")
        self.assertEqual(payload["message"], "Recorded sale 7")
        self.assertNotIn("exc_info", payload)


if __name__ == "__main__":
    unittest.main()
