import math
import unittest

from delivery_sync.ingest import columns


class TestColumnResolution(unittest.TestCase):
    def test_first_listed_variant_wins(self) -> None:
        row = {"Ticket_ID": "B-2", "Ticket ID": "A-1"}
        self.assertEqual(columns.resolve_value(row, ["Ticket ID", "Ticket_ID"]), "A-1")
        self.assertEqual(columns.resolve_value(row, ["Ticket_ID", "Ticket ID"]), "B-2")

    def test_null_values_fall_through(self) -> None:
        row = {"Aging": None, "Ageing": math.nan, "aging (days)": " 4 "}
        self.assertEqual(columns.resolve_value(row, columns.FIELD_CANDIDATES["aging"]), "4")

    def test_header_match_ignores_case_and_spacing(self) -> None:
        row = {"  TICKET   id ": "T-9"}
        self.assertEqual(columns.resolve_value(row, ["Ticket ID"]), "T-9")

    def test_missing_field_is_empty_string(self) -> None:
        self.assertEqual(columns.resolve_value({"Other": "x"}, ["Ticket ID"]), "")
        self.assertIsNone(columns.resolve_raw({}, ["Ticket ID"]))

    def test_integral_float_renders_without_fraction(self) -> None:
        self.assertEqual(columns.resolve_value({"Ticket ID": 12345.0}, ["Ticket ID"]), "12345")
        self.assertEqual(columns.resolve_value({"Ticket ID": 12.5}, ["Ticket ID"]), "12.5")

    def test_extra_candidates_are_appended(self) -> None:
        names = columns.candidates_for("ticket_id", {"ticket_id": ["Job Ref", "Ticket ID"]})
        self.assertEqual(names[0], "Ticket ID")
        self.assertEqual(names[-1], "Job Ref")
        self.assertEqual(names.count("Ticket ID"), 1)

    def test_normalize_header_collapses_spacing(self) -> None:
        self.assertEqual(columns.normalize_header("  Ticket \t  ID "), "ticket id")
        self.assertEqual(columns.normalize_header(None), "")

    def test_find_header_returns_sheet_spelling(self) -> None:
        header = columns.find_header(["No.", "ticket no", "Aging"], columns.FIELD_CANDIDATES["ticket_id"])
        self.assertEqual(header, "ticket no")


if __name__ == "__main__":
    unittest.main()
