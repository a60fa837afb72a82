"""
Tests for identifier, formatting, privacy, CSV and attachment helpers.
"""

import base64
import re
from datetime import datetime, timezone

import pytest

from complaint_tracker.models.complaint import AttachmentUpload
from complaint_tracker.utils import identifiers
from complaint_tracker.utils.attachments import MAX_ATTACHMENTS, decoded_size, prepare_attachments
from complaint_tracker.utils.csv_export import export_filename, generate_csv
from complaint_tracker.utils.formatting import format_bytes, format_category_name
from complaint_tracker.utils.security import mask_email, mask_phone
from complaint_tracker.utils.timestamps import ms_to_iso, to_ms


class TestIdentifiers:
    def test_complaint_id_format(self):
        complaint_id = identifiers.generate_complaint_id(now=datetime(2024, 9, 25, 14, 0))
        assert re.match(r"^CT-20240925-\d{4}$", complaint_id)

    def test_collision_draws_a_new_suffix(self, monkeypatch):
        suffixes = iter([42, 42, 7])
        monkeypatch.setattr(identifiers.random, "randint", lambda a, b: next(suffixes))
        complaint_id = identifiers.generate_complaint_id(
            existing=["CT-20240925-0042"], now=datetime(2024, 9, 25)
        )
        assert complaint_id == "CT-20240925-0007"

    def test_exhausted_ids_raise(self, monkeypatch):
        monkeypatch.setattr(identifiers.random, "randint", lambda a, b: 1)
        with pytest.raises(RuntimeError):
            identifiers.generate_complaint_id(existing=["CT-20240925-0001"], now=datetime(2024, 9, 25))

    def test_entry_id(self):
        assert re.match(r"^hist_1700000000000_[0-9a-f]{6}$", identifiers.new_entry_id("hist", 1700000000000))


class TestFormatting:
    @pytest.mark.parametrize("size, expected", [
        (0, "0 Bytes"),
        (-5, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (5 * 1024 * 1024, "5 MB"),
        (1234567, "1.18 MB"),
    ])
    def test_format_bytes(self, size, expected):
        assert format_bytes(size) == expected

    @pytest.mark.parametrize("slug, expected", [
        ("traffic", "Traffic"),
        ("cyber-crime", "Cyber Crime"),
        ("women_child-safety", "Women & Child Safety"),
        ("", "Unknown Department"),
    ])
    def test_format_category_name(self, slug, expected):
        assert format_category_name(slug) == expected


class TestMasking:
    @pytest.mark.parametrize("email, expected", [
        ("john.smith@email.com", "j*********@email.com"),
        ("a@b.co", "*@b.co"),
        ("", None),
        (None, None),
    ])
    def test_mask_email(self, email, expected):
        assert mask_email(email) == expected

    @pytest.mark.parametrize("phone, expected", [
        ("+1-555-0123", "+*-***-0123"),
        ("9876543210", "******3210"),
        ("  ", None),
    ])
    def test_mask_phone(self, phone, expected):
        assert mask_phone(phone) == expected


class TestTimestamps:
    def test_ms_to_iso(self):
        assert ms_to_iso(1705314600123) == "2024-01-15T10:30:00.123Z"

    def test_naive_datetimes_are_utc(self):
        assert to_ms(datetime(2024, 1, 15, 10, 30)) == to_ms(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        assert to_ms(datetime(1970, 1, 1, 0, 0, 1)) == 1000


class TestCsvExport:
    def test_csv_rows(self):
        complaints = [
            {
                "id": "CT-20240115-0001",
                "title": 'Bins "overflowing" again',
                "category": "Sanitation",
                "priority": "High",
                "status": "New",
                "createdAt": 1705314600000,
                "updatedAt": 1705314600000,
                "reporter": {"name": "Smith, John"},
            },
            {
                "id": "CT-20240115-0002",
                "title": "Broken signal",
                "category": "Traffic",
                "priority": "Low",
                "status": "Resolved",
                "createdAt": 1705314600000,
                "updatedAt": 1705401000000,
                "reporter": {"name": "Ravi"},
                "assignee": "Michael Chen",
            },
        ]
        assert generate_csv(complaints).split("\n") == [
            "ID,Title,Category,Priority,Status,Reporter,Created,Updated,Assignee",
            'CT-20240115-0001,"Bins ""overflowing"" again",Sanitation,High,New,"Smith, John",'
            "2024-01-15T10:30:00.000Z,2024-01-15T10:30:00.000Z,Unassigned",
            'CT-20240115-0002,"Broken signal",Traffic,Low,Resolved,"Ravi",'
            "2024-01-15T10:30:00.000Z,2024-01-16T10:30:00.000Z,Michael Chen",
        ]

    def test_empty_selection_is_header_only(self):
        assert generate_csv([]) == "ID,Title,Category,Priority,Status,Reporter,Created,Updated,Assignee"

    def test_export_filename(self):
        now = datetime(2024, 9, 25, tzinfo=timezone.utc)
        assert export_filename(now=now) == "complaints_export_2024-09-25.csv"
        assert export_filename("traffic_", now=now) == "traffic_complaints_export_2024-09-25.csv"


def _upload(name="photo.jpg", mime="image/jpeg", content=b"jpeg-bytes"):
    return AttachmentUpload(name=name, mime=mime, base64=base64.b64encode(content).decode("ascii"))


class TestAttachments:
    def test_decoded_size_accepts_data_urls(self):
        assert decoded_size("data:application/pdf;base64,aGVsbG8=") == 5

    def test_decoded_size_rejects_garbage(self):
        with pytest.raises(ValueError, match="not valid base64"):
            decoded_size("not base64!!")

    def test_pdf_and_images_are_accepted(self):
        prepared = prepare_attachments([_upload(), _upload("scan.pdf", "application/pdf")], 1000)
        assert [a["mime"] for a in prepared] == ["image/jpeg", "application/pdf"]
        assert prepared[0]["size"] == len(b"jpeg-bytes")
        assert prepared[0]["id"].startswith("att_1000_")

    def test_unsupported_type_names_the_file(self):
        with pytest.raises(ValueError, match="virus.exe is not a supported file type"):
            prepare_attachments([_upload("virus.exe", "application/octet-stream")], 1000)

    def test_oversized_file_is_rejected(self):
        big = _upload("huge.png", "image/png", b"\0" * (5 * 1024 * 1024 + 1))
        with pytest.raises(ValueError, match="huge.png is too large"):
            prepare_attachments([big], 1000)

    def test_extra_files_are_dropped(self):
        uploads = [_upload(f"photo{i}.jpg") for i in range(MAX_ATTACHMENTS + 2)]
        prepared = prepare_attachments(uploads, 1000)
        assert [a["name"] for a in prepared] == [f"photo{i}.jpg" for i in range(MAX_ATTACHMENTS)]
