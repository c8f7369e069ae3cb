"""
Tests for persisted image schemas
"""

import pytest
from pydantic import ValidationError

from common.base import ROI, Size
from schemas import ImageRecord, RoiBounds


class TestRoiBounds:
    """Tests for RoiBounds"""

    def test_from_roi(self):
        bounds = RoiBounds.from_roi(ROI(x=2, y=3, width=10, height=5))

        assert bounds.left == 2
        assert bounds.right == 12
        assert bounds.top == 3
        assert bounds.bottom == 8

    def test_to_roi(self):
        roi = RoiBounds(left=1, right=4, top=0, bottom=2).to_roi()
        assert roi == ROI(x=1, y=0, width=3, height=2)

    def test_negative_edge_rejected(self):
        with pytest.raises(ValidationError):
            RoiBounds(left=-1, right=4, top=0, bottom=2)


class TestImageRecord:
    """Tests for ImageRecord"""

    def test_without_roi(self):
        record = ImageRecord(size=Size(width=4, height=2), compressed_binary="eJw=")

        assert record.roi is None
        assert record.size.as_tuple() == (4, 2)

    def test_json_round_trip(self):
        record = ImageRecord(
            size=Size(width=8, height=6),
            roi=RoiBounds(left=1, right=5, top=2, bottom=6),
            compressed_binary="eJw=",
        )

        parsed = ImageRecord.model_validate_json(record.model_dump_json())

        assert parsed == record
        assert parsed.roi.to_roi() == ROI(x=1, y=2, width=4, height=4)

    def test_from_dict(self):
        record = ImageRecord.model_validate(
            {"size": {"width": 3, "height": 3}, "compressed_binary": "eJw="}
        )
        assert record.size == Size(width=3, height=3)

    def test_binary_required(self):
        with pytest.raises(ValidationError):
            ImageRecord(size=Size(width=4, height=2))
