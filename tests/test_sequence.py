from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from logistix.utils import sequence


def test_sequence_increment(tmp_path: Path):
    with patch("logistix.config.get_data_dir", return_value=tmp_path):
        assert sequence.current_id("invoice_number") == 0
        assert sequence.next_id("invoice_number") == 1
        assert sequence.next_id("invoice_number") == 2
        assert sequence.current_id("invoice_number") == 2


def test_sequences_are_independent(tmp_path: Path):
    with patch("logistix.config.get_data_dir", return_value=tmp_path):
        sequence.next_id("clients")
        sequence.next_id("clients")
        assert sequence.next_id("invoice_number") == 1
        assert sequence.current_id("clients") == 2


def test_set_sequence(tmp_path: Path):
    with patch("logistix.config.get_data_dir", return_value=tmp_path):
        sequence.set_id("invoice_number", 10)
        assert sequence.current_id("invoice_number") == 10
        assert sequence.next_id("invoice_number") == 11


def test_peek_does_not_persist(tmp_path: Path):
    with patch("logistix.config.get_data_dir", return_value=tmp_path):
        assert sequence.next_id("invoice_number") == 1
        assert sequence.peek_next_id("invoice_number") == 2
        assert sequence.peek_next_id("invoice_number") == 2
        assert sequence.current_id("invoice_number") == 1


def test_sequence_file_format(tmp_path: Path):
    with patch("logistix.config.get_data_dir", return_value=tmp_path):
        sequence.next_id("deliveries")
        sequence.set_id("clients", 3)
    data = json.loads((tmp_path / "sequence.json").read_text())
    assert data == {"clients": 3, "deliveries": 1}


def test_creates_data_dir(tmp_path: Path):
    data = tmp_path / "nested" / "data"
    with patch("logistix.config.get_data_dir", return_value=data):
        sequence.next_id("drivers")
    assert (data / "sequence.json").exists()
