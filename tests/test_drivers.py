from __future__ import annotations

import pytest

from logistix.services import drivers


def test_add_and_list(data_dir):
    luc = drivers.add_driver("Luc Tremblay")
    marie = drivers.add_driver("Marie Côté")
    assert drivers.list_drivers() == [luc, marie]


def test_name_required(data_dir):
    with pytest.raises(ValueError, match="Livreur"):
        drivers.add_driver("")


def test_current_driver(data_dir):
    assert drivers.current_driver() is None
    luc = drivers.add_driver("Luc")
    drivers.set_current_driver(luc)
    assert drivers.current_driver() == luc
    drivers.set_current_driver(None)
    assert drivers.current_driver() is None


def test_delete_clears_current(data_dir):
    luc = drivers.add_driver("Luc")
    marie = drivers.add_driver("Marie")
    drivers.set_current_driver(luc)
    assert drivers.delete_driver(marie.id) is True
    assert drivers.current_driver() == luc
    assert drivers.delete_driver(luc.id) is True
    assert drivers.current_driver() is None
    assert drivers.delete_driver(luc.id) is False


class TestShifts:
    def test_start_and_end(self, data_dir):
        luc = drivers.add_driver("Luc")
        shift = drivers.start_shift(luc)
        assert shift.is_active is True
        assert shift.driver_name == "Luc"
        assert drivers.active_shift(luc.id) == shift

        ended = drivers.end_shift(luc.id)
        assert ended.id == shift.id
        assert ended.is_active is False
        assert ended.end_time is not None
        assert drivers.active_shift(luc.id) is None

    def test_end_without_active_shift(self, data_dir):
        assert drivers.end_shift(1) is None

    def test_start_closes_previous(self, data_dir):
        luc = drivers.add_driver("Luc")
        first = drivers.start_shift(luc)
        second = drivers.start_shift(luc)
        assert second.id != first.id
        assert drivers.active_shift(luc.id) == second

    def test_shifts_per_driver(self, data_dir):
        luc = drivers.add_driver("Luc")
        marie = drivers.add_driver("Marie")
        drivers.start_shift(luc)
        drivers.start_shift(marie)
        drivers.end_shift(luc.id)
        assert drivers.active_shift(luc.id) is None
        assert drivers.active_shift(marie.id) is not None
