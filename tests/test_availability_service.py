"""Tests for port availability."""

import pytest

from chargeslot.core.exceptions import NotFoundError
from chargeslot.domain.booking_state import ACCEPTED, REJECTED
from chargeslot.domain.slots import slot_labels
from chargeslot.services.availability_service import availability_service
from tests.conftest import BOOKING_DAY, slot


class TestPortAvailability:
    async def test_empty_day_is_all_free(self, db_session, sample_station):
        port = sample_station.ports[0]

        availability = await availability_service.get_port_availability(
            db_session, port.id, BOOKING_DAY
        )

        assert availability.port.id == port.id
        assert availability.date == BOOKING_DAY
        assert availability.booked_slots == []
        assert availability.free_slots == slot_labels()

    async def test_booked_and_free_partition_the_grid(
        self, db_session, sample_station, sample_user, user_factory, booking_factory
    ):
        port = sample_station.ports[0]
        other = await user_factory()
        await booking_factory(sample_user, port, slot(9, 0))
        await booking_factory(other, port, slot(14, 30), status=ACCEPTED)

        availability = await availability_service.get_port_availability(
            db_session, port.id, BOOKING_DAY
        )

        assert availability.booked_slots == ["09:00", "14:30"]
        assert "09:00" not in availability.free_slots
        assert "14:30" not in availability.free_slots
        assert len(availability.free_slots) == 31
        assert sorted(availability.booked_slots + availability.free_slots) == sorted(slot_labels())

    async def test_rejected_booking_does_not_hold_slot(
        self, db_session, sample_station, sample_user, booking_factory
    ):
        port = sample_station.ports[0]
        await booking_factory(sample_user, port, slot(10, 0), status=REJECTED)

        availability = await availability_service.get_port_availability(
            db_session, port.id, BOOKING_DAY
        )

        assert availability.booked_slots == []
        assert "10:00" in availability.free_slots

    async def test_other_days_and_ports_are_ignored(
        self, db_session, sample_station, sample_user, user_factory, booking_factory
    ):
        port, other_port = sample_station.ports
        other = await user_factory()
        await booking_factory(sample_user, other_port, slot(9, 0))
        await booking_factory(other, port, slot(9, 0, day=BOOKING_DAY.replace(day=2)))

        availability = await availability_service.get_port_availability(
            db_session, port.id, BOOKING_DAY
        )

        assert availability.booked_slots == []

    async def test_repeated_queries_agree(
        self, db_session, sample_station, sample_user, booking_factory
    ):
        port = sample_station.ports[0]
        await booking_factory(sample_user, port, slot(18, 0))

        first = await availability_service.get_port_availability(db_session, port.id, BOOKING_DAY)
        second = await availability_service.get_port_availability(db_session, port.id, BOOKING_DAY)

        assert first.booked_slots == second.booked_slots
        assert first.free_slots == second.free_slots

    async def test_unknown_port(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await availability_service.get_port_availability(db_session, 999, BOOKING_DAY)
        assert exc_info.value.status_code == 404


class TestIsSlotFree:
    async def test_free_slot(self, db_session, sample_station):
        port = sample_station.ports[0]
        assert await availability_service.is_slot_free(db_session, port, slot(14, 0))

    async def test_held_slot(self, db_session, sample_station, sample_user, booking_factory):
        port = sample_station.ports[0]
        await booking_factory(sample_user, port, slot(14, 0))

        assert not await availability_service.is_slot_free(db_session, port, slot(14, 0))
        assert await availability_service.is_slot_free(db_session, port, slot(14, 30))

    async def test_inactive_port_is_never_free(self, db_session, sample_station):
        port = sample_station.ports[0]
        port.is_active = False
        await db_session.commit()

        assert not await availability_service.is_slot_free(db_session, port, slot(14, 0))

    async def test_inactive_station_is_never_free(self, db_session, station_factory):
        station = await station_factory(is_active=False)
        port = station.ports[0]

        assert not await availability_service.is_slot_free(db_session, port, slot(14, 0))
