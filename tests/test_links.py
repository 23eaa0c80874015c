"""Tests for the booking links hub"""
import pytest

from melbgo.models import DAYS, LINKS, EventLinkEntry, StoredLinkEntry
from melbgo.models.seed import default_collection
from melbgo.services.errors import UnknownRecordError
from melbgo.services.itinerary import find_event
from melbgo.services.links import (
    LinkDraft,
    add_link,
    collect_links,
    delete_link_entry,
    dump_link_entries,
    remove_link,
    save_link_entry,
    update_link,
)

DRAFT = LinkDraft(title="Eureka Skydeck", url="https://skydeck.example", details="Sunset slot", type="ticket")


def test_event_links_come_first_in_trip_order():
    days = default_collection(DAYS)
    links = default_collection(LINKS)
    entries = collect_links(days, links)

    event_entries = [e for e in entries if isinstance(e, EventLinkEntry)]
    stored_entries = [e for e in entries if isinstance(e, StoredLinkEntry)]
    assert entries == event_entries + stored_entries
    assert [e.id for e in stored_entries] == [link.id for link in links]
    assert [e.day_index for e in event_entries] == sorted(e.day_index for e in event_entries)
    assert event_entries[0].id == "1-0"
    assert event_entries[0].type == "flight"


def test_events_without_booking_url_are_not_listed():
    days = default_collection(DAYS)
    ids = {e.id for e in collect_links(days, [])}
    assert "2-1" not in ids
    assert "4-1" in ids


def test_dump_tags_the_source():
    entries = dump_link_entries(collect_links(default_collection(DAYS), default_collection(LINKS)))
    assert entries[0]["source"] == "event"
    assert entries[0]["dayIndex"] == 0
    assert entries[-1]["source"] == "stored"


def test_stored_link_edits():
    links = add_link([], DRAFT)
    link_id = links[0].id
    links = update_link(links, link_id, DRAFT.model_copy(update={"title": "Skydeck"}))
    assert links[0].title == "Skydeck"
    assert remove_link(links, link_id) == []
    with pytest.raises(UnknownRecordError):
        update_link(links, "missing", DRAFT)


async def test_editing_event_link_updates_the_event(controller, editor):
    assert save_link_entry(controller, editor, "event", "4-1", DRAFT) is True
    await controller.drain()

    _, event = find_event(controller.get(DAYS), "4-1")
    assert event.title == "Eureka Skydeck"
    assert event.booking_url == "https://skydeck.example"
    assert event.notes == "Sunset slot"
    assert event.type == "transport"


async def test_deleting_event_link_keeps_the_event(controller, editor):
    links_before = controller.get(LINKS)
    assert delete_link_entry(controller, editor, "event", "1-0") is True
    await controller.drain()

    _, event = find_event(controller.get(DAYS), "1-0")
    assert event.booking_url is None
    assert "1-0" not in [e.id for e in collect_links(controller.get(DAYS), controller.get(LINKS))]
    assert controller.get(LINKS) == links_before


async def test_deleting_stored_link(controller, editor):
    assert delete_link_entry(controller, editor, "stored", "2") is True
    assert "2" not in [link.id for link in controller.get(LINKS)]


async def test_unknown_event_link(controller, editor):
    with pytest.raises(UnknownRecordError):
        save_link_entry(controller, editor, "event", "99-9", DRAFT)


async def test_read_only_link_edit(controller, reader):
    assert save_link_entry(controller, reader, "stored", "1", DRAFT) is False
    assert controller.get(LINKS)[0].title == "SkyBus 車票"
