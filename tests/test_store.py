import datetime as dt

import pytest

from clientorbit.data.schemas import ClientRecord, DataSnapshot, SnapshotSource
from clientorbit.data.store import DataStore, is_record_sequence, notice_for

from conftest import SAMPLE_CSV, FakeResponse, make_fetcher


def test_new_store_is_empty_and_loading(dead_fetcher):
    store = DataStore(fetcher=dead_fetcher)
    assert store.snapshot.records == ()
    assert store.snapshot.loading is True
    assert store.snapshot.source == SnapshotSource.STARTUP
    assert store.aggregate.total_clients == 0


def test_refresh_live(live_store):
    snapshot = live_store.refresh()
    assert snapshot.is_live
    assert snapshot.loading is False
    assert snapshot.source == SnapshotSource.PRIMARY
    assert [r.name for r in snapshot.records] == ["Acme", "Globex", "Initech"]
    assert live_store.snapshot is snapshot
    assert live_store.aggregate.total_clients == 3
    assert live_store.aggregate.active_clients == 2


def test_refresh_falls_back_when_primary_and_proxy_fail(dead_store):
    snapshot = dead_store.refresh()
    assert not snapshot.is_live
    assert snapshot.source == SnapshotSource.FALLBACK
    assert snapshot.record_count == 5
    assert snapshot.loading is False


def test_refresh_twice_gives_equal_records(live_store):
    first = live_store.refresh()
    second = live_store.refresh()
    assert first.records == second.records
    assert second.last_refreshed_at >= first.last_refreshed_at
    assert second is not first


def test_refresh_publishes_loading_then_result(live_store):
    seen = []
    live_store.subscribe(lambda snap, agg: seen.append((snap.loading, agg.total_clients)))
    live_store.refresh()
    assert seen == [(True, 0), (False, 3)]


def test_loading_toggle_keeps_timestamp_and_records(live_store):
    first = live_store.refresh()
    seen = []
    live_store.subscribe(lambda snap, agg: seen.append(snap))
    live_store.refresh()
    loading = seen[0]
    assert loading.loading is True
    assert loading.records == first.records
    assert loading.last_refreshed_at == first.last_refreshed_at


def test_refresh_switches_source_when_sheet_goes_down():
    fetcher = make_fetcher(primary=FakeResponse(200, SAMPLE_CSV))
    store = DataStore(fetcher=fetcher)
    assert store.refresh().is_live

    fetcher.session.routes[fetcher.source_url] = FakeResponse(500, "")
    snapshot = store.refresh()
    assert snapshot.source == SnapshotSource.FALLBACK
    assert store.aggregate.total_clients == 5


# ---------------------------------------------------------------------------
# External updates
# ---------------------------------------------------------------------------

def test_external_update_replaces_records(live_store):
    live_store.refresh()
    before = live_store.snapshot.last_refreshed_at
    snapshot = live_store.apply_external_update([
        {"Client Name": "Chat Co", "Total Items": 3, "Total Prices": "$900", "Status": "Pending", "Email": "c@x.com"},
    ])
    assert snapshot is live_store.snapshot
    assert snapshot.source == SnapshotSource.EXTERNAL
    assert not snapshot.is_live
    assert snapshot.last_refreshed_at >= before
    assert snapshot.records == (
        ClientRecord(name="Chat Co", item_count=3, total_value="$900", status="Pending", email="c@x.com"),
    )
    assert live_store.aggregate.total_revenue == pytest.approx(900)


@pytest.mark.parametrize("payload", [
    {"foo": 1},
    "not a list",
    None,
    42,
    [1, 2],
    [{"foo": 1}],
    [{"Client Name": "ok"}, "junk"],
    [{"Client Name": {"nested": True}}],
    [{"Status": True}],
])
def test_external_update_rejects_bad_payloads(live_store, payload):
    live_store.refresh()
    before = live_store.snapshot
    assert live_store.apply_external_update(payload) is None
    assert live_store.snapshot is before


def test_external_update_accepts_empty_list(live_store):
    live_store.refresh()
    snapshot = live_store.apply_external_update([])
    assert snapshot.records == ()
    assert live_store.aggregate.total_clients == 0


def test_external_update_accepts_attribute_keys_and_nulls(live_store):
    snapshot = live_store.apply_external_update([{"name": "A", "total_value": None, "status": "active"}])
    assert snapshot.records == (ClientRecord(name="A", status="active"),)


def test_last_writer_wins(live_store):
    live_store.apply_external_update([{"Client Name": "Chat"}])
    snapshot = live_store.refresh()
    assert live_store.snapshot is snapshot
    assert snapshot.source == SnapshotSource.PRIMARY

    live_store.apply_external_update([{"Client Name": "Chat again"}])
    assert [r.name for r in live_store.snapshot.records] == ["Chat again"]


@pytest.mark.parametrize("payload, expected", [
    ([], True),
    (({"Email": "x"},), True),
    ([{"Total Items": 4.5}], True),
    ({"Client Name": "A"}, False),
    ([["Client Name", "A"]], False),
])
def test_is_record_sequence(payload, expected):
    assert is_record_sequence(payload) is expected


# ---------------------------------------------------------------------------
# Subscribers & notices
# ---------------------------------------------------------------------------

def test_failing_subscriber_does_not_break_others(live_store):
    seen = []

    def broken(snap, agg):
        raise RuntimeError("boom")

    live_store.subscribe(broken)
    live_store.subscribe(lambda snap, agg: seen.append(snap.source))
    live_store.refresh()
    assert seen[-1] == SnapshotSource.PRIMARY
    assert live_store.snapshot.record_count == 3


def test_unsubscribe(live_store):
    seen = []
    callback = lambda snap, agg: seen.append(snap)  # noqa: E731
    live_store.subscribe(callback)
    live_store.unsubscribe(callback)
    live_store.unsubscribe(callback)
    live_store.refresh()
    assert seen == []


def test_records_frame(live_store):
    live_store.refresh()
    df = live_store.records_frame()
    assert df["revenue"].tolist() == [100.5, 2000.0, 50.0]
    assert df["canonical_status"].tolist() == ["active", "pending", "active"]


@pytest.mark.parametrize("source, title, variant", [
    (SnapshotSource.PRIMARY, "DATA SYNC COMPLETE", "default"),
    (SnapshotSource.PROXY, "DATA SYNC COMPLETE", "default"),
    (SnapshotSource.FALLBACK, "CONNECTION ISSUE", "destructive"),
    (SnapshotSource.EXTERNAL, "DATA UPDATED", "default"),
    (SnapshotSource.STARTUP, "LOADING", "default"),
])
def test_notice_for(source, title, variant):
    snapshot = DataSnapshot(records=(ClientRecord(),) * 2, last_refreshed_at=dt.datetime(2025, 1, 1), source=source)
    notice = notice_for(snapshot)
    assert notice["title"] == title
    assert notice["variant"] == variant


def test_live_notice_counts_records():
    snapshot = DataSnapshot(records=(ClientRecord(),) * 4, source=SnapshotSource.PRIMARY)
    assert notice_for(snapshot)["description"] == "Successfully loaded 4 client records from Google Sheets"


# ---------------------------------------------------------------------------
# Oversized item counts and interrupted refreshes
# ---------------------------------------------------------------------------

def test_external_update_with_huge_item_count(live_store):
    snapshot = live_store.apply_external_update([{"Client Name": "X", "Total Items": 10 ** 20}])
    assert snapshot is live_store.snapshot
    assert live_store.aggregate.chart_series[0].item_count == 2 ** 63 - 1


def test_refresh_with_huge_item_count_in_sheet():
    csv = "Client Name,Total Items,Total Prices,Status,Email\nAcme,99999999999999999999,$5,Active,a@x.com\n"
    store = DataStore(fetcher=make_fetcher(primary=FakeResponse(200, csv)))
    snapshot = store.refresh()
    assert snapshot.is_live
    assert snapshot.loading is False
    assert store.aggregate.chart_series[0].item_count == 2 ** 63 - 1


def test_refresh_clears_loading_when_it_raises(live_store, monkeypatch):
    live_store.refresh()

    def explode():
        raise RuntimeError("unexpected")

    monkeypatch.setattr(live_store.fetcher, "fetch", explode)
    with pytest.raises(RuntimeError):
        live_store.refresh()
    assert live_store.snapshot.loading is False
    assert live_store.snapshot.record_count == 3


def test_external_update_accepts_any_mapping(live_store):
    from types import MappingProxyType

    snapshot = live_store.apply_external_update([MappingProxyType({"Client Name": "Frozen", "Status": "Active"})])
    assert snapshot.records == (ClientRecord(name="Frozen", status="Active"),)
