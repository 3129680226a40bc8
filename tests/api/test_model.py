"""Tests for API record models and the server statistics projection."""

import random

import pytest

from sabnzbd_api.api.model import (
    ErrorType,
    ErrorWarning,
    File,
    History,
    Priority,
    Queue,
    Results,
    ServerStats,
    Stats,
)
from sabnzbd_api.exceptions import ProtocolError

DATES = ["2024-03-01", "2024-03-02", "2024-03-03"]


def _server(seed: int) -> dict:
    return {
        "day": seed,
        "week": seed * 7,
        "month": seed * 30,
        "total": seed * 365,
        "daily": {d: seed + i for i, d in enumerate(DATES)},
        "articles_tried": {d: (seed + i) * 100 for i, d in enumerate(DATES)},
        "articles_success": {d: (seed + i) * 90 for i, d in enumerate(DATES)},
    }


def _stats_document() -> dict:
    return {
        "day": 3,
        "week": 21,
        "month": 90,
        "total": 1095,
        "servers": {"news.one.example": _server(1), "news.two.example": _server(2)},
    }


# ---------------------------------------------------------------------------
# Stats projection
# ---------------------------------------------------------------------------


class TestStatsFromDict:
    def test_totals(self):
        stats = Stats.from_dict(_stats_document())
        assert (stats.day, stats.week, stats.month, stats.total) == (3, 21, 90, 1095)

    def test_servers_keyed_by_name(self):
        stats = Stats.from_dict(_stats_document())
        assert set(stats.servers) == {"news.one.example", "news.two.example"}
        assert stats.servers["news.two.example"].week == 14

    def test_each_lookup_has_every_date_once(self):
        stats = Stats.from_dict(_stats_document())
        for server in stats.servers.values():
            assert sorted(server.daily) == DATES
            assert sorted(server.articles_tried) == DATES
            assert sorted(server.articles_success) == DATES

    def test_source_key_order_does_not_matter(self):
        doc = _stats_document()
        shuffled = _stats_document()
        for server in shuffled["servers"].values():
            for key in ("daily", "articles_tried", "articles_success"):
                items = list(server[key].items())
                random.Random(7).shuffle(items)
                server[key] = dict(reversed(items))

        assert Stats.from_dict(doc) == Stats.from_dict(shuffled)

    def test_daily_values(self):
        server = Stats.from_dict(_stats_document()).servers["news.one.example"]
        assert server.daily == {"2024-03-01": 1, "2024-03-02": 2, "2024-03-03": 3}

    def test_articles_success_mirrors_tried_counts(self):
        """articles_success takes its dates from articles_success and its counts from articles_tried."""
        server = Stats.from_dict(_stats_document()).servers["news.one.example"]
        assert server.articles_success == server.articles_tried
        assert server.articles_success["2024-03-01"] == 100

    def test_articles_missing_on_old_servers(self):
        doc = _server(1)
        del doc["articles_tried"]
        del doc["articles_success"]
        server = ServerStats.from_dict(doc)
        assert server.articles_tried == {}
        assert server.articles_success == {}

    def test_no_servers(self):
        doc = _stats_document()
        doc["servers"] = {}
        assert Stats.from_dict(doc).servers == {}

    @pytest.mark.parametrize("missing", ["day", "week", "month", "total", "servers"])
    def test_missing_top_level_field(self, missing):
        doc = _stats_document()
        del doc[missing]
        with pytest.raises(ProtocolError):
            Stats.from_dict(doc)

    def test_missing_server_daily(self):
        doc = _stats_document()
        del doc["servers"]["news.one.example"]["daily"]
        with pytest.raises(ProtocolError):
            Stats.from_dict(doc)

    def test_daily_not_an_object(self):
        doc = _stats_document()
        doc["servers"]["news.one.example"]["daily"] = [1, 2, 3]
        with pytest.raises(ProtocolError):
            Stats.from_dict(doc)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class TestResults:
    def test_nzo_ids(self):
        r = Results.from_dict({"status": True, "nzo_ids": ["SABnzbd_nzo_1"]})
        assert r.status is True
        assert r.nzo_ids == ["SABnzbd_nzo_1"]
        assert r.ok is True

    def test_error(self):
        r = Results.from_dict({"status": False, "error": "API Key Incorrect"})
        assert r.ok is False
        assert r.error == "API Key Incorrect"

    def test_position_only(self):
        r = Results.from_dict({"position": 3})
        assert r.position == 3
        assert r.nzo_ids == []

    def test_nested_switch_result(self):
        r = Results.from_dict({"result": {"position": 3, "priority": 1}})
        assert r.position == 3
        assert r.priority == 1

    def test_not_an_object(self):
        with pytest.raises(ProtocolError):
            Results.from_dict([True])


class TestQueue:
    def test_slots(self):
        q = Queue.from_dict(
            {
                "status": "Downloading",
                "paused": False,
                "noofslots": 1,
                "slots": [
                    {
                        "nzo_id": "SABnzbd_nzo_abc",
                        "filename": "Some.Show.S01E01",
                        "priority": "Normal",
                        "labels": ["DUPLICATE", None],
                    }
                ],
            }
        )
        assert q.status == "Downloading"
        assert len(q.slots) == 1
        assert q.slots[0].nzo_id == "SABnzbd_nzo_abc"
        assert q.slots[0].labels == ["DUPLICATE"]

    def test_empty(self):
        q = Queue.from_dict({})
        assert q.slots == []

    def test_slot_without_nzo_id(self):
        with pytest.raises(ProtocolError):
            Queue.from_dict({"slots": [{"filename": "x"}]})

    def test_slots_not_a_list(self):
        with pytest.raises(ProtocolError):
            Queue.from_dict({"slots": "nope"})


class TestHistory:
    def test_slots(self):
        h = History.from_dict(
            {
                "noofslots": 1,
                "last_history_update": 42,
                "slots": [
                    {
                        "nzo_id": "SABnzbd_nzo_done",
                        "name": "Movie",
                        "status": "Failed",
                        "completed": 1700000000,
                        "stage_log": [{"name": "Repair", "actions": ["ok"]}],
                    }
                ],
            }
        )
        slot = h.slots[0]
        assert h.last_history_update == 42
        assert slot.failed is True
        assert slot.completed is not None
        assert slot.completed.year == 2023
        assert slot.stage_log[0].actions == ["ok"]

    def test_completed_missing(self):
        h = History.from_dict({"slots": [{"nzo_id": "x"}]})
        assert h.slots[0].completed is None

    def test_completed_not_a_timestamp(self):
        with pytest.raises(ProtocolError) as exc_info:
            History.from_dict({"slots": [{"nzo_id": "x", "completed": "garbage"}]})
        assert exc_info.value.field == "completed"

    def test_stage_log_entry_not_an_object(self):
        with pytest.raises(ProtocolError):
            History.from_dict({"slots": [{"nzo_id": "x", "stage_log": ["Repair"]}]})


class TestFile:
    def test_from_dict(self):
        f = File.from_dict({"filename": "a.rar", "nzf_id": "SABnzbd_nzf_1", "mb": "1.0"})
        assert f.filename == "a.rar"
        assert f.nzf_id == "SABnzbd_nzf_1"

    def test_missing_filename(self):
        with pytest.raises(ProtocolError):
            File.from_dict({"nzf_id": "x"})


class TestErrorWarning:
    def test_warning(self):
        w = ErrorWarning.from_dict({"text": "disk full", "type": "WARNING", "time": 1})
        assert w.type == ErrorType.WARNING
        assert w.timestamp is not None

    def test_error_type(self):
        w = ErrorWarning.from_dict({"text": "boom", "type": "ERROR", "time": 1})
        assert w.type == ErrorType.ERROR

    def test_unknown_type(self):
        with pytest.raises(ProtocolError):
            ErrorWarning.from_dict({"text": "x", "type": "INFO", "time": 1})

    @pytest.mark.parametrize("missing", ["text", "type", "time"])
    def test_missing_field(self, missing):
        record = {"text": "x", "type": "WARNING", "time": 1}
        del record[missing]
        with pytest.raises(ProtocolError):
            ErrorWarning.from_dict(record)

    def test_time_out_of_range(self):
        w = ErrorWarning.from_dict({"text": "x", "type": "WARNING", "time": 10**20})
        with pytest.raises(ProtocolError):
            w.timestamp

    def test_plain_string_record(self):
        with pytest.raises(ProtocolError):
            ErrorWarning.from_dict("old style warning")


class TestPriority:
    def test_values(self):
        assert Priority.DEFAULT.value == -100
        assert Priority.FORCE.value == 2

    def test_all_unique(self):
        values = [p.value for p in Priority]
        assert len(values) == len(set(values))
