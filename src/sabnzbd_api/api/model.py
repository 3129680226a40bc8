from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, StrEnum
from typing import Any, Dict, List, Optional

from ..exceptions import ProtocolError
from .interpreter import require_field, require_object


class SortOptions(StrEnum):
    AVERAGE_AGE = "avg_age"
    NAME = "name"
    SIZE = "size"


class CompleteAction(StrEnum):
    HIBERNATE_PC = "hibernate_pc"
    STANDBY_PC = "standby_pc"
    SHUTDOWN_PROGRAM = "shutdown_program"


class Priority(Enum):
    DEFAULT = -100
    STOP = -4
    DUPLICATE = -3
    PAUSED = -2
    LOW = -1
    NORMAL = 0
    HIGH = 1
    FORCE = 2


class PostProcessing(Enum):
    DEFAULT = -1
    NONE = 0
    REPAIR = 1
    REPAIR_UNPACK = 2
    REPAIR_UNPACK_DELETE = 3


class ErrorType(StrEnum):
    WARNING = "WARNING"
    ERROR = "ERROR"


def _from_timestamp(ts: Optional[Any], name: str) -> Optional[datetime]:
    if ts is None or ts == "":
        return None
    try:
        return datetime.fromtimestamp(int(ts), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise ProtocolError(
            f"Invalid response from SABnzbd: '{name}' is not a unix timestamp: {ts!r}",
            field=name,
        ) from e


@dataclass
class Results:
    """Generic acknowledgement returned by most mutating calls."""

    status: Optional[bool] = None
    error: Optional[str] = None
    priority: Optional[int] = None
    position: Optional[int] = None
    nzo_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Any) -> "Results":
        d = require_object(d)
        # mode=switch nests its answer under "result"
        if isinstance(d.get("result"), dict):
            d = {**d, **d["result"]}
        return cls(
            status=d.get("status"),
            error=d.get("error"),
            priority=d.get("priority"),
            position=d.get("position"),
            nzo_ids=list(d.get("nzo_ids") or []),
        )

    @property
    def ok(self) -> bool:
        return self.status is not False and not self.error


@dataclass
class QueueSlot:
    nzo_id: str
    filename: str = ""
    status: Optional[str] = None
    index: Optional[int] = None
    password: Optional[str] = None
    avg_age: Optional[str] = None
    script: Optional[str] = None
    has_rating: Optional[bool] = None
    mb: Optional[str] = None
    mbleft: Optional[str] = None
    mbmissing: Optional[str] = None
    size: Optional[str] = None
    sizeleft: Optional[str] = None
    labels: List[str] = field(default_factory=list)
    priority: Optional[str] = None
    cat: Optional[str] = None
    eta: Optional[str] = None
    timeleft: Optional[str] = None
    percentage: Optional[str] = None
    unpackopts: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "QueueSlot":
        return cls(
            nzo_id=require_field(d, "nzo_id", str),
            filename=d.get("filename", ""),
            status=d.get("status"),
            index=d.get("index"),
            password=d.get("password"),
            avg_age=d.get("avg_age"),
            script=d.get("script"),
            has_rating=d.get("has_rating"),
            mb=d.get("mb"),
            mbleft=d.get("mbleft"),
            mbmissing=d.get("mbmissing"),
            size=d.get("size"),
            sizeleft=d.get("sizeleft"),
            labels=[label for label in d.get("labels") or [] if label],
            priority=d.get("priority"),
            cat=d.get("cat"),
            eta=d.get("eta"),
            timeleft=d.get("timeleft"),
            percentage=d.get("percentage"),
            unpackopts=d.get("unpackopts"),
        )


@dataclass
class Queue:
    status: Optional[str] = None
    paused: Optional[bool] = None
    paused_all: Optional[bool] = None
    speedlimit: Optional[str] = None
    speedlimit_abs: Optional[str] = None
    noofslots: Optional[int] = None
    noofslots_total: Optional[int] = None
    limit: Optional[int] = None
    start: Optional[int] = None
    eta: Optional[str] = None
    timeleft: Optional[str] = None
    speed: Optional[str] = None
    kbpersec: Optional[str] = None
    size: Optional[str] = None
    sizeleft: Optional[str] = None
    mb: Optional[str] = None
    mbleft: Optional[str] = None
    diskspace1: Optional[str] = None
    diskspace2: Optional[str] = None
    diskspacetotal1: Optional[str] = None
    diskspacetotal2: Optional[str] = None
    have_warnings: Optional[str] = None
    pause_int: Optional[str] = None
    left_quota: Optional[str] = None
    quota: Optional[str] = None
    have_quota: Optional[bool] = None
    finish: Optional[int] = None
    finishaction: Optional[str] = None
    cache_art: Optional[str] = None
    cache_size: Optional[str] = None
    version: Optional[str] = None
    slots: List[QueueSlot] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Queue":
        d = require_object(d)
        slots = d.get("slots") or []
        if not isinstance(slots, list):
            raise ProtocolError(
                "Invalid response from SABnzbd: queue 'slots' is not a list",
                field="slots",
            )
        return cls(
            status=d.get("status"),
            paused=d.get("paused"),
            paused_all=d.get("paused_all"),
            speedlimit=d.get("speedlimit"),
            speedlimit_abs=d.get("speedlimit_abs"),
            noofslots=d.get("noofslots"),
            noofslots_total=d.get("noofslots_total"),
            limit=d.get("limit"),
            start=d.get("start"),
            eta=d.get("eta"),
            timeleft=d.get("timeleft"),
            speed=d.get("speed"),
            kbpersec=d.get("kbpersec"),
            size=d.get("size"),
            sizeleft=d.get("sizeleft"),
            mb=d.get("mb"),
            mbleft=d.get("mbleft"),
            diskspace1=d.get("diskspace1"),
            diskspace2=d.get("diskspace2"),
            diskspacetotal1=d.get("diskspacetotal1"),
            diskspacetotal2=d.get("diskspacetotal2"),
            have_warnings=d.get("have_warnings"),
            pause_int=d.get("pause_int"),
            left_quota=d.get("left_quota"),
            quota=d.get("quota"),
            have_quota=d.get("have_quota"),
            finish=d.get("finish"),
            finishaction=d.get("finishaction"),
            cache_art=d.get("cache_art"),
            cache_size=d.get("cache_size"),
            version=d.get("version"),
            slots=[QueueSlot.from_dict(s) for s in slots],
        )


@dataclass
class HistoryStageLog:
    name: str
    actions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Any) -> "HistoryStageLog":
        d = require_object(d)
        return cls(name=d.get("name", ""), actions=list(d.get("actions") or []))


@dataclass
class HistorySlot:
    nzo_id: str
    name: str = ""
    nzb_name: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None
    pp: Optional[str] = None
    script: Optional[str] = None
    size: Optional[str] = None
    bytes: Optional[int] = None
    storage: Optional[str] = None
    path: Optional[str] = None
    url: Optional[str] = None
    url_info: Optional[str] = None
    password: Optional[str] = None
    fail_message: Optional[str] = None
    action_line: Optional[str] = None
    script_line: Optional[str] = None
    script_log: Optional[str] = None
    report: Optional[str] = None
    md5sum: Optional[str] = None
    series: Optional[str] = None
    loaded: Optional[bool] = None
    retry: Optional[int] = None
    download_time: Optional[int] = None
    postproc_time: Optional[int] = None
    downloaded: Optional[int] = None
    completed: Optional[datetime] = None
    stage_log: List[HistoryStageLog] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HistorySlot":
        return cls(
            nzo_id=require_field(d, "nzo_id", str),
            name=d.get("name", ""),
            nzb_name=d.get("nzb_name"),
            status=d.get("status"),
            category=d.get("category"),
            pp=d.get("pp"),
            script=d.get("script"),
            size=d.get("size"),
            bytes=d.get("bytes"),
            storage=d.get("storage"),
            path=d.get("path"),
            url=d.get("url"),
            url_info=d.get("url_info"),
            password=d.get("password"),
            fail_message=d.get("fail_message"),
            action_line=d.get("action_line"),
            script_line=d.get("script_line"),
            script_log=d.get("script_log"),
            report=d.get("report"),
            md5sum=d.get("md5sum"),
            series=d.get("series"),
            loaded=d.get("loaded"),
            retry=d.get("retry"),
            download_time=d.get("download_time"),
            postproc_time=d.get("postproc_time"),
            downloaded=d.get("downloaded"),
            completed=_from_timestamp(d.get("completed"), "completed"),
            stage_log=[HistoryStageLog.from_dict(s) for s in d.get("stage_log") or []],
        )

    @property
    def failed(self) -> bool:
        return self.status == "Failed"


@dataclass
class History:
    noofslots: Optional[int] = None
    day_size: Optional[str] = None
    week_size: Optional[str] = None
    month_size: Optional[str] = None
    total_size: Optional[str] = None
    last_history_update: Optional[int] = None
    slots: List[HistorySlot] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "History":
        d = require_object(d)
        slots = d.get("slots") or []
        if not isinstance(slots, list):
            raise ProtocolError(
                "Invalid response from SABnzbd: history 'slots' is not a list",
                field="slots",
            )
        return cls(
            noofslots=d.get("noofslots"),
            day_size=d.get("day_size"),
            week_size=d.get("week_size"),
            month_size=d.get("month_size"),
            total_size=d.get("total_size"),
            last_history_update=d.get("last_history_update"),
            slots=[HistorySlot.from_dict(s) for s in slots],
        )


@dataclass
class File:
    filename: str
    nzf_id: Optional[str] = None
    status: Optional[str] = None
    mb: Optional[str] = None
    mbleft: Optional[str] = None
    age: Optional[str] = None
    bytes: Optional[str] = None
    set: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "File":
        return cls(
            filename=require_field(d, "filename", str),
            nzf_id=d.get("nzf_id"),
            status=d.get("status"),
            mb=d.get("mb"),
            mbleft=d.get("mbleft"),
            age=d.get("age"),
            bytes=d.get("bytes"),
            set=d.get("set"),
        )


@dataclass
class ErrorWarning:
    text: str
    type: ErrorType
    time: int

    @classmethod
    def from_dict(cls, d: Any) -> "ErrorWarning":
        raw_type = require_field(d, "type", str)
        try:
            error_type = ErrorType(raw_type)
        except ValueError:
            raise ProtocolError(
                f"Invalid response from SABnzbd: unknown warning type '{raw_type}'",
                field="type",
            ) from None
        return cls(
            text=require_field(d, "text", str),
            type=error_type,
            time=require_field(d, "time", int),
        )

    @property
    def timestamp(self) -> Optional[datetime]:
        return _from_timestamp(self.time, "time")


# ---------------------------------------------------------------------------
# Server statistics
# ---------------------------------------------------------------------------


def _date_lookup(source: Any, name: str) -> Dict[str, int]:
    if not isinstance(source, dict):
        raise ProtocolError(
            f"Invalid response from SABnzbd: '{name}' is not an object", field=name
        )
    lookup: Dict[str, int] = {}
    for date, value in source.items():
        lookup[date] = value
    return lookup


@dataclass
class ServerStats:
    day: int
    week: int
    month: int
    total: int
    daily: Dict[str, int] = field(default_factory=dict)
    articles_tried: Dict[str, int] = field(default_factory=dict)
    articles_success: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Any) -> "ServerStats":
        tried = _date_lookup(d.get("articles_tried") or {}, "articles_tried")
        success_dates = _date_lookup(d.get("articles_success") or {}, "articles_success")

        # Values are read from articles_tried on purpose; this matches the
        # reference client byte for byte. See DESIGN.md before changing it.
        success = {date: tried.get(date) for date in success_dates}

        return cls(
            day=require_field(d, "day", (int, float)),
            week=require_field(d, "week", (int, float)),
            month=require_field(d, "month", (int, float)),
            total=require_field(d, "total", (int, float)),
            daily=_date_lookup(require_field(d, "daily"), "daily"),
            articles_tried=tried,
            articles_success=success,
        )


@dataclass
class Stats:
    day: int
    week: int
    month: int
    total: int
    servers: Dict[str, ServerStats] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Any) -> "Stats":
        servers = require_field(d, "servers", dict)
        return cls(
            day=require_field(d, "day", (int, float)),
            week=require_field(d, "week", (int, float)),
            month=require_field(d, "month", (int, float)),
            total=require_field(d, "total", (int, float)),
            servers={
                name: ServerStats.from_dict(require_object(server))
                for name, server in servers.items()
            },
        )
