"""
Live queue panels.

A projector follows every visit in one status (pending, waiting, serving,
completed) and republishes the panel whenever the set changes and on a
fixed tick, so elapsed minutes keep counting up between changes.
"""

import asyncio
import logging
import math
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..analytics import UNKNOWN_SERVICE
from ..config import get_settings
from ..models.base import NAME_FIELDS
from ..models.queue import LivePanel, LiveVisit, VisitStatus

settings = get_settings()
logger = logging.getLogger(__name__)

# Timestamp each status counts elapsed time from
ANCHOR_FIELDS = {
    VisitStatus.PENDING: "joinedOn",
    VisitStatus.WAITING: "joinedOn",
    VisitStatus.SERVING: "startServingTime",
    VisitStatus.COMPLETED: "completedOn",
}

# Visit field -> collection it references
REFERENCE_FIELDS = {
    "service": "services",
    "desk": "desks",
    "teller": "tellers",
}

UNKNOWN_NAMES = {
    "services": UNKNOWN_SERVICE,
    "desks": "Unknown Desk",
    "tellers": "Unknown Teller",
}

Listener = Callable[[LivePanel], None]


def elapsed_minutes(anchor: Optional[datetime], now: datetime) -> int:
    """Whole minutes from ``anchor`` to ``now``; 0 without an anchor."""
    if anchor is None:
        return 0
    return math.floor((now - anchor).total_seconds() / 60)


class NameResolver:
    """
    Display names for the desks, services and tellers visits point at.

    Names are looked up once per id, in one batch per collection, and kept
    for the resolver's lifetime. Ids that no longer exist resolve to an
    "Unknown ..." label.
    """

    def __init__(self, store):
        self.store = store
        self._names: Dict[str, Dict[str, str]] = {collection: {} for collection in UNKNOWN_NAMES}

    async def resolve(self, visits: Iterable[dict]) -> None:
        visits = list(visits)
        for field, collection in REFERENCE_FIELDS.items():
            cache = self._names[collection]
            missing = {visit.get(field) for visit in visits if visit.get(field)} - set(cache)
            if not missing:
                continue

            docs = await self.store.get_many(collection, missing)
            for doc_id in missing:
                doc = docs.get(doc_id)
                cache[doc_id] = (doc or {}).get(NAME_FIELDS[collection]) or UNKNOWN_NAMES[collection]

    def name(self, collection: str, doc_id: Optional[str]) -> str:
        return self._names[collection].get(doc_id, UNKNOWN_NAMES[collection])


class LiveStatusProjector:
    """Follows the visits in one status and publishes them as a panel."""

    def __init__(
        self,
        store,
        status: VisitStatus,
        tick_seconds: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
        desk: Optional[str] = None,
        service: Optional[str] = None,
        resolver: Optional[NameResolver] = None
    ):
        self.store = store
        self.status = VisitStatus(status)
        self.tick_seconds = settings.LIVE_TICK_SECONDS if tick_seconds is None else tick_seconds
        self.clock = clock or store.now
        self.desk = desk
        self.service = service
        self.resolver = resolver or NameResolver(store)
        self.latest: Optional[LivePanel] = None

        self._visits: List[dict] = []
        self._listeners: List[Listener] = []
        self._tasks: List[asyncio.Task] = []

    @property
    def anchor_field(self) -> str:
        return ANCHOR_FIELDS[self.status]

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def project(self, now: Optional[datetime] = None) -> LivePanel:
        """Build the panel from the latest snapshot."""
        now = now or self.clock()
        rows = []
        for visit in self._visits:
            if self.desk and visit.get("desk") != self.desk:
                continue
            if self.service and visit.get("service") != self.service:
                continue
            try:
                rows.append(LiveVisit(
                    **visit,
                    service_name=self.resolver.name("services", visit.get("service")),
                    desk_name=self.resolver.name("desks", visit.get("desk")),
                    teller_name=self.resolver.name("tellers", visit.get("teller")),
                    elapsed_minutes=elapsed_minutes(visit.get(self.anchor_field), now)
                ))
            except ValidationError as e:
                logger.warning("Skipping malformed visit %s: %s", visit.get("_id"), e)
        return LivePanel(status=self.status, generated_at=now, count=len(rows), visits=rows)

    def publish(self) -> LivePanel:
        panel = self.project()
        self.latest = panel
        for listener in list(self._listeners):
            try:
                listener(panel)
            except Exception:
                logger.exception("Live listener for %s visits failed", self.status.value)
        return panel

    async def apply_snapshot(self, visits: Iterable[dict]) -> LivePanel:
        """Replace the followed set with a new snapshot and publish it."""
        visits = list(visits)
        try:
            await self.resolver.resolve(visits)
        except Exception:
            logger.exception("Could not resolve names for %s visits", self.status.value)
        # Swap the whole set in one step; a tick only ever sees a complete snapshot
        self._visits = visits
        return self.publish()

    async def refresh(self) -> LivePanel:
        """Read the current set once, without following it."""
        visits = await self.store.find(
            "queues",
            {"status": self.status.value},
            sort=[(self.anchor_field, 1)]
        )
        return await self.apply_snapshot(visits)

    async def _follow(self):
        try:
            async for snapshot in self.store.watch(
                "queues",
                {"status": self.status.value},
                sort=[(self.anchor_field, 1)]
            ):
                await self.apply_snapshot(snapshot)
        except Exception:
            logger.exception("Live subscription for %s visits stopped", self.status.value)

    async def _tick(self):
        while True:
            await asyncio.sleep(self.tick_seconds)
            try:
                self.publish()
            except Exception:
                logger.exception("Tick for %s visits failed", self.status.value)

    async def start(self):
        if self._tasks:
            return
        logger.info("Following %s visits (tick %ss)", self.status.value, self.tick_seconds)
        self._tasks = [
            asyncio.create_task(self._follow()),
            asyncio.create_task(self._tick()),
        ]

    async def stop(self):
        """Cancel the subscription and the tick, and drop all listeners."""
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._listeners.clear()
        if tasks:
            logger.info("Stopped following %s visits", self.status.value)
