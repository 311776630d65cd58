import asyncio
from datetime import timedelta

from queueadmin.analytics import UNKNOWN_SERVICE
from queueadmin.models.queue import VisitStatus
from queueadmin.services.live_service import LiveStatusProjector, NameResolver, elapsed_minutes


def test_elapsed_minutes_floors_to_whole_minutes(store):
    now = store.now()

    assert elapsed_minutes(now - timedelta(seconds=125), now) == 2
    assert elapsed_minutes(now - timedelta(seconds=59), now) == 0
    assert elapsed_minutes(None, now) == 0


def test_refresh_projects_visits_in_one_status(store):
    passport = store.seed("services", service="Passport", status=True)
    desk = store.seed("desks", name="Desk 1")
    teller = store.seed("tellers", name="Amina")
    now = store.now()
    store.seed("queues", status="serving", service=passport, desk=desk, teller=teller,
               joinedOn=now - timedelta(minutes=20), startServingTime=now - timedelta(seconds=125))
    store.seed("queues", status="waiting", service=passport, joinedOn=now)

    panel = asyncio.run(LiveStatusProjector(store, VisitStatus.SERVING).refresh())

    assert panel.count == 1
    row = panel.visits[0]
    assert row.service_name == "Passport"
    assert row.desk_name == "Desk 1"
    assert row.teller_name == "Amina"
    # Serving visits count from when service started, not when they joined
    assert row.elapsed_minutes == 2


def test_deleted_service_resolves_to_unknown(store):
    store.seed("queues", status="waiting", service="65f000000000000000000000", joinedOn=store.now())

    panel = asyncio.run(LiveStatusProjector(store, VisitStatus.WAITING).refresh())

    assert panel.visits[0].service_name == UNKNOWN_SERVICE
    assert panel.visits[0].teller_name == "Unknown Teller"


def test_names_are_fetched_in_one_batch_and_cached(store):
    services = [store.seed("services", service=f"Service {n}", status=True) for n in range(3)]
    visits = [{"service": service_id} for service_id in services * 2]
    resolver = NameResolver(store)

    async def resolve_twice():
        await resolver.resolve(visits)
        await resolver.resolve(visits)

    asyncio.run(resolve_twice())

    assert store.calls.count(("get_many", "services")) == 1
    assert resolver.name("services", services[1]) == "Service 1"


def test_desk_filter(store):
    desk = store.seed("desks", name="Desk 1")
    store.seed("queues", status="waiting", desk=desk, joinedOn=store.now())
    store.seed("queues", status="waiting", desk="other", joinedOn=store.now())

    panel = asyncio.run(LiveStatusProjector(store, VisitStatus.WAITING, desk=desk).refresh())

    assert panel.count == 1


def test_running_projector_follows_changes_and_ticks(store):
    received = []

    async def scenario():
        projector = LiveStatusProjector(store, VisitStatus.WAITING, tick_seconds=0.01)
        projector.subscribe(received.append)
        await projector.start()
        await asyncio.sleep(0.05)

        await store.insert("queues", {"status": "waiting", "joinedOn": store.now()})
        await asyncio.sleep(0.05)

        await projector.stop()
        assert not projector.running
        count = len(received)
        await asyncio.sleep(0.05)
        return count

    count_at_stop = asyncio.run(scenario())

    # Initial snapshot, several ticks, then the snapshot with the new visit
    assert len(received) > 3
    assert received[0].count == 0
    assert received[-1].count == 1
    # Nothing is published after stop
    assert len(received) == count_at_stop


def test_unsubscribe_stops_delivery(store):
    received = []
    projector = LiveStatusProjector(store, VisitStatus.PENDING)
    unsubscribe = projector.subscribe(received.append)

    projector.publish()
    unsubscribe()
    projector.publish()

    assert len(received) == 1


def test_visit_without_join_time_is_left_off_the_panel(store):
    store.seed("queues", status="waiting", joinedOn=store.now())
    store.seed("queues", status="waiting", queueCode="A-002")

    panel = asyncio.run(LiveStatusProjector(store, VisitStatus.WAITING).refresh())

    assert panel.count == 1
    assert panel.visits[0].queue_code is None


def test_running_projector_survives_bad_rows_and_failing_listeners(store):
    received = []

    def flaky(panel):
        if not received:
            received.append(None)
            raise RuntimeError("listener failed")
        received.append(panel)

    async def scenario():
        projector = LiveStatusProjector(store, VisitStatus.WAITING, tick_seconds=0.01)
        projector.subscribe(flaky)
        await projector.start()
        await store.insert("queues", {"status": "waiting"})
        await store.insert("queues", {"status": "waiting", "joinedOn": store.now()})
        await asyncio.sleep(0.05)
        running = projector.running
        await projector.stop()
        return running

    assert asyncio.run(scenario())
    panels = received[1:]
    assert len(panels) > 2
    assert panels[-1].count == 1
