import asyncio
import io
from datetime import date, timedelta

import pytest
from PIL import Image

from queueadmin.exceptions import InvalidCredentialsError
from queueadmin.models.log import LogLevel
from queueadmin.models.user import ProfileUpdate
from queueadmin.services.activity_service import ActivityService
from queueadmin.services.auth_service import AuthService
from queueadmin.services.log_service import AuditLogService
from queueadmin.services.profile_service import ProfileService
from queueadmin.services.storage_service import StorageService
from queueadmin.services.visit_service import VisitService


def png_bytes(size=(800, 600)):
    buffer = io.BytesIO()
    Image.new("RGBA", size, (200, 30, 30, 255)).save(buffer, "PNG")
    return buffer.getvalue()


def test_audit_log_lists_one_day_newest_first(store):
    audit = AuditLogService(store)
    asyncio.run(audit.record("First"))
    store.current_time += timedelta(minutes=5)
    asyncio.run(audit.record("Second", "admin@example.com", LogLevel.WARNING))
    store.seed("logs", timestamp=store.now() - timedelta(days=1), level="INFO", message="Yesterday", email="x")

    entries = asyncio.run(audit.list_for_day(date(2024, 3, 6)))

    assert [entry.message for entry in entries] == ["Second", "First"]
    assert entries[1].email == "Unknown user"
    assert entries[0].level == LogLevel.WARNING


def test_audit_log_rejects_unknown_sort_field(store):
    with pytest.raises(ValueError):
        asyncio.run(AuditLogService(store).list_for_day(date(2024, 3, 6), sort="password"))


def test_visit_table_is_limited_and_named(store):
    amina = store.seed("tellers", name="Amina")
    for minute in range(5):
        store.seed("queues", status="completed", teller=amina,
                   joinedOn=store.now() - timedelta(minutes=minute))

    rows = asyncio.run(VisitService(store).table_for_day(date(2024, 3, 6), limit=3))

    assert len(rows) == 3
    assert rows[0].joined_on == store.now()
    assert rows[0].teller_name == "Amina"


def test_today_overview(store):
    passport = store.seed("services", service="Passport", status=True)
    desk = store.seed("desks", name="Desk 1")
    store.seed("desks", name="Desk 2")
    amina = store.seed("tellers", name="Amina")
    now = store.now()
    store.seed("queues", status="completed", service=passport, teller=amina,
               joinedOn=now - timedelta(hours=2), completedOn=now - timedelta(hours=1))
    store.seed("queues", status="completed", service=passport, teller=amina,
               joinedOn=now - timedelta(days=1), completedOn=now - timedelta(days=1))
    store.seed("queues", status="serving", service=passport, teller=amina, desk=desk,
               joinedOn=now - timedelta(minutes=30), startServingTime=now - timedelta(minutes=5))
    store.seed("queues", status="waiting", service=passport, joinedOn=now)

    overview = asyncio.run(VisitService(store).today_overview())

    assert overview.served_today == 1
    assert overview.total_sign_ins == 3
    assert overview.service_counts == {"Passport": 1}
    assert [visit.teller_name for visit in overview.busy_tellers] == ["Amina"]
    assert overview.busy_tellers[0].elapsed_minutes == 5
    assert overview.total_desks == 2
    assert overview.desks_available == 1


def test_overview_skips_visits_missing_their_join_time(store):
    now = store.now()
    store.seed("queues", status="completed", completedOn=now - timedelta(minutes=10))
    store.seed("queues", status="completed", joinedOn=now - timedelta(hours=1), completedOn=now)
    store.seed("queues", status="serving", startServingTime=now)

    overview = asyncio.run(VisitService(store).today_overview())

    assert [row.completed_on for row in overview.served] == [now]
    assert overview.busy_tellers == []


def test_activity_feed_counts_positive_and_negative(store):
    for hour, kind in enumerate(["positive", "negative", "positive"]):
        store.seed("reviews", time=store.now() - timedelta(hours=hour), type=kind, comment=f"c{hour}")

    feed = asyncio.run(ActivityService(store).recent())

    assert feed.total == 3
    assert feed.positive == 2
    assert feed.negative == 1
    assert feed.reviews[0].comment == "c0"


def test_login_change_password_and_logout(store):
    auth = AuthService(store)
    admin = asyncio.run(auth.create_admin("Admin@Example.com", "secret1", "Admin"))

    token = asyncio.run(auth.login("admin@example.com", "secret1"))
    assert token.admin.id == admin.id
    assert asyncio.run(auth.get_current_admin(token.access_token)).email == "admin@example.com"

    with pytest.raises(InvalidCredentialsError):
        asyncio.run(auth.change_password(admin, "wrong", "secret2"))
    asyncio.run(auth.change_password(admin, "secret1", "secret2"))
    asyncio.run(auth.logout(admin))

    assert asyncio.run(auth.login("admin@example.com", "secret1")) is None
    assert asyncio.run(auth.login("admin@example.com", "secret2")) is not None
    messages = [entry["message"] for entry in store.collections["logs"]]
    assert messages == ["User logged in", "Password changed", "User logged out", "User logged in"]


def test_invalid_token_gives_no_admin(store):
    assert asyncio.run(AuthService(store).get_current_admin("not-a-token")) is None


def test_storage_shrinks_and_converts_images(tmp_path):
    storage = StorageService(upload_dir=str(tmp_path), url_prefix="/uploads")

    url = storage.save_image(png_bytes(), "photo.png", folder="teller-images", name="abc")

    assert url.startswith("/uploads/teller-images/abc.jpg?v=")
    with Image.open(tmp_path / "teller-images" / "abc.jpg") as saved:
        assert saved.format == "JPEG"
        assert max(saved.size) <= 512


@pytest.mark.parametrize("content, filename", [
    (b"not an image", "photo.png"),
    (b"irrelevant", "notes.txt"),
])
def test_storage_rejects_bad_uploads(tmp_path, content, filename):
    with pytest.raises(ValueError):
        StorageService(upload_dir=str(tmp_path)).save_image(content, filename, folder="x", name="y")


def test_profile_update_and_avatar(store, admin, tmp_path):
    profiles = ProfileService(store, StorageService(upload_dir=str(tmp_path), url_prefix="/uploads"))

    updated = asyncio.run(profiles.update(admin["_id"], ProfileUpdate(phone="+254700000000")))
    with_avatar = asyncio.run(profiles.set_avatar(admin["_id"], png_bytes((64, 64)), "me.png"))

    assert updated.phone == "+254700000000"
    assert updated.name == "Admin"
    assert with_avatar.image.startswith("/uploads/admin_avatars/")
