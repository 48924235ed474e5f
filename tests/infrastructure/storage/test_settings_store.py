"""
🧪 test_settings_store.py — unit-тести для SettingsStore

Перевіряє:
- Матеріалізацію дефолтів при першому зверненні
- Валідацію курсів, пароля та пари (курс, час)
- Атомарність групових записів
- Сповіщення слухачів і відписку
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rate_converter.domain.currency.models import LiveRate, Settings
from rate_converter.infrastructure.storage.json_store import JsonFileStore
from rate_converter.infrastructure.storage.settings_store import SettingsStore
from rate_converter.shared.errors import ValidationError


@pytest.mark.asyncio
async def test_defaults_are_written_on_first_access(settings_store, json_store):
    settings = await settings_store.get_settings()

    assert settings == Settings.defaults()
    data = await json_store.get_all()
    assert data == Settings.defaults().to_mapping()


@pytest.mark.asyncio
async def test_existing_values_are_not_overwritten_by_defaults(store_path):
    store = JsonFileStore(store_path)
    await store.set_many({"offline_kgs_per_usd": 90.0, "use_live_kgs_rate": False})

    settings = await SettingsStore(store).get_settings()
    assert settings.offline_kgs_per_usd == 90.0
    assert settings.use_live_kgs_rate is False
    assert settings.offline_eur_per_usd == 0.92


@pytest.mark.asyncio
async def test_live_rate_is_empty_initially(settings_store):
    assert await settings_store.get_live_rate() == LiveRate.empty()


@pytest.mark.asyncio
async def test_save_offline_rates_accepts_strings_with_comma(settings_store):
    await settings_store.save_offline_rates("0,95", "92.5", 88)
    settings = await settings_store.get_settings()
    assert (settings.offline_eur_per_usd, settings.offline_rub_per_usd, settings.offline_kgs_per_usd) == (0.95, 92.5, 88.0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "eur,rub,kgs",
    [(0, 91.5, 87.5), (0.92, -1, 87.5), (0.92, 91.5, "abc"), (0.92, 91.5, "")],
)
async def test_invalid_offline_rate_rejects_whole_group(settings_store, eur, rub, kgs):
    before = await settings_store.get_settings()
    with pytest.raises(ValidationError):
        await settings_store.save_offline_rates(eur, rub, kgs)
    assert await settings_store.get_settings() == before


@pytest.mark.asyncio
async def test_save_admin_settings_writes_flag_and_rates(settings_store):
    await settings_store.save_admin_settings(False, 1.0, 100.0, 80.0)
    settings = await settings_store.get_settings()
    assert settings.use_live_kgs_rate is False
    assert settings.offline_kgs_per_usd == 80.0


@pytest.mark.asyncio
async def test_set_use_live_kgs_rate(settings_store):
    await settings_store.set_use_live_kgs_rate(False)
    assert (await settings_store.get_settings()).use_live_kgs_rate is False


@pytest.mark.asyncio
async def test_set_admin_password(settings_store):
    await settings_store.set_admin_password("s3cret")
    assert (await settings_store.get_settings()).admin_password == "s3cret"


@pytest.mark.asyncio
async def test_blank_admin_password_is_rejected(settings_store):
    with pytest.raises(ValidationError):
        await settings_store.set_admin_password("   ")
    assert (await settings_store.get_settings()).admin_password == "admin"


@pytest.mark.asyncio
async def test_save_live_rate_writes_pair(settings_store, json_store):
    await settings_store.save_live_rate(86.4, 1_700_000_000_000)
    assert await settings_store.get_live_rate() == LiveRate(86.4, 1_700_000_000_000)
    data = await json_store.get_all()
    assert data["live_usd_kgs_rate"] == 86.4
    assert data["live_usd_kgs_updated_at"] == 1_700_000_000_000


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "rate,ts",
    [(0, 1), (-5.0, 1), (float("nan"), 1), (85.0, "now"), (85.0, 1.5), (85.0, True)],
)
async def test_save_live_rate_rejects_invalid_pair(settings_store, rate, ts):
    with pytest.raises(ValidationError):
        await settings_store.save_live_rate(rate, ts)
    assert await settings_store.get_live_rate() == LiveRate.empty()


@pytest.mark.asyncio
async def test_listeners_receive_changed_keys(settings_store):
    seen = []
    settings_store.subscribe(seen.append)

    await settings_store.save_live_rate(85.0, 1)
    await settings_store.set_use_live_kgs_rate(True)

    assert seen[0] == frozenset({"live_usd_kgs_rate", "live_usd_kgs_updated_at"})
    assert seen[1] == frozenset({"use_live_kgs_rate"})


@pytest.mark.asyncio
async def test_unsubscribe_stops_notifications(settings_store):
    seen = []
    unsubscribe = settings_store.subscribe(seen.append)
    unsubscribe()
    unsubscribe()

    await settings_store.set_use_live_kgs_rate(False)
    assert seen == []


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_write(settings_store):
    seen = []

    def _broken(keys):
        raise RuntimeError("listener bug")

    settings_store.subscribe(_broken)
    settings_store.subscribe(seen.append)

    await settings_store.set_admin_password("new-pass")
    assert (await settings_store.get_settings()).admin_password == "new-pass"
    assert seen == [frozenset({"admin_password"})]


@pytest.mark.asyncio
async def test_rejected_write_does_not_notify(settings_store):
    seen = []
    settings_store.subscribe(seen.append)
    with pytest.raises(ValidationError):
        await settings_store.save_offline_rates(0, 0, 0)
    assert seen == []


@pytest.mark.asyncio
async def test_defaults_written_once_through_store_port():
    store = AsyncMock()
    store.get_all.return_value = {"admin_password": "x"}
    settings_store = SettingsStore(store)

    await settings_store.get_settings()
    await settings_store.get_settings()

    store.set_many.assert_awaited_once()
    written = store.set_many.await_args.args[0]
    assert set(written) == {
        "use_live_kgs_rate",
        "offline_eur_per_usd",
        "offline_rub_per_usd",
        "offline_kgs_per_usd",
    }


@pytest.mark.asyncio
async def test_admin_settings_are_one_group_write():
    store = AsyncMock()
    store.get_all.return_value = {}
    listener = MagicMock()
    settings_store = SettingsStore(store)
    settings_store.subscribe(listener)

    await settings_store.save_admin_settings(True, "1", "2", "3")

    store.set_many.assert_awaited_once_with(
        {
            "use_live_kgs_rate": True,
            "offline_eur_per_usd": 1.0,
            "offline_rub_per_usd": 2.0,
            "offline_kgs_per_usd": 3.0,
        }
    )
    listener.assert_called_once_with(
        frozenset({"use_live_kgs_rate", "offline_eur_per_usd", "offline_rub_per_usd", "offline_kgs_per_usd"})
    )


@pytest.mark.asyncio
async def test_store_file_with_huge_integers_falls_back_to_defaults(store_path):
    huge = "1" + "0" * 400
    store_path.write_text(
        '{"offline_eur_per_usd": %s, "live_usd_kgs_rate": %s, "live_usd_kgs_updated_at": 1}' % (huge, huge),
        encoding="utf-8",
    )
    settings_store = SettingsStore(JsonFileStore(store_path))

    assert (await settings_store.get_settings()).offline_eur_per_usd == 0.92
    assert await settings_store.get_live_rate() == LiveRate.empty()
