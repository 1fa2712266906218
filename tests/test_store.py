"""Key-value stores, favorites, threshold alerts and the scheduled check."""

import json
import threading

import pytest

from backend.alerts import (
    MAX_ALERT_HISTORY,
    add_alert,
    check_aqi_threshold,
    classify_threshold_severity,
    clear_alerts,
    get_alert_history,
    get_alert_settings,
    get_severity_color,
    save_alert_settings,
)
from backend.favorites import add_favorite, get_favorites, is_favorite, remove_favorite
from backend.models import AlertSettings, ThresholdAlert
from backend.scheduler import check_watched_cities
from backend.store import JsonFileStore, MemoryStore


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(str(tmp_path / "store.json"))


def watch(store, *cities, threshold=100):
    save_alert_settings(store, AlertSettings(enabled=True, threshold=threshold, cities=list(cities)))


class TestKeyValueStore:

    def test_missing_key_returns_default(self, store):
        assert store.get("nothing") is None
        assert store.get("nothing", []) == []

    def test_set_replaces_whole_value(self, store):
        store.set("items", [1, 2, 3])
        store.set("items", [4])
        assert store.get("items") == [4]

    def test_clear(self, store):
        store.set("items", [1])
        store.clear("items")
        assert store.get("items") is None

    def test_file_store_uses_namespaced_keys(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileStore(str(path)).set("favorites", [])
        assert json.loads(path.read_text(encoding="utf-8")) == {"airguard_favorites": []}

    def test_file_store_survives_reopen(self, tmp_path):
        path = str(tmp_path / "store.json")
        JsonFileStore(path).set("alert_settings", {"enabled": True})
        assert JsonFileStore(path).get("alert_settings") == {"enabled": True}

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileStore(str(path))
        assert store.get("favorites", []) == []
        store.set("favorites", [])
        assert store.get("favorites") == []


class TestFavorites:

    def test_add_and_list(self, store):
        add_favorite(store, "NYC", "New York City", "USA")
        favorites = get_favorites(store)
        assert [f.code for f in favorites] == ["NYC"]
        assert favorites[0].added_at is not None

    def test_duplicate_code_is_ignored(self, store):
        add_favorite(store, "LA", "Los Angeles", "USA")
        add_favorite(store, "LA", "LA again", "USA")
        favorites = get_favorites(store)
        assert len(favorites) == 1
        assert favorites[0].name == "Los Angeles"

    def test_remove(self, store):
        add_favorite(store, "NYC", "New York City", "USA")
        add_favorite(store, "LA", "Los Angeles", "USA")
        assert [f.code for f in remove_favorite(store, "NYC")] == ["LA"]
        assert not is_favorite(store, "NYC")
        assert is_favorite(store, "LA")

    def test_malformed_data_reads_as_empty(self, store):
        store.set("favorites", [{"unexpected": True}])
        assert get_favorites(store) == []


class TestAlertSettings:

    def test_defaults(self, store):
        assert get_alert_settings(store) == AlertSettings(enabled=False, threshold=100, cities=[])

    def test_round_trip(self, store):
        watch(store, "NYC", "LA", threshold=120)
        settings = get_alert_settings(store)
        assert settings.enabled
        assert settings.threshold == 120
        assert settings.cities == ["NYC", "LA"]

    def test_malformed_settings_fall_back_to_defaults(self, store):
        store.set("alert_settings", {"threshold": "lots"})
        assert get_alert_settings(store) == AlertSettings()


class TestThresholdAlerts:

    def test_disabled_settings_record_nothing(self, store):
        save_alert_settings(store, AlertSettings(enabled=False, threshold=10, cities=["NYC"]))
        assert check_aqi_threshold(store, "NYC", "New York City", 300) is None
        assert get_alert_history(store) == []

    def test_unwatched_city_records_nothing(self, store):
        watch(store, "LA", threshold=10)
        assert check_aqi_threshold(store, "NYC", "New York City", 300) is None

    def test_below_threshold_records_nothing(self, store):
        watch(store, "NYC", threshold=100)
        assert check_aqi_threshold(store, "NYC", "New York City", 99) is None

    def test_reaching_threshold_records_alert(self, store):
        watch(store, "NYC", threshold=100)
        alert = check_aqi_threshold(store, "NYC", "New York City", 100)
        assert alert is not None
        assert alert.id.startswith("NYC-")
        assert alert.severity == "moderate"
        assert get_alert_history(store) == [alert]

    def test_history_is_newest_first_and_bounded(self, store):
        watch(store, "NYC", threshold=0)
        for aqi in range(MAX_ALERT_HISTORY + 5):
            check_aqi_threshold(store, "NYC", "New York City", aqi)
        history = get_alert_history(store)
        assert len(history) == MAX_ALERT_HISTORY
        assert history[0].current_aqi == MAX_ALERT_HISTORY + 4

    def test_clear(self, store):
        watch(store, "NYC", threshold=0)
        add_alert(store, check_aqi_threshold(store, "NYC", "New York City", 10))
        clear_alerts(store)
        assert get_alert_history(store) == []

    def test_unchanged_reading_is_recorded_once(self, store):
        watch(store, "NYC", threshold=50)
        assert check_aqi_threshold(store, "NYC", "New York City", 58) is not None
        assert check_aqi_threshold(store, "NYC", "New York City", 58) is None
        assert len(get_alert_history(store)) == 1

    def test_changed_reading_or_threshold_is_recorded_again(self, store):
        watch(store, "NYC", threshold=50)
        check_aqi_threshold(store, "NYC", "New York City", 58)
        assert check_aqi_threshold(store, "NYC", "New York City", 61) is not None

        watch(store, "NYC", threshold=60)
        assert check_aqi_threshold(store, "NYC", "New York City", 61) is not None
        assert [alert.threshold for alert in get_alert_history(store)] == [60, 50, 50]

    def test_repeat_check_only_compares_same_city(self, store):
        watch(store, "NYC", "LA", threshold=50)
        check_aqi_threshold(store, "NYC", "New York City", 75)
        assert check_aqi_threshold(store, "LA", "Los Angeles", 75) is not None

    @pytest.mark.parametrize("aqi,expected", [
        (100, "moderate"), (150, "moderate"), (151, "unhealthy"), (200, "unhealthy"),
        (201, "very-unhealthy"), (350, "very-unhealthy"),
    ])
    def test_severity(self, aqi, expected):
        assert classify_threshold_severity(aqi) == expected

    def test_severity_colors(self):
        assert get_severity_color("moderate") == "bg-yellow-100 text-yellow-800 border-yellow-300"
        assert get_severity_color("hazardous") == "bg-red-200 text-red-900 border-red-400"


class TestScheduledCheck:

    def test_disabled_checks_nothing(self, store):
        assert check_watched_cities(store) == 0

    def test_watched_cities_over_threshold(self, store):
        # NYC 58, LA 75
        watch(store, "NYC", "LA", threshold=60)
        assert check_watched_cities(store) == 1
        assert [alert.city for alert in get_alert_history(store)] == ["LA"]

    def test_unknown_watched_city_is_skipped(self, store):
        watch(store, "XYZ", "NYC", threshold=0)
        assert check_watched_cities(store) == 1

    def test_repeated_runs_do_not_duplicate_alerts(self, store):
        watch(store, "NYC", "LA", threshold=60)
        check_watched_cities(store)
        check_watched_cities(store)
        assert len(get_alert_history(store)) == 1


class TestConcurrentWrites:

    def test_update_returns_new_value(self, store):
        store.set("counter", 1)
        assert store.update("counter", lambda value: value + 1) == 2
        assert store.update("fresh", lambda value: value + [1], []) == [1]
        assert store.get("fresh") == [1]

    def test_clear_waits_for_running_update(self, store):
        store.set("alerts", [{"city": "NYC"}])
        clearing = threading.Thread(target=clear_alerts, args=(store,))

        def prepend(entries):
            clearing.start()
            clearing.join(timeout=0.2)
            # blocked on the store lock until this update is written
            assert clearing.is_alive()
            return [{"city": "LA"}] + entries

        store.update("alerts", prepend, [])
        clearing.join(timeout=5)
        assert not clearing.is_alive()
        assert get_alert_history(store) == []

    def test_parallel_alerts_are_all_kept(self, store):
        alerts = [
            ThresholdAlert(id=f"NYC-{aqi}", city="NYC", city_name="New York City", threshold=0, current_aqi=aqi,
                           timestamp="2025-10-05T12:00:00+00:00", severity="moderate")
            for aqi in range(20)
        ]
        threads = [threading.Thread(target=add_alert, args=(store, alert)) for alert in alerts]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert sorted(alert.current_aqi for alert in get_alert_history(store)) == list(range(20))

    def test_parallel_favorites_are_all_kept(self, store):
        codes = [f"C{i}" for i in range(20)]
        threads = [threading.Thread(target=add_favorite, args=(store, code, code, "USA")) for code in codes]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert sorted(favorite.code for favorite in get_favorites(store)) == sorted(codes)
