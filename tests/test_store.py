import json
import logging

import pytest

from hr_docgen.store import (
    OFFER_KEY,
    PAYSLIP_KEY,
    DraftPersistence,
    JsonFileStore,
    MemoryStore,
    merge_over_defaults,
)

DEFAULTS = {"name": "", "designation": "Trainee App Developer", "ctc": ""}


@pytest.mark.unit
def test_missing_key_loads_defaults(persistence):
    loaded = persistence.load(OFFER_KEY, DEFAULTS)
    assert loaded == DEFAULTS
    assert loaded is not DEFAULTS


@pytest.mark.unit
def test_save_then_load_round_trips(memory_store):
    writer = DraftPersistence(memory_store)
    writer.load(OFFER_KEY, DEFAULTS)
    draft = {"name": "Meera Nair", "designation": "QA Engineer", "ctc": "600000"}
    assert writer.save(OFFER_KEY, draft) is True

    reader = DraftPersistence(memory_store)
    assert reader.load(OFFER_KEY, DEFAULTS) == draft


@pytest.mark.unit
def test_empty_object_yields_defaults(memory_store):
    memory_store.set(OFFER_KEY, "{}")
    assert DraftPersistence(memory_store).load(OFFER_KEY, DEFAULTS) == DEFAULTS


@pytest.mark.unit
def test_partial_payload_keeps_remaining_defaults(memory_store):
    memory_store.set(OFFER_KEY, json.dumps({"name": "Arjun"}))
    loaded = DraftPersistence(memory_store).load(OFFER_KEY, DEFAULTS)
    assert loaded == {"name": "Arjun", "designation": "Trainee App Developer", "ctc": ""}


@pytest.mark.unit
def test_corrupt_text_falls_back_to_defaults(memory_store, caplog):
    memory_store.set(PAYSLIP_KEY, "{not json")
    persistence = DraftPersistence(memory_store)

    with caplog.at_level(logging.WARNING, logger="hr_docgen.store"):
        loaded = persistence.load(PAYSLIP_KEY, DEFAULTS)

    assert loaded == DEFAULTS
    assert "Failed to parse saved draft" in caplog.text
    # A failed load still unlocks saving.
    assert persistence.is_ready(PAYSLIP_KEY)
    assert persistence.save(PAYSLIP_KEY, DEFAULTS) is True


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["[]", "42", '"text"', "null"])
def test_non_object_payload_falls_back_to_defaults(memory_store, raw):
    memory_store.set(OFFER_KEY, raw)
    assert DraftPersistence(memory_store).load(OFFER_KEY, DEFAULTS) == DEFAULTS


@pytest.mark.unit
def test_save_before_load_is_skipped(memory_store, caplog):
    persistence = DraftPersistence(memory_store)
    memory_store.set(OFFER_KEY, json.dumps({"name": "Kept"}))

    with caplog.at_level(logging.WARNING, logger="hr_docgen.store"):
        assert persistence.save(OFFER_KEY, {"name": "Clobber"}) is False

    assert json.loads(memory_store.get(OFFER_KEY)) == {"name": "Kept"}
    assert "before the saved draft was loaded" in caplog.text


@pytest.mark.unit
def test_readiness_is_tracked_per_key(persistence):
    persistence.load(OFFER_KEY, DEFAULTS)
    assert persistence.is_ready(OFFER_KEY)
    assert not persistence.is_ready(PAYSLIP_KEY)
    assert persistence.save(PAYSLIP_KEY, {}) is False


@pytest.mark.unit
def test_clear_removes_stored_value(memory_store):
    persistence = DraftPersistence(memory_store)
    persistence.load(OFFER_KEY, DEFAULTS)
    persistence.save(OFFER_KEY, {"name": "Gone"})

    persistence.clear(OFFER_KEY)

    assert memory_store.get(OFFER_KEY) is None
    assert persistence.load(OFFER_KEY, DEFAULTS) == DEFAULTS


@pytest.mark.unit
def test_save_keeps_non_ascii_text(memory_store):
    persistence = DraftPersistence(memory_store)
    persistence.load(OFFER_KEY, DEFAULTS)
    persistence.save(OFFER_KEY, {"name": "Ünal Çelik"})
    assert "Ünal Çelik" in memory_store.get(OFFER_KEY)


@pytest.mark.unit
def test_merge_nested_sections_one_level_down():
    defaults = {
        "employee": {"month": "March", "year": "2026", "empName": ""},
        "earnings": {"basic": "", "hra": ""},
    }
    parsed = {"employee": {"empName": "Ravi"}, "earnings": {"basic": "30000"}}

    merged = merge_over_defaults(defaults, parsed)

    assert merged == {
        "employee": {"month": "March", "year": "2026", "empName": "Ravi"},
        "earnings": {"basic": "30000", "hra": ""},
    }


@pytest.mark.unit
def test_merge_coerces_scalars_and_rejects_wrong_shapes():
    defaults = {"basic": "", "hra": "", "pf": "", "esi": "", "tds": "5", "section": {"a": ""}}
    parsed = {
        "basic": 30000,
        "hra": 1250.5,
        "pf": None,
        "esi": True,
        "tds": ["1"],
        "section": "flat",
    }

    merged = merge_over_defaults(defaults, parsed)

    assert merged == {"basic": "30000", "hra": "1250.5", "pf": "", "esi": "", "tds": "5", "section": {"a": ""}}


@pytest.mark.unit
def test_merge_drops_unknown_keys_and_does_not_alias_defaults():
    defaults = {"section": {"a": "x"}}
    merged = merge_over_defaults(defaults, {"extra": "1"})

    assert merged == {"section": {"a": "x"}}
    merged["section"]["a"] = "changed"
    assert defaults == {"section": {"a": "x"}}


@pytest.mark.unit
def test_json_file_store_round_trip(tmp_path):
    store = JsonFileStore(tmp_path / "drafts")
    assert store.get(OFFER_KEY) is None

    store.set(OFFER_KEY, '{"name": "Asha"}')
    store.set(OFFER_KEY, '{"name": "Asha Rao"}')

    assert store.path_for(OFFER_KEY) == tmp_path / "drafts" / "offerLetterData.json"
    assert store.get(OFFER_KEY) == '{"name": "Asha Rao"}'
    # Temporary files never linger after a write.
    assert [p.name for p in (tmp_path / "drafts").iterdir()] == ["offerLetterData.json"]

    store.remove(OFFER_KEY)
    store.remove(OFFER_KEY)
    assert store.get(OFFER_KEY) is None


@pytest.mark.unit
def test_json_file_store_with_invalid_utf8_loads_defaults(tmp_path):
    store = JsonFileStore(tmp_path)
    store.path_for(PAYSLIP_KEY).write_bytes(b"\xff\xfe{")

    assert DraftPersistence(store).load(PAYSLIP_KEY, DEFAULTS) == DEFAULTS


@pytest.mark.unit
def test_memory_store_initial_data_is_copied():
    initial = {OFFER_KEY: "{}"}
    store = MemoryStore(initial)
    store.remove(OFFER_KEY)
    assert initial == {OFFER_KEY: "{}"}


@pytest.mark.unit
def test_unreadable_draft_file_loads_defaults(tmp_path, caplog):
    store = JsonFileStore(tmp_path)
    store.path_for(PAYSLIP_KEY).mkdir()
    persistence = DraftPersistence(store)

    with caplog.at_level(logging.WARNING, logger="hr_docgen.store"):
        assert persistence.load(PAYSLIP_KEY, DEFAULTS) == DEFAULTS

    assert "Failed to read saved draft" in caplog.text
    assert persistence.is_ready(PAYSLIP_KEY)
