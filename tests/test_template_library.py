"""Unit tests for template models, storage and the TemplateLibrary."""

import json
from pathlib import Path

import pytest

from autoreply.matcher import find_matching_templates
from autoreply.templates import (
    CATEGORIES,
    DEMO_TEMPLATES,
    Category,
    ImportResult,
    InMemoryKeyValueStore,
    InvalidImportFormatError,
    InvalidImportJSONError,
    JsonFileKeyValueStore,
    StorageError,
    Template,
    TemplateLibrary,
    generate_template_id,
    parse_template_import,
)
from autoreply.templates.library import (
    DEMO_LOADED_KEY,
    FAVORITES_KEY,
    RECENT_KEY,
    STORAGE_KEY,
)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def library(store):
    return TemplateLibrary(store=store)


@pytest.fixture
def empty_library(store):
    """Library whose demo set was already loaded and then cleared."""
    store.set(DEMO_LOADED_KEY, "true")
    store.set(STORAGE_KEY, "[]")
    return TemplateLibrary(store=store)


# ==================== Model Tests ====================


class TestTemplateModel:
    """Tests for the Template dataclass."""

    def test_to_dict(self):
        template = Template(
            id="t1", name="Test", category="hr", triggers=["leave"], body="Hi {{name}}"
        )
        assert template.to_dict() == {
            "id": "t1",
            "name": "Test",
            "category": "hr",
            "triggers": ["leave"],
            "body": "Hi {{name}}",
        }

    def test_from_dict_defaults(self):
        template = Template.from_dict({"id": "t1"})
        assert template.name == ""
        assert template.category == "general"
        assert template.triggers == []
        assert template.body == ""

    def test_from_dict_empty_category(self):
        assert Template.from_dict({"id": "t1", "category": ""}).category == "general"

    @pytest.mark.parametrize(
        "data",
        [
            {"id": "t1", "triggers": [1]},
            {"id": "t1", "triggers": "leave"},
            {"id": "t1", "body": None},
            {"id": 7},
        ],
    )
    def test_from_dict_rejects_wrong_types(self, data):
        with pytest.raises(TypeError):
            Template.from_dict(data)

    def test_roundtrip(self):
        original = DEMO_TEMPLATES[0]
        assert Template.from_dict(original.to_dict()) == original


class TestCategoryModel:
    def test_roundtrip(self):
        category = Category(id="hr", name="HR / Leave", color="#10b981")
        assert Category.from_dict(category.to_dict()) == category


class TestDemoData:
    """Tests for the built-in demo data."""

    def test_demo_template_ids(self):
        assert [t.id for t in DEMO_TEMPLATES] == [
            "leave-approval",
            "leave-denial",
            "payment-info",
            "meeting-schedule",
            "meeting-confirm",
            "acknowledgment",
            "follow-up",
            "intro-email",
            "project-update",
            "out-of-office",
        ]

    def test_demo_categories_exist(self):
        category_ids = {c.id for c in CATEGORIES}
        assert all(t.category in category_ids for t in DEMO_TEMPLATES)

    def test_demo_triggers_lowercase(self):
        for template in DEMO_TEMPLATES:
            assert template.triggers
            assert all(t == t.lower().strip() for t in template.triggers)

    def test_demo_bodies_sign_off(self):
        for template in DEMO_TEMPLATES:
            assert template.body.startswith("Hi {{name}},")
            assert template.body.endswith("Best regards")


# ==================== Storage Tests ====================


class TestInMemoryKeyValueStore:
    def test_get_missing(self, store):
        assert store.get("missing") is None

    def test_set_get_delete(self, store):
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_is_noop(self, store):
        store.delete("missing")

    def test_clear(self, store):
        store.set("k", "v")
        store.clear()
        assert store.get("k") is None


class TestJsonFileKeyValueStore:
    def test_set_creates_file(self, tmp_path):
        kv = JsonFileKeyValueStore(tmp_path / "data")
        kv.set("autoreply-templates", "[]")
        assert (tmp_path / "data" / "autoreply-templates.json").read_text() == "[]"
        assert kv.get("autoreply-templates") == "[]"

    def test_get_missing(self, tmp_path):
        assert JsonFileKeyValueStore(tmp_path).get("missing") is None

    def test_delete(self, tmp_path):
        kv = JsonFileKeyValueStore(tmp_path)
        kv.set("k", "1")
        kv.delete("k")
        kv.delete("k")
        assert kv.get("k") is None

    def test_rejects_unsafe_keys(self, tmp_path):
        kv = JsonFileKeyValueStore(tmp_path)
        with pytest.raises(StorageError):
            kv.set("../escape", "x")

    def test_data_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AUTOREPLY_DATA_DIR", str(tmp_path))
        assert JsonFileKeyValueStore().data_dir == tmp_path

    def test_default_data_dir_in_home(self, monkeypatch):
        monkeypatch.delenv("AUTOREPLY_DATA_DIR", raising=False)
        assert JsonFileKeyValueStore().data_dir == Path.home() / ".autoreply"


# ==================== Library Tests ====================


class TestLibraryLoading:
    """Tests for first-run seeding and loading persisted state."""

    def test_seeds_demo_on_first_load(self, library, store):
        assert [t.id for t in library.templates] == [t.id for t in DEMO_TEMPLATES]
        assert store.get(DEMO_LOADED_KEY) == "true"
        assert len(json.loads(store.get(STORAGE_KEY))) == len(DEMO_TEMPLATES)

    def test_demo_copy_is_independent(self, library):
        library.update_template("leave-approval", name="Changed")
        assert DEMO_TEMPLATES[0].name == "Leave Approval"

    def test_no_reseed_after_demo_loaded(self, store):
        store.set(DEMO_LOADED_KEY, "true")
        assert TemplateLibrary(store=store).templates == []

    def test_loads_persisted_state(self, store):
        store.set(STORAGE_KEY, json.dumps([{"id": "t1", "name": "One", "triggers": ["x"]}]))
        store.set(FAVORITES_KEY, json.dumps(["t1"]))
        store.set(RECENT_KEY, json.dumps(["t1"]))

        library = TemplateLibrary(store=store)

        assert [t.id for t in library.templates] == ["t1"]
        assert library.is_favorite("t1")
        assert [t.id for t in library.get_recent()] == ["t1"]

    def test_corrupt_blobs_start_empty(self, store):
        store.set(STORAGE_KEY, "{not json")
        store.set(FAVORITES_KEY, "oops")
        store.set(RECENT_KEY, '{"a": 1}')

        library = TemplateLibrary(store=store)

        assert library.templates == []
        assert library.favorites == []
        assert library.get_recent() == []

    def test_skips_malformed_template_entries(self, store):
        store.set(STORAGE_KEY, json.dumps([{"name": "no id"}, "junk", {"id": "ok"}]))
        assert [t.id for t in TemplateLibrary(store=store).templates] == ["ok"]

    def test_skips_stored_templates_with_malformed_triggers(self, store):
        store.set(
            STORAGE_KEY,
            json.dumps([
                {"id": "ints", "triggers": [1]},
                {"id": "text", "triggers": "leave"},
                {"id": "ok", "triggers": ["leave"]},
            ]),
        )
        library = TemplateLibrary(store=store)

        assert [t.id for t in library.templates] == ["ok"]
        result = find_matching_templates("leave", library.templates)
        assert [m.template.id for m in result.matches] == ["ok"]

    def test_templates_property_returns_copy(self, library):
        library.templates.clear()
        assert len(library.templates) == len(DEMO_TEMPLATES)


class TestLibraryQueries:
    """Tests for read-side helpers."""

    def test_get_template(self, library):
        assert library.get_template("payment-info").name == "Payment Information"
        assert library.get_template("missing") is None

    def test_get_category_fallback(self, library):
        assert library.get_category("finance").name == "Finance / Billing"
        assert library.get_category("unknown").id == "general"

    def test_get_by_category(self, library):
        ids = [t.id for t in library.get_by_category("hr")]
        assert ids == ["leave-approval", "leave-denial", "out-of-office"]

    @pytest.mark.parametrize("category", [None, "", "all"])
    def test_get_by_category_all(self, library, category):
        assert len(library.get_by_category(category)) == len(DEMO_TEMPLATES)

    def test_search_by_trigger_case_insensitive(self, library):
        assert [t.id for t in library.search_templates("INVOICE")] == ["payment-info"]

    def test_search_by_name(self, library):
        assert [t.id for t in library.search_templates("out of office")] == ["out-of-office"]

    def test_search_by_body(self, library):
        ids = [t.id for t in library.search_templates("alternateEmail")]
        assert ids == ["out-of-office"]

    def test_blank_search_returns_all(self, library):
        assert len(library.search_templates("   ")) == len(DEMO_TEMPLATES)


class TestLibraryMutations:
    """Tests for add/update/delete/duplicate, favorites and recent."""

    def test_add_template(self, empty_library, store):
        template = empty_library.add_template(
            {"id": "ignored", "name": "X", "triggers": ["x"], "body": "hi"}
        )
        assert template.id.startswith("template-")
        assert template.category == "general"
        assert empty_library.templates == [template]
        assert json.loads(store.get(STORAGE_KEY))[0]["id"] == template.id

    def test_update_template(self, library):
        updated = library.update_template("follow-up", name="Chaser", triggers=["chase"])
        assert updated.name == "Chaser"
        assert library.get_template("follow-up").triggers == ["chase"]

    def test_update_keeps_id(self, library):
        library.update_template("follow-up", id="hijack")
        assert library.get_template("follow-up") is not None
        assert library.get_template("hijack") is None

    def test_update_missing(self, library):
        assert library.update_template("missing", name="X") is None

    def test_delete_removes_favorite_and_recent(self, library, store):
        library.toggle_favorite("payment-info")
        library.add_to_recent("payment-info")

        library.delete_template("payment-info")

        assert library.get_template("payment-info") is None
        assert not library.is_favorite("payment-info")
        assert library.get_recent() == []
        assert json.loads(store.get(FAVORITES_KEY)) == []

    def test_duplicate(self, library):
        duplicate = library.duplicate_template("intro-email")
        original = library.get_template("intro-email")

        assert duplicate.id != original.id
        assert duplicate.name == "Introduction / First Contact (Copy)"
        assert duplicate.triggers == original.triggers
        assert library.templates[-1] == duplicate

    def test_duplicate_missing(self, library):
        assert library.duplicate_template("missing") is None

    def test_toggle_favorite(self, library):
        library.toggle_favorite("acknowledgment")
        assert library.is_favorite("acknowledgment")
        assert [t.id for t in library.get_favorites()] == ["acknowledgment"]

        library.toggle_favorite("acknowledgment")
        assert not library.is_favorite("acknowledgment")

    def test_recent_most_recent_first_deduplicated(self, library):
        for template_id in ["follow-up", "payment-info", "follow-up"]:
            library.add_to_recent(template_id)
        assert [t.id for t in library.get_recent()] == ["follow-up", "payment-info"]

    def test_recent_capped_at_five(self, library, store):
        ids = [t.id for t in library.templates[:7]]
        for template_id in ids:
            library.add_to_recent(template_id)

        assert json.loads(store.get(RECENT_KEY)) == list(reversed(ids))[:5]

    def test_recent_skips_unknown_ids(self, store):
        store.set(RECENT_KEY, json.dumps(["gone", "follow-up"]))
        library = TemplateLibrary(store=store)
        assert [t.id for t in library.get_recent()] == ["follow-up"]

    def test_reset_to_demo(self, library):
        library.add_template({"name": "Extra", "triggers": ["extra"], "body": ""})
        library.toggle_favorite("follow-up")
        library.add_to_recent("follow-up")

        library.reset_to_demo()

        assert len(library.templates) == len(DEMO_TEMPLATES)
        assert library.favorites == []
        assert library.get_recent() == []

    def test_mutations_persist(self, library, store):
        library.add_template({"name": "Persisted", "triggers": ["p"], "body": ""})
        library.toggle_favorite("follow-up")

        reloaded = TemplateLibrary(store=store)

        assert reloaded.templates[-1].name == "Persisted"
        assert reloaded.is_favorite("follow-up")


# ==================== Import / Export Tests ====================


class TestParseTemplateImport:
    def test_assigns_missing_id_and_category(self):
        templates = parse_template_import('[{"name":"X","triggers":["x"],"body":"hi"}]')
        assert len(templates) == 1
        assert templates[0].id.startswith("template-")
        assert templates[0].category == "general"

    def test_keeps_existing_id(self):
        templates = parse_template_import('[{"id":"mine","name":"X","category":"hr"}]')
        assert templates[0].id == "mine"
        assert templates[0].category == "hr"

    def test_invalid_json(self):
        with pytest.raises(InvalidImportJSONError, match="Invalid JSON"):
            parse_template_import("[{")

    @pytest.mark.parametrize("payload", ['{"name": "X"}', '"text"', "[1, 2]"])
    def test_invalid_format(self, payload):
        with pytest.raises(InvalidImportFormatError, match="Invalid format"):
            parse_template_import(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            '[{"name": "X", "triggers": [1], "body": "hi"}]',
            '[{"name": "X", "triggers": "leave", "body": "hi"}]',
            '[{"name": "X", "triggers": ["leave", null], "body": "hi"}]',
            '[{"name": "X", "triggers": ["leave"], "body": 42}]',
        ],
    )
    def test_rejects_malformed_fields(self, payload):
        """Test triggers must be a list of strings and text fields strings."""
        with pytest.raises(InvalidImportFormatError, match="Invalid format"):
            parse_template_import(payload)


class TestLibraryImportExport:
    def test_import_success(self, empty_library):
        result = empty_library.import_templates('[{"name":"X","triggers":["x"],"body":"hi"}]')

        assert result == ImportResult(success=True, count=1)
        template = empty_library.templates[0]
        assert template.name == "X"
        assert template.category == "general"
        assert template.id.startswith("template-")

    def test_import_appends(self, library):
        library.import_templates('[{"id":"a","name":"A"},{"id":"b","name":"B"}]')
        assert [t.id for t in library.templates[-2:]] == ["a", "b"]

    @pytest.mark.parametrize(
        "payload,error",
        [("not json", "Invalid JSON"), ('{"a": 1}', "Invalid format")],
    )
    def test_import_failure_leaves_library_untouched(self, library, payload, error):
        before = library.templates

        result = library.import_templates(payload)

        assert result.success is False
        assert result.count == 0
        assert result.error == error
        assert library.templates == before

    @pytest.mark.parametrize(
        "triggers", ["[1]", '"leave"'],
    )
    def test_import_malformed_triggers_keeps_matching_working(self, library, triggers):
        before = library.templates
        payload = '[{"name": "X", "triggers": ' + triggers + ', "body": "hi"}]'

        result = library.import_templates(payload)

        assert result == ImportResult(success=False, error="Invalid format")
        assert library.templates == before
        matches = find_matching_templates("Budget review tomorrow", library.templates)
        assert all(m.template.name != "X" for m in matches.matches)

    def test_export_is_pretty_json(self, library):
        exported = library.export_templates()
        assert exported.startswith("[\n  {")
        assert [t["id"] for t in json.loads(exported)] == [t.id for t in DEMO_TEMPLATES]

    def test_export_import_roundtrip(self, library):
        target_store = InMemoryKeyValueStore({DEMO_LOADED_KEY: "true"})
        target = TemplateLibrary(store=target_store)

        target.import_templates(library.export_templates())

        assert target.templates == library.templates

    def test_export_to_file(self, library, tmp_path):
        target = library.export_to_file(tmp_path / "out.json")
        assert target == tmp_path / "out.json"
        assert json.loads(target.read_text())[0]["id"] == "leave-approval"

    def test_export_to_file_default_name(self, library, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        target = library.export_to_file()
        assert target.name == "autoreply-templates.json"
        assert (tmp_path / "autoreply-templates.json").exists()


class TestGenerateTemplateId:
    def test_format(self):
        prefix, millis, suffix = generate_template_id().split("-")
        assert prefix == "template"
        assert millis.isdigit()
        assert len(suffix) == 9
        assert suffix.isalnum() and suffix == suffix.lower()

    def test_unique(self):
        assert len({generate_template_id() for _ in range(100)}) == 100
